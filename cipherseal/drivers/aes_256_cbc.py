"""
AES-256-CBC with encrypt-then-MAC.

Token layout::

    id . base64url(ciphertext) . base64url(iv) . hmac

Keys are context-bound: for every message, HKDF-SHA256 expands the
SHA-256-derived master key with the random IV as salt and the driver id as
info into 64 bytes. The first 32 encrypt, the last 32 authenticate. The HMAC
covers ``base64url(ciphertext) . base64url(iv)``, so the IV is authenticated
too, and it is checked before the cipher ever sees the ciphertext.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from cipherseal.contracts import CypherText, EncryptionConfig
from cipherseal.drivers.base import IdentifiedDriver
from cipherseal.encoding import base64url_decode, base64url_encode
from cipherseal.hmac import Hmac
from cipherseal.message import Expiry, MessageBuilder
from cipherseal.secret import SecretLike

IV_SIZE = 16
BLOCK_SIZE_BITS = 128
DERIVED_KEY_SIZE = 64
TOKEN_FIELDS = 4


def aes256cbc(id: str, keys: Sequence[SecretLike]) -> EncryptionConfig:
    """Key-ring config building one :class:`AES256CBC` driver per key."""
    return EncryptionConfig(driver=lambda key: AES256CBC(id=id, keys=[key]), keys=keys)


class AES256CBC(IdentifiedDriver):
    """AES-256-CBC + HMAC-SHA256 driver with HKDF context-bound keys."""

    iv_size = IV_SIZE

    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        self._check_payload(payload)

        # Random IV makes every token unique, even for identical payloads
        iv = self._generate_iv()
        encryption_key, authentication_key = self._derive_keys(self.get_first_key(), iv)

        plaintext = MessageBuilder().build(payload, expires_in, purpose).encode("utf-8")
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(encryption_key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        mac_payload = f"{base64url_encode(ciphertext)}{self.separator}{base64url_encode(iv)}"
        mac = Hmac(authentication_key).generate(mac_payload)
        return self.compute_returns([self.id, mac_payload, mac])

    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        parts = self.split_token(token, TOKEN_FIELDS)
        if parts is None:
            return None

        token_id, cipher_encoded, iv_encoded, mac = parts
        if token_id != self.id:
            return None

        ciphertext = base64url_decode(cipher_encoded)
        if ciphertext is None:
            return None

        iv = base64url_decode(iv_encoded)
        if iv is None or len(iv) != IV_SIZE:
            return None

        mac_payload = f"{cipher_encoded}{self.separator}{iv_encoded}"
        for master_key in self.crypto_keys:
            encryption_key, authentication_key = self._derive_keys(master_key, iv)
            if not Hmac(authentication_key).compare(mac_payload, mac):
                continue

            # Only authenticated ciphertext reaches the cipher. Malformed
            # input still raises from the padding layer: fold it into None.
            try:
                plaintext = self._decipher(encryption_key, iv, ciphertext)
            except ValueError:
                return None
            return MessageBuilder().verify(plaintext, purpose)

        return None

    def _derive_keys(self, master_key: bytes, iv: bytes) -> tuple[bytes, bytes]:
        """Split HKDF(master_key, salt=iv, info=id) into (encryption, authentication)."""
        derived = HKDF(
            algorithm=hashes.SHA256(),
            length=DERIVED_KEY_SIZE,
            salt=iv,
            info=self.id.encode("utf-8"),
        ).derive(master_key)
        return derived[:32], derived[32:]

    @staticmethod
    def _decipher(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
