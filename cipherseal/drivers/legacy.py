"""
Legacy AES-256-CBC driver, kept to read and write tokens minted before
driver ids existed.

Token layout (no id field)::

    base64url(ciphertext) . base64url(iv) . hmac

The SHA-256 digest of the secret is used both as the AES key and as the HMAC
key, and the IV is a random 16-character URL-safe string. New deployments
should use one of the id-bearing drivers instead.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from typing import Any

import structlog
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cipherseal.contracts import CypherText, EncryptionConfig
from cipherseal.drivers.base import BaseDriver
from cipherseal.encoding import base64url_decode, base64url_encode
from cipherseal.hmac import Hmac
from cipherseal.message import Expiry, MessageBuilder
from cipherseal.secret import SecretLike

log = structlog.get_logger()

IV_SIZE = 16
BLOCK_SIZE_BITS = 128
TOKEN_FIELDS = 3


def legacy(keys: Sequence[SecretLike]) -> EncryptionConfig:
    """Key-ring config building one :class:`Legacy` driver per key."""
    return EncryptionConfig(driver=lambda key: Legacy(keys=[key]), keys=keys)


class Legacy(BaseDriver):
    """Id-less AES-256-CBC + HMAC driver."""

    iv_size = IV_SIZE

    def __init__(self, keys: Sequence[SecretLike]) -> None:
        super().__init__(keys)
        log.debug("driver_created", driver="Legacy", keys=len(self.crypto_keys))

    def _generate_iv(self) -> bytes:
        # 12 random bytes encode to exactly 16 URL-safe characters
        return base64url_encode(os.urandom(12)).encode("ascii")

    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        self._check_payload(payload)

        iv = self._generate_iv()
        key = self.get_first_key()

        plaintext = MessageBuilder().build(payload, expires_in, purpose).encode("utf-8")
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        result = f"{base64url_encode(ciphertext)}{self.separator}{base64url_encode(iv)}"
        return self.compute_returns([result, Hmac(key).generate(result)])

    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        parts = self.split_token(token, TOKEN_FIELDS)
        if parts is None:
            return None

        cipher_encoded, iv_encoded, mac = parts

        ciphertext = base64url_decode(cipher_encoded)
        if ciphertext is None:
            return None

        iv = base64url_decode(iv_encoded)
        if iv is None or len(iv) != IV_SIZE:
            return None

        mac_payload = f"{cipher_encoded}{self.separator}{iv_encoded}"
        for key in self.crypto_keys:
            if not Hmac(key).compare(mac_payload, mac):
                continue

            try:
                decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
                padded = decryptor.update(ciphertext) + decryptor.finalize()
                unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
                plaintext = unpadder.update(padded) + unpadder.finalize()
            except ValueError:
                return None
            return MessageBuilder().verify(plaintext, purpose)

        return None
