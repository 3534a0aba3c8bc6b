"""
Shared AEAD construction for the GCM and ChaCha20-Poly1305 drivers.

Token layout::

    id . base64url(ciphertext) . base64url(iv) . base64url(tag)

The AEAD key is the SHA-256 digest of the secret. The envelope plaintext
carries the payload and expiry only; the purpose travels as Additional
Authenticated Data, so a purpose mismatch fails the tag check itself.
"""

from __future__ import annotations

from typing import Any, ClassVar

from cryptography.exceptions import InvalidTag

from cipherseal.contracts import CypherText
from cipherseal.drivers.base import IdentifiedDriver
from cipherseal.encoding import base64url_decode, base64url_encode
from cipherseal.message import Expiry, MessageBuilder

IV_SIZE = 12
TAG_SIZE = 16
TOKEN_FIELDS = 4


def purpose_aad(purpose: str | None) -> bytes | None:
    """AAD bytes for a purpose; an empty purpose binds nothing."""
    return purpose.encode("utf-8") if purpose else None


class AEADDriver(IdentifiedDriver):
    """Driver backed by a ``cryptography`` AEAD primitive.

    Subclasses set ``cipher`` to the primitive class (``AESGCM`` or
    ``ChaCha20Poly1305``).
    """

    cipher: ClassVar[type]
    iv_size = IV_SIZE

    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        self._check_payload(payload)

        iv = self._generate_iv()
        plaintext = MessageBuilder().build(payload, expires_in).encode("utf-8")

        # cryptography appends the tag to the ciphertext
        sealed = self.cipher(self.get_first_key()).encrypt(iv, plaintext, purpose_aad(purpose))
        ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]

        return self.compute_returns(
            [
                self.id,
                base64url_encode(ciphertext),
                base64url_encode(iv),
                base64url_encode(tag),
            ]
        )

    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        parts = self.split_token(token, TOKEN_FIELDS)
        if parts is None:
            return None

        token_id, cipher_encoded, iv_encoded, tag_encoded = parts
        if token_id != self.id:
            return None

        ciphertext = base64url_decode(cipher_encoded)
        if ciphertext is None:
            return None

        iv = base64url_decode(iv_encoded)
        if iv is None or len(iv) != IV_SIZE:
            return None

        tag = base64url_decode(tag_encoded)
        if tag is None or len(tag) != TAG_SIZE:
            return None

        aad = purpose_aad(purpose)
        for key in self.crypto_keys:
            # Tag mismatches and malformed input both end here
            try:
                plaintext = self.cipher(key).decrypt(iv, ciphertext + tag, aad)
            except (InvalidTag, ValueError):
                continue
            return MessageBuilder().verify(plaintext)

        return None
