"""
Signing without encryption.

A signed token is ``base64url(envelope) + "." + hmac``. The payload is
readable by anyone holding the token; the HMAC only proves it was issued by
a holder of one of the keys and has not been modified.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import Any

from cipherseal.encoding import base64url_decode, base64url_encode
from cipherseal.errors import InvalidPayloadError, MissingKeyError
from cipherseal.hmac import Hmac
from cipherseal.message import Expiry, MessageBuilder
from cipherseal.secret import Secret, SecretLike, reveal, validate_secret

SEPARATOR = "."


class MessageVerifier:
    """Signs and verifies envelopes with a rotating list of secrets.

    The first secret signs; every secret is tried, in order, when verifying.
    """

    separator = SEPARATOR

    def __init__(self, secrets: Sequence[SecretLike]) -> None:
        if secrets is None or isinstance(secrets, (str, bytes, Secret)) or not secrets:
            raise MissingKeyError()
        for secret in secrets:
            validate_secret(secret)

        self._crypto_keys = tuple(hashlib.sha256(reveal(secret)).digest() for secret in secrets)

    def sign(
        self,
        payload: Any,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> str:
        """Sign ``payload`` with the newest key.

        Raises:
            InvalidPayloadError: If ``payload`` is ``None``.
        """
        if payload is None:
            raise InvalidPayloadError()

        encoded = base64url_encode(MessageBuilder().build(payload, expires_in, purpose))
        digest = Hmac(self._crypto_keys[0]).generate(encoded)
        return f"{encoded}{self.separator}{digest}"

    def unsign(self, token: str, purpose: str | None = None) -> Any | None:
        """Verify ``token`` and return its payload, or ``None`` on any failure."""
        if not isinstance(token, str):
            return None

        parts = token.split(self.separator)
        if len(parts) != 2:
            return None

        encoded, digest = parts
        if not encoded or not digest:
            return None

        decoded = base64url_decode(encoded)
        if decoded is None:
            return None

        try:
            plaintext = decoded.decode("utf-8")
        except UnicodeDecodeError:
            return None

        for key in self._crypto_keys:
            if Hmac(key).compare(encoded, digest):
                return MessageBuilder().verify(plaintext, purpose)

        return None
