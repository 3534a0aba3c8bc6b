"""
Common driver plumbing: key validation, key derivation and token framing.

Every driver hashes each configured secret with SHA-256 into a 32-byte key
(the "simple" derivation). Encryption always uses the first key; decryption
tries every key in order so an old key can stay at the tail of the ring
while tokens issued under it are still outstanding.
"""

from __future__ import annotations

import hashlib
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import structlog

from cipherseal.contracts import CypherText
from cipherseal.errors import InvalidIdError, InvalidPayloadError, MissingIdError, MissingKeyError
from cipherseal.message import Expiry
from cipherseal.message_verifier import MessageVerifier
from cipherseal.secret import Secret, SecretLike, reveal, validate_secret

log = structlog.get_logger()

# Joins token fields. Never appears in base64url output.
SEPARATOR = "."


def derive_simple_key(secret: SecretLike) -> bytes:
    """SHA-256 of the raw secret, used directly as a 32-byte key."""
    return hashlib.sha256(reveal(secret)).digest()


class BaseDriver(ABC):
    """Base class for all encryption drivers.

    Args:
        keys: Ordered secrets, newest first. Each must be at least 16
            characters long.

    Raises:
        MissingKeyError: If ``keys`` is missing, empty, or contains an empty key.
        InsecureKeyError: If any key is too short.
    """

    separator = SEPARATOR

    # IV size in bytes, set by each driver
    iv_size: int = 16

    def __init__(self, keys: Sequence[SecretLike]) -> None:
        if keys is None or isinstance(keys, (str, bytes, Secret)) or not keys:
            raise MissingKeyError()

        for key in keys:
            validate_secret(key)

        self._secrets: tuple[SecretLike, ...] = tuple(keys)
        self.crypto_keys: tuple[bytes, ...] = tuple(derive_simple_key(key) for key in keys)

    def get_first_key(self) -> bytes:
        """Key used for every new token."""
        return self.crypto_keys[0]

    def get_message_verifier(self) -> MessageVerifier:
        """Signer over the same secrets as this driver."""
        return MessageVerifier(self._secrets)

    def compute_returns(self, values: Sequence[str]) -> CypherText:
        """Join token fields with the separator."""
        return self.separator.join(values)

    def split_token(self, token: Any, count: int) -> list[str] | None:
        """Split ``token`` into exactly ``count`` non-empty fields.

        Returns:
            The fields, or ``None`` for non-strings, a wrong field count or
            any empty field.
        """
        if not isinstance(token, str):
            return None

        parts = token.split(self.separator)
        if len(parts) != count or not all(parts):
            return None
        return parts

    def _generate_iv(self) -> bytes:
        return os.urandom(self.iv_size)

    @staticmethod
    def _check_payload(payload: Any) -> None:
        # A None message can never verify, so refuse to mint it
        if payload is None:
            raise InvalidPayloadError('Cannot encrypt "None" value')

    @abstractmethod
    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        """Encrypt a value with the newest key.

        Supported payloads are anything JSON-serializable: strings, numbers,
        booleans, lists, dicts, plus ``datetime``/``date`` values (returned
        as ISO strings after decryption).

        Passing a ``purpose`` scopes the token: decrypting with a different
        purpose, or with no purpose, fails.
        """

    @abstractmethod
    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        """Decrypt a token and verify it against ``purpose``."""


class IdentifiedDriver(BaseDriver):
    """Driver whose tokens start with a configured id.

    Tokens carrying another id are rejected before any key is tried.

    Raises:
        MissingIdError: If ``id`` is not a non-empty string.
        InvalidIdError: If ``id`` contains the separator.
    """

    def __init__(self, id: str, keys: Sequence[SecretLike]) -> None:
        super().__init__(keys)

        if not isinstance(id, str) or not id:
            raise MissingIdError()
        if self.separator in id:
            raise InvalidIdError()

        self.id = id
        log.debug(
            "driver_created",
            driver=type(self).__name__,
            id=id,
            keys=len(self.crypto_keys),
        )
