"""
Secret wrapper for key material.

Wrapping a key in :class:`Secret` keeps it out of reprs, tracebacks and
structured log output. Drivers accept raw ``str``/``bytes`` keys as well.
"""

from __future__ import annotations

from cipherseal.errors import InsecureKeyError, MissingKeyError

REDACTED = "[redacted]"


class Secret:
    """Opaque holder for a sensitive string or bytes value."""

    __slots__ = ("_value",)

    def __init__(self, value: str | bytes) -> None:
        self._value = value

    def release(self) -> str | bytes:
        """Return the wrapped value."""
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __repr__(self) -> str:
        return REDACTED

    __str__ = __repr__


SecretLike = str | bytes | Secret


def reveal(secret: SecretLike) -> bytes:
    """Normalise a secret into raw bytes.

    Args:
        secret: A ``str`` (UTF-8 encoded), ``bytes`` or :class:`Secret`.

    Returns:
        The key material as bytes.

    Raises:
        TypeError: If the value is not a supported secret type.
    """
    if isinstance(secret, Secret):
        secret = secret.release()
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)
    raise TypeError(f"Unsupported secret type: {type(secret).__name__}")


MIN_SECRET_LENGTH = 16


def validate_secret(secret: SecretLike | None) -> None:
    """Reject missing or short key material.

    Raises:
        MissingKeyError: If ``secret`` is ``None`` or empty.
        InsecureKeyError: If ``secret`` is shorter than 16 characters/bytes.
    """
    if secret is None or not secret:
        raise MissingKeyError()
    if not isinstance(secret, (str, bytes, bytearray, Secret)):
        raise MissingKeyError(f"Unsupported key type: {type(secret).__name__}")
    if len(secret) < MIN_SECRET_LENGTH:
        raise InsecureKeyError()
