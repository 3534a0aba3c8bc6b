"""
Exception types raised by cipherseal.

Only programmer and configuration mistakes raise. Attacker-controlled input
(tokens handed to ``decrypt`` or ``unsign``) never raises: it yields ``None``.
Every error carries a stable ``code`` so callers can branch without parsing
messages.
"""

from __future__ import annotations


class EncryptionError(Exception):
    """Base class for all cipherseal errors."""

    code = "E_ENCRYPTION"
    default_message = "Encryption error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MissingKeyError(EncryptionError, ValueError):
    """No key (or an empty key) was supplied to a driver or key ring."""

    code = "E_MISSING_ENCRYPTER_KEY"
    default_message = "Missing key. The key is required to encrypt values"


class InsecureKeyError(EncryptionError, ValueError):
    """A key is shorter than the minimum accepted length."""

    code = "E_INSECURE_ENCRYPTER_KEY"
    default_message = "The value of your key should be at least 16 characters long"


class MissingIdError(EncryptionError, ValueError):
    """An id-bearing driver was constructed without an id."""

    code = "E_MISSING_ENCRYPTER_ID"
    default_message = "Missing id. The id is required to encrypt values"


class InvalidPayloadError(EncryptionError, ValueError):
    """Attempted to sign ``None``."""

    code = "E_INVALID_PAYLOAD"
    default_message = 'Cannot sign "None" value'


class MissingDefaultEncrypterError(EncryptionError, RuntimeError):
    """Manager was asked for the default encrypter but none is configured."""

    code = "E_MISSING_DEFAULT_ENCRYPTER"
    default_message = (
        "Cannot create encryption instance. No default encryption is defined in the config"
    )


class UnknownEncrypterError(EncryptionError, KeyError):
    """Manager was asked for an encrypter name that is not registered."""

    code = "E_UNKNOWN_ENCRYPTER"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Unknown encrypter "{name}". Make sure it is registered in the config')

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class ConfigurationError(EncryptionError, RuntimeError):
    """Settings file or environment could not be turned into encrypters."""

    code = "E_INVALID_CONFIG"
    default_message = "Invalid encryption configuration"


class InvalidIdError(EncryptionError, ValueError):
    """A driver id contains the token separator."""

    code = "E_INVALID_ENCRYPTER_ID"
    default_message = 'The id cannot contain the "." separator'
