"""
cipherseal: authenticated encryption and signing for opaque string tokens.

Typical use::

    from cipherseal import Encryption, chacha20poly1305

    encryption = Encryption(chacha20poly1305(id="app", keys=[new_key, old_key]))
    token = encryption.encrypt({"user_id": 1}, expires_in="1h", purpose="session")
    encryption.decrypt(token, purpose="session")  # {"user_id": 1}

Every ``decrypt``/``unsign`` returns ``None`` for anything that is not a
valid, unexpired token for the requested purpose. Only misconfiguration and
unserializable payloads raise.
"""

from cipherseal.config import (
    DRIVERS,
    EncrypterSettings,
    EncryptionSettings,
    configure_logging,
    create_encryption,
    create_manager,
    load_config,
)
from cipherseal.contracts import CypherText, EncryptionConfig, EncryptionDriverContract
from cipherseal.drivers import (
    AES256CBC,
    AES256GCM,
    ChaCha20Poly1305,
    Legacy,
    aes256cbc,
    aes256gcm,
    chacha20poly1305,
    legacy,
)
from cipherseal.encoding import base64url_decode, base64url_encode
from cipherseal.encryption import Encryption
from cipherseal.errors import (
    ConfigurationError,
    EncryptionError,
    InsecureKeyError,
    InvalidIdError,
    InvalidPayloadError,
    MissingDefaultEncrypterError,
    MissingIdError,
    MissingKeyError,
    UnknownEncrypterError,
)
from cipherseal.hmac import Hmac
from cipherseal.manager import EncryptionManager
from cipherseal.message import MessageBuilder
from cipherseal.message_verifier import MessageVerifier
from cipherseal.safe_equal import safe_equal
from cipherseal.secret import Secret

__version__ = "1.0.0"

__all__ = [
    "AES256CBC",
    "AES256GCM",
    "ChaCha20Poly1305",
    "ConfigurationError",
    "CypherText",
    "DRIVERS",
    "EncrypterSettings",
    "Encryption",
    "EncryptionConfig",
    "EncryptionDriverContract",
    "EncryptionError",
    "EncryptionManager",
    "EncryptionSettings",
    "Hmac",
    "InsecureKeyError",
    "InvalidIdError",
    "InvalidPayloadError",
    "Legacy",
    "MessageBuilder",
    "MessageVerifier",
    "MissingDefaultEncrypterError",
    "MissingIdError",
    "MissingKeyError",
    "Secret",
    "UnknownEncrypterError",
    "aes256cbc",
    "aes256gcm",
    "base64url_decode",
    "base64url_encode",
    "chacha20poly1305",
    "configure_logging",
    "create_encryption",
    "create_manager",
    "legacy",
    "load_config",
    "safe_equal",
]
