"""
Encryption drivers.

Each driver owns its token framing:

- :class:`AES256CBC`: ``id.ct.iv.hmac``, HKDF context-bound keys
- :class:`AES256GCM`: ``id.ct.iv.tag``, purpose as AAD
- :class:`ChaCha20Poly1305`: ``id.ct.iv.tag``, purpose as AAD
- :class:`Legacy`: ``ct.iv.hmac``, no id
"""

from cipherseal.drivers.aes_256_cbc import AES256CBC, aes256cbc
from cipherseal.drivers.aes_256_gcm import AES256GCM, aes256gcm
from cipherseal.drivers.base import BaseDriver, IdentifiedDriver
from cipherseal.drivers.chacha20_poly1305 import ChaCha20Poly1305, chacha20poly1305
from cipherseal.drivers.legacy import Legacy, legacy

__all__ = [
    "AES256CBC",
    "AES256GCM",
    "BaseDriver",
    "ChaCha20Poly1305",
    "IdentifiedDriver",
    "Legacy",
    "aes256cbc",
    "aes256gcm",
    "chacha20poly1305",
    "legacy",
]
