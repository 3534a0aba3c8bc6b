"""
Key rotation over any driver.

:class:`Encryption` instantiates one driver per key. New tokens always use
the first (newest) key; decryption tries each driver in ring order. To
rotate, put the new key at the front and keep the old one at the tail until
every token issued under it has expired.
"""

from __future__ import annotations

from typing import Any

from cipherseal.contracts import CypherText, EncryptionConfig, EncryptionDriverContract
from cipherseal.errors import MissingKeyError
from cipherseal.message import Expiry
from cipherseal.message_verifier import MessageVerifier
from cipherseal.secret import Secret


class Encryption:
    """Driver-shaped facade over an ordered key ring.

    Args:
        config: Driver factory and keys, usually built with one of
            :func:`~cipherseal.drivers.aes256cbc`,
            :func:`~cipherseal.drivers.aes256gcm`,
            :func:`~cipherseal.drivers.chacha20poly1305` or
            :func:`~cipherseal.drivers.legacy`.

    Raises:
        MissingKeyError: If the key ring is empty.
    """

    def __init__(self, config: EncryptionConfig) -> None:
        keys = config.keys
        if keys is None or isinstance(keys, (str, bytes, Secret)) or not keys:
            raise MissingKeyError()

        self._drivers: tuple[EncryptionDriverContract, ...] = tuple(
            config.driver(key) for key in keys
        )
        self._verifier = MessageVerifier(keys)

    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        """Encrypt with the newest key."""
        return self._drivers[0].encrypt(payload, expires_in=expires_in, purpose=purpose)

    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        """Return the first successful decryption across the ring, else ``None``."""
        for driver in self._drivers:
            result = driver.decrypt(token, purpose=purpose)
            if result is not None:
                return result
        return None

    def get_message_verifier(self) -> MessageVerifier:
        """Signer rotating over the same keys."""
        return self._verifier
