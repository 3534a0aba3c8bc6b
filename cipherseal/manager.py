"""
Named encrypters with a default.

The manager maps names to zero-argument factories and builds each encrypter
on first use. Instances are immutable, so caching them is safe to share
across threads; a concurrent first use may build a throwaway duplicate but
never a different configuration.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from cipherseal.contracts import CypherText, EncryptionDriverContract
from cipherseal.errors import MissingDefaultEncrypterError, UnknownEncrypterError
from cipherseal.message import Expiry
from cipherseal.message_verifier import MessageVerifier

log = structlog.get_logger()

ManagerDriverFactory = Callable[[], EncryptionDriverContract]


class EncryptionManager:
    """Lazily builds and caches encrypters by name.

    Args:
        encrypters: Mapping of name to factory.
        default: Name used when :meth:`use` is called without one.
    """

    def __init__(
        self,
        encrypters: Mapping[str, ManagerDriverFactory],
        default: str | None = None,
    ) -> None:
        self._encrypters = dict(encrypters)
        self.default = default
        self._cache: dict[str, EncryptionDriverContract] = {}

        log.debug(
            "creating_encryption_manager",
            default=default,
            encrypters=sorted(self._encrypters),
        )

    def use(self, name: str | None = None) -> EncryptionDriverContract:
        """Return the encrypter registered as ``name`` (or the default).

        Raises:
            MissingDefaultEncrypterError: If no name is given and no default
                is configured.
            UnknownEncrypterError: If ``name`` is not registered.
        """
        name = name or self.default
        if not name:
            raise MissingDefaultEncrypterError()

        cached = self._cache.get(name)
        if cached is not None:
            log.debug("using_cached_encrypter", name=name)
            return cached

        factory = self._encrypters.get(name)
        if factory is None:
            raise UnknownEncrypterError(name)

        log.debug("creating_encrypter", name=name)
        encrypter = factory()
        self._cache[name] = encrypter
        return encrypter

    def get_message_verifier(self) -> MessageVerifier:
        return self.use().get_message_verifier()

    def encrypt(
        self,
        payload: Any,
        *,
        expires_in: Expiry | None = None,
        purpose: str | None = None,
    ) -> CypherText:
        return self.use().encrypt(payload, expires_in=expires_in, purpose=purpose)

    def decrypt(self, token: str, *, purpose: str | None = None) -> Any | None:
        return self.use().decrypt(token, purpose=purpose)
