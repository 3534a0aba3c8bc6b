"""
Settings for building encrypters from a JSON5 file or the environment.

File format (``$CIPHERSEAL_CONFIG``)::

    {
      default: "app",
      encrypters: {
        app: { driver: "chacha20_poly1305", id: "app", keys: ["newest...", "older..."] },
        // keys can come from a comma-separated environment variable instead
        cookies: { driver: "aes_256_cbc", id: "ck", keys_env: "COOKIE_KEYS" },
        old: { driver: "legacy", keys_env: "APP_KEY" },
      },
    }

Without a file, a single encrypter named ``default`` is built from:

    CIPHERSEAL_DRIVER: driver name (default: chacha20_poly1305)
    CIPHERSEAL_ID: driver id (required for every driver except legacy)
    CIPHERSEAL_KEYS: comma-separated keys, newest first (required)

Keys are wrapped in :class:`~cipherseal.secret.Secret` as soon as they are
read so settings objects can be printed or logged safely.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import json5
import structlog

from cipherseal.contracts import EncryptionConfig
from cipherseal.drivers import aes256cbc, aes256gcm, chacha20poly1305, legacy
from cipherseal.encryption import Encryption
from cipherseal.errors import ConfigurationError
from cipherseal.manager import EncryptionManager
from cipherseal.secret import Secret

log = structlog.get_logger()

DEFAULT_DRIVER = "chacha20_poly1305"
DEFAULT_ENCRYPTER_NAME = "default"
LEGACY_DRIVER = "legacy"

# Driver name -> key-ring config helper (legacy takes no id)
DRIVERS: dict[str, Callable[..., EncryptionConfig]] = {
    "aes_256_cbc": aes256cbc,
    "aes_256_gcm": aes256gcm,
    "chacha20_poly1305": chacha20poly1305,
    LEGACY_DRIVER: legacy,
}


def require_env(name: str, default: str | None = None) -> str:
    """Get required environment variable or fail with clear error.

    Args:
        name: Environment variable name.
        default: Default value if not set (None means required).

    Returns:
        The environment variable value.

    Raises:
        ConfigurationError: If the variable is not set and no default.
    """
    value = os.environ.get(name, default)
    if value is None or value == "":
        raise ConfigurationError(f"Required environment variable {name} is not set")
    return value


def split_keys(raw: str) -> list[Secret]:
    """Split a comma-separated key list, dropping surrounding whitespace."""
    return [Secret(key.strip()) for key in raw.split(",") if key.strip()]


@dataclass
class EncrypterSettings:
    """One named encrypter: driver, id and key ring (newest first)."""

    driver: str
    keys: list[Secret] = field(default_factory=list)
    id: str | None = None


@dataclass
class EncryptionSettings:
    """All encrypters plus the default name."""

    default: str | None = None
    encrypters: dict[str, EncrypterSettings] = field(default_factory=dict)


# =============================================================================
# Loading
# =============================================================================


def _encrypter_from_mapping(name: str, data: object) -> EncrypterSettings:
    if not isinstance(data, dict):
        raise ConfigurationError(f'Encrypter "{name}" must be an object')

    driver = data.get("driver", DEFAULT_DRIVER)
    if driver not in DRIVERS:
        raise ConfigurationError(f'Encrypter "{name}" uses unknown driver "{driver}"')

    if "keys_env" in data:
        keys = split_keys(require_env(data["keys_env"]))
    else:
        raw_keys = data.get("keys")
        if not isinstance(raw_keys, list) or not all(isinstance(k, str) for k in raw_keys):
            raise ConfigurationError(f'Encrypter "{name}" must define "keys" as a list of strings')
        keys = [Secret(k) for k in raw_keys]

    return EncrypterSettings(driver=driver, keys=keys, id=data.get("id"))


def _settings_from_file(path: Path) -> EncryptionSettings:
    try:
        with open(path, encoding="utf-8") as f:
            data = json5.load(f)
    except ValueError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("encrypters"), dict):
        raise ConfigurationError(f'Config file {path} must define an "encrypters" object')

    encrypters = {
        name: _encrypter_from_mapping(name, entry) for name, entry in data["encrypters"].items()
    }
    default = data.get("default")
    if default is not None and default not in encrypters:
        raise ConfigurationError(f'Default encrypter "{default}" is not defined')

    return EncryptionSettings(default=default, encrypters=encrypters)


def _settings_from_env() -> EncryptionSettings:
    driver = os.environ.get("CIPHERSEAL_DRIVER", DEFAULT_DRIVER)
    if driver not in DRIVERS:
        raise ConfigurationError(f'Unknown driver "{driver}" in CIPHERSEAL_DRIVER')

    encrypter = EncrypterSettings(
        driver=driver,
        keys=split_keys(require_env("CIPHERSEAL_KEYS")),
        id=os.environ.get("CIPHERSEAL_ID"),
    )
    return EncryptionSettings(
        default=DEFAULT_ENCRYPTER_NAME,
        encrypters={DEFAULT_ENCRYPTER_NAME: encrypter},
    )


def load_config(path: str | Path | None = None) -> EncryptionSettings:
    """Load encryption settings.

    Args:
        path: Optional path to a JSON5 config file. Falls back to the
            CIPHERSEAL_CONFIG env variable, then to CIPHERSEAL_* variables.

    Raises:
        ConfigurationError: If the file or the environment is invalid.
    """
    config_path = path or os.environ.get("CIPHERSEAL_CONFIG")
    if config_path and os.path.exists(config_path):
        log.debug("loading_config_file", path=str(config_path))
        return _settings_from_file(Path(config_path))

    if path:
        raise ConfigurationError(f"Config file {path} does not exist")

    log.debug("loading_config_env")
    return _settings_from_env()


# =============================================================================
# Building
# =============================================================================


def create_encryption(settings: EncrypterSettings) -> Encryption:
    """Build a key-rotating :class:`Encryption` from settings.

    Raises:
        ConfigurationError: If the driver name is unknown or no keys are set.
        MissingIdError: If an id-bearing driver has no id.
        InsecureKeyError: If a key is too short.
    """
    helper = DRIVERS.get(settings.driver)
    if helper is None:
        raise ConfigurationError(f'Unknown driver "{settings.driver}"')
    if not settings.keys:
        raise ConfigurationError(f'No keys configured for driver "{settings.driver}"')

    if settings.driver == LEGACY_DRIVER:
        return Encryption(helper(keys=settings.keys))
    return Encryption(helper(id=settings.id, keys=settings.keys))


def create_manager(settings: EncryptionSettings) -> EncryptionManager:
    """Build a manager whose encrypters are created on first use."""
    factories = {
        name: (lambda s=encrypter: create_encryption(s))
        for name, encrypter in settings.encrypters.items()
    }
    return EncryptionManager(factories, default=settings.default)


# =============================================================================
# Logging
# =============================================================================


def configure_logging(level: str | None = None) -> None:
    """Configure structlog console output.

    Args:
        level: Minimum level name. Falls back to CIPHERSEAL_LOG_LEVEL,
            then ``info``.
    """
    level_name = (level or os.environ.get("CIPHERSEAL_LOG_LEVEL", "info")).lower()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            structlog.stdlib.NAME_TO_LEVEL.get(level_name, 20)
        ),
    )
