"""
Pytest configuration and fixtures for the cipherseal test suite.

This module provides:
- structlog configuration for readable test output
- Well-known test secrets and the driver id used by the vectors
- Loaders for the cross-implementation vectors in tests/vectors
- A driver factory covering every driver

Vectors are regenerated with ``python specs/generate_vectors.py``.
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
import structlog

from cipherseal import __version__
from cipherseal.config import configure_logging
from cipherseal.drivers.base import BaseDriver
from lib.timing import timing_tests_enabled
from lib.tokens import DRIVER_NAMES, make_driver
from lib.vectors import VECTORS_DIR, load_vectors

# Well-known test secrets. NEVER use these outside tests.
SECRET = "averylongradom32charactersstring"
SECRET_2 = "anotherlongradom32characterskey!"
DRIVER_ID = "nova"

# Configure structlog for tests
configure_logging(os.environ.get("CIPHERSEAL_LOG_LEVEL", "warning"))
log = structlog.get_logger()


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================


@pytest.fixture(scope="session")
def secret() -> str:
    """Primary test secret, newest in every key ring."""
    return SECRET


@pytest.fixture(scope="session")
def secret_2() -> str:
    """Secondary test secret, used for rotation tests."""
    return SECRET_2


@pytest.fixture(scope="session")
def driver_id() -> str:
    """Driver id shared with the vectors."""
    return DRIVER_ID


@pytest.fixture(scope="session")
def primitive_vectors() -> dict:
    """Base64url, HMAC and HKDF vectors."""
    return load_vectors("primitive")


@pytest.fixture(scope="session")
def message_vectors() -> dict:
    """MessageVerifier sign/unsign vectors."""
    return load_vectors("message")


@pytest.fixture(scope="session")
def driver_vectors() -> dict:
    """Driver token vectors with fixed IVs."""
    return load_vectors("driver")


# =============================================================================
# Driver fixtures
# =============================================================================


@pytest.fixture(params=DRIVER_NAMES)
def driver_name(request: pytest.FixtureRequest) -> str:
    """Every driver name, one test run each."""
    return request.param


@pytest.fixture
def driver(driver_name: str) -> BaseDriver:
    """A driver of each kind over the primary secret."""
    return make_driver(driver_name, [SECRET], DRIVER_ID)


@pytest.fixture
def driver_factory(driver_name: str) -> Callable[..., BaseDriver]:
    """Build a driver of the current kind with custom keys or id."""

    def factory(keys: list[str], id: str = DRIVER_ID) -> BaseDriver:
        return make_driver(driver_name, keys, id)

    return factory


# =============================================================================
# Pytest hooks
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: wall-clock timing tests (run with CIPHERSEAL_TIMING_TESTS=1)"
    )
    config.addinivalue_line("markers", "adversarial: security/fuzzing tests")
    config.addinivalue_line("markers", "interop: cross-implementation vector tests")


def pytest_collection_modifyitems(config, items):
    """Modify collected tests based on markers and environment."""
    if timing_tests_enabled():
        return

    skip_slow = pytest.mark.skip(reason="set CIPHERSEAL_TIMING_TESTS=1 to run timing tests")

    for item in items:
        # Wall-clock measurements are unreliable on shared runners
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def pytest_report_header(config):
    """Add information to the pytest header."""
    lines = []
    lines.append(f"cipherseal {__version__} Test Suite")
    lines.append(f"  Vectors dir: {VECTORS_DIR}")
    lines.append(f"  Drivers: {', '.join(DRIVER_NAMES)}")
    return lines
