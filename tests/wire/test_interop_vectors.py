"""
Cross-implementation vector tests.

Decrypting checks that tokens minted elsewhere are accepted. Encrypting with
the vector's IV pinned checks that tokens minted here are byte-identical, so
either side can be swapped out without invalidating outstanding tokens.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from cipherseal.drivers import AES256CBC
from cipherseal.drivers.base import derive_simple_key
from cipherseal.duration import parse_iso_string
from cipherseal.message import MessageBuilder
from cipherseal.message_verifier import MessageVerifier
from lib.tokens import make_driver
from lib.vectors import load_vectors, vector_ids

pytestmark = pytest.mark.interop

DRIVER_VECTORS = load_vectors("driver")["vectors"]
MESSAGE_VECTORS = load_vectors("message")["vectors"]
HKDF_VECTORS = load_vectors("primitive")["hkdf"]

AEAD_DRIVERS = {"aes_256_gcm", "chacha20_poly1305"}


def envelope_parts(plaintext: str) -> tuple[object, datetime | None]:
    """Message and absolute expiry recorded in a vector's plaintext."""
    envelope = json.loads(plaintext)
    expiry = envelope.get("expiryDate")
    return envelope["message"], parse_iso_string(expiry) if expiry else None


# =============================================================================
# Drivers
# =============================================================================


@pytest.mark.parametrize("vector", DRIVER_VECTORS, ids=vector_ids(DRIVER_VECTORS))
class TestDriverVectors:
    """Every driver against its fixed-IV vectors."""

    def test_decrypt(self, vector: dict) -> None:
        driver = make_driver(vector["driver"], [vector["secret"]], vector["id"])
        assert driver.decrypt(vector["token"], purpose=vector["purpose"]) == vector["expected"]

    def test_encrypt_is_byte_exact(self, vector: dict, monkeypatch: pytest.MonkeyPatch) -> None:
        driver = make_driver(vector["driver"], [vector["secret"]], vector["id"])
        iv = bytes.fromhex(vector["iv"])
        monkeypatch.setattr(driver, "_generate_iv", lambda: iv)

        message, expiry = envelope_parts(vector["plaintext"])
        token = driver.encrypt(message, expires_in=expiry, purpose=vector["purpose"])

        assert token == vector["token"]

    def test_envelope_matches(self, vector: dict) -> None:
        message, expiry = envelope_parts(vector["plaintext"])
        # AEAD drivers bind the purpose as AAD instead
        purpose = None if vector["driver"] in AEAD_DRIVERS else vector["purpose"]

        assert MessageBuilder().build(message, expiry, purpose) == vector["plaintext"]

    def test_decrypt_in_rotated_ring(self, vector: dict, secret: str, secret_2: str) -> None:
        driver = make_driver(vector["driver"], [secret_2, secret], vector["id"])
        assert driver.decrypt(vector["token"], purpose=vector["purpose"]) == vector["expected"]

    def test_wrong_purpose(self, vector: dict) -> None:
        driver = make_driver(vector["driver"], [vector["secret"]], vector["id"])
        assert driver.decrypt(vector["token"], purpose="not-the-purpose") is None


# =============================================================================
# Signed messages
# =============================================================================


@pytest.mark.parametrize("vector", MESSAGE_VECTORS, ids=vector_ids(MESSAGE_VECTORS))
class TestMessageVectors:
    """MessageVerifier against signed vectors."""

    def test_unsign(self, vector: dict) -> None:
        verifier = MessageVerifier([vector["secret"]])
        assert verifier.unsign(vector["token"], vector["purpose"]) == vector["expected"]

    def test_sign_is_byte_exact(self, vector: dict) -> None:
        message, expiry = envelope_parts(vector["plaintext"])
        token = MessageVerifier([vector["secret"]]).sign(message, expiry, vector["purpose"])

        assert token == vector["token"]


def test_signed_datetime_matches_vector() -> None:
    """A datetime payload signs exactly like its ISO string."""
    vector = next(v for v in MESSAGE_VECTORS if v["name"] == "date_payload")
    moment = datetime(2024, 1, 15, 10, 30, 0, 250_000, tzinfo=timezone.utc)

    assert MessageVerifier([vector["secret"]]).sign(moment) == vector["token"]


# =============================================================================
# Key derivation
# =============================================================================


@pytest.mark.parametrize("vector", HKDF_VECTORS, ids=vector_ids(HKDF_VECTORS))
def test_context_bound_keys(vector: dict) -> None:
    driver = AES256CBC(id=vector["id"], keys=[vector["secret"]])
    encryption_key, authentication_key = driver._derive_keys(
        derive_simple_key(vector["secret"]), bytes.fromhex(vector["iv"])
    )

    assert encryption_key.hex() == vector["encryption_key"]
    assert authentication_key.hex() == vector["authentication_key"]
