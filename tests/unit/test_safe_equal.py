"""
Constant-time comparator tests.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cipherseal.safe_equal import safe_equal


class TestSafeEqual:
    """Tests for safe_equal semantics (timing is covered in adversarial)."""

    def test_equal_strings(self) -> None:
        assert safe_equal("hello", "hello")

    def test_different_strings(self) -> None:
        assert not safe_equal("hello", "hellp")

    def test_different_lengths(self) -> None:
        assert not safe_equal("hello", "hello!")
        assert not safe_equal("", "a")

    def test_empty_values_are_equal(self) -> None:
        assert safe_equal("", "")
        assert safe_equal(b"", b"")

    def test_bytes(self) -> None:
        assert safe_equal(b"\x00\x01", b"\x00\x01")
        assert safe_equal(bytearray(b"ab"), memoryview(b"ab"))
        assert not safe_equal(b"\x00\x01", b"\x00\x02")

    def test_string_compared_as_utf8(self) -> None:
        assert safe_equal("café", "café".encode())
        # Same character count, different byte lengths
        assert not safe_equal("é", "e")

    @pytest.mark.parametrize("value", [None, 1, 1.5, ["a"], {"a": 1}])
    def test_unsupported_types_are_unequal(self, value: object) -> None:
        assert not safe_equal(value, value)  # type: ignore[arg-type]
        assert not safe_equal("a", value)  # type: ignore[arg-type]

    @given(a=st.binary(max_size=64), b=st.binary(max_size=64))
    @settings(max_examples=100)
    def test_matches_plain_equality(self, a: bytes, b: bytes) -> None:
        assert safe_equal(a, b) == (a == b)
