"""
Constant-time equality.

Length is treated as public: inputs of different lengths compare unequal
immediately. Equal-length inputs are compared with
``cryptography``'s ``constant_time.bytes_eq``, whose running time does not
depend on the position of the first differing byte.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import constant_time

Comparable = str | bytes | bytearray | memoryview


def _as_bytes(value: Comparable) -> bytes | None:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return None


def safe_equal(a: Comparable, b: Comparable) -> bool:
    """Compare two values without leaking the mismatch position.

    Strings are compared by their UTF-8 bytes. Unsupported types compare
    unequal rather than raising.
    """
    left = _as_bytes(a)
    right = _as_bytes(b)
    if left is None or right is None:
        return False

    if len(left) != len(right):
        return False

    return constant_time.bytes_eq(left, right)
