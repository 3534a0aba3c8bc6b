"""Wire-level tests for cipherseal tokens.

These tests validate token layout and byte-level compatibility with the
vectors in tests/vectors.

Test categories:
- test_token_format.py: Field counts, sizes and alphabet
- test_interop_vectors.py: Byte-exact tokens against the vectors
"""
