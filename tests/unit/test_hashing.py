"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- sha256 / hash_concat match hashlib
- to_hex/from_hex round trip and prefix handling
- digest_from_hex length enforcement
"""
import hashlib
import pytest

from core.crypto.hashing import (
    DIGEST_SIZE,
    LEAF_PREFIX,
    NODE_PREFIX,
    sha256,
    hash_concat,
    to_hex,
    from_hex,
    digest_from_hex,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """sha256 of "hello" matches the published digest."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == DIGEST_SIZE

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_deterministic(self):
        data = b"chiapas"
        assert sha256(data) == sha256(data)

    def test_sha256_does_not_strip_whitespace(self):
        assert sha256(b"chiapas") != sha256(b"chiapas ")


class TestHashConcat:
    """Tests for hash_concat()."""

    def test_equals_sha256_of_concatenation(self):
        left, right = sha256(b"a"), sha256(b"b")
        assert hash_concat(left, right) == hashlib.sha256(left + right).digest()

    def test_order_matters(self):
        left, right = sha256(b"a"), sha256(b"b")
        assert hash_concat(left, right) != hash_concat(right, left)


class TestDomainTags:
    def test_tags_are_distinct_single_bytes(self):
        assert LEAF_PREFIX == b"\x00"
        assert NODE_PREFIX == b"\x01"


class TestHexConversion:
    """Tests for to_hex() / from_hex()."""

    def test_to_hex_has_prefix_and_lowercase(self):
        assert to_hex(bytes.fromhex("DEADBEEF")) == "0xdeadbeef"

    def test_round_trip(self):
        digest = sha256(b"mill-001")
        assert from_hex(to_hex(digest)) == digest

    def test_prefix_is_optional(self):
        assert from_hex("deadbeef") == from_hex("0xdeadbeef")

    def test_uppercase_prefix_accepted(self):
        assert from_hex("0XDEADBEEF") == bytes.fromhex("deadbeef")

    def test_empty_string_is_empty_bytes(self):
        assert from_hex("0x") == b""

    def test_odd_length_raises(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_invalid_characters_raise(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_embedded_whitespace_rejected(self):
        with pytest.raises(ValueError):
            from_hex("de ad")

    def test_non_string_raises(self):
        with pytest.raises(ValueError, match="must be a string"):
            from_hex(b"deadbeef")


class TestDigestFromHex:
    def test_accepts_32_bytes(self):
        digest = sha256(b"artisan-001")
        assert digest_from_hex(to_hex(digest)) == digest

    def test_rejects_short_digest(self):
        with pytest.raises(ValueError, match="32 bytes"):
            digest_from_hex("0x" + "ab" * 31)

    def test_rejects_long_digest(self):
        with pytest.raises(ValueError, match="32 bytes"):
            digest_from_hex("ab" * 33)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
