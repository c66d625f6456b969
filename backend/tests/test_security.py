"""
Happy Thoughts API — Password Hashing and Token Tests
======================================================

What we test:
    ✅ Hash is salted and one-way; verify accepts only the right password
    ✅ Empty passwords are rejected with ValidationError
    ✅ Tokens are 128 hex characters and distinct
    ✅ Authorization header parsing for the auth gate
"""

import string

import pytest

from happythoughts.dependencies import extract_token
from happythoughts.exceptions import ValidationError
from happythoughts.security import generate_access_token


class TestPasswordHasher:

    def test_hash_does_not_contain_plaintext(self, hasher):
        digest = hasher.hash("correct horse")
        assert "correct horse" not in digest
        assert digest.startswith("$2")

    def test_hash_is_salted(self, hasher):
        """Same password twice gives two different digests."""
        assert hasher.hash("same-password") != hasher.hash("same-password")

    def test_verify_correct_password(self, hasher):
        digest = hasher.hash("s3cret")
        assert hasher.verify("s3cret", digest) is True

    def test_verify_wrong_password(self, hasher):
        digest = hasher.hash("s3cret")
        assert hasher.verify("S3cret", digest) is False

    @pytest.mark.parametrize("empty", ["", None])
    def test_hash_empty_raises(self, hasher, empty):
        with pytest.raises(ValidationError, match="must not be empty"):
            hasher.hash(empty)

    def test_verify_garbage_digest_is_false(self, hasher):
        assert hasher.verify("s3cret", "not-a-bcrypt-digest") is False


class TestAccessToken:

    def test_token_is_fixed_length_hex(self):
        token = generate_access_token()
        assert len(token) == 128
        assert set(token) <= set(string.hexdigits.lower())

    def test_tokens_are_unique(self):
        tokens = {generate_access_token() for _ in range(200)}
        assert len(tokens) == 200


class TestExtractToken:

    def test_bearer_scheme(self):
        assert extract_token("Bearer abc123") == "abc123"

    def test_bearer_scheme_any_case(self):
        assert extract_token("bearer abc123") == "abc123"

    def test_bare_token(self):
        assert extract_token("abc123") == "abc123"

    def test_token_case_preserved(self):
        assert extract_token("Bearer AbC") == "AbC"

    def test_surrounding_whitespace(self):
        assert extract_token("  Bearer   abc123  ") == "abc123"

    @pytest.mark.parametrize("value", [None, "", "   ", "Bearer ", "Bearer", "bearer   "])
    def test_missing(self, value):
        assert extract_token(value) is None
