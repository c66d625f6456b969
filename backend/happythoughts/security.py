"""
Happy Thoughts API — Password Hashing and Access Tokens
========================================================

What:  The two credential primitives used by user accounts.

    PasswordHasher        passlib CryptContext (bcrypt); salted, one-way
    generate_access_token 64 random bytes from `secrets`, hex encoded

Tokens are opaque: no embedded user id, no expiry, no signature. The auth
gate compares the presented token with the stored one exactly, so a token is
valid for as long as its user row exists.
"""

import secrets

from passlib.context import CryptContext

from happythoughts.exceptions import ValidationError

ACCESS_TOKEN_BYTES = 64  # → 128 hex characters


class PasswordHasher:
    """
    Hashes and verifies passwords. Plaintext is never stored or logged.

    Example:
        hasher = PasswordHasher()
        digest = hasher.hash("s3cret")
        hasher.verify("s3cret", digest)  # True
    """

    def __init__(self, schemes=("bcrypt",)):
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, plaintext: str) -> str:
        if not plaintext:
            raise ValidationError(message="Password must not be empty", field="password")
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """False for empty input or a digest passlib cannot identify."""
        if not plaintext or not digest:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            return False


def generate_access_token() -> str:
    """Return a new cryptographically random, fixed-length opaque token."""
    return secrets.token_hex(ACCESS_TOKEN_BYTES)
