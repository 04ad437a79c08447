"""Credential checks: one-way password hashing for accounts."""

from __future__ import annotations

from passlib.context import CryptContext
from passlib.exc import UnknownHashError

# Schemes live here only; bumping rounds here makes old hashes "need update".
_PASSWORD_CONTEXT = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=12,
    bcrypt__min_rounds=12,
)


def hash_password(plain_password: str) -> str:
    return _PASSWORD_CONTEXT.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Compare a plaintext password with a stored hash; unknown formats never match."""
    try:
        return _PASSWORD_CONTEXT.verify(plain_password, password_hash)
    except (UnknownHashError, ValueError):
        return False


def password_needs_rehash(password_hash: str) -> bool:
    """True when ``password_hash`` was made with outdated scheme settings."""
    try:
        return _PASSWORD_CONTEXT.needs_update(password_hash)
    except (UnknownHashError, ValueError):
        return True
