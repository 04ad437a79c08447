"""Username and email normalization helpers for accounts."""

from __future__ import annotations

import unicodedata

import regex

MIN_USERNAME_GRAPHEMES = 3
MAX_USERNAME_GRAPHEMES = 30
_GRAPHEME_PATTERN = regex.compile(r"\X")
_USERNAME_PATTERN = regex.compile(r"^[\p{L}\p{M}\p{N}_.\-]+$")
_EMAIL_PATTERN = regex.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UsernameValidationError(ValueError):
    """Raised when a username or email violates account rules."""


def normalize_username(raw_username: str) -> str:
    """Trim, NFC-normalize and lower-case a username."""
    return unicodedata.normalize("NFC", raw_username.strip()).lower()


def count_graphemes(value: str) -> int:
    """Count user-visible characters using grapheme clusters."""
    return len(_GRAPHEME_PATTERN.findall(value))


def validate_username(username: str) -> None:
    grapheme_count = count_graphemes(username)
    if grapheme_count < MIN_USERNAME_GRAPHEMES or grapheme_count > MAX_USERNAME_GRAPHEMES:
        raise UsernameValidationError(
            f"username length must be {MIN_USERNAME_GRAPHEMES}-{MAX_USERNAME_GRAPHEMES} characters"
        )
    if not _USERNAME_PATTERN.match(username):
        raise UsernameValidationError("username may only contain letters, digits, '_', '.' and '-'")


def normalize_and_validate_username(raw_username: str) -> str:
    """Apply trim + NFC + lower-case and validate length and alphabet."""
    normalized = normalize_username(raw_username)
    validate_username(normalized)
    return normalized


def normalize_and_validate_email(raw_email: str) -> str:
    normalized = raw_email.strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise UsernameValidationError("email is not valid")
    return normalized
