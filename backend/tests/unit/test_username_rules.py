"""Username/email normalization tests."""

from __future__ import annotations

import pytest

from vidhub.core.username import UsernameValidationError
from vidhub.core.username import normalize_and_validate_email
from vidhub.core.username import normalize_and_validate_username


def test_username_is_trimmed_nfc_normalized_and_lower_cased() -> None:
    assert normalize_and_validate_username("  Jose\u0301  ") == "jos\u00e9"
    assert normalize_and_validate_username("ALICE") == "alice"


@pytest.mark.parametrize("raw", ["ab", "a" * 31, "   ", "has space", "semi;colon"])
def test_invalid_usernames_are_rejected(raw: str) -> None:
    with pytest.raises(UsernameValidationError):
        normalize_and_validate_username(raw)


def test_username_length_counts_graphemes_not_code_points() -> None:
    # Three graphemes, six code points before NFC.
    assert normalize_and_validate_username("e\u0301" * 3) == "\u00e9" * 3


def test_email_is_trimmed_and_lower_cased() -> None:
    assert normalize_and_validate_email("  Alice@Example.COM ") == "alice@example.com"


@pytest.mark.parametrize("raw", ["", "alice", "alice@", "a@b", "a@@b.com"])
def test_invalid_emails_are_rejected(raw: str) -> None:
    with pytest.raises(UsernameValidationError):
        normalize_and_validate_email(raw)
