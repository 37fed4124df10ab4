from datetime import datetime, timedelta, timezone

import pytest

from core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from utils.extension_utils import (
    elapsed_ms,
    format_brl,
    minutes_ceil,
    round_half_up,
    to_iso,
)


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (3.75, 1, 3.8),
        (3.25, 1, 3.3),
        (4.44, 1, 4.4),
        (1500.5, 0, 1501.0),
    ],
)
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected


def test_format_brl():
    assert format_brl(5000) == "R$ 50,00"
    assert format_brl(123456) == "R$ 1.234,56"


def test_elapsed_ms_accepts_naive_database_values():
    start = datetime(2024, 5, 1, 12, 0, 0)
    end = datetime(2024, 5, 1, 12, 12, 0, tzinfo=timezone.utc)
    assert elapsed_ms(start, end) == 720000


def test_minutes_ceil_and_iso():
    assert minutes_ceil(481) == 9
    assert to_iso(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)) == "2024-05-01T12:00:00Z"
    assert to_iso(None) is None


def test_password_hashing(user_password):
    password_hash = hash_password(user_password)

    assert password_hash != user_password
    assert verify_password(user_password, password_hash)
    assert not verify_password("wrong", password_hash)
    assert not verify_password(user_password, "not-a-bcrypt-hash")


def test_access_token_payload():
    token = create_access_token("user-1", "a@example.com", True, timedelta(minutes=5))

    payload = decode_access_token(token)

    assert payload["userId"] == "user-1"
    assert payload["email"] == "a@example.com"
    assert payload["isAdmin"] is True
