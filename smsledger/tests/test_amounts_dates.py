from datetime import date
from decimal import Decimal

import pytest

from ..amounts import MalformedAmountError, parse_amount
from ..dates import normalize_date


def test_indian_and_western_grouping_agree():
    assert parse_amount("1,23,456.78") == parse_amount("123,456.78") == parse_amount("123456.78")
    assert parse_amount("123456.78") == Decimal("123456.78")


def test_whole_amount():
    assert parse_amount("500") == Decimal("500")


@pytest.mark.parametrize("token", ["", ",", ",,,", "1.2.3", None])
def test_malformed_amounts(token):
    with pytest.raises(MalformedAmountError):
        parse_amount(token)


def test_malformed_amount_is_a_value_error():
    assert issubclass(MalformedAmountError, ValueError)


@pytest.mark.parametrize(
    "token,expected",
    [
        ("18/11/25", date(2025, 11, 18)),
        ("05-NOV-25", date(2025, 11, 5)),
        ("05-Nov-25", date(2025, 11, 5)),
        ("01-11-25", date(2025, 11, 1)),
        ("31 OCT 2025", date(2025, 10, 31)),
        ("31  Oct\n2025", date(2025, 10, 31)),
    ],
)
def test_supported_date_formats(token, expected):
    assert normalize_date(token) == expected


def test_missing_date_defaults_to_today():
    assert normalize_date(None) == date.today()
    assert normalize_date("") == date.today()


def test_unparsable_date_uses_fallback():
    assert normalize_date("32/13/25", fallback=date(2024, 2, 29)) == date(2024, 2, 29)
    assert normalize_date("sometime soon", fallback=date(2024, 2, 29)) == date(2024, 2, 29)


def test_non_ascii_digits_are_malformed():
    with pytest.raises(MalformedAmountError):
        parse_amount("१२३")
