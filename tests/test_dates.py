from datetime import date

from core.dates import format_short, parse_date, resolve_date
from core.domain import make_transaction

TODAY = date(2024, 11, 17)


def parsed(text, today=TODAY):
    return parse_date(text, today).get_or_else(None)


def test_month_name_in_current_year():
    assert parsed("Nov 4") == date(2024, 11, 4)
    assert parsed("november 4") == date(2024, 11, 4)
    assert parsed("OCT 31") == date(2024, 10, 31)


def test_month_name_after_current_month_is_last_year():
    assert parsed("Dec 25") == date(2023, 12, 25)


def test_slashed_without_year_uses_same_inference():
    assert parsed("10/31") == date(2024, 10, 31)
    assert parsed("12/1") == date(2023, 12, 1)


def test_slashed_two_digit_years():
    assert parsed("11/4/24") == date(2024, 11, 4)
    assert parsed("1/2/75") == date(1975, 1, 2)
    assert parsed("1/2/69") == date(2069, 1, 2)


def test_four_digit_year_goes_to_general_parser():
    assert parsed("2024-11-04") == date(2024, 11, 4)
    assert parsed("Nov 4, 2023") == date(2023, 11, 4)
    assert parsed("2022") == date(2022, 1, 1)


def test_slashed_four_digit_year_is_month_first():
    assert parsed("11/4/2024") == date(2024, 11, 4)
    assert parsed("1/13/2024") == date(2024, 1, 13)
    assert parse_date("13/1/2024", TODAY).is_none()
    assert parse_date("2/30/2024", TODAY).is_none()


def test_unparsable_dates():
    assert parse_date("sometime last week", TODAY).is_none()
    assert parse_date("", TODAY).is_none()
    assert parse_date(None, TODAY).is_none()
    assert parse_date("Feb 30", TODAY).is_none()
    assert parse_date("13/1", TODAY).is_none()
    assert parse_date("Foo 4", TODAY).is_none()


def test_year_inference_follows_today():
    assert parsed("Dec 25", date(2025, 1, 3)) == date(2024, 12, 25)
    assert parsed("Dec 25", date(2024, 12, 26)) == date(2024, 12, 25)


def test_resolve_date_on_transaction():
    t = make_transaction("expense", 10, "food", "Nov 4", id="t1")
    assert resolve_date(t, TODAY) == date(2024, 11, 4)
    u = make_transaction("expense", 10, "food", "whenever", id="t2")
    assert resolve_date(u, TODAY) is None


def test_format_short():
    assert format_short(date(2024, 11, 4)) == "Nov 4"
    assert format_short(None) == "-"
