from datetime import date

import pytest

from utils import date_helpers as dh


@pytest.mark.parametrize(
    "start, n, expected",
    [
        (date(2024, 1, 15), 1, date(2024, 2, 15)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2023, 1, 31), 1, date(2023, 2, 28)),
        (date(2023, 1, 31), 2, date(2023, 3, 31)),
        (date(2024, 11, 30), 3, date(2025, 2, 28)),
        (date(2024, 3, 31), -1, date(2024, 2, 29)),
        (date(2024, 1, 10), 0, date(2024, 1, 10)),
    ],
)
def test_add_months(start, n, expected):
    assert dh.add_months(start, n) == expected


def test_month_range_and_navigation():
    assert dh.month_range("2024-02") == ("2024-02-01", "2024-02-29")
    assert dh.prev_month("2024-01") == "2023-12"
    assert dh.next_month("2024-12") == "2025-01"
    assert dh.year_range(2024) == ("2024-01-01", "2024-12-31")
    with pytest.raises(ValueError):
        dh.month_range("2024-13")


def test_parse_date():
    assert dh.parse_date("2024-02-29") == date(2024, 2, 29)
    assert dh.parse_date("2023-02-29") is None
    assert dh.parse_date("") is None


def test_display_formats():
    assert dh.format_display_date("2024-03-07") == "07/03/2024"
    assert dh.format_display_date("2024-03-07", "MM/DD/YYYY") == "03/07/2024"
    assert dh.parse_display_date("07/03/2024", "DD/MM/YYYY") == date(2024, 3, 7)
    assert dh.parse_display_date("2024-03-07", "DD/MM/YYYY") == date(2024, 3, 7)
    assert dh.parse_display_date("31/02/2024", "DD/MM/YYYY") is None


def test_shift_month_and_titles():
    assert dh.shift_month("2024-01", 14) == "2025-03"
    assert dh.shift_month("2024-03", -3) == "2023-12"
    assert dh.friendly_month("2026-02") == "February 2026"
    assert dh.friendly_month("garbage") == "garbage"
    with pytest.raises(ValueError):
        dh.next_month("")
