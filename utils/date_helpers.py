from datetime import date, datetime
import calendar
from utils.constants import DATE_FORMAT, MONTH_FORMAT

# Storage is always ISO (DATE_FORMAT / MONTH_FORMAT); these keys only
# change what the entry widgets show.
DATE_FORMAT_OPTIONS = ["DD/MM/YYYY", "MM/DD/YYYY", "YYYY-MM-DD"]

_STRFTIME_MAP = {
    "DD/MM/YYYY": "%d/%m/%Y",
    "MM/DD/YYYY": "%m/%d/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
}
_DEFAULT_DISPLAY = "%d/%m/%Y"

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def _strptime(text: str, fmt: str) -> date | None:
    if not text:
        return None
    try:
        return datetime.strptime(text.strip(), fmt).date()
    except ValueError:
        return None


def _month_start(month_str: str) -> date:
    d = _strptime(month_str, MONTH_FORMAT)
    if d is None:
        raise ValueError(f"Invalid month: {month_str}")
    return d


def today_str() -> str:
    return format_date(date.today())


def current_month_str() -> str:
    return date.today().strftime(MONTH_FORMAT)


def parse_date(date_str: str) -> date | None:
    """Stored date string to a date; None when empty or not a real day."""
    return _strptime(date_str, DATE_FORMAT)


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def month_range(month_str: str) -> tuple[str, str]:
    """Inclusive storage-date bounds of a month, for BETWEEN-style queries."""
    first = _month_start(month_str)
    days = calendar.monthrange(first.year, first.month)[1]
    return format_date(first), format_date(first.replace(day=days))


def year_range(year: int) -> tuple[str, str]:
    return format_date(date(year, 1, 1)), format_date(date(year, 12, 31))


def shift_month(month_str: str, n: int) -> str:
    return add_months(_month_start(month_str), n).strftime(MONTH_FORMAT)


def prev_month(month_str: str) -> str:
    return shift_month(month_str, -1)


def next_month(month_str: str) -> str:
    return shift_month(month_str, 1)


def add_months(d: date, n: int) -> date:
    """Add n calendar months to d, clamping the day to the target month's end.

    Always computed from d itself, so add_months(Jan 31, 2) is Mar 31 even
    though add_months(Jan 31, 1) is Feb 28/29.
    """
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def friendly_month(month_str: str) -> str:
    """Toolbar title for a month ('2026-02' -> 'February 2026')."""
    d = _strptime(month_str, MONTH_FORMAT)
    return d.strftime("%B %Y") if d else month_str


def format_display_date(date_str: str, fmt_key: str = "DD/MM/YYYY") -> str:
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_STRFTIME_MAP.get(fmt_key, _DEFAULT_DISPLAY))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Read what the user typed; an ISO date is accepted in any display format."""
    typed = _strptime(display_str, _STRFTIME_MAP.get(fmt_key, _DEFAULT_DISPLAY))
    return typed or parse_date(display_str)
