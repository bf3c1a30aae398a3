"""Series tags embedded in transaction descriptions.

A generated series is recognised only by the suffix its records carry:

    "Notebook (2/10)"        installment 2 of 10
    "Salário (Mês 3/12)"     recurring income, month 3 of 12

There is no separate series id; two records belong to the same series when
they share the base text, the tag shape and the owner.
"""
import re

from models.series import SeriesInfo, INSTALLMENT, RECURRING_INCOME

_INSTALLMENT_RE = re.compile(r"^(.*) \((\d+)/(\d+)\)$", re.DOTALL)
_RECURRING_RE = re.compile(r"^(.*) \(Mês (\d+)/(\d+)\)$", re.DOTALL)


def tag_installment(base: str, k: int, n: int) -> str:
    return f"{base} ({k}/{n})"


def tag_recurring_income(base: str, k: int, n: int) -> str:
    return f"{base} (Mês {k}/{n})"


def tag(kind: str, base: str, k: int, n: int) -> str:
    if kind == INSTALLMENT:
        return tag_installment(base, k, n)
    if kind == RECURRING_INCOME:
        return tag_recurring_income(base, k, n)
    raise ValueError(f"Unknown series kind: {kind}")


def classify(description: str) -> SeriesInfo | None:
    """Return the series position encoded in description, or None."""
    if not description:
        return None
    m = _INSTALLMENT_RE.match(description)
    if m:
        return SeriesInfo(INSTALLMENT, m.group(1), int(m.group(2)), int(m.group(3)))
    m = _RECURRING_RE.match(description)
    if m:
        return SeriesInfo(RECURRING_INCOME, m.group(1), int(m.group(2)), int(m.group(3)))
    return None


def is_series_tagged(description: str) -> bool:
    """True when deleting this record should offer 'this one' vs 'this and future'."""
    return classify(description) is not None


def series_prefix(info: SeriesInfo) -> str:
    """Text shared by every description of info's series, up to the position."""
    if info.kind == RECURRING_INCOME:
        return f"{info.base} (Mês "
    return f"{info.base} ("


def prefix_upper_bound(prefix: str) -> str:
    """Smallest string greater than every string starting with prefix."""
    return prefix[:-1] + chr(ord(prefix[-1]) + 1)
