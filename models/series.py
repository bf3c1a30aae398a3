from dataclasses import dataclass

INSTALLMENT = "installment"
RECURRING_INCOME = "recurring_income"


@dataclass(frozen=True)
class SeriesInfo:
    kind: str           # 'installment' | 'recurring_income'
    base: str           # description without the tag
    position: int       # k, 1-based
    total: int          # n as written in the tag
