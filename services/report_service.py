from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.transaction import Transaction
from utils.constants import UNKNOWN_CATEGORY_NAME, UNKNOWN_CATEGORY_COLOR
from utils.date_helpers import month_range, year_range, MONTH_ABBREVIATIONS


class ReportService:
    """Aggregates for summary cards and charts.

    Transactions and categories are fetched separately and joined here, so a
    transaction whose category was deleted is reported under
    UNKNOWN_CATEGORY_NAME instead of being dropped.
    """

    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO):
        self._tx_dao = tx_dao
        self._category_dao = category_dao

    def get_summary(self, user_id: str, month: str) -> dict:
        """Return {income, expense, balance} for a YYYY-MM month."""
        first, last = month_range(month)
        return self._totals(self._tx_dao.query(user_id, date_from=first, date_to=last))

    def get_annual_summary(self, user_id: str, year: int) -> list[dict]:
        """Return 12 rows of {month, label, income, expense, balance}, Jan first."""
        first, last = year_range(year)
        by_month: dict[str, list[Transaction]] = {}
        for tx in self._tx_dao.query(user_id, date_from=first, date_to=last):
            by_month.setdefault(tx.date[:7], []).append(tx)

        rows = []
        for i, label in enumerate(MONTH_ABBREVIATIONS, start=1):
            month = f"{year}-{i:02d}"
            row = self._totals(by_month.get(month, []))
            row["month"] = month
            row["label"] = label
            rows.append(row)
        return rows

    def get_category_breakdown(self, user_id: str, month: str, type_: str = "expense") -> list[dict]:
        """Return [{category, color, total}, ...] for one type, largest first."""
        first, last = month_range(month)
        categories = {c.id: c for c in self._category_dao.get_all(user_id)}
        totals: dict[str, dict] = {}
        for tx in self._tx_dao.query(user_id, date_from=first, date_to=last):
            if tx.type != type_:
                continue
            cat = categories.get(tx.category_id)
            name = cat.name if cat else UNKNOWN_CATEGORY_NAME
            color = cat.color if cat else UNKNOWN_CATEGORY_COLOR
            entry = totals.setdefault(name, {"category": name, "color": color, "total": 0.0})
            entry["total"] += tx.value
        return sorted(totals.values(), key=lambda e: e["total"], reverse=True)

    def _totals(self, transactions: list[Transaction]) -> dict:
        income = sum(tx.value for tx in transactions if tx.type == "income")
        expense = sum(tx.value for tx in transactions if tx.type == "expense")
        return {"income": income, "expense": expense, "balance": income - expense}
