import math
from datetime import date

from database.transaction_dao import TransactionDAO
from models.transaction import Transaction, TransactionDraft, TransactionFormData
from services.events import TransactionEvents, TransactionEvent, CREATED, UPDATED, DELETED
from services.series_service import SeriesService
from utils.constants import (
    TRANSACTION_TYPES, DELETE_TYPES, DESCRIPTION_MAX_LENGTH,
    MIN_SERIES_LENGTH, MAX_SERIES_LENGTH,
)
from utils.date_helpers import format_date, month_range, year_range
from utils.errors import ValidationError
from utils.logging_setup import get_logger

logger = get_logger("transactions")


class TransactionService:
    def __init__(
        self,
        tx_dao: TransactionDAO,
        series_service: SeriesService,
        events: TransactionEvents | None = None,
    ):
        self._dao = tx_dao
        self._series = series_service
        self._events = events or TransactionEvents()

    @property
    def events(self) -> TransactionEvents:
        return self._events

    # ── Queries ──────────────────────────────────────────────────────────────
    def get_by_id(self, user_id: str, tx_id: int) -> Transaction | None:
        return self._dao.get_by_id(user_id, tx_id)

    def get_for_month(self, user_id: str, month: str) -> list[Transaction]:
        """Transactions in a YYYY-MM month, newest first."""
        first, last = month_range(month)
        return self._dao.query(user_id, date_from=first, date_to=last)

    def get_for_year(self, user_id: str, year: int) -> list[Transaction]:
        first, last = year_range(year)
        return self._dao.query(user_id, date_from=first, date_to=last)

    def get_for_day(self, user_id: str, day: date) -> list[Transaction]:
        d = format_date(day)
        return self._dao.query(user_id, date_from=d, date_to=d)

    def get_recent(self, user_id: str, limit: int = 10) -> list[Transaction]:
        return self._dao.query(user_id, limit=limit)

    def count(self, user_id: str) -> int:
        return self._dao.count(user_id)

    # ── Writes ───────────────────────────────────────────────────────────────
    def add(self, user_id: str, form: TransactionFormData) -> list[Transaction]:
        """Create one transaction, or a whole monthly series in a single batch.

        An installment purchase takes precedence over fixed income when both
        flags are set.
        """
        self._validate(form)
        base = form.description.strip()
        if form.is_installment:
            drafts = self._series.generate_installments(
                base, form.value, form.type, form.category_id, form.date, form.installments
            )
        elif form.is_fixed_income:
            drafts = self._series.generate_recurring_income(
                base, form.value, form.type, form.category_id, form.date,
                form.fixed_income_months,
            )
        else:
            drafts = [self._to_draft(form)]

        created = self._dao.create_batch(user_id, drafts)
        logger.info("Created %d transaction(s) for %r", len(created), base)
        self._publish(CREATED, user_id, [tx.id for tx in created])
        return created

    def update(self, user_id: str, tx_id: int, form: TransactionFormData) -> Transaction:
        """Rewrite one stored record. Series siblings are never touched."""
        if form.is_installment or form.is_fixed_income:
            raise ValidationError("An existing transaction cannot become a series.")
        self._validate(form)
        updated = self._dao.update(user_id, tx_id, self._to_draft(form))
        if updated is None:
            raise ValidationError(f"Transaction {tx_id} does not exist.")
        self._publish(UPDATED, user_id, [tx_id])
        return updated

    def delete(self, user_id: str, transaction: Transaction, delete_type: str = "single") -> list[int]:
        """Delete the transaction alone ('single') or with every later record
        of its series ('future'). Returns the deleted ids.

        'single' leaves the remaining records' k/n tags as they are.
        """
        if delete_type not in DELETE_TYPES:
            raise ValidationError(f"Invalid delete type: {delete_type}", field="delete_type")

        if delete_type == "future":
            ids = sorted(self._series.resolve_future_deletion(user_id, transaction))
        else:
            ids = [transaction.id]

        self._dao.delete_batch(user_id, ids)
        logger.info(
            "Deleted %d transaction(s) starting at %r (%s)",
            len(ids), transaction.description, delete_type,
        )
        self._publish(DELETED, user_id, ids)
        return ids

    def _publish(self, kind: str, user_id: str, ids: list[int]):
        self._events.publish(TransactionEvent(kind, user_id, tuple(ids)))

    def _to_draft(self, form: TransactionFormData) -> TransactionDraft:
        return TransactionDraft(
            description=form.description.strip(),
            value=form.value,
            type=form.type,
            category_id=form.category_id,
            date=format_date(form.date),
        )

    def _validate(self, form: TransactionFormData):
        desc = (form.description or "").strip()
        if not desc:
            raise ValidationError("Description is required.", field="description")
        if len(desc) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError("Description is too long.", field="description")
        if form.value is None or not math.isfinite(form.value) or form.value <= 0:
            raise ValidationError("Value must be a positive number.", field="value")
        if form.type not in TRANSACTION_TYPES:
            raise ValidationError(f"Invalid type: {form.type}", field="type")
        if form.category_id is None:
            raise ValidationError("Category is required.", field="category_id")
        if not isinstance(form.date, date):
            raise ValidationError("Date is required.", field="date")
        if form.is_installment:
            self._validate_count(form.installments, "installments")
        elif form.is_fixed_income:
            self._validate_count(form.fixed_income_months, "fixed_income_months")

    def _validate_count(self, count: int | None, field: str):
        if count is None or count < MIN_SERIES_LENGTH:
            raise ValidationError(
                f"At least {MIN_SERIES_LENGTH} months are required.", field=field
            )
        if count > MAX_SERIES_LENGTH:
            raise ValidationError(
                f"At most {MAX_SERIES_LENGTH} months are allowed.", field=field
            )