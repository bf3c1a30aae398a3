import warnings
from datetime import date

from database.transaction_dao import TransactionDAO
from models.series import INSTALLMENT, RECURRING_INCOME
from models.transaction import Transaction, TransactionDraft
from utils import series_tags
from utils.constants import MIN_SERIES_LENGTH
from utils.date_helpers import add_months, format_date
from utils.errors import ClassificationAmbiguity, ValidationError
from utils.logging_setup import get_logger

logger = get_logger("series")


class SeriesService:
    """Expands one purchase or income into monthly records, and finds them again.

    Series membership lives only in the description tag (see
    utils.series_tags), so finding "this and the following" records is a
    text range query followed by an integer comparison on the parsed
    position.
    """

    def __init__(self, tx_dao: TransactionDAO):
        self._tx_dao = tx_dao

    def generate_installments(
        self,
        base: str,
        amount: float,
        type_: str,
        category_id: int | None,
        start_date: date,
        count: int,
    ) -> list[TransactionDraft]:
        return self.generate(INSTALLMENT, base, amount, type_, category_id, start_date, count)

    def generate_recurring_income(
        self,
        base: str,
        amount: float,
        type_: str,
        category_id: int | None,
        start_date: date,
        count: int,
    ) -> list[TransactionDraft]:
        return self.generate(RECURRING_INCOME, base, amount, type_, category_id, start_date, count)

    def generate(
        self,
        kind: str,
        base: str,
        amount: float,
        type_: str,
        category_id: int | None,
        start_date: date,
        count: int,
    ) -> list[TransactionDraft]:
        """Return count drafts, record k dated k-1 months after start_date.

        Every record carries the full amount; an installment value is per
        installment, not a share of a total.
        """
        if count < MIN_SERIES_LENGTH:
            raise ValidationError(
                f"A series needs at least {MIN_SERIES_LENGTH} records.", field="count"
            )
        return [
            TransactionDraft(
                description=series_tags.tag(kind, base, k, count),
                value=amount,
                type=type_,
                category_id=category_id,
                date=format_date(add_months(start_date, k - 1)),
            )
            for k in range(1, count + 1)
        ]

    def resolve_future_deletion(self, user_id: str, target: Transaction) -> set[int]:
        """Ids of target and every later record of its series.

        Untagged descriptions resolve to the target alone. Series sharing a
        base description are not told apart: all of them lose their records
        at position >= target's, whatever their total.
        """
        info = series_tags.classify(target.description)
        if info is None:
            return {target.id}

        prefix = series_tags.series_prefix(info)
        candidates = self._tx_dao.query(
            user_id,
            description_from=prefix,
            description_before=series_tags.prefix_upper_bound(prefix),
            order_desc=False,
        )

        ids = {target.id}
        has_siblings = False
        for tx in candidates:
            other = series_tags.classify(tx.description)
            if other is None or other.kind != info.kind or other.base != info.base:
                continue
            if tx.id != target.id:
                has_siblings = True
            if other.position >= info.position:
                ids.add(tx.id)

        if not has_siblings:
            logger.warning(
                "No other record of series %r found; deleting %r alone",
                info.base, target.description,
            )
            warnings.warn(
                f"{target.description!r} looks like part of a series but no other "
                "record of it exists; deleting it alone.",
                ClassificationAmbiguity,
                stacklevel=2,
            )
        logger.debug(
            "Resolved %d record(s) from %r position %d onward",
            len(ids), info.base, info.position,
        )
        return ids
