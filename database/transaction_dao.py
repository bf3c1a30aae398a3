from typing import Optional
from database.db_manager import DatabaseManager
from models.transaction import Transaction, TransactionDraft


class TransactionDAO:
    """Per-user transaction store.

    Every method takes the owner id; no query ever crosses users. Batch
    writes run inside ``DatabaseManager.transaction()`` so a failure on any
    record leaves the table untouched and raises PersistenceError.
    """

    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        keys = row.keys()
        return Transaction(
            id=row["id"],
            user_id=row["user_id"],
            description=row["description"],
            value=row["value"],
            type=row["type"],
            category_id=row["category_id"],
            date=row["date"],
            category_name=row["category_name"] if "category_name" in keys else "",
            category_color=row["category_color"] if "category_color" in keys else "",
        )

    def _select(self) -> str:
        return """
            SELECT t.*,
                   COALESCE(c.name, '')  AS category_name,
                   COALESCE(c.color, '') AS category_color
            FROM transactions t
            LEFT JOIN categories c
                   ON t.category_id = c.id AND c.user_id = t.user_id
        """

    def get_by_id(self, user_id: str, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE t.user_id = ? AND t.id = ?", (user_id, tx_id)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_ids(self, user_id: str, tx_ids: list[int]) -> list[Transaction]:
        if not tx_ids:
            return []
        conn = self._db.get_connection()
        placeholders = ",".join("?" * len(tx_ids))
        rows = conn.execute(
            self._select() + f" WHERE t.user_id = ? AND t.id IN ({placeholders})",
            [user_id, *tx_ids],
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def query(
        self,
        user_id: str,
        date_from: str | None = None,
        date_to: str | None = None,
        description_from: str | None = None,
        description_before: str | None = None,
        order_desc: bool = True,
        limit: int | None = None,
    ) -> list[Transaction]:
        """Range query scoped to one user.

        date_from/date_to are inclusive YYYY-MM-DD bounds. description_from is
        inclusive and description_before exclusive; both compare with SQLite's
        binary collation, i.e. by code point.
        """
        conn = self._db.get_connection()
        sql = self._select() + " WHERE t.user_id = ?"
        params: list = [user_id]

        if date_from:
            sql += " AND t.date >= ?"
            params.append(date_from)
        if date_to:
            sql += " AND t.date <= ?"
            params.append(date_to)
        if description_from is not None:
            sql += " AND t.description >= ?"
            params.append(description_from)
        if description_before is not None:
            sql += " AND t.description < ?"
            params.append(description_before)

        direction = "DESC" if order_desc else "ASC"
        sql += f" ORDER BY t.date {direction}, t.id {direction}"
        if limit:
            sql += " LIMIT ?"
            params.append(limit)

        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def count(self, user_id: str) -> int:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM transactions WHERE user_id = ?", (user_id,)
        ).fetchone()
        return row["n"]

    def create(self, user_id: str, draft: TransactionDraft) -> Transaction:
        return self.create_batch(user_id, [draft])[0]

    def create_batch(
        self, user_id: str, drafts: list[TransactionDraft]
    ) -> list[Transaction]:
        """Insert all drafts atomically, in order. Returns the stored rows."""
        ids: list[int] = []
        with self._db.transaction() as conn:
            for d in drafts:
                cursor = conn.execute(
                    """INSERT INTO transactions
                       (user_id, description, value, type, category_id, date)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (user_id, d.description, d.value, d.type, d.category_id, d.date),
                )
                ids.append(cursor.lastrowid)
        by_id = {tx.id: tx for tx in self.get_by_ids(user_id, ids)}
        return [by_id[i] for i in ids]

    def update(self, user_id: str, tx_id: int, draft: TransactionDraft) -> Optional[Transaction]:
        with self._db.transaction() as conn:
            conn.execute(
                """UPDATE transactions
                   SET description=?, value=?, type=?, category_id=?, date=?
                   WHERE user_id=? AND id=?""",
                (draft.description, draft.value, draft.type, draft.category_id,
                 draft.date, user_id, tx_id),
            )
        return self.get_by_id(user_id, tx_id)

    def delete(self, user_id: str, tx_id: int) -> int:
        return self.delete_batch(user_id, [tx_id])

    def delete_batch(self, user_id: str, tx_ids: list[int]) -> int:
        """Delete all ids atomically. Returns the number of rows removed."""
        if not tx_ids:
            return 0
        removed = 0
        with self._db.transaction() as conn:
            for tx_id in tx_ids:
                cursor = conn.execute(
                    "DELETE FROM transactions WHERE user_id = ? AND id = ?",
                    (user_id, tx_id),
                )
                removed += cursor.rowcount
        return removed
