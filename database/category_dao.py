from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category
from utils.constants import DEFAULT_CATEGORY_COLOR


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db
        self._all_cache: dict[str, list[Category]] = {}

    def _invalidate_cache(self, user_id: str):
        self._all_cache.pop(user_id, None)

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            color=row["color"],
        )

    def get_all(self, user_id: str) -> list[Category]:
        if user_id not in self._all_cache:
            conn = self._db.get_connection()
            rows = conn.execute(
                "SELECT * FROM categories WHERE user_id = ? ORDER BY name",
                (user_id,),
            ).fetchall()
            self._all_cache[user_id] = [self._row_to_model(r) for r in rows]
        return list(self._all_cache[user_id])

    def get_by_id(self, user_id: str, category_id: int) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE user_id = ? AND id = ?",
            (user_id, category_id),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, user_id: str, name: str, color: str = DEFAULT_CATEGORY_COLOR) -> Category:
        return self.create_batch(user_id, [(name, color)])[0]

    def create_batch(self, user_id: str, items: list[tuple[str, str]]) -> list[Category]:
        """Insert (name, color) pairs atomically."""
        ids = []
        with self._db.transaction() as conn:
            for name, color in items:
                cursor = conn.execute(
                    "INSERT INTO categories(user_id, name, color) VALUES (?, ?, ?)",
                    (user_id, name, color),
                )
                ids.append(cursor.lastrowid)
        self._invalidate_cache(user_id)
        return [self.get_by_id(user_id, i) for i in ids]

    def update(self, user_id: str, category_id: int, name: str, color: str) -> Optional[Category]:
        with self._db.transaction() as conn:
            conn.execute(
                "UPDATE categories SET name=?, color=? WHERE user_id=? AND id=?",
                (name, color, user_id, category_id),
            )
        self._invalidate_cache(user_id)
        return self.get_by_id(user_id, category_id)

    def delete(self, user_id: str, category_id: int):
        with self._db.transaction() as conn:
            conn.execute(
                "DELETE FROM categories WHERE user_id = ? AND id = ?",
                (user_id, category_id),
            )
        self._invalidate_cache(user_id)
