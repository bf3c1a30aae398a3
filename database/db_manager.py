import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from utils.constants import DB_FILE, DEFAULT_APP_SETTINGS
from utils.errors import PersistenceError
from utils.logging_setup import get_logger

logger = get_logger("database")


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed statements as one unit: all commit or none do.

        sqlite3 errors are rolled back and re-raised as PersistenceError.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Rolled back write: %s", exc)
            raise PersistenceError(str(exc)) from exc
        except BaseException:
            conn.rollback()
            raise

    def initialize(self):
        """Create schema and seed defaults."""
        with self.transaction() as conn:
            self._create_schema(conn)
            self._seed_defaults(conn)

    def _create_schema(self, conn: sqlite3.Connection):
        # category_id is not a foreign key: deleting a category
        # leaves its transactions pointing at a missing id.
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id       INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id  TEXT NOT NULL,
                name     TEXT NOT NULL CHECK(length(name) BETWEEN 1 AND 50),
                color    TEXT NOT NULL DEFAULT '#CCCCCC'
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id      TEXT NOT NULL,
                description  TEXT NOT NULL CHECK(length(description) >= 1),
                value        REAL NOT NULL CHECK(value > 0),
                type         TEXT NOT NULL CHECK(type IN ('income','expense')),
                category_id  INTEGER,
                date         TEXT NOT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_categories_user          ON categories(user_id, name);
            CREATE INDEX IF NOT EXISTS idx_transactions_user_date   ON transactions(user_id, date);
            CREATE INDEX IF NOT EXISTS idx_transactions_user_desc   ON transactions(user_id, description);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("appearance_mode", "system"),
            ("currency_symbol", "R$"),
            ("date_format", "DD/MM/YYYY"),
        ] + list(DEFAULT_APP_SETTINGS.items())
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        with self.transaction() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (and creates if needed) the DB file.

        db_folder: if provided, the DB file is stored in that directory instead of CWD.
        """
        path = os.path.join(db_folder, DB_FILE) if db_folder else DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        logger.info("Opened database %s", path)
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
