import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO

from services.events import TransactionEvents
from services.series_service import SeriesService
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.settings_service import SettingsService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level, get_user_id
from utils.logging_setup import configure_logging, get_logger


def main():
    # ── Bootstrap: logging and DB folder from pre-DB config ───────────────────
    configure_logging(get_log_level())
    logger = get_logger("main")
    db_folder = get_db_folder()

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=db_folder)

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    events = TransactionEvents()
    series_svc = SeriesService(tx_dao)
    tx_svc = TransactionService(tx_dao, series_svc, events)
    category_svc = CategoryService(category_dao)
    report_svc = ReportService(tx_dao, category_dao)
    settings_svc = SettingsService(db)

    # ── User ─────────────────────────────────────────────────────────────────
    user_id = get_user_id()
    category_svc.ensure_defaults(user_id)
    logger.info("Starting session for user %s", user_id)

    # ── Appearance ───────────────────────────────────────────────────────────
    appearance = db.get_setting("appearance_mode", "system")
    date_format = db.get_setting("date_format", "DD/MM/YYYY")
    currency_symbol = db.get_setting("currency_symbol", "R$")
    ctk.set_appearance_mode(appearance)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        db=db,
        tx_service=tx_svc,
        category_service=category_svc,
        report_service=report_svc,
        settings_service=settings_svc,
        user_id=user_id,
        date_format=date_format,
        currency_symbol=currency_symbol,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
