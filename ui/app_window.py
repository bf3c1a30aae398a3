import customtkinter as ctk
from database.db_manager import DatabaseManager
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from services.settings_service import SettingsService
from services.events import TransactionEvent
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.reports_tab import ReportsTab
from ui.tabs.categories_tab import CategoriesTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_WIDTH, APP_HEIGHT
from utils.logging_setup import get_logger

logger = get_logger("ui")


_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"dashboard", "reports"},
    "category":    {"dashboard", "reports", "categories"},
    "full":        {"dashboard", "reports", "categories", "settings"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        db: DatabaseManager,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        settings_service: SettingsService,
        user_id: str,
        date_format: str = "DD/MM/YYYY",
        currency_symbol: str = "R$",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._db = db
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._settings_svc = settings_service
        self._user_id = user_id
        self._date_format = date_format
        self._symbol = currency_symbol

        self.title(self._settings_svc.get_app_settings().system_name)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_user_bar()
        self._build_tabs()

        self._unsubscribe = self._tx_svc.events.subscribe(self._on_transaction_event)

    # ── User bar ─────────────────────────────────────────────────────────────
    def _build_user_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(bar, text="User:", anchor="e").pack(side="left", padx=(12, 4), pady=8)
        ctk.CTkLabel(
            bar, text=self._user_id, font=ctk.CTkFont(weight="bold"),
        ).pack(side="left", padx=4)

        self._count_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._count_label.pack(side="right", padx=12)
        self._update_count_label()

    def _update_count_label(self):
        n = self._tx_svc.count(self._user_id)
        self._count_label.configure(text=f"{n} transaction{'s' if n != 1 else ''}")

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))

        for tab_name in ("Dashboard", "Reports", "Categories", "Settings"):
            self._tabview.add(tab_name)
            self._tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._dashboard_tab = DashboardTab(
            self._tabview.tab("Dashboard"),
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            report_service=self._report_svc,
            user_id=self._user_id,
            date_format=self._date_format,
            currency_symbol=self._symbol,
        )
        self._dashboard_tab.grid(row=0, column=0, sticky="nsew")

        self._reports_tab = ReportsTab(
            self._tabview.tab("Reports"),
            report_service=self._report_svc,
            user_id=self._user_id,
            currency_symbol=self._symbol,
        )
        self._reports_tab.grid(row=0, column=0, sticky="nsew")

        self._categories_tab = CategoriesTab(
            self._tabview.tab("Categories"),
            category_service=self._cat_svc,
            user_id=self._user_id,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._categories_tab.grid(row=0, column=0, sticky="nsew")

        self._settings_tab = SettingsTab(
            self._tabview.tab("Settings"),
            db=self._db,
            settings_service=self._settings_svc,
            notify_refresh=self.notify_tabs_refresh,
        )
        self._settings_tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def _on_transaction_event(self, event: TransactionEvent):
        if event.user_id != self._user_id:
            return
        logger.debug("Refreshing views after %s of %d transaction(s)",
                     event.kind, len(event.transaction_ids))
        self.notify_tabs_refresh("transaction")

    def notify_tabs_refresh(self, scope: str = "full"):
        tabs = _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"])
        if "dashboard"  in tabs: self._dashboard_tab.refresh()
        if "reports"    in tabs: self._reports_tab.refresh()
        if "categories" in tabs: self._categories_tab.refresh()
        if "settings"   in tabs: self._settings_tab.refresh()
        self._update_count_label()

    def destroy(self):
        self._unsubscribe()
        super().destroy()
