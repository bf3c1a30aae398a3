from datetime import date

import customtkinter as ctk
from models.transaction import Transaction
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.report_service import ReportService
from ui.components.dialogs import ConfirmDialog, DeleteSeriesDialog
from ui.components.transaction_form import TransactionForm
from utils.constants import TYPE_COLORS, UNKNOWN_CATEGORY_NAME
from utils.currency import format_currency, format_signed
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month, format_display_date
from utils.errors import PersistenceError
from utils.series_tags import is_series_tagged


_MAX_RENDERED_ROWS = 100
_RECENT_LIMIT = 20

# List view -> message shown when it is empty
_VIEWS = {
    "Month": "No transactions for this month.",
    "Year": "No transactions for this year.",
    "Today": "No transactions today.",
    "Recent": "No transactions yet.",
}


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        report_service: ReportService,
        user_id: str,
        date_format: str = "DD/MM/YYYY",
        currency_symbol: str = "R$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._report_svc = report_service
        self._user_id = user_id
        self._date_format = date_format
        self._symbol = currency_symbol
        self._month = current_month_str()
        self._month_var = ctk.StringVar(value=friendly_month(self._month))
        self._view_var = ctk.StringVar(value="Month")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_toolbar()
        self._build_summary_cards()
        self._build_error_line()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    # ── Toolbar ──────────────────────────────────────────────────────────────
    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkButton(bar, text="◀", width=28, command=self._prev_month).pack(side="left", padx=(8, 0), pady=6)
        ctk.CTkLabel(
            bar, textvariable=self._month_var,
            font=ctk.CTkFont(size=15, weight="bold"), width=160, anchor="center",
        ).pack(side="left", padx=8)
        ctk.CTkButton(bar, text="▶", width=28, command=self._next_month).pack(side="left")

        ctk.CTkSegmentedButton(
            bar, values=list(_VIEWS), variable=self._view_var,
            command=lambda _v: self._load(),
        ).pack(side="left", padx=(16, 0))

        ctk.CTkButton(
            bar, text="+ Add Transaction", width=140, command=self._open_add,
        ).pack(side="right", padx=8)

    def _prev_month(self):
        self._month = prev_month(self._month)
        self._load()

    def _next_month(self):
        self._month = next_month(self._month)
        self._load()

    # ── Summary cards ────────────────────────────────────────────────────────
    def _build_summary_cards(self):
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2), weight=1)

    def _make_card(self, col, label, value, color, subtitle=""):
        card = ctk.CTkFrame(self._card_frame, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(card, text=label, font=ctk.CTkFont(size=12), text_color="gray60").grid(
            row=0, column=0, pady=(12, 0), padx=16
        )
        ctk.CTkLabel(
            card, text=format_currency(value, self._symbol),
            font=ctk.CTkFont(size=20, weight="bold"), text_color=color,
        ).grid(row=1, column=0, pady=(4, 0 if subtitle else 12), padx=16)
        if subtitle:
            ctk.CTkLabel(card, text=subtitle, font=ctk.CTkFont(size=11), text_color="gray60").grid(
                row=2, column=0, pady=(0, 12), padx=16
            )

    def _build_error_line(self):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var, text_color="#F44336", anchor="w",
        ).grid(row=2, column=0, sticky="ew", padx=16)

    # ── Transaction list ─────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self, label_text="Transactions")
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        self._month_var.set(friendly_month(self._month))

        for w in self._card_frame.winfo_children():
            w.destroy()
        summary = self._report_svc.get_summary(self._user_id, self._month)
        balance = summary["balance"]
        self._make_card(0, "Income", summary["income"], TYPE_COLORS["income"])
        self._make_card(1, "Expenses", summary["expense"], TYPE_COLORS["expense"])
        self._make_card(
            2, "Balance", balance,
            "#2196F3" if balance >= 0 else "#FF9800",
            subtitle="Positive balance" if balance >= 0 else "Negative balance",
        )

        for w in self._scroll.winfo_children():
            w.destroy()
        view = self._view_var.get()
        rows = self._fetch_rows(view)
        if not rows:
            ctk.CTkLabel(
                self._scroll, text=_VIEWS[view], text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx, tx.category_name or UNKNOWN_CATEGORY_NAME)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} transactions.",
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _fetch_rows(self, view: str) -> list[Transaction]:
        if view == "Year":
            return self._tx_svc.get_for_year(self._user_id, int(self._month[:4]))
        if view == "Today":
            return self._tx_svc.get_for_day(self._user_id, date.today())
        if view == "Recent":
            return self._tx_svc.get_recent(self._user_id, limit=_RECENT_LIMIT)
        return self._tx_svc.get_for_month(self._user_id, self._month)

    def _add_row(self, idx: int, tx: Transaction, category_name: str):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)
        row.grid_columnconfigure(2, weight=1)

        ctk.CTkLabel(
            row, text=format_display_date(tx.date, self._date_format), width=85, anchor="w"
        ).grid(row=0, column=0, padx=(8, 4), pady=4)
        ctk.CTkLabel(row, text=category_name, width=130, anchor="w").grid(row=0, column=1, padx=4)
        ctk.CTkLabel(row, text=tx.description, anchor="w").grid(row=0, column=2, padx=4, sticky="ew")
        ctk.CTkLabel(
            row, text=format_signed(tx.value, tx.type, self._symbol),
            text_color=TYPE_COLORS.get(tx.type, "gray"), width=110, anchor="e",
        ).grid(row=0, column=3, padx=4)

        btns = ctk.CTkFrame(row, fg_color="transparent")
        btns.grid(row=0, column=4, padx=(4, 8))
        ctk.CTkButton(
            btns, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda t=tx: self._open_edit(t),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btns, text="Delete", width=60, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._on_delete(t),
        ).pack(side="left")

    # ── Actions ──────────────────────────────────────────────────────────────
    def _open_add(self):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc, self._user_id,
            date_format=self._date_format,
        )
        self.wait_window(form)

    def _open_edit(self, tx: Transaction):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc, self._user_id,
            transaction=tx, date_format=self._date_format,
        )
        self.wait_window(form)

    def _on_delete(self, tx: Transaction):
        if is_series_tagged(tx.description):
            delete_type = DeleteSeriesDialog(self.winfo_toplevel(), tx.description).result
        else:
            confirmed = ConfirmDialog(
                self.winfo_toplevel(),
                title="Delete Transaction",
                message=f"Delete '{tx.description}'? This cannot be undone.",
            ).result
            delete_type = "single" if confirmed else None
        if delete_type is None:
            return
        self._error_var.set("")
        try:
            self._tx_svc.delete(self._user_id, tx, delete_type)
        except PersistenceError as e:
            self._error_var.set(f"Could not delete: {e}")
            self._load()
