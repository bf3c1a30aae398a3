import math
import customtkinter as ctk
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from models.transaction import Transaction, TransactionFormData
from ui.components.date_picker import DatePickerWidget
from utils.date_helpers import today_str
from utils.errors import PersistenceError


class TransactionForm(ctk.CTkToplevel):
    """Add a transaction (optionally as an installment or fixed-income series)
    or edit a single stored one."""

    _last_date: str = today_str()  # reset to today on each app launch

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        user_id: str,
        initial_type: str = "expense",
        transaction: Transaction | None = None,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._user_id = user_id
        self._transaction = transaction
        self._date_format = date_format
        self.saved = False

        if transaction:
            initial_type = transaction.type

        self.title("Edit Transaction" if transaction else "Add Transaction")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._build_form(initial_type, transaction)

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row, textvariable=None):
        lbl = ctk.CTkLabel(self, text=text, textvariable=textvariable)
        lbl.grid(row=row, column=0, padx=(16, 8), pady=4, sticky="e")
        return lbl

    def _build_form(self, type_: str, tx: Transaction | None):
        r = 0

        # Type
        self._label("Type:", r)
        self._type_var = ctk.StringVar(value=type_)
        type_frame = ctk.CTkFrame(self, fg_color="transparent")
        type_frame.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        for t in ("income", "expense"):
            ctk.CTkRadioButton(
                type_frame, text=t.title(),
                variable=self._type_var, value=t,
                command=self._on_type_change,
            ).pack(side="left", padx=4)
        r += 1

        # Description
        self._label("Description:", r)
        self._desc_var = ctk.StringVar(value=tx.description if tx else "")
        ctk.CTkEntry(
            self, textvariable=self._desc_var, width=220,
            placeholder_text="e.g. Groceries",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Value; the label tells whether it is per installment / per month
        self._value_label_var = ctk.StringVar(value="Value:")
        self._label("", r, textvariable=self._value_label_var)
        self._value_var = ctk.StringVar(value=f"{tx.value:.2f}" if tx else "")
        ctk.CTkEntry(self, textvariable=self._value_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Date
        self._label("Date:", r)
        self._date_picker = DatePickerWidget(
            self,
            initial_date=tx.date if tx else TransactionForm._last_date,
            date_format=self._date_format,
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Category
        self._label("Category:", r)
        self._cats = self._cat_svc.get_all(self._user_id)
        self._cat_names = [c.name for c in self._cats]
        current_cat = ""
        if tx:
            current_cat = next((c.name for c in self._cats if c.id == tx.category_id), "")
        elif self._cat_names:
            current_cat = self._cat_names[0]
        self._cat_var = ctk.StringVar(value=current_cat)
        ctk.CTkComboBox(
            self, values=self._cat_names,
            variable=self._cat_var, width=220, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Series options (new transactions only; series are never edited)
        self._series_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._series_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=4, sticky="ew")
        self._series_frame.grid_columnconfigure(1, weight=1)
        self._series_flag_var = ctk.BooleanVar(value=False)
        self._series_count_var = ctk.StringVar()
        self._series_check = ctk.CTkCheckBox(
            self._series_frame, text="", variable=self._series_flag_var,
            command=self._on_series_toggle,
        )
        self._series_check.grid(row=0, column=0, columnspan=2, sticky="w")
        self._count_label = ctk.CTkLabel(self._series_frame, text="")
        self._count_entry = ctk.CTkEntry(
            self._series_frame, textvariable=self._series_count_var, width=80,
            placeholder_text="e.g. 12",
        )
        if tx:
            self._series_frame.grid_remove()
        r += 1

        # Error + buttons
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save Changes" if tx else "Add Transaction", width=130,
            command=self._on_save,
        ).pack(side="right")

        self._on_type_change()

    def _on_type_change(self):
        self._series_flag_var.set(False)
        if self._type_var.get() == "expense":
            self._series_check.configure(text="Installment purchase (one record per month)")
            self._count_label.configure(text="Installments:")
        else:
            self._series_check.configure(text="Fixed monthly income (repeats each month)")
            self._count_label.configure(text="Months:")
        self._on_series_toggle()

    def _on_series_toggle(self):
        if self._series_flag_var.get():
            self._count_label.grid(row=1, column=0, padx=(0, 8), pady=4, sticky="e")
            self._count_entry.grid(row=1, column=1, pady=4, sticky="w")
            per = "Installment value:" if self._type_var.get() == "expense" else "Monthly value:"
            self._value_label_var.set(per)
        else:
            self._count_label.grid_remove()
            self._count_entry.grid_remove()
            self._value_label_var.set("Value:")

    def _collect(self) -> TransactionFormData | None:
        try:
            value = float(self._value_var.get().replace(",", "."))
        except ValueError:
            self._error_var.set("Invalid value.")
            return None
        if not math.isfinite(value):
            self._error_var.set("Invalid value.")
            return None

        start = self._date_picker.get_date()
        if start is None:
            self._error_var.set("Invalid date.")
            return None

        cat = next((c for c in self._cats if c.name == self._cat_var.get()), None)
        if not cat:
            self._error_var.set("Please select a category.")
            return None

        type_ = self._type_var.get()
        count = None
        is_series = self._series_flag_var.get()
        if is_series:
            try:
                count = int(self._series_count_var.get())
            except ValueError:
                self._error_var.set("Enter how many months (minimum 2).")
                return None

        return TransactionFormData(
            description=self._desc_var.get(),
            value=round(value, 2),
            type=type_,
            category_id=cat.id,
            date=start,
            is_installment=is_series and type_ == "expense",
            installments=count if type_ == "expense" else None,
            is_fixed_income=is_series and type_ == "income",
            fixed_income_months=count if type_ == "income" else None,
        )

    def _on_save(self):
        form = self._collect()
        if form is None:
            return
        try:
            if self._transaction:
                self._tx_svc.update(self._user_id, self._transaction.id, form)
            else:
                self._tx_svc.add(self._user_id, form)
            TransactionForm._last_date = self._date_picker.get()
            self.saved = True
            self.destroy()
        except (ValueError, PersistenceError) as e:
            self._error_var.set(str(e))

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
