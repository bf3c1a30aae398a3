import customtkinter as ctk
from models.category import Category
from services.category_service import CategoryService
from ui.components.category_form import CategoryForm
from ui.components.dialogs import ConfirmDialog
from utils.errors import PersistenceError

_COLUMNS = 3


class CategoriesTab(ctk.CTkFrame):
    """Per-user categories shown as color-striped cards."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        user_id: str,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = category_service
        self._user_id = user_id
        self._notify_refresh = notify_refresh
        self._count_var = ctk.StringVar()
        self._error_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(
            bar, textvariable=self._count_var, font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(side="left", padx=12, pady=8)
        ctk.CTkButton(bar, text="+ New Category", command=self._open_form).pack(
            side="right", padx=8, pady=6
        )

        ctk.CTkLabel(
            self, textvariable=self._error_var, text_color="#F44336", anchor="w",
        ).grid(row=1, column=0, sticky="ew", padx=16)

        self._grid = ctk.CTkScrollableFrame(self)
        self._grid.grid(row=2, column=0, sticky="nsew", padx=8, pady=8)
        self._grid.grid_columnconfigure(tuple(range(_COLUMNS)), weight=1, uniform="card")

        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        for w in self._grid.winfo_children():
            w.destroy()

        categories = self._svc.get_all(self._user_id)
        self._count_var.set(f"Categories ({len(categories)})")
        if categories:
            for i, cat in enumerate(categories):
                self._card(cat).grid(
                    row=i // _COLUMNS, column=i % _COLUMNS, sticky="ew", padx=4, pady=4
                )
            return

        empty = ctk.CTkFrame(self._grid, fg_color="transparent")
        empty.grid(row=0, column=0, columnspan=_COLUMNS, pady=40)
        ctk.CTkLabel(empty, text="No categories yet.", text_color="gray60").pack()
        ctk.CTkButton(
            empty, text="Restore default categories", command=self._restore_defaults,
        ).pack(pady=(8, 0))

    def _card(self, cat: Category) -> ctk.CTkFrame:
        card = ctk.CTkFrame(self._grid, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid_columnconfigure(1, weight=1)

        ctk.CTkFrame(card, width=6, fg_color=cat.color, corner_radius=3).grid(
            row=0, column=0, rowspan=2, sticky="ns", padx=(6, 0), pady=6
        )
        ctk.CTkLabel(
            card, text=cat.name, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=1, sticky="w", padx=10, pady=(8, 0))
        ctk.CTkLabel(
            card, text=cat.color, anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=1, sticky="w", padx=10, pady=(0, 8))

        actions = ctk.CTkFrame(card, fg_color="transparent")
        actions.grid(row=0, column=2, rowspan=2, padx=(0, 8))
        ctk.CTkButton(
            actions, text="✎", width=28, height=26,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=lambda: self._open_form(cat),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            actions, text="✕", width=28, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._on_delete(cat),
        ).pack(side="left")
        return card

    def _open_form(self, cat: Category | None = None):
        form = CategoryForm(self.winfo_toplevel(), self._svc, self._user_id, category=cat)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _restore_defaults(self):
        self._error_var.set("")
        try:
            self._svc.ensure_defaults(self._user_id)
        except PersistenceError as e:
            self._error_var.set(f"Could not restore defaults: {e}")
            return
        self._notify_refresh("category")

    def _on_delete(self, cat: Category):
        confirmed = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Category",
            message=(
                f"Delete '{cat.name}'? Transactions in this category are kept "
                "and will show as an unknown category."
            ),
        ).result
        if not confirmed:
            return
        self._error_var.set("")
        try:
            self._svc.delete(self._user_id, cat.id)
        except PersistenceError as e:
            self._error_var.set(f"Could not delete: {e}")
            self._load()
            return
        self._notify_refresh("category")
