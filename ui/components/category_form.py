import customtkinter as ctk
from tkinter import colorchooser, TclError
from services.category_service import CategoryService
from models.category import Category
from utils.constants import DEFAULT_CATEGORIES, DEFAULT_CATEGORY_COLOR
from utils.errors import PersistenceError

_PRESET_COLORS = [c["color"] for c in DEFAULT_CATEGORIES]


class CategoryForm(ctk.CTkToplevel):
    """Add or edit a category: a name and a #RRGGBB color."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        user_id: str,
        category: Category | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = category_service
        self._user_id = user_id
        self._category = category
        self.saved = False

        self.title("Edit Category" if category else "New Category")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        self._name_var = ctk.StringVar(value=category.name if category else "")
        self._color_var = ctk.StringVar(value=category.color if category else DEFAULT_CATEGORY_COLOR)
        self._error_var = ctk.StringVar()

        self._build_name_row(0)
        self._build_color_row(1)
        self._build_presets_row(2)

        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=3, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=4, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(
            btn_frame, text="Save Changes" if category else "Add Category", width=110,
            command=self._on_save,
        ).pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _build_name_row(self, r: int):
        ctk.CTkLabel(self, text="Name:").grid(row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e")
        entry = ctk.CTkEntry(
            self, textvariable=self._name_var, width=220, placeholder_text="e.g. Mercado",
        )
        entry.grid(row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew")
        entry.bind("<Return>", lambda _e: self._on_save())

    def _build_color_row(self, r: int):
        ctk.CTkLabel(self, text="Color:").grid(row=r, column=0, padx=(16, 8), pady=4, sticky="e")
        color_row = ctk.CTkFrame(self, fg_color="transparent")
        color_row.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")

        entry = ctk.CTkEntry(color_row, textvariable=self._color_var, width=100)
        entry.pack(side="left")
        entry.bind("<FocusOut>", lambda _e: self._sync_swatch())
        entry.bind("<Return>", lambda _e: self._sync_swatch())

        self._swatch = ctk.CTkLabel(
            color_row, text="", width=32, height=24, corner_radius=4,
            fg_color=self._color_var.get(),
        )
        self._swatch.pack(side="left", padx=(8, 0))

        ctk.CTkButton(
            color_row, text="Pick…", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._pick_color,
        ).pack(side="left", padx=(8, 0))

    def _build_presets_row(self, r: int):
        presets = ctk.CTkFrame(self, fg_color="transparent")
        presets.grid(row=r, column=1, padx=(0, 16), pady=(0, 8), sticky="w")
        for color in _PRESET_COLORS:
            ctk.CTkButton(
                presets, text="", width=22, height=22, corner_radius=11,
                fg_color=color, hover_color=color, border_width=1,
                border_color=("gray70", "gray30"),
                command=lambda c=color: self._set_color(c),
            ).pack(side="left", padx=2)

    def _set_color(self, color: str):
        self._color_var.set(color.upper())
        self._sync_swatch()

    def _pick_color(self):
        result = colorchooser.askcolor(
            color=self._color_var.get(), parent=self, title="Pick Category Color"
        )
        if result and result[1]:
            self._set_color(result[1])

    def _sync_swatch(self):
        color = self._color_var.get().strip()
        if color.startswith("#") and len(color) == 7:
            try:
                self._swatch.configure(fg_color=color)
            except TclError:
                self._error_var.set(f"'{color}' is not a color.")
                return
            self._error_var.set("")

    def _on_save(self):
        color = self._color_var.get().strip()
        if color and not color.startswith("#"):
            color = "#" + color
        try:
            if self._category:
                self._svc.update(self._user_id, self._category.id, self._name_var.get(), color)
            else:
                self._svc.create(self._user_id, self._name_var.get(), color)
        except (ValueError, PersistenceError) as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
