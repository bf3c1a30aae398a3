import customtkinter as ctk
from tkinter import filedialog

from database.db_manager import DatabaseManager
from services.settings_service import SettingsService
from utils.app_config import get_db_folder, set_db_folder, get_user_id, set_user_id
from utils.constants import DB_FILE
from utils.date_helpers import DATE_FORMAT_OPTIONS
from utils.errors import PersistenceError


class SettingsTab(ctk.CTkFrame):
    """Settings tab: DB folder, local user, display preferences, system settings."""

    def __init__(
        self,
        master,
        db: DatabaseManager,
        settings_service: SettingsService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db
        self._settings_svc = settings_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_db_folder_section(scroll)
        self._build_user_section(scroll)
        self._build_display_section(scroll)
        self._build_system_section(scroll)

    def refresh(self):
        """Re-read settings from DB and update displayed values."""
        appearance = self._db.get_setting("appearance_mode", "system")
        date_fmt = self._db.get_setting("date_format", "DD/MM/YYYY")

        self._appearance_var.set(appearance.title())
        self._currency_var.set(self._db.get_setting("currency_symbol", "R$"))
        if date_fmt in DATE_FORMAT_OPTIONS:
            self._date_fmt_var.set(date_fmt)

        app = self._settings_svc.get_app_settings()
        self._system_name_var.set(app.system_name)
        self._allow_reg_var.set(app.allow_new_registrations)
        self._whatsapp_var.set(app.contact_whatsapp)

    # ── Section 1: DB folder ──────────────────────────────────────────────────

    def _build_db_folder_section(self, parent):
        section = self._make_section(parent, "Database Folder", row=0)

        ctk.CTkLabel(
            section,
            text=f"The database file ({DB_FILE}) is stored in this folder.",
            text_color="gray60",
            font=ctk.CTkFont(size=11),
            anchor="w",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=8, pady=(4, 6))

        self._db_folder_var = ctk.StringVar(value=get_db_folder() or "(default: app folder)")
        ctk.CTkEntry(
            section, textvariable=self._db_folder_var,
            state="readonly", width=340,
        ).grid(row=1, column=0, padx=(8, 4), pady=4, sticky="ew")
        section.grid_columnconfigure(0, weight=1)

        ctk.CTkButton(
            section, text="Browse…", width=90,
            command=self._browse_db_folder,
        ).grid(row=1, column=1, padx=4)

        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._reset_db_folder,
        ).grid(row=1, column=2, padx=(4, 8))

        self._db_restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800",
            font=ctk.CTkFont(size=11), anchor="w",
        )
        self._db_restart_label.grid(row=2, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_db_folder(self):
        path = filedialog.askdirectory(title="Choose DB folder")
        if path:
            self._write_db_folder(path, path)

    def _reset_db_folder(self):
        self._write_db_folder(None, "(default: app folder)")

    def _write_db_folder(self, path: str | None, shown: str):
        try:
            set_db_folder(path)
        except OSError as e:
            self._db_restart_label.configure(text=f"Could not save config: {e}")
            return
        self._db_folder_var.set(shown)
        self._db_restart_label.configure(text="Restart the app for the change to take effect.")

    # ── Section 2: Local user ─────────────────────────────────────────────────

    def _build_user_section(self, parent):
        section = self._make_section(parent, "User", row=1)

        ctk.CTkLabel(
            section,
            text="Transactions and categories are stored per user id.",
            text_color="gray60",
            font=ctk.CTkFont(size=11),
            anchor="w",
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=8, pady=(4, 6))

        self._user_id_var = ctk.StringVar(value=get_user_id())
        ctk.CTkEntry(section, textvariable=self._user_id_var, width=220).grid(
            row=1, column=0, padx=(8, 4), pady=4, sticky="w"
        )
        ctk.CTkButton(
            section, text="Save User", width=90, command=self._save_user_id,
        ).grid(row=1, column=1, padx=(4, 8), sticky="w")

        self._user_status_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800",
            font=ctk.CTkFont(size=11), anchor="w",
        )
        self._user_status_label.grid(row=2, column=0, columnspan=2, sticky="w", padx=8, pady=(0, 6))

    def _save_user_id(self):
        user_id = self._user_id_var.get().strip()
        if not user_id:
            self._user_status_label.configure(text="User id cannot be empty.")
            return
        try:
            set_user_id(user_id)
        except OSError as e:
            self._user_status_label.configure(text=f"Could not save config: {e}")
            return
        self._user_id_var.set(user_id)
        self._user_status_label.configure(text="Restart the app to switch to this user.")

    # ── Section 3: Display ────────────────────────────────────────────────────

    def _build_display_section(self, parent):
        section = self._make_section(parent, "Display", row=2)

        ctk.CTkLabel(section, text="Appearance:", anchor="e", width=140).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._appearance_var = ctk.StringVar(
            value=self._db.get_setting("appearance_mode", "system").title()
        )
        ctk.CTkComboBox(
            section, values=["System", "Light", "Dark"],
            variable=self._appearance_var, width=180, state="readonly",
        ).grid(row=0, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(section, text="Currency Symbol:", anchor="e", width=140).grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._currency_var = ctk.StringVar(value=self._db.get_setting("currency_symbol", "R$"))
        ctk.CTkEntry(section, textvariable=self._currency_var, width=60).grid(
            row=1, column=1, padx=4, pady=6, sticky="w"
        )

        ctk.CTkLabel(section, text="Date Format:", anchor="e", width=140).grid(
            row=2, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._date_fmt_var = ctk.StringVar(value=self._db.get_setting("date_format", "DD/MM/YYYY"))
        ctk.CTkComboBox(
            section, values=DATE_FORMAT_OPTIONS,
            variable=self._date_fmt_var, width=180, state="readonly",
        ).grid(row=2, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkLabel(
            section,
            text="Currency and date format changes take effect on next app restart.",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=3, column=0, columnspan=2, sticky="w", padx=8)

        ctk.CTkButton(
            section, text="Save Display", width=140, command=self._save_display,
        ).grid(row=4, column=0, columnspan=2, pady=(10, 8))

        self._display_status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._display_status_var,
            text_color="#4CAF50", font=ctk.CTkFont(size=11),
        ).grid(row=5, column=0, columnspan=2, pady=(0, 8))

    def _save_display(self):
        appearance_key = self._appearance_var.get().lower()
        currency = self._currency_var.get().strip() or "R$"
        try:
            self._db.set_setting("appearance_mode", appearance_key)
            self._db.set_setting("currency_symbol", currency)
            self._db.set_setting("date_format", self._date_fmt_var.get())
        except PersistenceError as e:
            self._display_status_var.set(f"Could not save: {e}")
            return
        ctk.set_appearance_mode(appearance_key)
        self._display_status_var.set("Settings saved.")

    # ── Section 4: System ─────────────────────────────────────────────────────

    def _build_system_section(self, parent):
        section = self._make_section(parent, "System", row=3)
        app = self._settings_svc.get_app_settings()

        ctk.CTkLabel(section, text="System Name:", anchor="e", width=140).grid(
            row=0, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._system_name_var = ctk.StringVar(value=app.system_name)
        ctk.CTkEntry(section, textvariable=self._system_name_var, width=220).grid(
            row=0, column=1, padx=4, pady=6, sticky="w"
        )

        ctk.CTkLabel(section, text="Contact WhatsApp:", anchor="e", width=140).grid(
            row=1, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        self._whatsapp_var = ctk.StringVar(value=app.contact_whatsapp)
        ctk.CTkEntry(section, textvariable=self._whatsapp_var, width=220).grid(
            row=1, column=1, padx=4, pady=6, sticky="w"
        )

        self._allow_reg_var = ctk.BooleanVar(value=app.allow_new_registrations)
        ctk.CTkCheckBox(
            section, text="Allow new registrations", variable=self._allow_reg_var,
        ).grid(row=2, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkButton(
            section, text="Save System", width=140, command=self._save_system,
        ).grid(row=3, column=0, columnspan=2, pady=(10, 8))

        self._system_status_var = ctk.StringVar()
        self._system_status = ctk.CTkLabel(
            section, textvariable=self._system_status_var,
            text_color="#4CAF50", font=ctk.CTkFont(size=11),
        )
        self._system_status.grid(row=4, column=0, columnspan=2, pady=(0, 8))

    def _save_system(self):
        try:
            app = self._settings_svc.update_app_settings(
                system_name=self._system_name_var.get(),
                allow_new_registrations=self._allow_reg_var.get(),
                contact_whatsapp=self._whatsapp_var.get(),
            )
        except (ValueError, PersistenceError) as e:
            self._system_status.configure(text_color="#F44336")
            self._system_status_var.set(str(e))
            return
        self._system_status.configure(text_color="#4CAF50")
        self._system_status_var.set("Settings saved.")
        self.winfo_toplevel().title(app.system_name)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        """Create a labelled card section and return its inner frame."""
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            outer, text=title,
            font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))

        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(0, weight=1)
        return inner
