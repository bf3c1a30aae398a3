import tkinter as tk
from datetime import date
from tkinter import ttk

import customtkinter as ctk
from tkcalendar import Calendar

from utils.date_helpers import format_date, format_display_date, parse_display_date, parse_date

_ERROR_BORDER = "#F44336"
_NORMAL_BORDER = ("gray65", "gray35")


def _calendar_colors() -> dict:
    bg, fg = ("#2b2b2b", "#ffffff") if ctk.get_appearance_mode() == "Dark" else ("#ffffff", "#000000")
    return dict(
        background=bg, foreground=fg,
        headersbackground=bg, headersforeground=fg,
        weekendbackground=bg, weekendforeground=fg,
        bordercolor=bg, selectbackground="#1f6aa5",
        othermonthforeground="gray60",
    )


class DatePickerWidget(ctk.CTkFrame):
    """Date entry for transaction forms.

    Typed text follows ``date_format``; ``get_date()`` gives a date (or None)
    and ``get()`` the stored YYYY-MM-DD form.
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        date_format: str = "DD/MM/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self._date_format = date_format
        self._popup: ctk.CTkToplevel | None = None
        self._var = tk.StringVar()

        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110)
        self._entry.grid(row=0, column=0, sticky="ew")
        for seq in ("<FocusOut>", "<Return>"):
            self._entry.bind(seq, self._normalize)
        ctk.CTkButton(self, text="📅", width=32, command=self._toggle_popup).grid(
            row=0, column=1, padx=(4, 0)
        )

        start = parse_date(initial_date) if initial_date else None
        if start:
            self._show(start)

    def get_date(self) -> date | None:
        return parse_display_date(self._var.get(), self._date_format)

    def get(self) -> str:
        d = self.get_date()
        return format_date(d) if d else ""

    def _show(self, d: date):
        self._var.set(format_display_date(format_date(d), self._date_format))
        self._entry.configure(border_color=_NORMAL_BORDER)

    def _normalize(self, _event=None):
        if not self._var.get().strip():
            self._entry.configure(border_color=_NORMAL_BORDER)
            return
        d = self.get_date()
        if d is None:
            self._entry.configure(border_color=_ERROR_BORDER)
        else:
            self._show(d)

    def _toggle_popup(self):
        if self._popup is not None and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        colors = _calendar_colors()
        ttk.Style(popup).configure(
            "Calendar.Treeview", background=colors["background"],
            foreground=colors["foreground"], fieldbackground=colors["background"],
        )
        shown = self.get_date() or date.today()
        cal = Calendar(
            popup, selectmode="day", date_pattern="yyyy-mm-dd",
            year=shown.year, month=shown.month, day=shown.day,
            **colors,
        )
        cal.pack(padx=4, pady=(4, 0))
        cal.bind("<<CalendarSelected>>", lambda _e: self._pick(parse_date(cal.get_date())))
        ctk.CTkButton(
            popup, text="Today", height=24, command=lambda: self._pick(date.today()),
        ).pack(fill="x", padx=4, pady=4)

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

    def _pick(self, d: date | None):
        if d is not None:
            self._show(d)
        self._close_popup()

    def _close_popup(self):
        if self._popup is not None:
            self._popup.destroy()
        self._popup = None
