import customtkinter as ctk


class _ModalDialog(ctk.CTkToplevel):
    """Blocking toplevel centred on its master; subclasses set .result."""

    def __init__(self, master, title: str, message: str, **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = None
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        self._build_buttons()

        self.transient(master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _build_buttons(self):
        raise NotImplementedError

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_width(), self.winfo_height()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")

    def _close(self, result):
        self.result = result
        self.destroy()


class ConfirmDialog(_ModalDialog):
    """Yes/no for destructive actions. .result is True or False."""

    def __init__(self, master, title: str, message: str, confirm_text: str = "Delete", **kwargs):
        self._confirm_text = confirm_text
        super().__init__(master, title, message, **kwargs)
        if self.result is None:
            self.result = False

    def _build_buttons(self):
        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close(False),
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            btn_frame, text=self._confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._close(True),
        ).pack(side="left")


class DeleteSeriesDialog(_ModalDialog):
    """Delete one record of a series, or it and every later one.

    .result is 'future', 'single', or None when cancelled.
    """

    def __init__(self, master, description: str, **kwargs):
        super().__init__(
            master, "Delete Installment",
            f'"{description}" is part of a series. What would you like to delete?',
            **kwargs,
        )

    def _build_buttons(self):
        ctk.CTkButton(
            self, text="Delete This and Future Ones",
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._close("future"),
        ).grid(row=1, column=0, padx=20, pady=(0, 6), sticky="ew")

        ctk.CTkButton(
            self, text="Delete Only This One",
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close("single"),
        ).grid(row=2, column=0, padx=20, pady=(0, 6), sticky="ew")

        ctk.CTkButton(
            self, text="Cancel",
            fg_color="transparent",
            text_color=("gray10", "gray90"),
            command=lambda: self._close(None),
        ).grid(row=3, column=0, padx=20, pady=(0, 16), sticky="ew")
