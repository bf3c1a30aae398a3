import customtkinter as ctk
import tkinter as tk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from utils.constants import TYPE_COLORS
from utils.currency import format_currency
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month


class ReportsTab(ctk.CTkFrame):
    """Annual income/expense bars plus per-category pies for one month."""

    def __init__(
        self,
        master,
        report_service: ReportService,
        user_id: str,
        currency_symbol: str = "R$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._user_id = user_id
        self._symbol = currency_symbol
        self._month = current_month_str()
        self._month_var = ctk.StringVar(value=friendly_month(self._month))

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(bar, text="Month:").pack(side="left", padx=(12, 4), pady=8)
        ctk.CTkButton(bar, text="◀", width=28, command=self._prev_month).pack(side="left")
        ctk.CTkLabel(bar, textvariable=self._month_var, width=140, anchor="center").pack(side="left", padx=4)
        ctk.CTkButton(bar, text="▶", width=28, command=self._next_month).pack(side="left", padx=(0, 12))

    def _prev_month(self):
        self._month = prev_month(self._month)
        self._load()

    def _next_month(self):
        self._month = next_month(self._month)
        self._load()

    def _build_charts(self):
        # Annual bars across the top
        bar_outer = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=8)
        bar_outer.grid(row=1, column=0, sticky="nsew", padx=16, pady=(12, 6))
        self._bar_title = ctk.CTkLabel(
            bar_outer, text="", font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._bar_title.pack(pady=(10, 0))
        self._bar_fig = Figure(figsize=(8, 2.6), dpi=80, tight_layout=True)
        self._bar_ax = self._bar_fig.add_subplot(111)
        self._bar_mpl = FigureCanvasTkAgg(self._bar_fig, master=bar_outer)
        self._bar_mpl.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

        # Expense and income pies side by side
        pies = ctk.CTkFrame(self, fg_color="transparent")
        pies.grid(row=2, column=0, sticky="nsew", padx=16, pady=(6, 12))
        pies.grid_columnconfigure((0, 1), weight=1)
        pies.grid_rowconfigure(0, weight=1)
        self._pies = {}
        for col, (type_, title) in enumerate((("expense", "Expenses by Category"),
                                              ("income", "Income by Category"))):
            outer = ctk.CTkFrame(pies, fg_color=("gray90", "gray20"), corner_radius=8)
            outer.grid(row=0, column=col, sticky="nsew", padx=(0, 8) if col == 0 else (8, 0))
            ctk.CTkLabel(outer, text=title, font=ctk.CTkFont(size=13, weight="bold")).pack(pady=(10, 0))
            fig = Figure(figsize=(3, 2.6), dpi=80, tight_layout=True)
            ax = fig.add_subplot(111)
            canvas = FigureCanvasTkAgg(fig, master=outer)
            canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 4))
            legend = ctk.CTkFrame(outer, fg_color="transparent")
            legend.pack(fill="x", padx=8, pady=(0, 8))
            self._pies[type_] = (fig, ax, canvas, legend)

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _load(self):
        self._month_var.set(friendly_month(self._month))
        year = int(self._month[:4])
        self._bar_title.configure(text=f"Annual Summary {year}")
        self.after(50, lambda: self._draw_bar_chart(year))
        for type_ in self._pies:
            breakdown = self._report_svc.get_category_breakdown(self._user_id, self._month, type_)
            self.after(50, lambda t=type_, b=breakdown: self._draw_pie_chart(t, b))

    def _draw_bar_chart(self, year: int):
        ax = self._bar_ax
        ax.clear()
        self._style_ax(ax, self._bar_fig)

        data = self._report_svc.get_annual_summary(self._user_id, year)
        labels = [d["label"] for d in data]
        x = list(range(len(labels)))
        w = 0.27
        ax.bar([i - w for i in x], [d["income"] for d in data], w, color=TYPE_COLORS["income"], label="Income")
        ax.bar(x, [d["expense"] for d in data], w, color=TYPE_COLORS["expense"], label="Expenses")
        ax.bar([i + w for i in x], [d["balance"] for d in data], w, color="#2196F3", label="Balance")
        ax.axhline(0, color="gray", linewidth=0.6)
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.legend(fontsize=7, loc="upper left")
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        self._bar_mpl.draw_idle()

    def _draw_pie_chart(self, type_: str, breakdown: list[dict]):
        fig, ax, canvas, legend = self._pies[type_]
        ax.clear()
        self._style_ax(ax, fig)

        for w in legend.winfo_children():
            w.destroy()

        total = sum(d["total"] for d in breakdown)
        if not breakdown or total == 0:
            ax.text(0.5, 0.5, "No data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            ax.axis("off")
            canvas.draw_idle()
            return

        ax.pie(
            [d["total"] for d in breakdown],
            colors=[d["color"] for d in breakdown],
            startangle=90,
            wedgeprops={"linewidth": 1, "edgecolor": "white"},
        )
        ax.axis("equal")
        canvas.draw_idle()

        for item in breakdown[:8]:
            row = ctk.CTkFrame(legend, fg_color="transparent")
            row.pack(fill="x", pady=1)
            tk.Label(row, bg=item["color"], width=2).pack(side="left", padx=(0, 4))
            pct = item["total"] / total * 100
            ctk.CTkLabel(
                row,
                text=f"{item['category']}: {format_currency(item['total'], self._symbol)} ({pct:.0f}%)",
                anchor="w", font=ctk.CTkFont(size=11),
            ).pack(side="left")
