"""Date-picker window (tkinter) rendering a DayPicker and feeding it input events."""

from __future__ import annotations

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk

from calendar_logic import (
    DayRange,
    add_day_to_range,
    add_months,
    day_of_week,
    is_day_in_range,
    is_past_day,
    iso_week_numbers,
    month_grid,
    range_length,
)
from day_picker import DayPicker, MonthView
from events import FocusGained, FocusLost, NextMonth, PreviousMonth, decode_key
from holidays import COUNTRIES, holiday_modifiers, holiday_names, holidays_by_country
from locale_utils import weekday_headers
from modifiers import DayCell
from navigation import ConfigurationError
from settings import load_settings, picker_options, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
OUTSIDE_FG = "#AAAAAA"
DISABLED_FG = "#BBBBBB"
FOCUS_RING = "#333333"
WN_FG = "#888888"


class _ToolTip:
    """Lightweight shared tooltip for holiday names."""

    __slots__ = ("_root", "_tw")

    def __init__(self, root: tk.Tk) -> None:
        self._root = root
        self._tw: tk.Toplevel | None = None

    def show(self, widget: tk.Widget, text: str) -> None:
        self.hide()
        tw = tk.Toplevel(self._root)
        tw.wm_overrideredirect(True)
        tw.wm_attributes("-topmost", True)
        tk.Label(
            tw, text=text, bg="#FFFFE0", fg="black",
            relief="solid", borderwidth=1, padx=6, pady=3, justify="left",
        ).pack()
        x = widget.winfo_rootx() + widget.winfo_width() // 2
        y = widget.winfo_rooty() + widget.winfo_height() + 2
        tw.wm_geometry(f"+{x}+{y}")
        self._tw = tw

    def hide(self) -> None:
        if self._tw:
            self._tw.destroy()
            self._tw = None


class DatePickerWindow:
    """Multi-month date picker with keyboard traversal and range selection."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title("Date Picker")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)
        self._setup_fonts()

        self._settings = load_settings()
        self._enabled_holidays: set[str] = set(self._settings["holidays"])
        self._holiday_colors: dict[str, str] = dict(self._settings["holiday_colors"])
        self.selection = DayRange()

        # Filled by _rebuild
        self._day_widgets: dict[date, tk.Label] = {}
        self._refresh_pending = False
        self._rebuild_pending = False

        self.picker = self._make_picker(date.today())

        self._build_shell()
        self._tooltip = _ToolTip(self.root)
        self._rebuild()

        self.root.bind("<Escape>", self._on_escape)
        self.root.bind("<KeyPress>", self._on_container_key)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Picker wiring
    # ------------------------------------------------------------------
    def _make_picker(self, initial_month: date) -> DayPicker:
        try:
            options = picker_options(self._settings)
        except ConfigurationError as exc:
            logger.warning("Ignoring stored picker bounds: %s", exc)
            options = picker_options({**self._settings, "from_month": None, "to_month": None})

        modifiers = {
            "selected": lambda d: is_day_in_range(d, self.selection),
            "weekend": lambda d: day_of_week(d) in (0, 6),
        }
        if self._settings["disable_past_days"]:
            modifiers["disabled"] = is_past_day
        modifiers.update(holiday_modifiers(self._enabled_holidays))

        return DayPicker(
            initial_month,
            modifiers=modifiers,
            on_day_activate=self._on_day_activate,
            on_month_change=self._on_month_change,
            on_focus_change=self._on_focus_change,
            on_day_mouse_enter=self._on_day_enter,
            on_day_mouse_leave=self._on_day_leave,
            **options,
        )

    def _on_day_activate(self, day: date, modifiers: frozenset[str]) -> None:
        if "disabled" in modifiers:
            logger.info("Ignoring activation of disabled day %s", day)
            return
        self.selection = add_day_to_range(day, self.selection)
        self._schedule_refresh(rebuild=True)

    def _on_month_change(self, _month: date) -> None:
        self._schedule_refresh(rebuild=True)

    def _on_focus_change(self, _day: date | None) -> None:
        self._schedule_refresh()

    def _on_day_enter(self, day: date, modifiers: frozenset[str]) -> None:
        widget = self._day_widgets.get(day)
        if "holiday" in modifiers and widget is not None:
            lines = [f"{name} ({country})"
                     for name, country in holiday_names(day, self._enabled_holidays)]
            self._tooltip.show(widget, "\n".join(lines))

    def _on_day_leave(self, _day: date, _modifiers: frozenset[str]) -> None:
        self._tooltip.hide()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_footer = tkfont.Font(family=base, size=9)

    # ------------------------------------------------------------------
    # Build shell (once): nav bar + months placeholder + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(padx=6, pady=4)

        # Navigation row: ◀◀  ◀  Today  ▶  ▶▶
        nav = tk.Frame(self._outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        def nav_button(text: str, side: str, command) -> tk.Label:
            btn = tk.Label(nav, text=text, font=self.font_nav, bg=GRID_BG, cursor="hand2")
            btn.pack(side=side, padx=6)
            btn.bind("<Button-1>", lambda _e: command())
            return btn

        self._btn_prev_year = nav_button("◀◀", "left", lambda: self._navigate_year(-1))
        self._btn_prev = nav_button("◀", "left", lambda: self.picker.handle(PreviousMonth()))
        self._btn_next_year = nav_button("▶▶", "right", lambda: self._navigate_year(1))
        self._btn_next = nav_button("▶", "right", lambda: self.picker.handle(NextMonth()))

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT, cursor="hand2",
        )
        btn_today.pack(side="left", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self.go_today())

        self._months_frame = tk.Frame(self._outer, bg=GRID_BG)
        self._months_frame.pack()

        self._footer_label = tk.Label(
            self._outer, text=self._footer_text(), font=self.font_footer,
            bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _schedule_refresh(self, rebuild: bool = False) -> None:
        # Widgets may be destroyed by a rebuild, so never rebuild inside their handlers
        self._rebuild_pending = self._rebuild_pending or rebuild
        if not self._refresh_pending:
            self._refresh_pending = True
            self.root.after_idle(self._refresh)

    def _refresh(self) -> None:
        self._refresh_pending = False
        if self._rebuild_pending:
            self._rebuild_pending = False
            self._rebuild()
        focused = self.picker.focused_day()
        widget = self._day_widgets.get(focused) if focused else None
        if widget is not None and self.root.focus_get() is not widget:
            widget.focus_set()

    def _rebuild(self) -> None:
        for child in self._months_frame.winfo_children():
            child.destroy()
        self._day_widgets.clear()

        for i, view in enumerate(self.picker.visible_grids()):
            panel = self._build_panel(view)
            panel.grid(row=0, column=i, padx=6, pady=2, sticky="n")

        self._set_nav_visible(self._btn_prev, self.picker.is_month_navigable_backward())
        self._set_nav_visible(self._btn_next, self.picker.is_month_navigable_forward())
        can_change = self.picker.can_change_month
        self._set_nav_visible(self._btn_prev_year, can_change)
        self._set_nav_visible(self._btn_next_year, can_change)
        self._footer_label.configure(text=self._footer_text())

    @staticmethod
    def _set_nav_visible(btn: tk.Label, visible: bool) -> None:
        btn.configure(fg="black" if visible else GRID_BG, cursor="hand2" if visible else "")

    def _build_panel(self, view: MonthView) -> tk.Frame:
        picker = self.picker
        frame = tk.Frame(self._months_frame, bg=GRID_BG)
        title = picker.locale_utils.format_month_title(view.month, picker.locale)
        tk.Label(frame, text=title, font=self.font_header, bg=HEADER_BG, fg="#333333").grid(
            row=0, column=0, columnspan=8, sticky="we", pady=(0, 2),
        )
        # Week-number column
        tk.Label(frame, text="Wk", font=self.font_bold, bg=GRID_BG, fg=WN_FG,
                 width=3).grid(row=1, column=0)
        for col, (short, _long) in enumerate(weekday_headers(picker.locale_utils, picker.locale)):
            tk.Label(frame, text=short, font=self.font_bold, bg=GRID_BG, fg="#333333",
                     width=3).grid(row=1, column=col + 1)

        week_numbers = iso_week_numbers(month_grid(view.month, picker.first_day_of_week))
        for r, week in enumerate(view.weeks):
            tk.Label(frame, text=week_numbers[r], font=self.font_normal, bg=GRID_BG,
                     fg=WN_FG, width=3).grid(row=r + 2, column=0)
            for c, cell in enumerate(week):
                widget = self._build_cell(frame, cell)
                widget.grid(row=r + 2, column=c + 1)
        return frame

    def _build_cell(self, parent: tk.Frame, cell: DayCell) -> tk.Label:
        if not cell.interactive:
            return tk.Label(parent, text="", bg=GRID_BG, width=3)

        bg, fg = self._day_colors(cell)
        widget = tk.Label(
            parent, text=str(cell.day.day), bg=bg, fg=fg, width=3,
            font=self.font_bold if "today" in cell.modifiers else self.font_normal,
            takefocus=1 if cell.tab_index == 0 else 0,
            highlightthickness=1, highlightcolor=FOCUS_RING, highlightbackground=bg,
            cursor="hand2" if cell.focusable else "",
        )
        known = self._day_widgets.get(cell.day)
        if known is None or not cell.outside:
            self._day_widgets[cell.day] = widget

        if cell.focusable:
            widget.bind("<Button-1>", lambda _e, c=cell: self._on_click(c))
            widget.bind("<KeyPress>", lambda e, c=cell: self._on_day_key(e, c))
            widget.bind("<FocusIn>", lambda _e, c=cell: self.picker.handle(FocusGained(c.day)))
            widget.bind("<FocusOut>", lambda _e: self.picker.handle(FocusLost()))
        widget.bind("<Enter>", lambda _e, c=cell: self.picker.handle_day_hover(
            c.day, c.modifiers, True))
        widget.bind("<Leave>", lambda _e, c=cell: self.picker.handle_day_hover(
            c.day, c.modifiers, False))
        return widget

    def _day_colors(self, cell: DayCell) -> tuple[str, str]:
        mods = cell.modifiers
        if "disabled" in mods:
            return GRID_BG, DISABLED_FG
        if "selected" in mods:
            return SEL_BG, "black"
        if "today" in mods:
            return ACCENT, "white"
        if cell.outside:
            return GRID_BG, OUTSIDE_FG
        for code, _name in COUNTRIES:
            if f"holiday-{code.lower()}" in mods:
                return self._holiday_colors.get(code, "#888888"), "white"
        if "weekend" in mods:
            return GRID_BG, "#CC0000"
        return GRID_BG, "black"

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _on_click(self, cell: DayCell) -> None:
        self.picker.handle(FocusGained(cell.day))
        self.picker.handle_day_activation(cell.day, cell.modifiers)

    def _on_day_key(self, event: tk.Event, cell: DayCell) -> str | None:
        decoded = decode_key(event.keysym, on_day=True)
        if decoded is None:
            return None
        if self.picker.focused_day() is None:
            self.picker.handle(FocusGained(cell.day))
        self.picker.handle(decoded)
        return "break"

    def _on_container_key(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        decoded = decode_key(event.keysym, on_day=False)
        if decoded is not None:
            self.picker.handle(decoded)

    def _on_escape(self, _event: tk.Event) -> None:
        if self.selection.start is not None:
            self.selection = DayRange()
            self._schedule_refresh(rebuild=True)
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate_year(self, direction: int) -> None:
        if self.picker.can_change_month:
            self.picker.show_month(add_months(self.picker.current_month(), 12 * direction))

    def go_today(self) -> None:
        self.picker.show_month(date.today())

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        start, end = self.selection
        if start is None:
            return today_str
        if end is None or start == end:
            return f"Selected: {start.strftime('%d.%m.%Y')}     {today_str}"

        total_days = range_length(self.selection)
        full_weeks, rem_days = divmod(total_days, 7)
        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")
        range_str = f"{start.strftime('%d.%m')} → {end.strftime('%d.%m')}"
        return f"{range_str}:  {total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Months shown:", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        spin_months = tk.Spinbox(frame, from_=1, to=6, width=4, font=self.font_normal)
        spin_months.delete(0, "end")
        spin_months.insert(0, str(self._settings["number_of_months"]))
        spin_months.grid(row=0, column=1, padx=(8, 0), pady=4)

        outside_var = tk.BooleanVar(value=self._settings["enable_outside_days"])
        tk.Checkbutton(frame, text="Show days of adjacent months", variable=outside_var,
                       font=self.font_normal).grid(row=1, column=0, columnspan=2, sticky="w")
        past_var = tk.BooleanVar(value=self._settings["disable_past_days"])
        tk.Checkbutton(frame, text="Disable past days", variable=past_var,
                       font=self.font_normal).grid(row=2, column=0, columnspan=2, sticky="w")

        holiday_frame = tk.LabelFrame(frame, text="Holidays", font=self.font_bold, padx=8, pady=4)
        holiday_frame.grid(row=3, column=0, columnspan=2, sticky="we", pady=(8, 0))
        check_vars: dict[str, tk.BooleanVar] = {}
        for col_idx, (code, country_name) in enumerate(COUNTRIES):
            col_frame = tk.Frame(holiday_frame)
            col_frame.grid(row=0, column=col_idx, padx=8, pady=2, sticky="n")
            tk.Label(col_frame, text=country_name, font=self.font_bold).pack(anchor="w")
            for key, name in holidays_by_country(code):
                var = tk.BooleanVar(value=(key in self._enabled_holidays))
                check_vars[key] = var
                tk.Checkbutton(col_frame, text=name, variable=var,
                               font=self.font_normal, anchor="w").pack(fill="x")

        def on_ok() -> None:
            try:
                months = max(1, min(6, int(spin_months.get())))
            except ValueError:
                return
            settings = load_settings()
            settings["number_of_months"] = months
            settings["enable_outside_days"] = outside_var.get()
            settings["disable_past_days"] = past_var.get()
            settings["holidays"] = [k for k, v in check_vars.items() if v.get()]
            save_settings(settings)

            self._settings = settings
            self._enabled_holidays = set(settings["holidays"])
            self.picker = self._make_picker(self.picker.current_month())
            dlg.destroy()
            self._rebuild()

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=4, column=0, columnspan=2, pady=(8, 0))
        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(side="left", padx=4)
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(side="left", padx=4)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self._rebuild()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._tooltip.hide()
        self.root.withdraw()

    def _position_window(self) -> None:
        """Place the window in the bottom-right corner of the screen."""
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"+{x}+{y}")
