# themes.py

from dataclasses import dataclass
from typing import Tuple

from PyQt5.QtGui import QColor, QPalette


@dataclass
class Theme:
    name: str
    window_bg: str
    panel_bg: str
    text: str
    muted_text: str
    accent: str
    accent_soft: str
    border: str
    # (background, text, border) per seat state
    seat_free: Tuple[str, str, str]
    seat_taken: Tuple[str, str, str]
    seat_selected: Tuple[str, str, str] = ("#22c55e", "#ffffff", "#16a34a")


LIGHT = Theme(
    name="light",
    window_bg="#f3f4f6",
    panel_bg="#ffffff",
    text="#111827",
    muted_text="#6b7280",
    accent="#2563eb",
    accent_soft="#dbeafe",
    border="#e5e7eb",
    seat_free=("#f3f4f6", "#111827", "#d1d5db"),
    seat_taken=("#e5e7eb", "#9ca3af", "#d1d5db"),
)

DARK = Theme(
    name="dark",
    window_bg="#020617",
    panel_bg="#030712",
    text="#e5e7eb",
    muted_text="#9ca3af",
    accent="#38bdf8",
    accent_soft="#0f172a",
    border="#1f2937",
    seat_free=("#020617", "#e5e7eb", "#4b5563"),
    seat_taken=("#4b5563", "#9ca3af", "#374151"),
)

NIGHT = Theme(
    name="night",
    window_bg="#000000",
    panel_bg="#020617",
    text="#e5e7eb",
    muted_text="#9ca3af",
    accent="#f97316",
    accent_soft="#111827",
    border="#4b5563",
    seat_free=("#020617", "#e5e7eb", "#4b5563"),
    seat_taken=("#4b5563", "#9ca3af", "#374151"),
)

THEMES = {
    "light": LIGHT,
    "dark": DARK,
    "night": NIGHT,
}


def apply_theme_to_palette(theme: Theme, palette: QPalette) -> None:
    """Set basic palette colors for the given theme."""
    panel_color = QColor(theme.panel_bg)
    text_color = QColor(theme.text)

    palette.setColor(QPalette.Window, QColor(theme.window_bg))
    for role in (QPalette.Base, QPalette.AlternateBase, QPalette.Button):
        palette.setColor(role, panel_color)
    for role in (QPalette.Text, QPalette.WindowText, QPalette.ButtonText):
        palette.setColor(role, text_color)


def seat_style(theme: Theme, selected: bool, taken: bool) -> str:
    """Stylesheet for one seat button."""
    if taken:
        bg, text, border = theme.seat_taken
    elif selected:
        bg, text, border = theme.seat_selected
    else:
        bg, text, border = theme.seat_free

    return (
        f"QPushButton {{"
        f"background-color: {bg};"
        f"color: {text};"
        f"border-radius: 8px;"
        f"border: 1px solid {border};"
        f"font-size: 11px;"
        f"padding: 4px 0;"
        f"}}"
    )
