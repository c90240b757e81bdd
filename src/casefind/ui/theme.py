"""Theme, glyph mapping, QSS stylesheet, and display formatting utilities."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from html import escape

from casefind.models.kinds import IconKind
from casefind.services._datetime import parse_iso_datetime

# ── Color palette: light theme with blue accents ──

COLORS = {
    "primary": "#2563EB",
    "primary_light": "#EFF6FF",
    "bg": "#FFFFFF",
    "panel_bg": "#F9FAFB",
    "border": "#E5E7EB",
    "text": "#111827",
    "text_muted": "#6B7280",
    "highlight": "#FEF08A",
    "selected_bg": "#EFF6FF",
    "backdrop": "rgba(0, 0, 0, 0.10)",
}

# ── Glyphs: every IconKind has an entry ──

ICON_GLYPHS: dict[IconKind, str] = {
    IconKind.ALL: "✨",
    IconKind.CASE: "\U0001f4cb",
    IconKind.HELPER: "\U0001f465",
    IconKind.REPORT: "\U0001f4c4",
    IconKind.BILLING: "\U0001f4b6",
    IconKind.SERVICE: "\U0001f552",
    IconKind.CONTACT: "\U0001f464",
    IconKind.CREATE: "➕",
    IconKind.SETTINGS: "⚙",
    IconKind.PROFILE: "\U0001f9d1",
    IconKind.GENERIC: "#",
}


def icon_glyph(kind: IconKind) -> str:
    return ICON_GLYPHS[kind]


# ── Status badges: (label, background, foreground) per record type ──

_DEFAULT_BADGE = ("#F3F4F6", "#1F2937")

STATUS_BADGES: dict[str, dict[str, tuple[str, str, str]]] = {
    "case": {
        "open": ("Open", "#DBEAFE", "#1E40AF"),
        "offen": ("Open", "#DBEAFE", "#1E40AF"),
        "in_progress": ("In progress", "#FEF9C3", "#854D0E"),
        "in_bearbeitung": ("In progress", "#FEF9C3", "#854D0E"),
        "closed": ("Closed", "#DCFCE7", "#166534"),
        "abgeschlossen": ("Closed", "#DCFCE7", "#166534"),
        "rejected": ("Rejected", "#FEE2E2", "#991B1B"),
        "abgelehnt": ("Rejected", "#FEE2E2", "#991B1B"),
    },
    "report": {
        "draft": ("Draft", "#F3F4F6", "#1F2937"),
        "entwurf": ("Draft", "#F3F4F6", "#1F2937"),
        "final": ("Final", "#DBEAFE", "#1E40AF"),
        "submitted": ("Submitted", "#DCFCE7", "#166534"),
        "uebermittelt": ("Submitted", "#DCFCE7", "#166534"),
    },
}


def status_badge(result_type: str, status: str | None) -> tuple[str, str, str] | None:
    """Return ``(label, background, foreground)`` for a status, or None."""
    if not status:
        return None
    known = STATUS_BADGES.get(result_type, {}).get(status)
    if known is not None:
        return known
    return (status, *_DEFAULT_BADGE)


# ── Fonts ──

FONT_FAMILY = "-apple-system, 'SF Pro Text', 'Helvetica Neue', 'Segoe UI', Roboto, sans-serif"

# ── QSS Stylesheet ──


def build_stylesheet() -> str:
    """Build the application-wide QSS stylesheet."""
    c = COLORS
    return f"""
/* ── Global ── */
QWidget {{
    font-family: {FONT_FAMILY};
    font-size: 13px;
    color: {c["text"]};
    background-color: {c["bg"]};
}}

/* ── Main window ── */
QMainWindow {{
    background-color: {c["panel_bg"]};
}}

/* ── Palette frame ── */
QFrame#paletteFrame {{
    background-color: {c["bg"]};
    border: 1px solid {c["border"]};
    border-radius: 16px;
}}
QLineEdit#paletteInput {{
    border: none;
    border-bottom: 1px solid {c["border"]};
    padding: 14px 20px;
    font-size: 17px;
}}

/* ── List views ── */
QListView {{
    background-color: {c["bg"]};
    border: none;
    outline: none;
}}
QListView::item:selected {{
    background-color: transparent;
}}

/* ── Footer ── */
QLabel#paletteFooter {{
    background-color: {c["panel_bg"]};
    border-top: 1px solid {c["border"]};
    color: {c["text_muted"]};
    font-size: 11px;
    padding: 8px 20px;
}}
"""


# ── Format helpers ──


def format_relative_time(iso_str: str) -> str:
    """Format an ISO datetime as relative time (e.g. '2h ago', '3d ago')."""
    if not iso_str:
        return ""
    dt = parse_iso_datetime(iso_str)
    if dt is None:
        return iso_str[:19] if len(iso_str) >= 19 else iso_str

    seconds = int((datetime.now(tz=UTC) - dt).total_seconds())
    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    months = days // 30
    if months < 12:
        return f"{months}mo ago"
    return f"{days // 365}y ago"


_MARK_OPEN = f'<span style="background-color: {COLORS["highlight"]};">'


def highlight_html(text: str, query: str) -> str:
    """Escape ``text`` and tint case-insensitive matches of ``query`` for Qt rich text."""
    if not text:
        return ""
    needle = query.strip()
    if not needle:
        return escape(text)
    parts = re.split(f"({re.escape(needle)})", text, flags=re.IGNORECASE)
    rendered: list[str] = []
    for index, part in enumerate(parts):
        if index % 2:
            rendered.append(f"{_MARK_OPEN}{escape(part)}</span>")
        else:
            rendered.append(escape(part))
    return "".join(rendered)
