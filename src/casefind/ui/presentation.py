"""Toolkit-free row presentation for unified list items."""

from __future__ import annotations

from dataclasses import dataclass

from casefind.models.actions import QuickAction
from casefind.models.categories import ALL_CATEGORY_ID
from casefind.models.search import RecentSearchEntry, SearchResult
from casefind.services.result_list import ListItem, SectionName
from casefind.ui.theme import (
    COLORS,
    format_relative_time,
    highlight_html,
    icon_glyph,
    status_badge,
)

SECTION_TITLES: dict[SectionName, str] = {
    SectionName.QUICK_ACTIONS: "Quick actions",
    SectionName.RECENT: "Recently searched",
    SectionName.RESULTS: "Search results",
}


@dataclass(frozen=True)
class RowPresentation:
    title: str
    subtitle: str
    glyph: str
    accent: str
    accent_bg: str
    badge: tuple[str, str, str] | None = None
    shortcut: str = ""
    title_html: str = ""
    subtitle_html: str = ""


def present_item(item: ListItem, query: str = "") -> RowPresentation:
    """Describe how one unified-list item is drawn.

    Live results carry rich-text variants of title and subtitle with the
    matches of ``query`` highlighted.
    """
    match item:
        case QuickAction():
            return RowPresentation(
                title=item.name,
                subtitle=item.description,
                glyph=icon_glyph(item.icon),
                accent=COLORS["primary"],
                accent_bg=COLORS["primary_light"],
                shortcut=item.shortcut,
            )
        case RecentSearchEntry():
            when = format_relative_time(item.timestamp)
            return RowPresentation(
                title=item.result.title,
                subtitle=f'"{item.query}" • {when}' if when else f'"{item.query}"',
                glyph=icon_glyph(item.result.icon),
                accent=item.result.color or COLORS["text_muted"],
                accent_bg=item.result.bg_color or COLORS["panel_bg"],
            )
        case SearchResult():
            return RowPresentation(
                title=item.title,
                subtitle=item.subtitle,
                glyph=icon_glyph(item.icon),
                accent=item.color or COLORS["text_muted"],
                accent_bg=item.bg_color or COLORS["panel_bg"],
                badge=status_badge(item.type, item.status),
                title_html=highlight_html(item.title, query) if query.strip() else "",
                subtitle_html=highlight_html(item.subtitle, query) if query.strip() else "",
            )
    msg = f"Unsupported list item: {type(item).__name__}"
    raise TypeError(msg)


def results_heading(query: str, total_count: int) -> str:
    if query.strip():
        return f"Search results · {total_count} found"
    return f"Latest entries · {total_count} entries"


def empty_state_message(query: str, category_id: str, loading: bool) -> str:
    """Text shown when the unified list is empty."""
    if loading:
        return "Searching..."
    if query.strip():
        return f'No results for "{query.strip()}". Try other terms or another category.'
    if category_id != ALL_CATEGORY_ID:
        return "No entries in this category yet."
    return ""


def footer_text(category_count: int) -> str:
    return f"↑↓ navigate   ↵ select   1-{category_count} category   esc close"
