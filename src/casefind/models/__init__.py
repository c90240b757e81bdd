"""Pydantic models and static catalogues for casefind."""

from casefind.models.actions import QUICK_ACTIONS, QuickAction, quick_actions_for_role
from casefind.models.analytics import AnalyticsSnapshot, PopularSearch, SearchLogEntry, SearchStats
from casefind.models.categories import (
    ALL_CATEGORY_ID,
    CATEGORIES,
    Category,
    Role,
    categories_for_role,
    category_for_shortcut,
)
from casefind.models.kinds import IconKind, parse_icon_kind
from casefind.models.search import (
    BackendResponse,
    RawCandidate,
    RecentSearchEntry,
    RelevanceSignals,
    SearchResult,
    SearchResults,
)
from casefind.models.session import SearchSession

__all__ = [
    "AnalyticsSnapshot",
    "BackendResponse",
    "Category",
    "IconKind",
    "PopularSearch",
    "QuickAction",
    "RawCandidate",
    "RecentSearchEntry",
    "RelevanceSignals",
    "Role",
    "SearchLogEntry",
    "SearchResult",
    "SearchResults",
    "SearchSession",
    "SearchStats",
    "ALL_CATEGORY_ID",
    "CATEGORIES",
    "QUICK_ACTIONS",
    "categories_for_role",
    "category_for_shortcut",
    "parse_icon_kind",
    "quick_actions_for_role",
]
