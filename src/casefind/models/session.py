"""Palette session state."""

from __future__ import annotations

from dataclasses import dataclass, field

from casefind.models.categories import ALL_CATEGORY_ID
from casefind.models.search import SearchResult


@dataclass
class SearchSession:
    """Mutable state of one palette session, owned by the interaction layer."""

    is_open: bool = False
    query: str = ""
    active_category: str = ALL_CATEGORY_ID
    selected_index: int = 0
    loading: bool = False
    total_count: int = 0
    results: list[SearchResult] = field(default_factory=list)

    @property
    def browsing_home(self) -> bool:
        """True when the palette shows quick actions and recent searches."""
        return not self.query and self.active_category == ALL_CATEGORY_ID

    def clear_results(self) -> None:
        self.results = []
        self.total_count = 0

    def reset(self) -> None:
        """Return to defaults, keeping the active category for the next open."""
        self.is_open = False
        self.query = ""
        self.selected_index = 0
        self.loading = False
        self.clear_results()
