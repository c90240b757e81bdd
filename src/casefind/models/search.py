"""Search models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from casefind.models.kinds import IconKind, icon_kind_for_type, parse_icon_kind


class RawCandidate(BaseModel):
    """A record as returned by the backend search endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: str = ""
    subtitle: str = ""
    type: str = ""
    href: str | None = None
    status: str | None = None
    icon: str = ""
    color: str = ""
    bg_color: str = Field(default="", validation_alias=AliasChoices("bg_color", "bgColor"))
    created_at: str | None = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt", "erstellt_am"),
    )
    priority: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("title", "subtitle", "type", "icon", "color", "bg_color", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def searchable_text(self) -> str:
        return f"{self.title} {self.subtitle}"


class RelevanceSignals(BaseModel):
    """Client-computed facts used to boost a candidate's score."""

    is_recent: bool = False
    is_important: bool = False
    matches_user_role: bool = True


class SearchResult(BaseModel):
    """A ranked, display-ready search hit."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    subtitle: str = ""
    type: str = ""
    href: str | None = None
    status: str | None = None
    icon: IconKind = IconKind.GENERIC
    color: str = ""
    bg_color: str = ""
    created_at: str | None = None
    relevance_score: int = 0
    signals: RelevanceSignals = Field(default_factory=RelevanceSignals)

    @field_validator("icon", mode="before")
    @classmethod
    def _parse_icon(cls, value: Any) -> IconKind:
        return parse_icon_kind(value)

    @classmethod
    def from_candidate(
        cls, candidate: RawCandidate, signals: RelevanceSignals, score: int
    ) -> SearchResult:
        icon = parse_icon_kind(candidate.icon)
        if icon is IconKind.GENERIC and candidate.type:
            icon = icon_kind_for_type(candidate.type)
        return cls(
            id=candidate.id,
            title=candidate.title,
            subtitle=candidate.subtitle,
            type=candidate.type,
            href=candidate.href,
            status=candidate.status,
            icon=icon,
            color=candidate.color,
            bg_color=candidate.bg_color,
            created_at=candidate.created_at,
            relevance_score=score,
            signals=signals,
        )


class SearchResults(BaseModel):
    """One page of ranked results plus the backend's total."""

    results: list[SearchResult] = Field(default_factory=list)
    total_count: int = 0
    query: str = ""
    category: str = "all"


class BackendResponse(BaseModel):
    """Payload of the backend search endpoint."""

    model_config = ConfigDict(extra="ignore")

    results: list[RawCandidate] = Field(default_factory=list)
    total_count: int = Field(default=0, validation_alias=AliasChoices("totalCount", "total_count"))

    @field_validator("results", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("total_count", mode="before")
    @classmethod
    def _none_to_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class RecentSearchEntry(BaseModel):
    """A past selection remembered by the recent-search cache."""

    id: int
    query: str
    result: SearchResult
    timestamp: str
