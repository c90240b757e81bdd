"""Client-side relevance ranking for backend candidates.

Score = textual match component + additive signal boosts::

    textual   substring hit 100, else mean best word similarity x 100
              +50 when the text starts with the query
              +25 per query word found as a whole word
    boosts    recent +10, important +15, matches role +20

Every component is non-negative and additive, so a stronger textual match
or an extra true signal never lowers the score.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from rapidfuzz.distance import Levenshtein

from casefind.models.search import RawCandidate, RelevanceSignals, SearchResult
from casefind.services._datetime import parse_iso_datetime

SUBSTRING_MATCH_WEIGHT = 100
PREFIX_BONUS = 50
WHOLE_WORD_BONUS = 25
RECENT_BOOST = 10
IMPORTANT_BOOST = 15
ROLE_BOOST = 20
WORD_SIMILARITY_THRESHOLD = 0.3

DEFAULT_RECENT_DAYS = 7
IMPORTANT_STATUSES = frozenset({"open", "in_progress", "offen", "in_bearbeitung"})
HIGH_PRIORITY_TYPES = frozenset({"case"})


def word_similarity(query_word: str, word: str) -> float:
    """Similarity of two lowercase words in [0, 1].

    Exact, prefix and infix hits are tiered; anything else falls back to the
    Levenshtein ratio ``1 - distance / len(longer)``.
    """
    if query_word == word:
        return 1.0
    if word.startswith(query_word):
        return 0.9
    if query_word in word:
        return 0.7
    return Levenshtein.normalized_similarity(query_word, word)


def text_match(query: str, text: str) -> float:
    """Textual proximity of ``query`` to ``text`` in [0, 1]."""
    lowered_query = query.strip().lower()
    lowered_text = text.lower()
    if not lowered_query or not lowered_text:
        return 0.0
    if lowered_query in lowered_text:
        return 1.0

    query_words = lowered_query.split()
    words = lowered_text.split()
    total = 0.0
    for query_word in query_words:
        best = 0.0
        for word in words:
            similarity = word_similarity(query_word, word)
            if similarity > best and similarity > WORD_SIMILARITY_THRESHOLD:
                best = similarity
        total += best
    return total / len(query_words)


def score(query: str, text: str, signals: RelevanceSignals) -> int:
    """Combine textual match and signal boosts into one relevance score."""
    value = 0.0
    lowered_query = query.strip().lower()
    lowered_text = text.lower()

    if lowered_query:
        value += text_match(lowered_query, lowered_text) * SUBSTRING_MATCH_WEIGHT
        if lowered_text.startswith(lowered_query):
            value += PREFIX_BONUS
        for word in lowered_query.split():
            if re.search(rf"\b{re.escape(word)}\b", lowered_text):
                value += WHOLE_WORD_BONUS

    if signals.is_recent:
        value += RECENT_BOOST
    if signals.is_important:
        value += IMPORTANT_BOOST
    if signals.matches_user_role:
        value += ROLE_BOOST
    return round(value)


def sort_by_relevance(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Stable sort, highest score first; ties keep their backend order."""
    return sorted(results, key=lambda result: result.relevance_score, reverse=True)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RelevanceRanker:
    """Computes signals for raw candidates and returns them ranked."""

    recent_days: int = DEFAULT_RECENT_DAYS
    clock: Callable[[], datetime] = _utcnow

    def signals_for(self, candidate: RawCandidate) -> RelevanceSignals:
        return RelevanceSignals(
            is_recent=self._is_recent(candidate.created_at),
            is_important=_is_important(candidate),
            matches_user_role=True,
        )

    def rank(self, query: str, candidates: Iterable[RawCandidate]) -> list[SearchResult]:
        """Score every candidate against ``query`` and sort descending."""
        scored: list[SearchResult] = []
        for candidate in candidates:
            signals = self.signals_for(candidate)
            value = score(query, candidate.searchable_text, signals)
            scored.append(SearchResult.from_candidate(candidate, signals, value))
        return sort_by_relevance(scored)

    def _is_recent(self, created_at: str | None) -> bool:
        if not created_at:
            return False
        created = parse_iso_datetime(created_at)
        if created is None:
            return False
        return self.clock() - created <= timedelta(days=self.recent_days)


def _is_important(candidate: RawCandidate) -> bool:
    status = (candidate.status or "").strip().lower()
    priority = (candidate.priority or "").strip().lower()
    return (
        status in IMPORTANT_STATUSES
        or priority == "high"
        or candidate.type.strip().lower() in HIGH_PRIORITY_TYPES
    )
