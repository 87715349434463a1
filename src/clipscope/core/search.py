"""Query compilation and ranking logic (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from clipscope.core.models import Entry


@dataclass(frozen=True)
class Query:
    """Normalized query used for ranking."""

    phrase: str
    words: Tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.phrase

    @property
    def substring_bonus(self) -> int:
        # Must exceed the largest possible word count for this query.
        return len(self.words) + 1


@dataclass(frozen=True)
class SearchHit:
    """A single matching entry and its score."""

    entry: Entry
    score: int


def build_query(raw_query: str) -> Query:
    """Lowercase the query, collapse whitespace runs, and split it into words.

    Previews have their whitespace collapsed, so the phrase must be too or a
    pasted tab or double space could never match as a whole.
    """

    words = tuple(raw_query.lower().split())
    phrase = " ".join(words)
    return Query(phrase=phrase, words=words)


def score_entry(entry: Entry, query: Query) -> Optional[SearchHit]:
    """Score one entry, returning None when it does not match.

    Matching logic:
    - The full phrase as a contiguous substring earns the substring bonus.
    - Each query word found anywhere in the preview adds one point.
    - Either signal alone is enough to match.
    """

    text = entry.preview.lower()
    substring_hit = query.phrase in text
    word_hits = [word for word in query.words if word in text]

    if not substring_hit and not word_hits:
        return None

    score = len(word_hits)
    if substring_hit:
        score += query.substring_bonus
    return SearchHit(entry=entry, score=score)


def search_hits(entries: Iterable[Entry], query: Query) -> List[SearchHit]:
    """Return matching hits ordered by score, ties kept in input order."""

    hits = [hit for hit in (score_entry(entry, query) for entry in entries) if hit is not None]
    # sorted() is stable, so equal scores keep the store's newest-first order.
    return sorted(hits, key=lambda hit: hit.score, reverse=True)


def rank_entries(entries: Sequence[Entry], raw_query: str) -> List[Entry]:
    """Filter and rank entries for a raw query string.

    A blank query means no filter: the input is returned in original order.
    """

    query = build_query(raw_query)
    if query.is_empty:
        return list(entries)
    return [hit.entry for hit in search_hits(entries, query)]
