"""
Discovery helpers that sit beside the scoring engine.

genre_blend     : books at the intersection of two genres (optionally one mood).
explain_signals : display ordering of an already-truncated signal list.
"""

from __future__ import annotations

from typing import Optional, Sequence

from greatreads.models.book import Book
from greatreads.models.recommendation import Recommendation, Signal
from greatreads.taxonomy.catalog_taxonomy import Genre, Mood


def genre_blend(
    catalog: Sequence[Book],
    first: Genre,
    second: Genre,
    mood: Optional[Mood] = None,
) -> list[Book]:
    """Return books carrying both ``first`` and ``second`` genres.

    Args:
        catalog: Books to filter, in catalog order.
        first:   First required genre.
        second:  Second required genre.
        mood:    Optional mood the book must also carry.

    Returns:
        Matching books, catalog order preserved.
    """
    return [
        book
        for book in catalog
        if first in book.genres
        and second in book.genres
        and (mood is None or mood in book.moods)
    ]


def explain_signals(recommendation: Recommendation) -> list[Signal]:
    """Return the recommendation's signals strongest-first, for display.

    Sorting happens after the engine's three-signal cap; it never brings back
    a signal the engine dropped. Equal strengths keep rule order.
    """
    return sorted(recommendation.signals, key=lambda s: -s.strength)
