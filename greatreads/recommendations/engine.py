"""
Recommendation engine: scores a catalog against one reader and returns the
ranked, explained matches.

Usage flow
----------
1. score_book(preferences, book)
   -> BookScore  (raw score + every signal, in rule order)

2. generate_recommendations(reader, catalog)
   -> list[Recommendation]  (books with raw score > 30, best first)

Scoring rules
-------------
The rules in ``signals.SIGNAL_RULES`` are applied top-to-bottom. Their
contributions are summed as floats and rounded exactly once, at the end.
The inclusion test uses the unrounded sum; the stored score is the rounded
sum clamped to 100. Only the first three signals are kept, in rule order.

Results are sorted by score descending with a stable sort, so equal scores
keep catalog order. Identical inputs always produce identical output; pass
``now`` to pin ``created_at`` as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from greatreads.config import RecommendationConfig
from greatreads.models.book import Book
from greatreads.models.reader import Reader, ReaderPreferences
from greatreads.models.recommendation import Recommendation, Signal
from greatreads.recommendations.signals import SIGNAL_RULES, round_half_up
from greatreads.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

MAX_SCORE = 100


@dataclass(frozen=True)
class BookScore:
    """Raw scoring result for one book, before inclusion and truncation.

    Attributes:
        book:      The scored book.
        raw_score: Unrounded, unclamped sum of rule contributions.
        signals:   Every signal produced, in rule evaluation order.
    """

    book: Book
    raw_score: float
    signals: tuple[Signal, ...]

    @property
    def score(self) -> int:
        """Rounded score clamped into ``[0, 100]``."""
        return max(0, min(MAX_SCORE, round_half_up(self.raw_score)))


def score_book(
    preferences: ReaderPreferences,
    book: Book,
    config: Optional[RecommendationConfig] = None,
) -> BookScore:
    """Run every signal rule against ``book`` and accumulate the raw score.

    Args:
        preferences: The reader's discovery profile.
        book:        Catalog book to score.
        config:      Engine thresholds; defaults to ``RecommendationConfig()``.

    Returns:
        BookScore with the raw sum and all signals produced.
    """
    config = config or RecommendationConfig()

    raw_score = 0.0
    signals: list[Signal] = []
    for rule in SIGNAL_RULES:
        outcome = rule(preferences, book, config)
        if outcome is None:
            continue
        raw_score += outcome.contribution
        if outcome.signal is not None:
            signals.append(outcome.signal)

    return BookScore(book=book, raw_score=raw_score, signals=tuple(signals))


def generate_recommendations(
    reader: Reader,
    catalog: Sequence[Book],
    now: Optional[datetime] = None,
    config: Optional[RecommendationConfig] = None,
) -> list[Recommendation]:
    """Score ``catalog`` for ``reader`` and return ranked recommendations.

    A reader without preferences, or an empty catalog, yields an empty list.

    Args:
        reader:  Reader to recommend for.
        catalog: Books to consider, in catalog order.
        now:     Timestamp stamped on every recommendation. Defaults to the
                 current UTC time, taken once per call.
        config:  Engine thresholds; defaults to ``RecommendationConfig()``.

    Returns:
        Recommendations sorted by score descending (stable).
    """
    preferences = reader.preferences
    if preferences is None:
        logger.debug("Reader %s has no preferences; no recommendations.", reader.reader_id)
        return []

    config = config or RecommendationConfig()
    created_at = now or utcnow()

    recommendations: list[Recommendation] = []
    for book in catalog:
        scored = score_book(preferences, book, config)
        if scored.raw_score <= config.inclusion_threshold:
            continue
        recommendations.append(
            Recommendation(
                rec_id=f"rec-{book.book_id}-{reader.reader_id}",
                reader_id=reader.reader_id,
                book_id=book.book_id,
                score=scored.score,
                signals=scored.signals[: config.max_signals],
                created_at=created_at,
            )
        )

    logger.debug(
        "Scored %d book(s) for reader %s; %d recommended.",
        len(catalog), reader.reader_id, len(recommendations),
    )
    return sorted(recommendations, key=lambda rec: -rec.score)
