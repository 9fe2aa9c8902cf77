"""
Signal evaluators: one scorer per recommendation rule.

Each evaluator inspects a book against a reader's preferences and returns a
``RuleOutcome`` (score contribution + optional signal) or ``None`` when the
rule does not trigger. Evaluators are pure functions with no I/O.

Rules (evaluated in ``SIGNAL_RULES`` order)
--------------------------------------------
    genre match   : matched / len(book.genres) × 40   strength round(frac × 100)
    mood match    : matched / len(book.moods)  × 30   strength round(frac × 100)
    high rating   : average_rating ≥ 4.0  → +15       strength 75
    popularity    : review_count > 100    → +10       strength 70
    format match  : any shared format     → +5        no signal

The order is significant: the engine keeps only the first signals produced,
so the rules form an ordered tuple, never a set.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from greatreads.config import RecommendationConfig
from greatreads.models.book import Book
from greatreads.models.reader import ReaderPreferences
from greatreads.models.recommendation import Signal
from greatreads.taxonomy.catalog_taxonomy import SignalType

GENRE_WEIGHT = 40.0
MOOD_WEIGHT = 30.0
HIGH_RATING_BOOST = 15.0
POPULARITY_BOOST = 10.0
FORMAT_BOOST = 5.0

HIGH_RATING_STRENGTH = 75
POPULARITY_STRENGTH = 70


@dataclass(frozen=True)
class RuleOutcome:
    """Result of one triggered rule.

    Attributes:
        contribution: Raw (unrounded) points added to the book's score.
        signal:       Explanation to attach, or ``None`` for silent rules.
    """

    contribution: float
    signal: Optional[Signal] = None


SignalRule = Callable[[ReaderPreferences, Book, RecommendationConfig], Optional[RuleOutcome]]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (2.5 → 3)."""
    return math.floor(value + 0.5)


def format_rating(rating: float) -> str:
    """One-decimal rating text, halves upward (4.25 → "4.3")."""
    return str(Decimal(str(rating)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def evaluate_genre_match(
    preferences: ReaderPreferences,
    book: Book,
    config: RecommendationConfig,
) -> Optional[RuleOutcome]:
    matched = [g for g in book.genres if g in preferences.genres]
    if not matched:
        return None
    fraction = len(matched) / len(book.genres)
    return RuleOutcome(
        contribution=fraction * GENRE_WEIGHT,
        signal=Signal(
            signal_type=SignalType.TAG_MATCH,
            strength=round_half_up(fraction * 100),
            description=f"Matches your preferred genres: {', '.join(matched)}",
        ),
    )


def evaluate_mood_match(
    preferences: ReaderPreferences,
    book: Book,
    config: RecommendationConfig,
) -> Optional[RuleOutcome]:
    matched = [m for m in book.moods if m in preferences.moods]
    if not matched:
        return None
    fraction = len(matched) / len(book.moods)
    return RuleOutcome(
        contribution=fraction * MOOD_WEIGHT,
        signal=Signal(
            signal_type=SignalType.MOOD_MATCH,
            strength=round_half_up(fraction * 100),
            description=f"Matches your preferred moods: {', '.join(matched)}",
        ),
    )


def evaluate_high_rating(
    preferences: ReaderPreferences,
    book: Book,
    config: RecommendationConfig,
) -> Optional[RuleOutcome]:
    if book.average_rating < config.high_rating_threshold:
        return None
    return RuleOutcome(
        contribution=HIGH_RATING_BOOST,
        signal=Signal(
            signal_type=SignalType.SIMILAR_BOOKS,
            strength=HIGH_RATING_STRENGTH,
            description=f"Highly rated by readers ({format_rating(book.average_rating)}/5.0)",
        ),
    )


def evaluate_popularity(
    preferences: ReaderPreferences,
    book: Book,
    config: RecommendationConfig,
) -> Optional[RuleOutcome]:
    if book.review_count <= config.popular_review_count:
        return None
    return RuleOutcome(
        contribution=POPULARITY_BOOST,
        signal=Signal(
            signal_type=SignalType.TRUSTED_REVIEWER,
            strength=POPULARITY_STRENGTH,
            description=f"Well-reviewed by {book.review_count} readers",
        ),
    )


def evaluate_format_match(
    preferences: ReaderPreferences,
    book: Book,
    config: RecommendationConfig,
) -> Optional[RuleOutcome]:
    # Formats only nudge the score; they never explain a recommendation.
    if not any(f in preferences.formats for f in book.formats):
        return None
    return RuleOutcome(contribution=FORMAT_BOOST)


SIGNAL_RULES: tuple[SignalRule, ...] = (
    evaluate_genre_match,
    evaluate_mood_match,
    evaluate_high_rating,
    evaluate_popularity,
    evaluate_format_match,
)
