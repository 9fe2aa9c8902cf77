"""
Tests for greatreads/recommendations/engine.py.

What we test
------------
score_book():
  - Sums all rule contributions without intermediate rounding.
  - Signals are collected in rule order.
  - BookScore.score rounds half-up once.
generate_recommendations():
  - Reader without preferences -> [].
  - Empty catalog -> [].
  - Inclusion is strictly above 30 on the raw score (30 exactly is excluded).
  - 31.67 raw is included and stored as 32.
  - Only the first three signals survive, in rule order.
  - rec_id format, reader/book ids, created_at pinned by ``now``.
  - Sorted by score descending; ties keep catalog order.
  - Identical inputs produce identical output.
"""

from __future__ import annotations

import pytest

from greatreads.config import RecommendationConfig
from greatreads.models.book import Book
from greatreads.models.reader import Reader, ReaderPreferences
from greatreads.recommendations.engine import generate_recommendations, score_book
from greatreads.taxonomy.catalog_taxonomy import SignalType


def _book(book_id: str = "b1", **overrides) -> Book:
    defaults = dict(book_id=book_id, genres=["romance"])
    defaults.update(overrides)
    return Book(**defaults)


# ── score_book ────────────────────────────────────────────────────────────────

class TestScoreBook:
    def test_sample_book(self, sample_preferences, sample_book):
        scored = score_book(sample_preferences, sample_book)
        # 20 genre + 15 mood + 15 rating + 10 popularity + 5 format
        assert scored.raw_score == pytest.approx(65.0)
        assert scored.score == 65
        assert [s.signal_type for s in scored.signals] == [
            SignalType.TAG_MATCH,
            SignalType.MOOD_MATCH,
            SignalType.SIMILAR_BOOKS,
            SignalType.TRUSTED_REVIEWER,
        ]

    def test_no_match_scores_zero(self):
        scored = score_book(ReaderPreferences(genres=["poetry"]), _book())
        assert scored.raw_score == 0.0
        assert scored.signals == ()

    def test_half_rounds_up_once(self):
        prefs = ReaderPreferences(genres=["fantasy"], moods=["dark"])
        book = _book(
            genres=["fantasy"],
            moods=["dark", "uplifting", "emotional", "adventurous"],
            average_rating=4.5,
        )
        scored = score_book(prefs, book)
        # 40 + 7.5 + 15
        assert scored.raw_score == pytest.approx(62.5)
        assert scored.score == 63


# ── generate_recommendations ──────────────────────────────────────────────────

class TestGenerateRecommendations:
    def test_sample_book_recommendation(self, sample_reader, sample_book, fixed_now):
        recs = generate_recommendations(sample_reader, [sample_book], now=fixed_now)
        assert len(recs) == 1
        rec = recs[0]
        assert rec.rec_id == "rec-book-1-user-1"
        assert rec.reader_id == "user-1"
        assert rec.book_id == "book-1"
        assert rec.score == 65
        assert rec.created_at == fixed_now
        assert [(s.signal_type, s.strength) for s in rec.signals] == [
            (SignalType.TAG_MATCH, 50),
            (SignalType.MOOD_MATCH, 50),
            (SignalType.SIMILAR_BOOKS, 75),
        ]

    def test_no_preferences(self, sample_book):
        assert generate_recommendations(Reader(reader_id="u1"), [sample_book]) == []

    def test_empty_catalog(self, sample_reader):
        assert generate_recommendations(sample_reader, []) == []

    def test_mood_only_thirty_excluded(self, fixed_now):
        reader = Reader(reader_id="u1", preferences=ReaderPreferences(moods=["dark"]))
        book = _book(moods=["dark"])
        assert generate_recommendations(reader, [book], now=fixed_now) == []

    def test_boosts_only_thirty_excluded(self, fixed_now):
        reader = Reader(reader_id="u1", preferences=ReaderPreferences(formats=["ebook"]))
        book = _book(average_rating=4.8, review_count=500, formats=["ebook"])
        # 15 + 10 + 5 == 30, not strictly above the threshold
        assert generate_recommendations(reader, [book], now=fixed_now) == []

    def test_two_thirds_genre_plus_format_included(self, fixed_now):
        reader = Reader(
            reader_id="u1",
            preferences=ReaderPreferences(genres=["fantasy", "mystery"], formats=["ebook"]),
        )
        book = _book(genres=["fantasy", "mystery", "horror"], formats=["ebook"])
        recs = generate_recommendations(reader, [book], now=fixed_now)
        assert len(recs) == 1
        assert recs[0].score == 32
        assert [s.strength for s in recs[0].signals] == [67]

    def test_all_rules_score_100(self, fixed_now):
        reader = Reader(
            reader_id="u1",
            preferences=ReaderPreferences(genres=["fantasy"], moods=["dark"], formats=["ebook"]),
        )
        book = _book(
            genres=["fantasy"], moods=["dark"], formats=["ebook"],
            average_rating=4.5, review_count=101,
        )
        recs = generate_recommendations(reader, [book], now=fixed_now)
        assert recs[0].score == 100
        assert [s.signal_type for s in recs[0].signals] == [
            SignalType.TAG_MATCH, SignalType.MOOD_MATCH, SignalType.SIMILAR_BOOKS,
        ]

    def test_truncation_keeps_rule_order_not_strength(self, fixed_now):
        reader = Reader(reader_id="u1", preferences=ReaderPreferences(genres=["fantasy"]))
        book = _book(genres=["fantasy"], average_rating=4.0, review_count=200)
        recs = generate_recommendations(reader, [book], now=fixed_now)
        assert recs[0].score == 65
        assert [s.signal_type for s in recs[0].signals] == [
            SignalType.TAG_MATCH, SignalType.SIMILAR_BOOKS, SignalType.TRUSTED_REVIEWER,
        ]

    def test_sorted_descending(self, sample_reader, fixed_now):
        weak = _book("weak", genres=["fantasy", "romance"], formats=["ebook"], average_rating=4.0)
        strong = _book("strong", genres=["fantasy"], moods=["dark"])
        recs = generate_recommendations(sample_reader, [weak, strong], now=fixed_now)
        assert [r.book_id for r in recs] == ["strong", "weak"]
        assert recs[0].score >= recs[1].score

    def test_ties_keep_catalog_order(self, sample_reader, fixed_now):
        catalog = [_book(f"b{i}", genres=["fantasy"]) for i in range(5)]
        recs = generate_recommendations(sample_reader, catalog, now=fixed_now)
        assert [r.book_id for r in recs] == ["b0", "b1", "b2", "b3", "b4"]
        assert {r.score for r in recs} == {40}

    def test_deterministic(self, sample_reader, sample_book, fixed_now):
        catalog = [sample_book, _book("b2", genres=["mystery"], moods=["dark"])]
        first = generate_recommendations(sample_reader, catalog, now=fixed_now)
        second = generate_recommendations(sample_reader, catalog, now=fixed_now)
        assert first == second

    def test_single_timestamp_per_call(self, sample_reader):
        catalog = [_book(f"b{i}", genres=["fantasy"]) for i in range(3)]
        recs = generate_recommendations(sample_reader, catalog)
        assert len({r.created_at for r in recs}) == 1

    def test_config_threshold(self, sample_reader, sample_book, fixed_now):
        config = RecommendationConfig(inclusion_threshold=70.0)
        assert generate_recommendations(sample_reader, [sample_book], now=fixed_now, config=config) == []

    def test_config_max_signals(self, sample_reader, sample_book, fixed_now):
        config = RecommendationConfig(max_signals=1)
        recs = generate_recommendations(sample_reader, [sample_book], now=fixed_now, config=config)
        assert [s.signal_type for s in recs[0].signals] == [SignalType.TAG_MATCH]
