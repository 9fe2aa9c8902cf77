"""
Shared pytest fixtures for the GreatReads core test suite.

Provides:
  - ``fixed_now``: a pinned UTC instant for deterministic ``created_at``.
  - Sample domain objects (reader, book, review) used across test modules.
  - ``long_review_text``: varied prose longer than 100 characters that trips
    none of the integrity rules on its own.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from greatreads.models.book import Book
from greatreads.models.reader import Reader, ReaderPreferences
from greatreads.models.review import Review
from greatreads.taxonomy.catalog_taxonomy import BookFormat, Genre, Mood

LONG_REVIEW_TEXT = (
    "The pacing of the middle act drags a little, but the characters feel "
    "lived in and the ending lands with real emotional weight for anyone "
    "who enjoys slow reveals."
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def long_review_text() -> str:
    return LONG_REVIEW_TEXT


@pytest.fixture
def sample_preferences() -> ReaderPreferences:
    """Prefers fantasy + mystery, dark mood, ebooks."""
    return ReaderPreferences(
        genres=[Genre.FANTASY, Genre.MYSTERY],
        moods=[Mood.DARK],
        formats=[BookFormat.EBOOK],
    )


@pytest.fixture
def sample_reader(sample_preferences) -> Reader:
    return Reader(reader_id="user-1", name="Ada", preferences=sample_preferences)


@pytest.fixture
def sample_book() -> Book:
    """Half genre match, half mood match, highly rated, popular, ebook."""
    return Book(
        book_id="book-1",
        title="The Night Circus",
        genres=[Genre.FANTASY, Genre.ROMANCE],
        moods=[Mood.DARK, Mood.UPLIFTING],
        formats=[BookFormat.EBOOK, BookFormat.PHYSICAL],
        average_rating=4.2,
        review_count=150,
    )


@pytest.fixture
def sample_review(fixed_now) -> Review:
    return Review(
        review_id="review-1",
        book_id="book-1",
        author_id="user-1",
        content=LONG_REVIEW_TEXT,
        rating=4.0,
        created_at=fixed_now,
        helpful_count=3,
        verified_purchase=True,
    )
