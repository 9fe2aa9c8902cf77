"""
Catalog taxonomy for books and reader preferences.

Four vocabularies describe a book and what a reader wants from one:
  - ``Genre``       — the *what*: what kind of book is this?
  - ``Mood``        — the *feel*: how does reading it feel?
  - ``BookFormat``  — the *how*: in which editions can it be read?
  - ``ReadingPace`` — the reader's preferred reading speed.

``SignalType`` names the kinds of explanation a recommendation can carry.

Usage example::

    from greatreads.taxonomy.catalog_taxonomy import Genre, Mood

    genre = Genre.FANTASY
    mood  = Mood.DARK

This module has NO imports from any other ``greatreads`` package.
"""

from enum import StrEnum


class Genre(StrEnum):
    """Catalog genre slug."""

    FICTION = "fiction"
    NON_FICTION = "non-fiction"
    MYSTERY = "mystery"
    SCI_FI = "sci-fi"
    FANTASY = "fantasy"
    ROMANCE = "romance"
    THRILLER = "thriller"
    HISTORICAL = "historical"
    BIOGRAPHY = "biography"
    SELF_HELP = "self-help"
    POETRY = "poetry"
    HORROR = "horror"


class Mood(StrEnum):
    """Reading mood slug."""

    UPLIFTING = "uplifting"
    THOUGHT_PROVOKING = "thought-provoking"
    FAST_PACED = "fast-paced"
    SLOW_BURN = "slow-burn"
    EMOTIONAL = "emotional"
    LIGHTHEARTED = "lighthearted"
    DARK = "dark"
    ADVENTUROUS = "adventurous"


class BookFormat(StrEnum):
    """Edition format a book is available in."""

    EBOOK = "ebook"
    AUDIOBOOK = "audiobook"
    PDF = "pdf"
    PHYSICAL = "physical"


class ReadingPace(StrEnum):
    """Self-reported reading pace."""

    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"


class SignalType(StrEnum):
    """Kind of explanation attached to a recommendation."""

    TAG_MATCH = "tag-match"
    """Book shares at least one genre with the reader's preferences."""

    MOOD_MATCH = "mood-match"
    """Book shares at least one mood with the reader's preferences."""

    SIMILAR_BOOKS = "similar-books"
    """Book is highly rated by the community."""

    TRUSTED_REVIEWER = "trusted-reviewer"
    """Book has a large body of reviews behind its rating."""
