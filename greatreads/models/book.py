"""
Book catalog model.

``Book`` is the read-only catalog snapshot the recommendation engine scores.
Aggregates (``average_rating``, ``review_count``) are maintained by the
external store; the core never recomputes them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from greatreads.taxonomy.catalog_taxonomy import BookFormat, Genre, Mood


def dedupe_in_order(values: tuple) -> tuple:
    """Drop repeated entries while keeping first-seen order."""
    return tuple(dict.fromkeys(values))


class Book(BaseModel):
    """A catalog book with its discovery attributes.

    Attributes:
        book_id: Stable catalog identifier.
        title: Display title.
        author_id: Identifier of the primary author, if known.
        genres: Genre slugs; never empty, no duplicates.
        moods: Mood slugs; may be empty.
        formats: Available edition formats.
        average_rating: Aggregate rating in ``[0.0, 5.0]``.
        review_count: Number of reviews behind ``average_rating``.
        pages: Page count, if known.
        published_year: Year of first publication, if known.
    """

    model_config = ConfigDict(frozen=True)

    book_id: str
    title: str = ""
    author_id: Optional[str] = None
    genres: tuple[Genre, ...]
    moods: tuple[Mood, ...] = ()
    formats: tuple[BookFormat, ...] = ()
    average_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    pages: Optional[int] = Field(default=None, ge=0)
    published_year: Optional[int] = None

    @field_validator("genres")
    @classmethod
    def validate_genres_not_empty(cls, v: tuple[Genre, ...]) -> tuple[Genre, ...]:
        if not v:
            raise ValueError("genres must contain at least one genre.")
        return dedupe_in_order(v)

    @field_validator("moods", "formats")
    @classmethod
    def dedupe_attributes(cls, v: tuple) -> tuple:
        return dedupe_in_order(v)
