"""
Reader and reading-preference models.

``ReaderPreferences`` is the onboarding profile the recommendation engine
matches against. It is optional on ``Reader``: a reader who skipped
onboarding simply receives no recommendations.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from greatreads.models.book import dedupe_in_order
from greatreads.taxonomy.catalog_taxonomy import BookFormat, Genre, Mood, ReadingPace


class ReaderPreferences(BaseModel):
    """A reader's discovery profile.

    Attributes:
        genres: Preferred genres (no duplicates).
        moods: Preferred moods (no duplicates).
        formats: Formats the reader can consume.
        pace: Self-reported reading pace.
        time_budget: Reading minutes available per day.
        disliked_tropes: Free-text tropes the reader wants to avoid.
    """

    model_config = ConfigDict(frozen=True)

    genres: tuple[Genre, ...] = ()
    moods: tuple[Mood, ...] = ()
    formats: tuple[BookFormat, ...] = ()
    pace: ReadingPace = ReadingPace.MEDIUM
    time_budget: int = Field(default=30, ge=0)
    disliked_tropes: tuple[str, ...] = ()

    @field_validator("genres", "moods", "formats", "disliked_tropes")
    @classmethod
    def dedupe_preferences(cls, v: tuple) -> tuple:
        return dedupe_in_order(v)


class Reader(BaseModel):
    """A platform reader as seen by the discovery core.

    Attributes:
        reader_id: Stable reader identifier.
        name: Display name.
        preferences: Discovery profile, or ``None`` if onboarding was skipped.
    """

    model_config = ConfigDict(frozen=True)

    reader_id: str
    name: str = ""
    preferences: Optional[ReaderPreferences] = None
