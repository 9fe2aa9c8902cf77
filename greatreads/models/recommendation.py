"""
Recommendation output models.

``Signal`` is one human-readable reason a book matches a reader. Signals are
created fresh on every scoring pass and are never persisted on their own.

``Recommendation`` couples a reader, a book, a 0–100 score and at most three
signals. Both models are frozen: once the engine returns a recommendation it
is never mutated, only replaced by a newer scoring pass.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from greatreads.taxonomy.catalog_taxonomy import SignalType
from greatreads.utils.time_utils import ensure_utc

MAX_SIGNALS = 3


class Signal(BaseModel):
    """Typed observation explaining part of a recommendation score.

    Attributes:
        signal_type: Which rule produced the signal.
        strength: Match strength in ``[0, 100]``.
        description: Sentence shown to the reader.
    """

    model_config = ConfigDict(frozen=True)

    signal_type: SignalType
    strength: int = Field(ge=0, le=100)
    description: str


class Recommendation(BaseModel):
    """A scored book suggestion for one reader.

    Attributes:
        rec_id: ``rec-{book_id}-{reader_id}``.
        reader_id: Reader the recommendation was produced for.
        book_id: Recommended book.
        score: Rounded score, clamped to ``[0, 100]``.
        signals: Up to three signals, in rule evaluation order.
        created_at: UTC instant of the scoring pass.
    """

    model_config = ConfigDict(frozen=True)

    rec_id: str
    reader_id: str
    book_id: str
    score: int = Field(ge=0, le=100)
    signals: tuple[Signal, ...] = ()
    created_at: datetime

    @field_validator("signals")
    @classmethod
    def validate_signal_cap(cls, v: tuple[Signal, ...]) -> tuple[Signal, ...]:
        if len(v) > MAX_SIGNALS:
            raise ValueError(f"signals must hold at most {MAX_SIGNALS} entries, got {len(v)}.")
        return v

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return ensure_utc(v)
