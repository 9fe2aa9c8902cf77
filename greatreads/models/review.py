"""
Review, trust and integrity models.

``ReviewInput`` carries the minimal fields the integrity analyzer needs and is
also the shape of every entry in a review corpus. ``Review`` is the full
stored record; it extends ``ReviewInput`` so any stored review can be passed
straight to the analyzer, and projects to ``TrustScoreInput`` for the trust
calculator.

``IntegrityVerdict`` is a derived value: it is recomputed whenever a review
is created or re-evaluated and replaced wholesale, never edited in place.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from greatreads.taxonomy.integrity_taxonomy import RiskTier
from greatreads.utils.time_utils import ensure_utc


class ReviewInput(BaseModel):
    """Minimal review fields used for integrity analysis.

    Attributes:
        author_id: Reader who wrote the review.
        content: Review body text.
        rating: Star rating in ``[0.0, 5.0]`` in 0.25 steps.
        created_at: UTC instant the review was submitted.
    """

    model_config = ConfigDict(frozen=True)

    author_id: str
    content: str = ""
    rating: float = Field(ge=0.0, le=5.0)
    created_at: datetime

    @field_validator("rating")
    @classmethod
    def validate_rating_step(cls, v: float) -> float:
        if not float(v * 4).is_integer():
            raise ValueError(f"rating must be a multiple of 0.25, got {v}.")
        return v

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class TrustScoreInput(BaseModel):
    """Review attributes the trust calculator reads.

    Attributes:
        content: Review body text.
        helpful_count: "Helpful" votes from other readers.
        report_count: Abuse reports filed against the review.
        verified_purchase: Whether the purchase was verified.
        finished_reading: Whether the reviewer finished the book.
    """

    model_config = ConfigDict(frozen=True)

    content: str = ""
    helpful_count: int = Field(default=0, ge=0)
    report_count: int = Field(default=0, ge=0)
    verified_purchase: bool = False
    finished_reading: bool = False


class IntegrityVerdict(BaseModel):
    """Outcome of one integrity analysis.

    Attributes:
        risk_tier: ``low``, ``medium`` or ``high``.
        reasons: Ordered, non-empty list of human-readable findings.
        risk_score: Accumulated rule penalty the tier was derived from.
    """

    model_config = ConfigDict(frozen=True)

    risk_tier: RiskTier
    reasons: tuple[str, ...]
    risk_score: int = Field(default=0, ge=0)

    @field_validator("reasons")
    @classmethod
    def validate_reasons_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("reasons must not be empty.")
        return v


class Review(ReviewInput):
    """A stored review with moderation state.

    Attributes:
        review_id: Stable review identifier.
        book_id: Reviewed book.
        title: Optional headline.
        spoiler: Whether the author flagged spoilers.
        helpful_count: "Helpful" votes.
        report_count: Abuse reports.
        verified_purchase: Whether the purchase was verified.
        finished_reading: Whether the reviewer finished the book.
        integrity_risk: Stored risk tier from the last analysis, if any.
        integrity_reasons: Stored reasons from the last analysis.
        shadow_banned: Hidden from public view by a moderator.
    """

    review_id: str
    book_id: str
    title: Optional[str] = None
    spoiler: bool = False
    helpful_count: int = Field(default=0, ge=0)
    report_count: int = Field(default=0, ge=0)
    verified_purchase: bool = False
    finished_reading: bool = False
    integrity_risk: Optional[RiskTier] = None
    integrity_reasons: tuple[str, ...] = ()
    shadow_banned: bool = False

    def to_trust_input(self) -> TrustScoreInput:
        """Project this review onto the trust calculator's input shape."""
        return TrustScoreInput(
            content=self.content,
            helpful_count=self.helpful_count,
            report_count=self.report_count,
            verified_purchase=self.verified_purchase,
            finished_reading=self.finished_reading,
        )

    def with_verdict(self, verdict: IntegrityVerdict) -> "Review":
        """Return a copy of this review carrying ``verdict``."""
        return self.model_copy(
            update={
                "integrity_risk": verdict.risk_tier,
                "integrity_reasons": verdict.reasons,
            }
        )
