"""
Corpus-level integrity views: per-reader trust summaries, tier breakdowns,
and bulk re-evaluation of stored verdicts.

These helpers only read their inputs and return new values. Re-evaluation
returns fresh ``Review`` copies; persisting them is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from greatreads.config import IntegrityConfig
from greatreads.integrity.analyzer import analyze_review_integrity
from greatreads.integrity.trust import calculate_trust_score
from greatreads.models.review import Review
from greatreads.taxonomy.integrity_taxonomy import RiskTier

logger = logging.getLogger(__name__)

# Trust shown for a reader who has not written any reviews yet.
DEFAULT_READER_TRUST = 50.0


@dataclass(frozen=True)
class ReaderTrustSummary:
    """Trust dashboard figures for one reader.

    Attributes:
        reader_id:       Reader the summary describes.
        review_count:    Number of reviews the reader has written.
        average_trust:   Mean trust score over those reviews (50 when none).
        tier_counts:     Stored integrity tier -> review count.
        shadow_banned:   Reviews hidden by moderators.
    """

    reader_id: str
    review_count: int
    average_trust: float
    tier_counts: dict[RiskTier, int]
    shadow_banned: int


def integrity_breakdown(reviews: Sequence[Review]) -> dict[RiskTier, int]:
    """Count reviews by stored integrity tier.

    Every tier is present in the result. Reviews that were never analyzed
    are not counted.
    """
    counts = {tier: 0 for tier in RiskTier}
    for review in reviews:
        if review.integrity_risk is not None:
            counts[review.integrity_risk] += 1
    return counts


def summarize_reader_trust(reader_id: str, reviews: Sequence[Review]) -> ReaderTrustSummary:
    """Build the trust dashboard summary for ``reader_id``.

    Args:
        reader_id: Reader to summarise.
        reviews:   Review corpus; only the reader's own reviews are used.

    Returns:
        ReaderTrustSummary.
    """
    own = [r for r in reviews if r.author_id == reader_id]
    if own:
        average = sum(calculate_trust_score(r) for r in own) / len(own)
    else:
        average = DEFAULT_READER_TRUST

    return ReaderTrustSummary(
        reader_id=reader_id,
        review_count=len(own),
        average_trust=average,
        tier_counts=integrity_breakdown(own),
        shadow_banned=sum(1 for r in own if r.shadow_banned),
    )


def reevaluate_reviews(
    reviews: Sequence[Review],
    config: Optional[IntegrityConfig] = None,
) -> list[Review]:
    """Re-run integrity analysis for every review against the whole corpus.

    Each review is analyzed as a candidate with ``reviews`` as its corpus, so
    burst detection sees every other review by the same author.

    Returns:
        New Review copies carrying fresh verdicts, input order preserved.
    """
    updated = [
        review.with_verdict(analyze_review_integrity(review, reviews, config))
        for review in reviews
    ]
    changed = sum(
        1 for old, new in zip(reviews, updated) if old.integrity_risk != new.integrity_risk
    )
    logger.info("Re-evaluated %d review(s); %d tier change(s).", len(updated), changed)
    return updated
