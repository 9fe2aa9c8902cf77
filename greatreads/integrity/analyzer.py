"""
Review integrity analyzer: detects spam and manipulation patterns in one
candidate review, using the review corpus for cross-review comparison.

Risk formula (additive, every rule evaluated)
---------------------------------------------
    repetition       : distinct/total tokens < 0.3            +30  (reported)
    extreme rating   : rating is exactly 1 or 5               +10  (silent)
      + minimal text : ... and content shorter than 100 chars +20  (reported)
    burst            : > 3 prior reviews by the same author
                       in the hour before the candidate       +40  (reported)
    short + glowing  : content < 50 chars and rating ≥ 4.5    +15  (reported)

Tier mapping
------------
    score ≥ 50      → high
    25 ≤ score < 50 → medium
    score < 25      → low

A low-tier verdict with no findings carries the single reason
"No integrity concerns detected". Medium and high verdicts always carry at
least one finding, because reaching them requires a reported rule.

The analyzer holds no state: re-running it against a growing corpus can only
add burst findings, never remove them.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from greatreads.config import IntegrityConfig
from greatreads.models.review import IntegrityVerdict, ReviewInput
from greatreads.taxonomy.integrity_taxonomy import (
    REASON_BURST,
    REASON_CLEAN,
    REASON_EXTREME_MINIMAL,
    REASON_REPETITIVE,
    REASON_SHORT_GLOWING,
    RiskTier,
)
from greatreads.utils.time_utils import seconds_between

logger = logging.getLogger(__name__)

REPETITION_PENALTY = 30
EXTREME_RATING_PENALTY = 10
MINIMAL_EXPLANATION_PENALTY = 20
BURST_PENALTY = 40
SHORT_GLOWING_PENALTY = 15

MINIMAL_EXPLANATION_CHARS = 100
SHORT_REVIEW_CHARS = 50
GLOWING_RATING = 4.5
EXTREME_RATINGS = frozenset({1.0, 5.0})

HIGH_RISK_SCORE = 50
MEDIUM_RISK_SCORE = 25


def risk_tier_for(risk_score: int) -> RiskTier:
    """Map an accumulated risk score to its tier.

    Rules (first match wins):
        1. HIGH   : score >= 50
        2. MEDIUM : score >= 25
        3. LOW    : everything else
    """
    if risk_score >= HIGH_RISK_SCORE:
        return RiskTier.HIGH
    if risk_score >= MEDIUM_RISK_SCORE:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def repetition_ratio(content: str) -> Optional[float]:
    """Distinct-to-total ratio of lower-cased whitespace tokens.

    Returns ``None`` for content with no tokens.
    """
    tokens = content.lower().split()
    if not tokens:
        return None
    return len(set(tokens)) / len(tokens)


def count_recent_prior_reviews(
    candidate: ReviewInput,
    corpus: Iterable[ReviewInput],
    window_seconds: int,
) -> int:
    """Count same-author reviews strictly before ``candidate`` within the window.

    A corpus entry qualifies when ``0 < candidate.created_at - prior.created_at
    < window_seconds``. Entries at the same instant (including the candidate
    itself, if already stored) and later entries never count.
    """
    count = 0
    for prior in corpus:
        if prior.author_id != candidate.author_id:
            continue
        delta = seconds_between(prior.created_at, candidate.created_at)
        if 0 < delta < window_seconds:
            count += 1
    return count


def analyze_review_integrity(
    candidate: ReviewInput,
    corpus: Iterable[ReviewInput],
    config: Optional[IntegrityConfig] = None,
) -> IntegrityVerdict:
    """Classify the manipulation risk of ``candidate``.

    Args:
        candidate: The review under analysis.
        corpus:    All known reviews by all readers (any ReviewInput-like
                   records). An empty corpus disables burst detection.
        config:    Analyzer thresholds; defaults to ``IntegrityConfig()``.

    Returns:
        IntegrityVerdict with tier, ordered reasons and the raw risk score.
    """
    config = config or IntegrityConfig()

    risk_score = 0
    reasons: list[str] = []
    content_length = len(candidate.content)

    # ── Repetition ────────────────────────────────────────────────────────────
    ratio = repetition_ratio(candidate.content)
    if ratio is not None and ratio < config.repetition_ratio:
        risk_score += REPETITION_PENALTY
        reasons.append(REASON_REPETITIVE)

    # ── Extreme rating ────────────────────────────────────────────────────────
    if candidate.rating in EXTREME_RATINGS:
        risk_score += EXTREME_RATING_PENALTY
        if content_length < MINIMAL_EXPLANATION_CHARS:
            risk_score += MINIMAL_EXPLANATION_PENALTY
            reasons.append(REASON_EXTREME_MINIMAL)

    # ── Burst ─────────────────────────────────────────────────────────────────
    recent = count_recent_prior_reviews(candidate, corpus, config.burst_window_seconds)
    if recent > config.burst_max_prior:
        risk_score += BURST_PENALTY
        reasons.append(REASON_BURST)

    # ── Short + glowing ───────────────────────────────────────────────────────
    if content_length < SHORT_REVIEW_CHARS and candidate.rating >= GLOWING_RATING:
        risk_score += SHORT_GLOWING_PENALTY
        reasons.append(REASON_SHORT_GLOWING)

    tier = risk_tier_for(risk_score)
    if tier == RiskTier.LOW and not reasons:
        reasons.append(REASON_CLEAN)

    logger.debug(
        "Integrity for author=%s: score=%d tier=%s recent_prior=%d",
        candidate.author_id, risk_score, tier, recent,
    )
    return IntegrityVerdict(risk_tier=tier, reasons=tuple(reasons), risk_score=risk_score)
