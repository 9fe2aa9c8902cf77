"""
Trust score calculator: a display-only 0–100 credibility number per review.

Score formula
-------------
    score = 50
          + length bonus     (>500 chars: +15, >200: +10, <50: −10)
          + min(helpful × 2, 20)
          + 10 if verified purchase
          + 10 if finished reading
          − reports × 5
    clamped to [0, 100]

Exactly one length bucket applies. The score is independent of review
history and of the integrity risk tier.
"""

from __future__ import annotations

from greatreads.models.review import TrustScoreInput

BASE_TRUST = 50
MAX_HELPFUL_BONUS = 20


def calculate_trust_score(review: TrustScoreInput) -> int:
    """Return the trust score for one review.

    Accepts a ``TrustScoreInput`` or anything exposing the same attributes,
    such as a stored ``Review``.

    Returns:
        Integer in ``[0, 100]``.
    """
    score = BASE_TRUST

    length = len(review.content)
    if length > 500:
        score += 15
    elif length > 200:
        score += 10
    elif length < 50:
        score -= 10

    score += min(review.helpful_count * 2, MAX_HELPFUL_BONUS)

    if review.verified_purchase:
        score += 10
    if review.finished_reading:
        score += 10

    score -= review.report_count * 5

    return _clamp(score, 0, 100)


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))
