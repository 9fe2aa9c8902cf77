"""
Tests for greatreads/integrity/analyzer.py.

What we test
------------
risk_tier_for():
  - Boundaries at 24/25 and 49/50.
repetition_ratio():
  - Case-insensitive distinct/total; None for empty or whitespace content.
count_recent_prior_reviews():
  - Same author only, strictly earlier, strictly inside the window.
analyze_review_integrity():
  - Clean long review -> low with the synthetic clean reason.
  - Short glowing 5-star -> medium (45) with two reasons.
  - Extreme rating with long text adds a silent 10.
  - Repetition fires below a 0.3 ratio.
  - Burst: 3 prior reviews in the hour do not trigger, 4 do.
  - Burst + extreme rating -> high (50).
  - Low tier may carry a real finding instead of the clean reason.
  - Empty corpus skips burst; the corpus may be a one-shot iterator.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from greatreads.config import IntegrityConfig
from greatreads.integrity.analyzer import (
    analyze_review_integrity,
    count_recent_prior_reviews,
    repetition_ratio,
    risk_tier_for,
)
from greatreads.models.review import ReviewInput
from greatreads.taxonomy.integrity_taxonomy import (
    REASON_BURST,
    REASON_CLEAN,
    REASON_EXTREME_MINIMAL,
    REASON_REPETITIVE,
    REASON_SHORT_GLOWING,
    RiskTier,
)


def _review(created_at, author_id: str = "a", content: str = "", rating: float = 4.0) -> ReviewInput:
    return ReviewInput(author_id=author_id, content=content, rating=rating, created_at=created_at)


def _priors(now, minutes: list[int], author_id: str = "a") -> list[ReviewInput]:
    return [_review(now - timedelta(minutes=m), author_id) for m in minutes]


# ── Helpers ───────────────────────────────────────────────────────────────────

class TestRiskTierFor:
    @pytest.mark.parametrize("score,tier", [
        (0, RiskTier.LOW),
        (24, RiskTier.LOW),
        (25, RiskTier.MEDIUM),
        (49, RiskTier.MEDIUM),
        (50, RiskTier.HIGH),
        (115, RiskTier.HIGH),
    ])
    def test_boundaries(self, score, tier):
        assert risk_tier_for(score) == tier


class TestRepetitionRatio:
    def test_case_insensitive(self):
        assert repetition_ratio("Great great GREAT book") == pytest.approx(0.5)

    def test_empty(self):
        assert repetition_ratio("") is None

    def test_whitespace_only(self):
        assert repetition_ratio("   \n\t ") is None


class TestCountRecentPriorReviews:
    def test_counts_window(self, fixed_now):
        corpus = _priors(fixed_now, [10, 20, 59])
        assert count_recent_prior_reviews(_review(fixed_now), corpus, 3600) == 3

    def test_exactly_one_hour_excluded(self, fixed_now):
        corpus = _priors(fixed_now, [60])
        assert count_recent_prior_reviews(_review(fixed_now), corpus, 3600) == 0

    def test_same_instant_excluded(self, fixed_now):
        candidate = _review(fixed_now)
        assert count_recent_prior_reviews(candidate, [candidate], 3600) == 0

    def test_later_reviews_excluded(self, fixed_now):
        corpus = [_review(fixed_now + timedelta(minutes=5))]
        assert count_recent_prior_reviews(_review(fixed_now), corpus, 3600) == 0

    def test_other_authors_excluded(self, fixed_now):
        corpus = _priors(fixed_now, [1, 2, 3, 4, 5], author_id="b")
        assert count_recent_prior_reviews(_review(fixed_now), corpus, 3600) == 0


# ── analyze_review_integrity ──────────────────────────────────────────────────

class TestAnalyzeReviewIntegrity:
    def test_clean_review(self, fixed_now, long_review_text):
        verdict = analyze_review_integrity(_review(fixed_now, content=long_review_text), [])
        assert verdict.risk_tier == RiskTier.LOW
        assert verdict.reasons == (REASON_CLEAN,)
        assert verdict.risk_score == 0

    def test_short_glowing_five_star(self, fixed_now):
        candidate = _review(fixed_now, content="great great great great book", rating=5.0)
        verdict = analyze_review_integrity(candidate, [])
        # extreme 10 + minimal 20 + short glowing 15
        assert verdict.risk_score == 45
        assert verdict.risk_tier == RiskTier.MEDIUM
        assert verdict.reasons == (REASON_EXTREME_MINIMAL, REASON_SHORT_GLOWING)

    def test_extreme_rating_long_text_is_silent(self, fixed_now, long_review_text):
        verdict = analyze_review_integrity(
            _review(fixed_now, content=long_review_text, rating=1.0), [],
        )
        assert verdict.risk_score == 10
        assert verdict.risk_tier == RiskTier.LOW
        assert verdict.reasons == (REASON_CLEAN,)

    def test_repetition(self, fixed_now):
        verdict = analyze_review_integrity(
            _review(fixed_now, content=" ".join(["spam"] * 10), rating=3.0), [],
        )
        assert verdict.risk_score == 30
        assert verdict.risk_tier == RiskTier.MEDIUM
        assert verdict.reasons == (REASON_REPETITIVE,)

    def test_low_tier_with_real_finding(self, fixed_now):
        verdict = analyze_review_integrity(_review(fixed_now, content="Lovely.", rating=4.5), [])
        assert verdict.risk_score == 15
        assert verdict.risk_tier == RiskTier.LOW
        assert verdict.reasons == (REASON_SHORT_GLOWING,)

    def test_empty_content_no_repetition(self, fixed_now):
        verdict = analyze_review_integrity(_review(fixed_now, content="", rating=3.0), [])
        assert verdict.risk_score == 0
        assert verdict.reasons == (REASON_CLEAN,)

    def test_three_prior_no_burst(self, fixed_now, long_review_text):
        candidate = _review(fixed_now, content=long_review_text)
        verdict = analyze_review_integrity(candidate, _priors(fixed_now, [10, 20, 30]))
        assert verdict.risk_tier == RiskTier.LOW
        assert REASON_BURST not in verdict.reasons

    def test_four_prior_burst(self, fixed_now, long_review_text):
        candidate = _review(fixed_now, content=long_review_text)
        verdict = analyze_review_integrity(candidate, _priors(fixed_now, [10, 20, 30, 40]))
        assert verdict.risk_score == 40
        assert verdict.risk_tier == RiskTier.MEDIUM
        assert verdict.reasons == (REASON_BURST,)

    def test_burst_with_extreme_rating_is_high(self, fixed_now, long_review_text):
        candidate = _review(fixed_now, content=long_review_text, rating=1.0)
        verdict = analyze_review_integrity(candidate, _priors(fixed_now, [10, 20, 30, 40]))
        assert verdict.risk_score == 50
        assert verdict.risk_tier == RiskTier.HIGH
        assert verdict.reasons == (REASON_BURST,)

    def test_candidate_already_in_corpus(self, fixed_now, long_review_text):
        candidate = _review(fixed_now, content=long_review_text)
        corpus = _priors(fixed_now, [10, 20, 30]) + [candidate]
        verdict = analyze_review_integrity(candidate, corpus)
        assert REASON_BURST not in verdict.reasons

    def test_corpus_iterator(self, fixed_now, long_review_text):
        candidate = _review(fixed_now, content=long_review_text)
        corpus = iter(_priors(fixed_now, [1, 2, 3, 4]))
        assert analyze_review_integrity(candidate, corpus).reasons == (REASON_BURST,)

    def test_reason_order(self, fixed_now):
        candidate = _review(fixed_now, content="wow wow wow wow", rating=5.0)
        verdict = analyze_review_integrity(candidate, _priors(fixed_now, [1, 2, 3, 4]))
        # 30 + 10 + 20 + 40 + 15
        assert verdict.risk_score == 115
        assert verdict.risk_tier == RiskTier.HIGH
        assert verdict.reasons == (
            REASON_REPETITIVE, REASON_EXTREME_MINIMAL, REASON_BURST, REASON_SHORT_GLOWING,
        )

    def test_config_window(self, fixed_now, long_review_text):
        config = IntegrityConfig(burst_window_seconds=600)
        candidate = _review(fixed_now, content=long_review_text)
        verdict = analyze_review_integrity(
            candidate, _priors(fixed_now, [1, 2, 3, 20]), config=config,
        )
        assert REASON_BURST not in verdict.reasons

    def test_pure(self, fixed_now, long_review_text):
        candidate = _review(fixed_now, content=long_review_text)
        corpus = _priors(fixed_now, [10, 20])
        assert analyze_review_integrity(candidate, corpus) == analyze_review_integrity(candidate, corpus)
