"""
Review integrity & trust: classifies manipulation risk and credibility of
user-submitted reviews.

Modules
-------
trust    : calculate_trust_score(); pure, history-free.
analyzer : risk_tier_for() + analyze_review_integrity(); pure, reads the
           review corpus for burst detection.
summary  : ReaderTrustSummary + summarize_reader_trust() +
           integrity_breakdown() + reevaluate_reviews().
"""
