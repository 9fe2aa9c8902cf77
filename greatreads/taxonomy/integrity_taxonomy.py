"""
Integrity taxonomy: risk tiers and the reason strings the analyzer emits.

Reason strings are part of the public output — moderation tooling matches on
them — so they live here as constants rather than inline in the analyzer.
"""

from enum import StrEnum


class RiskTier(StrEnum):
    """Manipulation risk class for a single review."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


REASON_REPETITIVE = "Repetitive language detected"
REASON_EXTREME_MINIMAL = "Extreme rating with minimal explanation"
REASON_BURST = "Multiple reviews in short timeframe (possible review bombing)"
REASON_SHORT_GLOWING = "Very short review with high rating"
REASON_CLEAN = "No integrity concerns detected"
