"""
ASCII terminal formatters for CLI commands.

All formatters accept model objects and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Signal ordering
---------------
``format_recommendation_table()`` lists each recommendation's signals
strongest-first (via ``explain_signals``). The engine's rule-order cap has
already been applied, so re-sorting here never surfaces a dropped signal.
"""

from __future__ import annotations

from typing import Optional, Sequence

from greatreads.integrity.summary import ReaderTrustSummary
from greatreads.models.book import Book
from greatreads.models.recommendation import Recommendation
from greatreads.models.review import IntegrityVerdict
from greatreads.recommendations.discovery import explain_signals
from greatreads.taxonomy.integrity_taxonomy import RiskTier

_TIER_TAGS: dict[RiskTier, str] = {
    RiskTier.LOW:    "[LOW RISK]",
    RiskTier.MEDIUM: "[MEDIUM RISK]",
    RiskTier.HIGH:   "[HIGH RISK]",
}


# ── Recommendations ──────────────────────────────────────────────────────────


def format_recommendation_table(
    recommendations: Sequence[Recommendation],
    reader_id: str,
    titles: Optional[dict[str, str]] = None,
    inclusion_threshold: Optional[float] = None,
) -> str:
    """Format ranked recommendations as an ASCII table with signal sub-rows::

        Rank  Book                            Score
        ---------------------------------------------
           1  The Night Circus                   65
                - [ 75] Highly rated by readers (4.2/5.0)
                - [ 50] Matches your preferred genres: fantasy

    Args:
        recommendations: Ranked output of generate_recommendations().
        reader_id:       Reader the list was produced for (header).
        titles:          Optional book_id -> title lookup.
        inclusion_threshold: Threshold the engine ran with, named in the
                         empty-result message when given.

    Returns:
        Multi-line string.
    """
    titles = titles or {}
    lines: list[str] = []
    lines.append("")
    lines.append("=== Recommendations ===")
    lines.append(f"  Reader: {reader_id}")

    if not recommendations:
        lines.append("")
        cutoff = (
            f"above {inclusion_threshold:g}" if inclusion_threshold is not None
            else "above the inclusion threshold"
        )
        lines.append(f"  (no recommendations: reader has no preferences or nothing scored {cutoff})")
        return "\n".join(lines)

    lines.append("")
    header = f"    {'Rank':>4}  {'Book':<30}  {'Score':>5}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for rank, rec in enumerate(recommendations, start=1):
        name = (titles.get(rec.book_id) or rec.book_id)[:30]
        lines.append(f"    {rank:>4}  {name:<30}  {rec.score:>5}")
        for signal in explain_signals(rec):
            lines.append(f"            - [{signal.strength:>3}] {signal.description}")

    return "\n".join(lines)


def format_book_list(books: Sequence[Book], heading: str) -> str:
    """Format a plain list of books (used by genre-blend discovery)."""
    lines = ["", f"=== {heading} ==="]
    if not books:
        lines.append("  (no matching books)")
        return "\n".join(lines)
    for book in books:
        genres = ", ".join(book.genres)
        lines.append(f"  {book.book_id:<12}  {book.title[:40]:<40}  {genres}")
    return "\n".join(lines)


# ── Integrity ────────────────────────────────────────────────────────────────


def format_verdict(
    verdict: IntegrityVerdict,
    review_label: str = "",
    trust_score: Optional[int] = None,
) -> str:
    """Format one integrity verdict, optionally with the review's trust score."""
    tag = _TIER_TAGS[verdict.risk_tier]
    head = f"  {tag} risk score {verdict.risk_score}"
    if review_label:
        head = f"  {review_label}: " + head.strip()
    lines = [head]
    for reason in verdict.reasons:
        lines.append(f"    - {reason}")
    if trust_score is not None:
        lines.append(f"    Trust score: {trust_score}")
    return "\n".join(lines)


def format_trust_summary(summary: ReaderTrustSummary) -> str:
    """Format the trust dashboard for one reader."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Trust & Safety ===")
    lines.append(f"  Reader:         {summary.reader_id}")
    lines.append(f"  Trust score:    {round(summary.average_trust)}")
    lines.append(f"  Based on:       {summary.review_count} review(s)")
    lines.append(f"  Shadow-banned:  {summary.shadow_banned}")
    lines.append("")
    lines.append("  Integrity breakdown:")
    for tier in RiskTier:
        label = f"{tier.value.capitalize()} Risk"
        lines.append(f"    {label:<13} {summary.tier_counts.get(tier, 0):>4}")
    return "\n".join(lines)
