"""
Export helpers for moderation review and manual analysis.

All functions write to disk and return the written ``Path``.
The generic writers accept plain ``list[dict]`` data to stay decoupled from
specific report shapes; ``write_integrity_report()`` is the adapter that
flattens re-evaluated reviews into one row per review.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

from greatreads.integrity.trust import calculate_trust_score
from greatreads.models.review import Review

logger = logging.getLogger(__name__)

INTEGRITY_FIELDNAMES = [
    "review_id", "book_id", "author_id", "created_at", "rating",
    "integrity_risk", "integrity_reasons", "trust_score", "shadow_banned",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_reviews_for_export(reviews: Sequence[Review]) -> list[dict]:
    """One flat row per review: stored verdict, trust score, moderation state.

    ``integrity_reasons`` is joined with ``"; "`` so rows stay flat.
    """
    return [
        {
            "review_id":         r.review_id,
            "book_id":           r.book_id,
            "author_id":         r.author_id,
            "created_at":        r.created_at.isoformat(),
            "rating":            r.rating,
            "integrity_risk":    r.integrity_risk.value if r.integrity_risk else "",
            "integrity_reasons": "; ".join(r.integrity_reasons),
            "trust_score":       calculate_trust_score(r),
            "shadow_banned":     r.shadow_banned,
        }
        for r in reviews
    ]


def write_integrity_report(
    reviews: Sequence[Review],
    output_dir: Path,
    run_date: date | None = None,
) -> tuple[Path, Path]:
    """Write re-evaluated reviews as CSV + JSON under ``output_dir/integrity``.

    Args:
        reviews:    Reviews carrying fresh verdicts (from reevaluate_reviews()).
        output_dir: Base output directory.
        run_date:   Date label for the filenames. Defaults to today.

    Returns:
        ``(csv_path, json_path)``.
    """
    if run_date is None:
        run_date = date.today()

    rows = flatten_reviews_for_export(reviews)
    base = output_dir / "integrity"
    csv_path = export_to_csv(rows, base / f"integrity_{run_date}.csv", INTEGRITY_FIELDNAMES)
    json_path = export_to_json(
        {"generated_at": run_date.isoformat(), "reviews": rows},
        base / f"integrity_{run_date}.json",
    )
    logger.info("Integrity report written: %s (%d reviews)", csv_path, len(rows))
    return csv_path, json_path
