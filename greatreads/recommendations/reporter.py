"""
Recommendation report writer: CSV and JSON output for ranked recommendations.

All functions are pure I/O. They consume in-memory Recommendation lists and
write human-readable + machine-readable files for the persistence sink.

Output files
------------
  {output_dir}/
    recommendations_{reader}_{date}.csv   -- one row per recommendation
    recommendations_{reader}_{date}.json  -- same data, structured JSON

``{reader}`` is the reader id reduced to ``[A-Za-z0-9_.-]`` (see
``reader_file_slug``), so an id can never place a file outside
``output_dir``. The CLI passes ``<output_dir>/recommendations``.
"""

from __future__ import annotations

import csv
import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from greatreads.models.recommendation import Recommendation

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def reader_file_slug(reader_id: str) -> str:
    """Filename-safe form of ``reader_id``: unsafe runs become ``_``, no leading dots."""
    slug = _UNSAFE_FILENAME_CHARS.sub("_", reader_id).lstrip(".")
    return slug or "reader"


def write_recommendation_csv(
    recommendations: Sequence[Recommendation],
    output_dir: Path,
    reader_id: str,
    run_date: date | None = None,
    titles: Optional[dict[str, str]] = None,
) -> Path:
    """Write ranked recommendations to a CSV file.

    Columns: rank, book_id, title, score, signal_1, signal_2, signal_3.

    Args:
        recommendations: Output of generate_recommendations(), already ranked.
        output_dir:      Directory to write the file (created if missing).
        reader_id:       Reader identifier (used in filename).
        run_date:        Date label for the filename. Defaults to today.
        titles:          Optional book_id -> title lookup.

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()
    titles = titles or {}

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"recommendations_{reader_file_slug(reader_id)}_{run_date}.csv"

    fieldnames = ["rank", "book_id", "title", "score", "signal_1", "signal_2", "signal_3"]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for rank, rec in enumerate(recommendations, start=1):
            row = {
                "rank":    rank,
                "book_id": rec.book_id,
                "title":   titles.get(rec.book_id, ""),
                "score":   rec.score,
            }
            for i in range(3):
                row[f"signal_{i + 1}"] = (
                    rec.signals[i].description if i < len(rec.signals) else ""
                )
            writer.writerow(row)

    logger.info("Recommendation CSV written: %s (%d rows)", csv_path, len(recommendations))
    return csv_path


def write_recommendation_json(
    recommendations: Sequence[Recommendation],
    output_dir: Path,
    reader_id: str,
    run_date: date | None = None,
) -> Path:
    """Write ranked recommendations to a structured JSON file.

    Args:
        recommendations: Output of generate_recommendations(), already ranked.
        output_dir:      Target directory.
        reader_id:       Used in filename + metadata.
        run_date:        Date label. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{reader_file_slug(reader_id)}_{run_date}.json"

    payload: dict = {
        "schema_version":  SCHEMA_VERSION,
        "reader_id":       reader_id,
        "generated_at":    run_date.isoformat(),
        "recommendations": [
            {"rank": rank, **rec.model_dump(mode="json")}
            for rank, rec in enumerate(recommendations, start=1)
        ],
    }

    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Recommendation JSON written: %s", json_path)
    return json_path
