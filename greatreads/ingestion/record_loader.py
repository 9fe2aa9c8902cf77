"""
JSON record loader for readers, book catalogs and review corpora.

Stands in for the external catalog and corpus providers when the core is
driven from the command line or from fixture files.

Accepted layouts:
  reader  → a single JSON object matching ``Reader``.
  review  → a single JSON object matching ``Review``.
  catalog → a JSON array of ``Book`` objects, or ``{"books": [...]}``.
  reviews → a JSON array of ``Review`` objects, or ``{"reviews": [...]}``.

All records are validated before any are returned. If **any** record fails,
a single :class:`RecordLoadError` is raised listing the first 10 failures.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from greatreads.models.book import Book
from greatreads.models.reader import Reader
from greatreads.models.review import Review

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_MAX_ERRORS_SHOWN = 10


class RecordLoadError(ValueError):
    """Raised when a record file is malformed or any record fails validation.

    Attributes:
        errors: ``(index, message)`` for every failed record.
    """

    def __init__(self, message: str, errors: list[tuple[int, str]] | None = None):
        super().__init__(message)
        self.errors = errors or []


def load_reader(path: Path) -> Reader:
    """Load a single reader (with optional preferences) from a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        RecordLoadError: If the file is not a JSON object or fails validation.
    """
    reader = _load_single(path, Reader)
    logger.info("Loaded reader %s from %s", reader.reader_id, path.name)
    return reader


def load_review(path: Path) -> Review:
    """Load a single review (e.g. a pending submission) from a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        RecordLoadError: If the file is not a JSON object or fails validation.
    """
    return _load_single(path, Review)


def load_catalog(path: Path) -> list[Book]:
    """Load a book catalog from a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        RecordLoadError: If the layout is wrong or any book fails validation.
    """
    books = _load_records(path, Book, envelope_key="books")
    logger.info("Loaded %d book(s) from %s", len(books), path.name)
    return books


def load_reviews(path: Path) -> list[Review]:
    """Load a review corpus from a JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        RecordLoadError: If the layout is wrong or any review fails validation.
    """
    reviews = _load_records(path, Review, envelope_key="reviews")
    logger.info("Loaded %d review(s) from %s", len(reviews), path.name)
    return reviews


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Record file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise RecordLoadError(f"JSON parse error in {path.name}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise RecordLoadError(f"{path.name} is not valid UTF-8: {exc}") from exc


def _load_single(path: Path, model: type[ModelT]) -> ModelT:
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise RecordLoadError(f"{path.name} must contain a single JSON object.")
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise RecordLoadError(
            f"{model.__name__} in {path.name} failed validation:\n{exc}",
            errors=[(0, str(exc))],
        ) from exc


def _load_records(path: Path, model: type[ModelT], envelope_key: str) -> list[ModelT]:
    """Validate every entry of a JSON array (optionally wrapped in an object)."""
    raw = _read_json(path)
    if isinstance(raw, dict) and envelope_key in raw:
        raw = raw[envelope_key]
    if not isinstance(raw, list):
        raise RecordLoadError(
            f"{path.name} must contain a JSON array or an object with a "
            f"'{envelope_key}' array."
        )

    records: list[ModelT] = []
    errors: list[tuple[int, str]] = []
    for i, entry in enumerate(raw):
        try:
            records.append(model.model_validate(entry))
        except ValidationError as exc:
            errors.append((i, str(exc)))

    if errors:
        detail = "\n".join(f"  Record #{i}: {msg}" for i, msg in errors[:_MAX_ERRORS_SHOWN])
        suffix = (
            f"\n  … and {len(errors) - _MAX_ERRORS_SHOWN} more"
            if len(errors) > _MAX_ERRORS_SHOWN else ""
        )
        raise RecordLoadError(
            f"{len(errors)} record(s) failed validation in {path.name}:\n{detail}{suffix}",
            errors=errors,
        )

    return records
