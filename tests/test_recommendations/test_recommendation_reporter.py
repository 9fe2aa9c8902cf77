"""
Tests for greatreads/recommendations/reporter.py.

What we test
------------
write_recommendation_csv():
  - File name carries reader id and run date.
  - Unsafe reader ids are slugged so files stay inside output_dir.
  - One row per recommendation with rank, title and up to three signals.
  - Missing signals leave empty columns.
  - Empty input writes a header-only file.
write_recommendation_json():
  - schema_version, reader_id, generated_at present.
  - Recommendations carry rank and serialised signals.
reader_file_slug():
  - Safe ids pass through; path separators and leading dots are neutralised.
"""

from __future__ import annotations

import csv
import json
from datetime import date

import pytest

from greatreads.models.book import Book
from greatreads.recommendations.engine import generate_recommendations
from greatreads.recommendations.reporter import (
    SCHEMA_VERSION,
    reader_file_slug,
    write_recommendation_csv,
    write_recommendation_json,
)

RUN_DATE = date(2025, 3, 1)


@pytest.fixture
def recs(sample_reader, sample_book, fixed_now):
    genre_only = Book(book_id="book-2", title="Quiet Crimes", genres=["mystery"])
    return generate_recommendations(sample_reader, [genre_only, sample_book], now=fixed_now)


class TestRecommendationCsv:
    def test_writes_rows(self, tmp_path, recs, sample_book):
        titles = {"book-1": sample_book.title, "book-2": "Quiet Crimes"}
        path = write_recommendation_csv(recs, tmp_path, "user-1", RUN_DATE, titles)

        assert path.name == "recommendations_user-1_2025-03-01.csv"
        with path.open(encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert [r["book_id"] for r in rows] == ["book-1", "book-2"]
        assert rows[0]["rank"] == "1"
        assert rows[0]["title"] == "The Night Circus"
        assert rows[0]["score"] == "65"
        assert rows[0]["signal_3"] == "Highly rated by readers (4.2/5.0)"
        assert rows[1]["signal_1"] == "Matches your preferred genres: mystery"
        assert rows[1]["signal_2"] == ""

    def test_creates_output_dir(self, tmp_path, recs):
        out = tmp_path / "nested" / "dir"
        path = write_recommendation_csv(recs, out, "user-1", RUN_DATE)
        assert path.parent == out
        assert path.exists()

    def test_reader_id_cannot_escape_output_dir(self, tmp_path, recs):
        path = write_recommendation_csv(recs, tmp_path, "../evil/user", RUN_DATE)
        assert path.parent == tmp_path
        assert path.name == "recommendations__evil_user_2025-03-01.csv"

    def test_empty(self, tmp_path):
        path = write_recommendation_csv([], tmp_path, "user-1", RUN_DATE)
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines == ["rank,book_id,title,score,signal_1,signal_2,signal_3"]


class TestRecommendationJson:
    def test_payload(self, tmp_path, recs):
        path = write_recommendation_json(recs, tmp_path, "user-1", RUN_DATE)
        payload = json.loads(path.read_text(encoding="utf-8"))

        assert payload["schema_version"] == SCHEMA_VERSION
        assert payload["reader_id"] == "user-1"
        assert payload["generated_at"] == "2025-03-01"
        first = payload["recommendations"][0]
        assert first["rank"] == 1
        assert first["rec_id"] == "rec-book-1-user-1"
        assert first["signals"][0]["signal_type"] == "tag-match"
        assert len(payload["recommendations"]) == 2

    def test_unsafe_reader_id(self, tmp_path, recs):
        path = write_recommendation_json(recs, tmp_path, "a b/c", RUN_DATE)
        assert path.parent == tmp_path
        assert path.name == "recommendations_a_b_c_2025-03-01.json"
        assert json.loads(path.read_text(encoding="utf-8"))["reader_id"] == "a b/c"


class TestReaderFileSlug:
    @pytest.mark.parametrize("reader_id,expected", [
        ("user-1", "user-1"),
        ("reader.42", "reader.42"),
        ("../../etc", "_.._etc"),
        ("...", "reader"),
        ("", "reader"),
    ])
    def test_slug(self, reader_id, expected):
        assert reader_file_slug(reader_id) == expected
