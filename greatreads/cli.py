"""
GreatReads core CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate input records (JSON files).
  4. Run the scoring / integrity function.
  5. Report result to stdout (and optionally write report files).

Install and run::

    pip install -e .
    greatreads --help
    greatreads validate-config
    greatreads recommend --reader reader.json --catalog books.json
    greatreads blend --catalog books.json --genre fantasy --genre mystery
    greatreads analyze-review --review new_review.json --corpus reviews.json
    greatreads trust-report --reviews reviews.json --reader user-1
    greatreads reevaluate --reviews reviews.json --write
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="greatreads",
    help="GreatReads discovery core: recommendations and review integrity.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from greatreads.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from greatreads.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_or_exit(loader, path: str):
    """Run a record loader, turning load failures into a clean exit."""
    from greatreads.ingestion.record_loader import RecordLoadError

    try:
        return loader(Path(path))
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except RecordLoadError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Inclusion threshold: {config.recommendations.inclusion_threshold}")
    typer.echo(f"  Max signals:         {config.recommendations.max_signals}")
    typer.echo(f"  Burst window (s):    {config.integrity.burst_window_seconds}")
    typer.echo(f"  Output dir:          {config.output.output_dir}")
    typer.echo(f"  Log level:           {config.logging.level}")
    typer.echo(f"  Debug mode:          {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("recommend")
def recommend(
    reader_file: str = typer.Option(..., "--reader", help="Reader JSON file."),
    catalog_file: str = typer.Option(..., "--catalog", help="Book catalog JSON file."),
    write: bool = typer.Option(
        False,
        "--write",
        help="Also write CSV + JSON reports under the configured output dir.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score a catalog for one reader and print ranked recommendations."""
    from greatreads.ingestion.record_loader import load_catalog, load_reader
    from greatreads.recommendations.engine import generate_recommendations
    from greatreads.recommendations.reporter import (
        write_recommendation_csv,
        write_recommendation_json,
    )
    from greatreads.reporting.formatters import format_recommendation_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reader = _load_or_exit(load_reader, reader_file)
    catalog = _load_or_exit(load_catalog, catalog_file)

    recs = generate_recommendations(reader, catalog, config=config.recommendations)
    titles = {book.book_id: book.title for book in catalog}

    typer.echo(format_recommendation_table(
        recs, reader.reader_id, titles,
        inclusion_threshold=config.recommendations.inclusion_threshold,
    ))

    if write:
        out_dir = Path(config.output.output_dir) / "recommendations"
        csv_path = write_recommendation_csv(recs, out_dir, reader.reader_id, titles=titles)
        json_path = write_recommendation_json(recs, out_dir, reader.reader_id)
        typer.echo("")
        typer.echo(f"  CSV:  {csv_path}")
        typer.echo(f"  JSON: {json_path}")

    typer.echo("")
    typer.echo(f"[OK] {len(recs)} recommendation(s).")


@app.command("blend")
def blend(
    catalog_file: str = typer.Option(..., "--catalog", help="Book catalog JSON file."),
    genres: list[str] = typer.Option(
        ...,
        "--genre",
        help="Genre slug; pass exactly twice (e.g. --genre fantasy --genre mystery).",
    ),
    mood: Optional[str] = typer.Option(None, "--mood", help="Optional mood slug."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List books that blend two genres (optionally with one mood)."""
    from greatreads.ingestion.record_loader import load_catalog
    from greatreads.recommendations.discovery import genre_blend
    from greatreads.reporting.formatters import format_book_list
    from greatreads.taxonomy.catalog_taxonomy import Genre, Mood

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if len(genres) != 2:
        typer.echo("[ERROR] --genre must be given exactly twice.", err=True)
        raise typer.Exit(code=1)

    try:
        first, second = Genre(genres[0]), Genre(genres[1])
        blend_mood = Mood(mood) if mood else None
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    catalog = _load_or_exit(load_catalog, catalog_file)
    books = genre_blend(catalog, first, second, blend_mood)

    heading = f"{first} + {second}" + (f" ({blend_mood})" if blend_mood else "")
    typer.echo(format_book_list(books, heading))
    typer.echo("")
    typer.echo(f"[OK] {len(books)} book(s).")


@app.command("analyze-review")
def analyze_review(
    review_file: str = typer.Option(..., "--review", help="Candidate review JSON file."),
    corpus_file: Optional[str] = typer.Option(
        None,
        "--corpus",
        help="Review corpus JSON file. Burst detection is skipped when omitted.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Classify a review's integrity risk and compute its trust score."""
    from greatreads.ingestion.record_loader import load_review, load_reviews
    from greatreads.integrity.analyzer import analyze_review_integrity
    from greatreads.integrity.trust import calculate_trust_score
    from greatreads.reporting.formatters import format_verdict

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    review = _load_or_exit(load_review, review_file)
    corpus = _load_or_exit(load_reviews, corpus_file) if corpus_file else []

    verdict = analyze_review_integrity(review, corpus, config=config.integrity)
    trust = calculate_trust_score(review)

    if as_json:
        payload = {"review_id": review.review_id, **verdict.model_dump(mode="json"),
                   "trust_score": trust}
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(format_verdict(verdict, review.review_id, trust))


@app.command("trust-score")
def trust_score(
    review_file: str = typer.Option(..., "--review", help="Review JSON file."),
) -> None:
    """Print the 0-100 trust score for one review."""
    from greatreads.ingestion.record_loader import load_review
    from greatreads.integrity.trust import calculate_trust_score

    review = _load_or_exit(load_review, review_file)
    typer.echo(str(calculate_trust_score(review)))


@app.command("trust-report")
def trust_report(
    reviews_file: str = typer.Option(..., "--reviews", help="Review corpus JSON file."),
    reader_id: str = typer.Option(..., "--reader", help="Reader ID to summarise."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print a reader's trust dashboard: average trust and integrity breakdown."""
    from greatreads.ingestion.record_loader import load_reviews
    from greatreads.integrity.summary import summarize_reader_trust
    from greatreads.reporting.formatters import format_trust_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reviews = _load_or_exit(load_reviews, reviews_file)
    typer.echo(format_trust_summary(summarize_reader_trust(reader_id, reviews)))


@app.command("reevaluate")
def reevaluate(
    reviews_file: str = typer.Option(..., "--reviews", help="Review corpus JSON file."),
    write: bool = typer.Option(
        False,
        "--write",
        help="Write CSV + JSON integrity reports under the configured output dir.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Re-run integrity analysis for every review against the full corpus."""
    from greatreads.ingestion.record_loader import load_reviews
    from greatreads.integrity.summary import integrity_breakdown, reevaluate_reviews
    from greatreads.reporting.export import write_integrity_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    reviews = _load_or_exit(load_reviews, reviews_file)
    updated = reevaluate_reviews(reviews, config=config.integrity)

    counts = integrity_breakdown(updated)
    typer.echo(f"Re-evaluated {len(updated)} review(s).")
    for tier, count in counts.items():
        typer.echo(f"  {tier.value:<6} {count:>5}")

    if write:
        csv_path, json_path = write_integrity_report(updated, Path(config.output.output_dir))
        typer.echo("")
        typer.echo(f"  CSV:  {csv_path}")
        typer.echo(f"  JSON: {json_path}")

    typer.echo("")
    typer.echo("[OK] Re-evaluation complete.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
