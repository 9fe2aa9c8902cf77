"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``GREATREADS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The scoring and integrity functions accept their own config section and fall
back to the defaults below, so library callers never need a config file.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class RecommendationConfig(BaseModel):
    """Recommendation engine thresholds."""

    model_config = ConfigDict(frozen=True)

    inclusion_threshold: float = 30.0    # raw score must be strictly above
    max_signals: int = 3
    high_rating_threshold: float = 4.0
    popular_review_count: int = 100      # review_count must be strictly above

    @field_validator("inclusion_threshold")
    @classmethod
    def validate_inclusion_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"inclusion_threshold must be in [0.0, 100.0], got {v}.")
        return v

    @field_validator("max_signals")
    @classmethod
    def validate_max_signals(cls, v: int) -> int:
        if not 0 <= v <= 3:
            raise ValueError(f"max_signals must be in [0, 3], got {v}.")
        return v

    @field_validator("high_rating_threshold")
    @classmethod
    def validate_rating_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 5.0:
            raise ValueError(f"high_rating_threshold must be in [0.0, 5.0], got {v}.")
        return v

    @field_validator("popular_review_count")
    @classmethod
    def validate_popular_review_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"popular_review_count must be non-negative, got {v}.")
        return v


class IntegrityConfig(BaseModel):
    """Review integrity analyzer thresholds."""

    model_config = ConfigDict(frozen=True)

    repetition_ratio: float = 0.3
    burst_window_seconds: int = 3600
    burst_max_prior: int = 3             # more prior reviews than this → burst

    @field_validator("repetition_ratio")
    @classmethod
    def validate_repetition_ratio(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"repetition_ratio must be in (0.0, 1.0], got {v}.")
        return v

    @field_validator("burst_window_seconds")
    @classmethod
    def validate_burst_window(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"burst_window_seconds must be positive, got {v}.")
        return v

    @field_validator("burst_max_prior")
    @classmethod
    def validate_burst_max_prior(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"burst_max_prior must be non-negative, got {v}.")
        return v


class OutputConfig(BaseModel):
    """Filesystem locations for report output."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    recommendations: RecommendationConfig = RecommendationConfig()
    integrity: IntegrityConfig = IntegrityConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file
            is absent, built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            config_path = default_path

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            raw = tomllib.load(f)

        # Also merge local.toml if present (gitignored local overrides)
        local_config_path = config_path.parent / "local.toml"
        if local_config_path.exists():
            with open(local_config_path, "rb") as f:
                local_raw: dict[str, Any] = tomllib.load(f)
            raw = _deep_merge(raw, local_raw)

    # 3. Apply GREATREADS_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply GREATREADS_* env vars to the raw config dict.

    Supported overrides:
      GREATREADS_OUTPUT_DIR → raw["output"]["output_dir"]
      GREATREADS_LOG_LEVEL  → raw["logging"]["level"]
      GREATREADS_DEBUG      → raw["debug"]
    """
    if output_dir := os.environ.get("GREATREADS_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if log_level := os.environ.get("GREATREADS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("GREATREADS_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        recommendations=RecommendationConfig(**raw.get("recommendations", {})),
        integrity=IntegrityConfig(**raw.get("integrity", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
