"""Runtime settings read from ``LOC_ANALYZER_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from loc_analyzer.exceptions import ConfigError

# Directories never descended into when walking a tree
DEFAULT_SKIP_DIRS: frozenset[str] = frozenset(
    {
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        "__pycache__",
        ".tox",
        ".venv",
        "venv",
        ".mypy_cache",
        ".pytest_cache",
        ".eggs",
        "dist",
        "build",
    }
)

DEFAULT_CONCURRENCY = 8


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{key} must be >= 1, got {value}")
    return value


def _env_list(key: str) -> list[str]:
    raw = os.environ.get(key, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    concurrency: int = DEFAULT_CONCURRENCY
    skip_dirs: frozenset[str] = field(default_factory=lambda: DEFAULT_SKIP_DIRS)
    log_level: str = "INFO"
    log_format: str = "console"  # "console" | "json"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from the environment, falling back to defaults.

        Reads:
            LOC_ANALYZER_CONCURRENCY  worker limit for classification (default: 8)
            LOC_ANALYZER_SKIP_DIRS    extra directory names to skip, comma-separated
            LOC_ANALYZER_LOG_LEVEL    log level (default: INFO)
            LOC_ANALYZER_LOG_FORMAT   console | json (default: console)
        """
        log_format = os.environ.get("LOC_ANALYZER_LOG_FORMAT", "console").lower()
        if log_format not in ("console", "json"):
            raise ConfigError(f"LOC_ANALYZER_LOG_FORMAT must be 'console' or 'json', got {log_format!r}")
        return cls(
            concurrency=_env_int("LOC_ANALYZER_CONCURRENCY", DEFAULT_CONCURRENCY),
            skip_dirs=DEFAULT_SKIP_DIRS | frozenset(_env_list("LOC_ANALYZER_SKIP_DIRS")),
            log_level=os.environ.get("LOC_ANALYZER_LOG_LEVEL", "INFO").upper(),
            log_format=log_format,
        )
