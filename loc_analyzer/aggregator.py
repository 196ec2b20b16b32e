"""Fold per-file results into per-language and grand totals."""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce
from operator import add

from loc_analyzer.models import FileStats, LanguageStats, Report


def aggregate(files: Iterable[FileStats]) -> Report:
    """Build a :class:`Report` from *files*, keeping their order."""
    ordered = tuple(files)
    languages: dict[str, LanguageStats] = {}
    for stats in ordered:
        languages[stats.language] = languages.get(stats.language, LanguageStats()).plus(stats)

    total = reduce(add, languages.values(), LanguageStats())
    return Report(languages=languages, total=total, files=ordered)
