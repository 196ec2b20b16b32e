"""Data models for line classification results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

UNKNOWN_LANGUAGE = "Unknown"


@dataclass(frozen=True)
class CommentGrammar:
    """Comment syntax of one language.

    Block markers only take effect when both are set.
    """

    single_line_marker: str | None = None
    block_start_marker: str | None = None
    block_end_marker: str | None = None

    @property
    def has_block(self) -> bool:
        return bool(self.block_start_marker) and bool(self.block_end_marker)


@dataclass(frozen=True)
class FileStats:
    """Line counts for a single analysed file."""

    name: str
    language: str
    total_lines: int
    blank_lines: int
    comment_lines: int
    code_lines: int

    def __post_init__(self) -> None:
        if self.blank_lines + self.comment_lines + self.code_lines != self.total_lines:
            raise ValueError(
                f"{self.name}: blank+comment+code "
                f"({self.blank_lines}+{self.comment_lines}+{self.code_lines}) "
                f"!= total ({self.total_lines})"
            )


@dataclass(frozen=True)
class LanguageStats:
    """Summed line counts over every file of one language."""

    file_count: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    code_lines: int = 0
    total_lines: int = 0

    def plus(self, stats: FileStats) -> LanguageStats:
        """Return a copy with *stats* folded in."""
        return LanguageStats(
            file_count=self.file_count + 1,
            blank_lines=self.blank_lines + stats.blank_lines,
            comment_lines=self.comment_lines + stats.comment_lines,
            code_lines=self.code_lines + stats.code_lines,
            total_lines=self.total_lines + stats.total_lines,
        )

    def __add__(self, other: LanguageStats) -> LanguageStats:
        if not isinstance(other, LanguageStats):
            return NotImplemented
        return LanguageStats(
            file_count=self.file_count + other.file_count,
            blank_lines=self.blank_lines + other.blank_lines,
            comment_lines=self.comment_lines + other.comment_lines,
            code_lines=self.code_lines + other.code_lines,
            total_lines=self.total_lines + other.total_lines,
        )

    def code_percentage(self, total_code: int) -> float:
        """Share of *total_code* held by this entry, one decimal place."""
        if total_code <= 0:
            return 0.0
        return round(self.code_lines / total_code * 100, 1)


@dataclass(frozen=True)
class Report:
    """Result of one analysis run.

    ``files`` keeps input order. ``languages`` is a read-only view.
    """

    languages: Mapping[str, LanguageStats]
    total: LanguageStats
    files: tuple[FileStats, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.languages, MappingProxyType):
            object.__setattr__(self, "languages", MappingProxyType(dict(self.languages)))
        if not isinstance(self.files, tuple):
            object.__setattr__(self, "files", tuple(self.files))

    def languages_by_code(self) -> list[tuple[str, LanguageStats]]:
        """Language entries ordered by code lines, largest first."""
        return sorted(self.languages.items(), key=lambda kv: (-kv[1].code_lines, kv[0]))

    def top_languages(self, n: int = 8) -> list[tuple[str, LanguageStats]]:
        return self.languages_by_code()[:n]

    def files_by_code(self) -> list[FileStats]:
        """Files ordered by code lines, largest first (stable for ties)."""
        return sorted(self.files, key=lambda f: -f.code_lines)

    def code_percentage(self, language: str) -> float:
        stats = self.languages.get(language)
        if stats is None:
            return 0.0
        return stats.code_percentage(self.total.code_lines)
