"""Language detection by file extension."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from loc_analyzer.models import UNKNOWN_LANGUAGE

EXTENSION_TO_LANGUAGE: Mapping[str, str] = MappingProxyType(
    {
        "js": "JavaScript",
        "jsx": "JavaScript React",
        "ts": "TypeScript",
        "tsx": "TypeScript React",
        "py": "Python",
        "java": "Java",
        "cpp": "C++",
        "cc": "C++",
        "cxx": "C++",
        "c": "C",
        "h": "C Header",
        "hpp": "C++ Header",
        "cs": "C#",
        "php": "PHP",
        "rb": "Ruby",
        "go": "Go",
        "rs": "Rust",
        "swift": "Swift",
        "kt": "Kotlin",
        "dart": "Dart",
        "vue": "Vue",
        "html": "HTML",
        "htm": "HTML",
        "css": "CSS",
        "scss": "SCSS",
        "sass": "Sass",
        "less": "Less",
        "xml": "XML",
        "json": "JSON",
        "md": "Markdown",
        "txt": "Text",
        "sql": "SQL",
        "sh": "Shell",
        "bat": "Batch",
        "ps1": "PowerShell",
        "yaml": "YAML",
        "yml": "YAML",
    }
)


def extension_of(file_name: str) -> str:
    """Lower-cased text after the last ``.``; empty when there is none.

    Works on the full string, so ``dir.d/Makefile`` yields ``d/makefile``,
    which maps to nothing.
    """
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[1].lower()


def resolve(file_name: str) -> str:
    """Map a file name to its language label, or ``"Unknown"``."""
    return EXTENSION_TO_LANGUAGE.get(extension_of(file_name), UNKNOWN_LANGUAGE)


def is_known(file_name: str) -> bool:
    return resolve(file_name) != UNKNOWN_LANGUAGE
