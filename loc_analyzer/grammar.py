"""Comment syntax per language."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from loc_analyzer.models import CommentGrammar

DEFAULT_GRAMMAR = CommentGrammar(single_line_marker="//")

_C_STYLE = CommentGrammar("//", "/*", "*/")
_HASH = CommentGrammar("#")
_MARKUP = CommentGrammar(None, "<!--", "-->")

GRAMMARS: Mapping[str, CommentGrammar] = MappingProxyType(
    {
        "JavaScript": _C_STYLE,
        "JavaScript React": _C_STYLE,
        "TypeScript": _C_STYLE,
        "TypeScript React": _C_STYLE,
        "Java": _C_STYLE,
        "C++": _C_STYLE,
        "C": _C_STYLE,
        "C Header": _C_STYLE,
        "C++ Header": _C_STYLE,
        "C#": _C_STYLE,
        "PHP": _C_STYLE,
        "CSS": CommentGrammar(None, "/*", "*/"),
        "SCSS": _C_STYLE,
        "Sass": CommentGrammar("//"),
        "Less": _C_STYLE,
        "Python": CommentGrammar("#", '"""', '"""'),
        "Ruby": CommentGrammar("#", "=begin", "=end"),
        "Go": _C_STYLE,
        "Rust": _C_STYLE,
        "Swift": _C_STYLE,
        "Kotlin": _C_STYLE,
        "Dart": _C_STYLE,
        "Shell": _HASH,
        "Batch": CommentGrammar("REM"),
        "PowerShell": CommentGrammar("#", "<#", "#>"),
        "HTML": _MARKUP,
        "XML": _MARKUP,
        "Vue": _MARKUP,
        "SQL": CommentGrammar("--", "/*", "*/"),
        "YAML": _HASH,
    }
)


def grammar_for(language: str) -> CommentGrammar:
    """Comment grammar for *language*; ``//``-only for anything unmapped."""
    return GRAMMARS.get(language, DEFAULT_GRAMMAR)
