"""loc-analyzer: blank / comment / code line counting per language."""

__version__ = "0.1.0"

from loc_analyzer.aggregator import aggregate
from loc_analyzer.analyzer import AnalysisOutcome, analyze, analyze_async
from loc_analyzer.classifier import classify, resolve_and_classify
from loc_analyzer.grammar import grammar_for
from loc_analyzer.languages import resolve
from loc_analyzer.models import (
    UNKNOWN_LANGUAGE,
    CommentGrammar,
    FileStats,
    LanguageStats,
    Report,
)

__all__ = [
    "UNKNOWN_LANGUAGE",
    "AnalysisOutcome",
    "CommentGrammar",
    "FileStats",
    "LanguageStats",
    "Report",
    "aggregate",
    "analyze",
    "analyze_async",
    "classify",
    "grammar_for",
    "resolve",
    "resolve_and_classify",
]
