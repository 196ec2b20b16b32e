"""Blank, comment and code line counting for one file.

A single left-to-right pass over the lines of a file with one piece of
state, ``in_block``. Blank lines are counted before any comment handling,
so whitespace-only lines inside a block comment still count as blank.
"""

from __future__ import annotations

from loc_analyzer.grammar import grammar_for
from loc_analyzer.languages import resolve
from loc_analyzer.models import CommentGrammar, FileStats

_CASE_INSENSITIVE_MARKER = "REM"


def split_lines(content: str) -> list[str]:
    """Split on ``\\n``; a final newline terminates the last line.

    Empty content still yields one (blank) line.
    """
    lines = content.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def _is_single_line_comment(trimmed: str, marker: str) -> bool:
    if trimmed.startswith(marker):
        return True
    # Batch remarks are accepted in any case, but only with a separator.
    return marker == _CASE_INSENSITIVE_MARKER and trimmed.lower().startswith("rem ")


def count_lines(content: str, grammar: CommentGrammar) -> tuple[int, int, int, int]:
    """Return ``(total, blank, comment, code)`` for *content*."""
    lines = split_lines(content)
    blank = comment = code = 0
    in_block = False
    has_block = grammar.has_block
    start = grammar.block_start_marker or ""
    end = grammar.block_end_marker or ""
    single = grammar.single_line_marker

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            blank += 1
            continue

        is_comment = False
        if has_block:
            if in_block:
                is_comment = True
                # A closing line never reopens the block.
                if end in trimmed:
                    in_block = False
            elif start in trimmed:
                is_comment = True
                in_block = end not in trimmed

        if not is_comment and single:
            is_comment = _is_single_line_comment(trimmed, single)

        if is_comment:
            comment += 1
        else:
            code += 1

    return len(lines), blank, comment, code


def classify(content: str, language: str, name: str = "") -> FileStats:
    """Classify every line of *content* using the grammar of *language*."""
    total, blank, comment, code = count_lines(content, grammar_for(language))
    return FileStats(
        name=name,
        language=language,
        total_lines=total,
        blank_lines=blank,
        comment_lines=comment,
        code_lines=code,
    )


def resolve_and_classify(name: str, content: str) -> FileStats:
    """Detect the language of *name* and classify *content* with it."""
    return classify(content, resolve(name), name=name)
