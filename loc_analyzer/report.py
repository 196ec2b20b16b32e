"""Plain-text rendering of a :class:`Report`."""

from __future__ import annotations

from loc_analyzer.models import Report


def _n(value: int) -> str:
    return f"{value:,}"


def render_summary(report: Report) -> list[str]:
    t = report.total
    return [
        f"Total files:    {_n(t.file_count)}",
        f"Lines of code:  {_n(t.code_lines)}",
        f"Comment lines:  {_n(t.comment_lines)}",
        f"Blank lines:    {_n(t.blank_lines)}",
    ]


def render_languages(report: Report) -> list[str]:
    rows = [("Language", "Files", "Blank", "Comment", "Code", "Total", "%")]
    for name, s in report.languages_by_code():
        rows.append(
            (
                name,
                _n(s.file_count),
                _n(s.blank_lines),
                _n(s.comment_lines),
                _n(s.code_lines),
                _n(s.total_lines),
                f"{s.code_percentage(report.total.code_lines):.1f}%",
            )
        )
    t = report.total
    rows.append(
        (
            "Total",
            _n(t.file_count),
            _n(t.blank_lines),
            _n(t.comment_lines),
            _n(t.code_lines),
            _n(t.total_lines),
            "100.0%" if t.code_lines else "0.0%",
        )
    )
    return _table(rows)


def render_files(report: Report) -> list[str]:
    rows = [("File", "Language", "Blank", "Comment", "Code", "Total")]
    for f in report.files_by_code():
        rows.append(
            (
                f.name,
                f.language,
                _n(f.blank_lines),
                _n(f.comment_lines),
                _n(f.code_lines),
                _n(f.total_lines),
            )
        )
    return _table(rows)


def _table(rows: list[tuple[str, ...]]) -> list[str]:
    """Left-align the first two columns of text, right-align numbers."""
    widths = [max(len(r[i]) for r in rows) for i in range(len(rows[0]))]
    text_cols = 2 if rows[0][1] == "Language" else 1
    out = []
    for idx, row in enumerate(rows):
        cells = [
            cell.ljust(widths[i]) if i < text_cols else cell.rjust(widths[i])
            for i, cell in enumerate(row)
        ]
        out.append("  ".join(cells).rstrip())
        if idx == 0:
            out.append("  ".join("-" * w for w in widths))
    return out
