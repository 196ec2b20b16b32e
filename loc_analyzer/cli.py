"""CLI entry point: loc-analyze.

Subcommands:
    loc-analyze scan src/ vendor.zip README.md   # Count lines and print the report
    loc-analyze scan . --json                    # Same, as JSON
    loc-analyze languages                        # List known extensions and comment syntax
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from loc_analyzer.analyzer import analyze_async
from loc_analyzer.core.config import Settings
from loc_analyzer.core.logging import setup_logging
from loc_analyzer.exceptions import AnalyzerError
from loc_analyzer.grammar import grammar_for
from loc_analyzer.ingest import collect
from loc_analyzer.languages import EXTENSION_TO_LANGUAGE
from loc_analyzer.progress import ProgressTracker
from loc_analyzer.report import render_files, render_languages, render_summary
from loc_analyzer.schemas import ReportResponse


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """loc-analyze: count blank, comment and code lines per language."""
    try:
        settings = Settings.from_env()
    except AnalyzerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_format)
    ctx.obj = settings


@main.command("scan")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--files/--no-files", "show_files", default=True, help="Show per-file table")
@click.option("--include-unknown", is_flag=True, help="Also count files with unrecognised extensions")
@click.option("--concurrency", type=click.IntRange(min=1), default=None, help="Parallel classifiers")
@click.option("--skip-dir", "skip_dirs", multiple=True, help="Extra directory name to skip (repeatable)")
@click.option("--timings", is_flag=True, help="Print phase timings")
@click.pass_obj
def scan(
    settings: Settings,
    paths: tuple[Path, ...],
    as_json: bool,
    show_files: bool,
    include_unknown: bool,
    concurrency: int | None,
    skip_dirs: tuple[str, ...],
    timings: bool,
) -> None:
    """Analyse files, directories and zip/tar archives."""
    progress = ProgressTracker()

    with progress.phase("ingest", units_total=len(paths)) as p:
        ingested = collect(
            paths,
            skip_dirs=settings.skip_dirs | frozenset(skip_dirs),
            include_unknown=include_unknown,
        )
        p.units_done = len(paths)
        p.detail = f"{len(ingested.units)} units, {len(ingested.failures)} skipped"

    outcome = asyncio.run(
        analyze_async(
            ingested.units,
            concurrency=concurrency or settings.concurrency,
            progress=progress,
        )
    )
    failures = ingested.failures + outcome.failures
    report = outcome.report

    for failure in failures:
        click.echo(f"Skipped {failure.name}: {failure.reason}", err=True)

    if as_json:
        click.echo(ReportResponse.from_report(report, failures).model_dump_json(indent=2))
    elif report.total.file_count == 0:
        click.echo("No source files found.")
    else:
        click.echo("\n".join(render_summary(report)))
        click.echo("")
        click.echo("\n".join(render_languages(report)))
        if show_files:
            click.echo("")
            click.echo("\n".join(render_files(report)))

    if timings:
        summary = progress.get_summary()
        click.echo(f"\nPipeline summary (total: {summary['total_duration']}s):", err=True)
        for row in summary["phases"]:
            duration = f" ({row['duration']}s)" if row["duration"] is not None else ""
            units = f" [{row['units']}]" if row["units"] else ""
            detail = f" - {row['detail']}" if row["detail"] else ""
            click.echo(f"  [{row['status']}] {row['phase']}{units}{duration}{detail}", err=True)

    if report.total.file_count == 0 and failures:
        sys.exit(1)


@main.command("languages")
def languages() -> None:
    """List known extensions, their language and comment syntax."""
    for ext, label in sorted(EXTENSION_TO_LANGUAGE.items()):
        g = grammar_for(label)
        parts = []
        if g.single_line_marker:
            parts.append(g.single_line_marker)
        if g.has_block:
            parts.append(f"{g.block_start_marker} ... {g.block_end_marker}")
        click.echo(f"  .{ext:6s} {label:18s} {'  '.join(parts)}")


if __name__ == "__main__":
    main()
