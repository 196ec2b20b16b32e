"""Analysis pipeline: classify text units and aggregate them into a report.

``analyze`` runs sequentially. ``analyze_async`` pushes each unit's
classification onto a worker thread under a semaphore; ``asyncio.gather``
returns results in submission order, so ``Report.files`` always follows the
input order whatever order the workers finish in.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from loc_analyzer.aggregator import aggregate
from loc_analyzer.classifier import resolve_and_classify
from loc_analyzer.core.config import DEFAULT_CONCURRENCY
from loc_analyzer.ingest import IngestFailure, SourceUnit
from loc_analyzer.models import FileStats, Report
from loc_analyzer.progress import ProgressTracker

log = structlog.get_logger("loc_analyzer.analyzer")

UnitResult = FileStats | IngestFailure


@dataclass
class AnalysisOutcome:
    report: Report
    failures: list[IngestFailure] = field(default_factory=list)


def _classify_unit(unit: SourceUnit) -> UnitResult:
    try:
        return resolve_and_classify(unit.name, unit.content)
    except Exception as e:
        log.error("analyze.unit_failed", name=unit.name, exc_info=True)
        return IngestFailure(unit.name, f"classification failed: {e}")


def _aggregate(results: Sequence[UnitResult], progress: ProgressTracker) -> AnalysisOutcome:
    files = [r for r in results if isinstance(r, FileStats)]
    failures = [r for r in results if isinstance(r, IngestFailure)]

    with progress.phase("aggregate") as p:
        report = aggregate(files)
        p.detail = f"{len(report.languages)} languages"

    log.info(
        "analyze.completed",
        files=report.total.file_count,
        languages=len(report.languages),
        code=report.total.code_lines,
        failures=len(failures),
    )
    return AnalysisOutcome(report=report, failures=failures)


def _prepare(progress: ProgressTracker | None) -> ProgressTracker:
    """Reuse the caller's tracker; a run fed units directly has no ingest phase."""
    progress = progress or ProgressTracker()
    if progress.get("ingest") is None:
        progress.skip_phase("ingest", "units supplied directly")
    return progress


def _classify_detail(results: Sequence[UnitResult]) -> str:
    failed = sum(1 for r in results if isinstance(r, IngestFailure))
    return f"{len(results) - failed} files, {failed} failed"


def analyze(
    units: Sequence[SourceUnit],
    progress: ProgressTracker | None = None,
) -> AnalysisOutcome:
    """Classify *units* one after another and aggregate the results."""
    progress = _prepare(progress)
    with progress.phase("classify", units_total=len(units)) as p:
        results: list[UnitResult] = []
        for unit in units:
            results.append(_classify_unit(unit))
            progress.advance("classify")
        p.detail = _classify_detail(results)
    return _aggregate(results, progress)


async def analyze_async(
    units: Sequence[SourceUnit],
    concurrency: int = DEFAULT_CONCURRENCY,
    progress: ProgressTracker | None = None,
) -> AnalysisOutcome:
    """Classify *units* with at most *concurrency* worker threads busy.

    Cancelling the caller cancels pending units; nothing is aggregated until
    every unit has finished.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")
    progress = _prepare(progress)
    sem = asyncio.Semaphore(concurrency)

    async def _run(unit: SourceUnit) -> UnitResult:
        async with sem:
            result = await asyncio.to_thread(_classify_unit, unit)
        progress.advance("classify")
        return result

    with progress.phase("classify", units_total=len(units)) as p:
        try:
            results = await asyncio.gather(*(_run(u) for u in units))
        except asyncio.CancelledError:
            log.info("analyze.cancelled", units=len(units), done=p.units_done)
            raise
        p.detail = _classify_detail(results)
    return _aggregate(results, progress)
