"""Progress tracking for an analysis run.

A run goes through ``ingest``, ``classify`` and ``aggregate``. Each phase can
carry a unit count so a front-end can draw a per-file progress bar.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable

import structlog

log = structlog.get_logger("loc_analyzer.progress")


@dataclass
class PhaseProgress:
    phase: str
    status: str = "pending"  # "pending" | "running" | "completed" | "failed" | "skipped"
    units_total: int = 0
    units_done: int = 0
    start_time: float | None = None
    end_time: float | None = None
    detail: str = ""
    error: str | None = None

    @property
    def duration(self) -> float | None:
        if self.start_time is not None and self.end_time is not None:
            return round(self.end_time - self.start_time, 3)
        return None


ProgressCallback = Callable[[PhaseProgress], None]


class ProgressTracker:
    """Record phase transitions and notify listeners."""

    def __init__(self) -> None:
        self.phases: list[PhaseProgress] = []
        self._by_name: dict[str, PhaseProgress] = {}
        self.callbacks: list[ProgressCallback] = []

    def get(self, phase: str) -> PhaseProgress | None:
        return self._by_name.get(phase)

    def start_phase(self, phase: str, units_total: int = 0) -> None:
        p = PhaseProgress(
            phase=phase,
            status="running",
            units_total=units_total,
            start_time=time.monotonic(),
        )
        self.phases.append(p)
        self._by_name[phase] = p
        self._notify(p)

    def advance(self, phase: str, n: int = 1) -> None:
        p = self._by_name.get(phase)
        if p and p.status == "running":
            p.units_done += n
            self._notify(p)

    def complete_phase(self, phase: str, detail: str = "") -> None:
        self._finish(phase, "completed", detail=detail)

    def fail_phase(self, phase: str, error: str) -> None:
        self._finish(phase, "failed", error=error)

    def skip_phase(self, phase: str, reason: str) -> None:
        p = PhaseProgress(phase=phase, status="skipped", detail=reason)
        self.phases.append(p)
        self._by_name[phase] = p
        self._notify(p)

    @contextmanager
    def phase(self, phase: str, units_total: int = 0) -> Iterator[PhaseProgress]:
        """Run a block as *phase*; an escaping exception marks it failed."""
        self.start_phase(phase, units_total)
        p = self._by_name[phase]
        try:
            yield p
        except BaseException as e:
            self.fail_phase(phase, str(e) or type(e).__name__)
            raise
        if p.status == "running":
            self.complete_phase(phase, p.detail)

    def get_summary(self) -> dict[str, Any]:
        return {
            "phases": [
                {
                    "phase": p.phase,
                    "status": p.status,
                    "duration": p.duration,
                    "units": f"{p.units_done}/{p.units_total}" if p.units_total else None,
                    "detail": p.detail,
                    "error": p.error,
                }
                for p in self.phases
            ],
            "total_duration": round(sum(p.duration or 0 for p in self.phases), 3),
        }

    def _finish(self, phase: str, status: str, detail: str = "", error: str | None = None) -> None:
        p = self._by_name.get(phase)
        if p is None:
            return
        p.status = status
        p.end_time = time.monotonic()
        if detail:
            p.detail = detail
        p.error = error
        self._notify(p)

    def _notify(self, p: PhaseProgress) -> None:
        for cb in self.callbacks:
            try:
                cb(p)
            except Exception:
                log.debug("progress.callback_failed", phase=p.phase, exc_info=True)
