"""JSON report schemas."""

from __future__ import annotations

from pydantic import BaseModel

from loc_analyzer.ingest import IngestFailure
from loc_analyzer.models import Report


class TotalsRow(BaseModel):
    files: int
    blank: int
    comment: int
    code: int
    total: int


class LanguageRow(TotalsRow):
    language: str
    percentage: float


class FileRow(BaseModel):
    name: str
    language: str
    lines: int
    blank: int
    comment: int
    code: int


class FailureRow(BaseModel):
    name: str
    reason: str


class ReportResponse(BaseModel):
    total: TotalsRow
    languages: list[LanguageRow]
    files: list[FileRow]
    failures: list[FailureRow] = []

    @classmethod
    def from_report(
        cls,
        report: Report,
        failures: list[IngestFailure] | None = None,
    ) -> ReportResponse:
        """Languages sorted by code lines; files kept in input order."""
        t = report.total
        return cls(
            total=TotalsRow(
                files=t.file_count,
                blank=t.blank_lines,
                comment=t.comment_lines,
                code=t.code_lines,
                total=t.total_lines,
            ),
            languages=[
                LanguageRow(
                    language=name,
                    files=s.file_count,
                    blank=s.blank_lines,
                    comment=s.comment_lines,
                    code=s.code_lines,
                    total=s.total_lines,
                    percentage=s.code_percentage(t.code_lines),
                )
                for name, s in report.languages_by_code()
            ],
            files=[
                FileRow(
                    name=f.name,
                    language=f.language,
                    lines=f.total_lines,
                    blank=f.blank_lines,
                    comment=f.comment_lines,
                    code=f.code_lines,
                )
                for f in report.files
            ],
            failures=[FailureRow(name=x.name, reason=x.reason) for x in failures or []],
        )
