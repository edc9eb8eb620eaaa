"""Exception hierarchy for the import engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ImportReport


class ImportEngineError(Exception):
    """Base exception for all import engine errors."""


class ParseError(ImportEngineError):
    """The file bytes could not be decoded in the declared format."""

    def __init__(self, file_kind: str, message: str) -> None:
        self.file_kind = file_kind
        self.message = message
        super().__init__(f"Unable to read {file_kind} file: {message}")


class ImportCancelledError(ImportEngineError):
    """The caller abandoned the import between two records."""

    def __init__(self, report: ImportReport) -> None:
        self.report = report
        super().__init__(
            f"Import cancelled after {len(report.outcomes)} of {report.total_accepted} records"
        )
