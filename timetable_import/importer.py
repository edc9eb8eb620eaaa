from __future__ import annotations

import logging
from typing import Callable, Sequence

from .errors import ImportCancelledError
from .models import CandidateRecord, ImportOutcome, ImportReport

logger = logging.getLogger(__name__)

CreateOne = Callable[[CandidateRecord], object]
ProgressFn = Callable[[str, float], None] | None
CancelCheck = Callable[[], bool] | None


def _progress(progress_fn: ProgressFn, message: str, fraction: float) -> None:
    if progress_fn:
        progress_fn(message, max(0.0, min(1.0, fraction)))


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _build_report(total: int, outcomes: list[ImportOutcome]) -> ImportReport:
    succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
    return ImportReport(
        total_accepted=total,
        succeeded=succeeded,
        failed=len(outcomes) - succeeded,
        outcomes=tuple(outcomes),
    )


def run_import(
    records: Sequence[CandidateRecord],
    create_one: CreateOne,
    *,
    progress_fn: ProgressFn = None,
    cancel_check: CancelCheck = None,
) -> ImportReport:
    """Submit each record through ``create_one`` in order, one at a time.

    ``create_one`` signals failure by raising; the message is kept on the
    record's outcome and the loop moves on to the next record. Nothing is
    retried. When ``cancel_check`` returns True before a record is submitted,
    ImportCancelledError is raised with the report of what already ran.
    """
    total = len(records)
    outcomes: list[ImportOutcome] = []

    for position, record in enumerate(records):
        if cancel_check is not None and cancel_check():
            raise ImportCancelledError(_build_report(total, outcomes))

        try:
            create_one(record)
        except Exception as exc:
            message = _error_message(exc)
            logger.warning("Failed to import %s %r: %s", record.kind, record.identity, message)
            outcomes.append(
                ImportOutcome(record=record, succeeded=False, position=position, error_message=message)
            )
        else:
            outcomes.append(ImportOutcome(record=record, succeeded=True, position=position))

        _progress(progress_fn, f"Imported {position + 1:,} of {total:,} records", (position + 1) / total)

    report = _build_report(total, outcomes)
    logger.info(
        "Import finished: %d succeeded, %d failed of %d",
        report.succeeded,
        report.failed,
        report.total_accepted,
    )
    return report
