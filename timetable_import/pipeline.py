from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from .config import FileKind, ImportConfig
from .entities import normalize_with_stats
from .importer import CancelCheck, CreateOne, ProgressFn, run_import
from .ingest import parse
from .models import CandidateRecord, ImportReport, NormalizeStats, StageRecord


@dataclass(slots=True)
class PipelineResult:
    entity_kind: str
    raw_row_count: int
    normalize_stats: NormalizeStats
    report: ImportReport
    profile_records: list[StageRecord]


@dataclass(slots=True)
class PreviewResult:
    entity_kind: str
    raw_row_count: int
    accepted_count: int
    records: list[CandidateRecord]

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_kind": self.entity_kind,
            "raw_row_count": self.raw_row_count,
            "accepted_count": self.accepted_count,
            "records": [record.to_payload() for record in self.records],
        }


def _progress(progress_fn: ProgressFn, message: str, fraction: float) -> None:
    if progress_fn:
        progress_fn(message, max(0.0, min(1.0, fraction)))


def _stage(profile: list[StageRecord], name: str):
    class _StageCtx:
        def __enter__(self_nonlocal):
            self_nonlocal.start = time.perf_counter()
            self_nonlocal.details = {}
            return self_nonlocal

        def __exit__(self_nonlocal, exc_type, exc, tb):
            elapsed = time.perf_counter() - self_nonlocal.start
            profile.append(StageRecord(stage=name, seconds=round(elapsed, 4), details=self_nonlocal.details))

    return _StageCtx()


def preview(
    file_bytes: bytes,
    file_kind: FileKind,
    entity_kind: str,
    *,
    config: ImportConfig | None = None,
    limit: int | None = None,
) -> PreviewResult:
    config = config or ImportConfig()
    rows = parse(file_bytes, file_kind, config)
    records, stats = normalize_with_stats(rows, entity_kind, config)
    limit = config.preview_rows if limit is None else max(0, int(limit))
    return PreviewResult(
        entity_kind=entity_kind,
        raw_row_count=len(rows),
        accepted_count=stats.accepted_rows,
        records=records[:limit],
    )


def run_import_pipeline(
    file_bytes: bytes,
    file_kind: FileKind,
    entity_kind: str,
    create_one: CreateOne,
    *,
    config: ImportConfig | None = None,
    progress_fn: ProgressFn = None,
    cancel_check: CancelCheck = None,
) -> PipelineResult:
    """Parse, normalize and import one file; a ParseError stops before any import."""
    config = config or ImportConfig()
    profile_records: list[StageRecord] = []

    _progress(progress_fn, f"Reading {file_kind} file", 0.0)
    with _stage(profile_records, "parse") as stage:
        rows = parse(file_bytes, file_kind, config)
        stage.details["rows"] = len(rows)

    _progress(progress_fn, f"Normalizing {len(rows):,} rows as {entity_kind} records", 0.1)
    with _stage(profile_records, "normalize") as stage:
        records, stats = normalize_with_stats(rows, entity_kind, config)
        stage.details["accepted"] = stats.accepted_rows
        stage.details["dropped"] = stats.dropped_rows_missing_identity

    _progress(progress_fn, f"Importing {len(records):,} records", 0.2)
    with _stage(profile_records, "import") as stage:
        report = run_import(
            records,
            create_one,
            progress_fn=lambda message, fraction: _progress(progress_fn, message, 0.2 + (fraction * 0.8)),
            cancel_check=cancel_check,
        )
        stage.details.update(report.summary())

    _progress(progress_fn, "Import completed", 1.0)

    return PipelineResult(
        entity_kind=entity_kind,
        raw_row_count=len(rows),
        normalize_stats=stats,
        report=report,
        profile_records=profile_records,
    )
