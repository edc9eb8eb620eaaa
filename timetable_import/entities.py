from __future__ import annotations

from typing import Callable, Iterable

from .config import CLASS_COLUMNS, ENTITY_KINDS, SUBJECT_COLUMNS, TEACHER_COLUMNS, ImportConfig
from .models import (
    CandidateRecord,
    ClassCandidate,
    NormalizeStats,
    RawRow,
    SubjectCandidate,
    TeacherCandidate,
)
from .normalization import (
    bool_field,
    first_present,
    grade_column_names,
    has_column,
    int_field,
    list_field,
    parse_int,
    text_field,
)

RowBuilder = Callable[[RawRow, ImportConfig], CandidateRecord | None]


def build_teacher(row: RawRow, config: ImportConfig) -> TeacherCandidate | None:
    teacher_id = text_field(row, TEACHER_COLUMNS["id"])
    name = text_field(row, TEACHER_COLUMNS["name"])
    if not teacher_id or not name:
        return None

    target_periods = int_field(row, TEACHER_COLUMNS["target_periods"])
    if target_periods is not None and target_periods < 0:
        target_periods = None

    return TeacherCandidate(
        id=teacher_id,
        name=name,
        email=text_field(row, TEACHER_COLUMNS["email"]),
        professional_group=text_field(row, TEACHER_COLUMNS["professional_group"]),
        primary_subjects=list_field(row, TEACHER_COLUMNS["subjects"]),
        secondary_subjects=list_field(row, TEACHER_COLUMNS["secondary_subjects"]),
        target_periods=target_periods,
        role=text_field(row, TEACHER_COLUMNS["role"]),
        work_days_preference=int_field(row, TEACHER_COLUMNS["work_days_preference"], default=0),
    )


def _periods_per_grade(row: RawRow, config: ImportConfig) -> dict[str, int]:
    periods: dict[str, int] = {}
    for grade in config.grades:
        names = grade_column_names(grade, config.grade_column_templates)
        if not has_column(row, names):
            continue
        # A blank cell under an existing column counts as 0 periods.
        parsed = parse_int(first_present(row, names))
        periods[str(grade)] = parsed if parsed is not None and parsed >= 0 else 0
    return periods


def build_subject(row: RawRow, config: ImportConfig) -> SubjectCandidate | None:
    name = text_field(row, SUBJECT_COLUMNS["name"])
    if not name:
        return None
    return SubjectCandidate(
        name=name,
        periods_per_grade=_periods_per_grade(row, config),
        double_period_only=bool_field(row, SUBJECT_COLUMNS["double_period_only"], config.true_tokens),
    )


def build_class(row: RawRow, config: ImportConfig) -> ClassCandidate | None:
    name = text_field(row, CLASS_COLUMNS["name"])
    if not name:
        return None

    grade = int_field(row, CLASS_COLUMNS["grade"])
    if grade not in config.grades:
        grade = None

    session = text_field(row, CLASS_COLUMNS["session"])
    if session not in config.session_labels:
        session = None

    return ClassCandidate(
        name=name,
        grade=grade,
        session=session,
        homeroom_teacher_id=text_field(row, CLASS_COLUMNS["homeroom_teacher_id"]),
    )


ROW_BUILDERS: dict[str, RowBuilder] = {
    "teacher": build_teacher,
    "subject": build_subject,
    "class": build_class,
}


class RecordBuilder:
    def __init__(self, entity_kind: str, config: ImportConfig | None = None) -> None:
        if entity_kind not in ROW_BUILDERS:
            raise ValueError(f"Unsupported entity kind {entity_kind!r}; expected one of {ENTITY_KINDS}")
        self.entity_kind = entity_kind
        self.config = config or ImportConfig()
        self.records: list[CandidateRecord] = []
        self.stats = NormalizeStats()
        self._build = ROW_BUILDERS[entity_kind]

    def process_row(self, row: RawRow) -> CandidateRecord | None:
        self.stats.total_rows += 1
        record = self._build(row, self.config)
        if record is None:
            # Blank or decorative rows are dropped without being reported.
            self.stats.dropped_rows_missing_identity += 1
            return None
        self.records.append(record)
        self.stats.accepted_rows += 1
        return record

    def process_rows(self, rows: Iterable[RawRow]) -> None:
        for row in rows:
            self.process_row(row)


def normalize_with_stats(
    rows: Iterable[RawRow],
    entity_kind: str,
    config: ImportConfig | None = None,
) -> tuple[list[CandidateRecord], NormalizeStats]:
    builder = RecordBuilder(entity_kind, config)
    builder.process_rows(rows)
    return builder.records, builder.stats


def normalize(
    rows: Iterable[RawRow],
    entity_kind: str,
    config: ImportConfig | None = None,
) -> list[CandidateRecord]:
    """Map raw rows onto typed candidates, keeping input order of accepted rows."""
    records, _ = normalize_with_stats(rows, entity_kind, config)
    return records
