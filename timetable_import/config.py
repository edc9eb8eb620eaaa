from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

EntityKind = Literal["teacher", "subject", "class"]
FileKind = Literal["csv", "workbook"]

ENTITY_KINDS: tuple[str, ...] = ("teacher", "subject", "class")
FILE_KINDS: tuple[str, ...] = ("csv", "workbook")

GRADES: tuple[int, ...] = (6, 7, 8, 9, 10, 11, 12)
SESSION_LABELS: tuple[str, ...] = ("Sáng", "Chiều")

# Per-grade period columns for subjects, formatted with the grade number.
GRADE_COLUMN_TEMPLATES: tuple[str, ...] = ("Khối {grade}", "Grade {grade}", "grade_{grade}")

# Only the first template was ever matched by the old dashboard import.
LEGACY_GRADE_COLUMN_TEMPLATES: tuple[str, ...] = ("Khối {grade}",)


@dataclass(slots=True)
class ImportConfig:
    preview_rows: int = 5
    grades: tuple[int, ...] = GRADES
    session_labels: tuple[str, ...] = SESSION_LABELS
    # Compared after trim + casefold; literal True is always accepted.
    true_tokens: tuple[str, ...] = ("có", "true")
    grade_column_templates: tuple[str, ...] = GRADE_COLUMN_TEMPLATES

    encoding_candidates: tuple[str, ...] = field(
        default_factory=lambda: ("utf-8-sig", "utf-8", "cp1258", "latin-1")
    )


# Accepted header names per logical field, highest priority first.
TEACHER_COLUMNS: dict[str, tuple[str, ...]] = {
    "id": ("ID", "id", "Mã GV"),
    "name": ("Họ tên", "name", "Tên"),
    "email": ("Email", "email"),
    "professional_group": ("Tổ CM", "Tổ chuyên môn", "professional_group_name"),
    "subjects": ("Môn dạy", "subjects"),
    "secondary_subjects": ("Môn dạy phụ", "secondary_subjects"),
    "target_periods": ("Số tiết", "target_periods"),
    "role": ("Vai trò", "role"),
    "work_days_preference": ("work_days_preference",),
}

SUBJECT_COLUMNS: dict[str, tuple[str, ...]] = {
    "name": ("Tên môn", "name", "Môn học"),
    "double_period_only": ("Chỉ tiết đôi", "is_double_period_only"),
}

CLASS_COLUMNS: dict[str, tuple[str, ...]] = {
    "name": ("Tên lớp", "name", "Lớp"),
    "grade": ("Khối", "grade"),
    "session": ("Buổi", "session"),
    "homeroom_teacher_id": ("GVCN", "homeroom_teacher_id"),
}

ENTITY_COLUMNS: dict[str, dict[str, tuple[str, ...]]] = {
    "teacher": TEACHER_COLUMNS,
    "subject": SUBJECT_COLUMNS,
    "class": CLASS_COLUMNS,
}
