from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

RawRow = dict[str, Any]
Slot = tuple[int, int]


@dataclass(frozen=True, slots=True)
class TeacherCandidate:
    kind: ClassVar[str] = "teacher"

    id: str
    name: str
    email: str | None = None
    professional_group: str | None = None
    primary_subjects: tuple[str, ...] = ()
    secondary_subjects: tuple[str, ...] = ()
    target_periods: int | None = None
    role: str | None = None
    work_days_preference: int = 0
    locked: bool = False
    busy_slots: tuple[Slot, ...] = ()

    @property
    def identity(self) -> str:
        return self.id

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "subjects": list(self.primary_subjects),
            "secondary_subjects": list(self.secondary_subjects),
            "busy_slots": [list(slot) for slot in self.busy_slots],
            "work_days_preference": self.work_days_preference,
            "is_locked": self.locked,
        }
        if self.email is not None:
            payload["email"] = self.email
        if self.professional_group is not None:
            payload["professional_group_name"] = self.professional_group
        if self.target_periods is not None:
            payload["target_periods"] = self.target_periods
        if self.role is not None:
            payload["role"] = self.role
        return payload


@dataclass(frozen=True, slots=True)
class SubjectCandidate:
    kind: ClassVar[str] = "subject"

    name: str
    periods_per_grade: dict[str, int] = field(default_factory=dict)
    double_period_only: bool = False

    @property
    def identity(self) -> str:
        return self.name

    def __hash__(self) -> int:
        return hash((self.name, tuple(sorted(self.periods_per_grade.items())), self.double_period_only))

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "periods_per_week": dict(self.periods_per_grade),
            "is_double_period_only": self.double_period_only,
        }


@dataclass(frozen=True, slots=True)
class ClassCandidate:
    kind: ClassVar[str] = "class"

    name: str
    grade: int | None = None
    session: str | None = None
    homeroom_teacher_id: str | None = None
    locked: bool = False
    fixed_off_slots: tuple[Slot, ...] = ()

    @property
    def identity(self) -> str:
        return self.name

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "fixed_off_slots": [list(slot) for slot in self.fixed_off_slots],
            "is_locked": self.locked,
        }
        if self.grade is not None:
            payload["grade"] = self.grade
        if self.session is not None:
            payload["session"] = self.session
        if self.homeroom_teacher_id is not None:
            payload["homeroom_teacher_id"] = self.homeroom_teacher_id
        return payload


CandidateRecord = Union[TeacherCandidate, SubjectCandidate, ClassCandidate]


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    record: CandidateRecord
    succeeded: bool
    position: int
    error_message: str | None = None


@dataclass(frozen=True, slots=True)
class ImportReport:
    """Result of one import run; outcomes keep submission order."""

    total_accepted: int
    succeeded: int
    failed: int
    outcomes: tuple[ImportOutcome, ...] = ()

    @property
    def failures(self) -> list[ImportOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def complete(self) -> bool:
        return len(self.outcomes) == self.total_accepted

    def summary(self) -> dict[str, int]:
        return {
            "total_accepted": self.total_accepted,
            "succeeded": self.succeeded,
            "failed": self.failed,
        }


@dataclass(slots=True)
class NormalizeStats:
    total_rows: int = 0
    accepted_rows: int = 0
    dropped_rows_missing_identity: int = 0


@dataclass(slots=True)
class StageRecord:
    stage: str
    seconds: float
    details: dict[str, Any] = field(default_factory=dict)
