from __future__ import annotations

import json
from pathlib import Path

from timetable_import.export import records_to_frame, report_to_dict, write_json
from timetable_import.importer import run_import
from timetable_import.models import SubjectCandidate, TeacherCandidate


def test_records_to_frame_flattens_lists() -> None:
    records = [
        TeacherCandidate(id="GV001", name="A", primary_subjects=("Toán", "Lý"), target_periods=20),
        TeacherCandidate(id="GV002", name="B"),
    ]
    frame = records_to_frame(records)
    assert frame.loc[0, "subjects"] == "Toán, Lý"
    assert frame.loc[0, "target_periods"] == 20
    assert frame.loc[1, "subjects"] == ""


def test_subject_payload_keeps_grade_map() -> None:
    subject = SubjectCandidate(name="Toán", periods_per_grade={"6": 4, "7": 4})
    frame = records_to_frame([subject])
    assert json.loads(frame.loc[0, "periods_per_week"]) == {"6": 4, "7": 4}


def test_report_to_dict_lists_failures(tmp_path: Path) -> None:
    def create_one(record: SubjectCandidate) -> None:
        if record.name == "Văn":
            raise RuntimeError("subject exists")

    report = run_import([SubjectCandidate(name="Toán"), SubjectCandidate(name="Văn")], create_one)
    payload = report_to_dict(report)
    assert payload == {
        "total_accepted": 2,
        "succeeded": 1,
        "failed": 1,
        "failures": [
            {"position": 1, "kind": "subject", "identity": "Văn", "error_message": "subject exists"},
        ],
    }

    path = tmp_path / "out" / "report.json"
    write_json(payload, path)
    assert json.loads(path.read_text(encoding="utf-8")) == payload
