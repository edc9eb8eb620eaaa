from __future__ import annotations

from pathlib import Path

import pytest

from timetable_import.entities import normalize
from timetable_import.ingest import parse_file
from timetable_import.templates import IMPORT_TEMPLATES, template_frame, write_template


def test_template_frame_columns() -> None:
    frame = template_frame("subject")
    assert list(frame.columns) == ["Tên môn", "Khối 6", "Khối 7", "Khối 8", "Chỉ tiết đôi"]
    assert len(frame) == 1
    assert template_frame("class", include_example=False).empty


@pytest.mark.parametrize("entity_kind", sorted(IMPORT_TEMPLATES))
@pytest.mark.parametrize("suffix", [".csv", ".xlsx"])
def test_written_template_normalizes_to_one_record(tmp_path: Path, entity_kind: str, suffix: str) -> None:
    path = write_template(entity_kind, tmp_path / f"{entity_kind}{suffix}")
    records = normalize(parse_file(path), entity_kind)
    assert len(records) == 1


def test_teacher_template_example_values(tmp_path: Path) -> None:
    path = write_template("teacher", tmp_path / "teachers.xlsx")
    (teacher,) = normalize(parse_file(path), "teacher")
    assert teacher.id == "GV001"
    assert teacher.primary_subjects == ("Toán", "Lý")
    assert teacher.target_periods == 20
    assert teacher.professional_group == "Toán"


def test_unsupported_template_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_template("teacher", tmp_path / "teachers.json")
    with pytest.raises(ValueError):
        template_frame("room")
