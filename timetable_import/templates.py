from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd


@dataclass(frozen=True, slots=True)
class ImportTemplate:
    title: str
    columns: tuple[str, ...]
    example: dict[str, Any]


IMPORT_TEMPLATES: dict[str, ImportTemplate] = {
    "teacher": ImportTemplate(
        title="Nhập danh sách Giáo viên",
        columns=("ID", "Họ tên", "Email", "Tổ CM", "Môn dạy", "Số tiết"),
        example={
            "ID": "GV001",
            "Họ tên": "Nguyễn Văn A",
            "Email": "nguyenvana@example.com",
            "Tổ CM": "Toán",
            "Môn dạy": "Toán, Lý",
            "Số tiết": "20",
        },
    ),
    "subject": ImportTemplate(
        title="Nhập danh sách Môn học",
        columns=("Tên môn", "Khối 6", "Khối 7", "Khối 8", "Chỉ tiết đôi"),
        example={
            "Tên môn": "Toán",
            "Khối 6": "4",
            "Khối 7": "4",
            "Khối 8": "4",
            "Chỉ tiết đôi": "Không",
        },
    ),
    "class": ImportTemplate(
        title="Nhập danh sách Lớp học",
        columns=("Tên lớp", "Khối", "Buổi", "GVCN"),
        example={"Tên lớp": "6A1", "Khối": "6", "Buổi": "Sáng", "GVCN": "GV001"},
    ),
}


def get_template(entity_kind: str) -> ImportTemplate:
    try:
        return IMPORT_TEMPLATES[entity_kind]
    except KeyError as exc:
        raise ValueError(f"No import template for entity kind {entity_kind!r}") from exc


def template_frame(entity_kind: str, include_example: bool = True) -> pd.DataFrame:
    template = get_template(entity_kind)
    rows = [template.example] if include_example else []
    return pd.DataFrame(rows, columns=list(template.columns))


def write_template(entity_kind: str, path: Path, include_example: bool = True) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = template_frame(entity_kind, include_example=include_example)

    suffix = path.suffix.lower()
    if suffix == ".csv":
        # BOM so spreadsheet apps open the Vietnamese headers as UTF-8.
        frame.to_csv(path, index=False, encoding="utf-8-sig")
    elif suffix == ".xlsx":
        frame.to_excel(path, index=False, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported template format {suffix!r}; use .csv or .xlsx")
    return path
