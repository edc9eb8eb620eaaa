from __future__ import annotations

from io import BytesIO, StringIO
from pathlib import Path
from typing import Any, Callable, Iterable

import pandas as pd
from openpyxl import load_workbook

from .config import FILE_KINDS, FileKind, ImportConfig
from .errors import ParseError
from .models import RawRow

_SUFFIX_KINDS: dict[str, str] = {
    ".csv": "csv",
    ".xlsx": "workbook",
    ".xlsm": "workbook",
    ".xls": "workbook",
}

# Legacy BIFF workbooks are OLE2 compound documents; xlsx files are zip archives.
_OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def detect_encoding(raw: bytes, candidates: Iterable[str]) -> str:
    # The whole payload is checked; a sample can cut a multibyte character in half.
    for encoding in candidates:
        try:
            raw.decode(encoding)
            return encoding
        except UnicodeDecodeError:
            continue
    return "latin-1"


def file_kind_from_name(name: str) -> FileKind:
    suffix = Path(name).suffix.lower()
    kind = _SUFFIX_KINDS.get(suffix)
    if kind is None:
        raise ParseError(suffix.lstrip(".") or "unknown", "only .csv, .xlsx and .xls files are supported")
    return kind  # type: ignore[return-value]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))


def _header_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _rows_from_matrix(
    header: list[Any],
    body: Iterable[Iterable[Any]],
    *,
    skip_value: Callable[[Any], bool],
) -> list[RawRow]:
    columns = [(idx, _header_text(name)) for idx, name in enumerate(header)]
    columns = [(idx, name) for idx, name in columns if name]

    rows: list[RawRow] = []
    for values in body:
        values = list(values)
        row: RawRow = {}
        for idx, name in columns:
            if idx >= len(values) or name in row:
                continue
            value = values[idx]
            if skip_value(value):
                continue
            row[name] = value
        if any(not (isinstance(v, str) and not v.strip()) for v in row.values()):
            rows.append(row)
    return rows


def _csv_missing(value: Any) -> bool:
    # Short lines are padded with NaN by pandas; those cells were never written.
    return _is_missing(value)


def _workbook_missing(value: Any) -> bool:
    return _is_missing(value) or (isinstance(value, str) and value == "")


def _read_csv_text(text: str, **kwargs: Any) -> pd.DataFrame:
    return pd.read_csv(
        StringIO(text),
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        **kwargs,
    )


def parse_csv(file_bytes: bytes, config: ImportConfig | None = None) -> list[RawRow]:
    config = config or ImportConfig()
    if not file_bytes.strip():
        return []

    encoding = detect_encoding(file_bytes, config.encoding_candidates)
    try:
        text = file_bytes.decode(encoding)
        header = _read_csv_text(text, nrows=1)
        # Cells past the header width are dropped instead of failing the file.
        frame = _read_csv_text(text, usecols=list(range(header.shape[1])))
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise ParseError("csv", str(exc)) from exc

    if frame.empty:
        return []

    matrix = frame.values.tolist()
    return _rows_from_matrix(matrix[0], matrix[1:], skip_value=_csv_missing)


def _xls_matrix(file_bytes: bytes) -> list[list[Any]]:
    frame = pd.read_excel(BytesIO(file_bytes), sheet_name=0, header=None, dtype=object, engine="xlrd")
    return frame.values.tolist()


def _xlsx_matrix(file_bytes: bytes) -> list[list[Any]]:
    wb = load_workbook(filename=BytesIO(file_bytes), read_only=True, data_only=True)
    try:
        if not wb.sheetnames:
            return []
        sheet = wb[wb.sheetnames[0]]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        wb.close()


def parse_workbook(file_bytes: bytes) -> list[RawRow]:
    read_matrix = _xls_matrix if file_bytes.startswith(_OLE2_MAGIC) else _xlsx_matrix
    try:
        matrix = read_matrix(file_bytes)
    except Exception as exc:
        raise ParseError("workbook", str(exc) or type(exc).__name__) from exc

    if not matrix:
        return []
    return _rows_from_matrix(matrix[0], matrix[1:], skip_value=_workbook_missing)


def parse(file_bytes: bytes, file_kind: FileKind, config: ImportConfig | None = None) -> list[RawRow]:
    """Decode a csv or workbook byte stream into header-keyed rows.

    Either every row is returned or ParseError is raised; rows keep file order.
    """
    if file_kind == "csv":
        return parse_csv(file_bytes, config)
    if file_kind == "workbook":
        return parse_workbook(file_bytes)
    raise ValueError(f"Unsupported file kind {file_kind!r}; expected one of {FILE_KINDS}")


def parse_file(
    path: Path,
    file_kind: FileKind | None = None,
    config: ImportConfig | None = None,
) -> list[RawRow]:
    path = Path(path)
    kind = file_kind or file_kind_from_name(path.name)
    return parse(path.read_bytes(), kind, config)
