from __future__ import annotations

import math
import re
from typing import Any, Iterable

from .models import RawRow

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")
_LIST_SEPARATOR = ","


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def to_text(value: Any) -> str | None:
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def first_present(row: RawRow, synonyms: Iterable[str]) -> Any:
    """Return the value of the first synonym that holds a non-blank value."""
    for key in synonyms:
        if key in row and not is_blank(row[key]):
            return row[key]
    return None


def has_column(row: RawRow, names: Iterable[str]) -> bool:
    return any(name in row for name in names)


def split_list(value: Any) -> tuple[str, ...]:
    text = to_text(value)
    if text is None:
        return ()
    items: list[str] = []
    for piece in text.split(_LIST_SEPARATOR):
        piece = piece.strip()
        if piece and piece not in items:
            items.append(piece)
    return tuple(items)


def parse_int(value: Any) -> int | None:
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _LEADING_INT_RE.match(str(value).strip())
    if not match:
        return None
    return int(match.group(0))


def parse_bool(value: Any, true_tokens: Iterable[str]) -> bool:
    if value is True:
        return True
    if not isinstance(value, str):
        return False
    return value.strip().casefold() in {token.casefold() for token in true_tokens}


def text_field(row: RawRow, synonyms: Iterable[str]) -> str | None:
    return to_text(first_present(row, synonyms))


def list_field(row: RawRow, synonyms: Iterable[str]) -> tuple[str, ...]:
    return split_list(first_present(row, synonyms))


def int_field(row: RawRow, synonyms: Iterable[str], default: int | None = None) -> int | None:
    parsed = parse_int(first_present(row, synonyms))
    return default if parsed is None else parsed


def bool_field(row: RawRow, synonyms: Iterable[str], true_tokens: Iterable[str]) -> bool:
    """True when any synonym column holds a true token."""
    tokens = tuple(true_tokens)
    return any(parse_bool(row[key], tokens) for key in synonyms if key in row)


def grade_column_names(grade: int, templates: Iterable[str]) -> list[str]:
    return [template.format(grade=grade) for template in templates]
