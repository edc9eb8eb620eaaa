from __future__ import annotations

from timetable_import.normalization import (
    first_present,
    grade_column_names,
    int_field,
    parse_bool,
    parse_int,
    split_list,
    to_text,
)


def test_text_is_trimmed_and_blank_becomes_none() -> None:
    assert to_text("  Nguyễn Văn A ") == "Nguyễn Văn A"
    assert to_text("   ") is None
    assert to_text(None) is None
    assert to_text(float("nan")) is None
    assert to_text(6.0) == "6"
    assert to_text(1001) == "1001"


def test_first_present_follows_priority_and_skips_blanks() -> None:
    row = {"id": "lower", "ID": "upper", "Mã GV": "ma"}
    assert first_present(row, ("ID", "id", "Mã GV")) == "upper"
    assert first_present({"ID": "  ", "Mã GV": "GV9"}, ("ID", "id", "Mã GV")) == "GV9"
    assert first_present({"other": "x"}, ("ID", "id")) is None


def test_split_list_trims_drops_empty_and_repeats() -> None:
    assert split_list("Toán, Lý") == ("Toán", "Lý")
    assert split_list(" Toán ,, Lý ,Toán,") == ("Toán", "Lý")
    assert split_list(None) == ()
    assert split_list("  ") == ()


def test_parse_int_leading_digits() -> None:
    assert parse_int("20") == 20
    assert parse_int(" 18 tiết") == 18
    assert parse_int("4.5") == 4
    assert parse_int(4.0) == 4
    assert parse_int(7) == 7
    assert parse_int("-2") == -2


def test_parse_int_failures() -> None:
    assert parse_int("abc") is None
    assert parse_int("") is None
    assert parse_int(None) is None
    assert parse_int(True) is None
    assert parse_int(float("inf")) is None


def test_int_field_default() -> None:
    assert int_field({}, ("work_days_preference",), default=0) == 0
    assert int_field({"work_days_preference": "x"}, ("work_days_preference",), default=0) == 0
    assert int_field({"work_days_preference": "5"}, ("work_days_preference",), default=0) == 5
    assert int_field({}, ("Số tiết",)) is None


def test_parse_bool_tokens() -> None:
    tokens = ("có", "true")
    assert parse_bool("Có", tokens) is True
    assert parse_bool(" có ", tokens) is True
    assert parse_bool("TRUE", tokens) is True
    assert parse_bool(True, tokens) is True
    assert parse_bool("Không", tokens) is False
    assert parse_bool(1, tokens) is False
    assert parse_bool(None, tokens) is False
    assert parse_bool(False, tokens) is False


def test_grade_column_names() -> None:
    templates = ("Khối {grade}", "Grade {grade}", "grade_{grade}")
    assert grade_column_names(10, templates) == ["Khối 10", "Grade 10", "grade_10"]
