from __future__ import annotations

import sys

import pandas as pd
import pytest

from timetable_import.environment import assert_runtime_compatibility


def test_skip_env_var_bypasses_checks(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMETABLE_IMPORT_SKIP_RUNTIME_CHECK", "1")
    monkeypatch.setattr(pd, "__version__", "1.5.3")
    assert_runtime_compatibility()


def test_old_pandas_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMETABLE_IMPORT_SKIP_RUNTIME_CHECK", raising=False)
    monkeypatch.setattr(pd, "__version__", "1.5.3")
    with pytest.raises(RuntimeError, match="pandas 2.0"):
        assert_runtime_compatibility()


def test_missing_xls_engine_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMETABLE_IMPORT_SKIP_RUNTIME_CHECK", raising=False)
    # A None entry makes the import statement raise ImportError.
    monkeypatch.setitem(sys.modules, "xlrd", None)
    with pytest.raises(RuntimeError, match="xlrd"):
        assert_runtime_compatibility()
