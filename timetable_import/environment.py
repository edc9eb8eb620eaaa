from __future__ import annotations

import os
import sys

import pandas as pd


def assert_runtime_compatibility() -> None:
    if os.getenv("TIMETABLE_IMPORT_SKIP_RUNTIME_CHECK", "0") == "1":
        return

    if sys.version_info < (3, 11):
        raise RuntimeError(
            "Unsupported Python version. Use Python 3.11+ for this project "
            f"(current: {sys.version.split()[0]})."
        )

    major = int(pd.__version__.split(".")[0])
    if major < 2:
        raise RuntimeError(f"pandas 2.0+ is required (current: {pd.__version__}).")

    # pandas only imports its .xls engine when a legacy workbook is read.
    try:
        import xlrd  # noqa: F401
    except ImportError as exc:
        raise RuntimeError(
            "xlrd is not installed, so .xls workbooks cannot be read. "
            "Install dependencies via `pip install -e .`."
        ) from exc
