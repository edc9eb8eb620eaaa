from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from .models import CandidateRecord, ImportReport


def _flat_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, str) for item in value):
            return ", ".join(value)
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return value


def records_to_payloads(records: Iterable[CandidateRecord]) -> list[dict[str, Any]]:
    return [record.to_payload() for record in records]


def records_to_frame(records: Iterable[CandidateRecord]) -> pd.DataFrame:
    rows = [
        {key: _flat_value(value) for key, value in payload.items()}
        for payload in records_to_payloads(records)
    ]
    return pd.DataFrame(rows)


def report_to_dict(report: ImportReport) -> dict[str, Any]:
    return {
        **report.summary(),
        "failures": [
            {
                "position": outcome.position,
                "kind": outcome.record.kind,
                "identity": outcome.record.identity,
                "error_message": outcome.error_message,
            }
            for outcome in report.failures
        ],
    }


def write_dataframe(df: pd.DataFrame, path: Path) -> None:
    if df is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8-sig")


def write_json(payload: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
