from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ENTITY_KINDS, FILE_KINDS, ImportConfig, LEGACY_GRADE_COLUMN_TEMPLATES
from .entities import normalize_with_stats
from .environment import assert_runtime_compatibility
from .errors import ParseError
from .export import records_to_frame, records_to_payloads, write_dataframe, write_json
from .ingest import file_kind_from_name, parse
from .pipeline import preview
from .templates import write_template

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", required=True, help="Path to a CSV, XLSX or XLS file")
    parser.add_argument("--entity", required=True, choices=ENTITY_KINDS)
    parser.add_argument(
        "--kind",
        choices=FILE_KINDS,
        default=None,
        help="File format; guessed from the file extension when omitted",
    )
    parser.add_argument(
        "--legacy-grade-headers",
        action="store_true",
        help="Only recognise 'Khối N' per-grade columns for subjects",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timetable-import",
        description="Normalize teacher, subject and class spreadsheets for timetable bulk import.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    preview_cmd = sub.add_parser("preview", help="Print the first normalized records as JSON")
    _add_input_args(preview_cmd)
    preview_cmd.add_argument("--limit", type=int, default=None)

    normalize_cmd = sub.add_parser("normalize", help="Write every accepted record to JSON or CSV")
    _add_input_args(normalize_cmd)
    normalize_cmd.add_argument("--output", required=True, help="Output .json or .csv path")

    template_cmd = sub.add_parser("template", help="Write an import template")
    template_cmd.add_argument("--entity", required=True, choices=ENTITY_KINDS)
    template_cmd.add_argument("--output", required=True, help="Output .csv or .xlsx path")
    template_cmd.add_argument("--no-example", action="store_true")
    return parser


def _config_from_args(args: argparse.Namespace) -> ImportConfig:
    config = ImportConfig()
    if getattr(args, "legacy_grade_headers", False):
        config.grade_column_templates = LEGACY_GRADE_COLUMN_TEMPLATES
    return config


def _read_input(args: argparse.Namespace) -> tuple[bytes, str]:
    input_path = Path(args.input)
    kind = args.kind or file_kind_from_name(input_path.name)
    return input_path.read_bytes(), kind


def _run_preview(args: argparse.Namespace) -> None:
    file_bytes, kind = _read_input(args)
    result = preview(file_bytes, kind, args.entity, config=_config_from_args(args), limit=args.limit)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


def _run_normalize(args: argparse.Namespace) -> None:
    file_bytes, kind = _read_input(args)
    config = _config_from_args(args)
    rows = parse(file_bytes, kind, config)
    records, stats = normalize_with_stats(rows, args.entity, config)

    output = Path(args.output)
    if output.suffix.lower() == ".csv":
        write_dataframe(records_to_frame(records), output)
    else:
        write_json(records_to_payloads(records), output)

    print(f"[100.0%] Wrote {stats.accepted_rows:,} {args.entity} records to {output}")
    if stats.dropped_rows_missing_identity:
        print(f"Skipped {stats.dropped_rows_missing_identity:,} rows without an identity value")


def _run_template(args: argparse.Namespace) -> None:
    path = write_template(args.entity, Path(args.output), include_example=not args.no_example)
    print(f"Template written: {path}")


def main(argv: list[str] | None = None) -> int:
    assert_runtime_compatibility()
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "preview": _run_preview,
        "normalize": _run_normalize,
        "template": _run_template,
    }
    try:
        handlers[args.command](args)
    except ParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
