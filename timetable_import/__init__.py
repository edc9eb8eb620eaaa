"""Bulk import of teacher, subject and class spreadsheets for timetabling."""

from .config import ImportConfig
from .entities import normalize
from .errors import ImportCancelledError, ParseError
from .importer import run_import
from .ingest import parse
from .models import ClassCandidate, ImportOutcome, ImportReport, SubjectCandidate, TeacherCandidate
from .pipeline import PipelineResult, preview, run_import_pipeline

__all__ = [
    "ClassCandidate",
    "ImportCancelledError",
    "ImportConfig",
    "ImportOutcome",
    "ImportReport",
    "ParseError",
    "PipelineResult",
    "SubjectCandidate",
    "TeacherCandidate",
    "normalize",
    "parse",
    "preview",
    "run_import",
    "run_import_pipeline",
]
