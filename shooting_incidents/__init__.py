"""NYPD shooting incident analysis pipeline."""

from .cli import main as cli_main
from .errors import (
    DateParseError,
    MalformedInputError,
    ModelFitError,
    ShootingPipelineError,
    SourceUnavailableError,
    TimeParseError,
)
from .ingest import IncidentLoader, LoadStats, load_incidents
from .model import ModelSummary, fit_murder_model
from .normalize import normalize_incidents
from .storage import ReportStore
from .transform import IncidentSummary, summarize_incidents

__all__ = [
    "cli_main",
    "DateParseError",
    "MalformedInputError",
    "ModelFitError",
    "ShootingPipelineError",
    "SourceUnavailableError",
    "TimeParseError",
    "IncidentLoader",
    "LoadStats",
    "load_incidents",
    "ModelSummary",
    "fit_murder_model",
    "normalize_incidents",
    "ReportStore",
    "IncidentSummary",
    "summarize_incidents",
]
