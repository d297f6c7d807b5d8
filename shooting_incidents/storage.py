"""Persistence of pipeline outputs for the presentation layer."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict

import pandas as pd

from . import config
from .model import ModelSummary
from .transform import IncidentSummary

logger = logging.getLogger(__name__)

SUMMARY_TABLES: Dict[str, str] = {
    "year": "incidents_by_year",
    "borough": "incidents_by_borough",
    "hour": "incidents_by_hour",
}
COEFFICIENTS_TABLE = "murder_model_coefficients"
FIT_STATISTICS_FILE = "murder_model_fit.json"


class ReportStore:
    """Writes summary tables and model results under one directory."""

    def __init__(self, directory: Path | str = config.DERIVED_DATA_DIR) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def table_path(self, name: str) -> Path:
        return self.directory / f"{name}.parquet"

    def write_table(self, name: str, frame: pd.DataFrame) -> Path:
        path = self.table_path(name)
        frame.to_parquet(path, index=False)
        logger.info("Wrote %s to %s (%s rows)", name, path, len(frame))
        return path

    def read_table(self, name: str) -> pd.DataFrame:
        return pd.read_parquet(self.table_path(name))

    def write_summary(self, summary: IncidentSummary) -> Dict[str, Path]:
        frames = summary.as_frames()
        return {key: self.write_table(SUMMARY_TABLES[key], frames[key]) for key in SUMMARY_TABLES}

    def write_model(self, model: ModelSummary) -> Dict[str, Path]:
        coefficients = self.write_table(COEFFICIENTS_TABLE, model.coefficients)
        fit_path = self.directory / FIT_STATISTICS_FILE
        with open(fit_path, "w", encoding="utf-8") as handle:
            json.dump(model.fit_statistics(), handle, indent=2)
        logger.info("Wrote model fit statistics to %s", fit_path)
        return {"coefficients": coefficients, "fit": fit_path}

    def read_fit_statistics(self) -> Dict[str, object]:
        with open(self.directory / FIT_STATISTICS_FILE, encoding="utf-8") as handle:
            return json.load(handle)


__all__ = ["ReportStore", "SUMMARY_TABLES", "COEFFICIENTS_TABLE", "FIT_STATISTICS_FILE"]
