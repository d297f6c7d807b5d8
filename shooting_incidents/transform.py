"""Grouped incident counts by year, borough and hour of day."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

import pandas as pd

from .errors import MalformedInputError

logger = logging.getLogger(__name__)

COUNT_COLUMN = "incidents"
HOURS = range(24)


@dataclass(frozen=True)
class IncidentSummary:
    """Three independent grouped counts over one normalized record set."""

    by_year: pd.Series
    by_borough: pd.Series
    by_hour: pd.Series
    total: int

    def as_frames(self) -> Dict[str, pd.DataFrame]:
        return {
            "year": self.by_year.reset_index(),
            "borough": self.by_borough.reset_index(),
            "hour": self.by_hour.reset_index(),
        }

    def as_dict(self) -> Dict[str, Dict[object, int]]:
        return {
            "year": {int(k): int(v) for k, v in self.by_year.items()},
            "borough": {str(k): int(v) for k, v in self.by_borough.items()},
            "hour": {int(k): int(v) for k, v in self.by_hour.items()},
        }


def _empty_counts(index_name: str) -> pd.Series:
    return pd.Series(
        [],
        index=pd.Index([], name=index_name, dtype=object if index_name == "borough" else "int64"),
        dtype="int64",
        name=COUNT_COLUMN,
    )


def count_by_year(df: pd.DataFrame) -> pd.Series:
    if df.empty:
        return _empty_counts("year")
    counts = df.groupby("year").size().sort_index().astype("int64")
    counts.index = counts.index.astype("int64")
    return counts.rename(COUNT_COLUMN)


def count_by_borough(df: pd.DataFrame) -> pd.Series:
    """Counts per borough label, ordered by first appearance in ``df``."""
    if df.empty:
        return _empty_counts("borough")
    labels = df["borough"].astype(object)
    counts = labels.value_counts().reindex(pd.unique(labels)).astype("int64")
    counts.index.name = "borough"
    return counts.rename(COUNT_COLUMN)


def count_by_hour(df: pd.DataFrame) -> pd.Series:
    """Counts for every hour 0-23; hours with no records are reported as zero."""
    hours = df["hour"] if not df.empty else pd.Series([], dtype="int64")
    out_of_range = ~hours.isin(HOURS)
    if out_of_range.any():
        row = out_of_range[out_of_range].index[0]
        raise MalformedInputError("Hour outside 0-23", value=hours[row], row=row)
    counts = hours.value_counts().reindex(HOURS, fill_value=0).astype("int64")
    counts.index = pd.Index(HOURS, name="hour", dtype="int64")
    return counts.rename(COUNT_COLUMN)


def summarize_incidents(df: pd.DataFrame) -> IncidentSummary:
    summary = IncidentSummary(
        by_year=count_by_year(df),
        by_borough=count_by_borough(df),
        by_hour=count_by_hour(df),
        total=len(df),
    )
    if df.empty:
        logger.warning("No incidents to aggregate")
    logger.info(
        "Aggregated %s incidents (%s years, %s boroughs)",
        summary.total,
        len(summary.by_year),
        len(summary.by_borough),
    )
    return summary


__all__ = [
    "IncidentSummary",
    "count_by_borough",
    "count_by_hour",
    "count_by_year",
    "summarize_incidents",
]
