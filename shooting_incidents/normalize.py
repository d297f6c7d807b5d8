"""Schema normalization for raw shooting incident records.

Raw records arrive as strings exactly as published. Normalization parses the
occurrence date and time, coerces the categorical columns to closed label sets
with an explicit unknown label, converts the murder flag to a boolean, prunes
identifier/location/coordinate columns and derives ``year`` and ``hour``.
"""
from __future__ import annotations

import logging
from datetime import time
from typing import Iterable, Optional, Sequence

import pandas as pd
from pandas.api.types import is_bool_dtype, is_datetime64_any_dtype

from . import config
from .errors import DateParseError, MalformedInputError, TimeParseError

logger = logging.getLogger(__name__)

TRUE_TOKENS = frozenset({"TRUE", "T", "Y", "YES", "1"})
FALSE_TOKENS = frozenset({"FALSE", "F", "N", "NO", "0"})


def _first_invalid(mask: pd.Series) -> object:
    return mask[mask].index[0]


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse month/day/year strings. Already parsed dates are returned as-is."""
    if is_datetime64_any_dtype(values):
        if values.isna().any():
            row = _first_invalid(values.isna())
            raise DateParseError("Missing occurrence date", value=values[row], row=row)
        return values.copy()

    parsed = pd.to_datetime(values.astype(str).str.strip(), format=config.DATE_FORMAT, errors="coerce")
    invalid = parsed.isna()
    if invalid.any():
        row = _first_invalid(invalid)
        raise DateParseError("Unparseable occurrence date", value=values[row], row=row)
    return parsed


def parse_times(values: pd.Series) -> pd.Series:
    """Parse hour:minute:second strings into ``datetime.time`` values."""
    already_parsed = values.map(lambda value: isinstance(value, time)).astype(bool)
    result = values.copy().astype(object)
    pending = ~already_parsed
    if not pending.any():
        return result

    raw = values[pending].astype(str).str.strip()
    parsed = pd.to_datetime(raw, format=config.TIME_FORMAT, errors="coerce")
    invalid = parsed.isna()
    if invalid.any():
        row = _first_invalid(invalid)
        raise TimeParseError("Unparseable occurrence time", value=values[row], row=row)
    result[pending] = parsed.dt.time
    return result


def _clean_label(value: object, allowed: Optional[frozenset[str]]) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return config.UNKNOWN_LABEL
    label = str(value).strip().upper()
    if label in config.MISSING_TOKENS:
        return config.UNKNOWN_LABEL
    if allowed is not None and label not in allowed:
        return config.UNKNOWN_LABEL
    return label


def coerce_categorical(values: pd.Series, *, allowed: Optional[Iterable[str]] = None) -> pd.Series:
    """Map raw values onto the observed label set plus ``UNKNOWN``.

    Labels are stripped and upper-cased. Missing values, sentinel tokens and,
    when ``allowed`` is given, anything outside it become ``UNKNOWN``. The
    categories are the sorted observed labels followed by ``UNKNOWN``, which is
    always present so downstream code can rely on it.
    """
    allowed_set = frozenset(label.upper() for label in allowed) if allowed is not None else None
    labels = values.astype(object).map(lambda value: _clean_label(value, allowed_set))
    observed = sorted(set(labels) - {config.UNKNOWN_LABEL})
    categories = observed + [config.UNKNOWN_LABEL]
    return pd.Series(
        pd.Categorical(labels, categories=categories),
        index=values.index,
        name=values.name,
    )


def parse_murder_flag(values: pd.Series) -> pd.Series:
    if is_bool_dtype(values):
        return values.astype(bool)

    def convert(value: object) -> Optional[bool]:
        if isinstance(value, bool):
            return value
        token = str(value).strip().upper()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
        return None

    converted = values.map(convert)
    invalid = converted.isna()
    if invalid.any():
        row = _first_invalid(invalid)
        raise MalformedInputError("Unrecognized murder flag", value=values[row], row=row)
    return converted.astype(bool)


def snake_case(column: str) -> str:
    return column.strip().lower().replace(" ", "_")


def prune_columns(raw: pd.DataFrame, passthrough: Sequence[str] = ()) -> pd.DataFrame:
    """Project onto the columns used downstream plus any requested passthrough columns."""
    unknown = [column for column in passthrough if column not in raw.columns]
    if unknown:
        raise MalformedInputError(f"Passthrough columns not in dataset: {', '.join(unknown)}")

    keep = [column for column in raw.columns if column in config.COLUMN_RENAMES or column in passthrough]
    pruned = [column for column in config.PRUNED_COLUMNS if column in raw.columns and column not in keep]
    if pruned:
        logger.debug("Pruned columns: %s", ", ".join(pruned))
    unexpected = [column for column in raw.columns if column not in keep and column not in config.PRUNED_COLUMNS]
    if unexpected:
        logger.warning("Ignoring unexpected columns: %s", ", ".join(unexpected))
    return raw.loc[:, keep].copy()


def is_normalized(frame: pd.DataFrame) -> bool:
    return set(config.NORMALIZED_COLUMNS).issubset(frame.columns)


def _rename(raw: pd.DataFrame, passthrough: Sequence[str]) -> pd.DataFrame:
    missing = [column for column in config.REQUIRED_COLUMNS if column not in raw.columns]
    if missing:
        raise MalformedInputError(f"Dataset is missing required columns: {', '.join(missing)}")
    renames = dict(config.COLUMN_RENAMES)
    renames.update({column: snake_case(column) for column in passthrough})
    return prune_columns(raw, passthrough).rename(columns=renames)


def normalize_incidents(raw: pd.DataFrame, *, passthrough: Sequence[str] = ()) -> pd.DataFrame:
    """Return a new, typed incident frame built from ``raw``.

    ``raw`` may be the string-typed output of the loader or a frame that has
    already been normalized, in which case an equal frame is returned.
    Columns named in ``passthrough`` (raw header names) are kept, renamed to
    snake_case, with their values untouched.
    """
    if is_normalized(raw):
        absent = [column for column in passthrough if snake_case(column) not in raw.columns]
        if absent:
            raise MalformedInputError(f"Passthrough columns not in normalized frame: {', '.join(absent)}")
        working = raw.copy()
    else:
        working = _rename(raw, passthrough)

    normalized = pd.DataFrame(index=working.index)
    normalized["occurred_date"] = parse_dates(working["occurred_date"])
    normalized["occurred_time"] = parse_times(working["occurred_time"])
    for column in config.CATEGORICAL_COLUMNS:
        allowed = config.BOROUGHS if column == "borough" else None
        if column in working.columns:
            source = working[column]
        else:
            source = pd.Series(config.UNKNOWN_LABEL, index=working.index, dtype=object, name=column)
        normalized[column] = coerce_categorical(source, allowed=allowed)
    normalized["is_murder"] = parse_murder_flag(working["is_murder"])
    normalized["year"] = normalized["occurred_date"].dt.year.astype("int64")
    normalized["hour"] = normalized["occurred_time"].map(lambda value: value.hour).astype("int64")

    extras = [column for column in working.columns if column not in normalized.columns]
    for column in extras:
        normalized[column] = working[column]

    unknown_boroughs = int((normalized["borough"] == config.UNKNOWN_LABEL).sum())
    if unknown_boroughs:
        logger.warning("%s records have an unknown borough", unknown_boroughs)
    logger.info("Normalized %s records (%s columns)", len(normalized), normalized.shape[1])
    return normalized


__all__ = [
    "coerce_categorical",
    "is_normalized",
    "normalize_incidents",
    "parse_dates",
    "parse_murder_flag",
    "parse_times",
    "prune_columns",
]
