"""Configuration constants for the shooting incident pipeline."""
from __future__ import annotations

import os
from pathlib import Path

# NYPD Shooting Incident Data (Historic), CSV export from NYC Open Data
DATA_URL: str = "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"

# Environment variable that overrides the default data source (URL or path)
SOURCE_ENV_VAR: str = "SHOOTING_DATA_SOURCE"

# Timeout (seconds) for the HTTP download of the dataset
HTTP_TIMEOUT: int = 60

# Directory for derived datasets (summaries, model outputs)
DERIVED_DATA_DIR: Path = Path("data/derived")

# Directory for raw CSV snapshots
RAW_DATA_DIR: Path = Path("data/raw")

# File name used for the raw snapshot when --snapshot is given without a path
SNAPSHOT_FILENAME: str = "shooting_incidents.csv"

DATE_FORMAT: str = "%m/%d/%Y"
TIME_FORMAT: str = "%H:%M:%S"

# Label used for missing, sentinel or unrecognized categorical values
UNKNOWN_LABEL: str = "UNKNOWN"

# Raw tokens the dataset uses for "no value"
MISSING_TOKENS = frozenset({"", "(NULL)", "NULL", "NAN", "NONE", "UNKNOWN", "U"})

BOROUGHS: tuple[str, ...] = (
    "BRONX",
    "BROOKLYN",
    "MANHATTAN",
    "QUEENS",
    "STATEN ISLAND",
)

# Header of the published CSV, in file order
RAW_COLUMNS: tuple[str, ...] = (
    "INCIDENT_KEY",
    "OCCUR_DATE",
    "OCCUR_TIME",
    "BORO",
    "LOC_OF_OCCUR_DESC",
    "PRECINCT",
    "JURISDICTION_CODE",
    "LOC_CLASSFCTN_DESC",
    "LOCATION_DESC",
    "STATISTICAL_MURDER_FLAG",
    "PERP_AGE_GROUP",
    "PERP_SEX",
    "PERP_RACE",
    "VIC_AGE_GROUP",
    "VIC_SEX",
    "VIC_RACE",
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
)

REQUIRED_COLUMNS: tuple[str, ...] = (
    "OCCUR_DATE",
    "OCCUR_TIME",
    "BORO",
    "STATISTICAL_MURDER_FLAG",
)

# Raw column -> normalized column for every field kept downstream
COLUMN_RENAMES: dict[str, str] = {
    "OCCUR_DATE": "occurred_date",
    "OCCUR_TIME": "occurred_time",
    "BORO": "borough",
    "JURISDICTION_CODE": "jurisdiction_code",
    "STATISTICAL_MURDER_FLAG": "is_murder",
    "PERP_AGE_GROUP": "perpetrator_age_group",
    "PERP_SEX": "perpetrator_sex",
    "PERP_RACE": "perpetrator_race",
    "VIC_AGE_GROUP": "victim_age_group",
    "VIC_SEX": "victim_sex",
    "VIC_RACE": "victim_race",
}

CATEGORICAL_COLUMNS: tuple[str, ...] = (
    "borough",
    "jurisdiction_code",
    "perpetrator_age_group",
    "perpetrator_sex",
    "perpetrator_race",
    "victim_age_group",
    "victim_sex",
    "victim_race",
)

# Identifier, location-description and coordinate fields removed by pruning
PRUNED_COLUMNS: tuple[str, ...] = (
    "INCIDENT_KEY",
    "LOC_OF_OCCUR_DESC",
    "PRECINCT",
    "LOC_CLASSFCTN_DESC",
    "LOCATION_DESC",
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
)

# Column order of a normalized incident frame
NORMALIZED_COLUMNS: tuple[str, ...] = (
    "occurred_date",
    "occurred_time",
    "borough",
    "jurisdiction_code",
    "perpetrator_age_group",
    "perpetrator_sex",
    "perpetrator_race",
    "victim_age_group",
    "victim_sex",
    "victim_race",
    "is_murder",
    "year",
    "hour",
)

# Two-sided p-value threshold for flagging a coefficient as significant
SIGNIFICANCE_LEVEL: float = 0.05


def default_source() -> str:
    """Return the configured data source, honouring ``SHOOTING_DATA_SOURCE``."""
    return os.environ.get(SOURCE_ENV_VAR) or DATA_URL
