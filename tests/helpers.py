from __future__ import annotations

from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from shooting_incidents import config

BOROUGH_SPELLINGS = ["BRONX", "Brooklyn", "MANHATTAN", "QUEENS", "STATEN ISLAND"]


def make_raw(rows: Iterable[Mapping[str, str]]) -> pd.DataFrame:
    """Build a raw, string-typed frame with the published header.

    Each row may set ``date``, ``time``, ``borough`` and ``murder``; every other
    column gets a plausible placeholder.
    """
    records = []
    for index, row in enumerate(rows):
        record = {column: "" for column in config.RAW_COLUMNS}
        record.update(
            {
                "INCIDENT_KEY": str(200000000 + index),
                "OCCUR_DATE": row.get("date", "01/01/2020"),
                "OCCUR_TIME": row.get("time", "12:00:00"),
                "BORO": row.get("borough", "BRONX"),
                "PRECINCT": "44",
                "JURISDICTION_CODE": "0",
                "STATISTICAL_MURDER_FLAG": row.get("murder", "false"),
                "PERP_AGE_GROUP": "18-24",
                "PERP_SEX": "M",
                "PERP_RACE": "BLACK",
                "VIC_AGE_GROUP": "25-44",
                "VIC_SEX": "M",
                "VIC_RACE": "BLACK",
                "X_COORD_CD": "1005028",
                "Y_COORD_CD": "234516",
                "Latitude": "40.8",
                "Longitude": "-73.9",
                "Lon_Lat": "POINT (-73.9 40.8)",
            }
        )
        records.append(record)
    return pd.DataFrame(records, columns=list(config.RAW_COLUMNS), dtype=object)


def synthetic_raw(n: int = 800, seed: int = 7) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    years = rng.integers(2010, 2021, size=n)
    months = rng.integers(1, 13, size=n)
    days = rng.integers(1, 29, size=n)
    hours = rng.integers(0, 24, size=n)
    boroughs = rng.choice(BOROUGH_SPELLINGS, size=n)
    murders = rng.random(n) < 0.2
    rows = [
        {
            "date": f"{months[i]:02d}/{days[i]:02d}/{years[i]}",
            "time": f"{hours[i]:02d}:{rng.integers(0, 60):02d}:00",
            "borough": str(boroughs[i]),
            "murder": "true" if murders[i] else "false",
        }
        for i in range(n)
    ]
    return make_raw(rows)
