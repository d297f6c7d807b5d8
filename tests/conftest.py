from __future__ import annotations

import pandas as pd
import pytest

from .helpers import make_raw, synthetic_raw


@pytest.fixture
def two_incidents() -> pd.DataFrame:
    return make_raw(
        [
            {"date": "01/01/2020", "time": "10:00:00", "borough": "BRONX", "murder": "false"},
            {"date": "01/01/2021", "time": "23:00:00", "borough": "BRONX", "murder": "true"},
        ]
    )


@pytest.fixture
def synthetic_incidents() -> pd.DataFrame:
    return synthetic_raw()


@pytest.fixture
def empty_raw() -> pd.DataFrame:
    return make_raw([])
