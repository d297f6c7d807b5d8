from __future__ import annotations

import numpy as np
import pytest

from shooting_incidents.errors import ModelFitError
from shooting_incidents.model import fit_murder_model
from shooting_incidents.normalize import normalize_incidents

from .helpers import make_raw, synthetic_raw


@pytest.fixture
def incidents(synthetic_incidents):
    return normalize_incidents(synthetic_incidents)


def test_fit_reports_every_term(incidents):
    summary = fit_murder_model(incidents)
    terms = summary.coefficients["term"].tolist()

    assert summary.reference_borough == "BRONX"
    assert terms[0] == "Intercept"
    assert "year" in terms
    assert "hour" in terms
    # one coefficient per non-reference borough
    borough_terms = [term for term in terms if term.startswith("borough")]
    assert len(borough_terms) == 4
    assert not any("BRONX" in term for term in borough_terms)
    assert any("STATEN ISLAND" in term for term in borough_terms)


def test_fit_statistics(incidents):
    summary = fit_murder_model(incidents)

    assert summary.converged
    assert summary.n_obs == len(incidents)
    assert summary.log_likelihood < 0
    assert summary.deviance == pytest.approx(-2 * summary.log_likelihood)
    assert summary.log_likelihood >= summary.null_log_likelihood
    stats = summary.fit_statistics()
    assert stats["formula"] == "is_murder ~ year + hour + borough"
    assert stats["reference_borough"] == "BRONX"


def test_coefficient_table_columns(incidents):
    table = fit_murder_model(incidents, alpha=0.1).coefficients

    assert list(table.columns) == [
        "term",
        "estimate",
        "std_error",
        "z_value",
        "p_value",
        "conf_low",
        "conf_high",
        "significant",
    ]
    assert (table["std_error"] > 0).all()
    assert (table["significant"] == (table["p_value"] < 0.1)).all()
    assert np.all(table["conf_low"] <= table["estimate"])


def test_explicit_reference_borough(incidents):
    summary = fit_murder_model(incidents, reference_borough="QUEENS")
    terms = summary.coefficients["term"].tolist()

    assert summary.reference_borough == "QUEENS"
    assert any("BRONX" in term for term in terms)
    assert not any("QUEENS" in term for term in terms)


def test_unobserved_reference_borough(incidents):
    with pytest.raises(ModelFitError):
        fit_murder_model(incidents, reference_borough="NEWARK")


def test_empty_input_raises(empty_raw):
    with pytest.raises(ModelFitError):
        fit_murder_model(normalize_incidents(empty_raw))


def test_single_response_class_raises(synthetic_incidents):
    raw = synthetic_incidents.copy()
    raw["STATISTICAL_MURDER_FLAG"] = "false"
    with pytest.raises(ModelFitError, match="single observed class"):
        fit_murder_model(normalize_incidents(raw))


def test_constant_year_is_rank_deficient(synthetic_incidents):
    raw = synthetic_incidents.copy()
    raw["OCCUR_DATE"] = "06/15/2019"
    with pytest.raises(ModelFitError, match="rank-deficient"):
        fit_murder_model(normalize_incidents(raw))


def test_perfect_separation_raises():
    rows = []
    for index in range(60):
        murder = index % 2 == 0
        rows.append(
            {
                "date": f"01/01/{2015 + index % 5}",
                "time": "22:00:00" if murder else "03:00:00",
                "borough": ["BRONX", "QUEENS"][index % 3 == 0],
                "murder": "true" if murder else "false",
            }
        )
    with pytest.raises(ModelFitError):
        fit_murder_model(normalize_incidents(make_raw(rows)))


def test_fit_is_deterministic():
    first = fit_murder_model(normalize_incidents(synthetic_raw(seed=3)))
    second = fit_murder_model(normalize_incidents(synthetic_raw(seed=3)))
    assert first.coefficients["estimate"].tolist() == pytest.approx(second.coefficients["estimate"].tolist())


def test_single_borough_raises(synthetic_incidents):
    raw = synthetic_incidents.copy()
    raw["BORO"] = "BRONX"
    with pytest.raises(ModelFitError, match="single observed level"):
        fit_murder_model(normalize_incidents(raw))
