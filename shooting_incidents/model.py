"""Logistic regression of the murder flag on year, hour and borough."""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd
import statsmodels.formula.api as smf
from patsy import PatsyError
from statsmodels.tools.sm_exceptions import (
    ConvergenceWarning,
    HessianInversionWarning,
    PerfectSeparationError,
    PerfectSeparationWarning,
)

from . import config
from .errors import ModelFitError

logger = logging.getLogger(__name__)

RESPONSE = "is_murder"
FIT_WARNINGS = (ConvergenceWarning, HessianInversionWarning, PerfectSeparationWarning)


@dataclass(frozen=True)
class ModelSummary:
    """Coefficient table and fit diagnostics for one fitted model."""

    coefficients: pd.DataFrame
    n_obs: int
    log_likelihood: float
    null_log_likelihood: float
    deviance: float
    aic: float
    bic: float
    pseudo_r2: float
    llr_p_value: float
    converged: bool
    reference_borough: str
    formula: str

    def fit_statistics(self) -> Dict[str, object]:
        return {
            "formula": self.formula,
            "reference_borough": self.reference_borough,
            "n_obs": self.n_obs,
            "log_likelihood": self.log_likelihood,
            "null_log_likelihood": self.null_log_likelihood,
            "deviance": self.deviance,
            "aic": self.aic,
            "bic": self.bic,
            "pseudo_r2": self.pseudo_r2,
            "llr_p_value": self.llr_p_value,
            "converged": self.converged,
        }


def build_model_frame(df: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(
        {
            RESPONSE: df["is_murder"].astype("int64"),
            "year": df["year"].astype("int64"),
            "hour": df["hour"].astype("int64"),
            "borough": df["borough"].astype(str),
        },
        index=df.index,
    )


def _borough_term(reference: str) -> str:
    return f"C(borough, Treatment(reference={reference!r}))"


def _coefficient_table(result, *, borough_term: str, alpha: float) -> pd.DataFrame:
    params = result.params
    conf_int = result.conf_int(alpha=alpha)
    terms = [name.replace(borough_term, "borough") for name in params.index]
    return pd.DataFrame(
        {
            "term": terms,
            "estimate": params.values,
            "std_error": result.bse.values,
            "z_value": result.tvalues.values,
            "p_value": result.pvalues.values,
            "conf_low": conf_int[0].values,
            "conf_high": conf_int[1].values,
            "significant": result.pvalues.values < alpha,
        }
    )


def fit_murder_model(
    df: pd.DataFrame,
    *,
    reference_borough: Optional[str] = None,
    alpha: float = config.SIGNIFICANCE_LEVEL,
) -> ModelSummary:
    """Fit ``is_murder ~ year + hour + borough`` by maximum likelihood.

    Borough is treatment coded; the reference level is the alphabetically
    first observed borough unless ``reference_borough`` is given. Raises
    ``ModelFitError`` for empty input, a single observed response class, a
    rank-deficient design matrix or a fit that does not converge cleanly.
    """
    if df.empty:
        raise ModelFitError("Cannot fit a model to an empty record set")

    frame = build_model_frame(df)
    classes = sorted(frame[RESPONSE].unique())
    if len(classes) < 2:
        raise ModelFitError(f"Response has a single observed class: {bool(classes[0])}")

    levels = sorted(frame["borough"].unique())
    if len(levels) < 2:
        raise ModelFitError(f"Borough has a single observed level: {levels[0]}")
    reference = reference_borough or levels[0]
    if reference not in levels:
        raise ModelFitError(f"Reference borough {reference!r} is not among observed levels {levels}")

    borough_term = _borough_term(reference)
    formula = f"{RESPONSE} ~ year + hour + {borough_term}"
    try:
        model = smf.logit(formula, data=frame)
    except PatsyError as exc:
        raise ModelFitError(f"Could not build design matrix: {exc}") from exc

    exog = model.exog
    rank = np.linalg.matrix_rank(exog)
    if rank < exog.shape[1]:
        raise ModelFitError(
            f"Design matrix is rank-deficient (rank {rank} < {exog.shape[1]} columns: "
            f"{', '.join(model.exog_names)})"
        )

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            result = model.fit(disp=False)
        except (np.linalg.LinAlgError, PerfectSeparationError, ValueError) as exc:
            raise ModelFitError(f"Logistic regression failed: {exc}") from exc

    problems = [str(w.message) for w in caught if issubclass(w.category, FIT_WARNINGS)]
    if problems:
        raise ModelFitError(f"Logistic regression did not fit cleanly: {'; '.join(problems)}")
    converged = bool(result.mle_retvals.get("converged", False))
    if not converged:
        raise ModelFitError("Logistic regression did not converge")

    summary = ModelSummary(
        coefficients=_coefficient_table(result, borough_term=borough_term, alpha=alpha),
        n_obs=int(result.nobs),
        log_likelihood=float(result.llf),
        null_log_likelihood=float(result.llnull),
        deviance=float(-2.0 * result.llf),
        aic=float(result.aic),
        bic=float(result.bic),
        pseudo_r2=float(result.prsquared),
        llr_p_value=float(result.llr_pvalue),
        converged=converged,
        reference_borough=reference,
        formula=f"{RESPONSE} ~ year + hour + borough",
    )
    logger.info(
        "Fitted murder model on %s incidents (log-likelihood %.2f, reference borough %s)",
        summary.n_obs,
        summary.log_likelihood,
        reference,
    )
    logger.debug("Coefficients:\n%s", summary.coefficients.to_string(index=False))
    return summary


__all__ = ["ModelSummary", "build_model_frame", "fit_murder_model"]
