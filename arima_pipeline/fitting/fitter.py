"""Maximum-likelihood ARIMA estimation via statsmodels."""

from __future__ import annotations

import math
import warnings
from typing import Any, Callable, Optional

import numpy as np
import pandas as pd
from statsmodels.tools.sm_exceptions import ConvergenceWarning
from statsmodels.tsa.arima.model import ARIMA

from arima_pipeline.exceptions import ConvergenceError, InsufficientDataError, ModelFitError
from arima_pipeline.schema.model import FittedModel, ModelSpec
from arima_pipeline.schema.series import Series
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="fitter")

MIN_FIT_OBSERVATIONS = 8

Fitter = Callable[[Series, ModelSpec], FittedModel]


def fit_arima(
    series: Series,
    spec: ModelSpec,
    *,
    maxiter: int = 500,
    model_factory: Optional[Callable[..., Any]] = None,
) -> FittedModel:
    """Fit ARIMA(p, d, q) on the undifferenced series.

    The model differences internally `d` times. Raises ConvergenceError when
    the optimizer reports non-convergence; coefficients are never returned
    from a failed optimization.
    """

    required = spec.d + spec.p + spec.q + MIN_FIT_OBSERVATIONS
    if len(series) < required:
        raise InsufficientDataError(f"Insufficient observations for {spec}: need >= {required}, got {len(series)}")

    factory = model_factory or ARIMA
    values = series.values
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            model = factory(values, order=spec.order)
            res = model.fit(method_kwargs={"maxiter": maxiter})
        except (ValueError, np.linalg.LinAlgError) as exc:
            raise ModelFitError(f"{spec} fit failed: {exc}") from exc

    convergence_messages = [str(w.message) for w in caught if issubclass(w.category, ConvergenceWarning)]
    retvals = getattr(res, "mle_retvals", None) or {}
    converged = bool(retvals.get("converged", True)) and not convergence_messages
    if not converged:
        detail = "; ".join(convergence_messages) or "optimizer reported converged=False"
        log.warning(
            "Model failed to converge",
            extra={"order": list(spec.order), "maxiter": maxiter, "error": detail},
        )
        raise ConvergenceError(f"{spec} did not converge within {maxiter} iterations: {detail}", spec=spec)

    llf = float(res.llf)
    if not math.isfinite(llf):
        raise ModelFitError(f"{spec} produced a non-finite log-likelihood")

    param_names = list(getattr(res, "param_names", None) or res.model.param_names)
    coefficients = {name: float(value) for name, value in zip(param_names, np.asarray(res.params))}

    # The first d residuals come from the diffuse initialisation of the
    # integrated states and are dropped.
    index = series.periods[spec.d:]
    resid = np.asarray(res.resid, dtype=float)[spec.d:]
    fitted = values[spec.d:] - resid

    log.info(
        "Model fitted",
        extra={"order": list(spec.order), "aic": float(res.aic), "bic": float(res.bic), "llf": llf},
    )
    return FittedModel(
        spec=spec,
        coefficients=coefficients,
        residuals=Series(pd.Series(resid, index=index), name="residuals"),
        fitted_values=Series(pd.Series(fitted, index=index), name="fitted"),
        aic=float(res.aic),
        bic=float(res.bic),
        log_likelihood=llf,
        nobs=int(res.nobs),
        converged=True,
    )


class ArimaFitter:
    """Callable fitter holding the optimizer budget."""

    name = "arima_mle"

    def __init__(self, maxiter: int = 500) -> None:
        self.maxiter = maxiter

    def __call__(self, series: Series, spec: ModelSpec) -> FittedModel:
        return fit_arima(series, spec, maxiter=self.maxiter)


__all__ = ["ArimaFitter", "Fitter", "MIN_FIT_OBSERVATIONS", "fit_arima"]
