"""Residual diagnostic tests for fitted ARIMA models.

Each test is independent and returns a DiagnosticResult; none of them raises
for statistically "bad" residuals. A test that cannot be evaluated (too few
observations, zero variance, numerical failure) is returned with decision
"not evaluated" and NaN statistic/p-value.

Null hypotheses:
- Ljung-Box: residuals are uncorrelated up to the chosen lag
- Shapiro-Wilk / Jarque-Bera: residuals are normally distributed
- Breusch-Pagan: residual variance does not depend on the fitted values
"""

from __future__ import annotations

import math
from typing import Dict

import numpy as np
from scipy import stats
from statsmodels.api import add_constant
from statsmodels.stats.diagnostic import acorr_ljungbox, het_breuschpagan

from arima_pipeline.schema.diagnostics import DiagnosticResult
from arima_pipeline.schema.model import FittedModel
from arima_pipeline.schema.series import Series
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="diagnostics")

LJUNG_BOX_H0 = "residuals are uncorrelated"
NORMALITY_H0 = "residuals are normally distributed"
HOMOSCEDASTICITY_H0 = "residuals have constant variance"


def _finite(value: float) -> bool:
    return value is not None and math.isfinite(value)


def ljung_box(residuals: Series, lags: int = 10, alpha: float = 0.05) -> DiagnosticResult:
    name = "ljung_box"
    values = residuals.values
    n = len(values)
    if n < 3 or np.ptp(values) == 0:
        return DiagnosticResult.not_evaluated(name, alpha=alpha, null_hypothesis=LJUNG_BOX_H0, note=f"degenerate residuals (n={n})")

    lag = min(lags, n - 1)
    note = None
    if lag < lags:
        note = f"lag reduced from {lags} to {lag} (n={n})"
        log.warning("Ljung-Box lag clamped", extra={"requested": lags, "used": lag, "n": n})

    try:
        table = acorr_ljungbox(values, lags=[lag], return_df=True)
    except (ValueError, np.linalg.LinAlgError) as exc:
        return DiagnosticResult.not_evaluated(name, alpha=alpha, null_hypothesis=LJUNG_BOX_H0, note=str(exc))
    statistic = float(table["lb_stat"].iloc[0])
    p_value = float(table["lb_pvalue"].iloc[0])
    if not (_finite(statistic) and _finite(p_value)):
        return DiagnosticResult.not_evaluated(name, alpha=alpha, null_hypothesis=LJUNG_BOX_H0, note="non-finite statistic")
    return DiagnosticResult.from_p_value(
        name,
        statistic,
        p_value,
        alpha=alpha,
        null_hypothesis=f"{LJUNG_BOX_H0} up to lag {lag}",
        note=note,
    )


def shapiro_wilk(residuals: Series, alpha: float = 0.05) -> DiagnosticResult:
    name = "shapiro_wilk"
    values = residuals.values
    if len(values) < 3 or np.ptp(values) == 0:
        return DiagnosticResult.not_evaluated(
            name, alpha=alpha, null_hypothesis=NORMALITY_H0, note=f"degenerate residuals (n={len(values)})"
        )
    result = stats.shapiro(values)
    return DiagnosticResult.from_p_value(
        name, result.statistic, result.pvalue, alpha=alpha, null_hypothesis=NORMALITY_H0
    )


def jarque_bera(residuals: Series, alpha: float = 0.05) -> DiagnosticResult:
    name = "jarque_bera"
    values = residuals.values
    if len(values) < 3 or np.ptp(values) == 0:
        return DiagnosticResult.not_evaluated(
            name, alpha=alpha, null_hypothesis=NORMALITY_H0, note=f"degenerate residuals (n={len(values)})"
        )
    result = stats.jarque_bera(values)
    return DiagnosticResult.from_p_value(
        name, result.statistic, result.pvalue, alpha=alpha, null_hypothesis=NORMALITY_H0
    )


def breusch_pagan(residuals: Series, fitted_values: Series, alpha: float = 0.05) -> DiagnosticResult:
    """Regress squared residuals on a constant and the fitted values (LM form)."""
    name = "breusch_pagan"
    resid = residuals.to_pandas()
    fitted = fitted_values.to_pandas().reindex(resid.index)
    mask = fitted.notna()
    resid, fitted = resid[mask].to_numpy(), fitted[mask].to_numpy()
    if len(resid) < 3 or np.ptp(fitted) == 0 or np.ptp(resid) == 0:
        return DiagnosticResult.not_evaluated(
            name,
            alpha=alpha,
            null_hypothesis=HOMOSCEDASTICITY_H0,
            note=f"degenerate residuals or fitted values (n={len(resid)})",
        )

    exog = add_constant(fitted.reshape(-1, 1), has_constant="add")
    try:
        lm_stat, lm_pvalue, _, _ = het_breuschpagan(resid, exog)
    except (ValueError, np.linalg.LinAlgError) as exc:
        return DiagnosticResult.not_evaluated(name, alpha=alpha, null_hypothesis=HOMOSCEDASTICITY_H0, note=str(exc))
    return DiagnosticResult.from_p_value(
        name, lm_stat, lm_pvalue, alpha=alpha, null_hypothesis=HOMOSCEDASTICITY_H0
    )


def run_residual_diagnostics(model: FittedModel, *, alpha: float = 0.05, lags: int = 10) -> Dict[str, DiagnosticResult]:
    results = {
        "ljung_box": ljung_box(model.residuals, lags=lags, alpha=alpha),
        "shapiro_wilk": shapiro_wilk(model.residuals, alpha=alpha),
        "jarque_bera": jarque_bera(model.residuals, alpha=alpha),
        "breusch_pagan": breusch_pagan(model.residuals, model.fitted_values, alpha=alpha),
    }
    log.info(
        "Residual diagnostics complete",
        extra={"order": list(model.spec.order), "decisions": {k: v.decision for k, v in results.items()}},
    )
    return results


__all__ = ["breusch_pagan", "jarque_bera", "ljung_box", "run_residual_diagnostics", "shapiro_wilk"]
