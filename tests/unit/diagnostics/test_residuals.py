import numpy as np
import pandas as pd

from arima_pipeline.diagnostics import run_residual_diagnostics
from arima_pipeline.diagnostics.residuals import breusch_pagan, jarque_bera, ljung_box, shapiro_wilk
from arima_pipeline.schema.model import FittedModel, ModelSpec
from arima_pipeline.schema.series import Series


def _series(values, name="residuals"):
    return Series(pd.Series(np.asarray(values, dtype=float)), name=name)


def test_white_noise_mostly_passes_ljung_box():
    passes = 0
    n_seeds = 200
    for seed in range(n_seeds):
        rng = np.random.default_rng(seed)
        result = ljung_box(_series(rng.normal(size=300)), lags=10)
        passes += result.decision == "fail to reject"
    assert passes / n_seeds > 0.90


def test_autocorrelated_residuals_fail_ljung_box():
    rng = np.random.default_rng(0)
    noise = rng.normal(size=300)
    values = np.zeros(300)
    for t in range(1, 300):
        values[t] = 0.8 * values[t - 1] + noise[t]
    result = ljung_box(_series(values), lags=10)
    assert result.decision == "reject"
    assert 0.0 <= result.p_value < 0.05


def test_ljung_box_lag_clamped_for_short_residuals():
    rng = np.random.default_rng(1)
    result = ljung_box(_series(rng.normal(size=6)), lags=10)
    assert result.note is not None
    assert "lag reduced" in result.note
    assert result.decision in {"reject", "fail to reject"}


def test_heavy_tails_reject_normality():
    rng = np.random.default_rng(2)
    residuals = _series(rng.standard_t(df=2, size=500))
    assert shapiro_wilk(residuals).decision == "reject"
    assert jarque_bera(residuals).decision == "reject"


def test_growing_variance_rejects_homoscedasticity():
    rng = np.random.default_rng(3)
    fitted = np.linspace(1.0, 50.0, 400)
    residuals = rng.normal(scale=fitted)
    result = breusch_pagan(_series(residuals), _series(fitted, name="fitted"))
    assert result.decision == "reject"


def test_constant_residuals_are_not_evaluated():
    flat = _series(np.zeros(20))
    assert ljung_box(flat).decision == "not evaluated"
    assert shapiro_wilk(flat).decision == "not evaluated"
    assert breusch_pagan(flat, _series(np.arange(20.0), name="fitted")).decision == "not evaluated"


def test_run_residual_diagnostics_returns_all_tests():
    rng = np.random.default_rng(4)
    resid = _series(rng.normal(size=80))
    fitted = _series(rng.normal(loc=10.0, size=80), name="fitted")
    model = FittedModel(
        spec=ModelSpec(0, 0, 0),
        coefficients={"const": 0.0},
        residuals=resid,
        fitted_values=fitted,
        aic=1.0,
        bic=1.0,
        log_likelihood=0.0,
        nobs=80,
    )

    results = run_residual_diagnostics(model, alpha=0.05, lags=5)

    assert set(results) == {"ljung_box", "shapiro_wilk", "jarque_bera", "breusch_pagan"}
    for result in results.values():
        assert 0.0 <= result.p_value <= 1.0
        assert result.decision == ("reject" if result.p_value < 0.05 else "fail to reject")
        assert result.alpha == 0.05
