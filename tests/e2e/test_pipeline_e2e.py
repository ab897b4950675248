import io
import math

import numpy as np
import pandas as pd
from rich.console import Console

from arima_pipeline import PipelineConfig, SearchSelector, Series, run_pipeline
from arima_pipeline.analysis.differencing import integrate
from arima_pipeline.exceptions import ModelFitError
from arima_pipeline.fitting.fitter import fit_arima
from arima_pipeline.reporting.console import render_report
from arima_pipeline.schema.model import ModelSpec


def _gdp_like(seed=21):
    """Increasing annual series whose second difference is a zero-mean AR(1)."""
    years = range(1960, 2021)
    rng = np.random.default_rng(seed)
    n = len(years)
    shocks = rng.normal(scale=1.0, size=n)
    ar = np.zeros(n)
    for t in range(1, n):
        ar[t] = 0.8 * ar[t - 1] + shocks[t]
    t = np.arange(n, dtype=float)
    values = 10_000 + 200 * t + np.cumsum(np.cumsum(ar))
    return Series(pd.Series(values, index=list(years)), name="USA:NY.GDP.MKTP.CD")


def test_full_run_on_annual_series():
    series = _gdp_like()
    config = PipelineConfig(max_p=1, max_q=1, criterion="bic")

    result = run_pipeline(series, config)

    assert len(series) == 61
    assert np.all(np.diff(series.values) > 0)
    assert result.differenced.order == 2
    assert result.selection.spec == ModelSpec(1, 2, 0)
    assert result.fitted.spec == ModelSpec(1, 2, 0)
    np.testing.assert_allclose(integrate(result.differenced).values, series.values)

    assert set(result.diagnostics) == {"ljung_box", "shapiro_wilk", "jarque_bera", "breusch_pagan"}
    for diag in result.diagnostics.values():
        assert 0.0 <= diag.p_value <= 1.0
        assert diag.decision in {"reject", "fail to reject"}

    if result.selection.alternative is not None:
        assert [row.rank for row in result.comparison] == list(range(1, len(result.comparison) + 1))

    buffer = io.StringIO()
    render_report(result, Console(file=buffer, width=120))
    assert "ARIMA(1,2,0)" in buffer.getvalue()


def test_repeated_runs_are_deterministic():
    series = _gdp_like()
    config = PipelineConfig(max_p=1, max_q=1, criterion="bic")
    first = run_pipeline(series, config)
    second = run_pipeline(series, config)
    assert first.selection.spec == second.selection.spec
    assert math.isclose(first.fitted.aic, second.fitted.aic)


def test_explicit_candidates_match_direct_fits():
    series = _gdp_like()
    candidates = [ModelSpec(0, 2, 1), ModelSpec(1, 2, 1)]

    result = run_pipeline(series, selector=SearchSelector(candidates=candidates))

    direct = {}
    for spec in candidates:
        try:
            direct[spec] = fit_arima(series, spec).aic
        except ModelFitError:
            continue
    expected = min(direct, key=lambda spec: (direct[spec], spec.parsimony_key()))
    assert result.selection.spec == expected
    assert result.differenced.order == 2
