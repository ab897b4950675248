import numpy as np
import pandas as pd

from arima_pipeline.schema.model import ModelSpec
from arima_pipeline.schema.series import Series
from arima_pipeline.selection.heuristic import HeuristicSelector, orders_from_correlogram

BOUND = 0.2


def test_pacf_cutoff_gives_ar_order():
    acf = [1.0, 0.7, 0.5, 0.35, 0.25, 0.21]
    pacf = [1.0, 0.7, 0.05, 0.02, -0.03, 0.01]
    orders = orders_from_correlogram(acf, pacf, BOUND)
    assert (orders.p, orders.q) == (1, 0)
    assert orders.alternative == (0, 5)


def test_acf_cutoff_gives_ma_order():
    acf = [1.0, 0.45, 0.3, 0.05, 0.02]
    pacf = [1.0, 0.45, -0.3, 0.25, -0.22]
    orders = orders_from_correlogram(acf, pacf, BOUND)
    assert (orders.p, orders.q) == (0, 2)
    assert orders.alternative == (4, 0)


def test_only_pacf_significant_is_pure_ar():
    orders = orders_from_correlogram([1.0, 0.1, 0.0], [1.0, 0.5, 0.3, 0.0], BOUND)
    assert (orders.p, orders.q) == (2, 0)
    assert orders.alternative is None


def test_white_noise_gives_zero_orders():
    orders = orders_from_correlogram([1.0, 0.05, -0.1], [1.0, 0.05, -0.1], BOUND)
    assert (orders.p, orders.q) == (0, 0)
    assert "no significant" in orders.rationale


def test_orders_are_capped():
    acf = [1.0, 0.9, 0.8, 0.7, 0.6, 0.5]
    pacf = [1.0, 0.9, 0.6, 0.4, 0.01]
    orders = orders_from_correlogram(acf, pacf, BOUND, max_p=2, max_q=2)
    assert (orders.p, orders.q) == (2, 0)
    assert orders.alternative == (0, 2)


def test_simulated_ar1_is_identified():
    rng = np.random.default_rng(11)
    n = 500
    values = np.zeros(n)
    noise = rng.normal(size=n)
    for t in range(1, n):
        values[t] = 0.7 * values[t - 1] + noise[t]
    series = Series(pd.Series(values), name="ar1")

    result = HeuristicSelector(d=0, max_p=3, max_q=3).propose(series)

    assert result.strategy == "heuristic"
    assert result.spec.d == 0
    assert result.spec.p >= 1
    assert result.spec.q == 0
    assert result.rationale


def test_differencing_order_flows_into_spec():
    rng = np.random.default_rng(5)
    series = Series(pd.Series(np.cumsum(rng.normal(size=150))), name="rw")

    result = HeuristicSelector(d=1).propose(series)

    assert result.spec.d == 1
    assert isinstance(result.spec, ModelSpec)
