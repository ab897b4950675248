import numpy as np
import pandas as pd
import pytest

from arima_pipeline.analysis.differencing import Differencer, difference, integrate
from arima_pipeline.exceptions import DataSourceError, InsufficientDataError
from arima_pipeline.schema.series import Series


def _series(values, start=1950):
    return Series(pd.Series(np.asarray(values, dtype=float), index=range(start, start + len(values))), name="test")


def test_difference_drops_leading_periods():
    series = _series([1, 4, 9, 16, 25])
    once = difference(series)
    twice = difference(series, 2)
    assert once.values.tolist() == [3, 5, 7, 9]
    assert list(once.periods) == [1951, 1952, 1953, 1954]
    assert twice.values.tolist() == [2, 2, 2]
    assert difference(series, 0).values.tolist() == series.values.tolist()


def test_difference_too_many_times_raises():
    with pytest.raises(InsufficientDataError):
        difference(_series([1.0, 2.0]), 2)


@pytest.mark.parametrize("order", [0, 1, 2])
def test_difference_then_integrate_is_exact(order):
    rng = np.random.default_rng(7)
    values = np.cumsum(np.cumsum(rng.integers(-5, 6, size=40))).astype(float)
    series = _series(values)

    differenced = Differencer().apply(series, order)
    assert differenced.order == order
    assert len(differenced) == len(series) - order
    assert len(differenced.heads) == order

    restored = integrate(differenced)
    assert list(restored.periods) == list(series.periods)
    assert restored.values.tolist() == series.values.tolist()


def test_integrate_reconstructs_float_series():
    rng = np.random.default_rng(3)
    series = _series(100 + np.cumsum(rng.normal(0.5, 1.0, size=80)))
    restored = integrate(Differencer().apply(series, 2))
    np.testing.assert_allclose(restored.values, series.values, rtol=1e-12)


def test_random_walk_becomes_stationary_within_two_passes():
    rng = np.random.default_rng(0)
    series = _series(np.cumsum(rng.normal(0.2, 1.0, size=200)))

    result = Differencer(alpha=0.05, max_order=2).run(series)

    assert result.order <= 2
    assert result.stationary
    assert result.final_test.p_value < 0.05
    assert result.note is None
    assert len(result.steps) == result.order + 1
    assert result.source_length == 200


def test_quadratic_trend_needs_differencing():
    rng = np.random.default_rng(1)
    t = np.arange(120, dtype=float)
    series = _series(50 + 0.05 * t**2 + rng.normal(0, 1.0, size=t.size))

    result = Differencer().run(series)

    assert 1 <= result.order <= 2
    assert result.stationary
    assert result.steps[0].p_value >= 0.05
    assert result.final_test.p_value < 0.05


def test_cap_reached_is_reported_not_raised():
    rng = np.random.default_rng(2)
    series = _series(np.cumsum(np.cumsum(np.cumsum(rng.normal(size=200)))))

    result = Differencer(max_order=1).run(series)

    assert result.order == 1
    assert not result.stationary
    assert result.note is not None
    assert "order 1" in result.note


def test_short_series_raises_insufficient_data():
    with pytest.raises(InsufficientDataError):
        Differencer().run(_series([1.0, 2.0, 3.0, 5.0]))


def test_constant_series_is_rejected():
    with pytest.raises(DataSourceError):
        Differencer().run(_series([3.0] * 30))


def test_exact_linear_trend_stops_at_constant_level():
    series = _series(100 + 2 * np.arange(61, dtype=float), start=1960)

    result = Differencer().run(series)

    assert result.order == 1
    assert result.stationary
    assert result.final_test.constant
    assert "constant" in result.note
    assert result.series.values.tolist() == [2.0] * 60
    assert integrate(result).values.tolist() == series.values.tolist()


def test_apply_past_a_constant_level():
    series = _series(100 + 2 * np.arange(61, dtype=float), start=1960)

    result = Differencer().apply(series, 2)

    assert result.order == 2
    assert result.stationary
    assert all(step.constant for step in result.steps[1:])
