"""Unit-root and stationarity tests."""

from __future__ import annotations

import math
import warnings
from typing import Optional

import numpy as np
from statsmodels.tsa.stattools import adfuller, kpss

from arima_pipeline.exceptions import DataSourceError, InsufficientDataError
from arima_pipeline.schema.series import Series, StationarityTest
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="stationarity")

MIN_OBSERVATIONS = 12


def ensure_min_observations(series: Series, required: int = MIN_OBSERVATIONS, *, context: str = "stationarity test") -> None:
    """Raise if the series is too short for the requested computation."""
    if len(series) < required:
        raise InsufficientDataError(
            f"Insufficient observations for {context}: need >= {required}, got {len(series)}"
        )


def _kpss_p_value(values: np.ndarray) -> Optional[float]:
    # KPSS p-values are interpolated from a table and clipped at its edges.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            return float(kpss(values, regression="c", nlags="auto")[1])
        except (ValueError, np.linalg.LinAlgError, OverflowError):
            return None


def is_constant(series: Series) -> bool:
    return bool(np.ptp(series.values) == 0)


def constant_level_test(series: Series, *, alpha: float = 0.05, order: int = 0) -> StationarityTest:
    """Stationarity record for a level with zero variance (no ADF is run)."""
    return StationarityTest(
        order=order,
        statistic=math.nan,
        p_value=math.nan,
        used_lags=0,
        nobs=len(series),
        critical_values={},
        alpha=alpha,
        constant=True,
    )


def adf_test(series: Series, *, alpha: float = 0.05, order: int = 0) -> StationarityTest:
    """Augmented Dickey-Fuller test (H0: unit root).

    p-value < alpha rejects the unit root, i.e. the series is treated as
    stationary. A KPSS p-value (H0: stationary) is attached for context only.
    """

    ensure_min_observations(series)
    values = series.values
    if np.ptp(values) == 0:
        raise DataSourceError(f"Series '{series.name}' is constant at differencing order {order}")

    try:
        statistic, p_value, used_lag, nobs, critical_values, _ = adfuller(values, autolag="AIC")
    except (ValueError, np.linalg.LinAlgError) as exc:
        raise InsufficientDataError(f"ADF test failed on '{series.name}' (order {order}): {exc}") from exc

    result = StationarityTest(
        order=order,
        statistic=float(statistic),
        p_value=float(p_value),
        used_lags=int(used_lag),
        nobs=int(nobs),
        critical_values={k: float(v) for k, v in critical_values.items()},
        alpha=alpha,
        kpss_p_value=_kpss_p_value(values),
    )
    log.debug(
        "ADF test evaluated",
        extra={"order": order, "adf_stat": result.statistic, "p_value": result.p_value},
    )
    return result


__all__ = ["MIN_OBSERVATIONS", "adf_test", "constant_level_test", "ensure_min_observations", "is_constant"]
