"""ACF/PACF computation and cutoff detection."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from statsmodels.tsa.stattools import acf, pacf

from arima_pipeline.schema.series import Series
from arima_pipeline.analysis.stationarity import ensure_min_observations

Z_95 = 1.959963984540054


@dataclass
class Correlogram:
    acf_values: List[float]
    pacf_values: List[float]
    bound: float
    max_lag: int

    @property
    def acf_cutoff(self) -> int:
        return cutoff_lag(self.acf_values, self.bound)

    @property
    def pacf_cutoff(self) -> int:
        return cutoff_lag(self.pacf_values, self.bound)


def cutoff_lag(values: Sequence[float], bound: float) -> int:
    """Number of leading consecutive lags (from lag 1) outside +/- bound.

    `values[0]` is lag 0 and is ignored.
    """
    k = 0
    for value in values[1:]:
        if abs(value) > bound:
            k += 1
        else:
            break
    return k


def compute_correlogram(series: Series, max_lag: int = 10) -> Correlogram:
    ensure_min_observations(series, context="correlogram")
    values = series.values
    n = len(values)
    # statsmodels requires nlags < nobs // 2 for the PACF
    nlags = max(1, min(max_lag, n // 2 - 1))
    acf_values = acf(values, nlags=nlags, fft=True).tolist()
    pacf_values = pacf(values, nlags=nlags, method="ywadjusted").tolist()
    return Correlogram(
        acf_values=acf_values,
        pacf_values=pacf_values,
        bound=Z_95 / math.sqrt(n),
        max_lag=nlags,
    )


__all__ = ["Correlogram", "Z_95", "compute_correlogram", "cutoff_lag"]
