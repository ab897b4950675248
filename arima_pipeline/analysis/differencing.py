"""Differencing to stationarity and its exact inverse."""

from __future__ import annotations

from typing import Any, List, Tuple

import numpy as np
import pandas as pd

from arima_pipeline.analysis.stationarity import adf_test, constant_level_test, ensure_min_observations, is_constant
from arima_pipeline.exceptions import ConfigValidationError, InsufficientDataError
from arima_pipeline.schema.series import DifferencedSeries, Series, StationarityTest
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="differencer")


def difference(series: Series, order: int = 1) -> Series:
    """Apply the first difference `order` times, keeping the later periods."""
    if order < 0:
        raise ConfigValidationError("differencing order must be >= 0")
    data = series.to_pandas()
    for _ in range(order):
        data = data.diff().iloc[1:]
    if data.empty:
        raise InsufficientDataError(
            f"Cannot difference '{series.name}' {order} times with {len(series)} observations"
        )
    return Series(data, name=series.name)


def integrate(differenced: DifferencedSeries) -> Series:
    """Invert `difference` using the recorded heads; returns the original series."""
    data = differenced.series.to_pandas()
    values = data.to_numpy()
    periods = list(data.index)
    for period, head in reversed(differenced.heads):
        values = np.concatenate([[head], head + np.cumsum(values)])
        periods.insert(0, period)
    return Series(pd.Series(values, index=pd.Index(periods)), name=differenced.series.name)


class Differencer:
    """Difference a series until the ADF test rejects a unit root.

    Differencing stops at the first order whose ADF p-value is below `alpha`,
    or at `max_order`. Reaching the cap without stationarity is reported on the
    result (``stationary=False`` plus a note), not raised.
    """

    def __init__(self, alpha: float = 0.05, max_order: int = 2) -> None:
        if not 0.0 < alpha < 1.0:
            raise ConfigValidationError("alpha must be in (0, 1)")
        if max_order < 0:
            raise ConfigValidationError("max_order must be >= 0")
        self.alpha = alpha
        self.max_order = max_order

    def run(self, series: Series) -> DifferencedSeries:
        current = series
        heads: List[Tuple[Any, float]] = []
        steps: List[StationarityTest] = [self._test(current, 0)]

        while not steps[-1].stationary and len(heads) < self.max_order:
            heads.append(_head(current))
            current = difference(current, 1)
            steps.append(self._test(current, len(heads)))

        return self._finish(series, current, heads, steps)

    def apply(self, series: Series, order: int) -> DifferencedSeries:
        """Difference exactly `order` times, recording the ADF test at each level."""
        if order < 0:
            raise ConfigValidationError("differencing order must be >= 0")
        current = series
        heads: List[Tuple[Any, float]] = []
        steps: List[StationarityTest] = [self._test(current, 0)]
        for level in range(1, order + 1):
            heads.append(_head(current))
            current = difference(current, 1)
            steps.append(self._test(current, level))
        return self._finish(series, current, heads, steps)

    def _test(self, series: Series, order: int) -> StationarityTest:
        # A constant input is rejected by adf_test; a constant differenced
        # level (e.g. an exact linear trend) ends differencing.
        if order > 0:
            ensure_min_observations(series)
            if is_constant(series):
                return constant_level_test(series, alpha=self.alpha, order=order)
        return adf_test(series, alpha=self.alpha, order=order)

    def _finish(
        self,
        source: Series,
        current: Series,
        heads: List[Tuple[Any, float]],
        steps: List[StationarityTest],
    ) -> DifferencedSeries:
        order = len(heads)
        final = steps[-1]
        note = None
        if final.constant:
            note = f"series is constant after {order} difference(s); treated as stationary"
            log.info("Differencing reached a constant level", extra={"order": order})
        elif not final.stationary:
            note = (
                f"ADF did not reject a unit root at alpha={self.alpha} after {order} difference(s) "
                f"(p={final.p_value:.4f}); proceeding with order {order}"
            )
            log.warning(
                "Stationarity not reached within differencing cap",
                extra={"order": order, "p_value": final.p_value, "max_order": self.max_order},
            )
        else:
            log.info("Differencing complete", extra={"order": order, "p_value": final.p_value})
        return DifferencedSeries(
            series=current,
            order=order,
            heads=tuple(heads),
            steps=tuple(steps),
            stationary=final.stationary,
            note=note,
            source_length=len(source),
        )


def _head(series: Series) -> Tuple[Any, float]:
    data = series.to_pandas()
    return data.index[0], float(data.iloc[0])


__all__ = ["Differencer", "difference", "integrate"]
