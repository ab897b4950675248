"""Stationarity analysis: unit-root tests, differencing and correlograms."""

from __future__ import annotations

from arima_pipeline.analysis.correlogram import Correlogram, compute_correlogram, cutoff_lag
from arima_pipeline.analysis.differencing import Differencer, difference, integrate
from arima_pipeline.analysis.stationarity import MIN_OBSERVATIONS, adf_test

__all__ = [
    "Correlogram",
    "Differencer",
    "MIN_OBSERVATIONS",
    "adf_test",
    "compute_correlogram",
    "cutoff_lag",
    "difference",
    "integrate",
]
