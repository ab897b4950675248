"""Model estimation and comparison."""

from __future__ import annotations

from arima_pipeline.fitting.comparison import compare_models, rank_by_criterion
from arima_pipeline.fitting.fitter import ArimaFitter, Fitter, fit_arima

__all__ = ["ArimaFitter", "Fitter", "compare_models", "fit_arima", "rank_by_criterion"]
