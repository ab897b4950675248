"""ARIMA analysis pipeline for annual economic series.

Stages: Differencer -> OrderSelector -> fit_arima -> residual diagnostics,
orchestrated by `run_pipeline`.
"""

from __future__ import annotations

from arima_pipeline.analysis.differencing import Differencer, difference, integrate
from arima_pipeline.diagnostics.residuals import run_residual_diagnostics
from arima_pipeline.exceptions import ConvergenceError
from arima_pipeline.fitting.fitter import fit_arima
from arima_pipeline.pipeline import PipelineResult, run_pipeline
from arima_pipeline.schema import (
    DiagnosticResult,
    DifferencedSeries,
    FittedModel,
    ModelSpec,
    PipelineConfig,
    SelectionResult,
    Series,
)
from arima_pipeline.selection import HeuristicSelector, OrderSelector, SearchSelector

__version__ = "0.1.0"

__all__ = [
    "ConvergenceError",
    "DiagnosticResult",
    "DifferencedSeries",
    "Differencer",
    "FittedModel",
    "HeuristicSelector",
    "ModelSpec",
    "OrderSelector",
    "PipelineConfig",
    "PipelineResult",
    "SearchSelector",
    "SelectionResult",
    "Series",
    "difference",
    "fit_arima",
    "integrate",
    "run_pipeline",
    "run_residual_diagnostics",
]
