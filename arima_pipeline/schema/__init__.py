"""Data model shared across pipeline stages."""

from __future__ import annotations

from arima_pipeline.schema.diagnostics import DiagnosticResult
from arima_pipeline.schema.model import CandidateScore, FittedModel, ModelComparison, ModelSpec, SelectionResult
from arima_pipeline.schema.run_config import PipelineConfig
from arima_pipeline.schema.series import DifferencedSeries, Series, StationarityTest

__all__ = [
    "CandidateScore",
    "DiagnosticResult",
    "DifferencedSeries",
    "FittedModel",
    "ModelComparison",
    "ModelSpec",
    "PipelineConfig",
    "SelectionResult",
    "Series",
    "StationarityTest",
]
