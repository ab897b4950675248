"""Project-wide exception types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from arima_pipeline.schema.model import ModelSpec


class ArimaPipelineError(Exception):
    """Base exception for all pipeline errors."""


class DataSourceError(ArimaPipelineError):
    """Raised when series retrieval or schema checks fail."""


class InsufficientDataError(DataSourceError):
    """Raised when a series does not meet minimum sample requirements."""


class TimestampAnomalyError(DataSourceError):
    """Raised when periods are duplicated or out of order."""


class ConfigError(ArimaPipelineError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""


class ModelFitError(ArimaPipelineError):
    """Raised when model estimation fails numerically."""


class ConvergenceError(ModelFitError):
    """Raised when the likelihood optimizer does not converge."""

    def __init__(self, message: str, spec: "ModelSpec | None" = None) -> None:
        super().__init__(message)
        self.spec = spec


class ModelSelectionError(ArimaPipelineError):
    """Raised when no candidate order could be fitted."""


class DependencyError(ArimaPipelineError):
    """Raised when a requested component or dependency is unknown or missing."""
