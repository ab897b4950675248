"""CLI validation helpers."""

from __future__ import annotations

from arima_pipeline.exceptions import ConfigValidationError


def require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be > 0")


def validate_series_request(
    *,
    country: str | None,
    indicator: str | None,
    start_year: int,
    end_year: int,
) -> None:
    if country is not None and not country.strip():
        raise ConfigValidationError("country is required")
    if indicator is not None and not indicator.strip():
        raise ConfigValidationError("indicator is required")
    if start_year > end_year:
        raise ConfigValidationError(f"start_year ({start_year}) must not exceed end_year ({end_year})")


__all__ = ["require_positive", "validate_series_request"]
