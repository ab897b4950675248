"""Residual diagnostics."""

from __future__ import annotations

from arima_pipeline.diagnostics.residuals import (
    breusch_pagan,
    jarque_bera,
    ljung_box,
    run_residual_diagnostics,
    shapiro_wilk,
)

__all__ = ["breusch_pagan", "jarque_bera", "ljung_box", "run_residual_diagnostics", "shapiro_wilk"]
