"""End-to-end orchestration: order selection, differencing, fitting, diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from arima_pipeline.analysis.differencing import Differencer
from arima_pipeline.diagnostics.residuals import run_residual_diagnostics
from arima_pipeline.fitting.comparison import compare_models
from arima_pipeline.fitting.fitter import ArimaFitter, Fitter
from arima_pipeline.schema.diagnostics import DiagnosticResult
from arima_pipeline.schema.model import FittedModel, ModelComparison, SelectionResult
from arima_pipeline.schema.run_config import PipelineConfig
from arima_pipeline.schema.series import DifferencedSeries, Series
from arima_pipeline.selection.base import OrderSelector
from arima_pipeline.selection.factory import selector_from_config
from arima_pipeline.utils.logging import get_logger
from arima_pipeline.utils.profiling import track_time

log = get_logger(__name__, component="pipeline")


@dataclass
class PipelineResult:
    series: Series
    differenced: DifferencedSeries
    selection: SelectionResult
    fitted: FittedModel
    diagnostics: Dict[str, DiagnosticResult]
    comparison: List[ModelComparison] = field(default_factory=list)


def run_pipeline(
    series: Series,
    config: Optional[PipelineConfig] = None,
    *,
    selector: Optional[OrderSelector] = None,
    fitter: Optional[Fitter] = None,
) -> PipelineResult:
    """Run one analysis over `series`.

    ConvergenceError from fitting the selected order propagates to the caller,
    who may retry with a different ModelSpec. Diagnostics never raise.
    """

    config = config or PipelineConfig()
    fit = fitter or ArimaFitter(maxiter=config.maxiter)
    selector = selector or selector_from_config(config, fitter=fit)
    log.info("Starting pipeline run", extra={"series": series.name, "n": len(series), "selector": selector.name})

    with track_time("order_selection"):
        selection = selector.propose(series)

    # The reported differencing always matches the d that gets fitted.
    differenced = selection.differenced
    if differenced is None or differenced.order != selection.spec.d:
        with track_time("differencing"):
            differencer = Differencer(alpha=config.alpha, max_order=config.max_diff_order)
            differenced = differencer.apply(series, selection.spec.d)

    with track_time("fitting"):
        fitted = fit(series, selection.spec)

    comparison: List[ModelComparison] = []
    if selection.alternative is not None:
        with track_time("comparison"):
            comparison = compare_models(
                series,
                [selection.spec, selection.alternative],
                fitter=fit,
                criterion=config.criterion,
            )

    with track_time("diagnostics"):
        diagnostics = run_residual_diagnostics(fitted, alpha=config.alpha, lags=config.ljung_box_lags)

    log.info(
        "Pipeline run complete",
        extra={"order": list(selection.spec.order), "aic": fitted.aic, "stationary": differenced.stationary},
    )
    return PipelineResult(
        series=series,
        differenced=differenced,
        selection=selection,
        fitted=fitted,
        diagnostics=diagnostics,
        comparison=comparison,
    )


__all__ = ["PipelineResult", "run_pipeline"]
