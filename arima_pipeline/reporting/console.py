"""Terminal rendering of a pipeline run with rich tables."""

from __future__ import annotations

import math
from typing import Optional

from rich.console import Console
from rich.table import Table

from arima_pipeline.pipeline import PipelineResult


def _fmt(value: Optional[float], digits: int = 4) -> str:
    if value is None or not math.isfinite(value):
        return "-"
    return f"{value:.{digits}f}"


def stationarity_table(result: PipelineResult) -> Table:
    table = Table(title=f"Stationarity (ADF, alpha={result.differenced.steps[0].alpha})")
    table.add_column("Order", justify="right")
    table.add_column("ADF stat", justify="right")
    table.add_column("p-value", justify="right")
    table.add_column("Lags", justify="right")
    table.add_column("KPSS p", justify="right")
    table.add_column("Stationary")
    for step in result.differenced.steps:
        table.add_row(
            str(step.order),
            _fmt(step.statistic),
            _fmt(step.p_value),
            str(step.used_lags),
            _fmt(step.kpss_p_value),
            "[green]yes[/green]" if step.stationary else "[red]no[/red]",
        )
    return table


def selection_table(result: PipelineResult) -> Table:
    selection = result.selection
    table = Table(title=f"Order selection ({selection.strategy})")
    table.add_column("Model")
    table.add_column("AIC", justify="right")
    table.add_column("BIC", justify="right")
    table.add_column("Status")
    for score in selection.candidates:
        status = "selected" if score.spec == selection.spec else ("failed" if not score.converged else "")
        table.add_row(str(score.spec), _fmt(score.aic, 2), _fmt(score.bic, 2), status)
    return table


def coefficients_table(result: PipelineResult) -> Table:
    fitted = result.fitted
    table = Table(title=f"{fitted.spec} coefficients")
    table.add_column("Parameter")
    table.add_column("Estimate", justify="right")
    for name, value in fitted.coefficients.items():
        table.add_row(name, _fmt(value))
    table.add_row("AIC", _fmt(fitted.aic, 2))
    table.add_row("BIC", _fmt(fitted.bic, 2))
    table.add_row("Log-likelihood", _fmt(fitted.log_likelihood, 2))
    return table


def comparison_table(result: PipelineResult) -> Table:
    table = Table(title="Model comparison")
    table.add_column("Rank", justify="right")
    table.add_column("Model")
    table.add_column("AIC", justify="right")
    table.add_column("BIC", justify="right")
    table.add_column("Log-likelihood", justify="right")
    for row in result.comparison:
        table.add_row(str(row.rank), str(row.spec), _fmt(row.aic, 2), _fmt(row.bic, 2), _fmt(row.log_likelihood, 2))
    return table


def diagnostics_table(result: PipelineResult) -> Table:
    table = Table(title="Residual diagnostics")
    table.add_column("Test")
    table.add_column("Statistic", justify="right")
    table.add_column("p-value", justify="right")
    table.add_column("Decision")
    table.add_column("H0")
    for name, diag in result.diagnostics.items():
        colour = {"reject": "red", "fail to reject": "green"}.get(diag.decision, "yellow")
        table.add_row(
            name,
            _fmt(diag.statistic),
            _fmt(diag.p_value),
            f"[{colour}]{diag.decision}[/{colour}]",
            diag.null_hypothesis,
        )
    return table


def render_report(result: PipelineResult, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(f"[bold cyan]{result.series.name}[/bold cyan]: {len(result.series)} observations")
    console.print(stationarity_table(result))
    if result.differenced.note:
        console.print(f"[yellow]WARNING:[/yellow] {result.differenced.note}")
    if result.selection.candidates:
        console.print(selection_table(result))
    console.print(f"Selected {result.selection.spec}: {result.selection.rationale}")
    console.print(coefficients_table(result))
    if result.comparison:
        console.print(comparison_table(result))
    console.print(diagnostics_table(result))


__all__ = [
    "coefficients_table",
    "comparison_table",
    "diagnostics_table",
    "render_report",
    "selection_table",
    "stationarity_table",
]
