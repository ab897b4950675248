"""Analyze CLI command wiring."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from arima_pipeline.cli.validation import validate_series_request
from arima_pipeline.config.loader import load_config_with_precedence
from arima_pipeline.data.factory import data_source_factory
from arima_pipeline.data.worldbank import GDP_CURRENT_USD
from arima_pipeline.exceptions import ConfigValidationError
from arima_pipeline.pipeline import run_pipeline
from arima_pipeline.reporting.console import render_report
from arima_pipeline.schema.run_config import PipelineConfig
from arima_pipeline.schema.run_meta import RunMeta
from arima_pipeline.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.analyze")


def analyze(
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Read the series from a (year, value) CSV instead of the World Bank"),
    country: Optional[str] = typer.Option(None, "--country", help="ISO country code (e.g., USA)"),
    indicator: Optional[str] = typer.Option(None, "--indicator", help="World Bank indicator code"),
    start_year: Optional[int] = typer.Option(None, "--start-year", help="First year"),
    end_year: Optional[int] = typer.Option(None, "--end-year", help="Last year"),
    selector: Optional[str] = typer.Option(None, "--selector", help="Order selector: search | heuristic"),
    alpha: Optional[float] = typer.Option(None, "--alpha", help="Significance level for all tests"),
    max_diff_order: Optional[int] = typer.Option(None, "--max-diff-order", help="Differencing cap"),
    max_p: Optional[int] = typer.Option(None, "--max-p", help="Largest AR order considered"),
    max_q: Optional[int] = typer.Option(None, "--max-q", help="Largest MA order considered"),
    max_lag: Optional[int] = typer.Option(None, "--max-lag", help="Largest ACF/PACF lag inspected"),
    criterion: Optional[str] = typer.Option(None, "--criterion", help="Search criterion: aic | bic"),
    ljung_box_lags: Optional[int] = typer.Option(None, "--lags", help="Ljung-Box lag"),
    maxiter: Optional[int] = typer.Option(None, "--maxiter", help="Optimizer iteration budget"),
    output: Optional[Path] = typer.Option(None, "--output", help="Write a JSON run summary to this path"),
) -> None:
    """Difference, select an ARIMA order, fit it and run residual diagnostics."""
    base = PipelineConfig()
    defaults = {
        "csv": None,
        "country": None,
        "indicator": GDP_CURRENT_USD,
        "start_year": 1960,
        "end_year": 2020,
        **base.to_dict(),
    }
    cli_values = {
        "csv": str(csv) if csv else None,
        "country": country,
        "indicator": indicator,
        "start_year": start_year,
        "end_year": end_year,
        "selector": selector,
        "alpha": alpha,
        "max_diff_order": max_diff_order,
        "max_p": max_p,
        "max_q": max_q,
        "max_lag": max_lag,
        "criterion": criterion,
        "ljung_box_lags": ljung_box_lags,
        "maxiter": maxiter,
    }
    casters = {
        "csv": str,
        "country": str,
        "indicator": str,
        "start_year": int,
        "end_year": int,
        "selector": lambda v: str(v).lower(),
        "alpha": float,
        "max_diff_order": int,
        "max_p": int,
        "max_q": int,
        "max_lag": int,
        "criterion": lambda v: str(v).lower(),
        "ljung_box_lags": int,
        "maxiter": int,
    }
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="ARIMA_",
        cli_values=cli_values,
        defaults=defaults,
        casters=casters,
    )

    if not cfg.get("csv") and not cfg.get("country"):
        raise ConfigValidationError("either --csv or --country is required (CLI > ENV > config)")
    validate_series_request(
        country=cfg.get("country"),
        indicator=cfg.get("indicator"),
        start_year=cfg["start_year"],
        end_year=cfg["end_year"],
    )
    pipeline_config = PipelineConfig.from_dict(cfg)

    if cfg.get("csv"):
        source = data_source_factory("csv", path=cfg["csv"]).create()
        series = source.fetch_series(cfg.get("country"), None, cfg["start_year"], cfg["end_year"])
    else:
        source = data_source_factory("worldbank").create()
        series = source.fetch_series(cfg["country"], cfg["indicator"], cfg["start_year"], cfg["end_year"])

    run_id = uuid.uuid4().hex[:12]
    log.info("Starting analyze run", extra={"run_id": run_id, "country": cfg.get("country"), "n": len(series)})
    result = run_pipeline(series, pipeline_config)
    render_report(result, console)

    if output is not None:
        meta = RunMeta.from_result(run_id, result, pipeline_config.to_dict())
        meta.write_atomic(output)
        console.print(f"[green]Run summary written to {output}[/green]")
