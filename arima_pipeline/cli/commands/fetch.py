"""CLI command for downloading an indicator series from the World Bank."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from arima_pipeline.cli.validation import require_positive, validate_series_request
from arima_pipeline.config.loader import load_config_with_precedence
from arima_pipeline.data.csv_source import write_series_csv
from arima_pipeline.data.factory import get_data_source
from arima_pipeline.data.worldbank import GDP_CURRENT_USD
from arima_pipeline.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.fetch")


def fetch(
    config: Optional[Path] = typer.Option(None, "--config", help="Path to YAML/JSON config file"),
    country: Optional[str] = typer.Option(None, "--country", help="ISO country code (e.g., USA, GBR)"),
    indicator: Optional[str] = typer.Option(None, "--indicator", help=f"World Bank indicator code (default {GDP_CURRENT_USD})"),
    start_year: Optional[int] = typer.Option(None, "--start-year", help="First year to fetch"),
    end_year: Optional[int] = typer.Option(None, "--end-year", help="Last year to fetch"),
    target: Path = typer.Option(Path("data/series.csv"), "--target", help="Output CSV path"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout seconds"),
) -> None:
    """Fetch an annual indicator series and save it as a (year, value) CSV."""
    defaults = {
        "country": None,
        "indicator": GDP_CURRENT_USD,
        "start_year": 1960,
        "end_year": 2020,
        "timeout": 10.0,
    }
    cfg = load_config_with_precedence(
        config_path=config,
        env_prefix="ARIMA_",
        cli_values={
            "country": country,
            "indicator": indicator,
            "start_year": start_year,
            "end_year": end_year,
            "timeout": timeout,
        },
        defaults=defaults,
        casters={"country": str, "indicator": str, "start_year": int, "end_year": int, "timeout": float},
    )
    if not cfg["country"]:
        console.print("[red]Error: --country is required (CLI > ENV > config)[/red]")
        raise typer.Exit(code=1)
    validate_series_request(
        country=cfg["country"],
        indicator=cfg["indicator"],
        start_year=cfg["start_year"],
        end_year=cfg["end_year"],
    )
    require_positive("timeout", cfg["timeout"])

    console.print(f"[bold cyan]Fetching {cfg['indicator']} for {cfg['country']}[/bold cyan]")
    console.print(f"  Years: {cfg['start_year']} to {cfg['end_year']}")

    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
        progress.add_task("Downloading from World Bank...", total=None)
        source = get_data_source("worldbank", timeout=cfg["timeout"])
        series = source.fetch_series(cfg["country"], cfg["indicator"], cfg["start_year"], cfg["end_year"])

    saved = write_series_csv(series, target)
    console.print(f"[green]Saved {len(series)} observations to {saved}[/green]")
    log.info(
        "Series saved",
        extra={"country": cfg["country"], "indicator": cfg["indicator"], "n": len(series), "path": str(saved)},
    )
