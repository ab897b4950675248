"""Factory for series data sources."""

from __future__ import annotations

from typing import Any

from arima_pipeline.config.factories import ComponentFactory
from arima_pipeline.data import SeriesDataSource
from arima_pipeline.data.csv_source import CsvDataSource
from arima_pipeline.data.worldbank import WorldBankDataSource
from arima_pipeline.exceptions import DependencyError


def get_data_source(name: str, **kwargs: Any) -> SeriesDataSource:
    name = name.lower()
    if name == "worldbank":
        return WorldBankDataSource(**{k: v for k, v in kwargs.items() if k in {"base_url", "timeout", "per_page", "http_get"}})
    if name == "csv":
        if not kwargs.get("path"):
            raise DependencyError("csv data source requires a path")
        return CsvDataSource(
            kwargs["path"],
            period_column=kwargs.get("period_column"),
            value_column=kwargs.get("value_column"),
        )
    raise DependencyError(f"Unknown data source: {name}")


def data_source_factory(name: str, **kwargs: Any) -> ComponentFactory[SeriesDataSource]:
    return ComponentFactory("data_source", name, lambda: get_data_source(name, **kwargs), expected=SeriesDataSource)


__all__ = ["data_source_factory", "get_data_source"]
