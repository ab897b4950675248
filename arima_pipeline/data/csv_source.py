"""Local CSV series source and writer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from arima_pipeline.exceptions import DataSourceError, InsufficientDataError
from arima_pipeline.schema.series import Series

log = logging.getLogger(__name__)

PERIOD_COLUMNS = ("year", "date", "period", "timestamp", "time")


class CsvDataSource:
    """Read a (period, value) series from a CSV file.

    The period column is detected from PERIOD_COLUMNS unless given. Integer
    periods are kept as years; anything else is parsed as dates.
    """

    name = "csv"

    def __init__(self, path: Path | str, *, period_column: Optional[str] = None, value_column: Optional[str] = None) -> None:
        self.path = Path(path)
        self.period_column = period_column
        self.value_column = value_column

    def fetch_series(
        self,
        country_code: Optional[str] = None,
        indicator_code: Optional[str] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ) -> Series:
        if not self.path.exists():
            raise DataSourceError(f"series file not found: {self.path}")
        df = pd.read_csv(self.path)
        period_col = self.period_column or next((c for c in PERIOD_COLUMNS if c in df.columns), None)
        if period_col is None or period_col not in df.columns:
            raise DataSourceError(f"CSV must include a period column (one of {', '.join(PERIOD_COLUMNS)})")

        value_col = self.value_column
        if value_col is None:
            value_cols = [c for c in df.columns if c != period_col]
            if len(value_cols) != 1:
                raise DataSourceError("CSV must include exactly one value column when 'value_column' not provided")
            value_col = value_cols[0]
        elif value_col not in df.columns:
            raise DataSourceError(f"value column '{value_col}' not found in {self.path}")

        df = df[[period_col, value_col]].dropna()
        raw_periods = df[period_col]
        if pd.api.types.is_numeric_dtype(raw_periods) and (raw_periods % 1 == 0).all():
            periods = df[period_col].astype(int)
            years = periods
        else:
            periods = pd.to_datetime(df[period_col])
            years = periods.dt.year

        mask = pd.Series(True, index=df.index)
        if start_year is not None:
            mask &= years >= start_year
        if end_year is not None:
            mask &= years <= end_year
        if not mask.any():
            raise InsufficientDataError(f"No observations in {self.path} for the requested range")

        data = pd.Series(df.loc[mask, value_col].to_numpy(dtype=float), index=pd.Index(periods[mask])).sort_index()
        name = ":".join(part for part in (country_code, indicator_code) if part) or str(value_col)
        log.info("Loaded CSV series", extra={"path": str(self.path), "n": len(data)})
        return Series(data, name=name)


def write_series_csv(series: Series, path: Path, *, period_column: str = "year") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = series.to_pandas().rename("value").rename_axis(period_column).reset_index()
    frame.to_csv(path, index=False)
    return path


__all__ = ["CsvDataSource", "PERIOD_COLUMNS", "write_series_csv"]
