"""Series loader interface.

Providers return an ordered `Series` for a country/indicator/year range and
raise DataSourceError on any failure. They are opaque external collaborators
of the pipeline: no retries, no caching.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from arima_pipeline.schema.series import Series


@runtime_checkable
class SeriesDataSource(Protocol):
    """Minimal interface implemented by all series providers."""

    name: str

    def fetch_series(
        self,
        country_code: str,
        indicator_code: str,
        start_year: Optional[int],
        end_year: Optional[int],
    ) -> Series:
        """Return (year, value) observations ordered by year."""


__all__ = ["SeriesDataSource"]
