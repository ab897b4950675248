"""World Bank Indicators API client returning annual Series."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import pandas as pd

from arima_pipeline.exceptions import DataSourceError, InsufficientDataError
from arima_pipeline.schema.series import Series

log = logging.getLogger(__name__)

GDP_CURRENT_USD = "NY.GDP.MKTP.CD"

_HttpGetter = Callable[..., Any]


@dataclass(slots=True)
class _WorldBankResponse:
    status_code: int
    payload: Any

    def json(self) -> Any:
        return self.payload


class WorldBankDataSource:
    """REST adapter for the World Bank v2 indicator endpoint.

    Network calls go through an injectable HTTP getter (``requests.get`` by
    default) so tests can feed canned payloads. Every failure surfaces as
    DataSourceError; nothing is retried.
    """

    name = "worldbank"

    def __init__(
        self,
        *,
        base_url: str = "https://api.worldbank.org/v2",
        timeout: float = 10.0,
        per_page: int = 20000,
        http_get: _HttpGetter | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.per_page = per_page
        self._http_get = http_get

    def fetch_series(
        self,
        country_code: str,
        indicator_code: str = GDP_CURRENT_USD,
        start_year: int = 1960,
        end_year: int = 2020,
    ) -> Series:
        if not country_code.strip():
            raise DataSourceError("country_code is required")
        if start_year > end_year:
            raise DataSourceError(f"start_year {start_year} is after end_year {end_year}")

        path = f"country/{country_code}/indicator/{indicator_code}"
        params = {"date": f"{start_year}:{end_year}", "format": "json", "per_page": self.per_page}
        payload = self._request(path, params)
        rows = self._rows(payload)

        observations = {}
        for row in rows:
            value = row.get("value")
            if value is None:
                continue
            try:
                observations[int(row["date"])] = float(value)
            except (KeyError, TypeError, ValueError) as exc:
                raise DataSourceError(f"Malformed World Bank row: {row!r}") from exc

        if not observations:
            raise InsufficientDataError(
                f"World Bank returned no values for {indicator_code} in {country_code} ({start_year}-{end_year})"
            )

        data = pd.Series(observations, dtype=float).sort_index()
        dropped = len(rows) - len(data)
        log.info(
            "Fetched World Bank series",
            extra={"country": country_code, "indicator": indicator_code, "n": len(data), "dropped_nulls": dropped},
        )
        return Series(data, name=f"{country_code}:{indicator_code}")

    @staticmethod
    def _rows(payload: Any) -> list[Mapping[str, Any]]:
        if not isinstance(payload, list) or not payload:
            raise DataSourceError("Unexpected World Bank payload shape")
        header = payload[0]
        if isinstance(header, Mapping) and "message" in header:
            messages = header.get("message") or []
            detail = messages[0].get("value") if messages and isinstance(messages[0], Mapping) else "unknown error"
            raise DataSourceError(f"World Bank API error: {detail}")
        if len(payload) < 2 or payload[1] is None:
            return []
        if not isinstance(payload[1], list):
            raise DataSourceError("World Bank data block must be a list")
        return payload[1]

    def _request(self, path: str, params: Mapping[str, Any]) -> Any:
        response = self._perform_request(path, params)
        status_code = getattr(response, "status_code", 500)
        if status_code >= 400:
            raise DataSourceError(f"World Bank API {status_code} for {path}")
        try:
            return response.json()
        except ValueError as exc:
            raise DataSourceError("Unable to parse World Bank response as JSON") from exc

    def _perform_request(self, path: str, params: Mapping[str, Any]) -> Any:
        client = self._http_get
        if client is None:
            import requests

            client = requests.get

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = client(url, params=dict(params), timeout=self.timeout)
        except OSError as exc:
            raise DataSourceError(f"World Bank request failed: {exc}") from exc
        if not hasattr(response, "status_code"):
            return _WorldBankResponse(status_code=200, payload=response)
        return response


__all__ = ["GDP_CURRENT_USD", "WorldBankDataSource"]
