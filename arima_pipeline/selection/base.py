"""Order selector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from arima_pipeline.schema.model import SelectionResult
from arima_pipeline.schema.series import Series


class OrderSelector(ABC):
    """Base class for strategies that propose an ARIMA(p, d, q) order."""

    name: str = "selector"

    @abstractmethod
    def propose(self, series: Series) -> SelectionResult:
        """Return the proposed ModelSpec and the alternative considered."""
