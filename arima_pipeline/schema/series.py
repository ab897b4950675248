"""Immutable time-series containers shared by every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from arima_pipeline.exceptions import DataSourceError, InsufficientDataError, TimestampAnomalyError


@dataclass(frozen=True, eq=False)
class Series:
    """Ordered (period, value) observations backed by a pandas Series.

    Periods are the index (int years or timestamps) and must be strictly
    increasing. Values are finite floats. The wrapped data is copied on the way
    in and on the way out so a loaded Series cannot be mutated.
    """

    data: pd.Series
    name: str = "value"

    def __post_init__(self) -> None:
        if not isinstance(self.data, pd.Series):
            raise DataSourceError("Series data must be a pandas Series")
        if self.data.empty:
            raise InsufficientDataError("Series must contain at least one observation")
        index = self.data.index
        if not index.is_unique or not index.is_monotonic_increasing:
            raise TimestampAnomalyError(f"Series '{self.name}' periods must be strictly increasing")
        try:
            values = pd.to_numeric(self.data, errors="raise").astype(float)
        except (TypeError, ValueError) as exc:
            raise DataSourceError(f"Series '{self.name}' contains non-numeric values") from exc
        if not np.isfinite(values.to_numpy()).all():
            raise DataSourceError(f"Series '{self.name}' contains missing or infinite values")
        object.__setattr__(self, "data", values.rename(self.name).copy())

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Any, float]], name: str = "value") -> "Series":
        pairs = list(pairs)
        if not pairs:
            raise InsufficientDataError("Series must contain at least one observation")
        periods, values = zip(*pairs)
        return cls(pd.Series(list(values), index=list(periods), dtype=float), name=name)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def values(self) -> np.ndarray:
        return self.data.to_numpy(copy=True)

    @property
    def periods(self) -> pd.Index:
        return self.data.index.copy()

    def to_pandas(self) -> pd.Series:
        return self.data.copy()

    def pairs(self) -> List[Tuple[Any, float]]:
        return list(zip(self.data.index.tolist(), self.data.tolist()))


@dataclass(frozen=True)
class StationarityTest:
    """Outcome of one Augmented Dickey-Fuller evaluation."""

    order: int
    statistic: float
    p_value: float
    used_lags: int
    nobs: int
    critical_values: Dict[str, float]
    alpha: float
    kpss_p_value: Optional[float] = None
    constant: bool = False

    @property
    def stationary(self) -> bool:
        # a constant level has no unit root; ADF is undefined there
        return self.constant or self.p_value < self.alpha


@dataclass(frozen=True, eq=False)
class DifferencedSeries:
    """A Series after `order` first-difference passes.

    `heads` holds the (period, value) dropped from each intermediate level
    (level 0 is the original series) so the transformation can be inverted
    exactly.
    """

    series: Series
    order: int
    heads: Tuple[Tuple[Any, float], ...] = ()
    steps: Tuple[StationarityTest, ...] = ()
    stationary: bool = True
    note: Optional[str] = None
    source_length: int = field(default=0)

    def __len__(self) -> int:
        return len(self.series)

    @property
    def final_test(self) -> Optional[StationarityTest]:
        return self.steps[-1] if self.steps else None


__all__ = ["Series", "StationarityTest", "DifferencedSeries"]
