"""Pipeline configuration schema and validation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Literal

from arima_pipeline.exceptions import ConfigValidationError

Criterion = Literal["aic", "bic"]
SelectorName = Literal["search", "heuristic"]


@dataclass(slots=True)
class PipelineConfig:
    alpha: float = 0.05
    max_diff_order: int = 2
    selector: SelectorName = "search"
    max_p: int = 2
    max_q: int = 2
    max_lag: int = 10
    criterion: Criterion = "aic"
    ljung_box_lags: int = 10
    maxiter: int = 500

    def __post_init__(self) -> None:
        if not 0.0 < self.alpha < 1.0:
            raise ConfigValidationError("alpha must be in (0, 1)")
        if self.max_diff_order < 0:
            raise ConfigValidationError("max_diff_order must be >= 0")
        if self.selector not in {"search", "heuristic"}:
            raise ConfigValidationError("selector must be one of: search, heuristic")
        if self.max_p < 0 or self.max_q < 0:
            raise ConfigValidationError("max_p and max_q must be >= 0")
        if self.max_lag <= 0:
            raise ConfigValidationError("max_lag must be > 0")
        if self.criterion not in {"aic", "bic"}:
            raise ConfigValidationError("criterion must be one of: aic, bic")
        if self.ljung_box_lags <= 0:
            raise ConfigValidationError("ljung_box_lags must be > 0")
        if self.maxiter <= 0:
            raise ConfigValidationError("maxiter must be > 0")

    @classmethod
    def from_dict(cls, data: dict) -> "PipelineConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})

    def to_dict(self) -> dict:
        return asdict(self)


__all__ = ["PipelineConfig", "Criterion", "SelectorName"]
