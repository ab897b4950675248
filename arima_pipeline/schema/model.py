"""Model specification, fitted-model and selection containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from arima_pipeline.exceptions import ConfigValidationError
from arima_pipeline.schema.series import DifferencedSeries, Series


@dataclass(frozen=True, order=True)
class ModelSpec:
    p: int
    d: int
    q: int

    def __post_init__(self) -> None:
        for name in ("p", "d", "q"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigValidationError(f"ModelSpec.{name} must be a non-negative int, got {value!r}")

    @classmethod
    def parse(cls, raw: str) -> "ModelSpec":
        """Parse "p,d,q" or "(p, d, q)" into a ModelSpec."""
        cleaned = raw.strip().strip("()").replace(" ", "")
        parts = cleaned.split(",")
        if len(parts) != 3:
            raise ConfigValidationError(f"Model order must look like 'p,d,q', got {raw!r}")
        try:
            p, d, q = (int(part) for part in parts)
        except ValueError as exc:
            raise ConfigValidationError(f"Model order must contain integers, got {raw!r}") from exc
        return cls(p, d, q)

    @property
    def order(self) -> Tuple[int, int, int]:
        return (self.p, self.d, self.q)

    @property
    def n_params(self) -> int:
        return self.p + self.q

    def parsimony_key(self) -> Tuple[int, int, int]:
        """Sort key where smaller means simpler."""
        return (self.p + self.q, self.d, self.p)

    def __str__(self) -> str:
        return f"ARIMA({self.p},{self.d},{self.q})"


@dataclass(eq=False)
class FittedModel:
    spec: ModelSpec
    coefficients: Dict[str, float]
    residuals: Series
    fitted_values: Series
    aic: float
    bic: float
    log_likelihood: float
    nobs: int
    converged: bool = True


@dataclass
class CandidateScore:
    spec: ModelSpec
    criterion: float
    aic: float
    bic: float
    converged: bool = True
    error: Optional[str] = None


@dataclass
class SelectionResult:
    spec: ModelSpec
    strategy: str
    alternative: Optional[ModelSpec] = None
    candidates: List[CandidateScore] = field(default_factory=list)
    rationale: str = ""
    # set when the selector differenced the series itself
    differenced: Optional[DifferencedSeries] = None


@dataclass
class ModelComparison:
    spec: ModelSpec
    aic: float
    bic: float
    log_likelihood: float
    rank: int


__all__ = ["ModelSpec", "FittedModel", "CandidateScore", "SelectionResult", "ModelComparison"]
