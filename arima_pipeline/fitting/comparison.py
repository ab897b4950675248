"""Information-criterion ranking shared by order search and model comparison."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from arima_pipeline.exceptions import ModelFitError
from arima_pipeline.fitting.fitter import ArimaFitter, Fitter
from arima_pipeline.schema.model import ModelComparison, ModelSpec
from arima_pipeline.schema.series import Series
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="comparison")

T = TypeVar("T")


def rank_by_criterion(
    items: Iterable[T],
    *,
    value: Callable[[T], float],
    spec: Callable[[T], ModelSpec],
    tie_tolerance: float = 1e-9,
) -> List[T]:
    """Order items by ascending criterion; near-ties go to the simpler model.

    Two values are tied when they differ by at most `tie_tolerance`; among tied
    items the one with the smaller `ModelSpec.parsimony_key()` ranks first.
    """

    remaining = sorted(items, key=lambda item: (value(item), spec(item).parsimony_key()))
    ranked: List[T] = []
    while remaining:
        best_value = value(remaining[0])
        tied = [item for item in remaining if value(item) - best_value <= tie_tolerance]
        winner = min(tied, key=lambda item: spec(item).parsimony_key())
        ranked.append(winner)
        remaining.remove(winner)
    return ranked


def compare_models(
    series: Series,
    specs: Sequence[ModelSpec],
    *,
    fitter: Optional[Fitter] = None,
    criterion: str = "aic",
    tie_tolerance: float = 1e-9,
) -> List[ModelComparison]:
    """Fit each spec and rank them (lower criterion wins, parsimony tie-break).

    Specs that fail to fit are logged and left out of the table.
    """

    fit = fitter or ArimaFitter()
    fitted = []
    for candidate in dict.fromkeys(specs):
        try:
            fitted.append(fit(series, candidate))
        except ModelFitError as exc:
            log.warning("Comparison candidate skipped", extra={"order": list(candidate.order), "error": str(exc)})

    ranked = rank_by_criterion(
        fitted,
        value=lambda model: getattr(model, criterion),
        spec=lambda model: model.spec,
        tie_tolerance=tie_tolerance,
    )
    return [
        ModelComparison(
            spec=model.spec,
            aic=model.aic,
            bic=model.bic,
            log_likelihood=model.log_likelihood,
            rank=position,
        )
        for position, model in enumerate(ranked, start=1)
    ]


__all__ = ["compare_models", "rank_by_criterion"]
