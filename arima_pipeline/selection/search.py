"""Information-criterion grid search over candidate ARIMA orders."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from arima_pipeline.analysis.differencing import Differencer
from arima_pipeline.exceptions import ConfigValidationError, ModelFitError, ModelSelectionError
from arima_pipeline.fitting.comparison import rank_by_criterion
from arima_pipeline.fitting.fitter import ArimaFitter, Fitter
from arima_pipeline.schema.model import CandidateScore, ModelSpec, SelectionResult
from arima_pipeline.schema.series import DifferencedSeries, Series
from arima_pipeline.selection.base import OrderSelector
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="selector.search")


def candidate_grid(max_p: int, max_q: int, d: int) -> List[ModelSpec]:
    return [ModelSpec(p, d, q) for p in range(max_p + 1) for q in range(max_q + 1)]


class SearchSelector(OrderSelector):
    """Fit every candidate and keep the one minimising the information criterion.

    Candidates come from `candidates` when given, otherwise from the grid
    p in [0, max_p], q in [0, max_q] at the differencing order chosen by the
    Differencer (or the fixed `d`). Ties within `tie_tolerance` go to the
    lower order. Candidates that fail to fit are recorded and skipped.
    """

    name = "search"

    def __init__(
        self,
        *,
        max_p: int = 2,
        max_q: int = 2,
        d: Optional[int] = None,
        candidates: Optional[Iterable[ModelSpec]] = None,
        criterion: str = "aic",
        tie_tolerance: float = 1e-9,
        alpha: float = 0.05,
        max_diff_order: int = 2,
        fitter: Optional[Fitter] = None,
        differencer: Optional[Differencer] = None,
    ) -> None:
        if criterion not in {"aic", "bic"}:
            raise ConfigValidationError("criterion must be one of: aic, bic")
        self.max_p = max_p
        self.max_q = max_q
        self.d = d
        self.candidates: Optional[List[ModelSpec]] = list(dict.fromkeys(candidates)) if candidates is not None else None
        if self.candidates is not None and not self.candidates:
            raise ConfigValidationError("candidates must not be empty")
        self.criterion = criterion
        self.tie_tolerance = tie_tolerance
        self.fitter = fitter or ArimaFitter()
        self.differencer = differencer or Differencer(alpha=alpha, max_order=max_diff_order)

    def _candidates_for(self, series: Series) -> Tuple[Sequence[ModelSpec], Optional[DifferencedSeries]]:
        if self.candidates is not None:
            return self.candidates, None
        if self.d is not None:
            return candidate_grid(self.max_p, self.max_q, self.d), None
        differenced = self.differencer.run(series)
        return candidate_grid(self.max_p, self.max_q, differenced.order), differenced

    def propose(self, series: Series) -> SelectionResult:
        candidates, differenced = self._candidates_for(series)
        scores: List[CandidateScore] = []
        for spec in candidates:
            try:
                model = self.fitter(series, spec)
            except ModelFitError as exc:
                log.warning("Candidate skipped", extra={"order": list(spec.order), "error": str(exc)})
                scores.append(
                    CandidateScore(spec=spec, criterion=math.inf, aic=math.nan, bic=math.nan, converged=False, error=str(exc))
                )
                continue
            scores.append(
                CandidateScore(spec=spec, criterion=getattr(model, self.criterion), aic=model.aic, bic=model.bic)
            )

        fitted = [score for score in scores if score.converged and math.isfinite(score.criterion)]
        if not fitted:
            raise ModelSelectionError(f"No candidate order could be fitted ({len(scores)} tried)")

        ranked = rank_by_criterion(
            fitted,
            value=lambda score: score.criterion,
            spec=lambda score: score.spec,
            tie_tolerance=self.tie_tolerance,
        )
        best = ranked[0]
        alternative = ranked[1].spec if len(ranked) > 1 else None
        rationale = f"lowest {self.criterion.upper()}={best.criterion:.3f} among {len(fitted)} fitted candidate(s)"
        if alternative is not None:
            rationale += f"; runner-up {alternative} with {self.criterion.upper()}={ranked[1].criterion:.3f}"
        log.info(
            "Search order selected",
            extra={"order": list(best.spec.order), "criterion": self.criterion, "value": best.criterion},
        )
        return SelectionResult(
            spec=best.spec,
            strategy=self.name,
            alternative=alternative,
            candidates=scores,
            rationale=rationale,
            differenced=differenced,
        )


__all__ = ["SearchSelector", "candidate_grid"]
