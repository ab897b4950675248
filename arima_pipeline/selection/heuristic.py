"""ACF/PACF cutoff heuristic for ARIMA order selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from arima_pipeline.analysis.correlogram import compute_correlogram, cutoff_lag
from arima_pipeline.analysis.differencing import Differencer
from arima_pipeline.schema.model import ModelSpec, SelectionResult
from arima_pipeline.schema.series import Series
from arima_pipeline.selection.base import OrderSelector
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="selector.heuristic")


@dataclass(frozen=True)
class HeuristicOrders:
    p: int
    q: int
    alternative: Optional[Tuple[int, int]]
    rationale: str


def orders_from_correlogram(
    acf_values: Sequence[float],
    pacf_values: Sequence[float],
    bound: float,
    *,
    max_p: Optional[int] = None,
    max_q: Optional[int] = None,
) -> HeuristicOrders:
    """Apply the cutoff rule: PACF cutoff at k gives AR(k), ACF cutoff at k gives MA(k).

    When both functions have significant leading lags, the one with the shorter
    run is taken to cut off and the other to decay. Equal runs favour AR.
    """

    pacf_cut = cutoff_lag(pacf_values, bound)
    acf_cut = cutoff_lag(acf_values, bound)
    p = pacf_cut if max_p is None else min(pacf_cut, max_p)
    q = acf_cut if max_q is None else min(acf_cut, max_q)
    summary = f"PACF cutoff={pacf_cut}, ACF cutoff={acf_cut}, bound={bound:.4f}"

    if p == 0 and q == 0:
        return HeuristicOrders(0, 0, None, f"{summary}: no significant autocorrelation")
    if q == 0:
        return HeuristicOrders(p, 0, None, f"{summary}: PACF cuts off, AR({p})")
    if p == 0:
        return HeuristicOrders(0, q, None, f"{summary}: ACF cuts off, MA({q})")
    if pacf_cut <= acf_cut:
        return HeuristicOrders(p, 0, (0, q), f"{summary}: PACF cuts off while ACF decays, AR({p})")
    return HeuristicOrders(0, q, (p, 0), f"{summary}: ACF cuts off while PACF decays, MA({q})")


class HeuristicSelector(OrderSelector):
    """Propose an order by inspecting the correlogram of the differenced series."""

    name = "heuristic"

    def __init__(
        self,
        *,
        alpha: float = 0.05,
        max_diff_order: int = 2,
        max_lag: int = 10,
        max_p: int = 2,
        max_q: int = 2,
        d: Optional[int] = None,
        differencer: Optional[Differencer] = None,
    ) -> None:
        self.max_lag = max_lag
        self.max_p = max_p
        self.max_q = max_q
        self.d = d
        self.differencer = differencer or Differencer(alpha=alpha, max_order=max_diff_order)

    def propose(self, series: Series) -> SelectionResult:
        if self.d is None:
            differenced = self.differencer.run(series)
        else:
            differenced = self.differencer.apply(series, self.d)
        d = differenced.order

        correlogram = compute_correlogram(differenced.series, max_lag=self.max_lag)
        orders = orders_from_correlogram(
            correlogram.acf_values,
            correlogram.pacf_values,
            correlogram.bound,
            max_p=self.max_p,
            max_q=self.max_q,
        )
        spec = ModelSpec(orders.p, d, orders.q)
        alternative = ModelSpec(orders.alternative[0], d, orders.alternative[1]) if orders.alternative else None
        log.info(
            "Heuristic order proposed",
            extra={"order": list(spec.order), "alternative": list(alternative.order) if alternative else None},
        )
        return SelectionResult(
            spec=spec,
            strategy=self.name,
            alternative=alternative,
            rationale=orders.rationale,
            differenced=differenced,
        )


__all__ = ["HeuristicOrders", "HeuristicSelector", "orders_from_correlogram"]
