"""Factory for order selection strategies."""

from __future__ import annotations

from typing import Any, Optional

from arima_pipeline.config.factories import ComponentFactory
from arima_pipeline.exceptions import DependencyError
from arima_pipeline.fitting.fitter import ArimaFitter, Fitter
from arima_pipeline.schema.run_config import PipelineConfig
from arima_pipeline.selection.base import OrderSelector
from arima_pipeline.selection.heuristic import HeuristicSelector
from arima_pipeline.selection.search import SearchSelector

_HEURISTIC_KEYS = {"alpha", "max_diff_order", "max_lag", "max_p", "max_q", "d", "differencer"}
_SEARCH_KEYS = {
    "max_p",
    "max_q",
    "d",
    "candidates",
    "criterion",
    "tie_tolerance",
    "alpha",
    "max_diff_order",
    "fitter",
    "differencer",
}


def get_selector(name: str, **kwargs: Any) -> OrderSelector:
    name = name.lower()
    if name == "heuristic":
        return HeuristicSelector(**{k: v for k, v in kwargs.items() if k in _HEURISTIC_KEYS})
    if name == "search":
        return SearchSelector(**{k: v for k, v in kwargs.items() if k in _SEARCH_KEYS})
    raise DependencyError(f"Unknown order selector: {name}")


def selector_from_config(config: PipelineConfig, *, fitter: Optional[Fitter] = None) -> OrderSelector:
    factory = selector_factory(
        config.selector,
        alpha=config.alpha,
        max_diff_order=config.max_diff_order,
        max_lag=config.max_lag,
        max_p=config.max_p,
        max_q=config.max_q,
        criterion=config.criterion,
        fitter=fitter or ArimaFitter(maxiter=config.maxiter),
    )
    return factory.create()


def selector_factory(name: str, **kwargs: Any) -> ComponentFactory[OrderSelector]:
    return ComponentFactory("selector", name, lambda: get_selector(name, **kwargs), expected=OrderSelector)


__all__ = ["get_selector", "selector_factory", "selector_from_config"]
