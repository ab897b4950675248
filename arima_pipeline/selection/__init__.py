"""Order selection strategies sharing the `OrderSelector.propose` interface."""

from __future__ import annotations

from arima_pipeline.selection.base import OrderSelector
from arima_pipeline.selection.factory import get_selector, selector_factory, selector_from_config
from arima_pipeline.selection.heuristic import HeuristicSelector, orders_from_correlogram
from arima_pipeline.selection.search import SearchSelector, candidate_grid

__all__ = [
    "HeuristicSelector",
    "OrderSelector",
    "SearchSelector",
    "candidate_grid",
    "get_selector",
    "orders_from_correlogram",
    "selector_factory",
    "selector_from_config",
]
