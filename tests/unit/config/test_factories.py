import logging

import pytest

from arima_pipeline.config.factories import ComponentFactory
from arima_pipeline.data import SeriesDataSource
from arima_pipeline.data.factory import data_source_factory
from arima_pipeline.exceptions import DependencyError
from arima_pipeline.selection.base import OrderSelector
from arima_pipeline.selection.factory import selector_factory
from arima_pipeline.selection.heuristic import HeuristicSelector


def test_create_builds_and_logs(caplog):
    caplog.set_level(logging.INFO, logger="arima_pipeline.config.factories")
    selector = selector_factory("heuristic", max_lag=5).create()

    assert isinstance(selector, HeuristicSelector)
    assert isinstance(selector, OrderSelector)
    record = next(r for r in caplog.records if r.getMessage() == "Component loaded")
    assert record.kind == "selector"
    assert record.factory == "heuristic"
    assert record.type == "HeuristicSelector"


def test_create_is_deferred_until_called():
    calls = []
    factory = ComponentFactory("selector", "lazy", lambda: calls.append(1) or HeuristicSelector())
    assert calls == []
    factory.create()
    assert calls == [1]


def test_bad_options_raise_dependency_error():
    factory = ComponentFactory("selector", "heuristic", lambda: HeuristicSelector(unknown_option=3))
    with pytest.raises(DependencyError, match="Invalid options for selector 'heuristic'"):
        factory.create()


def test_unknown_name_raises_dependency_error():
    with pytest.raises(DependencyError):
        data_source_factory("fred").create()


def test_wrong_component_type_is_rejected():
    factory = ComponentFactory("data_source", "bogus", lambda: object(), expected=SeriesDataSource)
    with pytest.raises(DependencyError, match="expected SeriesDataSource"):
        factory.create()
