import json

import pytest

from arima_pipeline.exceptions import ConfigValidationError
from arima_pipeline.schema.run_config import PipelineConfig
from arima_pipeline.schema.run_meta import ReproducibilityContext, RunMeta


def test_defaults_are_valid():
    cfg = PipelineConfig()
    assert cfg.alpha == 0.05
    assert cfg.max_diff_order == 2
    assert cfg.selector == "search"


@pytest.mark.parametrize(
    "overrides",
    [
        {"alpha": 0.0},
        {"alpha": 1.5},
        {"max_diff_order": -1},
        {"selector": "auto"},
        {"criterion": "hqic"},
        {"ljung_box_lags": 0},
        {"maxiter": 0},
    ],
)
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigValidationError):
        PipelineConfig(**overrides)


def test_from_dict_ignores_unknown_and_none():
    cfg = PipelineConfig.from_dict({"alpha": 0.1, "country": "USA", "max_p": None})
    assert cfg.alpha == 0.1
    assert cfg.max_p == 2
    assert cfg.to_dict()["alpha"] == 0.1


def test_run_meta_json_round_trip(tmp_path):
    meta = RunMeta(
        run_id="abc",
        series_name="USA:NY.GDP.MKTP.CD",
        n_observations=61,
        config=PipelineConfig().to_dict(),
        differencing_order=2,
        stationary=True,
        selected_order=[0, 2, 1],
        alternative_order=[1, 2, 1],
        strategy="search",
        coefficients={"ma.L1": -0.4, "sigma2": 1.2},
        information_criteria={"aic": 100.0, "bic": 104.0, "log_likelihood": -48.0},
        diagnostics={"ljung_box": {"statistic": float("nan"), "p_value": 0.5, "decision": "fail to reject", "alpha": 0.05}},
        reproducibility=ReproducibilityContext(library_versions={"numpy": "x"}, system_info={}, git_sha=None),
    )
    path = tmp_path / "runs" / "meta.json"
    meta.write_atomic(path)

    raw = path.read_text()
    assert json.loads(raw)["diagnostics"]["ljung_box"]["statistic"] is None
    loaded = RunMeta.from_json(raw)
    assert loaded.selected_order == [0, 2, 1]
    assert loaded.reproducibility.library_versions == {"numpy": "x"}
