import json

import numpy as np
import pytest
from typer.testing import CliRunner

from arima_pipeline.cli import main as cli_main
from arima_pipeline.cli.commands import analyze as analyze_module
from arima_pipeline.cli.commands import fetch as fetch_module
from arima_pipeline.cli.main import app
from arima_pipeline.data.worldbank import WorldBankDataSource
from arima_pipeline.exceptions import ConfigValidationError, ConvergenceError
from arima_pipeline.schema.model import ModelSpec

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("CSV", "COUNTRY", "INDICATOR", "START_YEAR", "END_YEAR", "SELECTOR", "ALPHA", "MAX_P", "MAX_Q"):
        monkeypatch.delenv(f"ARIMA_{key}", raising=False)


def _write_csv(path, n=50, seed=8):
    rng = np.random.default_rng(seed)
    shocks = rng.normal(size=n)
    growth = np.zeros(n)
    for t in range(1, n):
        growth[t] = 0.5 * growth[t - 1] + shocks[t]
    values = 100 + np.cumsum(2.0 + growth)
    lines = ["year,value"] + [f"{1970 + i},{v:.6f}" for i, v in enumerate(values)]
    path.write_text("\n".join(lines) + "\n")
    return path


def test_analyze_csv_writes_run_summary(tmp_path):
    csv_path = _write_csv(tmp_path / "series.csv")
    output = tmp_path / "run.json"

    result = runner.invoke(
        app,
        ["analyze", "--csv", str(csv_path), "--max-p", "1", "--max-q", "1", "--output", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert "Residual diagnostics" in result.output
    summary = json.loads(output.read_text())
    assert summary["n_observations"] == 50
    assert summary["strategy"] == "search"
    assert len(summary["selected_order"]) == 3
    assert summary["selected_order"][1] == summary["differencing_order"]
    assert set(summary["diagnostics"]) == {"ljung_box", "shapiro_wilk", "jarque_bera", "breusch_pagan"}


def test_analyze_heuristic_selector(tmp_path):
    csv_path = _write_csv(tmp_path / "series.csv")
    result = runner.invoke(app, ["analyze", "--csv", str(csv_path), "--selector", "heuristic"])
    assert result.exit_code == 0, result.output
    assert "Selected ARIMA(" in result.output


def test_analyze_without_source_fails():
    result = runner.invoke(app, ["analyze"])
    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigValidationError)


def test_fetch_writes_csv(tmp_path, monkeypatch):
    payload = [{"page": 1}, [{"date": str(2000 + i), "value": float(i + 1)} for i in range(5)]]

    def fake_source(name, **kwargs):
        return WorldBankDataSource(http_get=lambda url, params=None, timeout=None: payload, **kwargs)

    monkeypatch.setattr(fetch_module, "get_data_source", fake_source)
    target = tmp_path / "usa.csv"

    result = runner.invoke(
        app,
        ["fetch", "--country", "USA", "--start-year", "2000", "--end-year", "2004", "--target", str(target)],
    )

    assert result.exit_code == 0, result.output
    assert target.read_text().splitlines() == ["year,value", "2000,1.0", "2001,2.0", "2002,3.0", "2003,4.0", "2004,5.0"]


def test_fetch_requires_country():
    result = runner.invoke(app, ["fetch"])
    assert result.exit_code == 1


def _exit_code(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(argv)
    return excinfo.value.code


@pytest.fixture
def quiet_main(monkeypatch):
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)


def test_main_exit_code_for_config_error(quiet_main):
    assert _exit_code(["analyze"]) == 1


def test_main_exit_code_for_data_error(quiet_main, tmp_path):
    assert _exit_code(["analyze", "--csv", str(tmp_path / "missing.csv")]) == 2


def test_main_exit_code_for_fit_error(quiet_main, tmp_path, monkeypatch):
    def failing_pipeline(series, config):
        raise ConvergenceError("ARIMA(1,2,1) did not converge", spec=ModelSpec(1, 2, 1))

    monkeypatch.setattr(analyze_module, "run_pipeline", failing_pipeline)
    assert _exit_code(["analyze", "--csv", str(_write_csv(tmp_path / "series.csv"))]) == 3


def test_main_exit_code_for_interrupt(quiet_main, tmp_path, monkeypatch):
    def interrupted(series, config):
        raise KeyboardInterrupt

    monkeypatch.setattr(analyze_module, "run_pipeline", interrupted)
    assert _exit_code(["analyze", "--csv", str(_write_csv(tmp_path / "series.csv"))]) == 130


def test_main_passes_through_command_exit_code(quiet_main):
    assert _exit_code(["fetch"]) == 1
