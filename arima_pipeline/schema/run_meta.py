"""Run metadata schema with JSON serialization."""

from __future__ import annotations

import json
import math
import os
import platform
import subprocess
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class ReproducibilityContext:
    library_versions: Dict[str, str]
    system_info: Dict[str, Any]
    git_sha: Optional[str]


@dataclass
class RunMeta:
    run_id: str
    series_name: str
    n_observations: int
    config: Dict[str, Any]
    differencing_order: int
    stationary: bool
    selected_order: List[int]
    alternative_order: Optional[List[int]]
    strategy: str
    coefficients: Dict[str, float]
    information_criteria: Dict[str, float]
    diagnostics: Dict[str, Dict[str, Any]]
    comparison: List[Dict[str, Any]] = field(default_factory=list)
    reproducibility: Optional[ReproducibilityContext] = None

    def to_json(self) -> str:
        return json.dumps(_nan_to_none(asdict(self)), indent=2)

    def write_atomic(self, path: Path) -> None:
        """Write run_meta to a temporary file then move for atomicity."""
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(self.to_json())
        tmp_path.replace(path)

    @classmethod
    def from_json(cls, raw: str) -> "RunMeta":
        data = json.loads(raw)
        repro = data.pop("reproducibility", None)
        meta = cls(**data)
        if repro is not None:
            meta.reproducibility = ReproducibilityContext(**repro)
        return meta

    @classmethod
    def from_result(cls, run_id: str, result: Any, config: Dict[str, Any]) -> "RunMeta":
        """Summarize a PipelineResult and capture the execution context."""
        fitted = result.fitted
        selection = result.selection
        return cls(
            run_id=run_id,
            series_name=result.series.name,
            n_observations=len(result.series),
            config=config,
            differencing_order=result.differenced.order,
            stationary=result.differenced.stationary,
            selected_order=list(selection.spec.order),
            alternative_order=list(selection.alternative.order) if selection.alternative else None,
            strategy=selection.strategy,
            coefficients=dict(fitted.coefficients),
            information_criteria={
                "aic": fitted.aic,
                "bic": fitted.bic,
                "log_likelihood": fitted.log_likelihood,
            },
            diagnostics={
                name: {
                    "statistic": diag.statistic,
                    "p_value": diag.p_value,
                    "decision": diag.decision,
                    "alpha": diag.alpha,
                }
                for name, diag in result.diagnostics.items()
            },
            comparison=[
                {"order": list(row.spec.order), "aic": row.aic, "bic": row.bic, "rank": row.rank}
                for row in result.comparison
            ],
            reproducibility=ReproducibilityContext(
                library_versions=_capture_lib_versions(),
                system_info={
                    "os": platform.platform(),
                    "cpu_count": os.cpu_count(),
                    "python_version": platform.python_version(),
                },
                git_sha=_capture_git_sha(),
            ),
        )


def _nan_to_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _nan_to_none(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_nan_to_none(v) for v in value]
    return value


def _capture_lib_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for lib in ["numpy", "pandas", "scipy", "statsmodels", "typer"]:
        try:
            module = __import__(lib)
            versions[lib] = getattr(module, "__version__", "unknown")
        except ImportError:
            versions[lib] = "missing"
    return versions


def _capture_git_sha() -> Optional[str]:
    try:
        return subprocess.check_output(["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL).strip()
    except (OSError, subprocess.CalledProcessError):
        return None


__all__ = ["RunMeta", "ReproducibilityContext"]
