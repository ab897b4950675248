"""Configuration loading with CLI > ENV > file > defaults precedence."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from arima_pipeline.exceptions import ConfigValidationError
from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="config")

Caster = Callable[[Any], Any]


def load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigValidationError(f"config file not found: {path}")
    text = path.read_text()
    if path.suffix.lower() in {".yml", ".yaml"}:
        content = yaml.safe_load(text)
    elif path.suffix.lower() == ".json":
        content = json.loads(text)
    else:
        raise ConfigValidationError(f"unsupported config format: {path.suffix} (use .yaml or .json)")
    if content is None:
        return {}
    if not isinstance(content, Mapping):
        raise ConfigValidationError("config file must contain a mapping at the top level")
    return dict(content)


def load_config_with_precedence(
    *,
    config_path: Optional[Path],
    env_prefix: str,
    cli_values: Mapping[str, Any],
    defaults: Mapping[str, Any],
    casters: Optional[Mapping[str, Caster]] = None,
) -> Dict[str, Any]:
    """Merge configuration sources for the keys in `defaults`.

    CLI values that are not None win, then ``{env_prefix}{KEY}`` environment
    variables, then the YAML/JSON file, then `defaults`. Casters convert
    values from every source except defaults.
    """

    casters = casters or {}
    file_values = load_config_file(Path(config_path)) if config_path else {}
    unknown = set(file_values) - set(defaults)
    if unknown:
        log.warning("Ignoring unknown config keys", extra={"keys": sorted(unknown)})

    merged: Dict[str, Any] = {}
    sources: Dict[str, str] = {}
    for key, default in defaults.items():
        env_value = os.environ.get(f"{env_prefix}{key.upper()}")
        if cli_values.get(key) is not None:
            raw, source = cli_values[key], "cli"
        elif env_value is not None:
            raw, source = env_value, "env"
        elif file_values.get(key) is not None:
            raw, source = file_values[key], "file"
        else:
            merged[key] = default
            sources[key] = "default"
            continue

        caster = casters.get(key)
        try:
            merged[key] = caster(raw) if caster else raw
        except (TypeError, ValueError) as exc:
            raise ConfigValidationError(f"invalid value for '{key}' from {source}: {raw!r}") from exc
        sources[key] = source

    log.debug("Configuration resolved", extra={"sources": sources})
    return merged


__all__ = ["load_config_file", "load_config_with_precedence"]
