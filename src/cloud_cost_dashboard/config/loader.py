"""Configuration loader for Cloud Cost Dashboard."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable

import yaml

from cloud_cost_dashboard.config.schema import Config

CONFIG_FILENAME = "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _find_config_dir() -> Path:
    """
    Locate the config directory.

    Order: $CONFIG_DIR, the nearest config/ at or above the working
    directory, then config/ inside the Lambda package ($LAMBDA_TASK_ROOT).
    """
    if config_dir := os.environ.get("CONFIG_DIR"):
        return Path(config_dir)

    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        if (directory / "config").is_dir():
            return directory / "config"

    if task_root := os.environ.get("LAMBDA_TASK_ROOT"):
        return Path(task_root) / "config"

    return Path("config")


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping; a missing or empty file reads as {}."""
    if not path.exists():
        return {}

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(
    config_path: str | Path | None = None,
    environment: str | None = None,
) -> Config:
    """
    Load configuration from YAML files and the environment.

    config.yaml is the base; config.<environment>.yaml is deep-merged over
    it; environment variables (see _ENV_OVERRIDES) win over both. Missing
    files are skipped, so an empty directory yields the defaults.

    Args:
        config_path: Config directory. Located with _find_config_dir when None.
        environment: dev, staging or prod. Defaults to $CONFIG_ENV, then dev.

    Returns:
        Validated Config.

    Raises:
        ValueError: If a file isn't a mapping or an override can't be converted.
        pydantic.ValidationError: If any value is outside its allowed range.
    """
    config_dir = Path(config_path) if config_path else _find_config_dir()
    environment = environment or os.environ.get("CONFIG_ENV", "dev")

    data = _deep_merge(
        _read_yaml(config_dir / CONFIG_FILENAME),
        _read_yaml(config_dir / f"config.{environment}.yaml"),
    )
    data = _apply_env_overrides(data)
    data["environment"] = environment

    return Config.model_validate(data)


# env var -> (key path, converter)
_ENV_OVERRIDES: dict[str, tuple[tuple[str, ...], Callable[[str], Any]]] = {
    "LLM_PROVIDER": (("llm", "provider"), str),
    "ANOMALY_METHOD": (("analytics", "anomaly_detection", "method"), str),
    "ANOMALY_WINDOW_SIZE": (("analytics", "anomaly_detection", "std_dev", "window_size"), int),
    "ANOMALY_STD_DEVIATIONS": (
        ("analytics", "anomaly_detection", "std_dev", "std_deviations"),
        float,
    ),
    "FORECAST_HORIZON_MONTHS": (("analytics", "forecast", "horizon_months"), int),
}


def _apply_env_overrides(data: dict) -> dict:
    """Set nested keys from the environment variables that are present."""
    for env_var, (path, convert) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_var)
        if not raw:
            continue

        try:
            value = convert(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_var}: {raw!r}") from e

        section = data
        for key in path[:-1]:
            section = section.setdefault(key, {})
        section[path[-1]] = value

    return data


@lru_cache(maxsize=1)
def get_cached_config() -> Config:
    """
    Load the configuration once per process.

    Lambda containers reuse it across warm invocations.
    """
    return load_config()
