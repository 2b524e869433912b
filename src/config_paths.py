"""Helpers to locate the configuration file and resolve the paths it names."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "CARBON_TRACKER_CONFIG_PATH"
CONFIG_ROOT_KEY = "_config_root"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring CARBON_TRACKER_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return default.resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def load_config(path: Path | str | None = None) -> dict:
    """Read a YAML config and remember the directory it was loaded from."""

    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with config_path.open() as handle:
        config = yaml.safe_load(handle) or {}
    if not isinstance(config, MutableMapping):
        raise ValueError(f"Configuration file {config_path} must contain a mapping.")
    set_config_root(config, config_path.parent)
    return dict(config)


def set_config_root(config: MutableMapping[str, object], root: Path) -> None:
    """Annotate a config mapping with its filesystem root for relative paths."""

    if not isinstance(config, MutableMapping):
        return
    config[CONFIG_ROOT_KEY] = str(root.resolve())


def get_config_root(config: Mapping[str, object], fallback: Path | None = None) -> Path:
    """Return the base directory that relative paths should resolve against."""

    if isinstance(config, Mapping):
        value = config.get(CONFIG_ROOT_KEY)
        if isinstance(value, str):
            try:
                return Path(value).expanduser().resolve()
            except OSError:
                pass
    return (fallback or REPO_ROOT).resolve()


def resolve_data_path(config: Mapping[str, object], value: str | Path) -> Path:
    """Resolve ``value`` against the config root unless it is already absolute."""

    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return (get_config_root(config) / path).resolve()


def get_results_directory(config: Mapping[str, object] | None) -> Path:
    """Return ``results.output_directory`` (default ``results/action_plans``)."""

    default = "results/action_plans"
    if not isinstance(config, Mapping):
        return (REPO_ROOT / default).resolve()
    results_cfg = config.get("results")
    raw_value = results_cfg.get("output_directory") if isinstance(results_cfg, Mapping) else None
    return resolve_data_path(config, str(raw_value or default))
