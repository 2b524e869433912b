"""Process-wide reference data shared read-only by every request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from actions import ActionCatalog
from config_paths import load_config, resolve_data_path
from footprint import GLOBAL_REGION, BenchmarkTable, EmissionFactorTable

LOGGER = logging.getLogger("action_tracker.context")


@dataclass(frozen=True, slots=True)
class TrackerContext:
    factors: EmissionFactorTable
    benchmarks: BenchmarkTable
    catalog: ActionCatalog


def context_from_config(config: Mapping[str, object]) -> TrackerContext:
    """Load the tables named in the ``tracker`` section of ``config``."""
    module_cfg = config.get("tracker")
    if not isinstance(module_cfg, Mapping) or not module_cfg:
        raise ValueError("'tracker' section missing from config.yaml")

    factor_files = module_cfg.get("emission_factor_files")
    if isinstance(factor_files, str):
        factor_files = [factor_files]
    if not factor_files:
        raise ValueError("'tracker.emission_factor_files' must list at least one CSV file.")
    for key in ("benchmarks_file", "actions_file"):
        if not module_cfg.get(key):
            raise ValueError(f"'tracker.{key}' must be set in config.yaml")

    factors = EmissionFactorTable.from_csv(
        *(resolve_data_path(config, entry) for entry in factor_files)
    )
    benchmarks = BenchmarkTable.from_csv(resolve_data_path(config, module_cfg["benchmarks_file"]))
    catalog = ActionCatalog.from_csv(resolve_data_path(config, module_cfg["actions_file"]))
    uncovered = [region for region in factors.regions() if region not in benchmarks]
    if uncovered:
        LOGGER.warning(
            "No regional benchmark for %s; the %s average will be used",
            ", ".join(uncovered),
            GLOBAL_REGION,
        )
    LOGGER.info(
        "Reference data loaded: %d emission factors, %d actions",
        len(factors),
        len(catalog),
    )
    return TrackerContext(factors=factors, benchmarks=benchmarks, catalog=catalog)


def load_context(config_path: Path | str | None = None) -> TrackerContext:
    """Read ``config.yaml`` (or ``CARBON_TRACKER_CONFIG_PATH``) and load the reference data."""
    return context_from_config(load_config(config_path))
