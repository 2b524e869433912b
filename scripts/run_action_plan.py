"""Compute a footprint, list applicable actions and summarise an action plan.

Inputs come from a YAML profile using the same keys as the web front end
(``commuteMode``, ``dailyCommuteKm``, ...). Every applicable action is selected
unless ``--select`` narrows the plan. All output goes through the standard
logging module; ``--output`` additionally writes the text summary to disk.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd
import yaml

ROOT = Path(__file__).resolve().parents[1]

sys.path.insert(0, str(ROOT / "src"))

from action_tracker import (  # noqa: E402
    CalculateActionImpact,
    CalculateFootprint,
    GenerateSummary,
    GetAvailableActions,
    Session,
    context_from_config,
    handle_request,
)
from config_paths import get_config_path, get_results_directory, load_config  # noqa: E402
from footprint import UserProfile, ValidationError  # noqa: E402

LOGGER = logging.getLogger("action_tracker.run")

DEFAULT_PROFILE = ROOT / "data" / "profiles" / "example_profile.yaml"


def _load_profile(path: Path) -> UserProfile:
    if not path.exists():
        raise FileNotFoundError(f"Profile not found: {path}")
    with path.open() as handle:
        data = yaml.safe_load(handle) or {}
    return UserProfile.from_mapping(data)


def _resolve_output(raw: str, config: dict) -> Path:
    path = Path(raw)
    if path.is_absolute():
        return path
    return get_results_directory(config) / path


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Estimate a carbon footprint and plan actions")
    parser.add_argument("--config", help="Path to config.yaml (defaults to the repository root)")
    parser.add_argument(
        "--profile",
        default=str(DEFAULT_PROFILE),
        help="YAML file with lifestyle inputs (front-end field names).",
    )
    parser.add_argument(
        "--select",
        type=int,
        nargs="*",
        default=None,
        help="Action ids to include in the plan (default: all applicable actions).",
    )
    parser.add_argument(
        "--output",
        help="File name for the summary, relative to results.output_directory.",
    )
    args = parser.parse_args()

    config_path = Path(args.config) if args.config else get_config_path()
    config = load_config(config_path)
    context = context_from_config(config)

    try:
        profile = _load_profile(Path(args.profile))
    except ValidationError as exc:
        LOGGER.error("Invalid profile: %s", exc.message)
        return 1

    session = Session()
    response, session = handle_request(CalculateFootprint(profile), session, context)
    if response.is_error:
        LOGGER.error("%s", response.data["message"])
        return 1
    footprint = session.footprint
    breakdown = pd.DataFrame(
        {
            "kg_co2e": [entry.kg_co2e for entry in footprint.per_category],
            "tons": [entry.tons for entry in footprint.per_category],
        },
        index=[entry.category.value for entry in footprint.per_category],
    )
    LOGGER.info("Footprint by category:\n%s", breakdown.round(2).to_string())
    LOGGER.info(
        "Benchmarks (t/yr): regional %.1f, global %.1f, Paris 2030 %.1f -> %s",
        footprint.regional_avg_tons,
        footprint.global_avg_tons,
        footprint.paris_target_tons,
        footprint.paris_status.value,
    )

    _, session = handle_request(
        GetAvailableActions(profile.region, footprint), session, context
    )
    actions = session.available_actions
    for action in actions:
        LOGGER.info(
            "  [%d] %-12s %-50s -%6.0f kg/yr",
            action.action_id,
            action.category.value,
            action.name,
            action.base_impact_kg,
        )

    selection = frozenset(args.select if args.select is not None else [a.action_id for a in actions])
    response, session = handle_request(
        CalculateActionImpact(profile.region, footprint, selection, actions), session, context
    )
    if response.is_error:
        LOGGER.error("%s", response.data["message"])
        return 1

    _, session = handle_request(
        GenerateSummary(footprint, session.impact, session.selected_actions, profile.region),
        session,
        context,
    )
    LOGGER.info("Action plan summary:\n%s", session.summary)

    if args.output:
        output_path = _resolve_output(args.output, config)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(session.summary + "\n", encoding="utf-8")
        LOGGER.info("Summary written to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
