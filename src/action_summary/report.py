"""Plain-text action plan summary."""

from __future__ import annotations

import logging
from typing import Sequence

from actions import Action, ImpactResult
from footprint import Footprint, ParisStatus

LOGGER = logging.getLogger("action_summary")

RULE = "=" * 60

PARIS_NARRATIVE: dict[ParisStatus, str] = {
    ParisStatus.ALIGNED: (
        "Congratulations! This plan brings you in line with the 2030 Paris target of "
        "{target:.1f} tons per person."
    ),
    ParisStatus.CLOSE: (
        "You're close! Another {gap:.1f} tons of reductions would meet the 2030 Paris "
        "target of {target:.1f} tons."
    ),
    ParisStatus.ABOVE: (
        "This plan is a solid start, but you remain {gap:.1f} tons above the 2030 Paris "
        "target of {target:.1f} tons. Consider adding more actions."
    ),
}


def rank_actions(actions: Sequence[Action]) -> list[Action]:
    """Sort by impact (largest first); equal impacts keep their catalog order."""
    return sorted(actions, key=lambda action: -action.base_impact_kg)


def _format_cost(low: float, high: float) -> str:
    if high == 0:
        return "no upfront cost"
    if low == high:
        return f"${low:,.0f}"
    return f"${low:,.0f} - ${high:,.0f}"


def paris_narrative(impact: ImpactResult, target_tons: float) -> str:
    gap = max(0.0, impact.new_total_tons - target_tons)
    return PARIS_NARRATIVE[impact.paris_status].format(gap=gap, target=target_tons)


def render_summary(
    footprint: Footprint,
    impact: ImpactResult,
    selected_actions: Sequence[Action],
    region: str,
) -> str:
    """Render the before/after totals and the ranked action plan as text."""
    LOGGER.info("Generating action plan summary")
    lines = [
        RULE,
        "YOUR CARBON ACTION PLAN",
        RULE,
        f"Region: {region}",
        "",
        f"Current footprint:   {footprint.total_tons:.1f} tons CO2e/year",
        f"Projected footprint: {impact.new_total_tons:.1f} tons CO2e/year",
        (
            f"Total reduction:     {impact.total_reduction_tons:.1f} tons "
            f"({impact.reduction_percent:.0f}%)"
        ),
        f"Estimated cost:      {_format_cost(impact.total_cost_low, impact.total_cost_high)}",
        "",
        f"SELECTED ACTIONS ({len(selected_actions)}):",
    ]
    for rank, action in enumerate(rank_actions(selected_actions), start=1):
        lines.append(f"{rank}. {action.name} [{action.category.value}]")
        lines.append(
            f"   Impact: -{action.base_impact_kg:,.0f} kg CO2e/year | "
            f"Cost: {action.cost_label or _format_cost(action.cost_low, action.cost_high)} | "
            f"Difficulty: {action.difficulty.value} | Time: {action.time_to_implement}"
        )
    lines.extend(["", paris_narrative(impact, footprint.paris_target_tons), RULE])
    return "\n".join(lines)
