"""Projected effect of adopting a set of mitigation actions.

The model is purely additive: each selected action removes its fixed
``base_impact_kg`` from the annual total, with no diminishing returns or
interaction between co-selected actions. The projected total is floored at
zero and re-classified with the same Paris thresholds used for the footprint.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from footprint import Footprint, ParisStatus, ValidationError, classify_paris_status
from footprint.constants import KG_PER_TON

from .catalog import Action

LOGGER = logging.getLogger("actions.impact")


@dataclass(frozen=True, slots=True)
class ActionImpact:
    action_id: int
    name: str
    impact_kg: float
    cost_low: float
    cost_high: float

    def to_payload(self) -> dict[str, Any]:
        return {
            "actionId": self.action_id,
            "name": self.name,
            "impact": self.impact_kg,
            "costLow": self.cost_low,
            "costHigh": self.cost_high,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ActionImpact":
        return cls(
            action_id=int(payload["actionId"]),
            name=str(payload.get("name", "")),
            impact_kg=float(payload["impact"]),
            cost_low=float(payload.get("costLow", 0.0)),
            cost_high=float(payload.get("costHigh", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class ImpactResult:
    """Reduction summary for a selection of actions."""

    total_reduction_kg: float
    new_total_tons: float
    reduction_percent: float
    per_action_breakdown: tuple[ActionImpact, ...]
    paris_status: ParisStatus
    total_cost_low: float
    total_cost_high: float

    @property
    def total_reduction_tons(self) -> float:
        return self.total_reduction_kg / KG_PER_TON

    @property
    def action_ids(self) -> list[int]:
        return [entry.action_id for entry in self.per_action_breakdown]

    def to_payload(self) -> dict[str, Any]:
        return {
            "totalReduction": self.total_reduction_kg,
            "newTotal": self.new_total_tons,
            "reductionPercent": self.reduction_percent,
            "actionDetails": [entry.to_payload() for entry in self.per_action_breakdown],
            "parisStatus": self.paris_status.value,
            "totalCostLow": self.total_cost_low,
            "totalCostHigh": self.total_cost_high,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ImpactResult":
        return cls(
            total_reduction_kg=float(payload["totalReduction"]),
            new_total_tons=float(payload["newTotal"]),
            reduction_percent=float(payload["reductionPercent"]),
            per_action_breakdown=tuple(
                ActionImpact.from_payload(entry) for entry in payload.get("actionDetails") or []
            ),
            paris_status=ParisStatus(payload["parisStatus"]),
            total_cost_low=float(payload.get("totalCostLow", 0.0)),
            total_cost_high=float(payload.get("totalCostHigh", 0.0)),
        )


def coerce_action_id(value: object) -> int:
    """Return ``value`` as an action id; booleans, fractions and non-numbers are rejected."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"Action id {value!r} must be an integer.", step="impact")
    if isinstance(value, numbers.Integral):
        return int(value)
    number = float(value)
    if not number.is_integer():
        raise ValidationError(f"Action id {value!r} must be a whole number.", step="impact")
    return int(number)


def resolve_selection(catalog: Sequence[Action], selection: Iterable[int]) -> list[Action]:
    """Return the selected actions in catalog order.

    Duplicate ids collapse; ids missing from ``catalog`` raise
    :class:`~footprint.errors.ValidationError`.
    """
    wanted = {coerce_action_id(action_id) for action_id in selection}
    known = {action.action_id for action in catalog}
    unknown = sorted(wanted - known)
    if unknown:
        raise ValidationError(
            f"Selected action id(s) not in the available actions: {unknown}", step="impact"
        )
    return [action for action in catalog if action.action_id in wanted]


def simulate(
    footprint: Footprint,
    catalog: Sequence[Action],
    selection: Iterable[int],
) -> ImpactResult:
    """Apply the selected actions to ``footprint``."""
    selected = resolve_selection(catalog, selection)
    breakdown = tuple(
        ActionImpact(
            action_id=action.action_id,
            name=action.name,
            impact_kg=action.base_impact_kg,
            cost_low=action.cost_low,
            cost_high=action.cost_high,
        )
        for action in selected
    )
    total_reduction = sum((entry.impact_kg for entry in breakdown), 0.0)
    new_total_tons = max(0.0, footprint.total_kg - total_reduction) / KG_PER_TON
    if footprint.total_kg > 0:
        reduction_percent = total_reduction / footprint.total_kg * 100.0
    else:
        reduction_percent = 0.0

    result = ImpactResult(
        total_reduction_kg=total_reduction,
        new_total_tons=new_total_tons,
        reduction_percent=reduction_percent,
        per_action_breakdown=breakdown,
        paris_status=classify_paris_status(new_total_tons, footprint.paris_target_tons),
        total_cost_low=sum((entry.cost_low for entry in breakdown), 0.0),
        total_cost_high=sum((entry.cost_high for entry in breakdown), 0.0),
    )
    LOGGER.info(
        "Total reduction: %.2f tons (%.1f%%), new footprint: %.2f tons",
        result.total_reduction_tons,
        result.reduction_percent,
        result.new_total_tons,
    )
    return result
