"""Mitigation action catalog and impact simulation."""

from .catalog import Action, ActionCatalog, Difficulty, order_by_category
from .impact import ActionImpact, ImpactResult, coerce_action_id, resolve_selection, simulate

__all__ = [
    "Action",
    "ActionCatalog",
    "ActionImpact",
    "Difficulty",
    "ImpactResult",
    "coerce_action_id",
    "order_by_category",
    "resolve_selection",
    "simulate",
]
