"""Static catalog of mitigation actions and their applicability rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from footprint import Category, Footprint

LOGGER = logging.getLogger("actions.catalog")

REQUIRED_COLUMNS = (
    "ActionID",
    "Category",
    "ActionName",
    "BaseImpact_kg",
    "costLabel",
    "costLow",
    "costHigh",
    "Difficulty",
    "TimeToImplement",
)
ALL_REGIONS_LABELS = frozenset({"", "all", "*"})


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"

    @classmethod
    def parse(cls, value: object) -> "Difficulty":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown action difficulty '{value}'.") from None


def _parse_regions(value: object) -> frozenset[str] | None:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(";")]
    else:
        parts = [str(part).strip() for part in value]
    regions = frozenset(part.casefold() for part in parts if part)
    if not regions or regions & ALL_REGIONS_LABELS:
        return None
    return regions


@dataclass(frozen=True, slots=True)
class Action:
    """A mitigation action with a fixed annual reduction if adopted."""

    action_id: int
    category: Category
    name: str
    base_impact_kg: float
    cost_low: float = 0.0
    cost_high: float = 0.0
    difficulty: Difficulty = Difficulty.EASY
    time_to_implement: str = ""
    cost_label: str = ""
    regions: frozenset[str] | None = None
    min_category_kg: float = 0.0

    def __post_init__(self) -> None:
        if self.base_impact_kg < 0:
            raise ValueError(f"Action {self.action_id}: BaseImpact_kg must be non-negative.")
        if self.cost_low > self.cost_high:
            raise ValueError(f"Action {self.action_id}: costLow exceeds costHigh.")
        if self.min_category_kg < 0:
            raise ValueError(f"Action {self.action_id}: MinCategory_kg must be non-negative.")

    def applies_to_region(self, region: str) -> bool:
        return self.regions is None or region.strip().casefold() in self.regions

    def is_applicable(self, region: str, footprint: Footprint) -> bool:
        """True when the region is allowed and the user emits enough in the category."""
        if not self.applies_to_region(region):
            return False
        category_kg = footprint.category_kg(self.category)
        return category_kg > 0 and category_kg > self.min_category_kg

    def to_payload(self) -> dict[str, Any]:
        return {
            "ActionID": self.action_id,
            "Category": self.category.value,
            "ActionName": self.name,
            "BaseImpact_kg": self.base_impact_kg,
            "costLabel": self.cost_label,
            "costLow": self.cost_low,
            "costHigh": self.cost_high,
            "Difficulty": self.difficulty.value,
            "TimeToImplement": self.time_to_implement,
            "Regions": None if self.regions is None else sorted(self.regions),
            "MinCategory_kg": self.min_category_kg,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Action":
        missing = [column for column in REQUIRED_COLUMNS if column not in payload]
        if missing:
            raise ValueError(f"Action record is missing fields: {missing}")
        return cls(
            action_id=int(payload["ActionID"]),
            category=Category.parse(payload["Category"]),
            name=str(payload["ActionName"]).strip(),
            base_impact_kg=float(payload["BaseImpact_kg"]),
            cost_low=float(payload["costLow"]),
            cost_high=float(payload["costHigh"]),
            difficulty=Difficulty.parse(payload["Difficulty"]),
            time_to_implement=str(payload["TimeToImplement"]).strip(),
            cost_label=str(payload["costLabel"]).strip(),
            regions=_parse_regions(payload.get("Regions")),
            min_category_kg=float(payload.get("MinCategory_kg") or 0.0),
        )


class ActionCatalog:
    """Read-only, ordered collection of actions loaded once per process."""

    def __init__(self, actions: Iterable[Action]):
        ordered: list[Action] = []
        seen: set[int] = set()
        for action in actions:
            if action.action_id in seen:
                raise ValueError(f"Duplicate ActionID {action.action_id} in action catalog.")
            seen.add(action.action_id)
            ordered.append(action)
        self._actions = tuple(ordered)

    @classmethod
    def from_csv(cls, path: Path | str) -> "ActionCatalog":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Action catalog not found: {path}")
        frame = pd.read_csv(path, comment="#", dtype={"Regions": "string"}, keep_default_na=False)
        frame.columns = [str(column).strip() for column in frame.columns]
        missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
        if missing:
            raise ValueError(f"Action catalog CSV is missing columns: {missing}")
        catalog = cls(Action.from_payload(record) for record in frame.to_dict(orient="records"))
        LOGGER.info("Loaded %d actions from %s", len(catalog), path.name)
        return catalog

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self):
        return iter(self._actions)

    @property
    def actions(self) -> tuple[Action, ...]:
        return self._actions

    def get(self, action_id: int) -> Action | None:
        for action in self._actions:
            if action.action_id == action_id:
                return action
        return None

    def list_applicable(self, region: str, footprint: Footprint) -> list[Action]:
        """Actions applicable to ``region`` and ``footprint``, grouped by category."""
        return order_by_category(
            action for action in self._actions if action.is_applicable(region, footprint)
        )


def order_by_category(actions: Iterable[Action]) -> list[Action]:
    """Group actions by category order, keeping source order within a category."""
    return sorted(actions, key=lambda action: action.category.order)
