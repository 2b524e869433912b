"""Combine category estimates into a total footprint with benchmark comparisons."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import pandas as pd

from .constants import (
    CLOSE_TO_TARGET_MULTIPLIER,
    GLOBAL_AVERAGE_TONS,
    GLOBAL_REGION,
    KG_PER_TON,
    PARIS_TARGET_TONS,
    Category,
    ParisStatus,
)
from .estimators import CategoryFootprint, estimate_all
from .factors import EmissionFactorTable
from .profile import UserProfile

LOGGER = logging.getLogger("footprint.aggregator")

BENCHMARK_REGION_COLUMN = "Region"
BENCHMARK_TOTAL_COLUMN = "PerCapita_Total_Tons"


def classify_paris_status(total_tons: float, target_tons: float = PARIS_TARGET_TONS) -> ParisStatus:
    """Classify a per-capita total against the Paris target.

    ``aligned`` at or below the target, ``close`` up to 1.5× the target,
    ``above`` otherwise.
    """
    if total_tons <= target_tons:
        return ParisStatus.ALIGNED
    if total_tons <= target_tons * CLOSE_TO_TARGET_MULTIPLIER:
        return ParisStatus.CLOSE
    return ParisStatus.ABOVE


def _percent_vs(total_tons: float, benchmark_tons: float) -> float | None:
    if benchmark_tons <= 0:
        return None
    return (total_tons / benchmark_tons - 1.0) * 100.0


class BenchmarkTable:
    """Per-capita regional averages (t CO₂e / person / year)."""

    def __init__(self, averages: Mapping[str, float]):
        self._averages = MappingProxyType(
            {str(region).strip().casefold(): float(value) for region, value in averages.items()}
        )

    @classmethod
    def from_csv(cls, path: Path | str) -> "BenchmarkTable":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Regional benchmark file not found: {path}")
        frame = pd.read_csv(path, comment="#")
        frame.columns = [str(column).strip() for column in frame.columns]
        for column in (BENCHMARK_REGION_COLUMN, BENCHMARK_TOTAL_COLUMN):
            if column not in frame.columns:
                raise ValueError(f"Regional benchmark CSV must contain a '{column}' column.")
        totals = pd.to_numeric(frame[BENCHMARK_TOTAL_COLUMN], errors="raise").astype(float)
        return cls(dict(zip(frame[BENCHMARK_REGION_COLUMN].astype(str), totals)))

    def __contains__(self, region: object) -> bool:
        return str(region).strip().casefold() in self._averages

    def lookup(self, region: str, warnings: list[str]) -> float:
        """Return the regional average, falling back to Global, then to 0 with a warning."""
        value = self._averages.get(region.strip().casefold())
        if value is not None:
            return value
        fallback = self._averages.get(GLOBAL_REGION.casefold())
        if fallback is not None:
            LOGGER.warning("Region '%s' not found, using %s average", region, GLOBAL_REGION)
            return fallback
        message = f"No regional benchmark for '{region}' or '{GLOBAL_REGION}'; using 0"
        LOGGER.warning(message)
        warnings.append(message)
        return 0.0


@dataclass(frozen=True, slots=True)
class Footprint:
    """Total annual footprint with regional, global and Paris benchmarks."""

    per_category: tuple[CategoryFootprint, ...]
    total_kg: float
    region: str
    regional_avg_tons: float
    global_avg_tons: float = GLOBAL_AVERAGE_TONS
    paris_target_tons: float = PARIS_TARGET_TONS
    paris_status: ParisStatus = ParisStatus.ALIGNED
    warnings: tuple[str, ...] = ()

    @property
    def total_tons(self) -> float:
        return self.total_kg / KG_PER_TON

    @property
    def percent_vs_regional(self) -> float | None:
        return _percent_vs(self.total_tons, self.regional_avg_tons)

    @property
    def percent_vs_global(self) -> float | None:
        return _percent_vs(self.total_tons, self.global_avg_tons)

    @property
    def percent_vs_paris(self) -> float | None:
        return _percent_vs(self.total_tons, self.paris_target_tons)

    def category_kg(self, category: Category) -> float:
        for entry in self.per_category:
            if entry.category is category:
                return entry.kg_co2e
        return 0.0

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "region": self.region,
            "total": self.total_kg,
            "totalTons": self.total_tons,
        }
        for entry in self.per_category:
            key = entry.category.value.lower()
            payload[key] = entry.kg_co2e
            payload[f"{key}Tons"] = entry.tons
        payload.update(
            {
                "regionalAvg": self.regional_avg_tons,
                "globalAvg": self.global_avg_tons,
                "parisTarget": self.paris_target_tons,
                "vsRegional": self.percent_vs_regional,
                "vsGlobal": self.percent_vs_global,
                "vsParis": self.percent_vs_paris,
                "parisStatus": self.paris_status.value,
                "warnings": list(self.warnings),
            }
        )
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Footprint":
        """Rebuild a footprint sent back by the front end.

        The total and Paris status are recomputed from the category values so a
        stale or edited payload cannot break the sum invariant.
        """
        per_category = tuple(
            CategoryFootprint(category, float(payload.get(category.value.lower(), 0.0) or 0.0))
            for category in Category
        )
        return aggregate(
            per_category,
            str(payload.get("region", GLOBAL_REGION)),
            regional_avg_tons=float(payload.get("regionalAvg", 0.0) or 0.0),
        )


def aggregate(
    per_category: Iterable[CategoryFootprint],
    region: str,
    benchmarks: BenchmarkTable | None = None,
    *,
    regional_avg_tons: float | None = None,
) -> Footprint:
    """Sum category estimates and attach benchmark comparisons.

    Either ``benchmarks`` or an explicit ``regional_avg_tons`` must be given.
    """
    by_category: dict[Category, CategoryFootprint] = {}
    for entry in per_category:
        if entry.category in by_category:
            raise ValueError(f"Duplicate footprint entry for {entry.category.value}.")
        by_category[entry.category] = entry
    ordered = tuple(
        by_category.get(category, CategoryFootprint(category, 0.0)) for category in Category
    )

    warnings = [message for entry in ordered for message in entry.warnings]
    if regional_avg_tons is None:
        if benchmarks is None:
            raise ValueError("Provide a benchmark table or an explicit regional average.")
        regional_avg_tons = benchmarks.lookup(region, warnings)

    total_kg = sum(entry.kg_co2e for entry in ordered)
    footprint = Footprint(
        per_category=ordered,
        total_kg=total_kg,
        region=region,
        regional_avg_tons=regional_avg_tons,
        paris_status=classify_paris_status(total_kg / KG_PER_TON),
        warnings=tuple(warnings),
    )
    LOGGER.info(
        "Total footprint: %.2f tons CO2e/year (%s)",
        footprint.total_tons,
        ", ".join(f"{e.category.value}: {e.tons:.2f}" for e in ordered),
    )
    return footprint


def calculate_footprint(
    profile: UserProfile,
    table: EmissionFactorTable,
    benchmarks: BenchmarkTable,
) -> Footprint:
    """Estimate every category for ``profile`` and aggregate the result."""
    LOGGER.info("Calculating footprint for region: %s", profile.region)
    return aggregate(estimate_all(profile, table), profile.region, benchmarks)
