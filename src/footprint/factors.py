"""Emission factor table with region fallback.

Factors are stored in grams CO₂e per activity unit (passenger-km, kWh, day,
item, ...). The table is loaded once from CSV and never mutated afterwards.
Lookups return a :class:`FactorLookup` describing how the factor was found so
that each caller can decide whether a missing factor is fatal or degrades to a
zero contribution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable

import numpy as np
import pandas as pd

from .constants import FACTOR_COLUMNS, GLOBAL_REGION
from .errors import UnresolvedPrimaryFactor

LOGGER = logging.getLogger("footprint.factors")

FactorKey = tuple[str, str | None, str]


def _normalise(value: object) -> str:
    return str(value).strip().casefold()


def _normalise_sub_type(value: object) -> str | None:
    if value is None or value is pd.NA:
        return None
    if isinstance(value, float) and np.isnan(value):
        return None
    text = str(value).strip()
    return text.casefold() if text else None


@dataclass(frozen=True, slots=True)
class EmissionFactorRecord:
    """A single row of the emission factor table."""

    mode: str
    sub_type: str | None
    region: str
    factor_g_per_unit: float
    source: str = ""
    year: int | None = None

    @property
    def key(self) -> FactorKey:
        return (_normalise(self.mode), _normalise_sub_type(self.sub_type), _normalise(self.region))


class LookupOutcome(str, Enum):
    RESOLVED = "resolved"
    RESOLVED_VIA_FALLBACK = "resolved_via_fallback"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class FactorLookup:
    """Result of :meth:`EmissionFactorTable.resolve`."""

    mode: str
    sub_type: str | None
    region: str
    outcome: LookupOutcome
    record: EmissionFactorRecord | None = None

    @property
    def factor(self) -> float | None:
        return None if self.record is None else self.record.factor_g_per_unit

    @property
    def found(self) -> bool:
        return self.outcome is not LookupOutcome.MISSING

    def describe(self) -> str:
        label = self.mode if self.sub_type is None else f"{self.mode}/{self.sub_type}"
        return f"{label} in region '{self.region}'"

    def require(self, step: str) -> float:
        """Return the factor or raise :class:`UnresolvedPrimaryFactor`."""
        if not self.found:
            raise UnresolvedPrimaryFactor(
                f"Emission factor for {self.describe()} not found "
                f"(also checked '{GLOBAL_REGION}').",
                step=step,
            )
        return self.record.factor_g_per_unit

    def factor_or_zero(self, warnings: list[str], label: str) -> float:
        """Return the factor, or record a warning and return 0.0 when missing."""
        if not self.found:
            message = f"{label} emission factor not found ({self.describe()}); using 0"
            LOGGER.warning(message)
            warnings.append(message)
            return 0.0
        return self.record.factor_g_per_unit


class EmissionFactorTable:
    """Read-only index of emission factors keyed by (mode, sub-type, region)."""

    def __init__(self, records: Iterable[EmissionFactorRecord]):
        ordered: list[EmissionFactorRecord] = []
        index: dict[FactorKey, EmissionFactorRecord] = {}
        by_mode_region: dict[tuple[str, str], list[EmissionFactorRecord]] = {}
        for record in records:
            if not np.isfinite(record.factor_g_per_unit) or record.factor_g_per_unit < 0:
                raise ValueError(
                    f"Emission factor for {record.mode}/{record.sub_type} in "
                    f"'{record.region}' must be a finite, non-negative number."
                )
            key = record.key
            if key in index:
                raise ValueError(
                    "Duplicate emission factor for "
                    f"(mode='{record.mode}', sub_type='{record.sub_type}', region='{record.region}')."
                )
            index[key] = record
            by_mode_region.setdefault((key[0], key[2]), []).append(record)
            ordered.append(record)
        self._records = tuple(ordered)
        self._index = MappingProxyType(index)
        self._by_mode_region = MappingProxyType(
            {key: tuple(values) for key, values in by_mode_region.items()}
        )

    @classmethod
    def from_records(cls, records: Iterable[EmissionFactorRecord]) -> "EmissionFactorTable":
        return cls(records)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "EmissionFactorTable":
        missing = [column for column in FACTOR_COLUMNS.values() if column not in frame.columns]
        if missing:
            raise ValueError(
                f"Emission factor table is missing required columns: {missing}. "
                f"Available columns: {list(frame.columns)}"
            )
        factors = pd.to_numeric(frame[FACTOR_COLUMNS["factor"]], errors="coerce")
        if factors.isna().any():
            bad_rows = [int(i) for i in frame.index[factors.isna()]]
            raise ValueError(f"Non-numeric emission factors in rows: {bad_rows}")
        years = pd.to_numeric(frame[FACTOR_COLUMNS["year"]], errors="coerce")

        columns = zip(
            frame[FACTOR_COLUMNS["mode"]],
            frame[FACTOR_COLUMNS["sub_type"]],
            frame[FACTOR_COLUMNS["region"]],
            factors,
            frame[FACTOR_COLUMNS["source"]],
            years,
        )
        records = []
        for mode, sub_type, region, factor, source, year in columns:
            if pd.isna(mode) or pd.isna(region):
                raise ValueError("Emission factor rows must define a mode and a region.")
            records.append(
                EmissionFactorRecord(
                    mode=str(mode).strip(),
                    sub_type=None if _normalise_sub_type(sub_type) is None else str(sub_type).strip(),
                    region=str(region).strip(),
                    factor_g_per_unit=float(factor),
                    source="" if pd.isna(source) else str(source).strip(),
                    year=None if pd.isna(year) else int(year),
                )
            )
        return cls(records)

    @classmethod
    def from_csv(cls, *paths: Path | str) -> "EmissionFactorTable":
        """Load and concatenate one or more emission factor CSV files."""
        if not paths:
            raise ValueError("At least one emission factor file is required.")
        frames = []
        for path_like in paths:
            path = Path(path_like)
            if not path.exists():
                raise FileNotFoundError(f"Emission factors file not found: {path}")
            frame = pd.read_csv(path, comment="#", dtype={FACTOR_COLUMNS["sub_type"]: "string"})
            frame.columns = [str(column).strip() for column in frame.columns]
            frames.append(frame)
            LOGGER.info("Loaded %d emission factors from %s", len(frame), path.name)
        return cls.from_frame(pd.concat(frames, ignore_index=True))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def regions(self) -> list[str]:
        seen: dict[str, str] = {}
        for record in self._records:
            seen.setdefault(_normalise(record.region), record.region)
        return list(seen.values())

    def resolve(self, mode: str, sub_type: str | None, region: str) -> FactorLookup:
        """Resolve a factor, falling back to the Global region.

        Resolution order:
          1. exact (mode, sub_type, region);
          2. without a sub-type: any record for (mode, region), preferring one
             that has no sub-type itself;
          3. the same lookup for region ``Global``;
          4. ``LookupOutcome.MISSING``.
        """
        record = self._match(mode, sub_type, region)
        if record is not None:
            return FactorLookup(mode, sub_type, region, LookupOutcome.RESOLVED, record)

        if _normalise(region) != _normalise(GLOBAL_REGION):
            record = self._match(mode, sub_type, GLOBAL_REGION)
            if record is not None:
                LOGGER.debug(
                    "No %s factor for region '%s'; using %s",
                    mode,
                    region,
                    GLOBAL_REGION,
                )
                return FactorLookup(
                    mode, sub_type, region, LookupOutcome.RESOLVED_VIA_FALLBACK, record
                )
        return FactorLookup(mode, sub_type, region, LookupOutcome.MISSING)

    def _match(self, mode: str, sub_type: str | None, region: str) -> EmissionFactorRecord | None:
        mode_key = _normalise(mode)
        region_key = _normalise(region)
        sub_key = _normalise_sub_type(sub_type)
        if sub_key is not None:
            return self._index.get((mode_key, sub_key, region_key))
        untyped = self._index.get((mode_key, None, region_key))
        if untyped is not None:
            return untyped
        candidates = self._by_mode_region.get((mode_key, region_key), ())
        return candidates[0] if candidates else None

