"""Annual personal carbon footprint estimation."""

from .aggregator import (
    BenchmarkTable,
    Footprint,
    aggregate,
    calculate_footprint,
    classify_paris_status,
)
from .constants import GLOBAL_AVERAGE_TONS, GLOBAL_REGION, PARIS_TARGET_TONS, Category, ParisStatus
from .errors import TrackerError, UnresolvedPrimaryFactor, ValidationError
from .estimators import CategoryFootprint, estimate_all
from .factors import EmissionFactorRecord, EmissionFactorTable, FactorLookup, LookupOutcome
from .profile import UserProfile

__all__ = [
    "GLOBAL_AVERAGE_TONS",
    "GLOBAL_REGION",
    "PARIS_TARGET_TONS",
    "BenchmarkTable",
    "Category",
    "CategoryFootprint",
    "EmissionFactorRecord",
    "EmissionFactorTable",
    "FactorLookup",
    "Footprint",
    "LookupOutcome",
    "ParisStatus",
    "TrackerError",
    "UnresolvedPrimaryFactor",
    "UserProfile",
    "ValidationError",
    "aggregate",
    "calculate_footprint",
    "classify_paris_status",
    "estimate_all",
]
