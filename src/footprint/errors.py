"""Exceptions raised by the footprint and action engine."""

from __future__ import annotations


class TrackerError(Exception):
    """Fatal error for a single request; ``step`` names where it originated."""

    default_step = "tracker"

    def __init__(self, message: str, *, step: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.step = step or self.default_step

    def to_payload(self) -> dict[str, str]:
        return {"message": self.message, "step": self.step}


class ValidationError(TrackerError):
    """Raised for missing, negative, non-numeric or non-integral inputs."""

    default_step = "validation"


class UnresolvedPrimaryFactor(TrackerError):
    """The commute-mode emission factor is missing even after the Global fallback."""

    default_step = "transport.commute"
