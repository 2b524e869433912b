"""Typed requests and responses exchanged with the front end.

The front end sends ``(kind, payload)`` pairs. :func:`parse_request` turns a
known kind into one of the request dataclasses below; everything past that
point works on the typed values only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from actions import Action, ImpactResult, coerce_action_id
from footprint import Footprint, UserProfile, ValidationError

LOGGER = logging.getLogger("action_tracker.messages")


class MessageKind(str, Enum):
    CALCULATE_FOOTPRINT = "CalculateFootprint"
    GET_AVAILABLE_ACTIONS = "GetAvailableActions"
    CALCULATE_ACTION_IMPACT = "CalculateActionImpact"
    GENERATE_SUMMARY = "GenerateSummary"
    RESET_APP = "ResetApp"


class ResponseKind(str, Enum):
    FOOTPRINT_CALCULATED = "FootprintCalculated"
    ACTIONS_LOADED = "ActionsLoaded"
    IMPACT_CALCULATED = "ImpactCalculated"
    SUMMARY_GENERATED = "SummaryGenerated"
    APP_RESET = "AppReset"
    ERROR = "Error"


@dataclass(frozen=True, slots=True)
class CalculateFootprint:
    profile: UserProfile


@dataclass(frozen=True, slots=True)
class GetAvailableActions:
    region: str
    footprint: Footprint


@dataclass(frozen=True, slots=True)
class CalculateActionImpact:
    region: str
    footprint: Footprint
    selection: frozenset[int]
    actions: tuple[Action, ...]


@dataclass(frozen=True, slots=True)
class GenerateSummary:
    footprint: Footprint
    impact: ImpactResult
    selected_actions: tuple[Action, ...]
    region: str


@dataclass(frozen=True, slots=True)
class ResetApp:
    pass


Request = Union[
    CalculateFootprint,
    GetAvailableActions,
    CalculateActionImpact,
    GenerateSummary,
    ResetApp,
]


@dataclass(frozen=True, slots=True)
class Response:
    kind: ResponseKind
    data: Any = None
    warnings: tuple[str, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.kind is ResponseKind.ERROR

    def to_payload(self) -> Any:
        """JSON-ready payload using the front end's field names."""
        data = self.data
        if isinstance(data, (list, tuple)):
            return [_encode(item) for item in data]
        return _encode(data)


def _encode(value: Any) -> Any:
    to_payload = getattr(value, "to_payload", None)
    return to_payload() if callable(to_payload) else value


def _region(payload: Mapping[str, Any], footprint: Footprint | None = None) -> str:
    region = payload.get("region")
    if region is None and footprint is not None:
        return footprint.region
    if not isinstance(region, str) or not region.strip():
        raise ValidationError("region must be a non-empty string.", step="parse")
    return region.strip()


def _decode(kind: MessageKind, payload: Mapping[str, Any]) -> Request:
    if kind is MessageKind.CALCULATE_FOOTPRINT:
        return CalculateFootprint(profile=UserProfile.from_mapping(payload))
    if kind is MessageKind.GET_AVAILABLE_ACTIONS:
        footprint = Footprint.from_payload(payload["currentFootprint"])
        return GetAvailableActions(region=_region(payload, footprint), footprint=footprint)
    if kind is MessageKind.CALCULATE_ACTION_IMPACT:
        footprint = Footprint.from_payload(payload["currentFootprint"])
        return CalculateActionImpact(
            region=_region(payload, footprint),
            footprint=footprint,
            selection=frozenset(
                coerce_action_id(i) for i in payload.get("selectedActionIDs") or []
            ),
            actions=tuple(Action.from_payload(item) for item in payload.get("allActions") or []),
        )
    if kind is MessageKind.GENERATE_SUMMARY:
        footprint = Footprint.from_payload(payload["currentFootprint"])
        return GenerateSummary(
            footprint=footprint,
            impact=ImpactResult.from_payload(payload["impact"]),
            selected_actions=tuple(
                Action.from_payload(item) for item in payload.get("selectedActions") or []
            ),
            region=_region(payload, footprint),
        )
    if kind is MessageKind.RESET_APP:
        return ResetApp()
    raise TypeError(f"Unhandled message kind: {kind!r}")


def parse_request(kind: str, payload: Mapping[str, Any] | None) -> Request | None:
    """Decode a raw front-end message.

    Unknown kinds are logged and ignored (``None``). Malformed payloads raise
    :class:`~footprint.errors.ValidationError`.
    """
    try:
        message_kind = MessageKind(kind)
    except ValueError:
        LOGGER.warning("Unknown event: %s", kind)
        return None
    LOGGER.info("Event received: %s", message_kind.value)
    payload = payload or {}
    if not isinstance(payload, Mapping):
        raise ValidationError(f"{message_kind.value} payload must be a mapping.", step="parse")
    try:
        return _decode(message_kind, payload)
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise ValidationError(
            f"Malformed {message_kind.value} payload: {exc}", step=f"parse.{message_kind.value}"
        ) from exc
