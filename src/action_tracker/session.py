"""Request handling over an explicit, immutable session value.

Each call to :func:`handle_request` receives the current :class:`Session` and
returns the response together with the next session. A request that fails
returns an ``Error`` response and the session it was given, unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping

from action_summary import render_summary
from actions import Action, ImpactResult, simulate
from footprint import Footprint, TrackerError, calculate_footprint

from .context import TrackerContext
from .messages import (
    CalculateActionImpact,
    CalculateFootprint,
    GenerateSummary,
    GetAvailableActions,
    Request,
    ResetApp,
    Response,
    ResponseKind,
    parse_request,
)

LOGGER = logging.getLogger("action_tracker.session")


@dataclass(frozen=True, slots=True)
class Session:
    """What the user has computed so far."""

    footprint: Footprint | None = None
    available_actions: tuple[Action, ...] = ()
    selection: frozenset[int] = frozenset()
    impact: ImpactResult | None = None
    summary: str | None = None

    @property
    def selected_actions(self) -> tuple[Action, ...]:
        return tuple(a for a in self.available_actions if a.action_id in self.selection)


def _calculate_footprint(
    request: CalculateFootprint, session: Session, context: TrackerContext
) -> tuple[Response, Session]:
    footprint = calculate_footprint(request.profile, context.factors, context.benchmarks)
    response = Response(ResponseKind.FOOTPRINT_CALCULATED, footprint, warnings=footprint.warnings)
    return response, Session(footprint=footprint)


def _available_actions(
    request: GetAvailableActions, session: Session, context: TrackerContext
) -> tuple[Response, Session]:
    LOGGER.info("Getting available actions for: %s", request.region)
    actions = context.catalog.list_applicable(request.region, request.footprint)
    LOGGER.info("Found %d applicable actions", len(actions))
    next_session = Session(footprint=request.footprint, available_actions=tuple(actions))
    return Response(ResponseKind.ACTIONS_LOADED, actions), next_session


def _action_impact(
    request: CalculateActionImpact, session: Session, context: TrackerContext
) -> tuple[Response, Session]:
    LOGGER.info("Calculating impact of %d selected actions", len(request.selection))
    impact = simulate(request.footprint, request.actions, request.selection)
    next_session = replace(
        session,
        footprint=request.footprint,
        available_actions=request.actions,
        selection=request.selection,
        impact=impact,
        summary=None,
    )
    return Response(ResponseKind.IMPACT_CALCULATED, impact), next_session


def _generate_summary(
    request: GenerateSummary, session: Session, context: TrackerContext
) -> tuple[Response, Session]:
    summary = render_summary(
        request.footprint, request.impact, request.selected_actions, request.region
    )
    return Response(ResponseKind.SUMMARY_GENERATED, summary), replace(session, summary=summary)


def _reset(request: ResetApp, session: Session, context: TrackerContext) -> tuple[Response, Session]:
    LOGGER.info("Resetting application")
    return Response(ResponseKind.APP_RESET, {"success": True}), Session()


def _dispatch(
    request: Request, session: Session, context: TrackerContext
) -> tuple[Response, Session]:
    if isinstance(request, CalculateFootprint):
        return _calculate_footprint(request, session, context)
    if isinstance(request, GetAvailableActions):
        return _available_actions(request, session, context)
    if isinstance(request, CalculateActionImpact):
        return _action_impact(request, session, context)
    if isinstance(request, GenerateSummary):
        return _generate_summary(request, session, context)
    if isinstance(request, ResetApp):
        return _reset(request, session, context)
    raise TypeError(f"Unsupported request type: {type(request).__name__}")


def error_response(error: TrackerError) -> Response:
    return Response(ResponseKind.ERROR, error.to_payload())


def handle_request(
    request: Request, session: Session, context: TrackerContext
) -> tuple[Response, Session]:
    """Run one request; tracker errors become a single ``Error`` response."""
    try:
        return _dispatch(request, session, context)
    except TrackerError as exc:
        LOGGER.error("Error in %s (%s): %s", type(request).__name__, exc.step, exc.message)
        return error_response(exc), session


def handle_message(
    kind: str,
    payload: Mapping[str, Any] | None,
    session: Session,
    context: TrackerContext,
) -> tuple[Response | None, Session]:
    """Parse and handle a raw front-end message; unknown kinds yield ``None``."""
    try:
        request = parse_request(kind, payload)
    except TrackerError as exc:
        LOGGER.error("Rejected %s message (%s): %s", kind, exc.step, exc.message)
        return error_response(exc), session
    if request is None:
        return None, session
    return handle_request(request, session, context)
