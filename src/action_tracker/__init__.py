"""Request/response boundary between the front end and the footprint engine."""

from .context import TrackerContext, context_from_config, load_context
from .messages import (
    CalculateActionImpact,
    CalculateFootprint,
    GenerateSummary,
    GetAvailableActions,
    MessageKind,
    Request,
    ResetApp,
    Response,
    ResponseKind,
    parse_request,
)
from .session import Session, handle_message, handle_request

__all__ = [
    "CalculateActionImpact",
    "CalculateFootprint",
    "GenerateSummary",
    "GetAvailableActions",
    "MessageKind",
    "Request",
    "ResetApp",
    "Response",
    "ResponseKind",
    "Session",
    "TrackerContext",
    "context_from_config",
    "handle_message",
    "handle_request",
    "load_context",
    "parse_request",
]
