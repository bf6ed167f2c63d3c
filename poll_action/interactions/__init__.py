"""Interaction routing, custom-id codec and the correlation audit trail."""

from .custom_ids import CustomIdentifier, InvalidIdentifierError, decode, encode
from .dispatcher import Dispatcher, Handler, HandlerKey, UnhandledInteractionKindError
from .metadata import (
    ActionMetadata,
    ApplicationCommandSpec,
    ApplicationCommandType,
    CommandMetadata,
    ManifestVersion,
    MiniAppManifest,
)
from .models import (
    ComponentType,
    InteractionEnvelope,
    InteractionResponse,
    InteractionResponseType,
    InteractionType,
    message_response,
    modal_response,
)
from .patterns import RoutePattern, glob_matches, matches, route_candidate
from .store import CorrelationRecord, CorrelationStore, NotFoundError

__all__ = [
    "ActionMetadata",
    "ApplicationCommandSpec",
    "ApplicationCommandType",
    "CommandMetadata",
    "ComponentType",
    "CorrelationRecord",
    "CorrelationStore",
    "CustomIdentifier",
    "Dispatcher",
    "Handler",
    "HandlerKey",
    "InteractionEnvelope",
    "InteractionResponse",
    "InteractionResponseType",
    "InteractionType",
    "InvalidIdentifierError",
    "ManifestVersion",
    "MiniAppManifest",
    "NotFoundError",
    "RoutePattern",
    "UnhandledInteractionKindError",
    "decode",
    "encode",
    "glob_matches",
    "matches",
    "message_response",
    "modal_response",
    "route_candidate",
]
