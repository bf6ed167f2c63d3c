"""Route one interaction to its handler and keep the request/response pair."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

import structlog

from .custom_ids import CustomIdentifier, InvalidIdentifierError, decode
from .models import COMMAND_TYPES, InteractionEnvelope, InteractionResponse, InteractionType
from .patterns import RoutePattern, matches
from .store import CorrelationStore


HandlerKey = Tuple[InteractionType, str]
Handler = Callable[[InteractionEnvelope, Optional[CustomIdentifier]], InteractionResponse]


class UnhandledInteractionKindError(Exception):
    """Raised when an accepted interaction has no handler for its type and kind."""


class Dispatcher:
    """Accept interactions matching *patterns* and delegate to the handler table.

    Handlers are keyed by ``(type, command name)`` for commands and by
    ``(type, custom-id kind)`` for components and modals.
    """

    def __init__(
        self,
        *,
        patterns: Sequence[RoutePattern],
        handlers: Mapping[HandlerKey, Handler],
        store: CorrelationStore,
    ) -> None:
        self._patterns = tuple(patterns)
        self._handlers: Dict[HandlerKey, Handler] = dict(handlers)
        self._store = store

    @property
    def patterns(self) -> Tuple[RoutePattern, ...]:
        return self._patterns

    @property
    def store(self) -> CorrelationStore:
        return self._store

    def _resolve(self, envelope: InteractionEnvelope) -> Tuple[Handler, CustomIdentifier | None]:
        custom_id: CustomIdentifier | None = None
        if envelope.type in COMMAND_TYPES:
            key = envelope.command_name or ""
        else:
            custom_id = decode(envelope.custom_id)
            key = custom_id.kind

        handler = self._handlers.get((envelope.type, key))
        if handler is None:
            raise UnhandledInteractionKindError(
                f"No handler for {envelope.type.name} with key {key!r}"
            )
        return handler, custom_id

    def dispatch(self, envelope: InteractionEnvelope) -> InteractionResponse | None:
        log = structlog.get_logger().bind(
            interaction_id=envelope.id,
            interaction_type=envelope.type.name,
        )

        if not matches(envelope, self._patterns):
            log.info("interaction_unmatched")
            return None

        try:
            handler, custom_id = self._resolve(envelope)
            response = handler(envelope, custom_id)
        except InvalidIdentifierError as exc:
            log.warning("interaction_invalid_custom_id", error=str(exc))
            return None
        except UnhandledInteractionKindError as exc:
            log.warning("interaction_unhandled", error=str(exc))
            return None

        self._store.record(envelope, response)
        log.info("interaction_dispatched", response_type=response.type.name)
        return response
