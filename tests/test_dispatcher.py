"""Tests for the generic interaction dispatcher."""

from pathlib import Path
import sys

import pytest
from structlog.testing import capture_logs

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

from poll_action.interactions import (  # noqa: E402
    CorrelationStore,
    Dispatcher,
    InteractionEnvelope,
    InteractionType,
    RoutePattern,
    UnhandledInteractionKindError,
    message_response,
)


PATTERNS = [
    RoutePattern(type=InteractionType.APPLICATION_COMMAND, names=["poll*"]),
    RoutePattern(type=InteractionType.MESSAGE_COMPONENT, ids=["poll:*"]),
]


class RecordingHandler:
    def __init__(self, content: str = "handled") -> None:
        self.calls = []
        self.content = content

    def __call__(self, envelope, custom_id):
        self.calls.append((envelope, custom_id))
        return message_response(content=self.content)


def _dispatcher(handlers):
    store = CorrelationStore()
    return Dispatcher(patterns=PATTERNS, handlers=handlers, store=store), store


def _command(name: str) -> InteractionEnvelope:
    return InteractionEnvelope(id=f"cmd-{name}", type=InteractionType.APPLICATION_COMMAND, data={"name": name})


def _click(custom_id: str) -> InteractionEnvelope:
    return InteractionEnvelope(
        id="click-1",
        type=InteractionType.MESSAGE_COMPONENT,
        data={"custom_id": custom_id, "component_type": 2},
    )


def test_unmatched_interaction_returns_none_without_recording():
    handler = RecordingHandler()
    dispatcher, store = _dispatcher({(InteractionType.APPLICATION_COMMAND, "poll"): handler})

    with capture_logs() as logs:
        assert dispatcher.dispatch(_command("other")) is None

    assert handler.calls == []
    assert len(store) == 0
    assert logs[-1]["event"] == "interaction_unmatched"


def test_matched_command_is_handled_and_recorded():
    handler = RecordingHandler()
    dispatcher, store = _dispatcher({(InteractionType.APPLICATION_COMMAND, "poll"): handler})
    envelope = _command("poll")

    response = dispatcher.dispatch(envelope)

    assert response.data == {"content": "handled"}
    assert handler.calls == [(envelope, None)]
    record = store.lookup(envelope.id)
    assert record.request == envelope
    assert record.response == response


def test_component_handler_receives_decoded_custom_id():
    handler = RecordingHandler()
    dispatcher, _ = _dispatcher({(InteractionType.MESSAGE_COMPONENT, "button"): handler})

    dispatcher.dispatch(_click("poll:button:2:extra"))

    _, custom_id = handler.calls[0]
    assert (custom_id.namespace, custom_id.kind, custom_id.discriminator) == ("poll", "button", "2:extra")


def test_invalid_custom_id_is_treated_as_unmatched():
    handler = RecordingHandler()
    dispatcher, store = _dispatcher({(InteractionType.MESSAGE_COMPONENT, "button"): handler})

    with capture_logs() as logs:
        assert dispatcher.dispatch(_click("poll:button")) is None

    assert handler.calls == []
    assert len(store) == 0
    assert logs[-1]["event"] == "interaction_invalid_custom_id"


def test_matched_command_without_handler_returns_none():
    dispatcher, store = _dispatcher({(InteractionType.APPLICATION_COMMAND, "poll"): RecordingHandler()})

    with capture_logs() as logs:
        assert dispatcher.dispatch(_command("pollster")) is None

    assert len(store) == 0
    assert logs[-1]["event"] == "interaction_unhandled"


def test_handler_raising_unhandled_kind_returns_none():
    def refuse(envelope, custom_id):
        raise UnhandledInteractionKindError("not this one")

    dispatcher, store = _dispatcher({(InteractionType.MESSAGE_COMPONENT, "button"): refuse})

    assert dispatcher.dispatch(_click("poll:button:x")) is None
    assert len(store) == 0


def test_unexpected_handler_errors_propagate():
    def explode(envelope, custom_id):
        raise RuntimeError("boom")

    dispatcher, store = _dispatcher({(InteractionType.APPLICATION_COMMAND, "poll"): explode})

    with pytest.raises(RuntimeError):
        dispatcher.dispatch(_command("poll"))
    assert len(store) == 0


def test_dispatcher_exposes_patterns_and_store():
    dispatcher, store = _dispatcher({})

    assert dispatcher.patterns == tuple(PATTERNS)
    assert dispatcher.store is store
