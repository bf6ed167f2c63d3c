"""Handlers for each step of the poll flow and the dispatcher wiring them up."""

from __future__ import annotations

from functools import partial
from typing import Dict

import structlog

from poll_action.background import run_async
from poll_action.interactions import (
    ComponentType,
    CorrelationStore,
    CustomIdentifier,
    Dispatcher,
    Handler,
    HandlerKey,
    InteractionEnvelope,
    InteractionResponse,
    InteractionType,
    UnhandledInteractionKindError,
    message_response,
    modal_response,
)

from .api import PollsApiClient
from .constants import BUTTON_KIND, MODAL_KIND, POLL_COMMAND_NAME
from .messages import MAX_OPTIONS, build_poll_message
from .metadata import supported_interactions
from .modal import build_poll_modal
from .notifications import publish_poll
from .requests import parse_poll_submission


def handle_poll_command(envelope: InteractionEnvelope, custom_id: CustomIdentifier | None) -> InteractionResponse:
    return modal_response(build_poll_modal())


def handle_poll_submission(
    envelope: InteractionEnvelope,
    custom_id: CustomIdentifier | None,
    *,
    polls_api: PollsApiClient | None = None,
) -> InteractionResponse:
    submission = parse_poll_submission(envelope)
    log = structlog.get_logger().bind(interaction_id=envelope.id)

    if not submission.description:
        return message_response(content="A poll needs a description.", ephemeral=True)
    if not submission.options:
        return message_response(content="Please provide at least one option, one per line.", ephemeral=True)
    if len(submission.options) > MAX_OPTIONS:
        return message_response(content=f"A poll supports at most {MAX_OPTIONS} options.", ephemeral=True)

    log.info("poll_submitted", option_count=len(submission.options))
    if polls_api is not None:
        run_async(
            publish_poll,
            client=polls_api,
            question=submission.description,
            options=submission.options,
            interaction_id=envelope.id,
        )

    payload = build_poll_message(description=submission.description, options=submission.options)
    return message_response(**payload)


def handle_poll_vote(envelope: InteractionEnvelope, custom_id: CustomIdentifier | None) -> InteractionResponse:
    if envelope.component_type is not ComponentType.BUTTON:
        raise UnhandledInteractionKindError(f"Poll votes come from buttons, got {envelope.component_type!r}")

    discriminator = custom_id.discriminator if custom_id else ""
    if not (discriminator.isascii() and discriminator.isdigit()):
        raise UnhandledInteractionKindError(f"Poll button index is not a number: {discriminator!r}")

    index = int(discriminator)
    return message_response(content=str(index))


def build_handlers(*, polls_api: PollsApiClient | None = None) -> Dict[HandlerKey, Handler]:
    return {
        (InteractionType.APPLICATION_COMMAND, POLL_COMMAND_NAME): handle_poll_command,
        (InteractionType.MODAL_SUBMIT, MODAL_KIND): partial(handle_poll_submission, polls_api=polls_api),
        (InteractionType.MESSAGE_COMPONENT, BUTTON_KIND): handle_poll_vote,
    }


def build_poll_dispatcher(
    store: CorrelationStore, *, polls_api: PollsApiClient | None = None
) -> Dispatcher:
    """Wire the poll route patterns and handler table to *store*."""

    return Dispatcher(
        patterns=supported_interactions(),
        handlers=build_handlers(polls_api=polls_api),
        store=store,
    )
