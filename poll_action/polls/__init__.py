"""The poll feature: modal, messages, handlers and registration metadata."""

from .api import Poll, PollOption, PollsApiClient, PollsApiError
from .constants import BUTTON_KIND, MODAL_KIND, POLL_COMMAND_NAME, POLL_NAMESPACE, TEXT_KIND
from .handlers import (
    build_handlers,
    build_poll_dispatcher,
    handle_poll_command,
    handle_poll_submission,
    handle_poll_vote,
)
from .messages import build_option_rows, build_poll_message
from .metadata import application_commands, build_action_metadata, supported_interactions
from .modal import DESCRIPTION_INPUT_ID, OPTIONS_INPUT_ID, POLL_MODAL_ID, build_poll_modal
from .notifications import publish_poll
from .requests import PollSubmission, parse_poll_submission

__all__ = [
    "BUTTON_KIND",
    "DESCRIPTION_INPUT_ID",
    "MODAL_KIND",
    "OPTIONS_INPUT_ID",
    "POLL_COMMAND_NAME",
    "POLL_MODAL_ID",
    "POLL_NAMESPACE",
    "Poll",
    "PollOption",
    "PollSubmission",
    "PollsApiClient",
    "PollsApiError",
    "TEXT_KIND",
    "application_commands",
    "build_action_metadata",
    "build_handlers",
    "build_option_rows",
    "build_poll_dispatcher",
    "build_poll_modal",
    "build_poll_message",
    "handle_poll_command",
    "handle_poll_submission",
    "handle_poll_vote",
    "parse_poll_submission",
    "publish_poll",
    "supported_interactions",
]
