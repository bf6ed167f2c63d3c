"""Registration metadata for the poll action."""

from __future__ import annotations

from typing import List, Sequence

from poll_action.interactions import (
    ActionMetadata,
    ApplicationCommandSpec,
    ApplicationCommandType,
    CommandMetadata,
    InteractionType,
    ManifestVersion,
    MiniAppManifest,
    RoutePattern,
)

from .constants import POLL_COMMAND_NAME, POLL_NAMESPACE


APP_ID = "poll-action"
APP_VERSION = "0.1.0"


def supported_interactions() -> List[RoutePattern]:
    """Interactions routed to this action, by type and name or custom id."""

    command_globs = [f"{POLL_COMMAND_NAME}*"]
    custom_id_globs = [f"{POLL_NAMESPACE}:*"]
    return [
        RoutePattern(type=InteractionType.APPLICATION_COMMAND, names=command_globs),
        RoutePattern(type=InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE, names=command_globs),
        RoutePattern(type=InteractionType.MESSAGE_COMPONENT, ids=custom_id_globs),
        RoutePattern(type=InteractionType.MODAL_SUBMIT, ids=custom_id_globs),
    ]


def application_commands(supported_envs: Sequence[str]) -> List[ApplicationCommandSpec]:
    return [
        ApplicationCommandSpec(
            metadata=CommandMetadata(
                name="PollAction",
                short_name=APP_ID,
                supported_envs=list(supported_envs),
            ),
            type=ApplicationCommandType.CHAT_INPUT,
            name=POLL_COMMAND_NAME,
            description="Poll command",
        )
    ]


def build_action_metadata(supported_envs: Sequence[str]) -> ActionMetadata:
    manifest = MiniAppManifest(
        app_id=APP_ID,
        developer="collab.land",
        name="PollAction",
        platforms=["discord"],
        short_name=APP_ID,
        version=ManifestVersion(name=APP_VERSION),
        website="https://collab.land",
        description="Create a poll from a slash command and collect votes with buttons",
    )
    return ActionMetadata(
        manifest=manifest,
        supported_interactions=supported_interactions(),
        application_commands=application_commands(supported_envs),
    )
