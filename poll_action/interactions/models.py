"""Pydantic models describing inbound interactions and the responses we emit."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    STRING_SELECT = 3
    TEXT_INPUT = 4


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    DEFERRED_UPDATE_MESSAGE = 6
    UPDATE_MESSAGE = 7
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    MODAL = 9


COMMAND_TYPES = frozenset(
    {InteractionType.APPLICATION_COMMAND, InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE}
)
CUSTOM_ID_TYPES = frozenset({InteractionType.MESSAGE_COMPONENT, InteractionType.MODAL_SUBMIT})


def _ensure_modal_rows(rows: Any) -> None:
    if not isinstance(rows, list):
        raise ValueError("modal submissions carry data.components as a list of rows")
    for row in rows:
        if not isinstance(row, dict) or not isinstance(row.get("components", []), list):
            raise ValueError("each modal row must hold a list of components")


class InteractionEnvelope(BaseModel):
    """An inbound interaction as delivered by the platform.

    Only ``id``, ``type`` and ``data`` drive routing. Any other top-level keys
    (guild, member, action context) are kept as extras so the audit trail
    returns the request exactly as it arrived.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    type: InteractionType
    data: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def ensure_routing_fields(self):
        if self.type in COMMAND_TYPES and not isinstance(self.data.get("name"), str):
            raise ValueError("command interactions require data.name")
        if self.type in CUSTOM_ID_TYPES and not isinstance(self.data.get("custom_id"), str):
            raise ValueError("component and modal interactions require data.custom_id")
        if self.type is InteractionType.MODAL_SUBMIT:
            _ensure_modal_rows(self.data.get("components", []))
        return self

    @property
    def command_name(self) -> str | None:
        return self.data.get("name") if self.type in COMMAND_TYPES else None

    @property
    def custom_id(self) -> str | None:
        return self.data.get("custom_id") if self.type in CUSTOM_ID_TYPES else None

    @property
    def component_type(self) -> ComponentType | None:
        raw = self.data.get("component_type")
        try:
            return ComponentType(raw)
        except ValueError:
            return None

    def submitted_values(self) -> Dict[str, str]:
        """Return text input values of a modal submission keyed by custom id."""

        values: Dict[str, str] = {}
        for row in self.data.get("components") or []:
            if not isinstance(row, dict):
                continue
            for component in row.get("components") or []:
                if not isinstance(component, dict):
                    continue
                custom_id = component.get("custom_id")
                value = component.get("value")
                if isinstance(custom_id, str) and isinstance(value, str):
                    values[custom_id] = value
        return values

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class InteractionResponse(BaseModel):
    """The payload returned to the platform for one interaction."""

    model_config = ConfigDict(frozen=True)

    type: InteractionResponseType
    data: Dict[str, Any] | None = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def message_response(
    *, content: str | None = None, embeds=None, components=None, ephemeral: bool = False
) -> InteractionResponse:
    """Build a channel message response from the parts that are present."""

    data: Dict[str, Any] = {}
    if content is not None:
        data["content"] = content
    if embeds:
        data["embeds"] = list(embeds)
    if components:
        data["components"] = list(components)
    if ephemeral:
        data["flags"] = 1 << 6
    return InteractionResponse(type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE, data=data)


def modal_response(modal: Dict[str, Any]) -> InteractionResponse:
    return InteractionResponse(type=InteractionResponseType.MODAL, data=modal)
