"""Route patterns deciding which interactions a feature accepts."""

from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, model_validator

from .models import COMMAND_TYPES, CUSTOM_ID_TYPES, InteractionEnvelope, InteractionType


WILDCARD = "*"


class RoutePattern(BaseModel):
    """Name globs for command types, custom-id globs for components and modals."""

    model_config = ConfigDict(frozen=True)

    type: InteractionType
    names: List[str] | None = None
    ids: List[str] | None = None

    @model_validator(mode="after")
    def ensure_globs_fit_type(self):
        if self.type in COMMAND_TYPES:
            if not self.names or self.ids:
                raise ValueError("command patterns declare names only")
        elif self.type in CUSTOM_ID_TYPES:
            if not self.ids or self.names:
                raise ValueError("component and modal patterns declare ids only")
        else:
            raise ValueError(f"interaction type {self.type.name} cannot be routed")
        return self

    @property
    def globs(self) -> List[str]:
        return list(self.names or self.ids or [])

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


def glob_matches(pattern: str, candidate: str) -> bool:
    """Exact match, or prefix match when *pattern* ends with a wildcard."""

    if pattern.endswith(WILDCARD):
        return candidate.startswith(pattern[: -len(WILDCARD)])
    return candidate == pattern


def route_candidate(envelope: InteractionEnvelope) -> str | None:
    if envelope.type in COMMAND_TYPES:
        return envelope.command_name
    if envelope.type in CUSTOM_ID_TYPES:
        return envelope.custom_id
    return None


def matches(envelope: InteractionEnvelope, patterns: Iterable[RoutePattern]) -> bool:
    candidate = route_candidate(envelope)
    if candidate is None:
        return False

    for pattern in patterns:
        if pattern.type != envelope.type:
            continue
        if any(glob_matches(glob, candidate) for glob in pattern.globs):
            return True
    return False
