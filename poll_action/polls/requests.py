"""Parsing of poll modal submissions."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from poll_action.interactions import InteractionEnvelope

from .modal import DESCRIPTION_INPUT_ID, OPTIONS_INPUT_ID


class PollSubmission(BaseModel):
    """Question and options typed into the poll modal."""

    description: str = ""
    options: List[str] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value: str | None) -> str:
        return (value or "").strip()

    @field_validator("options", mode="before")
    @classmethod
    def split_options(cls, value: str | list[str] | None) -> list[str]:
        if value is None:
            return []
        lines = value if isinstance(value, list) else value.splitlines()
        return [line.strip() for line in lines if line.strip()]


def parse_poll_submission(envelope: InteractionEnvelope) -> PollSubmission:
    """Read the poll fields from a modal submission by their custom ids."""

    values = envelope.submitted_values()
    return PollSubmission(
        description=values.get(DESCRIPTION_INPUT_ID),
        options=values.get(OPTIONS_INPUT_ID),
    )
