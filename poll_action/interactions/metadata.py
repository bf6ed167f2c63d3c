"""Pydantic models for the metadata an action publishes for registration."""

from __future__ import annotations

from enum import IntEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .patterns import RoutePattern


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class _CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ManifestVersion(_CamelModel):
    name: str


class MiniAppManifest(_CamelModel):
    app_id: str = Field(..., alias="appId")
    developer: str
    name: str
    platforms: List[str]
    short_name: str = Field(..., alias="shortName")
    version: ManifestVersion
    website: str | None = None
    description: str | None = None


class CommandMetadata(_CamelModel):
    name: str
    short_name: str = Field(..., alias="shortName")
    supported_envs: List[str] = Field(default_factory=list, alias="supportedEnvs")


class ApplicationCommandSpec(_CamelModel):
    metadata: CommandMetadata
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    name: str
    description: str


class ActionMetadata(_CamelModel):
    manifest: MiniAppManifest
    supported_interactions: List[RoutePattern] = Field(..., alias="supportedInteractions")
    application_commands: List[ApplicationCommandSpec] = Field(
        default_factory=list, alias="applicationCommands"
    )
