"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GatewaySettings(BaseModel):
    provider: str | None = None
    base_url: str | None = None
    api_key: str | None = None
    model: str | None = None
    timeout: float | None = None
    app_title: str | None = None
    app_url: str | None = None

    model_config = ConfigDict(extra="forbid")


class FallbackSettings(BaseModel):
    excerpt_max_chars: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class PipelineSettings(BaseModel):
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, gt=0)
    concurrent_cheating: bool | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    fallback: FallbackSettings = Field(default_factory=FallbackSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("gateway", "fallback", "pipeline"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    """Validate a raw YAML document; raises ``pydantic.ValidationError``."""
    return AppConfig.model_validate(raw)
