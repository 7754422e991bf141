"""Configuration models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class BackendConfig(BaseModel):
    """Configuration for the Anthropic insight backend."""

    model: str = "claude-sonnet-4-6"
    max_tokens: int = Field(default=8192, ge=256, le=64000)
    max_attempts: int = Field(default=3, ge=1, le=10)
    timeout_seconds: float = Field(default=120.0, ge=5.0, le=600.0)


class AssistantConfig(BaseModel):
    """Configuration for the source-grounded assistant."""

    name: str = "NOTESYNTH"
    rebuild_policy: Literal["always", "fingerprint"] = "always"
    forward_history: bool = False


class NarrationConfig(BaseModel):
    """Configuration for podcast narration."""

    preferred_locale: str = "en-US"
    voice_timeout_seconds: float = Field(default=0.5, ge=0.0, le=10.0)
    words_per_minute: int = Field(default=170, ge=60, le=400)


class StoreConfig(BaseModel):
    """Configuration for the local document store."""

    data_dir: str | None = None  # defaults to $NOTESYNTH_HOME or ~/.notesynth
    display_timezone: str = "Asia/Kolkata"


class AppConfig(BaseModel):
    """All configuration sections."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    narration: NarrationConfig = Field(default_factory=NarrationConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
