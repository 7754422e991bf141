"""Podcast script models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PodcastLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    speaker: str
    line: str

    @property
    def spoken_text(self) -> str:
        return f"{self.speaker}: {self.line}"


class PodcastScript(BaseModel):
    """A titled multi-speaker script."""

    model_config = ConfigDict(frozen=True)

    title: str
    script: tuple[PodcastLine, ...] = Field(default_factory=tuple)
