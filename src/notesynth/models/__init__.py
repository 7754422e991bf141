"""Pydantic data models for NoteSynth."""

from notesynth.models.bundle import UserBundle
from notesynth.models.config import (
    AppConfig,
    AssistantConfig,
    BackendConfig,
    NarrationConfig,
    StoreConfig,
)
from notesynth.models.noteboard import (
    NoteboardEntry,
    NoteboardKind,
    SuggestedVisualization,
    VisualizationType,
)
from notesynth.models.podcast import PodcastLine, PodcastScript
from notesynth.models.source import ChatRole, ChatTurn, Source

__all__ = [
    "AppConfig",
    "AssistantConfig",
    "BackendConfig",
    "ChatRole",
    "ChatTurn",
    "NarrationConfig",
    "NoteboardEntry",
    "NoteboardKind",
    "PodcastLine",
    "PodcastScript",
    "Source",
    "StoreConfig",
    "SuggestedVisualization",
    "UserBundle",
    "VisualizationType",
]
