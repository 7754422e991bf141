"""Per-user bundle — the unit of persistence."""

from __future__ import annotations

from pydantic import BaseModel, Field

from notesynth.models.noteboard import NoteboardEntry, SuggestedVisualization
from notesynth.models.source import ChatTurn, Source


class UserBundle(BaseModel):
    """Everything persisted for one user."""

    sources: list[Source] = Field(default_factory=list)
    chat_history: list[ChatTurn] = Field(default_factory=list)
    noteboard_entries: list[NoteboardEntry] = Field(default_factory=list)
    suggested_visualizations: list[SuggestedVisualization] = Field(default_factory=list)

    def find_source(self, source_id: str) -> Source | None:
        return next((s for s in self.sources if s.id == source_id), None)

    @property
    def active_sources(self) -> list[Source]:
        return [s for s in self.sources if s.active]
