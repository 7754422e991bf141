"""Noteboard assembler — maps extraction results onto typed entries."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from notesynth.models.noteboard import (
    CHART_MODELS,
    KeyPeopleEntry,
    NoteboardEntry,
    NoteboardInsights,
    PodcastEntry,
    QnaEntry,
    SuggestedVisualization,
    SummaryEntry,
    VisualizationEntry,
    VisualizationType,
)
from notesynth.models.podcast import PodcastScript


class NoteboardAssembler:
    """Pure transforms; holds no state."""

    def from_insights(
        self, insights: NoteboardInsights
    ) -> tuple[list[NoteboardEntry], list[SuggestedVisualization]]:
        entries: list[NoteboardEntry] = []
        if insights.summary:
            entries.append(SummaryEntry(payload=insights.summary))
        if insights.key_people:
            entries.append(KeyPeopleEntry(payload=insights.key_people))
        if insights.qna:
            entries.append(QnaEntry(payload=insights.qna))
        return entries, list(insights.suggested_visualizations)

    def visualization(self, viz_type: VisualizationType, data: Any) -> VisualizationEntry:
        chart = CHART_MODELS[viz_type](data=data)
        return VisualizationEntry(title=viz_type.value, payload=chart)

    def podcast(self, script: PodcastScript) -> PodcastEntry:
        return PodcastEntry(title=script.title, payload=script)

    @staticmethod
    def remove_suggestion(
        suggestions: Sequence[SuggestedVisualization], viz_type: VisualizationType
    ) -> list[SuggestedVisualization]:
        """Drop suggestions of ``viz_type``; a type not present is a no-op."""
        return [s for s in suggestions if s.type != viz_type]
