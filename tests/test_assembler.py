"""Tests for notesynth.noteboard.assembler."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from notesynth.models.noteboard import (
    KeyPeopleEntry,
    KeyPerson,
    NoteboardInsights,
    NoteboardKind,
    QnaEntry,
    QnaItem,
    SuggestedVisualization,
    SummaryEntry,
    VisualizationEntry,
    VisualizationType,
    WordCloudChart,
)
from notesynth.noteboard.assembler import NoteboardAssembler


@pytest.fixture
def assembler() -> NoteboardAssembler:
    return NoteboardAssembler()


def suggestion(viz_type: VisualizationType) -> SuggestedVisualization:
    return SuggestedVisualization(type=viz_type, rationale="fits the data")


class TestFromInsights:
    def test_full_insights_produce_three_entries(self, assembler):
        insights = NoteboardInsights(
            summary="Reefs are declining.",
            key_people=[KeyPerson(name="Dr. Reef", description="Marine biologist")],
            qna=[QnaItem(question="Why?", answer="Warming.")],
            suggested_visualizations=[suggestion(VisualizationType.TIMELINE)],
        )
        entries, suggestions = assembler.from_insights(insights)
        assert [type(e) for e in entries] == [SummaryEntry, KeyPeopleEntry, QnaEntry]
        assert [e.kind for e in entries] == [
            NoteboardKind.SUMMARY,
            NoteboardKind.KEY_PEOPLE,
            NoteboardKind.QNA,
        ]
        assert entries[0].payload == "Reefs are declining."
        assert [s.type for s in suggestions] == [VisualizationType.TIMELINE]

    def test_empty_sections_omitted(self, assembler):
        entries, suggestions = assembler.from_insights(NoteboardInsights(summary="Only this."))
        assert len(entries) == 1
        assert isinstance(entries[0], SummaryEntry)
        assert suggestions == []

    def test_entry_ids_are_unique(self, assembler):
        insights = NoteboardInsights(
            summary="s",
            key_people=[KeyPerson(name="a", description="b")],
            qna=[QnaItem(question="q", answer="a")],
        )
        entries, _ = assembler.from_insights(insights)
        assert len({e.id for e in entries}) == 3


class TestVisualization:
    def test_builds_tagged_payload(self, assembler):
        entry = assembler.visualization(
            VisualizationType.WORD_CLOUD, [{"text": "reef", "value": 12}]
        )
        assert isinstance(entry, VisualizationEntry)
        assert isinstance(entry.payload, WordCloudChart)
        assert entry.viz_type is VisualizationType.WORD_CLOUD
        assert entry.title == "Word Cloud"

    def test_rejects_mismatched_data(self, assembler):
        with pytest.raises(ValidationError):
            assembler.visualization(VisualizationType.SENTIMENT_ANALYSIS, {"sentiment": "Happy"})


class TestPodcast:
    def test_title_taken_from_script(self, assembler, script):
        entry = assembler.podcast(script)
        assert entry.kind is NoteboardKind.PODCAST
        assert entry.title == "Reefs in Ten Minutes"
        assert entry.payload == script


class TestRemoveSuggestion:
    def test_removes_matching_type(self):
        suggestions = [
            suggestion(VisualizationType.WORD_CLOUD),
            suggestion(VisualizationType.TIMELINE),
        ]
        remaining = NoteboardAssembler.remove_suggestion(suggestions, VisualizationType.WORD_CLOUD)
        assert [s.type for s in remaining] == [VisualizationType.TIMELINE]

    def test_absent_type_is_noop(self):
        suggestions = [suggestion(VisualizationType.TIMELINE)]
        remaining = NoteboardAssembler.remove_suggestion(suggestions, VisualizationType.GEO_MAP)
        assert remaining == suggestions

    def test_does_not_mutate_input(self):
        suggestions = [suggestion(VisualizationType.TIMELINE)]
        NoteboardAssembler.remove_suggestion(suggestions, VisualizationType.TIMELINE)
        assert len(suggestions) == 1
