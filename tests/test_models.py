"""Tests for notesynth.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from notesynth.errors import TurnStateError
from notesynth.models.bundle import UserBundle
from notesynth.models.noteboard import (
    GeoMapData,
    PodcastEntry,
    SentimentData,
    SummaryEntry,
    TopicHeatmapData,
    VisualizationEntry,
    VisualizationType,
    WordCloudChart,
    WordCloudItem,
    data_shape,
)
from notesynth.models.source import ChatRole, ChatTurn


class TestChatTurn:
    def test_placeholder_is_pending_assistant(self):
        turn = ChatTurn.placeholder()
        assert turn.role is ChatRole.ASSISTANT
        assert turn.pending is True
        assert turn.text == ""

    def test_append_then_finalize(self):
        turn = ChatTurn.placeholder()
        turn.append("Hello ")
        turn.append("there")
        started = turn.timestamp
        turn.finalize()
        assert turn.text == "Hello there"
        assert turn.pending is False
        assert turn.failed is False
        assert turn.timestamp >= started

    def test_fail_replaces_text(self):
        turn = ChatTurn.placeholder()
        turn.append("partial")
        turn.fail("connection reset")
        assert turn.text == "Error: connection reset"
        assert turn.failed is True
        assert turn.pending is False

    @pytest.mark.parametrize("action", ["append", "finalize", "fail"])
    def test_settled_turn_rejects_changes(self, action):
        turn = ChatTurn.placeholder()
        turn.finalize()
        with pytest.raises(TurnStateError):
            if action == "append":
                turn.append("more")
            elif action == "finalize":
                turn.finalize()
            else:
                turn.fail("boom")

    def test_user_turn_not_pending(self):
        turn = ChatTurn.user("What is a reef?")
        assert turn.role is ChatRole.USER
        assert turn.pending is False


class TestVisualizationShapes:
    def test_geo_codes_normalized(self):
        assert GeoMapData(countryCodes=[" us", "in"]).countryCodes == ["US", "IN"]

    def test_geo_rejects_alpha3(self):
        with pytest.raises(ValidationError):
            GeoMapData(countryCodes=["USA"])

    def test_heatmap_dimensions_checked(self):
        TopicHeatmapData(sources=["A", "B"], topics=["x"], matrix=[[0.1], [0.9]])
        with pytest.raises(ValidationError):
            TopicHeatmapData(sources=["A", "B"], topics=["x"], matrix=[[0.1]])
        with pytest.raises(ValidationError):
            TopicHeatmapData(sources=["A"], topics=["x", "y"], matrix=[[0.1]])

    def test_sentiment_score_bounds(self):
        SentimentData(sentiment="Positive", score=0.8)
        with pytest.raises(ValidationError):
            SentimentData(sentiment="Positive", score=1.5)

    def test_data_shape_matches_chart(self):
        assert data_shape(VisualizationType.WORD_CLOUD) == list[WordCloudItem]
        assert data_shape(VisualizationType.GEO_MAP) is GeoMapData


class TestUserBundle:
    def test_entries_reload_as_tagged_types(self, script, source_a):
        bundle = UserBundle(
            sources=[source_a],
            noteboard_entries=[
                SummaryEntry(payload="Reefs."),
                VisualizationEntry(
                    title="Word Cloud",
                    payload=WordCloudChart(data=[WordCloudItem(text="reef", value=3)]),
                ),
                PodcastEntry(title=script.title, payload=script),
            ],
        )
        restored = UserBundle.model_validate_json(bundle.model_dump_json())
        kinds = [type(e) for e in restored.noteboard_entries]
        assert kinds == [SummaryEntry, VisualizationEntry, PodcastEntry]
        assert restored.noteboard_entries[1].viz_type is VisualizationType.WORD_CLOUD
        assert restored.noteboard_entries[2].payload == script

    def test_active_sources(self, source_a, source_b):
        source_b.active = False
        bundle = UserBundle(sources=[source_a, source_b])
        assert bundle.active_sources == [source_a]
        assert bundle.find_source("source-b") is source_b
        assert bundle.find_source("missing") is None
