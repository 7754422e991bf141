"""Tests for notesynth.notebook — user actions against a fake backend."""

from __future__ import annotations

import pytest

from notesynth.errors import ExtractionError, NotesynthError, NotFoundError
from notesynth.ingest.ingestor import SourceDigest
from notesynth.models.bundle import UserBundle
from notesynth.models.noteboard import (
    KeyPerson,
    NoteboardInsights,
    PodcastEntry,
    QnaItem,
    SuggestedVisualization,
    SummaryEntry,
    VisualizationType,
    WordCloudItem,
)
from notesynth.models.source import ChatRole
from notesynth.notebook import NO_SOURCES_SUMMARY, Notebook

USER = "ada@example.com"


@pytest.fixture
def notebook(store, backend, source_a, source_b) -> Notebook:
    store.save(USER, UserBundle(sources=[source_a, source_b]))
    return Notebook(USER, store, backend)


def reload(store) -> UserBundle:
    return store.load(USER)


class TestSources:
    def test_add_text_prepends_and_persists(self, notebook, backend, store):
        backend.extract_results.append(
            SourceDigest(title="Kelp Forests", summary="Kelp.", keywords=["kelp"])
        )
        source = notebook.add_text("Kelp forests grow fast.")
        assert notebook.bundle.sources[0] is source
        assert source.content == "Kelp forests grow fast."
        assert reload(store).sources[0].title == "Kelp Forests"

    def test_toggle_and_delete(self, notebook, store):
        notebook.toggle_source("source-a")
        assert reload(store).find_source("source-a").active is False
        notebook.delete_source("source-b")
        assert [s.id for s in reload(store).sources] == ["source-a"]

    def test_unknown_source(self, notebook):
        with pytest.raises(NotFoundError):
            notebook.toggle_source("nope")


class TestChat:
    def test_answer_finalized_and_saved(self, notebook, backend, store):
        backend.fragments = ["Reefs ", 'are small [Source: "Coral Reefs"].']
        deltas = []
        reply = notebook.send_message("  How big are reefs?  ", on_delta=deltas.append)

        assert reply.text == 'Reefs are small [Source: "Coral Reefs"].'
        assert reply.pending is False
        assert deltas == backend.fragments
        history = reload(store).chat_history
        assert [t.role for t in history] == [ChatRole.USER, ChatRole.ASSISTANT]
        assert history[0].text == "How big are reefs?"
        assert history[1].text == reply.text

    def test_stream_failure_marks_reply(self, notebook, backend, store):
        backend.fragments = ["partial", "rest"]
        backend.fail_after = 1
        reply = notebook.send_message("q")
        assert reply.failed is True
        assert reply.text == "Error: connection reset"
        assert reload(store).chat_history[-1].failed is True

    def test_blank_question_rejected(self, notebook, store):
        with pytest.raises(NotesynthError):
            notebook.send_message("   ")
        assert notebook.bundle.chat_history == []

    def test_interrupted_stream_not_left_pending(self, notebook, backend, store):
        backend.fragments = ["partial ", "never seen"]

        def interrupt(delta):
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            notebook.send_message("q", on_delta=interrupt)

        saved = reload(store).chat_history[-1]
        assert saved.pending is False
        assert saved.failed is True
        assert saved.text == "Error: Interrupted"
        assert notebook.session.busy is False

    def test_toggle_between_turns_regrounds(self, notebook, backend):
        notebook.send_message("first")
        notebook.toggle_source("source-b")
        notebook.send_message("second")
        assert "Hydrothermal" in backend.instructions[0]
        assert "Hydrothermal" not in backend.instructions[1]


class TestNoteboard:
    def test_generate_replaces_entries(self, notebook, backend, store):
        backend.extract_results.append(
            NoteboardInsights(
                summary="Two ocean habitats.",
                key_people=[KeyPerson(name="Dr. Reef", description="Biologist")],
                qna=[QnaItem(question="Where?", answer="Oceans.")],
                suggested_visualizations=[
                    SuggestedVisualization(type=VisualizationType.WORD_CLOUD, rationale="terms")
                ],
            )
        )
        entries = notebook.generate_noteboard()
        assert len(entries) == 3
        prompt, shape = backend.extract_calls[0]
        assert shape is NoteboardInsights
        assert '--- SOURCE: "Coral Reefs" ---' in prompt
        saved = reload(store)
        assert len(saved.noteboard_entries) == 3
        assert saved.suggested_visualizations[0].type is VisualizationType.WORD_CLOUD

    def test_no_active_sources_skips_backend(self, notebook, backend):
        notebook.toggle_source("source-a")
        notebook.toggle_source("source-b")
        entries = notebook.generate_noteboard()
        assert backend.extract_calls == []
        assert isinstance(entries[0], SummaryEntry)
        assert entries[0].payload == NO_SOURCES_SUMMARY

    def test_failed_generation_keeps_prior_entries(self, notebook, backend, monkeypatch):
        def fail(prompt, shape):
            raise ExtractionError("Model returned no JSON")

        notebook.bundle.noteboard_entries = [SummaryEntry(payload="old")]
        monkeypatch.setattr(backend, "extract", fail)
        with pytest.raises(ExtractionError):
            notebook.generate_noteboard()
        assert notebook.bundle.noteboard_entries[0].payload == "old"

    def test_visualization_appends_and_clears_suggestion(self, notebook, backend, store):
        notebook.bundle.suggested_visualizations = [
            SuggestedVisualization(type=VisualizationType.WORD_CLOUD, rationale="terms"),
            SuggestedVisualization(type=VisualizationType.TIMELINE, rationale="dates"),
        ]
        backend.extract_results.append([WordCloudItem(text="reef", value=5)])
        entry = notebook.generate_visualization(VisualizationType.WORD_CLOUD)

        assert entry.viz_type is VisualizationType.WORD_CLOUD
        saved = reload(store)
        assert saved.noteboard_entries[-1].id == entry.id
        assert [s.type for s in saved.suggested_visualizations] == [VisualizationType.TIMELINE]

    def test_heatmap_prompt_lists_titles(self, notebook, backend):
        backend.extract_results.append(
            {"sources": ["Coral Reefs", "Deep Sea Vents"], "topics": ["life"], "matrix": [[0.5], [0.9]]}
        )
        notebook.generate_visualization(VisualizationType.TOPIC_HEATMAP)
        prompt, _ = backend.extract_calls[0]
        assert "Coral Reefs" in prompt and "Deep Sea Vents" in prompt

    def test_visualization_without_sources(self, notebook):
        notebook.toggle_source("source-a")
        notebook.toggle_source("source-b")
        with pytest.raises(ExtractionError):
            notebook.generate_visualization(VisualizationType.BAR_CHART)

    def test_podcast(self, notebook, backend, script):
        backend.extract_results.append(script)
        entry = notebook.generate_podcast()
        assert isinstance(entry, PodcastEntry)
        assert notebook.podcasts() == [entry]
        assert notebook.get_entry(entry.id) is entry

    def test_podcast_without_sources(self, notebook):
        notebook.toggle_source("source-a")
        notebook.toggle_source("source-b")
        with pytest.raises(ExtractionError, match="No active sources for podcast generation."):
            notebook.generate_podcast()

    def test_unknown_entry(self, notebook):
        with pytest.raises(NotFoundError):
            notebook.get_entry("nb-missing")
