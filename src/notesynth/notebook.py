"""Notebook — a logged-in user's sources, chat and noteboard."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import closing
from pathlib import Path

from notesynth.assistant.grounding import GroundingContext
from notesynth.assistant.session import AssistantSession
from notesynth.backend.base import InsightBackend
from notesynth.errors import BackendError, ExtractionError, NotesynthError, NotFoundError
from notesynth.ingest.ingestor import SourceIngestor
from notesynth.models.bundle import UserBundle
from notesynth.models.config import AppConfig
from notesynth.models.noteboard import (
    NoteboardEntry,
    NoteboardInsights,
    PodcastEntry,
    VisualizationEntry,
    VisualizationType,
    data_shape,
)
from notesynth.models.podcast import PodcastScript
from notesynth.models.source import ChatTurn, Source
from notesynth.noteboard.assembler import NoteboardAssembler
from notesynth.noteboard.prompts import (
    noteboard_prompt,
    podcast_prompt,
    visualization_prompt,
)
from notesynth.store.document_store import DocumentStore
from notesynth.utils.progress import log_error, log_step, log_success

NO_SOURCES_SUMMARY = "No active sources to generate insights from."


class Notebook:
    """Applies user actions to the bundle and persists after every change.

    Backend failures surface as :class:`NotesynthError` subclasses and leave
    the bundle as it was, except for chat: a failed answer is kept in the
    history as a failed turn.
    """

    def __init__(
        self,
        user_id: str,
        store: DocumentStore,
        backend: InsightBackend,
        config: AppConfig | None = None,
    ) -> None:
        self.user_id = user_id
        self.store = store
        self.backend = backend
        self.config = config or AppConfig()
        self.bundle: UserBundle = store.load(user_id)
        self.session = AssistantSession(backend, self.config.assistant)
        self.ingestor = SourceIngestor(backend)
        self.assembler = NoteboardAssembler()

    def save(self) -> None:
        self.store.save(self.user_id, self.bundle)

    def close(self) -> None:
        self.session.close()

    @property
    def has_active_sources(self) -> bool:
        return bool(self.bundle.active_sources)

    def _context(self) -> GroundingContext:
        return GroundingContext.from_sources(self.bundle.sources)

    # --- sources ---

    def add_text(self, content: str) -> Source:
        return self._add_source(self.ingestor.from_text(content))

    def add_file(self, path: Path | str, mime_type: str | None = None) -> Source:
        return self._add_source(self.ingestor.from_file(path, mime_type))

    def _add_source(self, source: Source) -> Source:
        self.bundle.sources.insert(0, source)
        self.save()
        log_success(f"Added source: {source.title}")
        return source

    def get_source(self, source_id: str) -> Source:
        source = self.bundle.find_source(source_id)
        if source is None:
            raise NotFoundError(f"Unknown source: {source_id}")
        return source

    def toggle_source(self, source_id: str) -> Source:
        source = self.get_source(source_id)
        source.active = not source.active
        self.save()
        return source

    def delete_source(self, source_id: str) -> Source:
        source = self.get_source(source_id)
        self.bundle.sources = [s for s in self.bundle.sources if s.id != source_id]
        self.save()
        return source

    # --- chat ---

    def send_message(
        self, text: str, on_delta: Callable[[str], None] | None = None
    ) -> ChatTurn:
        """Ask a question and return the assistant turn (finalized or failed)."""
        question = text.strip()
        if not question:
            raise NotesynthError("Please enter a question.")

        prior = list(self.bundle.chat_history)
        reply = ChatTurn.placeholder()
        self.bundle.chat_history.extend([ChatTurn.user(question), reply])

        try:
            with closing(self.session.ask(prior, self.bundle.sources, question)) as stream:
                for delta in stream:
                    reply.append(delta)
                    if on_delta:
                        on_delta(delta)
            reply.finalize()
        except BackendError as e:
            log_error(str(e))
            reply.fail(str(e))
        except BaseException:
            # Ctrl-C or a failing callback must not persist a pending turn.
            if reply.pending:
                reply.fail("Interrupted")
            raise
        finally:
            self.save()
        return reply

    # --- noteboard ---

    def generate_noteboard(self) -> list[NoteboardEntry]:
        """Regenerate the noteboard; replaces all entries and suggestions."""
        context = self._context()
        if context.is_empty:
            insights = NoteboardInsights(summary=NO_SOURCES_SUMMARY)
        else:
            log_step("Noteboard", f"Generating insights from {len(context.sources)} source(s)")
            insights = self.backend.extract(noteboard_prompt(context.text), NoteboardInsights)

        entries, suggestions = self.assembler.from_insights(insights)
        self.bundle.noteboard_entries = entries
        self.bundle.suggested_visualizations = suggestions
        self.save()
        return entries

    def generate_visualization(self, viz_type: VisualizationType) -> VisualizationEntry:
        context = self._context()
        if context.is_empty:
            raise ExtractionError("No active sources to visualize.")
        log_step("Noteboard", f"Generating {viz_type.value}")
        prompt = visualization_prompt(viz_type, context.text, context.titles)
        data = self.backend.extract(prompt, data_shape(viz_type))

        entry = self.assembler.visualization(viz_type, data)
        self.bundle.noteboard_entries.append(entry)
        self.bundle.suggested_visualizations = self.assembler.remove_suggestion(
            self.bundle.suggested_visualizations, viz_type
        )
        self.save()
        return entry

    def generate_podcast(self) -> PodcastEntry:
        context = self._context()
        if context.is_empty:
            raise ExtractionError("No active sources for podcast generation.")
        log_step("Noteboard", "Writing podcast script")
        script = self.backend.extract(podcast_prompt(context.text), PodcastScript)

        entry = self.assembler.podcast(script)
        self.bundle.noteboard_entries.append(entry)
        self.save()
        return entry

    def podcasts(self) -> list[PodcastEntry]:
        return [e for e in self.bundle.noteboard_entries if isinstance(e, PodcastEntry)]

    def get_entry(self, entry_id: str) -> NoteboardEntry:
        for entry in self.bundle.noteboard_entries:
            if entry.id == entry_id:
                return entry
        raise NotFoundError(f"Unknown noteboard entry: {entry_id}")
