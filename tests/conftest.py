"""Shared fixtures and test doubles for notesynth tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import pytest

from notesynth.errors import StreamingError
from notesynth.models.podcast import PodcastLine, PodcastScript
from notesynth.models.source import ChatTurn, Source
from notesynth.narration.synth import Outcome, Utterance, UtteranceEvent, Voice
from notesynth.store.document_store import DocumentStore


class FakeDialogue:
    def __init__(self, system_instruction: str, fragments: list[str], fail_after: int | None):
        self.system_instruction = system_instruction
        self.fragments = fragments
        self.fail_after = fail_after
        self.sent: list[str] = []

    def send_streaming(self, message: str) -> Iterator[str]:
        self.sent.append(message)
        for i, fragment in enumerate(self.fragments):
            if self.fail_after is not None and i >= self.fail_after:
                raise StreamingError("connection reset")
            yield fragment


class FakeBackend:
    """Records every call; replies from canned values."""

    def __init__(self) -> None:
        self.fragments: list[str] = ["ok"]
        self.fail_after: int | None = None
        self.echo_refusal = False
        self.extract_results: list[Any] = []
        self.extract_calls: list[tuple[str, Any]] = []
        self.multimodal_calls: list[tuple[str, Any, Any]] = []
        self.instructions: list[str] = []
        self.histories: list[Sequence[ChatTurn]] = []
        self.dialogues: list[FakeDialogue] = []

    def extract(self, prompt: str, shape: Any) -> Any:
        self.extract_calls.append((prompt, shape))
        return self.extract_results.pop(0)

    def extract_multimodal(self, prompt: str, attachment: Any, shape: Any) -> Any:
        self.multimodal_calls.append((prompt, attachment, shape))
        return self.extract_results.pop(0)

    def create_dialogue(self, system_instruction: str, history: Sequence[ChatTurn] = ()):
        self.instructions.append(system_instruction)
        self.histories.append(history)
        fragments = self.fragments
        if self.echo_refusal:
            # Answer with the refusal sentence quoted in the instruction.
            fragments = [system_instruction.split('you must state: "')[1].split('"')[0]]
        dialogue = FakeDialogue(system_instruction, list(fragments), self.fail_after)
        self.dialogues.append(dialogue)
        return dialogue


class FakeSynthesizer:
    """Holds utterances until the test finishes them."""

    def __init__(self, voices: Sequence[Voice] = (Voice("Samantha", "en-US"),)) -> None:
        self._voices = list(voices)
        self.spoken: list[Utterance] = []
        self.cancel_count = 0
        self.voice_waiters: list[tuple[Any, float]] = []

    def voices(self) -> Sequence[Voice]:
        return list(self._voices)

    def speak(self, utterance: Utterance) -> None:
        self.spoken.append(utterance)

    def cancel(self) -> None:
        self.cancel_count += 1

    def wait_for_voices(self, callback, timeout: float) -> None:
        self.voice_waiters.append((callback, timeout))

    # --- test helpers ---

    @property
    def last(self) -> Utterance:
        return self.spoken[-1]

    def complete(self) -> None:
        self.last.finish(UtteranceEvent(Outcome.COMPLETED))

    def load_voices(self, voices: Sequence[Voice]) -> None:
        self._voices = list(voices)
        waiters, self.voice_waiters = self.voice_waiters, []
        for callback, _ in waiters:
            callback()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def synth() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def source_a() -> Source:
    return Source(
        id="source-a",
        title="Coral Reefs",
        summary="Reef ecology.",
        keywords=["reef", "ocean"],
        content="Coral reefs cover less than one percent of the ocean floor.",
    )


@pytest.fixture
def source_b() -> Source:
    return Source(
        id="source-b",
        title="Deep Sea Vents",
        summary="Hydrothermal vents.",
        keywords=["vents"],
        content="Hydrothermal vents support chemosynthetic life.",
    )


@pytest.fixture
def script() -> PodcastScript:
    return PodcastScript(
        title="Reefs in Ten Minutes",
        script=(
            PodcastLine(speaker="Host", line="Welcome to the show."),
            PodcastLine(speaker="Expert", line="Reefs are fragile."),
            PodcastLine(speaker="Host", line="Thanks for listening."),
        ),
    )


@pytest.fixture
def store(tmp_path) -> DocumentStore:
    return DocumentStore(tmp_path / "home")


@pytest.fixture
def silent_synth() -> FakeSynthesizer:
    """A synthesizer whose voice list has not loaded yet."""
    return FakeSynthesizer(voices=())
