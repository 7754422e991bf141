"""Speech synthesizer protocol and utterance events."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Protocol

_utterance_ids = count(1)


class Outcome(str, Enum):
    COMPLETED = "completed"
    CANCELED = "canceled"
    INTERRUPTED = "interrupted"
    ERROR = "error"


@dataclass(frozen=True)
class Voice:
    name: str
    lang: str


@dataclass(frozen=True)
class UtteranceEvent:
    """The single notification a synthesizer sends when an utterance ends."""

    outcome: Outcome
    message: str = ""

    @property
    def is_cancellation(self) -> bool:
        return self.outcome in (Outcome.CANCELED, Outcome.INTERRUPTED)


@dataclass
class Utterance:
    text: str
    voice: Voice | None = None
    on_end: Callable[[Utterance, UtteranceEvent], None] | None = None
    id: int = field(default_factory=lambda: next(_utterance_ids))

    def finish(self, event: UtteranceEvent) -> None:
        if self.on_end is not None:
            self.on_end(self, event)


class Synthesizer(Protocol):
    """Protocol for speech backends driven by :class:`NarrationPlayer`.

    ``speak`` queues an utterance and must later call ``utterance.finish``
    exactly once. ``cancel`` stops the in-flight utterance; the synthesizer
    may report it as canceled or interrupted at any later point.
    ``wait_for_voices`` calls ``callback`` once, when voices become available
    or after ``timeout`` seconds, whichever is first.
    """

    def voices(self) -> Sequence[Voice]: ...

    def speak(self, utterance: Utterance) -> None: ...

    def cancel(self) -> None: ...

    def wait_for_voices(self, callback: Callable[[], None], timeout: float) -> None: ...


def select_voice(voices: Sequence[Voice], preferred_locale: str = "en-US") -> Voice | None:
    """Prefer an exact locale match, then the same language, then the first voice."""
    if not voices:
        return None
    language = preferred_locale.split("-")[0]
    for prefix in (preferred_locale, language):
        for voice in voices:
            if voice.lang.replace("_", "-").startswith(prefix):
                return voice
    return voices[0]
