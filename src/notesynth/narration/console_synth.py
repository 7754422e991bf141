"""A synthesizer that reads lines aloud on the terminal, paced like speech."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.markup import escape

from notesynth.narration.synth import Outcome, Utterance, UtteranceEvent, Voice

DEFAULT_VOICES = (Voice(name="console", lang="en-US"),)


class ConsoleSynthesizer:
    """Single-threaded synthesizer driven by :meth:`run`.

    ``speak`` only queues; :meth:`run` prints each queued utterance, waits
    for its reading time and reports completion, which lets the player queue
    the next line.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        words_per_minute: int = 170,
        voices: Sequence[Voice] = DEFAULT_VOICES,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.console = console or Console()
        self.words_per_minute = words_per_minute
        self._voices = list(voices)
        self._sleep = sleep
        self._queue: deque[Utterance] = deque()
        self._speaking: Utterance | None = None

    def voices(self) -> Sequence[Voice]:
        return list(self._voices)

    def speak(self, utterance: Utterance) -> None:
        self._queue.append(utterance)

    def cancel(self) -> None:
        cancelled = list(self._queue)
        self._queue.clear()
        if self._speaking is not None:
            cancelled.insert(0, self._speaking)
            self._speaking = None
        for utterance in cancelled:
            utterance.finish(UtteranceEvent(Outcome.CANCELED))

    def wait_for_voices(self, callback: Callable[[], None], timeout: float) -> None:
        # The voice list is static, so there is nothing to wait for.
        callback()

    def reading_time(self, text: str) -> float:
        return len(text.split()) * 60.0 / self.words_per_minute

    def run(self) -> None:
        """Speak queued utterances until the queue drains."""
        while self._queue:
            utterance = self._queue.popleft()
            self._speaking = utterance
            speaker, _, line = utterance.text.partition(": ")
            self.console.print(f"[bold magenta]{escape(speaker)}:[/bold magenta] {escape(line)}")
            self._sleep(self.reading_time(utterance.text))
            if self._speaking is utterance:
                self._speaking = None
                utterance.finish(UtteranceEvent(Outcome.COMPLETED))
