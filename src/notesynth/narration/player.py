"""Narration player — line-by-line speech playback of a podcast script."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from notesynth.models.config import NarrationConfig
from notesynth.models.podcast import PodcastScript
from notesynth.narration.synth import (
    Outcome,
    Synthesizer,
    Utterance,
    UtteranceEvent,
    select_voice,
)
from notesynth.utils.progress import log_error


class PlayerState(str, Enum):
    IDLE = "idle"
    SPEAKING = "speaking"
    PAUSED = "paused"


@dataclass
class PlaybackState:
    current_index: int = -1
    playing: bool = False
    cursor: int = 0


class NarrationPlayer:
    """Sequences speech for a :class:`PodcastScript`.

    States: IDLE (cursor 0) → SPEAKING(i) → PAUSED (cursor kept on the
    interrupted line) → ... → IDLE once the last line completes. Line ``i + 1``
    is only spoken after line ``i`` reports completion.

    Listeners ``on_line``, ``on_state`` and ``on_error`` are plain callables.
    """

    def __init__(
        self,
        synthesizer: Synthesizer,
        script: PodcastScript | None = None,
        config: NarrationConfig | None = None,
    ) -> None:
        self.synthesizer = synthesizer
        self.config = config or NarrationConfig()
        self.script = script
        self.playback = PlaybackState()
        self.state = PlayerState.IDLE
        self.last_error: str | None = None
        self.on_line: Callable[[int], None] | None = None
        self.on_state: Callable[[PlayerState], None] | None = None
        self.on_error: Callable[[str], None] | None = None
        self._current: Utterance | None = None
        self._voice_wait: object | None = None

    @property
    def current_index(self) -> int:
        return self.playback.current_index

    @property
    def cursor(self) -> int:
        return self.playback.cursor

    @property
    def is_playing(self) -> bool:
        return self.playback.playing

    def load(self, script: PodcastScript) -> None:
        """Switch scripts; any in-flight speech is cancelled."""
        self._stop()
        self.script = script
        self.playback = PlaybackState()
        self.last_error = None
        self._set_state(PlayerState.IDLE)

    def close(self) -> None:
        self._stop()
        self.playback = PlaybackState()
        self._set_state(PlayerState.IDLE)

    def toggle(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def play(self) -> None:
        if self.state is PlayerState.SPEAKING or self._voice_wait is not None:
            return
        if self.script is None or not self.script.script:
            return
        self.last_error = None
        self.playback.playing = True
        if not self.synthesizer.voices():
            token = self._voice_wait = object()
            self.synthesizer.wait_for_voices(
                lambda: self._voices_ready(token), self.config.voice_timeout_seconds
            )
            return
        self._speak(self.playback.cursor)

    def pause(self) -> None:
        """Stop immediately; the interrupted line restarts on the next play()."""
        if not self.playback.playing:
            return
        self._stop()
        self.playback.playing = False
        self._set_state(PlayerState.PAUSED)

    def handle_event(self, utterance: Utterance, event: UtteranceEvent) -> None:
        if utterance is not self._current:
            return  # stale: cancelled or superseded
        if event.is_cancellation:
            return
        self._current = None

        if event.outcome is Outcome.ERROR:
            self.playback.playing = False
            self.last_error = event.message or "Speech synthesis failed"
            self._set_state(PlayerState.PAUSED)
            log_error(
                f"Narration stopped at line {self.playback.cursor + 1}: {self.last_error}"
            )
            if self.on_error:
                self.on_error(self.last_error)
            return

        next_index = self.playback.cursor + 1
        if next_index >= len(self.script.script):
            self.playback = PlaybackState()
            self._set_state(PlayerState.IDLE)
            return
        self.playback.cursor = next_index
        self._speak(next_index)

    def _voices_ready(self, token: object) -> None:
        if token is not self._voice_wait:
            return
        self._voice_wait = None
        if self.playback.playing and self.state is not PlayerState.SPEAKING:
            self._speak(self.playback.cursor)

    def _speak(self, index: int) -> None:
        line = self.script.script[index]
        self.playback.cursor = index
        self.playback.current_index = index
        self._set_state(PlayerState.SPEAKING)
        if self.on_line:
            self.on_line(index)

        voice = select_voice(self.synthesizer.voices(), self.config.preferred_locale)
        utterance = Utterance(line.spoken_text, voice=voice, on_end=self.handle_event)
        self._current = utterance
        self.synthesizer.speak(utterance)

    def _stop(self) -> None:
        self._voice_wait = None
        if self._current is not None:
            self._current = None
            self.synthesizer.cancel()

    def _set_state(self, state: PlayerState) -> None:
        if state is self.state:
            return
        self.state = state
        if self.on_state:
            self.on_state(state)
