"""Podcast narration."""

from notesynth.narration.player import NarrationPlayer, PlaybackState, PlayerState
from notesynth.narration.synth import Outcome, Synthesizer, Utterance, UtteranceEvent, Voice

__all__ = [
    "NarrationPlayer",
    "Outcome",
    "PlaybackState",
    "PlayerState",
    "Synthesizer",
    "Utterance",
    "UtteranceEvent",
    "Voice",
]
