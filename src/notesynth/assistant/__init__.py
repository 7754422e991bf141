"""Source-grounded assistant."""

from notesynth.assistant.grounding import REFUSAL, GroundingContext
from notesynth.assistant.session import AssistantSession, SessionState

__all__ = ["REFUSAL", "AssistantSession", "GroundingContext", "SessionState"]
