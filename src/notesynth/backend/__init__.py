"""Insight backend capability and implementations."""

from notesynth.backend.base import Attachment, DialogueHandle, InsightBackend

__all__ = ["Attachment", "DialogueHandle", "InsightBackend"]
