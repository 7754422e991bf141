"""Protocols for the generative insight backend."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel

from notesynth.models.source import ChatTurn

T = TypeVar("T")


class Attachment(BaseModel):
    """A binary payload sent alongside a multimodal extraction prompt."""

    mime_type: str
    base64_data: str


class DialogueHandle(Protocol):
    """A stateful dialogue primed with a system instruction."""

    system_instruction: str

    def send_streaming(self, message: str) -> Iterator[str]: ...


class InsightBackend(Protocol):
    """Protocol that all insight backends must implement.

    ``shape`` is any type understood by :class:`pydantic.TypeAdapter`; the
    returned value is validated against it.
    """

    def extract(self, prompt: str, shape: type[T] | Any) -> T: ...

    def extract_multimodal(
        self, prompt: str, attachment: Attachment, shape: type[T] | Any
    ) -> T: ...

    def create_dialogue(
        self, system_instruction: str, history: Sequence[ChatTurn] = ()
    ) -> DialogueHandle: ...
