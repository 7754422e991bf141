"""Source documents and chat turns."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from notesynth.errors import TurnStateError
from notesynth.utils.timefmt import utcnow


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class Source(BaseModel):
    """A document contributed by the user."""

    id: str = Field(default_factory=lambda: new_id("source"))
    title: str
    summary: str = ""
    keywords: list[str] = Field(default_factory=list)
    content: str
    active: bool = True
    created_at: datetime = Field(default_factory=utcnow)


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One message in the dialogue.

    Assistant turns start empty and pending, accumulate streamed text with
    :meth:`append`, and end either finalized or failed.
    """

    id: str = Field(default_factory=lambda: new_id("msg"))
    role: ChatRole
    text: str = ""
    pending: bool = False
    failed: bool = False
    timestamp: datetime = Field(default_factory=utcnow)

    @classmethod
    def user(cls, text: str) -> ChatTurn:
        return cls(role=ChatRole.USER, text=text)

    @classmethod
    def placeholder(cls) -> ChatTurn:
        return cls(role=ChatRole.ASSISTANT, pending=True)

    def append(self, delta: str) -> None:
        if not self.pending:
            raise TurnStateError(f"Turn {self.id} is no longer pending")
        self.text += delta

    def finalize(self) -> None:
        if not self.pending:
            raise TurnStateError(f"Turn {self.id} is no longer pending")
        self.pending = False
        self.timestamp = utcnow()

    def fail(self, message: str) -> None:
        if not self.pending:
            raise TurnStateError(f"Turn {self.id} is no longer pending")
        self.text = f"Error: {message}"
        self.pending = False
        self.failed = True
