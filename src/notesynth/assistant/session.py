"""Assistant session — one live dialogue handle bound to the active sources."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum

from notesynth.assistant.grounding import GroundingContext
from notesynth.backend.base import DialogueHandle, InsightBackend
from notesynth.errors import BackendError, SessionBusyError, StreamingError
from notesynth.models.config import AssistantConfig
from notesynth.models.source import ChatTurn, Source
from notesynth.utils.progress import log_step, log_warning


class SessionState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class AssistantSession:
    """Mediates between the chat and the insight backend.

    Rebuild policies:

    - ``always``: every :meth:`ask` discards the handle and builds a new one
      from the current active sources, so an answer is never produced against
      a stale source set. Costs one fresh dialogue per question.
    - ``fingerprint``: the handle is reused while the active-source fingerprint
      is unchanged and rebuilt when it differs.

    Overlapping questions are rejected with :class:`SessionBusyError`.
    """

    def __init__(
        self,
        backend: InsightBackend,
        config: AssistantConfig | None = None,
    ) -> None:
        self.backend = backend
        self.config = config or AssistantConfig()
        self._handle: DialogueHandle | None = None
        self._fingerprint: str | None = None
        self._streaming = False
        self._closed = False

    @property
    def state(self) -> SessionState:
        return SessionState.BOUND if self._handle is not None else SessionState.UNBOUND

    @property
    def fingerprint(self) -> str | None:
        return self._fingerprint

    @property
    def busy(self) -> bool:
        return self._streaming

    def ask(
        self,
        history: Sequence[ChatTurn],
        sources: Sequence[Source],
        question: str,
    ) -> Iterator[str]:
        """Send ``question`` and return an iterator of answer fragments.

        The handle is (re)bound eagerly; fragments are produced lazily as the
        iterator is consumed. A failure while streaming raises
        :class:`StreamingError` and leaves the session unbound.
        """
        if self._closed:
            raise BackendError("The assistant session has been closed")
        if self._streaming:
            raise SessionBusyError("An answer is still streaming; wait for it to finish")

        context = GroundingContext.from_sources(sources)
        handle = self._bind(context, history)
        return self._relay(handle, question)

    def reset(self) -> None:
        """Drop the dialogue handle."""
        self._handle = None
        self._fingerprint = None

    def close(self) -> None:
        self.reset()
        self._closed = True

    def _bind(
        self, context: GroundingContext, history: Sequence[ChatTurn]
    ) -> DialogueHandle:
        fp = context.fingerprint
        if (
            self.config.rebuild_policy == "fingerprint"
            and self._handle is not None
            and self._fingerprint == fp
        ):
            return self._handle

        self.reset()
        seed = history if self.config.forward_history else ()
        log_step(
            "Assistant",
            f"Binding dialogue to {len(context.sources)} active source(s)",
        )
        self._handle = self.backend.create_dialogue(
            context.system_instruction(self.config.name), history=seed
        )
        self._fingerprint = fp
        return self._handle

    def _relay(self, handle: DialogueHandle, question: str) -> Iterator[str]:
        if self._streaming:
            raise SessionBusyError("An answer is still streaming; wait for it to finish")
        self._streaming = True
        try:
            for delta in handle.send_streaming(question):
                if delta:
                    yield delta
        except StreamingError:
            self._unbind_after_failure(handle)
            raise
        except BackendError as e:
            self._unbind_after_failure(handle)
            raise StreamingError(str(e)) from e
        finally:
            self._streaming = False

    def _unbind_after_failure(self, handle: DialogueHandle) -> None:
        log_warning("Assistant stream failed; the next question will rebuild the dialogue")
        if self._handle is handle:
            self.reset()
