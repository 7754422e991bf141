"""Grounding context — the active sources an answer may draw on."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from dataclasses import dataclass

from notesynth.models.source import Source

REFUSAL = "I could not find an answer to that in the provided sources."

SYSTEM_PROMPT = """You are a helpful research assistant called {name}. Your goal is to \
answer the user's questions based *exclusively* on the information contained in the \
provided sources. Do not use any external knowledge.

When you use information from a source, you MUST cite it at the end of the sentence \
like this: [Source: "Source Title"], using the exact title of the source.

If the answer cannot be found in the sources, you must state: "{refusal}"

Here are the available sources:
{sources}"""

NO_SOURCES = "(no sources are currently active)"


def render_sources(sources: Iterable[Source]) -> str:
    """Render sources as delimited, title-labelled blocks."""
    return "\n\n".join(f'--- SOURCE: "{s.title}" ---\n{s.content}' for s in sources)


@dataclass(frozen=True)
class GroundingContext:
    """Snapshot of the active sources at the moment a turn begins."""

    sources: tuple[Source, ...]

    @classmethod
    def from_sources(cls, sources: Iterable[Source]) -> GroundingContext:
        return cls(tuple(s for s in sources if s.active))

    @property
    def is_empty(self) -> bool:
        return not self.sources

    @property
    def titles(self) -> list[str]:
        return [s.title for s in self.sources]

    @property
    def text(self) -> str:
        return render_sources(self.sources)

    @property
    def fingerprint(self) -> str:
        h = hashlib.sha256()
        for s in self.sources:
            for part in (s.id, s.title, s.content):
                h.update(part.encode("utf-8"))
                h.update(b"\x00")
        return h.hexdigest()

    def system_instruction(self, assistant_name: str = "NOTESYNTH") -> str:
        return SYSTEM_PROMPT.format(
            name=assistant_name,
            refusal=REFUSAL,
            sources=self.text or NO_SOURCES,
        )
