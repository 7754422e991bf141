"""Citation markers of the form ``[Source: "<title>"]``."""

from __future__ import annotations

import re
from collections.abc import Iterable

CITATION_RE = re.compile(r'\[Source: "(.*?)"\]')


def format_citation(title: str) -> str:
    return f'[Source: "{title}"]'


def find_citations(text: str) -> list[str]:
    """Return cited titles in order of appearance."""
    return CITATION_RE.findall(text)


def split_citations(text: str) -> list[tuple[str, bool]]:
    """Split text into ``(fragment, is_citation)`` pairs for rendering.

    Citation fragments carry the bare title; all other text is returned untouched.
    """
    parts: list[tuple[str, bool]] = []
    pos = 0
    for match in CITATION_RE.finditer(text):
        if match.start() > pos:
            parts.append((text[pos:match.start()], False))
        parts.append((match.group(1), True))
        pos = match.end()
    if pos < len(text):
        parts.append((text[pos:], False))
    return parts


def unknown_citations(text: str, titles: Iterable[str]) -> list[str]:
    """Cited titles that do not belong to ``titles``."""
    known = set(titles)
    return [t for t in find_citations(text) if t not in known]
