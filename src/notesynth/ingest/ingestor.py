"""Turn pasted text and uploaded files into sources."""

from __future__ import annotations

import base64
from pathlib import Path

import mammoth
from pydantic import BaseModel, Field, field_validator

from notesynth.backend.base import Attachment, InsightBackend
from notesynth.errors import ExtractionError
from notesynth.ingest.sniff import InputKind, classify
from notesynth.models.source import Source
from notesynth.utils.progress import log_step

SUMMARY_PROMPT = """Analyze the following text and provide a concise "title" (max 7 words), \
a one-paragraph "summary", and up to 5 relevant "keywords".

TEXT:
{content}"""

DOCUMENT_PROMPT = """Analyze the provided document. Your task is to extract its full text \
content and generate metadata: a concise "title" (max 7 words), a one-paragraph \
"summary" of the document's content, up to 5 "keywords", and "content" holding the \
complete, raw text extracted from the document. All characters inside "content", such \
as quotes, backslashes and newlines, MUST be correctly escaped to form a valid JSON string."""

MAX_KEYWORDS = 5


class SourceDigest(BaseModel):
    title: str
    summary: str
    keywords: list[str] = Field(default_factory=list)

    @field_validator("keywords")
    @classmethod
    def _cap_keywords(cls, keywords: list[str]) -> list[str]:
        return keywords[:MAX_KEYWORDS]


class ExtractedDocument(SourceDigest):
    content: str


class SourceIngestor:
    def __init__(self, backend: InsightBackend) -> None:
        self.backend = backend

    def from_text(self, content: str) -> Source:
        if not content.strip():
            raise ExtractionError("Could not extract text from the source.")
        log_step("Source", f"Summarizing {len(content.split())} words of text")
        digest = self.backend.extract(SUMMARY_PROMPT.format(content=content), SourceDigest)
        return Source(
            title=digest.title,
            summary=digest.summary,
            keywords=digest.keywords,
            content=content,
        )

    def from_file(self, path: Path | str, mime_type: str | None = None) -> Source:
        path = Path(path)
        kind, mime = classify(path, mime_type)
        log_step("Source", f"Reading {path.name} ({kind.value})")

        if kind is InputKind.DOCX:
            with open(path, "rb") as f:
                return self.from_text(mammoth.extract_raw_text(f).value)
        if kind is InputKind.TEXT:
            return self.from_text(path.read_text(encoding="utf-8", errors="replace"))

        data = base64.b64encode(path.read_bytes()).decode("ascii")
        if not data:
            raise ExtractionError("Could not read file data.")
        doc = self.backend.extract_multimodal(
            DOCUMENT_PROMPT, Attachment(mime_type=mime, base64_data=data), ExtractedDocument
        )
        if not doc.content.strip():
            raise ExtractionError("Could not extract text from the file.")
        return Source(
            title=doc.title,
            summary=doc.summary,
            keywords=doc.keywords,
            content=doc.content,
        )
