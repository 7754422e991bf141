"""File-type routing for uploaded sources."""

from __future__ import annotations

import mimetypes
from enum import Enum
from pathlib import Path

from notesynth.errors import UnsupportedInputError

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIMES = {"text/csv", "application/msword", "application/json"}
TEXT_SUFFIXES = {".csv", ".doc", ".txt", ".md", ".markdown", ".json"}


class InputKind(str, Enum):
    DOCX = "docx"  # text extracted locally with mammoth
    TEXT = "text"  # read as-is
    MULTIMODAL = "multimodal"  # sent to the backend as an attachment


def guess_mime(path: Path) -> str:
    if path.suffix.lower() == ".md":
        return "text/markdown"
    mime, _ = mimetypes.guess_type(path.name)
    return mime or "application/octet-stream"


def classify(path: Path | str, mime_type: str | None = None) -> tuple[InputKind, str]:
    """Decide how a file is turned into source text."""
    path = Path(path)
    mime = (mime_type or guess_mime(path)).lower()
    suffix = path.suffix.lower()

    if mime == DOCX_MIME or suffix == ".docx":
        return InputKind.DOCX, DOCX_MIME
    if mime in TEXT_MIMES or suffix in TEXT_SUFFIXES or mime.startswith("text/"):
        return InputKind.TEXT, mime
    if mime == "application/pdf" or mime.startswith("image/"):
        return InputKind.MULTIMODAL, mime
    raise UnsupportedInputError(f"Unsupported file type: {path.name} ({mime})")
