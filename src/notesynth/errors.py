"""Exception hierarchy for NoteSynth."""

from __future__ import annotations


class NotesynthError(Exception):
    """Base class for all recoverable NoteSynth errors."""


class BackendError(NotesynthError):
    """Raised when the insight backend is unavailable or fails."""


class ExtractionError(BackendError):
    """Raised when a structured extraction returns malformed or non-conforming output."""


class UnsupportedInputError(BackendError):
    """Raised when a file type cannot be processed."""


class StreamingError(BackendError):
    """Raised when a streamed answer terminates abnormally."""


class SessionBusyError(NotesynthError):
    """Raised when a question is asked while another answer is still streaming."""


class TurnStateError(NotesynthError):
    """Raised when a finalized chat turn is mutated."""


class AuthError(NotesynthError):
    """Raised for failed registration, login or verification."""


class NotFoundError(NotesynthError):
    """Raised when a source or noteboard entry id does not exist."""
