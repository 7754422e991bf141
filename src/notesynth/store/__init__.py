"""Local per-user persistence."""

from notesynth.store.document_store import DocumentStore

__all__ = ["DocumentStore"]
