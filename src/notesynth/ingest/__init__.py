"""Source ingestion."""

from notesynth.ingest.ingestor import SourceIngestor

__all__ = ["SourceIngestor"]
