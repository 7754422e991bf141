"""NoteSynth — source-grounded research notes with an AI assistant."""

__version__ = "0.1.0"
