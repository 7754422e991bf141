"""Noteboard artifact generation."""

from notesynth.noteboard.assembler import NoteboardAssembler

__all__ = ["NoteboardAssembler"]
