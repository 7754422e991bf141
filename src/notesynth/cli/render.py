"""Rich renderables for sources, chat turns and noteboard entries."""

from __future__ import annotations

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from notesynth.assistant.citations import split_citations
from notesynth.models.noteboard import (
    KeyPeopleEntry,
    NoteboardEntry,
    PodcastEntry,
    QnaEntry,
    SummaryEntry,
    VisualizationEntry,
)
from notesynth.models.source import ChatRole, ChatTurn, Source
from notesynth.utils.timefmt import format_timestamp

console = Console()

CITATION_STYLE = "bold black on cyan"


def citation_text(text: str) -> Text:
    """Highlight ``[Source: "..."]`` markers; leave everything else untouched."""
    out = Text()
    for fragment, is_citation in split_citations(text):
        if is_citation:
            out.append(f" {fragment} ", style=CITATION_STYLE)
        else:
            out.append(fragment)
    return out


def sources_table(sources: list[Source], tz: str) -> Table:
    table = Table(title="Sources", show_lines=True)
    table.add_column("ID", style="dim")
    table.add_column("Active")
    table.add_column("Title", style="bold")
    table.add_column("Keywords")
    table.add_column("Added")
    for s in sources:
        table.add_row(
            s.id,
            "[green]●[/green]" if s.active else "[dim]○[/dim]",
            s.title,
            ", ".join(s.keywords),
            format_timestamp(s.created_at, tz),
        )
    return table


def print_turn(turn: ChatTurn, tz: str) -> None:
    if turn.role is ChatRole.USER:
        console.print(Panel(turn.text, title="You", title_align="right", border_style="blue"))
        return
    style = "red" if turn.failed else "magenta"
    body = Text("…") if turn.pending else citation_text(turn.text)
    console.print(Panel(
        body,
        title="Assistant",
        title_align="left",
        subtitle=None if turn.pending else format_timestamp(turn.timestamp, tz),
        border_style=style,
    ))


def print_entry(entry: NoteboardEntry) -> None:
    header = f"[bold]{entry.title}[/bold] [dim]({entry.id})[/dim]"
    if isinstance(entry, SummaryEntry):
        console.print(Panel(entry.payload, title=header, border_style="cyan"))
    elif isinstance(entry, KeyPeopleEntry):
        table = Table(title=header, show_lines=True)
        table.add_column("Name", style="bold")
        table.add_column("Description")
        for person in entry.payload:
            table.add_row(person.name, person.description)
        console.print(table)
    elif isinstance(entry, QnaEntry):
        lines = Text()
        for item in entry.payload:
            lines.append(f"Q: {item.question}\n", style="bold")
            lines.append(f"A: {item.answer}\n\n")
        console.print(Panel(lines, title=header, border_style="cyan"))
    elif isinstance(entry, VisualizationEntry):
        data = entry.payload.model_dump(mode="json")["data"]
        console.print(Panel(
            json.dumps(data, indent=2, ensure_ascii=False),
            title=header,
            border_style="green",
        ))
    elif isinstance(entry, PodcastEntry):
        console.print(Panel(
            "\n".join(f"[bold]{line.speaker}:[/bold] {line.line}" for line in entry.payload.script),
            title=header,
            border_style="magenta",
        ))
