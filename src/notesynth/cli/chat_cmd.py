"""notesynth ask / history — talk to the source-grounded assistant."""

from __future__ import annotations

import click

from notesynth.assistant.citations import find_citations, format_citation, unknown_citations
from notesynth.assistant.grounding import GroundingContext
from notesynth.cli.common import AppContext, pass_app, reported_errors
from notesynth.cli.render import citation_text, console, print_turn
from notesynth.utils.progress import log_error, log_warning


@click.command()
@click.argument("question", nargs=-1, required=True)
@pass_app
def ask_cmd(app: AppContext, question: tuple[str, ...]) -> None:
    """Ask a question answered only from the active sources."""
    with reported_errors():
        notebook = app.open_notebook()
        if not notebook.has_active_sources:
            log_warning("No active sources — the assistant can only refuse.")
        titles = GroundingContext.from_sources(notebook.bundle.sources).titles

        reply = notebook.send_message(
            " ".join(question),
            on_delta=lambda delta: console.print(delta, end="", markup=False, highlight=False),
        )
        console.print()
        notebook.close()

    if reply.failed:
        raise SystemExit(1)

    cited = find_citations(reply.text)
    if cited:
        console.print(citation_text(" ".join(format_citation(t) for t in dict.fromkeys(cited))))
    stray = unknown_citations(reply.text, titles)
    if stray:
        log_error(f"Answer cites sources that are not active: {', '.join(stray)}")


@click.command()
@click.option("--limit", "-n", default=20, show_default=True, help="Number of turns to show")
@pass_app
def history_cmd(app: AppContext, limit: int) -> None:
    """Show recent chat turns."""
    bundle = app.store.load(app.require_user())
    if not bundle.chat_history:
        click.echo("No conversation yet.")
        return
    for turn in bundle.chat_history[-limit:]:
        print_turn(turn, app.config.store.display_timezone)
