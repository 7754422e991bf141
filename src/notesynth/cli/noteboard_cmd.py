"""notesynth noteboard — generate and show derived artifacts."""

from __future__ import annotations

import click
from rich.table import Table

from notesynth.cli.common import AppContext, pass_app, reported_errors
from notesynth.cli.render import console, print_entry
from notesynth.models.noteboard import VisualizationType
from notesynth.utils.progress import log_success

VIZ_CHOICES = {v.name.lower().replace("_", "-"): v for v in VisualizationType}


@click.group()
def noteboard_cmd() -> None:
    """Summaries, key people, Q&A, visualizations and podcasts."""


@noteboard_cmd.command("generate")
@pass_app
def generate(app: AppContext) -> None:
    """Regenerate the noteboard from the active sources."""
    with reported_errors():
        notebook = app.open_notebook()
        entries = notebook.generate_noteboard()
    for entry in entries:
        print_entry(entry)
    _print_suggestions(notebook.bundle.suggested_visualizations)


@noteboard_cmd.command("show")
@click.argument("entry_id", required=False)
@pass_app
def show(app: AppContext, entry_id: str | None) -> None:
    """Show all noteboard entries, or one by id."""
    bundle = app.store.load(app.require_user())
    entries = bundle.noteboard_entries
    if entry_id:
        entries = [e for e in entries if e.id == entry_id]
        if not entries:
            raise click.BadParameter(f"Unknown noteboard entry: {entry_id}")
    if not entries:
        click.echo("The noteboard is empty. Run `notesynth noteboard generate`.")
        return
    for entry in entries:
        print_entry(entry)
    if not entry_id:
        _print_suggestions(bundle.suggested_visualizations)


@noteboard_cmd.command("viz")
@click.argument("viz_type", type=click.Choice(sorted(VIZ_CHOICES)))
@pass_app
def viz(app: AppContext, viz_type: str) -> None:
    """Generate a visualization payload."""
    with reported_errors():
        notebook = app.open_notebook()
        entry = notebook.generate_visualization(VIZ_CHOICES[viz_type])
    print_entry(entry)


@noteboard_cmd.command("podcast")
@pass_app
def podcast(app: AppContext) -> None:
    """Write a multi-speaker podcast script."""
    with reported_errors():
        notebook = app.open_notebook()
        entry = notebook.generate_podcast()
    print_entry(entry)
    log_success(f"Play it with `notesynth podcast play {entry.id}`")


def _print_suggestions(suggestions) -> None:
    if not suggestions:
        return
    table = Table(title="Suggested Visualizations", show_lines=True)
    table.add_column("Command", style="bold cyan")
    table.add_column("Rationale")
    names = {v: k for k, v in VIZ_CHOICES.items()}
    for s in suggestions:
        table.add_row(f"noteboard viz {names[s.type]}", s.rationale)
    console.print(table)
