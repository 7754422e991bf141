"""notesynth source — add, list, toggle and delete sources."""

from __future__ import annotations

import click

from notesynth.cli.common import AppContext, pass_app, reported_errors
from notesynth.cli.render import console, sources_table
from notesynth.utils.progress import log_success, show_details
from notesynth.utils.timefmt import format_timestamp


@click.group()
def source_cmd() -> None:
    """Manage the sources the assistant may draw on."""


@source_cmd.command("add-text")
@click.argument("text", required=False)
@click.option(
    "--from-file", "from_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Read the text from a file ('-' for stdin)",
)
@pass_app
def add_text(app: AppContext, text: str | None, from_file) -> None:
    """Add pasted text as a source."""
    content = from_file.read() if from_file else text
    if not content:
        raise click.UsageError("Provide TEXT or --from-file")
    with reported_errors():
        notebook = app.open_notebook()
        source = notebook.add_text(content)
    click.echo(source.id)


@source_cmd.command("add-file")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--mime-type", default=None, help="Override the detected MIME type")
@pass_app
def add_file(app: AppContext, path: str, mime_type: str | None) -> None:
    """Upload a document (PDF, image, DOCX, CSV, text) as a source."""
    with reported_errors():
        notebook = app.open_notebook()
        source = notebook.add_file(path, mime_type)
    click.echo(source.id)


@source_cmd.command("list")
@pass_app
def list_sources(app: AppContext) -> None:
    """List sources, newest first."""
    bundle = app.store.load(app.require_user())
    if not bundle.sources:
        click.echo("No sources yet. Add one with `notesynth source add-text`.")
        return
    console.print(sources_table(bundle.sources, app.config.store.display_timezone))


@source_cmd.command("show")
@click.argument("source_id")
@pass_app
def show_source(app: AppContext, source_id: str) -> None:
    """Show a source's summary and metadata."""
    bundle = app.store.load(app.require_user())
    source = bundle.find_source(source_id)
    if source is None:
        raise click.BadParameter(f"Unknown source: {source_id}")
    show_details(source.title, {
        "ID": source.id,
        "Active": "yes" if source.active else "no",
        "Added": format_timestamp(source.created_at, app.config.store.display_timezone),
        "Keywords": ", ".join(source.keywords),
        "Summary": source.summary,
        "Length": f"{len(source.content.split())} words",
    })


@source_cmd.command("toggle")
@click.argument("source_id")
@pass_app
def toggle(app: AppContext, source_id: str) -> None:
    """Include or exclude a source from the grounding context."""
    with reported_errors():
        notebook = app.open_notebook()
        source = notebook.toggle_source(source_id)
    log_success(f"{source.title}: {'active' if source.active else 'inactive'}")


@source_cmd.command("delete")
@click.argument("source_id")
@click.confirmation_option(prompt="Delete this source?")
@pass_app
def delete(app: AppContext, source_id: str) -> None:
    """Remove a source permanently."""
    with reported_errors():
        notebook = app.open_notebook()
        source = notebook.delete_source(source_id)
    log_success(f"Deleted {source.title}")
