"""notesynth podcast — narrate podcast scripts from the noteboard."""

from __future__ import annotations

import click

from notesynth.cli.common import AppContext, pass_app
from notesynth.cli.render import console
from notesynth.models.noteboard import PodcastEntry
from notesynth.narration.console_synth import ConsoleSynthesizer
from notesynth.narration.player import NarrationPlayer
from notesynth.utils.progress import log, log_error, log_step, log_success


@click.group()
def podcast_cmd() -> None:
    """Podcast playback."""


@podcast_cmd.command("list")
@pass_app
def list_podcasts(app: AppContext) -> None:
    """List podcast entries."""
    bundle = app.store.load(app.require_user())
    podcasts = [e for e in bundle.noteboard_entries if isinstance(e, PodcastEntry)]
    if not podcasts:
        click.echo("No podcasts yet. Run `notesynth noteboard podcast`.")
        return
    for entry in podcasts:
        click.echo(f"{entry.id}  {entry.title}  ({len(entry.payload.script)} lines)")


@podcast_cmd.command("play")
@click.argument("entry_id", required=False)
@pass_app
def play(app: AppContext, entry_id: str | None) -> None:
    """Narrate a podcast (latest by default). Ctrl-C pauses."""
    bundle = app.store.load(app.require_user())
    podcasts = [e for e in bundle.noteboard_entries if isinstance(e, PodcastEntry)]
    if entry_id:
        podcasts = [e for e in podcasts if e.id == entry_id]
    if not podcasts:
        log_error("No matching podcast found.")
        raise SystemExit(1)
    entry = podcasts[-1]
    total = len(entry.payload.script)

    config = app.config.narration
    synth = ConsoleSynthesizer(console, words_per_minute=config.words_per_minute)
    player = NarrationPlayer(synth, entry.payload, config)
    player.on_line = lambda i: log_step("Podcast", f"Line {i + 1}/{total}")

    log(f"[bold]{entry.title}[/bold]")
    player.play()
    try:
        while True:
            try:
                synth.run()
            except KeyboardInterrupt:
                player.pause()
                console.print()
                if not click.confirm(f"Paused at line {player.cursor + 1}. Resume?", default=True):
                    return
                player.play()
                continue
            break
    finally:
        player.close()

    if player.last_error:
        raise SystemExit(1)
    log_success("Playback finished")
