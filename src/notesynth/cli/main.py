"""Root CLI group for NoteSynth."""

from __future__ import annotations

import click

from notesynth import __version__


@click.group()
@click.version_option(version=__version__, prog_name="notesynth")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to notesynth.yaml (defaults to the data directory)",
)
@click.option(
    "--data-dir",
    default=None,
    type=click.Path(file_okay=False),
    envvar="NOTESYNTH_HOME",
    help="Directory holding accounts and notebooks",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, data_dir: str | None) -> None:
    """NoteSynth — chat with your sources and build a noteboard."""
    from notesynth.cli.common import AppContext

    ctx.obj = AppContext(config_path=config_path, data_dir=data_dir)


# Import and register subcommands
from notesynth.cli.auth_cmd import login_cmd, logout_cmd, register_cmd, whoami_cmd  # noqa: E402
from notesynth.cli.chat_cmd import ask_cmd, history_cmd  # noqa: E402
from notesynth.cli.noteboard_cmd import noteboard_cmd  # noqa: E402
from notesynth.cli.podcast_cmd import podcast_cmd  # noqa: E402
from notesynth.cli.source_cmd import source_cmd  # noqa: E402

cli.add_command(register_cmd, "register")
cli.add_command(login_cmd, "login")
cli.add_command(logout_cmd, "logout")
cli.add_command(whoami_cmd, "whoami")
cli.add_command(source_cmd, "source")
cli.add_command(ask_cmd, "ask")
cli.add_command(history_cmd, "history")
cli.add_command(noteboard_cmd, "noteboard")
cli.add_command(podcast_cmd, "podcast")
