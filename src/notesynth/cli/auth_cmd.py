"""notesynth register / login / logout / whoami — simulated accounts."""

from __future__ import annotations

import click

from notesynth.cli.common import AppContext, pass_app, reported_errors
from notesynth.store.document_store import DEMO_OTP
from notesynth.utils.progress import log, log_error, log_success


@click.command()
@click.option("--email", prompt=True, help="Account email")
@click.password_option(help="Account password")
@pass_app
def register_cmd(app: AppContext, email: str, password: str) -> None:
    """Create an account (verified with a demo one-time code)."""
    with reported_errors():
        if not app.store.register(email, password):
            log_error("An account with this email already exists.")
            raise SystemExit(1)

    log(f"Your verification code is: [bold]{DEMO_OTP}[/bold]")
    code = click.prompt("Enter OTP")
    if not app.store.verify_otp(code):
        log_error("Invalid OTP. Please try again with `notesynth login`.")
        raise SystemExit(1)
    log_success("Verification successful! You can now log in.")


@click.command()
@click.option("--email", prompt=True, help="Account email")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@pass_app
def login_cmd(app: AppContext, email: str, password: str) -> None:
    """Log in and make this account current."""
    store = app.store
    if not store.login(email, password):
        log_error("Invalid credentials. Please try again.")
        raise SystemExit(1)
    store.set_current_user(email)
    log_success(f"Logged in as {email}")


@click.command()
@pass_app
def logout_cmd(app: AppContext) -> None:
    """Forget the current account."""
    app.store.clear_current_user()
    log_success("Logged out")


@click.command()
@pass_app
def whoami_cmd(app: AppContext) -> None:
    """Show the current account."""
    click.echo(app.require_user())
