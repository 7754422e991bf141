"""Shared CLI state: configuration, store and the logged-in notebook."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from pydantic import ValidationError

from notesynth.backend.anthropic_backend import AnthropicBackend
from notesynth.errors import NotesynthError
from notesynth.models.config import AppConfig
from notesynth.notebook import Notebook
from notesynth.store.document_store import DocumentStore, default_data_dir
from notesynth.utils.io import read_yaml
from notesynth.utils.progress import log_error

CONFIG_FILE = "notesynth.yaml"


def load_config(path: Path) -> AppConfig:
    """Load configuration from YAML; a missing file yields defaults."""
    if not path.exists():
        return AppConfig()
    return AppConfig(**read_yaml(path))


class AppContext:
    def __init__(self, *, config_path: str | None = None, data_dir: str | None = None):
        self._config_path = config_path
        self._data_dir = data_dir
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            if self._config_path:
                path = Path(self._config_path)
            else:
                path = Path(self._data_dir or default_data_dir()) / CONFIG_FILE
            try:
                self._config = load_config(path)
            except ValidationError as e:
                log_error(f"Invalid configuration in {path}: {e}")
                raise SystemExit(1)
        return self._config

    @property
    def data_dir(self) -> Path:
        if self._data_dir:
            return Path(self._data_dir)
        if self.config.store.data_dir:
            return Path(self.config.store.data_dir).expanduser()
        return default_data_dir()

    @property
    def store(self) -> DocumentStore:
        return DocumentStore(self.data_dir)

    def require_user(self) -> str:
        user = self.store.current_user()
        if not user:
            log_error("Not logged in. Run `notesynth login` first.")
            raise SystemExit(1)
        return user

    def open_notebook(self) -> Notebook:
        user = self.require_user()
        backend = AnthropicBackend(self.config.backend)
        return Notebook(user, self.store, backend, self.config)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Log NoteSynth errors and exit non-zero, as every command does."""
    try:
        yield
    except NotesynthError as e:
        log_error(str(e))
        raise SystemExit(1)


pass_app = click.make_pass_decorator(AppContext)
