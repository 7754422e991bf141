"""File helpers: atomic JSON writes and YAML config reading."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

_yaml = YAML(typ="safe")


def write_atomic(path: Path | str, text: str) -> None:
    """Write text next to ``path`` and rename it into place."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            delete=False,
            encoding="utf-8",
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(text)
        tmp_path.replace(path)
    except BaseException:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise


def read_yaml(path: Path | str) -> dict:
    with open(path, encoding="utf-8") as f:
        return dict(_yaml.load(f) or {})


def read_json(path: Path | str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path | str, data: Any) -> None:
    # Serialize first so an unserializable value never leaves a partial file.
    write_atomic(path, json.dumps(data, indent=2, ensure_ascii=False))
