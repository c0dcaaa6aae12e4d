"""Locating and reading ``provctl.toml``.

Resolution order for the config file:
  1. ``--config PATH`` given on the command line
  2. ``PROVCTL_CONFIG`` environment variable
  3. First ``provctl.toml`` found walking up from the start directory

A named file that does not exist is treated as "no config file"; the run
continues on env vars and defaults.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "provctl.toml"
CONFIG_ENV_VAR = "PROVCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``provctl.toml`` at or above *start* (default: cwd).

    ``PROVCTL_CONFIG`` short-circuits the walk.
    """
    named = os.environ.get(CONFIG_ENV_VAR)
    if named:
        return _existing(Path(named))

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None = None, start: Path | None = None) -> Path | None:
    """Pick the config file for a run: *explicit* wins over discovery."""
    if explicit:
        return _existing(Path(explicit))
    return find_config(start)


def read_config(path: Path | None) -> dict[str, Any]:
    """Parse *path* into raw section tables; ``{}`` when there is no file."""
    if path is None:
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


def _existing(path: Path) -> Path | None:
    return path if path.is_file() else None
