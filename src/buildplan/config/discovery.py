"""Locate ``buildplan.toml``.

An explicit location (``--config`` or ``BUILDPLAN_CONFIG``) must exist.
Otherwise the directory tree is searched upward from the start directory,
the way git finds ``.git/``, and a missing file simply means code defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "buildplan.toml"
CONFIG_ENV_VAR = "BUILDPLAN_CONFIG"


class ConfigNotFoundError(FileNotFoundError):
    """An explicitly named config file does not exist."""


def _explicit(path: str, origin: str) -> Path:
    p = Path(path)
    if not p.is_file():
        msg = f"Config file {p} (from {origin}) does not exist"
        raise ConfigNotFoundError(msg)
    return p


def find_config(start: Path | None = None, explicit: str | None = None) -> Path | None:
    """Return the config file to load, or None when there is none.

    Lookup order: *explicit*, then ``BUILDPLAN_CONFIG``, then the nearest
    ``buildplan.toml`` in *start* (default: cwd) or one of its parents.

    Raises:
        ConfigNotFoundError: *explicit* or ``BUILDPLAN_CONFIG`` names a
            file that is not there.
    """
    if explicit:
        return _explicit(explicit, "--config")
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _explicit(env_path, CONFIG_ENV_VAR)

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
