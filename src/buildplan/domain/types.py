"""Classification enums for resolved build configuration."""

from __future__ import annotations

from enum import StrEnum


class RepositoryScope(StrEnum):
    """Where a repository list is consulted.

    ``plugins`` mirrors the ``buildscript {}`` block (plugin resolution);
    ``dependencies`` mirrors ``allprojects {}`` (library resolution).
    """

    PLUGINS = "plugins"
    DEPENDENCIES = "dependencies"


ROOT_PROJECT_PATH = ":"
