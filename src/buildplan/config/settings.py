"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``BUILDPLAN_*`` prefix, ``__`` for nesting)
  3. TOML file    (``buildplan.toml`` discovered via walk-up)
  4. Code defaults, baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`buildplan.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from buildplan.config.discovery import ConfigNotFoundError, find_config
from buildplan.config.models import (
    BuildConfig,
    PluginConfig,
    ProjectsConfig,
    RepositoriesConfig,
    default_plugins,
)
from buildplan.domain.paths import lexical_path


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``buildplan.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class BuildPlanSettings(BaseSettings):
    """Unified settings for the buildplan CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        project_root: Directory the build is rooted in (parent of
            ``buildplan.toml``, or CWD if no config found).
        config_path: The TOML file actually loaded, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BUILDPLAN_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (not in TOML, derived from config location) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    plugins: list[PluginConfig] = Field(default_factory=default_plugins)
    repositories: RepositoriesConfig = Field(default_factory=RepositoriesConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    projects: ProjectsConfig = Field(default_factory=ProjectsConfig)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> BuildPlanSettings:
        """Construct settings from CLI invocation.

        Uses *config_path* when given, otherwise ``BUILDPLAN_CONFIG`` or the
        nearest ``buildplan.toml`` above *project_root*. The project root
        defaults to the config file's directory and is always absolute and
        lexically normalized, the same form build directories are computed in.

        Raises:
            click.ClickException: An explicitly named config file is missing.
        """
        try:
            toml_path = find_config(project_root, explicit=config_path)
        except ConfigNotFoundError as exc:
            import click

            raise click.ClickException(str(exc)) from exc

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=lexical_path(resolved_root),
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
