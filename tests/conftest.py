"""Shared pytest fixtures and test helpers for buildplan tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from buildplan.config.settings import BuildPlanSettings
from buildplan.infrastructure.project import BuildProject
from buildplan.services.timing import disable_timing


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's BUILDPLAN_* environment out of the tests."""
    monkeypatch.delenv("BUILDPLAN_CONFIG", raising=False)
    monkeypatch.delenv("BUILDPLAN_PROJECT_ROOT", raising=False)


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo what AppContext does globally (log handlers, timing flag)."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    bp_level = logging.getLogger("buildplan").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("buildplan").setLevel(bp_level)
    disable_timing()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A Flutter-style ``android/`` directory with one ``:app`` subproject.

    The default relocation (``build/../../build``) lands in
    ``tmp_path / "flutter_app" / "build"``, which stays inside tmp_path.
    """
    root = tmp_path / "flutter_app" / "android"
    (root / "app").mkdir(parents=True)
    (root / "settings.gradle.kts").write_text('include(":app")\n', encoding="utf-8")
    return root


@pytest.fixture
def settings(project_root: Path) -> BuildPlanSettings:
    return BuildPlanSettings.from_cli(project_root=project_root)


@pytest.fixture
def project(settings: BuildPlanSettings) -> BuildProject:
    """Fully resolved project on a temp directory."""
    return BuildProject(settings)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project root so the CLI resolves it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_config(root: Path, content: str) -> Path:
    """Write ``buildplan.toml`` into *root* and return its path."""
    path = root / "buildplan.toml"
    path.write_text(content, encoding="utf-8")
    return path


def make_project(root: Path, content: str = "") -> BuildProject:
    """Write a config (possibly empty) and resolve a project from it."""
    write_config(root, content)
    return BuildProject(BuildPlanSettings.from_cli(project_root=root))
