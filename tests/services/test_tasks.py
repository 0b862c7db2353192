"""Tests for the task registry, clean task and TaskService."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from buildplan.cli import cli
from buildplan.config.settings import BuildPlanSettings
from buildplan.infrastructure.project import BuildProject
from buildplan.services.result import ServiceResult
from buildplan.services.tasks import TaskRegistry, TaskService, clean_build_dir
from tests.conftest import make_project, write_config


class TestTaskRegistry:
    def test_register_and_get(self) -> None:
        registry = TaskRegistry()
        task = lambda: ServiceResult(ok=True, op="hello")  # noqa: E731
        registry.register("hello", task)
        assert registry.get("hello") is task
        assert registry.get("missing") is None
        assert "hello" in registry

    def test_duplicate_rejected(self) -> None:
        registry = TaskRegistry()
        registry.register("a", lambda: ServiceResult(ok=True, op="a"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register("a", lambda: ServiceResult(ok=True, op="a"))

    def test_names_in_registration_order(self) -> None:
        registry = TaskRegistry()
        for name in ("zeta", "alpha"):
            registry.register(name, lambda: ServiceResult(ok=True, op="x"))
        assert registry.names() == ["zeta", "alpha"]


class TestClean:
    def test_removes_build_dir(self, project: BuildProject) -> None:
        out = project.root_build_dir / "app" / "outputs"
        out.mkdir(parents=True)
        (out / "app-release.apk").write_bytes(b"apk")

        result = clean_build_dir(project)

        assert result.ok
        assert result.data["deleted"] is True
        assert not project.root_build_dir.exists()

    def test_already_clean(self, project: BuildProject) -> None:
        assert not project.root_build_dir.exists()
        result = clean_build_dir(project)
        assert result.ok
        assert result.data["deleted"] is False

    def test_twice_in_a_row(self, project: BuildProject) -> None:
        project.root_build_dir.mkdir(parents=True)
        assert clean_build_dir(project).ok
        assert clean_build_dir(project).ok
        assert not project.root_build_dir.exists()

    def test_leaves_sources_alone(self, project: BuildProject, project_root: Path) -> None:
        project.root_build_dir.mkdir(parents=True)
        clean_build_dir(project)
        assert (project_root / "settings.gradle.kts").exists()

    def test_delete_failure(self, project: BuildProject, monkeypatch: pytest.MonkeyPatch) -> None:
        project.root_build_dir.mkdir(parents=True)

        def boom(path: Path) -> bool:
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("buildplan.services.tasks.delete_tree", boom)
        result = clean_build_dir(project)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DELETE_FAILED"
        assert project.root_build_dir.exists()

    def test_refuses_project_root_ancestor(self, project_root: Path) -> None:
        project = make_project(project_root, '[build]\nrelocate = ".."\n')
        assert project.root_build_dir == project_root
        result = clean_build_dir(project)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSAFE_DELETE"
        assert project_root.exists()

    def test_guard_sees_through_unnormalized_root(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "a" / "c").mkdir()
        settings = BuildPlanSettings(
            project_root=tmp_path / "a" / "b" / ".." / "c",
            build={"relocate": ".."},
            projects={"include": []},
        )
        result = clean_build_dir(BuildProject(settings))
        assert result.error is not None
        assert result.error.code == "UNSAFE_DELETE"
        assert (tmp_path / "a" / "c").is_dir()

    def test_refuses_root_reached_through_dotdot(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, cli_runner: CliRunner
    ) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        other = tmp_path / "a" / "c"
        (other / "app").mkdir(parents=True)
        write_config(other, '[build]\nrelocate = ".."\n')
        monkeypatch.chdir(tmp_path / "a" / "b")

        result = cli_runner.invoke(
            cli, ["--json", "-C", "../c", "-c", str(other / "buildplan.toml"), "clean"]
        )

        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "UNSAFE_DELETE"
        assert (other / "app").is_dir()
        assert (other / "buildplan.toml").is_file()


class TestTaskService:
    def test_run_clean(self, project: BuildProject) -> None:
        result = TaskService(project).run("clean")
        assert result.ok
        assert result.op == "clean"

    def test_unknown_task(self, project: BuildProject) -> None:
        result = TaskService(project).run("assembleRelease")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TASK"
        assert result.error.detail["available"] == ["clean"]

    def test_list(self, project: BuildProject) -> None:
        result = TaskService(project).list_tasks()
        assert result.data["items"] == [{"name": "clean"}]
