"""Tests for BuildPlanSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from buildplan.config.settings import BuildPlanSettings


class TestSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = BuildPlanSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.build.relocate == "../../build"
        assert len(settings.plugins) == 3

    def test_frozen(self, tmp_path: Path) -> None:
        settings = BuildPlanSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "buildplan.toml").write_text(
            '[build]\nrelocate = "../out"\n[projects]\ninclude = ["app", "core"]\n'
        )
        settings = BuildPlanSettings.from_cli(project_root=tmp_path)
        assert settings.build.relocate == "../out"
        assert settings.build.default_dir == "build"  # default preserved
        assert settings.projects.include == ["app", "core"]
        assert settings.config_path == tmp_path / "buildplan.toml"

    def test_plugins_array_of_tables(self, tmp_path: Path) -> None:
        (tmp_path / "buildplan.toml").write_text(
            '[[plugins]]\nid = "com.android.application"\nversion = "8.7.0"\napply = true\n'
        )
        settings = BuildPlanSettings.from_cli(project_root=tmp_path)
        assert len(settings.plugins) == 1
        assert settings.plugins[0].version == "8.7.0"
        assert settings.plugins[0].apply is True

    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "buildplan.toml").write_text(
            '[repositories]\ndependencies = ["https://repo.example/maven"]\n'
        )
        settings = BuildPlanSettings.from_cli(project_root=tmp_path)
        assert settings.repositories.dependencies == ["https://repo.example/maven"]
        assert len(settings.repositories.plugins) == 3  # default

    def test_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "buildplan.toml").write_text("")
        nested = tmp_path / "app" / "src"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = BuildPlanSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[build]\nrelocate = "x"\n')
        settings = BuildPlanSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.build.relocate == "x"
        assert settings.config_path == custom

    def test_missing_explicit_config_is_click_error(self, tmp_path: Path) -> None:
        with pytest.raises(click.ClickException, match="does not exist"):
            BuildPlanSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_project_root_dotdot_collapsed(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "a" / "c").mkdir()
        monkeypatch.chdir(tmp_path / "a" / "b")
        settings = BuildPlanSettings.from_cli(project_root=Path("../c"))
        assert settings.project_root == tmp_path / "a" / "c"
        assert ".." not in settings.project_root.parts

    def test_invalid_toml_is_click_error(self, tmp_path: Path) -> None:
        (tmp_path / "buildplan.toml").write_text("[build\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            BuildPlanSettings.from_cli(project_root=tmp_path)


class TestPriority:
    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "buildplan.toml").write_text('[build]\nrelocate = "from-toml"\n')
        monkeypatch.setenv("BUILDPLAN_BUILD__RELOCATE", "from-env")
        settings = BuildPlanSettings.from_cli(project_root=tmp_path)
        assert settings.build.relocate == "from-env"

    def test_cli_flag_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUILDPLAN_QUIET", "true")
        settings = BuildPlanSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False
