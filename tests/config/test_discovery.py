"""Tests for config discovery."""

from pathlib import Path

import pytest

from buildplan.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    ConfigNotFoundError,
    find_config,
)


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[build]\nrelocate = "out"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_pointing_nowhere(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        with pytest.raises(ConfigNotFoundError, match=CONFIG_ENV_VAR):
            find_config(tmp_path)

    def test_explicit_beats_env_and_walk_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        chosen = tmp_path / "chosen.toml"
        chosen.write_text("")
        assert find_config(tmp_path, explicit=str(chosen)) == chosen

    def test_explicit_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError, match="--config"):
            find_config(tmp_path, explicit=str(tmp_path / "missing.toml"))
