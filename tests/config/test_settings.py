"""Tests for ThreewaySettings: discovery, TOML source, and priority."""

from pathlib import Path

import click
import pytest

from threeway.config.settings import CONFIG_ENV_VAR, CONFIG_FILENAME, ThreewaySettings, find_config


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[bench]\ndepth = 3\n")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[bench]\ndepth = 3\n")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_nearest_file_wins(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        child = tmp_path / "project"
        child.mkdir()
        (child / CONFIG_FILENAME).write_text("")
        assert find_config(child) == child / CONFIG_FILENAME

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_names_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[laws]\nseed = 9\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = ThreewaySettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.bench.depth == 14
        assert settings.laws.samples == 24

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ThreewaySettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[bench]\ndepth = 4\n[laws]\nseed = 11\n")
        settings = ThreewaySettings.from_cli(start=tmp_path)
        assert settings.bench.depth == 4
        assert settings.laws.seed == 11
        assert settings.bench.trials == 5  # default preserved
        assert settings.config_path == tmp_path / CONFIG_FILENAME

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[laws]\nsamples = 3\n")
        settings = ThreewaySettings.from_cli(config_path=str(custom))
        assert settings.laws.samples == 3
        assert settings.config_path == custom

    def test_missing_explicit_path_means_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[bench]\ndepth = 4\n")
        settings = ThreewaySettings.from_cli(config_path=str(tmp_path / "absent.toml"))
        assert settings.config_path is None
        assert settings.bench.depth == 14

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        settings = ThreewaySettings.from_cli(start=tmp_path)
        assert settings.bench.iterations == 10

    def test_unrelated_tables_ignored(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[tool.other]\nx = 1\n[laws]\ndepth = 2\n")
        settings = ThreewaySettings.from_cli(start=tmp_path)
        assert settings.laws.depth == 2

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[bench\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ThreewaySettings.from_cli(start=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[bench]\nmode = "four-way"\n')
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            ThreewaySettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[bench]\ndepth = 4\n")
        monkeypatch.setenv("THREEWAY_BENCH__DEPTH", "7")
        settings = ThreewaySettings.from_cli(start=tmp_path)
        assert settings.bench.depth == 7

    def test_invalid_env_value(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("THREEWAY_LAWS__SAMPLES", "0")
        with pytest.raises(click.ClickException, match="Invalid configuration"):
            ThreewaySettings.from_cli(start=tmp_path)

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ThreewaySettings.from_cli(
            start=tmp_path,
            json_output=True,
            quiet=True,
            verbose=True,
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
