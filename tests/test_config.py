"""Tests for configuration loading and merging."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from aocli.config import (
    DEFAULT_CONFIG,
    AocConfig,
    CommandsConfig,
    ConfigError,
    FormatsConfig,
    find_local_config_path,
    get_home_config_path,
    load_config,
    save_config,
)
from aocli.config.loader import load_yaml_config


@pytest.fixture
def home_config(tmp_path: Path):
    """Point the global config at a temporary location."""
    path = tmp_path / "home" / ".aocli" / "config.yaml"
    with patch("aocli.config.loader.get_home_config_path", return_value=path):
        yield path


class TestAocConfig:
    """Tests for the AocConfig dataclass."""

    def test_default_config_values(self) -> None:
        """Test that DEFAULT_CONFIG has expected values."""
        assert DEFAULT_CONFIG.formats.repo == "advent-of-code-{year}"
        assert DEFAULT_CONFIG.formats.day == "day-{day:02}"
        assert DEFAULT_CONFIG.formats.part == "part-{part}.py"
        assert DEFAULT_CONFIG.formats.input == "input.txt"
        assert DEFAULT_CONFIG.commands.run == "python {file}"
        assert DEFAULT_CONFIG.commands.shell is False
        assert DEFAULT_CONFIG.session is None

    def test_from_dict_overlays_sections(self) -> None:
        """Test from_dict keeps defaults for keys that are not set."""
        config = AocConfig.from_dict(
            {"formats": {"day": "d{day}"}, "commands": {"run": "cargo run"}, "year": "2021"}
        )
        assert config.formats.day == "d{day}"
        assert config.formats.repo == FormatsConfig().repo
        assert config.commands.run == "cargo run"
        assert config.commands.test == CommandsConfig().test
        assert config.year == 2021

    def test_from_dict_ignores_unknown_and_bad_sections(self) -> None:
        """Test unknown keys and non-mapping sections are ignored."""
        config = AocConfig.from_dict({"formats": "nope", "unknown_key": 1})
        assert config.formats == FormatsConfig()
        assert not hasattr(config, "unknown_key")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (True, True),
            (False, False),
            ("false", False),
            ("No", False),
            ("0", False),
            ("TRUE", True),
            ("yes", True),
            (1, True),
        ],
    )
    def test_shell_flag_parsing(self, raw, expected: bool) -> None:
        """Test commands.shell accepts booleans and their common spellings."""
        config = AocConfig.from_dict({"commands": {"shell": raw}})
        assert config.commands.shell is expected

    @pytest.mark.parametrize("raw", ["maybe", "", 2, [True]])
    def test_invalid_shell_flag_raises(self, raw) -> None:
        """Test an unrecognized commands.shell value names the key."""
        with pytest.raises(ConfigError) as exc_info:
            AocConfig.from_dict({"commands": {"shell": raw}})
        assert "commands.shell" in str(exc_info.value)

    @pytest.mark.parametrize("raw", ["twenty", "2023.5", True, [2023]])
    def test_invalid_year_raises(self, raw) -> None:
        """Test a non-integer year names the key and the value."""
        with pytest.raises(ConfigError) as exc_info:
            AocConfig.from_dict({"year": raw})
        assert "'year'" in str(exc_info.value)
        assert repr(raw) in str(exc_info.value)

    def test_merge_prefers_other_values(self) -> None:
        """Test that merge prefers set values from 'other'."""
        base = AocConfig.from_dict({"formats": {"repo": "aoc-{year}", "day": "d{day}"}})
        override = AocConfig.from_dict({"formats": {"day": "day{day:02}"}, "session": "s"})
        merged = base.merge(override)

        assert merged.formats.repo == "aoc-{year}"
        assert merged.formats.day == "day{day:02}"
        assert merged.session == "s"

    def test_merge_returns_new_instance(self) -> None:
        """Test that merge does not mutate its inputs."""
        base = AocConfig(session="a")
        override = AocConfig(root="/tmp")
        merged = base.merge(override)

        assert merged is not base
        assert base.root is None
        assert override.session is None

    def test_to_dict_excludes_none(self) -> None:
        """Test that to_dict leaves out unset optional values."""
        data = AocConfig(year=2020).to_dict()
        assert data["year"] == 2020
        assert "session" not in data
        assert data["formats"]["part"] == "part-{part}.py"


class TestConfigLoading:
    """Tests for load_config() and friends."""

    def test_home_config_path(self) -> None:
        """Test the global config lives in ~/.aocli/."""
        path = get_home_config_path()
        assert path.name == "config.yaml"
        assert path.parent.name == ".aocli"

    def test_local_config_found_from_subdirectory(self, tmp_path: Path) -> None:
        """Test the nearest local config above cwd is found."""
        local = tmp_path / "repo" / ".aocli" / "config.yaml"
        local.parent.mkdir(parents=True)
        local.write_text("year: 2020\n")
        nested = tmp_path / "repo" / "day-01"
        nested.mkdir()

        assert find_local_config_path(nested) == local

    def test_precedence(self, tmp_path: Path, home_config: Path, monkeypatch) -> None:
        """Test defaults < global < local < AOC_SESSION."""
        monkeypatch.delenv("AOC_SESSION", raising=False)
        home_config.parent.mkdir(parents=True)
        home_config.write_text(
            yaml.safe_dump({"session": "home", "formats": {"part": "main.rs"}})
        )
        project = tmp_path / "project"
        (project / ".aocli").mkdir(parents=True)
        (project / ".aocli" / "config.yaml").write_text(
            yaml.safe_dump({"formats": {"day": "d{day}"}})
        )

        config = load_config(project)
        assert config.session == "home"
        assert config.formats.part == "main.rs"
        assert config.formats.day == "d{day}"
        assert config.formats.repo == FormatsConfig().repo

        monkeypatch.setenv("AOC_SESSION", " env-cookie\n")
        assert load_config(project).session == "env-cookie"

    def test_invalid_yaml_is_ignored(self, tmp_path: Path) -> None:
        """Test a broken file yields None instead of crashing."""
        path = tmp_path / "config.yaml"
        path.write_text("formats: [unclosed\n")
        assert load_yaml_config(path) is None

    def test_non_mapping_yaml_is_ignored(self, tmp_path: Path) -> None:
        """Test a YAML list is not accepted as config."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        assert load_yaml_config(path) is None

    def test_save_config_omits_session(self, tmp_path: Path) -> None:
        """Test the session cookie is never written to disk."""
        path = tmp_path / ".aocli" / "config.yaml"
        save_config(AocConfig(session="secret", year=2022), path)

        data = yaml.safe_load(path.read_text())
        assert "session" not in data
        assert data["year"] == 2022
        assert data["formats"]["day"] == "day-{day:02}"
