from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from depbump.config import (
    DepBumpConfig,
    _parse_section,
    _pyproject_has_depbump_section,
    _read_toml,
    discover_config_file,
    load_config,
)
from depbump.exceptions import ConfigError


@pytest.mark.unit
class TestDepBumpConfig:
    """Tests for DepBumpConfig dataclass."""

    def test_default_initialization(self) -> None:
        """Test defaults match the CLI defaults."""
        config = DepBumpConfig()

        assert config.target == "latest"
        assert config.dep is None
        assert config.remove_range is False
        assert config.registry is None
        assert config.filter == []
        assert config.reject == []
        assert config.source_path is None

    def test_to_log_dict(self) -> None:
        """Test the log dictionary omits metadata."""
        config = DepBumpConfig(target="@next", source_path=Path("depbump.toml"))

        log_dict = config.to_log_dict()

        assert log_dict["target"] == "@next"
        assert "source_path" not in log_dict


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file function."""

    def test_explicit_path_priority(self, tmp_path: Path) -> None:
        """Test explicit path is used when provided and exists."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[depbump]\n", encoding="utf-8")
        (tmp_path / "depbump.toml").write_text("[depbump]\n", encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file(config_file)

        assert result == config_file.resolve()

    def test_explicit_path_not_found_raises_error(self, tmp_path: Path) -> None:
        """Test ConfigError raised when explicit path doesn't exist."""
        with pytest.raises(ConfigError) as exc_info:
            discover_config_file(tmp_path / "nonexistent.toml")

        assert "not found" in str(exc_info.value).lower()

    def test_discovers_depbump_toml(self, tmp_path: Path) -> None:
        """Test depbump.toml in the current directory is found."""
        config_file = tmp_path / "depbump.toml"
        config_file.write_text("[depbump]\n", encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_discovers_pyproject_toml_with_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml with [tool.depbump] is found."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[tool.depbump]\ntarget = "@next"\n', encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_ignores_pyproject_toml_without_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml without our table is ignored."""
        (tmp_path / "pyproject.toml").write_text("[tool.other]\nkey = 1\n", encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_precedence_order(self, tmp_path: Path) -> None:
        """Test depbump.toml wins over pyproject.toml."""
        depbump_toml = tmp_path / "depbump.toml"
        depbump_toml.write_text("[depbump]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.depbump]\n", encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == depbump_toml


@pytest.mark.unit
class TestPyprojectHasDepbumpSection:
    """Tests for _pyproject_has_depbump_section."""

    def test_true_when_present(self, tmp_path: Path) -> None:
        """Test the section is detected."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.depbump]\n", encoding="utf-8")

        assert _pyproject_has_depbump_section(path) is True

    def test_false_on_invalid_toml(self, tmp_path: Path) -> None:
        """Test unreadable files count as missing the section."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.depbump\n", encoding="utf-8")

        assert _pyproject_has_depbump_section(path) is False


@pytest.mark.unit
class TestReadToml:
    """Tests for _read_toml."""

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test invalid TOML raises ConfigError."""
        path = tmp_path / "depbump.toml"
        path.write_text("target = ", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _read_toml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test an unreadable file raises ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read"):
            _read_toml(tmp_path / "missing.toml")


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section."""

    def test_empty_section(self) -> None:
        """Test an empty table gives defaults."""
        assert _parse_section({}, config_path="x") == DepBumpConfig()

    def test_all_options(self) -> None:
        """Test every option is parsed."""
        config = _parse_section(
            {
                "target": "@next",
                "dep": ["prod", "dev"],
                "remove_range": True,
                "registry": "registry.json",
                "filter": "react*, lodash",
                "reject": ["typescript"],
            },
            config_path="depbump.toml",
        )

        assert config.target == "@next"
        assert config.dep == ["prod", "dev"]
        assert config.remove_range is True
        assert config.registry == "registry.json"
        assert config.filter == ["react*", "lodash"]
        assert config.reject == ["typescript"]

    def test_dep_as_string(self) -> None:
        """Test dep accepts a comma separated string."""
        assert _parse_section({"dep": "prod, peer"}, config_path="x").dep == ["prod", "peer"]

    def test_unknown_keys(self) -> None:
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError, match="Unknown configuration keys"):
            _parse_section({"targt": "latest"}, config_path="x")

    @pytest.mark.parametrize(
        "section,option",
        [
            ({"target": ""}, "target"),
            ({"target": 1}, "target"),
            ({"remove_range": "yes"}, "remove_range"),
            ({"registry": 5}, "registry"),
            ({"dep": [1, 2]}, "dep"),
            ({"reject": {"a": 1}}, "reject"),
        ],
    )
    def test_wrong_types(self, section: dict, option: str) -> None:
        """Test invalid values name the offending option."""
        with pytest.raises(ConfigError) as exc_info:
            _parse_section(section, config_path="x")

        assert exc_info.value.option == option


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_when_no_config(self, tmp_path: Path) -> None:
        """Test defaults are returned without a config file."""
        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config == DepBumpConfig()

    def test_loads_depbump_toml(self, tmp_path: Path) -> None:
        """Test values from depbump.toml."""
        path = tmp_path / "depbump.toml"
        path.write_text('[depbump]\nremove_range = true\n', encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config.remove_range is True
        assert config.source_path == path

    def test_loads_pyproject_toml(self, tmp_path: Path) -> None:
        """Test values from [tool.depbump]."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.depbump]\ntarget = "@beta"\n', encoding="utf-8")

        with patch("depbump.config.Path.cwd", return_value=tmp_path):
            assert load_config().target == "@beta"

    def test_empty_section(self, tmp_path: Path) -> None:
        """Test a file without our table yields defaults and its path."""
        path = tmp_path / "custom.toml"
        path.write_text("[other]\nkey = 1\n", encoding="utf-8")

        config = load_config(path)

        assert config.target == "latest"
        assert config.source_path == path.resolve()

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Test validation errors propagate."""
        path = tmp_path / "depbump.toml"
        path.write_text("[depbump]\nunknown = 1\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)
