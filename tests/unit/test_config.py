"""Unit tests for configuration loading."""

import json

import pytest

from segdiff.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    options_from_config,
)
from segdiff.exceptions import ConfigError
from segdiff.options import DiffOptions


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_toml(self, tmp_path):
        """Test loading a TOML config."""
        path = tmp_path / ".segdiff.toml"
        path.write_text('granularity = "word"\nmax_nesting_depth = 1\n', encoding="utf-8")

        assert load_config_file(path) == {"granularity": "word", "max_nesting_depth": 1}

    def test_yaml(self, tmp_path):
        """Test loading a YAML config."""
        path = tmp_path / ".segdiff.yaml"
        path.write_text("nested: false\nmax_nesting_depth: 1\n", encoding="utf-8")

        assert load_config_file(path) == {"nested": False, "max_nesting_depth": 1}

    def test_json(self, tmp_path):
        """Test loading a JSON config."""
        path = tmp_path / ".segdiff.json"
        path.write_text(json.dumps({"placeholder": "."}), encoding="utf-8")

        assert load_config_file(str(path)) == {"placeholder": "."}

    def test_pyproject_section(self, tmp_path):
        """Test loading the tool table of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.segdiff]\ngranularity = "char"\n', encoding="utf-8")

        assert load_config_file(path) == {"granularity": "char"}

    def test_pyproject_without_section(self, tmp_path):
        """Test a pyproject.toml with no segdiff table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")

        assert load_config_file(path) == {}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is an empty config."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path / "nope.toml")

        assert exc_info.value.config_path == str(tmp_path / "nope.toml")

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown formats are rejected."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(path)

    def test_invalid_toml(self, tmp_path):
        """Test that malformed TOML raises ConfigError."""
        path = tmp_path / "bad.toml"
        path.write_text("granularity = \n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)

        assert exc_info.value.original_error is not None

    def test_non_mapping(self, tmp_path):
        """Test that a top-level list is rejected."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(path)


@pytest.mark.unit
class TestDiscovery:
    """Tests for config file discovery."""

    def test_finds_file_in_parent(self, tmp_path):
        """Test that the search walks up to parent directories."""
        config = tmp_path / ".segdiff.toml"
        config.write_text('granularity = "word"\n', encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_in_parents(nested) == config.resolve()

    def test_dedicated_file_beats_pyproject(self, tmp_path):
        """Test priority within a single directory."""
        (tmp_path / "pyproject.toml").write_text("[tool.segdiff]\nnested = false\n", encoding="utf-8")
        dedicated = tmp_path / ".segdiff.yaml"
        dedicated.write_text("nested: true\n", encoding="utf-8")

        assert find_config_in_parents(tmp_path) == dedicated.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        """Test that unrelated pyproject files do not stop the search."""
        (tmp_path / ".segdiff.json").write_text("{}", encoding="utf-8")
        child = tmp_path / "child"
        child.mkdir()
        (child / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")

        assert find_config_in_parents(child) == (tmp_path / ".segdiff.json").resolve()

    def test_home_fallback(self, isolated_config_env, tmp_path):
        """Test falling back to the home directory."""
        home_config = isolated_config_env / ".segdiff.toml"
        home_config.write_text("nested = false\n", encoding="utf-8")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()

        assert discover_config_file(elsewhere) == home_config


@pytest.mark.unit
class TestLoadConfigWithPriority:
    """Tests for config source priority."""

    def test_nothing_found(self, isolated_config_env):
        """Test that no config yields an empty mapping."""
        assert load_config_with_priority() == {}

    def test_explicit_path_wins(self, isolated_config_env, monkeypatch):
        """Test that an explicit path overrides the environment variable."""
        explicit = isolated_config_env / "explicit.toml"
        explicit.write_text('granularity = "char"\n', encoding="utf-8")
        from_env = isolated_config_env / "env.toml"
        from_env.write_text('granularity = "word"\n', encoding="utf-8")
        monkeypatch.setenv("SEGDIFF_CONFIG", str(from_env))

        assert load_config_with_priority(str(explicit)) == {"granularity": "char"}
        assert load_config_with_priority() == {"granularity": "word"}

    def test_discovered_in_working_directory(self, isolated_config_env):
        """Test auto-discovery from the working directory."""
        (isolated_config_env / ".segdiff.yml").write_text("max_nesting_depth: 0\n", encoding="utf-8")

        assert load_config_with_priority() == {"max_nesting_depth": 0}


@pytest.mark.unit
class TestOptionsFromConfig:
    """Tests for options_from_config."""

    def test_empty_config(self):
        """Test that an empty mapping gives default options."""
        assert options_from_config({}) == DiffOptions()

    def test_applies_values(self):
        """Test applying configured values."""
        options = options_from_config({"granularity": "word", "max_nesting_depth": 1})

        assert options.granularity == "word"
        assert options.max_nesting_depth == 1

    def test_applies_on_base(self):
        """Test layering values on existing options."""
        base = DiffOptions(nested=False)
        options = options_from_config({"placeholder": "."}, base=base)

        assert options.nested is False
        assert options.placeholder == "."

    def test_unknown_key(self):
        """Test that unknown keys are reported."""
        with pytest.raises(ConfigError, match="colour"):
            options_from_config({"colour": "red"})

    def test_invalid_value(self):
        """Test that invalid values are wrapped in ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            options_from_config({"granularity": "sentence"})

        assert isinstance(exc_info.value.original_error, ValueError)

    @pytest.mark.parametrize("config", [{"delimiters": 5}, {"nested": "false"}, {"max_nesting_depth": "1"}])
    def test_wrongly_typed_value(self, config):
        """Test that values of the wrong type are wrapped in ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            options_from_config(config)

        assert isinstance(exc_info.value.original_error, ValueError)

    def test_similarity_threshold_is_not_configurable(self):
        """Test that the pairing threshold is rejected as an unknown key."""
        with pytest.raises(ConfigError, match="similarity_threshold"):
            options_from_config({"similarity_threshold": 0.9})
