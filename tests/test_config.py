"""Tests for YAML configuration loading."""

import pytest

from sysprobe.core.config import (
    Settings,
    default_config_path,
    get_user_config_dir,
    load_settings,
)
from sysprobe.core.errors import ConfigError
from sysprobe.core.units import DataUnit


class TestSettings:
    """Test the settings model."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings()

        assert settings.delimiter == "\n"
        assert settings.unit is DataUnit.BYTES
        assert settings.log_level == "warn"

    def test_from_yaml(self):
        """Test parsing a full YAML document."""
        settings = Settings.from_yaml("delimiter: ', '\nunit: GiB\nlog_level: DEBUG\n")

        assert settings.delimiter == ", "
        assert settings.unit is DataUnit.GIB
        assert settings.log_level == "debug"

    def test_empty_document(self):
        """Test an empty file yields defaults."""
        assert Settings.from_yaml("") == Settings()

    def test_invalid_unit(self):
        """Test unknown units are rejected."""
        with pytest.raises(ValueError):
            Settings.from_yaml("unit: parsecs\n")

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValueError):
            Settings.from_yaml("log_level: chatty\n")

    def test_top_level_must_be_mapping(self):
        """Test a YAML list is rejected."""
        with pytest.raises(ValueError):
            Settings.from_yaml("- a\n- b\n")


class TestLoadSettings:
    """Test locating and loading the config file."""

    def test_missing_default_file(self):
        """Test a missing default config yields defaults."""
        assert not default_config_path().exists()
        assert load_settings() == Settings()

    def test_default_location_uses_xdg(self, tmp_path):
        """Test the default location honours XDG_CONFIG_HOME."""
        expected_dir = tmp_path / "xdg" / "sysprobe"
        if get_user_config_dir() != expected_dir:
            pytest.skip("XDG layout not used on this platform")

        expected_dir.mkdir(parents=True)
        (expected_dir / "config.yaml").write_text("delimiter: ';'\n")

        assert load_settings().delimiter == ";"

    def test_explicit_path(self, tmp_path):
        """Test loading an explicit config file."""
        config = tmp_path / "sysprobe.yaml"
        config.write_text("unit: kb\n")

        assert load_settings(config).unit is DataUnit.KB

    def test_env_var_path(self, tmp_path, monkeypatch):
        """Test SYSPROBE_CONFIG points at the config file."""
        config = tmp_path / "env.yaml"
        config.write_text("delimiter: '|'\n")
        monkeypatch.setenv("SYSPROBE_CONFIG", str(config))

        assert load_settings().delimiter == "|"

    def test_explicit_missing_file(self, tmp_path):
        """Test a missing explicit file is an error."""
        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path / "nope.yaml")

        assert "does not exist" in str(exc_info.value)

    def test_env_var_missing_file(self, tmp_path, monkeypatch):
        """Test a missing SYSPROBE_CONFIG file is an error."""
        monkeypatch.setenv("SYSPROBE_CONFIG", str(tmp_path / "nope.yaml"))

        with pytest.raises(ConfigError):
            load_settings()

    def test_malformed_yaml(self, tmp_path):
        """Test malformed YAML is reported as a config error."""
        config = tmp_path / "bad.yaml"
        config.write_text("delimiter: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(config)

        assert "malformed YAML" in str(exc_info.value)

    def test_invalid_values(self, tmp_path):
        """Test invalid values are reported with the file path."""
        config = tmp_path / "bad.yaml"
        config.write_text("unit: parsecs\n")

        with pytest.raises(ConfigError) as exc_info:
            load_settings(config)

        assert exc_info.value.path == config
