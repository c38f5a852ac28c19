"""Tests for settings resolution and validation."""

from pathlib import Path

import pytest

from ibexa_system_info.config import Settings, build_settings, load_config_file
from ibexa_system_info.exceptions import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    def _write(content: str) -> Path:
        path = tmp_path / "ibexa_system_info.yaml"
        path.write_text(content)
        return path

    return _write


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self, tmp_path):
        settings = Settings(project_dir=tmp_path)
        settings.validate()

        assert settings.environment == "prod"
        assert settings.debug is False
        assert settings.powered_by_enabled is True
        assert settings.powered_by_release == "major"
        assert settings.bundles == {}
        assert settings.lock_file_path == tmp_path / "composer.lock"
        assert settings.json_file_path == tmp_path / "composer.json"

    def test_explicit_composer_paths(self, tmp_path):
        settings = Settings(project_dir=tmp_path, composer_lock=Path("/srv/composer.lock"))
        assert settings.lock_file_path == Path("/srv/composer.lock")
        assert settings.json_file_path == tmp_path / "composer.json"

    def test_missing_project_dir(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Project directory does not exist"):
            Settings(project_dir=tmp_path / "missing").validate()

    def test_invalid_release_format(self, tmp_path):
        with pytest.raises(ConfigurationError, match="powered_by.release"):
            Settings(project_dir=tmp_path, powered_by_release="patch").validate()

    def test_invalid_log_level(self, tmp_path):
        with pytest.raises(ConfigurationError, match="log level"):
            Settings(project_dir=tmp_path, log_level="TRACE").validate()

    def test_invalid_bundles(self, tmp_path):
        with pytest.raises(ConfigurationError, match="bundles"):
            Settings(project_dir=tmp_path, bundles={"AppBundle": 1}).validate()

    def test_empty_release(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Release cannot be empty"):
            Settings(project_dir=tmp_path, release="  ").validate()


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_bundle_configuration_shape(self, config_file):
        path = config_file(
            """
ibexa_system_info:
    system_info:
        powered_by:
            enabled: false
            release: minor
    bundles:
        AppBundle: app.bundle.AppBundle
    environment: dev
"""
        )
        values = load_config_file(path)

        assert values == {
            "powered_by_enabled": False,
            "powered_by_release": "minor",
            "bundles": {"AppBundle": "app.bundle.AppBundle"},
            "environment": "dev",
        }

    def test_numeric_release_becomes_string(self, config_file):
        """Test an unquoted 3.3 in YAML is kept as a version string."""
        values = load_config_file(config_file("ibexa_system_info:\n    release: 3.3\n"))
        assert values["release"] == "3.3"

    def test_empty_file(self, config_file):
        assert load_config_file(config_file("")) == {}

    def test_missing_root_key(self, config_file):
        assert load_config_file(config_file("other: {}\n")) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, config_file):
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config_file(config_file("ibexa_system_info: [unclosed\n"))

    def test_non_mapping_document(self, config_file):
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config_file(config_file("- one\n- two\n"))

    def test_non_mapping_root(self, config_file):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_config_file(config_file("ibexa_system_info: 42\n"))

    @pytest.mark.parametrize(
        "content",
        [
            "ibexa_system_info:\n    system_info: yes-please\n",
            "ibexa_system_info:\n    system_info:\n        powered_by: minor\n",
        ],
    )
    def test_non_mapping_sections(self, config_file, content):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_config_file(config_file(content))

    def test_quoted_boolean_rejected(self, config_file):
        """Test a quoted "false" is not read as an enabled flag."""
        path = config_file(
            "ibexa_system_info:\n    system_info:\n        powered_by:\n            enabled: \"false\"\n"
        )
        with pytest.raises(ConfigurationError, match="must be true or false"):
            load_config_file(path)

    def test_non_boolean_debug_rejected(self, config_file):
        with pytest.raises(ConfigurationError, match="debug"):
            load_config_file(config_file("ibexa_system_info:\n    debug: maybe\n"))


class TestBuildSettings:
    """Tests for build_settings precedence."""

    def test_overrides_win_over_file(self, tmp_path, config_file):
        path = config_file("ibexa_system_info:\n    system_info:\n        powered_by:\n            release: minor\n")
        settings = build_settings(path, project_dir=str(tmp_path), powered_by_release="none")

        assert settings.powered_by_release == "none"
        assert settings.project_dir == tmp_path

    def test_none_overrides_ignored(self, tmp_path, config_file):
        path = config_file("ibexa_system_info:\n    environment: staging\n")
        settings = build_settings(path, project_dir=str(tmp_path), environment=None)

        assert settings.environment == "staging"

    def test_paths_converted(self, tmp_path):
        settings = build_settings(project_dir=str(tmp_path), composer_lock=str(tmp_path / "custom.lock"))

        assert isinstance(settings.project_dir, Path)
        assert settings.lock_file_path == tmp_path / "custom.lock"

    def test_numeric_project_dir(self, config_file):
        path = config_file("ibexa_system_info:\n    project_dir: 42\n")
        with pytest.raises(ConfigurationError, match="project_dir must be a path"):
            build_settings(path)

    def test_unknown_setting(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Unknown setting"):
            build_settings(project_dir=str(tmp_path), colour="blue")

    def test_validation_runs(self, tmp_path):
        with pytest.raises(ConfigurationError):
            build_settings(project_dir=str(tmp_path / "missing"))
