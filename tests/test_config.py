"""
Tests for the settings module
"""

import logging

import pytest
import yaml
from pydantic import ValidationError

from common.enums import Interpolation
from config import (
    ImageConfig,
    Settings,
    SystemConfig,
    configure_logging,
    get_settings,
    reload_settings,
)


class TestDefaults:
    """Tests for default values"""

    def test_image_defaults(self):
        settings = get_settings()

        assert settings.image.row_alignment == 4
        assert settings.image.compression_level == 9
        assert settings.image.interpolation == Interpolation.LINEAR
        assert settings.image.intermediate_color == "Bgr"

    def test_system_defaults(self):
        assert get_settings().system.log_level == "INFO"

    def test_cached(self):
        assert get_settings() is get_settings()


class TestEnvironment:
    """Tests for environment overrides"""

    def test_row_alignment_from_env(self, monkeypatch):
        monkeypatch.setenv("IMGCORE_IMAGE_ROW_ALIGNMENT", "8")
        assert reload_settings().image.row_alignment == 8

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("IMGCORE_SYSTEM_LOG_LEVEL", "debug")
        assert reload_settings().system.log_level == "DEBUG"


class TestValidation:
    """Tests for field validation"""

    def test_alignment_power_of_two(self):
        with pytest.raises(ValidationError):
            ImageConfig(row_alignment=3)

    def test_alignment_range(self):
        with pytest.raises(ValidationError):
            ImageConfig(row_alignment=128)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SystemConfig(log_level="verbose")

    def test_compression_level_range(self):
        with pytest.raises(ValidationError):
            ImageConfig(compression_level=10)


class TestConfigFile:
    """Tests for YAML config file support"""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "imgcore.yaml"
        config = {"image": {"row_alignment": 16}, "system": {"log_level": "WARNING"}}
        path.write_text(yaml.dump(config))

        settings = Settings(config_file=str(path))

        assert settings.image.row_alignment == 16
        assert settings.system.log_level == "WARNING"

    def test_missing_file_ignored(self, tmp_path):
        settings = Settings(config_file=str(tmp_path / "missing.yaml"))
        assert settings.image.row_alignment == 4

    def test_save_to_file(self, tmp_path):
        path = tmp_path / "saved.yaml"

        Settings().save_to_file(str(path))
        data = yaml.safe_load(path.read_text())

        assert data["image"]["row_alignment"] == 4
        assert data["image"]["interpolation"] == "linear"
        assert data["system"]["log_level"] == "INFO"


class TestLogging:
    """Tests for configure_logging"""

    def test_configure_logging(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        configure_logging(Settings(system=SystemConfig(log_level="ERROR")))

        assert captured["level"] == logging.ERROR
        assert "%(levelname)s" in captured["format"]
