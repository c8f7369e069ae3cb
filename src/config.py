"""
Configuration management using Pydantic for the image core.
Provides type-safe configuration with validation and environment variable support.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.constants import (
    CompressionConstants,
    ConversionConstants,
    ImageConstants,
    SystemConstants,
)
from common.enums import Interpolation

logger = logging.getLogger(__name__)


class ImageConfig(BaseSettings):
    """Pixel buffer and conversion configuration."""

    row_alignment: int = Field(
        default=ImageConstants.DEFAULT_ROW_ALIGNMENT,
        ge=ImageConstants.MIN_ROW_ALIGNMENT,
        le=ImageConstants.MAX_ROW_ALIGNMENT,
        description="Row byte alignment of newly allocated buffers",
    )
    compression_level: int = Field(
        default=CompressionConstants.BEST_COMPRESSION,
        ge=CompressionConstants.MIN_LEVEL,
        le=CompressionConstants.MAX_LEVEL,
        description="zlib level used when encoding compressed binary",
    )
    interpolation: Interpolation = Field(
        default=Interpolation(ImageConstants.DEFAULT_INTERPOLATION),
        description="Resampling used when the raster size changes",
    )
    intermediate_color: str = Field(
        default=ConversionConstants.INTERMEDIATE_COLOR,
        description="Color model used for two-step color conversion",
    )

    model_config = SettingsConfigDict(env_prefix="IMGCORE_IMAGE_", extra="ignore")

    @field_validator("row_alignment")
    @classmethod
    def validate_row_alignment(cls, v):
        """Alignment must be a power of two."""
        if v & (v - 1):
            raise ValueError(f"Row alignment must be a power of two, got {v}")
        return v


class SystemConfig(BaseSettings):
    """System configuration."""

    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")
    log_format: str = Field(default=SystemConstants.LOG_FORMAT, description="Logging format")

    model_config = SettingsConfigDict(env_prefix="IMGCORE_SYSTEM_", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class Settings(BaseSettings):
    """Main library settings."""

    # Sub-configurations
    image: ImageConfig = Field(default_factory=ImageConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    # Config file support
    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    model_config = SettingsConfigDict(
        env_prefix="IMGCORE_",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values

        config_file = values.get("config_file") or os.getenv("IMGCORE_CONFIG_FILE")

        if config_file and Path(config_file).exists():
            import yaml

            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f)
                    if file_config:
                        # Environment values take precedence over the file
                        for key, value in file_config.items():
                            if key not in values or values[key] is None:
                                values[key] = value
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file {config_file}: {e}")

        return values

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_to_file(self, path: str) -> None:
        """Save current configuration to YAML file."""
        import yaml

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings object
    """
    get_settings.cache_clear()
    return get_settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure root logging from settings.

    The library itself never installs handlers; applications call this once.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.system.log_level),
        format=settings.system.log_format,
    )
