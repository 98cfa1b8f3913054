"""Configuration management for the apikeygen CLI.

Settings are stored as YAML in a cross-platform config directory. Without a config
file every setting keeps the value the backend tooling has always used.
"""

import logging
from pathlib import Path
from typing import Literal

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from apikeygen.keys.generator import KEY_LENGTH
from apikeygen.keys.properties import KEYS_PROPERTY, MAX_LINE_LENGTH, PROPERTIES_FILE

logger = logging.getLogger(__name__)

# Linux: ~/.config/apikeygen
# macOS: ~/Library/Application Support/apikeygen
# Windows: C:\\Users\\<user>\\AppData\\Local\\apikeygen
CONFIG_DIR = Path(user_config_dir("apikeygen", appauthor=False))
CONFIG_FILE = CONFIG_DIR / "config.yaml"


class PropertiesConfig(BaseModel):
    """Target properties file settings."""

    path: Path = Field(
        default=PROPERTIES_FILE,
        description="Properties file, relative to the working directory",
    )
    atomic_write: bool = Field(
        default=True, description="Replace the file via a temporary file and rename"
    )
    max_line_length: int = Field(default=MAX_LINE_LENGTH, ge=1, description="Longest line read")


class KeysConfig(BaseModel):
    """Generated key settings."""

    property: str = Field(default=KEYS_PROPERTY, min_length=1, description="Keys property name")
    length: int = Field(default=KEY_LENGTH, ge=1, le=1024, description="Key length")
    sampling: Literal["modulo", "rejection"] = Field(
        default="modulo",
        description="'modulo' matches existing keys, 'rejection' is exactly uniform",
    )


class CLIConfig(BaseModel):
    """Complete CLI configuration."""

    properties: PropertiesConfig = Field(default_factory=PropertiesConfig)
    keys: KeysConfig = Field(default_factory=KeysConfig)


def load_config(path: Path | None = None) -> CLIConfig:
    """Load configuration from file.

    A missing or unreadable file yields the defaults.
    """
    config_file = path or CONFIG_FILE
    if not config_file.exists():
        return CLIConfig()

    try:
        with open(config_file) as f:
            data = yaml.safe_load(f) or {}
            return CLIConfig(**data)
    except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
        logger.warning(f"Ignoring invalid config file {config_file}: {e}")
        return CLIConfig()


def get_effective_config(
    config_path: Path | None = None,
    properties_file: Path | None = None,
    unbiased: bool = False,
    in_place: bool = False,
) -> CLIConfig:
    """Get effective config with command-line overrides applied.

    Args:
        config_path: Config file to read instead of the default location
        properties_file: Override the properties file path
        unbiased: Force rejection sampling
        in_place: Rewrite the properties file in place instead of atomically

    Returns:
        Effective configuration
    """
    config = load_config(config_path)

    if properties_file:
        config.properties.path = properties_file
    if unbiased:
        config.keys.sampling = "rejection"
    if in_place:
        config.properties.atomic_write = False

    return config


def get_config_paths() -> dict[str, Path]:
    """Get paths to config files for debugging."""
    return {
        "config_dir": CONFIG_DIR,
        "config_file": CONFIG_FILE,
    }
