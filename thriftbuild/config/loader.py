"""Configuration loading for thriftbuild.

This module handles loading build settings from a YAML file and environment
variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: BuildSettings objects
- Side Effects: create_default_config writes a file
"""

import logging
import os
from pathlib import Path

import yaml

from .settings import BuildSettings

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "thriftbuild.yaml"

DEFAULT_CONFIG = """# thriftbuild configuration
# Every setting can be overridden with a THRIFTBUILD_<NAME> environment variable

log_level: "info"

# Thrift generator
generator_language: "csharp"
definition_suffix: ".thrift"

# Compiler
compiler_executable: "csc"
source_suffix: ".cs"
emit_debug_information: true

# Up-to-date detection
marker_name: "LAST_COMP_TIMESTAMP"
# "ordinal" compares marker strings character by character (compatible with
# existing markers); "numeric" compares them as integers
timestamp_comparison: "ordinal"

# Seconds before an external process is abandoned; leave unset to wait forever
# timeout_seconds: 600

clean_after_build: true
"""


class ConfigError(ValueError):
    """Raised when configuration values fail validation."""

    pass


def get_config_path() -> Path:
    """Get path to the project config file.

    Returns:
        $THRIFTBUILD_CONFIG if set, else thriftbuild.yaml in the working directory
    """
    env_override = os.environ.get("THRIFTBUILD_CONFIG")
    if env_override:
        return Path(env_override).expanduser()
    return Path.cwd() / CONFIG_FILE_NAME


def create_default_config(config_path: Path | None = None) -> Path:
    """Create default config file if it doesn't exist.

    Args:
        config_path: Target path (default: get_config_path())

    Returns:
        Path of the config file
    """
    config_path = config_path or get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")
    return config_path


def load_config(config_path: Path | None = None) -> BuildSettings:
    """Load build configuration from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables are prefixed with THRIFTBUILD_ (e.g., THRIFTBUILD_COMPILER_EXECUTABLE).
    A missing file is not an error; an unreadable one is logged and ignored.

    Args:
        config_path: Optional config file path (default: get_config_path())

    Returns:
        Validated build settings

    Raises:
        ConfigError: If a setting has an invalid value
    """
    if config_path is None:
        config_path = get_config_path()

    yaml_settings: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                yaml_settings = loaded
                logger.debug(f"Loaded config from {config_path}")
            else:
                logger.warning(f"Ignoring config {config_path}: expected a mapping")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            logger.info("Using default settings and environment variables")

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"THRIFTBUILD_{str(key).upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    try:
        settings = BuildSettings(**filtered_yaml)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug(
        f"Build configuration loaded: language={settings.generator_language}, "
        f"compiler={settings.compiler_executable}, comparison={settings.timestamp_comparison}"
    )

    return settings
