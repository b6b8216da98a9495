"""Configuration defaults and YAML loading."""

import os

import yaml

from .decomposer import DEFAULT_ROOT_SHEET_NAME
from .errors import ConfigError
from .sheet_names import SHEET_NAME_POLICIES
from .sheets import COLLISION_POLICIES
from .workbook_writer import ARRAY_FORMATS

DEFAULT_CONFIG = {
    "input_file": "input.json",
    "output_file": "output_file.xlsx",
    "root_sheet_name": DEFAULT_ROOT_SHEET_NAME,
    "on_name_collision": "error",
    "sheet_name_policy": "sanitize",
    "array_format": "json",
    "style_header": True,
    "log_level": "INFO",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_CHOICES = {
    "on_name_collision": COLLISION_POLICIES,
    "sheet_name_policy": SHEET_NAME_POLICIES,
    "array_format": ARRAY_FORMATS,
}


def load_config(config_path=None):
    """Load configuration from a YAML file, merged over :data:`DEFAULT_CONFIG`.

    A missing *config_path* (or ``None``) gives the defaults.
    """
    config = dict(DEFAULT_CONFIG)
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
        if not isinstance(user_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        config.update(user_config)
    return validate_config(config)


def validate_config(config):
    """Check option values; return *config* unchanged if they are valid."""
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigError(f"Unknown config option(s): {', '.join(unknown)}")

    for key, choices in _CHOICES.items():
        if config[key] not in choices:
            raise ConfigError(
                f"Invalid value '{config[key]}' for {key}. Must be one of {choices}."
            )

    root = config["root_sheet_name"]
    if not isinstance(root, str) or not root:
        raise ConfigError("root_sheet_name must be a non-empty string")
    if not isinstance(config["style_header"], bool):
        raise ConfigError("style_header must be true or false")
    if str(config["log_level"]).upper() not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid value '{config['log_level']}' for log_level. Must be one of {LOG_LEVELS}."
        )
    return config
