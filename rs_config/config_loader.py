# rs_config/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the bootstrap.

Handles loading settings from Pydantic model defaults, environment variables,
a YAML file, and command-line arguments, applying a specific order of
precedence:
1. Pydantic Model Defaults
2. Environment Variables (via Pydantic's BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "config.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates a dictionary `source` with values from another dictionary
    `overrides`. If a key exists in both dictionaries and its corresponding value
    is a dictionary, the function updates the nested dictionary recursively.
    Otherwise, it replaces or adds the value for the key in the `source` with the
    value from `overrides`. `None` values never replace an existing value.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. This dictionary gets modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to the `source`.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml_config(
    yaml_config_path: Path, logger_to_use: logging.Logger
) -> Dict[str, Any]:
    """Read a YAML mapping from disk, returning {} when it is missing or unusable."""
    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data and isinstance(yaml_data, dict):
        logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
        return yaml_data
    if yaml_data is not None:
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
    return {}


def _map_cli_args(cli_args: argparse.Namespace) -> Dict[str, Any]:
    """Translate argparse destinations into the nested settings layout."""
    cli_arg_dict = vars(cli_args)
    mapped_cli_values: Dict[str, Any] = {}
    conda_cli_values: Dict[str, Any] = {}

    for cli_key, cli_value in cli_arg_dict.items():
        if cli_value is None:
            continue

        if cli_key == "dry_run":
            # store_true flags default to False; only an explicit flag overrides.
            if cli_value:
                mapped_cli_values["dry_run"] = True
        elif cli_key == "log_file":
            mapped_cli_values["log_file"] = str(cli_value)
        elif cli_key == "env_name":
            conda_cli_values["env_name"] = cli_value
        elif cli_key == "python_version":
            conda_cli_values["python_version"] = cli_value
        elif cli_key == "conda_home":
            conda_cli_values["home"] = str(cli_value)

    if conda_cli_values:
        mapped_cli_values["conda"] = conda_cli_values
    return mapped_cli_values


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (`RS_*`, `RS_BREW_*`, `RS_CONDA_*`, `RS_PIP_*`),
       loaded by Pydantic BaseSettings.
    3. Values from the YAML configuration file (override the above).
    4. Command-Line Arguments (highest precedence, overrides all else).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file. Relative paths
            are resolved against the current working directory.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        pydantic.ValidationError: If the merged values do not validate.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # BaseSettings reads the environment here, so this dict already holds
    # Model Defaults < Environment Variables.
    current_values_dict = AppSettings().model_dump(exclude_defaults=False)

    yaml_data = _read_yaml_config(Path(config_file_path), logger_to_use)
    if yaml_data:
        current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        current_values_dict = _deep_update(
            current_values_dict, _map_cli_args(cli_args)
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except Exception as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise

    logger_to_use.debug(
        "Successfully loaded and validated application settings"
    )
    return final_settings
