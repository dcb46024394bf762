# rs_config/cli_handler.py
# -*- coding: utf-8 -*-
"""
Handles Command Line Interface (CLI) output of the effective configuration.
"""

import logging
from typing import Optional

from common.command_utils import log_step
from rs_config.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def format_configuration(app_config: AppSettings) -> str:
    """
    Build a human-readable summary of the resolved settings.

    Parameters:
        app_config (AppSettings): The fully resolved application settings.

    Returns:
        str: The multi-line summary.
    """
    symbols = app_config.symbols
    brew = app_config.brew
    conda = app_config.conda

    config_text = f"{symbols.get('info', 'ℹ️')} Current effective configuration:\n\n"
    config_text += f"  Log Prefix:                    {app_config.log_prefix}\n"
    config_text += f"  Dry Run:                       {app_config.dry_run}\n"
    config_text += f"  Log File:                      {app_config.log_file or '[console only]'}\n"
    config_text += f"  Download Timeout (s):          {app_config.download_timeout}\n\n"

    config_text += "  Homebrew:\n"
    config_text += f"    Installer URL:               {brew.installer_url}\n"
    for index, group in enumerate(brew.formula_groups, start=1):
        config_text += f"    Formula Group {index}:             {' '.join(group)}\n"
    config_text += f"    Casks:                       {', '.join(brew.casks) or '[none]'}\n\n"

    config_text += "  Miniconda:\n"
    config_text += f"    Installer URL:               {conda.installer_url}\n"
    config_text += f"    Home:                        {conda.home}\n"
    config_text += f"    Installer Download Path:     {conda.installer_path}\n"
    config_text += f"    Shell Integration:           {conda.shell}\n"
    config_text += f"    Environment:                 {conda.env_name} (python={conda.python_version})\n\n"

    config_text += "  Python Packages:\n"
    for index, group in enumerate(app_config.pip.package_groups, start=1):
        config_text += f"    Group {index}:                     {' '.join(group)}\n"

    config_text += "\nConfiguration is loaded with precedence: CLI > YAML File > Environment Variables > Model Defaults."
    return config_text


def view_configuration(
    app_config: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """Log the effective configuration and return the rendered text."""
    logger_to_use = current_logger if current_logger else module_logger
    config_text = format_configuration(app_config)
    log_step(
        "Displaying current configuration:", "info", logger_to_use, app_config
    )
    log_step(f"\n{config_text}\n", "info", logger_to_use, app_config)
    return config_text
