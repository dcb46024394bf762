#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the remote sensing workstation bootstrap.

Run without arguments it installs Homebrew, the command-line and GUI tools,
Miniconda, the `climate-base` conda environment and its Python packages.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from pydantic_settings import SettingsError

from common.logging_config import setup_logging
from rs_bootstrap import (
    collect_status,
    render_status,
    run_remote_sensing_bootstrap,
)
from rs_config.cli_handler import view_configuration
from rs_config.config_loader import CONFIG_FILE_DEFAULT, load_app_settings

SERVICE_NAME = "remote-sensing-setup"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Install Homebrew, command-line and GUI tools, Miniconda, a pinned "
            "conda environment and the Python packages of a remote sensing workflow."
        )
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILE_DEFAULT),
        help=f"Path to a YAML configuration file (default: {CONFIG_FILE_DEFAULT}, if present).",
    )
    parser.add_argument(
        "--env-name",
        dest="env_name",
        help="Name of the conda environment to create.",
    )
    parser.add_argument(
        "--python-version",
        dest="python_version",
        help="Python version the conda environment is pinned to.",
    )
    parser.add_argument(
        "--conda-home",
        dest="conda_home",
        type=Path,
        help="Directory Miniconda is installed into.",
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Log every command instead of running it; download nothing.",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        type=Path,
        help="Also write JSON-structured logs to this file.",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--status",
        action="store_true",
        help="Report which tools are installed and exit without changing anything.",
    )
    mode.add_argument(
        "--view-config",
        dest="view_config",
        action="store_true",
        help="Show the effective configuration and exit.",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    return parser.parse_args(args)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the bootstrap.

    Returns:
        0 when every step succeeded, 1 when any installation failed and 2 for
        invalid configuration.
    """
    args = parse_args(argv)
    logger = setup_logging(
        SERVICE_NAME,
        log_level="DEBUG" if args.verbose else "INFO",
        log_file_path=args.log_file,
    )

    try:
        app_settings = load_app_settings(
            cli_args=args, config_file_path=args.config, current_logger=logger
        )
    except (ValidationError, SettingsError) as e:
        logger.critical(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    if app_settings.log_file and app_settings.log_file != args.log_file:
        # The log file came from YAML or the environment.
        logger = setup_logging(
            SERVICE_NAME,
            log_level="DEBUG" if args.verbose else "INFO",
            log_file_path=app_settings.log_file,
        )

    if args.view_config:
        view_configuration(app_settings, logger)
        return EXIT_OK

    if args.status:
        print(render_status(collect_status(app_settings, logger), app_settings))
        return EXIT_OK

    success, _ = run_remote_sensing_bootstrap(app_settings, logger)
    return EXIT_OK if success else EXIT_FAILED


def main_entry() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
