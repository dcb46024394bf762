# rs_bootstrap/rs_homebrew.py
# -*- coding: utf-8 -*-
"""
Homebrew tasks of the bootstrap: make sure `brew` exists, refresh its index,
and install the command-line formulae and GUI casks of the tool manifest.

Each formula group and each cask is a separate `brew install` call. A failing
call is recorded in the context and the task moves on to the next one.
"""

import logging

from common.homebrew.brew_manager import BrewManager
from rs_bootstrap.rs_utils import (
    CTX_BREW_EXECUTABLE,
    record_failure,
    record_installer_run,
    symbol,
)
from rs_config.config_models import AppSettings

logger = logging.getLogger(__name__)


def homebrew_present(context: dict, app_settings: AppSettings) -> bool:
    """Precondition of ensure_homebrew: is a `brew` binary resolvable?"""
    executable = BrewManager(logger).find_executable()
    if executable:
        context[CTX_BREW_EXECUTABLE] = executable
        logger.info(
            f"{symbol(app_settings, 'success')} Homebrew found at {executable}."
        )
        return True
    return False


def ensure_homebrew(context: dict, app_settings: AppSettings, **kwargs) -> None:
    """
    Installs Homebrew with its official install script.

    Raises:
        RuntimeError: If the installer finished but `brew` still cannot be found.
    """
    logger.info(
        f"{symbol(app_settings, 'info')} Homebrew not found. Installing Homebrew..."
    )
    record_installer_run(context, "homebrew")
    manager = BrewManager(logger)
    manager.install_homebrew(
        app_settings.brew.installer_url,
        app_settings,
        timeout=app_settings.download_timeout,
    )

    if app_settings.dry_run:
        return

    executable = manager.find_executable()
    if executable is None:
        raise RuntimeError(
            "Homebrew installer finished but 'brew' cannot be found."
        )
    context[CTX_BREW_EXECUTABLE] = executable
    logger.info(
        f"{symbol(app_settings, 'success')} Homebrew is now available at {executable}."
    )


def update_homebrew(context: dict, app_settings: AppSettings, **kwargs) -> bool:
    """Refreshes the Homebrew index with `brew update`."""
    logger.info(f"{symbol(app_settings, 'gear')} Updating Homebrew...")
    ok = BrewManager(logger).update(app_settings)
    if not ok:
        record_failure(context, "brew update")
    return ok


def install_cli_tools(context: dict, app_settings: AppSettings, **kwargs) -> int:
    """
    Installs the command-line formula groups, one `brew install` per group.

    Returns:
        The number of groups that failed.
    """
    groups = app_settings.brew.formula_groups
    all_names = [name for group in groups for name in group]
    logger.info(
        f"{symbol(app_settings, 'package')} Installing command-line tools via Homebrew: "
        f"{', '.join(all_names)}..."
    )
    manager = BrewManager(logger)
    failures = 0
    for group in groups:
        if not manager.install(list(group), app_settings):
            record_failure(context, f"brew install {' '.join(group)}")
            failures += 1
    return failures


def install_gui_applications(
    context: dict, app_settings: AppSettings, **kwargs
) -> int:
    """
    Installs the GUI applications, one `brew install --cask` per cask.

    Returns:
        The number of casks that failed.
    """
    casks = app_settings.brew.casks
    logger.info(
        f"{symbol(app_settings, 'package')} Installing GUI applications via Homebrew Cask: "
        f"{', '.join(casks)}..."
    )
    manager = BrewManager(logger)
    failures = 0
    for cask in casks:
        if not manager.install_cask([cask], app_settings):
            record_failure(context, f"brew install --cask {cask}")
            failures += 1
    return failures
