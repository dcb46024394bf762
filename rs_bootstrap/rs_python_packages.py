# rs_bootstrap/rs_python_packages.py
# -*- coding: utf-8 -*-
"""
Installs the Python package groups into the active conda environment.
"""

import logging

from common.conda.conda_manager import CondaManager
from rs_bootstrap.rs_utils import (
    CTX_ACTIVE_ENV,
    CTX_CONDA_EXECUTABLE,
    record_failure,
    symbol,
)
from rs_config.config_models import AppSettings

logger = logging.getLogger(__name__)


def install_python_packages(
    context: dict, app_settings: AppSettings, **kwargs
) -> int:
    """
    Runs one `pip install` per package group inside the active environment.

    Args:
        context (dict): The orchestrator's shared context. Must name an active
            environment and a conda executable.
        app_settings: The application settings.

    Returns:
        The number of groups that failed.

    Raises:
        RuntimeError: If no environment was activated earlier in the run.
    """
    env_name = context.get(CTX_ACTIVE_ENV)
    executable = context.get(CTX_CONDA_EXECUTABLE)
    if not env_name or not executable:
        raise RuntimeError(
            "No active conda environment; refusing to install Python packages."
        )

    logger.info(f"{symbol(app_settings, 'package')} Installing Python packages...")
    manager = CondaManager(app_settings.conda.home, logger)
    failures = 0
    for group in app_settings.pip.package_groups:
        if not manager.pip_install(executable, env_name, list(group), app_settings):
            record_failure(context, f"pip install {' '.join(group)}")
            failures += 1
    return failures
