# rs_bootstrap/rs_platform.py
# -*- coding: utf-8 -*-
"""
Warns when the bootstrap runs anywhere but macOS.

The package lists (Homebrew casks, the macOS Miniconda installer, zsh
integration) only make sense on a Mac. The check never blocks the run.
"""

import logging
import platform

from rs_bootstrap.rs_utils import symbol
from rs_config.config_models import AppSettings

logger = logging.getLogger(__name__)

SUPPORTED_SYSTEM = "Darwin"


def check_platform(context: dict, app_settings: AppSettings, **kwargs) -> str:
    """
    Records the host operating system in the context and warns if it is not macOS.

    Returns:
        The name reported by platform.system().
    """
    system = platform.system()
    context["platform"] = system
    if system != SUPPORTED_SYSTEM:
        logger.warning(
            f"{symbol(app_settings, 'warning')} This bootstrap targets macOS; detected '{system}'. "
            "Homebrew casks and the macOS Miniconda installer will likely fail."
        )
    else:
        logger.info(
            f"{symbol(app_settings, 'info')} Running on macOS {platform.mac_ver()[0] or ''}".rstrip()
        )
    return system
