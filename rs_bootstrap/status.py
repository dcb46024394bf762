# rs_bootstrap/status.py
# -*- coding: utf-8 -*-
"""
Read-only report of which parts of the tool manifest are present on the host.
"""

import logging
from typing import Any, Dict, Optional

from common.conda.conda_manager import CondaManager
from common.homebrew.brew_manager import BrewManager
from rs_config.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def collect_status(
    app_settings: AppSettings, logger: Optional[logging.Logger] = None
) -> Dict[str, Any]:
    """
    Check the status of every tool in the manifest without changing anything.

    Formulae and casks are only queried when Homebrew itself is present.

    Returns:
        A dictionary with the keys "homebrew", "formulae", "casks",
        "miniconda" and "environment".
    """
    logger_to_use = logger or module_logger
    brew = BrewManager(logger_to_use)
    conda = CondaManager(app_settings.conda.home, logger_to_use)

    brew_executable = brew.find_executable()
    formulae: Dict[str, bool] = {}
    casks: Dict[str, bool] = {}
    for group in app_settings.brew.formula_groups:
        for formula in group:
            formulae[formula] = bool(brew_executable) and brew.is_installed(formula)
    for cask in app_settings.brew.casks:
        casks[cask] = bool(brew_executable) and brew.is_installed(cask, cask=True)

    env_name = app_settings.conda.env_name
    # The run uses whichever conda activate_conda resolves, so look there.
    conda_executable = conda.resolve_executable()
    return {
        "homebrew": {
            "installed": brew_executable is not None,
            "path": brew_executable,
        },
        "formulae": formulae,
        "casks": casks,
        "miniconda": {
            "installed": conda.is_installed(),
            "path": str(conda.home),
        },
        "environment": {
            "name": env_name,
            "exists": conda.environment_exists(env_name, conda_executable),
            "prefix": str(conda.environment_prefix(env_name, conda_executable)),
        },
    }


def render_status(status: Dict[str, Any], app_settings: AppSettings) -> str:
    """Format the result of collect_status() as an operator-facing report."""
    symbols = app_settings.symbols

    def mark(flag: bool) -> str:
        return symbols.get("success", "✅") if flag else symbols.get("error", "❌")

    lines = ["Remote sensing workstation status:", ""]
    homebrew = status["homebrew"]
    lines.append(
        f"  {mark(homebrew['installed'])} Homebrew"
        + (f" ({homebrew['path']})" if homebrew["path"] else "")
    )
    lines.append("    Formulae:")
    for name, present in status["formulae"].items():
        lines.append(f"      {mark(present)} {name}")
    lines.append("    Casks:")
    for name, present in status["casks"].items():
        lines.append(f"      {mark(present)} {name}")

    miniconda = status["miniconda"]
    lines.append(f"  {mark(miniconda['installed'])} Miniconda ({miniconda['path']})")
    environment = status["environment"]
    lines.append(
        f"      {mark(environment['exists'])} environment '{environment['name']}' ({environment['prefix']})"
    )
    return "\n".join(lines)
