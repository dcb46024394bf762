# rs_bootstrap/rs_utils.py
# -*- coding: utf-8 -*-
"""
Helpers shared by the bootstrap tasks: the run context keys and the
bookkeeping of failed package manager invocations.
"""

from typing import Any, Dict, List

from common.command_utils import get_symbols
from rs_config.config_models import AppSettings

# Keys of the orchestrator context shared between tasks.
CTX_BREW_EXECUTABLE = "brew_executable"
CTX_CONDA_EXECUTABLE = "conda_executable"
CTX_ACTIVE_ENV = "active_env"
CTX_FAILED_INVOCATIONS = "failed_invocations"
CTX_INSTALLERS_RUN = "installers_run"


def new_context() -> Dict[str, Any]:
    return {
        CTX_BREW_EXECUTABLE: None,
        CTX_CONDA_EXECUTABLE: None,
        CTX_ACTIVE_ENV: None,
        CTX_FAILED_INVOCATIONS: [],
        CTX_INSTALLERS_RUN: [],
    }


def record_failure(context: Dict[str, Any], invocation: str) -> None:
    """Remember a failed invocation so the run can report it at the end."""
    context.setdefault(CTX_FAILED_INVOCATIONS, []).append(invocation)


def record_installer_run(context: Dict[str, Any], installer: str) -> None:
    context.setdefault(CTX_INSTALLERS_RUN, []).append(installer)


def failed_invocations(context: Dict[str, Any]) -> List[str]:
    return list(context.get(CTX_FAILED_INVOCATIONS, []))


def symbol(app_settings: AppSettings, name: str) -> str:
    return get_symbols(app_settings).get(name, "")
