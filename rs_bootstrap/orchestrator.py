# rs_bootstrap/orchestrator.py
# -*- coding: utf-8 -*-
"""
This module defines the bootstrap sequence for a remote sensing workstation.
It leverages the centralized orchestrator to execute a fixed, ordered list of
tasks, each responsible for one installation phase.

Ordering is what ties the tasks together: Homebrew exists before any
`brew install`, Miniconda exists before an environment is created, and the
environment is active before packages are installed into it. The two
installer tasks carry precondition predicates and are skipped when their
tool is already present; everything else runs on every invocation and leaves
idempotency to the package managers.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from common.orchestrator import Orchestrator
from rs_bootstrap.rs_conda import (
    activate_conda,
    create_conda_environment,
    ensure_miniconda,
    miniconda_present,
)
from rs_bootstrap.rs_homebrew import (
    ensure_homebrew,
    homebrew_present,
    install_cli_tools,
    install_gui_applications,
    update_homebrew,
)
from rs_bootstrap.rs_platform import check_platform
from rs_bootstrap.rs_python_packages import install_python_packages
from rs_bootstrap.rs_summary import print_completion_instructions
from rs_bootstrap.rs_utils import (
    CTX_INSTALLERS_RUN,
    failed_invocations,
    new_context,
    symbol,
)
from rs_config.config_models import AppSettings


def build_orchestrator(
    app_settings: AppSettings, logger: Optional[logging.Logger] = None
) -> Orchestrator:
    """
    Creates an orchestrator loaded with the bootstrap tasks in their fixed order.

    Homebrew and Miniconda installation are fatal: nothing after them can work
    without the tool. The remaining tasks are non-fatal so one broken package
    does not stop the rest of the run.
    """
    orchestrator = Orchestrator(app_settings, logger)
    orchestrator.context.update(new_context())

    orchestrator.add_task("Platform Check", check_platform, fatal=False)
    orchestrator.add_task(
        "Homebrew", ensure_homebrew, fatal=True, skip_if=homebrew_present
    )
    orchestrator.add_task("Homebrew Update", update_homebrew, fatal=False)
    orchestrator.add_task(
        "Command-line Tools", install_cli_tools, fatal=False
    )
    orchestrator.add_task(
        "GUI Applications", install_gui_applications, fatal=False
    )
    orchestrator.add_task(
        "Miniconda", ensure_miniconda, fatal=True, skip_if=miniconda_present
    )
    orchestrator.add_task("Conda Activation", activate_conda, fatal=False)
    orchestrator.add_task(
        "Conda Environment", create_conda_environment, fatal=False
    )
    orchestrator.add_task(
        "Python Packages", install_python_packages, fatal=False
    )
    orchestrator.add_task(
        "Completion Instructions", print_completion_instructions, fatal=False
    )
    return orchestrator


def run_remote_sensing_bootstrap(
    app_settings: AppSettings, logger: Optional[logging.Logger] = None
) -> Tuple[bool, Dict[str, Any]]:
    """
    Runs the full bootstrap sequence against the host.

    Args:
        app_settings: The resolved application settings.
        logger: An optional logger instance.

    Returns:
        A tuple containing:
        - success (bool): True if every task and every package manager
                          invocation succeeded.
        - context (dict): The orchestration context, including the resolved
                          executables, the active environment and the list of
                          failed invocations.
    """
    effective_logger = logger or logging.getLogger(__name__)
    effective_logger.info(
        f"{symbol(app_settings, 'rocket')} {app_settings.log_prefix} Starting remote sensing workstation bootstrap..."
    )
    if app_settings.dry_run:
        effective_logger.info(
            f"{symbol(app_settings, 'info')} Dry run: commands are logged, nothing is downloaded or executed."
        )

    orchestrator = build_orchestrator(app_settings, effective_logger)
    tasks_ok = orchestrator.run()
    context = orchestrator.context
    context["skipped_tasks"] = list(orchestrator.skipped_tasks)
    context["failed_tasks"] = list(orchestrator.failed_tasks)

    success = tasks_ok and not failed_invocations(context)
    if not context.get(CTX_INSTALLERS_RUN):
        effective_logger.info(
            f"{symbol(app_settings, 'info')} Homebrew and Miniconda were already present; no installer was run."
        )

    if success:
        effective_logger.info(
            f"{symbol(app_settings, 'success')} Bootstrap finished without errors."
        )
    else:
        effective_logger.error(
            f"{symbol(app_settings, 'error')} Bootstrap finished with errors."
        )
    return success, context
