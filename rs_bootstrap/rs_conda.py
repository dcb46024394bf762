# rs_bootstrap/rs_conda.py
# -*- coding: utf-8 -*-
"""
Miniconda tasks of the bootstrap.

`ensure_miniconda` is guarded by `miniconda_present`, which only checks that
the Miniconda home directory exists. `activate_conda` and
`create_conda_environment` record the resolved `conda` executable and the
active environment in the orchestrator context; later tasks run inside that
environment through `conda run`.
"""

import logging

from common.conda.conda_manager import CondaManager
from common.network_utils import download_file
from rs_bootstrap.rs_utils import (
    CTX_ACTIVE_ENV,
    CTX_CONDA_EXECUTABLE,
    record_installer_run,
    symbol,
)
from rs_config.config_models import AppSettings

logger = logging.getLogger(__name__)


def _manager(app_settings: AppSettings) -> CondaManager:
    return CondaManager(app_settings.conda.home, logger)


def miniconda_present(context: dict, app_settings: AppSettings) -> bool:
    """Precondition of ensure_miniconda: does the Miniconda home directory exist?"""
    manager = _manager(app_settings)
    if not manager.is_installed():
        return False

    logger.info(
        f"{symbol(app_settings, 'success')} Miniconda directory {manager.home} already exists."
    )
    if not manager.conda_executable.is_file():
        logger.warning(
            f"{symbol(app_settings, 'warning')} {manager.conda_executable} is missing; "
            f"the installation in {manager.home} looks incomplete. "
            "Remove the directory and run again to reinstall Miniconda."
        )
    return True


def ensure_miniconda(context: dict, app_settings: AppSettings, **kwargs) -> None:
    """
    Downloads the Miniconda installer, installs it non-interactively into the
    Miniconda home, and registers conda's shell integration.

    The downloaded installer is deleted afterwards, whether or not the
    installation succeeded.
    """
    conda_settings = app_settings.conda
    manager = _manager(app_settings)
    installer_path = conda_settings.installer_path

    logger.info(
        f"{symbol(app_settings, 'info')} Downloading and installing Miniconda..."
    )
    record_installer_run(context, "miniconda")
    try:
        if app_settings.dry_run:
            logger.info(
                f"{symbol(app_settings, 'info')} [dry-run] Would download "
                f"{conda_settings.installer_url} to {installer_path}"
            )
        else:
            download_file(
                conda_settings.installer_url,
                installer_path,
                timeout=app_settings.download_timeout,
                current_logger=logger,
            )
        manager.install(installer_path, app_settings)
        manager.init_shell(conda_settings.shell, app_settings)
    finally:
        if not app_settings.dry_run:
            installer_path.unlink(missing_ok=True)

    logger.info(
        f"{symbol(app_settings, 'success')} Miniconda installed into {manager.home}."
    )


def activate_conda(context: dict, app_settings: AppSettings, **kwargs) -> bool:
    """
    Resolves the `conda` command for the rest of the run.

    An unresolvable `conda` is only a warning here; the environment task that
    depends on it fails instead.

    Returns:
        True if conda was resolved.
    """
    manager = _manager(app_settings)
    executable = manager.resolve_executable()
    if executable is None and app_settings.dry_run:
        executable = str(manager.conda_executable)

    if executable is None:
        logger.warning(
            f"{symbol(app_settings, 'warning')} 'conda' is neither on PATH nor at "
            f"{manager.conda_executable}. Conda steps will fail."
        )
        return False

    context[CTX_CONDA_EXECUTABLE] = executable
    logger.info(
        f"{symbol(app_settings, 'success')} Using conda at {executable}."
    )
    return True


def create_conda_environment(
    context: dict, app_settings: AppSettings, **kwargs
) -> str:
    """
    Creates the named environment pinned to the configured Python version and
    marks it as the active environment.

    The environment is created on every run; an existing one is handled by
    conda.

    Returns:
        The name of the now active environment.

    Raises:
        RuntimeError: If no `conda` executable was resolved earlier in the run.
        subprocess.CalledProcessError: If conda fails.
    """
    executable = context.get(CTX_CONDA_EXECUTABLE)
    conda_settings = app_settings.conda
    if not executable:
        raise RuntimeError(
            f"conda is not available; cannot create environment '{conda_settings.env_name}'."
        )

    logger.info(
        f"{symbol(app_settings, 'step')} Creating and activating the "
        f"'{conda_settings.env_name}' conda environment..."
    )
    _manager(app_settings).create_environment(
        executable,
        conda_settings.env_name,
        conda_settings.python_version,
        app_settings,
    )
    context[CTX_ACTIVE_ENV] = conda_settings.env_name
    return conda_settings.env_name
