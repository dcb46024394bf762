# common/conda/conda_manager.py
# -*- coding: utf-8 -*-
import logging
from pathlib import Path
from typing import List, Optional, Union

from common.command_utils import resolve_command, run_command
from rs_config.config_models import AppSettings


class CondaManager:
    """
    A manager for a Miniconda installation rooted at a fixed home directory.

    Commands are run through the `conda` executable inside that directory
    unless another `conda` is already on PATH.
    """

    def __init__(
        self,
        home: Union[str, Path],
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the CondaManager.
        Args:
            home: The Miniconda installation directory (e.g. ~/miniconda3).
            logger: An optional logging object.
        """
        self.home = Path(home).expanduser()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def conda_executable(self) -> Path:
        """The `conda` binary a Miniconda install at `home` provides."""
        return self.home / "bin" / "conda"

    def is_installed(self) -> bool:
        """
        Reports whether the Miniconda home directory exists.

        Only the directory is checked, so an interrupted install that left the
        directory behind is reported as installed.
        """
        return self.home.is_dir()

    def resolve_executable(self) -> Optional[str]:
        """Return the `conda` to use: PATH first, then the one under `home`."""
        return resolve_command("conda", [self.conda_executable])

    def installation_root(self, conda_executable: Optional[str] = None) -> Path:
        """
        The installation a `conda` binary belongs to.

        `conda` lives in `<root>/bin` or `<root>/condabin`; symlinks are
        followed. Without an executable this is `home`.
        """
        if not conda_executable:
            return self.home
        return Path(conda_executable).resolve().parent.parent

    def environment_prefix(
        self, env_name: str, conda_executable: Optional[str] = None
    ) -> Path:
        return self.installation_root(conda_executable) / "envs" / env_name

    def environment_exists(
        self, env_name: str, conda_executable: Optional[str] = None
    ) -> bool:
        return (
            self.environment_prefix(env_name, conda_executable) / "conda-meta"
        ).is_dir()

    def install(
        self, installer_path: Union[str, Path], app_settings: AppSettings
    ) -> None:
        """
        Runs the Miniconda installer in batch mode into `home`.

        Raises:
            subprocess.CalledProcessError: If the installer exits non-zero.
        """
        self.logger.info(f"Installing Miniconda into {self.home}...")
        run_command(
            ["bash", str(installer_path), "-b", "-p", str(self.home)],
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info(f"Miniconda installed into {self.home}.")

    def init_shell(self, shell: str, app_settings: AppSettings) -> None:
        """Registers conda's shell integration in the profile of `shell`."""
        self.logger.info(f"Registering conda shell integration for {shell}...")
        run_command(
            [str(self.conda_executable), "init", shell],
            app_settings,
            current_logger=self.logger,
        )

    def create_environment(
        self,
        conda_executable: str,
        env_name: str,
        python_version: str,
        app_settings: AppSettings,
    ) -> None:
        """
        Creates `env_name` with Python pinned to `python_version`.

        An existing environment of the same name is handled by conda itself.

        Raises:
            subprocess.CalledProcessError: If conda exits non-zero.
        """
        self.logger.info(
            f"Creating conda environment '{env_name}' with python={python_version}..."
        )
        run_command(
            [
                conda_executable,
                "create",
                "-n",
                env_name,
                f"python={python_version}",
                "-y",
            ],
            app_settings,
            current_logger=self.logger,
        )

    def pip_install(
        self,
        conda_executable: str,
        env_name: str,
        packages: List[str],
        app_settings: AppSettings,
        raise_error: bool = False,
    ) -> bool:
        """
        Installs packages with the pip of `env_name` in one invocation.

        Args:
            conda_executable: The `conda` binary to run pip through.
            env_name: The environment to install into.
            packages: The packages (pip requirement strings) to install.
            app_settings: The application settings.
            raise_error: Whether to raise an exception on failure.

        Returns:
            True if successful, False otherwise.
        """
        if not packages:
            self.logger.info("No Python packages requested.")
            return True

        self.logger.info(
            f"Installing into '{env_name}': {', '.join(packages)}"
        )
        try:
            run_command(
                [
                    conda_executable,
                    "run",
                    "--no-capture-output",
                    "-n",
                    env_name,
                    "python",
                    "-m",
                    "pip",
                    "install",
                ]
                + packages,
                app_settings,
                current_logger=self.logger,
            )
            return True
        except Exception as e:
            self.logger.error(
                f"Failed to install {', '.join(packages)} into '{env_name}': {e}"
            )
            if raise_error:
                raise
            return False
