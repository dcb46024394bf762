# common/homebrew/brew_manager.py
# -*- coding: utf-8 -*-
import logging
import subprocess
from typing import List, Optional, Union

from common.command_utils import resolve_command, run_command
from common.network_utils import DEFAULT_TIMEOUT, fetch_text
from rs_config.config_models import AppSettings

# Where the official installer puts `brew` on Apple Silicon and Intel Macs.
HOMEBREW_EXECUTABLE_CANDIDATES = (
    "/opt/homebrew/bin/brew",
    "/usr/local/bin/brew",
)


class BrewManager:
    """
    A centralized manager for Homebrew formulae and casks using the `brew`
    command-line tool.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the BrewManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)

    def find_executable(self) -> Optional[str]:
        """Return the path of `brew`, looking on PATH and then at the standard prefixes."""
        return resolve_command("brew", HOMEBREW_EXECUTABLE_CANDIDATES)

    def _brew(self, app_settings: AppSettings) -> str:
        executable = self.find_executable()
        if executable is None and app_settings.dry_run:
            # A dry run may plan brew calls before Homebrew exists.
            return "brew"
        if executable is None:
            raise FileNotFoundError(
                "'brew' not found on PATH or at "
                f"{', '.join(HOMEBREW_EXECUTABLE_CANDIDATES)}. Is Homebrew installed?"
            )
        return executable

    def install_homebrew(
        self,
        installer_url: str,
        app_settings: AppSettings,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Fetches the official install script and runs it with bash.

        The script is interactive (it asks for the sudo password and for
        confirmation), so its output is not captured.

        Raises:
            requests.exceptions.RequestException: If the script cannot be fetched.
            subprocess.CalledProcessError: If the installer exits non-zero.
        """
        self.logger.info(f"Installing Homebrew from {installer_url}...")
        if app_settings.dry_run:
            run_command(
                ["/bin/bash", "-c", f"$(curl -fsSL {installer_url})"],
                app_settings,
                current_logger=self.logger,
            )
            return

        script = fetch_text(installer_url, timeout, self.logger)
        run_command(
            ["/bin/bash", "-c", script],
            app_settings,
            current_logger=self.logger,
        )
        self.logger.info("Homebrew installer finished.")

    def update(
        self, app_settings: AppSettings, raise_error: bool = False
    ) -> bool:
        """
        Updates Homebrew and its formula index using 'brew update'.

        Args:
            app_settings: The application settings.
            raise_error: Whether to raise an exception on failure.

        Returns:
            True if successful, False otherwise.
        """
        self.logger.info("Updating Homebrew via 'brew update'...")
        try:
            run_command(
                [self._brew(app_settings), "update"],
                app_settings,
                current_logger=self.logger,
            )
            self.logger.info("Homebrew updated successfully.")
            return True
        except Exception as e:
            self.logger.error(f"Failed to update Homebrew: {e}")
            if raise_error:
                raise
            return False

    def install(
        self,
        formulae: Union[List[str], str],
        app_settings: AppSettings,
        raise_error: bool = False,
    ) -> bool:
        """
        Installs one or more formulae with a single 'brew install' call.

        Already installed formulae are left to brew, which reports them and
        moves on.

        Args:
            formulae: A single formula name or a list of formula names.
            app_settings: The application settings.
            raise_error: Whether to raise an exception on failure.

        Returns:
            True if successful, False otherwise.
        """
        if not isinstance(formulae, list):
            formulae = [formulae]
        return self._install(formulae, app_settings, [], raise_error)

    def install_cask(
        self,
        casks: Union[List[str], str],
        app_settings: AppSettings,
        raise_error: bool = False,
    ) -> bool:
        """
        Installs GUI applications with a single 'brew install --cask' call.

        Args:
            casks: A single cask name or a list of cask names.
            app_settings: The application settings.
            raise_error: Whether to raise an exception on failure.

        Returns:
            True if successful, False otherwise.
        """
        if not isinstance(casks, list):
            casks = [casks]
        return self._install(casks, app_settings, ["--cask"], raise_error)

    def _install(
        self,
        names: List[str],
        app_settings: AppSettings,
        flags: List[str],
        raise_error: bool,
    ) -> bool:
        kind = "casks" if flags else "formulae"
        if not names:
            self.logger.info(f"No {kind} requested.")
            return True

        self.logger.info(f"Installing {kind}: {', '.join(names)}")
        try:
            run_command(
                [self._brew(app_settings), "install"] + flags + names,
                app_settings,
                current_logger=self.logger,
            )
            self.logger.info(f"Installed {kind}: {', '.join(names)}")
            return True
        except Exception as e:
            self.logger.error(
                f"Failed to install {kind} {', '.join(names)}: {e}"
            )
            if raise_error:
                raise
            return False

    def is_installed(self, name: str, cask: bool = False) -> bool:
        """
        Checks whether a formula (or cask) is installed via 'brew list --versions'.

        Returns:
            True if brew lists the package, False if it does not or brew is missing.
        """
        executable = self.find_executable()
        if executable is None:
            return False
        cmd = [executable, "list"] + (["--cask"] if cask else []) + [
            "--versions",
            name,
        ]
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, check=False
            )
        except OSError as e:
            self.logger.warning(f"Could not query brew for '{name}': {e}")
            return False
        self.logger.debug(
            f"brew list for {name}: rc={result.returncode}, stdout='{result.stdout.strip()}'"
        )
        return result.returncode == 0 and bool(result.stdout.strip())
