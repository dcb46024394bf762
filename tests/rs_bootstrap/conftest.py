# tests/rs_bootstrap/conftest.py
import subprocess
from pathlib import Path

import pytest

BREW = "/opt/homebrew/bin/brew"


class FakeHost:
    """
    Stands in for a Mac at the process boundary.

    Every command that reaches subprocess.run is recorded. The Homebrew and
    Miniconda installers leave the same traces on disk (or in the PATH lookup)
    as the real ones, so later phases see their effect.
    """

    def __init__(self, conda_home: Path, brew_installed: bool = False):
        self.conda_home = conda_home
        self.brew_installed = brew_installed
        self.commands = []
        self.downloads = []
        self.fail_on = []
        self.packages = set()

    @property
    def conda(self) -> str:
        return str(self.conda_home / "bin" / "conda")

    def install_miniconda(self) -> None:
        conda = self.conda_home / "bin" / "conda"
        conda.parent.mkdir(parents=True, exist_ok=True)
        conda.write_text("#!/bin/sh\n")
        conda.chmod(0o755)

    def run(self, cmd, **kwargs):
        cmd = list(cmd)
        self.commands.append(cmd)
        if any(cmd[: len(prefix)] == prefix for prefix in self.fail_on):
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="boom")

        if cmd[:2] == ["/bin/bash", "-c"]:
            self.brew_installed = True
        elif cmd[:1] == [BREW] and cmd[1:2] == ["install"]:
            self.packages.update(name for name in cmd[2:] if not name.startswith("-"))
        elif cmd[:1] == [BREW] and cmd[1:2] == ["list"]:
            if cmd[-1] not in self.packages:
                return subprocess.CompletedProcess(cmd, 1, "", "Error: No such keg")
            return subprocess.CompletedProcess(cmd, 0, f"{cmd[-1]} 1.0\n", "")
        elif cmd[:1] == ["bash"] and "-b" in cmd:
            self.install_miniconda()
        elif len(cmd) > 3 and cmd[1:3] == ["create", "-n"]:
            (self.conda_home / "envs" / cmd[3] / "conda-meta").mkdir(
                parents=True, exist_ok=True
            )
        return subprocess.CompletedProcess(cmd, 0, "", "")

    def resolve_brew(self, name, fallbacks=()):
        return BREW if self.brew_installed else None

    def resolve_conda(self, name, fallbacks=()):
        conda = self.conda_home / "bin" / "conda"
        return str(conda) if conda.is_file() else None

    def download(self, url, path, timeout=None, current_logger=None):
        self.downloads.append(url)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n# miniconda installer\n")
        return path

    def commands_starting_with(self, *prefix):
        return [cmd for cmd in self.commands if cmd[: len(prefix)] == list(prefix)]


@pytest.fixture
def fake_host(mocker, app_settings):
    """A macOS host with neither Homebrew nor Miniconda installed."""
    host = FakeHost(app_settings.conda.home)
    mocker.patch("common.command_utils.subprocess.run", side_effect=host.run)
    mocker.patch(
        "common.homebrew.brew_manager.resolve_command",
        side_effect=host.resolve_brew,
    )
    mocker.patch(
        "common.conda.conda_manager.resolve_command",
        side_effect=host.resolve_conda,
    )
    mocker.patch(
        "common.homebrew.brew_manager.fetch_text",
        return_value="echo installing homebrew",
    )
    mocker.patch(
        "rs_bootstrap.rs_conda.download_file", side_effect=host.download
    )
    mocker.patch(
        "rs_bootstrap.rs_platform.platform.system", return_value="Darwin"
    )
    return host
