# tests/rs_bootstrap/test_rs_conda.py
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests
from pytest_mock import MockerFixture

from rs_bootstrap.rs_conda import (
    activate_conda,
    create_conda_environment,
    ensure_miniconda,
    miniconda_present,
)
from rs_bootstrap.rs_utils import new_context


@pytest.fixture
def conda(mocker: MockerFixture, app_settings):
    """The CondaManager every conda task instantiates."""
    manager = MagicMock()
    manager.home = app_settings.conda.home
    manager.conda_executable = app_settings.conda.home / "bin" / "conda"
    mocker.patch("rs_bootstrap.rs_conda.CondaManager", return_value=manager)
    return manager


@pytest.fixture
def download(mocker: MockerFixture):
    def write_installer(url, path, timeout=None, current_logger=None):
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        Path(path).write_text("installer")
        return Path(path)

    return mocker.patch(
        "rs_bootstrap.rs_conda.download_file", side_effect=write_installer
    )


def test_miniconda_present_follows_home_directory(conda, app_settings):
    conda.is_installed.return_value = True
    assert miniconda_present(new_context(), app_settings) is True

    conda.is_installed.return_value = False
    assert miniconda_present(new_context(), app_settings) is False


def test_incomplete_miniconda_directory_is_reported(conda, app_settings, caplog):
    app_settings.conda.home.mkdir(parents=True)
    conda.is_installed.return_value = True

    assert miniconda_present(new_context(), app_settings) is True
    assert "looks incomplete" in caplog.text


def test_ensure_miniconda(conda, download, app_settings):
    context = new_context()
    installer = app_settings.conda.installer_path

    ensure_miniconda(context, app_settings)

    download.assert_called_once()
    assert download.call_args.args == (app_settings.conda.installer_url, installer)
    assert download.call_args.kwargs["timeout"] == app_settings.download_timeout
    conda.install.assert_called_once_with(installer, app_settings)
    conda.init_shell.assert_called_once_with("zsh", app_settings)
    assert not installer.exists()
    assert context["installers_run"] == ["miniconda"]


def test_ensure_miniconda_removes_installer_on_failure(
    conda, download, app_settings
):
    conda.install.side_effect = subprocess.CalledProcessError(1, "bash")

    with pytest.raises(subprocess.CalledProcessError):
        ensure_miniconda(new_context(), app_settings)

    assert not app_settings.conda.installer_path.exists()
    conda.init_shell.assert_not_called()


def test_ensure_miniconda_download_failure(conda, download, app_settings):
    download.side_effect = requests.exceptions.ConnectionError("offline")

    with pytest.raises(requests.exceptions.ConnectionError):
        ensure_miniconda(new_context(), app_settings)

    conda.install.assert_not_called()


def test_ensure_miniconda_dry_run_downloads_nothing(
    conda, download, dry_run_settings
):
    ensure_miniconda(new_context(), dry_run_settings)

    download.assert_not_called()
    conda.install.assert_called_once_with(
        dry_run_settings.conda.installer_path, dry_run_settings
    )


def test_activate_conda(conda, app_settings):
    conda.resolve_executable.return_value = "/usr/local/bin/conda"
    context = new_context()

    assert activate_conda(context, app_settings) is True
    assert context["conda_executable"] == "/usr/local/bin/conda"


def test_activate_conda_unresolved_only_warns(conda, app_settings):
    conda.resolve_executable.return_value = None
    context = new_context()

    assert activate_conda(context, app_settings) is False
    assert context["conda_executable"] is None


def test_activate_conda_dry_run_uses_home_binary(conda, dry_run_settings):
    conda.resolve_executable.return_value = None
    context = new_context()

    assert activate_conda(context, dry_run_settings) is True
    assert context["conda_executable"] == str(conda.conda_executable)


def test_create_conda_environment(conda, app_settings):
    context = new_context()
    context["conda_executable"] = "/usr/local/bin/conda"

    assert create_conda_environment(context, app_settings) == "climate-base"
    conda.create_environment.assert_called_once_with(
        "/usr/local/bin/conda", "climate-base", "3.9", app_settings
    )
    assert context["active_env"] == "climate-base"


def test_create_conda_environment_without_conda(conda, app_settings):
    context = new_context()

    with pytest.raises(RuntimeError, match="conda is not available"):
        create_conda_environment(context, app_settings)

    conda.create_environment.assert_not_called()
    assert context["active_env"] is None


def test_create_conda_environment_failure_leaves_no_active_env(
    conda, app_settings
):
    conda.create_environment.side_effect = subprocess.CalledProcessError(
        1, "conda"
    )
    context = new_context()
    context["conda_executable"] = "/usr/local/bin/conda"

    with pytest.raises(subprocess.CalledProcessError):
        create_conda_environment(context, app_settings)

    assert context["active_env"] is None
