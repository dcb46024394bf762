# tests/rs_config/test_config_models.py
# -*- coding: utf-8 -*-
"""
Tests for the settings models and their defaults.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from rs_config.config_models import (
    BREW_CASKS_DEFAULT,
    BREW_FORMULA_GROUPS_DEFAULT,
    PIP_PACKAGE_GROUPS_DEFAULT,
    AppSettings,
    CondaSettings,
    HomebrewSettings,
    PipSettings,
)


def test_default_manifest():
    settings = AppSettings()

    assert settings.brew.formula_groups == [
        ["git"],
        ["gdal"],
        ["cdo", "nco"],
        ["awscli"],
    ]
    assert settings.brew.casks == [
        "visual-studio-code",
        "rstudio",
        "qgis",
        "docker",
    ]
    assert settings.conda.env_name == "climate-base"
    assert settings.conda.python_version == "3.9"
    assert settings.conda.shell == "zsh"
    assert settings.conda.home == Path.home() / "miniconda3"
    assert settings.pip.package_groups == PIP_PACKAGE_GROUPS_DEFAULT
    assert settings.dry_run is False
    assert settings.log_file is None


def test_default_lists_are_not_shared():
    first = AppSettings()
    first.brew.formula_groups[0].append("git-lfs")
    first.brew.casks.append("iterm2")

    second = AppSettings()
    assert second.brew.formula_groups == BREW_FORMULA_GROUPS_DEFAULT
    assert second.brew.casks == BREW_CASKS_DEFAULT
    assert BREW_FORMULA_GROUPS_DEFAULT[0] == ["git"]


def test_installer_path_uses_url_file_name(tmp_path):
    conda = CondaSettings(
        installer_url="https://repo.anaconda.com/miniconda/Miniconda3-latest-MacOSX-arm64.sh",
        download_dir=tmp_path,
    )

    assert conda.installer_filename == "Miniconda3-latest-MacOSX-arm64.sh"
    assert conda.installer_path == tmp_path / "Miniconda3-latest-MacOSX-arm64.sh"


@pytest.mark.parametrize("version", ["3", "3.9", "3.11", "3.9.18"])
def test_python_version_accepted(version):
    assert CondaSettings(python_version=version).python_version == version


def test_python_version_float_from_yaml_is_stringified():
    assert CondaSettings(python_version=3.9).python_version == "3.9"


@pytest.mark.parametrize("version", ["", "three", "3.9-beta", ">=3.9"])
def test_python_version_rejected(version):
    with pytest.raises(ValidationError):
        CondaSettings(python_version=version)


@pytest.mark.parametrize("name", ["", "   ", "climate base", "envs/climate"])
def test_env_name_rejected(name):
    with pytest.raises(ValidationError):
        CondaSettings(env_name=name)


def test_empty_groups_rejected():
    with pytest.raises(ValidationError):
        HomebrewSettings(formula_groups=[["git"], []])
    with pytest.raises(ValidationError):
        PipSettings(package_groups=[["numpy", " "]])
    with pytest.raises(ValidationError):
        HomebrewSettings(casks=["qgis", ""])


def test_empty_manifest_lists_are_allowed():
    settings = AppSettings(brew={"formula_groups": [], "casks": []})

    assert settings.brew.formula_groups == []
    assert settings.brew.casks == []


def test_download_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        AppSettings(download_timeout=0)


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("RS_DRY_RUN", "true")
    monkeypatch.setenv("RS_CONDA_ENV_NAME", "ocean-color")
    monkeypatch.setenv("RS_CONDA_PYTHON_VERSION", "3.11")
    monkeypatch.setenv("RS_BREW_CASKS", '["qgis"]')

    settings = AppSettings()

    assert settings.dry_run is True
    assert settings.conda.env_name == "ocean-color"
    assert settings.conda.python_version == "3.11"
    assert settings.brew.casks == ["qgis"]


def test_user_paths_are_expanded():
    settings = AppSettings(
        log_file="~/logs/setup.jsonl",
        conda={"home": "~/miniconda3", "download_dir": "~/Downloads"},
    )

    assert settings.conda.home == Path.home() / "miniconda3"
    assert settings.conda.download_dir == Path.home() / "Downloads"
    assert settings.conda.installer_path == (
        Path.home() / "Downloads" / "Miniconda3-latest-MacOSX-x86_64.sh"
    )
    assert settings.log_file == Path.home() / "logs" / "setup.jsonl"
