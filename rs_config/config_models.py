# rs_config/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for the bootstrap configuration.

This module defines the tool manifest and every tunable of the remote sensing
workstation bootstrap, including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
HOMEBREW_INSTALLER_URL_DEFAULT: str = (
    "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
)
MINICONDA_INSTALLER_URL_DEFAULT: str = (
    "https://repo.anaconda.com/miniconda/Miniconda3-latest-MacOSX-x86_64.sh"
)
LOG_PREFIX_DEFAULT: str = "[RS-SETUP]"

CONDA_ENV_NAME_DEFAULT: str = "climate-base"
CONDA_PYTHON_VERSION_DEFAULT: str = "3.9"
CONDA_SHELL_DEFAULT: str = "zsh"

DOWNLOAD_TIMEOUT_DEFAULT: int = 120

# One `brew install` invocation per group.
BREW_FORMULA_GROUPS_DEFAULT: List[List[str]] = [
    ["git"],
    ["gdal"],
    ["cdo", "nco"],
    ["awscli"],
]

BREW_CASKS_DEFAULT: List[str] = [
    "visual-studio-code",
    "rstudio",
    "qgis",
    "docker",
]

# One `pip install` invocation per group.
PIP_PACKAGE_GROUPS_DEFAULT: List[List[str]] = [
    ["numpy", "pandas", "scipy"],
    ["xarray", "netcdf4", "h5netcdf", "zarr"],
    ["rasterio", "geopandas", "pyproj"],
    ["earthengine-api"],
    ["matplotlib", "cartopy", "earthpy"],
    ["scikit-learn", "torch", "dask[complete]"],
]

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

_PYTHON_VERSION_RE = re.compile(r"^\d+(\.\d+){0,2}$")


def _check_groups(groups: List[List[str]]) -> List[List[str]]:
    for index, group in enumerate(groups):
        if not group or any(not str(name).strip() for name in group):
            raise ValueError(
                f"Package group #{index + 1} is empty or contains a blank name."
            )
    return groups


class HomebrewSettings(BaseSettings):
    """Homebrew installer location and the formulae/casks to install."""
    model_config = SettingsConfigDict(env_prefix="RS_BREW_", extra="ignore")

    installer_url: str = Field(
        default=HOMEBREW_INSTALLER_URL_DEFAULT,
        description="URL of the official Homebrew install script.",
    )
    formula_groups: List[List[str]] = Field(
        default_factory=lambda: [list(g) for g in BREW_FORMULA_GROUPS_DEFAULT],
        description="Command-line formulae, installed with one `brew install` per group.",
    )
    casks: List[str] = Field(
        default_factory=lambda: list(BREW_CASKS_DEFAULT),
        description="GUI applications, installed with one `brew install --cask` each.",
    )

    @field_validator("formula_groups")
    @classmethod
    def _validate_formula_groups(cls, value: List[List[str]]) -> List[List[str]]:
        return _check_groups(value)

    @field_validator("casks")
    @classmethod
    def _validate_casks(cls, value: List[str]) -> List[str]:
        if any(not cask.strip() for cask in value):
            raise ValueError("Cask names must not be blank.")
        return value


class CondaSettings(BaseSettings):
    """Miniconda location and the named environment to create."""
    model_config = SettingsConfigDict(env_prefix="RS_CONDA_", extra="ignore")

    installer_url: str = Field(
        default=MINICONDA_INSTALLER_URL_DEFAULT,
        description="URL of the Miniconda installer for macOS.",
    )
    home: Path = Field(
        default_factory=lambda: Path.home() / "miniconda3",
        description="Directory Miniconda is installed into. Its existence is the install guard.",
    )
    download_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory the installer is downloaded to before it is run.",
    )
    shell: str = Field(
        default=CONDA_SHELL_DEFAULT,
        description="Shell whose profile `conda init` registers the integration in.",
    )
    env_name: str = Field(
        default=CONDA_ENV_NAME_DEFAULT,
        description="Name of the conda environment to create.",
    )
    python_version: str = Field(
        default=CONDA_PYTHON_VERSION_DEFAULT,
        description="Python version the environment is pinned to.",
    )

    @field_validator("python_version", mode="before")
    @classmethod
    def _validate_python_version(cls, value) -> str:
        # Unquoted YAML versions arrive as floats; `3.10` must be quoted to survive.
        value = str(value).strip()
        if not _PYTHON_VERSION_RE.match(value):
            raise ValueError(
                f"'{value}' is not a Python version such as '3', '3.9' or '3.9.18'."
            )
        return value

    @field_validator("home", "download_dir")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("env_name")
    @classmethod
    def _validate_env_name(cls, value: str) -> str:
        value = value.strip()
        if not value or re.search(r"[\s/\\]", value):
            raise ValueError(
                "Environment name must be non-empty and contain no whitespace or path separators."
            )
        return value

    @property
    def installer_filename(self) -> str:
        """File name of the installer, taken from the last URL segment."""
        return self.installer_url.rstrip("/").rsplit("/", 1)[-1]

    @property
    def installer_path(self) -> Path:
        return self.download_dir / self.installer_filename


class PipSettings(BaseSettings):
    """Python packages installed into the conda environment."""
    model_config = SettingsConfigDict(env_prefix="RS_PIP_", extra="ignore")

    package_groups: List[List[str]] = Field(
        default_factory=lambda: [list(g) for g in PIP_PACKAGE_GROUPS_DEFAULT],
        description="Python packages, installed with one `pip install` per group.",
    )

    @field_validator("package_groups")
    @classmethod
    def _validate_package_groups(cls, value: List[List[str]]) -> List[List[str]]:
        return _check_groups(value)


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix="RS_", extra="ignore")

    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT,
        description="Prefix for log messages from the bootstrap script.",
    )
    dry_run: bool = Field(
        default=False,
        description="Log every command instead of running it and skip all downloads.",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional path of a JSON log file.",
    )
    download_timeout: int = Field(
        default=DOWNLOAD_TIMEOUT_DEFAULT,
        description="Timeout in seconds for installer downloads.",
        gt=0,
    )

    brew: HomebrewSettings = Field(default_factory=HomebrewSettings)
    conda: CondaSettings = Field(default_factory=CondaSettings)
    pip: PipSettings = Field(default_factory=PipSettings)

    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )

    @field_validator("log_file")
    @classmethod
    def _expand_log_file(cls, value: Optional[Path]) -> Optional[Path]:
        return value.expanduser() if value is not None else None
