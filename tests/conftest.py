# tests/conftest.py
import logging
import os
from unittest.mock import MagicMock

import pytest

from rs_config.config_models import AppSettings


@pytest.fixture(autouse=True)
def isolate_rs_environment(monkeypatch):
    """Keep RS_* variables of the developer's shell out of the settings."""
    for key in list(os.environ):
        if key.startswith("RS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings(tmp_path):
    """AppSettings whose Miniconda paths live under the test's tmp_path."""
    return AppSettings(
        conda={
            "home": tmp_path / "miniconda3",
            "download_dir": tmp_path / "downloads",
        }
    )


@pytest.fixture
def dry_run_settings(tmp_path):
    return AppSettings(
        dry_run=True,
        conda={
            "home": tmp_path / "miniconda3",
            "download_dir": tmp_path / "downloads",
        },
    )
