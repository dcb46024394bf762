# rs_bootstrap/__init__.py
# -*- coding: utf-8 -*-
"""
Remote sensing workstation bootstrap.

This package contains the tasks that install Homebrew, the command-line and
GUI tools, Miniconda, a pinned conda environment and the Python packages of a
climate / remote sensing workflow, plus a read-only status report.
"""

from rs_bootstrap.orchestrator import run_remote_sensing_bootstrap
from rs_bootstrap.status import collect_status, render_status

__all__ = ["run_remote_sensing_bootstrap", "collect_status", "render_status"]
