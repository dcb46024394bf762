# rs_bootstrap/rs_summary.py
# -*- coding: utf-8 -*-
"""Operator-facing completion message."""

import logging
from typing import List

from rs_bootstrap.rs_utils import failed_invocations, symbol
from rs_config.config_models import AppSettings

logger = logging.getLogger(__name__)


def completion_lines(app_settings: AppSettings) -> List[str]:
    """The lines telling the operator how to use the environment later."""
    return [
        "Setup complete! To activate your environment, please type in the following command.",
        "",
        f"conda activate {app_settings.conda.env_name}",
        "Good luck, and happy coding!",
    ]


def print_completion_instructions(
    context: dict, app_settings: AppSettings, **kwargs
) -> str:
    """
    Prints how to reactivate the environment and lists any failed invocations.

    Returns:
        The activation command that was printed.
    """
    failures = failed_invocations(context)
    if failures:
        logger.warning(
            f"{symbol(app_settings, 'warning')} {len(failures)} invocation(s) failed; "
            "check the output above:"
        )
        for invocation in failures:
            logger.warning(f"   - {invocation}")

    for line in completion_lines(app_settings):
        print(line)
    return f"conda activate {app_settings.conda.env_name}"
