# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for managing and executing sequences of tasks.
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional


class Orchestrator:
    """
    Runs a series of named tasks in order.

    A task may carry a precondition predicate (`skip_if`). When the predicate
    reports the task's goal as already satisfied, the task is skipped. There is
    no rollback: a failed task leaves the host as it found it mid-way.
    """

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Shared context for tasks to pass state between each other
        self.context: Dict[str, Any] = {}
        self.skipped_tasks: List[str] = []
        self.failed_tasks: List[str] = []

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
        fatal: bool = True,
        skip_if: Optional[Callable[[Dict[str, Any], Any], bool]] = None,
    ):
        """
        Adds a task to the execution list.

        Args:
            name: A human-readable name for the task.
            func: The function to execute for this task.
            args: A list of positional arguments to pass to the function.
            kwargs: A dictionary of keyword arguments to pass to the function.
            fatal: If True, a failure in this task will halt the entire orchestration.
            skip_if: Optional predicate called with (context, app_settings) right
                before the task would run. A truthy result skips the task.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
            "fatal": fatal,
            "skip_if": skip_if,
        })
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> bool:
        """
        Executes all added tasks in sequence.

        A fatal failure exits the process with status 1.

        Returns:
            True if every task completed or was skipped, False if any
            non-fatal task failed.
        """
        self.logger.info("Orchestration started.")
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.info(
                f"--- Stage {i + 1}: Running task '{task_name}' ---"
            )

            try:
                skip_if = task.get("skip_if")
                if skip_if is not None and skip_if(
                    self.context, self.app_settings
                ):
                    self.logger.info(
                        f"⏭️ Task '{task_name}' already satisfied. Skipping."
                    )
                    self.skipped_tasks.append(task_name)
                    continue

                # Pass the shared context to every function
                task["kwargs"]["context"] = self.context
                task["kwargs"]["app_settings"] = self.app_settings

                result = task["func"](*task["args"], **task["kwargs"])

                self.context[f"{task_name}_result"] = result

                self.logger.info(
                    f"✅ Task '{task_name}' completed successfully."
                )

            except Exception as e:
                self.logger.critical(
                    f"🔥 Task '{task_name}' failed: {e}", exc_info=True
                )
                self.failed_tasks.append(task_name)
                if task.get("fatal", True):
                    self.logger.error(
                        "A fatal error occurred. Halting orchestration and exiting application."
                    )
                    sys.exit(1)
                else:
                    self.logger.warning(
                        f"Task '{task_name}' was non-fatal. Continuing orchestration."
                    )

        if self.failed_tasks:
            self.logger.warning(
                f"Orchestration finished with failed tasks: {', '.join(self.failed_tasks)}"
            )
            return False
        self.logger.info("✨ Orchestration finished successfully.")
        return True
