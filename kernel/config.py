"""
kernel/config.py: Command-line defaults and logging settings.

Task, extension and plugin-id names belong to the modules that own them;
this file only carries the settings of the ``detekt-tasks`` entry point.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Project description
# ---------------------------------------------------------------------------

# File looked up in the current directory when no project path is given
DEFAULT_PROJECT_FILE = "detekt-project.json"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOGGER_NAME = "detekt_tasks"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

# "rich" | "plain" | "auto"
CONSOLE_BACKEND = os.environ.get("DETEKT_TASKS_CONSOLE", "auto")
