"""kernel.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol for the detekt-tasks terminal output.
No external dependencies allowed in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """detekt-tasks terminal output protocol.

    Three layers of methods:

    **General messages** -- usable from any module::

        console.info("Loaded project app")
        console.success("12 tasks registered")
        console.warning("kotlin-android not applied")
        console.error("Duplicate task name detektDebug")

    **Structured output** -- tables and key-value displays::

        console.table(["Task", "Kind"], [["detektDebug", "analysis"]])
        console.kv({"Group": "verification", "Sources": "4"})

    **Planning lifecycle** -- used by kernel/cli.py::

        console.step(1, 2, "Configuring project...")
        console.step_detail("applied kotlin-android")
        console.umbrella("detektMain", ["detektDebug", "detektRelease"])
    """

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    # -- Structured output ---------------------------------------------------

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        """Display a table with *headers* and *rows*."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...

    # -- Planning lifecycle -------------------------------------------------

    def step(self, current: int, total: int, description: str) -> None:
        """Display a pipeline step indicator ``[current/total] description``."""
        ...

    def step_detail(self, message: str) -> None:
        """Display an indented detail line under the current step."""
        ...

    def umbrella(self, name: str, dependencies: list[str]) -> None:
        """Display an umbrella task and the tasks it depends on."""
        ...

    def raw(self, text: str) -> None:
        """Emit *text* verbatim (no markup, no indentation)."""
        ...
