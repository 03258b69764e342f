"""kernel.console -- terminal output for the detekt-tasks CLI.

``console`` is the single output object for plans, task details and errors::

    from kernel.console import console

    console.step(1, 2, "Configuring project from detekt-project.json")
    console.table(["Task", "Kind"], [["detektDebug", "analysis"]])
    console.umbrella("detektMain", ["detektDebug"])

``cli.main`` picks the backend once, from ``kernel.config.CONSOLE_BACKEND``::

    configure(backend="auto")  # "rich" | "plain" | "auto"

Plans piped into another tool (``plan --json``, redirected output) go through
the plain backend unless ``rich`` is requested explicitly.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from kernel.console._plain import PlainBackend

if TYPE_CHECKING:
    from kernel.console._protocol import ConsoleProtocol

_backend: ConsoleProtocol = PlainBackend()


def _create(backend: str) -> ConsoleProtocol:
    if backend == "auto":
        backend = "rich" if sys.stdout.isatty() else "plain"
    if backend == "plain":
        return PlainBackend()
    if backend == "rich":
        from kernel.console._rich import RichBackend

        return RichBackend()
    msg = f"Unknown console backend: {backend!r}"
    raise ValueError(msg)


def configure(*, backend: str = "auto") -> None:
    """Select the backend behind ``console``.

    Raises:
        ValueError: If ``backend`` is not "auto", "rich" or "plain".
    """
    global _backend  # noqa: PLW0603
    _backend = _create(backend)


class _ConsoleProxy:
    """Forwards every call to the backend chosen by the latest ``configure``."""

    def __getattr__(self, name: str) -> object:
        return getattr(_backend, name)


console: ConsoleProtocol = _ConsoleProxy()  # type: ignore[assignment]
