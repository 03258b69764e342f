"""kernel.console._rich -- Rich-based TUI backend.

Provides coloured, structured terminal output using the Rich library.
Lazily imports Rich sub-modules so that startup cost is minimal.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "blue",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "step.num": "bold cyan",
        "step.desc": "default",
        "task": "magenta",
        "dim": "dim",
    }
)


class RichBackend:
    """ConsoleProtocol implementation backed by Rich."""

    def __init__(self) -> None:
        self._con = Console(theme=_THEME, highlight=False)

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        self._con.print(f"  {message}", style="info")

    def success(self, message: str) -> None:
        self._con.print(f"  ✓ {message}", style="success")

    def warning(self, message: str) -> None:
        self._con.print(f"  ⚠ {message}", style="warning")

    def error(self, message: str) -> None:
        self._con.print(f"  ✗ {message}", style="error")

    # -- Structured output ---------------------------------------------------

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        from rich.table import Table

        t = Table(title=title or None, box=box.SIMPLE, show_edge=False, pad_edge=True)
        for h in headers:
            t.add_column(h)
        for r in rows:
            t.add_row(*r)
        self._con.print(t)

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        from rich.table import Table

        t = Table(
            title=title or None,
            box=box.SIMPLE,
            show_header=False,
            show_edge=False,
            pad_edge=True,
        )
        t.add_column("Key", style="bold", justify="right")
        t.add_column("Value")
        for k, v in data.items():
            t.add_row(k, v)
        self._con.print(t)

    # -- Planning lifecycle -------------------------------------------------

    def step(self, current: int, total: int, description: str) -> None:
        self._con.print(f"\n  [step.num]\\[{current}/{total}][/] {description}")

    def step_detail(self, message: str) -> None:
        self._con.print(f"    [dim]{message}[/]")

    def umbrella(self, name: str, dependencies: list[str]) -> None:
        from rich.tree import Tree

        tree = Tree(f"[task]{name}[/]", guide_style="dim")
        if not dependencies:
            tree.add("[dim](no dependencies)[/]")
        for dep in dependencies:
            tree.add(dep)
        self._con.print()
        self._con.print(tree)

    def raw(self, text: str) -> None:
        # Console.out skips markup processing
        self._con.out(text, highlight=False)
