"""Local filesystem adapter implementing PathCheckerPort.

Uses pathlib for all path operations. Relative paths are resolved against
a configurable base directory (the project directory); absolute paths are
used as given.
"""

from __future__ import annotations

import os
from pathlib import Path


class LocalFileSystem:
    """Concrete PathCheckerPort implementation backed by the local filesystem.

    Parameters
    ----------
    base_dir:
        Root directory that relative paths are resolved against.

    """

    def __init__(self, base_dir: str) -> None:
        self._base = Path(base_dir).resolve()

    def _resolve(self, path: str) -> Path:
        """Resolve a relative path against the base directory."""
        return self._base / path

    def path_exists(self, path: str) -> bool:
        """Return True if the file or directory exists."""
        return self._resolve(path).exists()

    @property
    def base_dir(self) -> str:
        """Return the base directory as a string."""
        return os.fspath(self._base)
