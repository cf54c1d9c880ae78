"""Host collaborators injected into protocol backends.

The plugin manager owns the base path, its path expansion conventions and
the place errors are shown to the user. Backends only talk to it through
the :class:`Host` protocol so they can be exercised without a host.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Host(Protocol):
    """Services the plugin manager provides to protocol backends."""

    def base_path(self) -> str:
        """Root directory under which repositories are stored."""
        ...

    def expand(self, path: str) -> str:
        """Expand ``~`` and relative paths the way the host does."""
        ...

    def error(self, message: str) -> None:
        """Report a configuration error to the user."""
        ...


class LocalHost:
    """Standalone host used by the CLI and tests.

    Errors are logged and kept in :attr:`errors` so callers can inspect
    them afterwards.
    """

    def __init__(self, base_path: str | Path, cwd: str | Path | None = None) -> None:
        self._base_path = str(Path(base_path).expanduser())
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.errors: list[str] = []

    def base_path(self) -> str:
        return self._base_path

    def expand(self, path: str) -> str:
        expanded = os.path.expanduser(path)
        if not os.path.isabs(expanded):
            expanded = str(self.cwd / expanded)
        return os.path.normpath(expanded)

    def error(self, message: str) -> None:
        logger.error(message)
        self.errors.append(message)
