"""Capability interface implemented by every VCS protocol backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from plugrepo.models.command import CommandPlan
    from plugrepo.models.plugin import Plugin, PluginUpdate


@runtime_checkable
class ProtocolBackend(Protocol):
    """What the plugin manager needs from a VCS backend.

    Backends are plain classes constructed with a host; they satisfy this
    interface structurally and do not inherit from it. ``params`` is the
    backend's own configuration model, passed on every call.
    """

    name: str

    def default_params(self) -> Any:
        """Default configuration for this backend."""
        ...

    def detect(self, plugin: Plugin, params: Any) -> PluginUpdate | None:
        """Resolve path and URL, or ``None`` when not applicable."""
        ...

    def get_url(self, plugin: Plugin, params: Any) -> str:
        """Clone URL, or an empty string."""
        ...

    def get_sync_commands(self, plugin: Plugin, params: Any) -> CommandPlan:
        """Commands to clone or update the working tree."""
        ...

    def get_rollback_commands(self, plugin: Plugin, params: Any, rev: str) -> CommandPlan:
        """Commands to reset the working tree to ``rev``."""
        ...

    def get_diff_commands(
        self, plugin: Plugin, params: Any, old_rev: str, new_rev: str
    ) -> CommandPlan:
        """Commands to show documentation changes between revisions."""
        ...

    async def get_log_commands(
        self, plugin: Plugin, params: Any, old_rev: str, new_rev: str
    ) -> CommandPlan:
        """Commands to show the commit log between revisions."""
        ...

    def get_changes_count_commands(
        self, plugin: Plugin, params: Any, old_rev: str, new_rev: str
    ) -> CommandPlan:
        """Commands printing the number of commits between revisions."""
        ...

    async def get_revision_lock_commands(self, plugin: Plugin, params: Any) -> CommandPlan:
        """Commands to pin the working tree to the requested revision."""
        ...

    def get_revision(self, plugin: Plugin) -> str:
        """Revision currently checked out, or an empty string."""
        ...
