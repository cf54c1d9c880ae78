"""Resolver - single entry point over the protocol backends."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from plugrepo.host import Host
from plugrepo.models.command import CommandPlan
from plugrepo.models.plugin import Plugin, PluginUpdate
from plugrepo.protocols.base import ProtocolBackend
from plugrepo.protocols.registry import ProtocolRegistry


class ResolvedLocation(BaseModel):
    """Remote URL and local path of a plugin.

    ``url`` is empty for local directories and raw download URLs.
    """

    url: str = ""
    path: str = ""

    @property
    def is_resolved(self) -> bool:
        return bool(self.path)


class Resolver:
    """Resolve plugins and plan VCS commands through one backend.

    Nothing is cached between calls: the host may change configuration or
    the working tree at any time.
    """

    def __init__(
        self,
        host: Host,
        registry: ProtocolRegistry | None = None,
        protocol: str = "git",
    ) -> None:
        self.host = host
        self.registry = registry or ProtocolRegistry(host)
        backend = self.registry.get(protocol)
        if backend is None:
            raise KeyError(f"Protocol not found: {protocol}")
        self.backend: ProtocolBackend = backend

    def params(self, params: Any = None) -> Any:
        return params if params is not None else self.backend.default_params()

    def detect(self, plugin: Plugin, params: Any = None) -> PluginUpdate | None:
        return self.backend.detect(plugin, self.params(params))

    def resolve(self, plugin: Plugin, params: Any = None) -> ResolvedLocation:
        """Compute URL and path for ``plugin``.

        An explicit ``plugin.path`` takes precedence over the canonical path.
        """
        params = self.params(params)
        update = self.backend.detect(plugin, params)
        if update is None:
            return ResolvedLocation(path=plugin.path or "")
        url = "" if update.local else self.backend.get_url(plugin, params)
        return ResolvedLocation(url=url, path=plugin.path or update.path or "")

    def get_sync_commands(self, plugin: Plugin, params: Any = None) -> CommandPlan:
        return self.backend.get_sync_commands(plugin, self.params(params))

    def get_rollback_commands(self, plugin: Plugin, rev: str, params: Any = None) -> CommandPlan:
        return self.backend.get_rollback_commands(plugin, self.params(params), rev)

    def get_diff_commands(
        self, plugin: Plugin, old_rev: str, new_rev: str, params: Any = None
    ) -> CommandPlan:
        return self.backend.get_diff_commands(plugin, self.params(params), old_rev, new_rev)

    def get_changes_count_commands(
        self, plugin: Plugin, old_rev: str, new_rev: str, params: Any = None
    ) -> CommandPlan:
        return self.backend.get_changes_count_commands(
            plugin, self.params(params), old_rev, new_rev
        )

    async def get_log_commands(
        self, plugin: Plugin, old_rev: str, new_rev: str, params: Any = None
    ) -> CommandPlan:
        return await self.backend.get_log_commands(plugin, self.params(params), old_rev, new_rev)

    async def get_revision_lock_commands(self, plugin: Plugin, params: Any = None) -> CommandPlan:
        return await self.backend.get_revision_lock_commands(plugin, self.params(params))

    def get_revision(self, plugin: Plugin) -> str:
        return self.backend.get_revision(plugin)
