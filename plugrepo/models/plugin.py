"""Plugin record models exchanged with the plugin manager host."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class GitAttrs(BaseModel):
    """Per-plugin git overrides stored in ``protocol_attrs``."""

    git_remote: str | None = Field(default=None, alias="gitRemote")
    git_default_branch: str | None = Field(default=None, alias="gitDefaultBranch")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Plugin(BaseModel):
    """A plugin record as handed over by the host.

    Only ``repo`` is needed for resolution. ``path`` is filled in by
    detection (or overridden by the user) and is required by every
    command planner operation.
    """

    name: str = Field(default="", description="Plugin name")
    repo: str | None = Field(default=None, description="Raw repository identifier")
    rev: str | None = Field(default=None, description="Requested revision, may contain '*'")
    path: str | None = Field(default=None, description="Local working tree path")
    local: bool = Field(default=False, description="Already a local directory")
    frozen: bool = Field(default=False, description="Exempt from sync operations")
    url: str | None = Field(default=None, description="Browse URL for display")
    protocol_attrs: dict[str, Any] = Field(
        default_factory=dict,
        alias="protocolAttrs",
        description="Protocol-specific overrides",
    )

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def git_attrs(self) -> GitAttrs:
        """Typed view of the git overrides in ``protocol_attrs``."""
        return GitAttrs.model_validate(self.protocol_attrs)


class PluginUpdate(BaseModel):
    """Partial plugin record produced by detection.

    Unset fields leave the corresponding plugin field untouched.
    """

    path: str | None = None
    url: str | None = None
    local: bool | None = None
    frozen: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Fields that were actually set."""
        return self.model_dump(exclude_none=True)

    def apply(self, plugin: Plugin) -> Plugin:
        """Return a copy of ``plugin`` with these changes applied."""
        return plugin.model_copy(update=self.changes())
