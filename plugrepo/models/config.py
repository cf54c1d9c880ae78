"""Git protocol configuration."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

VALID_PROTOCOLS = ("https", "ssh")


class GitConfig(BaseModel):
    """Process-wide git parameters, supplied on every resolution call.

    Field names follow Python conventions; the camelCase names used by
    plugin manager configuration files are accepted as aliases.
    """

    clone_depth: int = Field(default=0, alias="cloneDepth", description="0 for full history")
    command_path: str = Field(default="git", alias="commandPath")
    default_branch: str = Field(default="main", alias="defaultBranch")
    default_hub_site: str = Field(default="github.com", alias="defaultHubSite")
    default_protocol: str = Field(default="https", alias="defaultProtocol")
    default_remote: str = Field(default="origin", alias="defaultRemote")
    enable_credential_helper: bool = Field(
        default=False,
        alias="enableCredentialHelper",
        description="Keep the user's credential helper (suppressed when False)",
    )
    enable_partial_clone: bool = Field(
        default=False, alias="enablePartialClone", description="Clone with --filter=blob:none"
    )
    enable_ssl_verify: bool = Field(default=True, alias="enableSSLVerify")
    pull_args: list[str] = Field(
        default_factory=lambda: ["pull", "--ff", "--ff-only"], alias="pullArgs"
    )

    model_config = {"populate_by_name": True}

    # Rejected at load time; a bad protocol inside an identifier is reported
    # through Host.error and skipped instead.
    @field_validator("default_protocol")
    @classmethod
    def _check_protocol(cls, value: str) -> str:
        if value not in VALID_PROTOCOLS:
            raise ValueError(f'Invalid git protocol: "{value}"')
        return value

    @field_validator("clone_depth")
    @classmethod
    def _check_depth(cls, value: int) -> int:
        if value < 0:
            raise ValueError("cloneDepth must be 0 or positive")
        return value

    @property
    def is_shallow(self) -> bool:
        return self.clone_depth > 0

    @classmethod
    def from_yaml(cls, path: Path) -> "GitConfig":
        """Load git parameters from a YAML file.

        The mapping may be at the top level, under ``git:`` or under
        ``protocols: {git: ...}``.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {path}")
        if isinstance(data.get("protocols"), dict):
            data = data["protocols"].get("git") or {}
        elif isinstance(data.get("git"), dict):
            data = data["git"]
        return cls.model_validate(data)


def load_config(path: Path | None = None) -> GitConfig:
    """Load configuration from ``path``, or return the defaults."""
    if path is None:
        return GitConfig()
    return GitConfig.from_yaml(path)
