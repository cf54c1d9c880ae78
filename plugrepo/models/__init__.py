"""Data models for plugrepo."""

from plugrepo.models.command import Command, CommandPlan
from plugrepo.models.config import VALID_PROTOCOLS, GitConfig, load_config
from plugrepo.models.plugin import GitAttrs, Plugin, PluginUpdate

__all__ = [
    # Commands
    "Command",
    "CommandPlan",
    # Configuration
    "GitConfig",
    "VALID_PROTOCOLS",
    "load_config",
    # Plugin records
    "GitAttrs",
    "Plugin",
    "PluginUpdate",
]
