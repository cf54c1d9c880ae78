"""plugrepo - Plugin repository resolver and git command planner."""

from plugrepo.host import Host, LocalHost
from plugrepo.models import Command, CommandPlan, GitConfig, Plugin, PluginUpdate
from plugrepo.protocols import GitProtocol, ProtocolBackend, ProtocolRegistry
from plugrepo.resolver import ResolvedLocation, Resolver

__version__ = "0.1.0"
__all__ = [
    "Command",
    "CommandPlan",
    "GitConfig",
    "GitProtocol",
    "Host",
    "LocalHost",
    "Plugin",
    "PluginUpdate",
    "ProtocolBackend",
    "ProtocolRegistry",
    "ResolvedLocation",
    "Resolver",
]
