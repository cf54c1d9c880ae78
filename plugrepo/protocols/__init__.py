"""VCS protocol backends and their registry."""

from plugrepo.protocols.base import ProtocolBackend
from plugrepo.protocols.git import GitProtocol
from plugrepo.protocols.registry import ProtocolRegistry

__all__ = ["GitProtocol", "ProtocolBackend", "ProtocolRegistry"]
