"""Registry of protocol backends.

Backends are looked up by name. Detection asks each enabled backend in
registration order and the first one that recognises the plugin wins.
"""

from __future__ import annotations

from typing import Any

from plugrepo.host import Host
from plugrepo.models.plugin import Plugin, PluginUpdate
from plugrepo.protocols.base import ProtocolBackend
from plugrepo.protocols.git import GitProtocol


class ProtocolRegistry:
    """Registry of all available protocol backends."""

    # Built-in backends
    PROTOCOL_CLASSES: dict[str, type] = {
        "git": GitProtocol,
    }

    def __init__(self, host: Host, enabled_protocols: list[str] | None = None) -> None:
        """Initialize registry.

        Args:
            host: Host services handed to every backend
            enabled_protocols: List of protocol names to enable (None = all)
        """
        self.host = host
        self._protocols: dict[str, ProtocolBackend] = {}
        self._enabled = enabled_protocols

        for name, protocol_class in self.PROTOCOL_CLASSES.items():
            if self._enabled is None or name in self._enabled:
                self.register(protocol_class(host))

    def register(self, backend: ProtocolBackend) -> None:
        """Add or replace a backend."""
        if not isinstance(backend, ProtocolBackend):
            raise TypeError(f"{backend!r} does not implement the protocol backend interface")
        self._protocols[backend.name] = backend

    def get(self, name: str) -> ProtocolBackend | None:
        """Get a specific backend by name."""
        return self._protocols.get(name)

    def list_protocols(self) -> list[str]:
        """List all available backend names."""
        return list(self._protocols.keys())

    def detect(
        self,
        plugin: Plugin,
        params: dict[str, Any] | None = None,
    ) -> tuple[str, PluginUpdate] | None:
        """Find the first backend that recognises ``plugin``.

        Args:
            plugin: Plugin record to detect
            params: Backend name -> parameters (defaults used when missing)

        Returns:
            (backend name, update) or None if no backend applies
        """
        params = params or {}
        for name, backend in self._protocols.items():
            backend_params = params.get(name) or backend.default_params()
            update = backend.detect(plugin, backend_params)
            if update is not None:
                return name, update
        return None
