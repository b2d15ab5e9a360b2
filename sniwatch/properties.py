"""
Read-only property and introspection surface of the watcher object.

Standard properties (both watcher dialects):
    RegisteredStatusNotifierItems   as
    IsStatusNotifierHostRegistered  b
    ProtocolVersion                 i

Extension property (swaywm dialect):
    RegisteredObjectPathItems       a(os)

Get answers any of the four by name. GetAll only ever returns the three
standard ones. Nothing is writable.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from sniwatch import protocol
from sniwatch.bus import Variant
from sniwatch.registry import Registry

logger = logging.getLogger("sniwatch.properties")


class PropertySurface:
    """Answers property reads from the registry."""

    def __init__(self, registry: Registry, introspection_xml: str = protocol.INTROSPECTION_XML):
        self.registry = registry
        self.introspection_xml = introspection_xml

        self._getters: Dict[str, Callable[[], Variant]] = {
            protocol.REGISTERED_ITEMS: self._registered_items,
            protocol.HOST_REGISTERED: self._host_registered,
            protocol.PROTOCOL_VERSION_PROPERTY: self._protocol_version,
            protocol.REGISTERED_PATH_ITEMS: self._registered_path_items,
        }
        # Order matters for GetAll replies.
        self._bulk: Tuple[str, ...] = (
            protocol.REGISTERED_ITEMS,
            protocol.HOST_REGISTERED,
            protocol.PROTOCOL_VERSION_PROPERTY,
        )

    def _registered_items(self) -> Variant:
        return Variant("as", self.registry.items)

    def _host_registered(self) -> Variant:
        return Variant("b", self.registry.host_registered)

    def _protocol_version(self) -> Variant:
        return Variant("i", protocol.PROTOCOL_VERSION)

    def _registered_path_items(self) -> Variant:
        pairs: List[Tuple[str, str]] = [(item.path, item.owner) for item in self.registry.path_items]
        return Variant("a(os)", pairs)

    def get(self, name: str) -> Optional[Variant]:
        """Value of one property, or None if there is no such property."""
        getter = self._getters.get(name)
        if getter is None:
            logger.debug(f"Unknown property {name}")
            return None
        if name == protocol.REGISTERED_ITEMS:
            logger.info("Replying with items")
        elif name == protocol.REGISTERED_PATH_ITEMS:
            logger.info("Replying with ObjPathItems")
        return getter()

    def get_all(self) -> Dict[str, Variant]:
        """The standard properties, in fixed order."""
        return {name: self._getters[name]() for name in self._bulk}

    def set(self, name: str, value) -> None:
        """Properties are read-only; writes are accepted and ignored."""
        logger.debug(f"Ignoring write to read-only property {name}")

    def introspect(self) -> str:
        return self.introspection_xml


__all__ = ["PropertySurface"]
