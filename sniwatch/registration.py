"""
Item and host registration.

Every rejection here is silent: no error reply, no signal, just a log line.
Clients rely on this leniency, so malformed or duplicate registrations are
dropped rather than answered with an error.

The only reply ever sent is the empty acknowledgement of a newly accepted
bus-name item. Path items and hosts get no reply.
"""

import logging

from sniwatch.bus import BusConnection, BusError, MethodCall
from sniwatch.identity import IdentityKind, classify, is_bus_name
from sniwatch.notifications import Notification, NotificationEmitter
from sniwatch.registry import PathItem, Registry

logger = logging.getLogger("sniwatch.registration")


class RegistrationService:
    """Validates registration requests and applies them to the registry."""

    def __init__(self, registry: Registry, bus: BusConnection, emitter: NotificationEmitter):
        self.registry = registry
        self.bus = bus
        self.emitter = emitter

    def _has_owner(self, name: str) -> bool:
        try:
            return self.bus.name_has_owner(name)
        except BusError as e:
            logger.warning(f"Ownership query for {name} failed: {e}")
            return False

    def register_item(self, call: MethodCall, argument: str) -> bool:
        """
        Handle RegisterStatusNotifierItem.

        Args:
            call: The inbound call; its sender owns any path item.
            argument: Bus name or object path announced by the caller.

        Returns:
            True if the registry changed.
        """
        logger.info(f'RegisterStatusNotifierItem called with "{argument}"')

        kind = classify(argument)
        if kind is IdentityKind.OBJECT_PATH:
            return self._register_path_item(call.sender, argument)
        if kind is IdentityKind.INVALID:
            logger.info("This item is not valid, we cannot keep track of it.")
            return False

        if self.registry.has_item(argument):
            return False
        if not self._has_owner(argument):
            logger.info(f"Item {argument} has no owner on the bus, ignoring")
            return False

        self.registry.add_item(argument)
        self.emitter.notify(Notification.item_registered(argument))
        # Nothing to return, but clients wait for an acknowledgement.
        self.bus.send_reply(call)
        return True

    def _register_path_item(self, owner: str, path: str) -> bool:
        item = PathItem(owner=owner, path=path)
        if not self.registry.add_path_item(item):
            return False
        logger.info(f"Registered ObjPathItem {path} owned by {owner}")
        self.emitter.notify(Notification.path_item_registered(owner, path))
        return True

    def register_host(self, argument: str) -> bool:
        """Handle RegisterStatusNotifierHost. Returns True if the registry changed."""
        logger.info(f'RegisterStatusNotifierHost called with "{argument}"')

        if not is_bus_name(argument):
            logger.info("This host is not valid, we cannot keep track of it.")
            return False
        if self.registry.has_host(argument):
            return False
        if not self._has_owner(argument):
            logger.info(f"Host {argument} has no owner on the bus, ignoring")
            return False

        self.registry.add_host(argument)
        self.emitter.notify(Notification.host_registered())
        return True


__all__ = ["RegistrationService"]
