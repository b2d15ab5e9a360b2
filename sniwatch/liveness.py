"""
Liveness monitor.

Nobody says goodbye on the bus. Registrations are dropped when the bus
reports that the registered name lost its owner (NameOwnerChanged with an
empty new owner). The check runs in a fixed order, items then hosts then
path items, and stops at the first collection that matched.
"""

import logging

from sniwatch.notifications import Notification, NotificationEmitter
from sniwatch.registry import Registry

logger = logging.getLogger("sniwatch.liveness")


class LivenessMonitor:
    """Removes registry entries whose owning name has vanished."""

    def __init__(self, registry: Registry, emitter: NotificationEmitter):
        self.registry = registry
        self.emitter = emitter

    def on_name_owner_changed(self, name: str, old_owner: str, new_owner: str) -> bool:
        """
        React to one NameOwnerChanged event.

        Returns True if anything was removed.
        """
        if new_owner:
            # Name changed hands, it was not released.
            return False

        if self.registry.remove_item(name):
            logger.info(f"Status Notifier Item lost {name}")
            self.emitter.notify(Notification.item_unregistered(name))
            return True

        if self.registry.remove_host(name):
            # Hosts have no unregistered signal.
            logger.info(f"Status Notifier Host lost {name}")
            return True

        removed = self.registry.remove_path_items_owned_by(name)
        for item in removed:
            logger.info(f"ObjPathItem lost {item.path}")
        if removed:
            # One signal for the owner, however many paths it had.
            self.emitter.notify(Notification.item_unregistered(name))
            return True

        return False


__all__ = ["LivenessMonitor"]
