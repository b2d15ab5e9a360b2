"""
Watcher signal fan-out.

Registry changes are described once as a Notification and broadcast on
every dialect that carries that event. Which dialects carry what lives in
FANOUT; adding a dialect is one entry there.

    emitter = NotificationEmitter(bus)
    emitter.notify(Notification.item_registered(":1.42"))
    # -> StatusNotifierItemRegistered on org.freedesktop and org.kde
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

from sniwatch import protocol
from sniwatch.bus import BusConnection

logger = logging.getLogger("sniwatch.notifications")


class EventKind(str, Enum):
    """Registry events that are announced on the bus."""
    ITEM_REGISTERED = "item_registered"
    ITEM_UNREGISTERED = "item_unregistered"
    HOST_REGISTERED = "host_registered"
    PATH_ITEM_REGISTERED = "path_item_registered"


@dataclass(frozen=True)
class Notification:
    """A single notify intent: what happened, with its payload."""
    kind: EventKind
    payload: Tuple[str, ...] = ()

    @classmethod
    def item_registered(cls, name: str) -> "Notification":
        return cls(EventKind.ITEM_REGISTERED, (name,))

    @classmethod
    def item_unregistered(cls, name: str) -> "Notification":
        return cls(EventKind.ITEM_UNREGISTERED, (name,))

    @classmethod
    def host_registered(cls) -> "Notification":
        return cls(EventKind.HOST_REGISTERED)

    @classmethod
    def path_item_registered(cls, owner: str, path: str) -> "Notification":
        return cls(EventKind.PATH_ITEM_REGISTERED, (owner, path))


@dataclass(frozen=True)
class SignalSpec:
    """How one dialect spells a notification."""
    interface: str
    member: str
    signature: str
    encode: Callable[[Tuple[str, ...]], List[Any]]


def _name_only(payload):
    return [payload[0]]


def _no_args(payload):
    return []


def _path_then_owner(payload):
    owner, path = payload
    return [path, owner]


def _watcher_dialects(member, signature, encode):
    return [SignalSpec(interface, member, signature, encode) for interface in protocol.WATCHER_INTERFACES]


FANOUT: Dict[EventKind, List[SignalSpec]] = {
    EventKind.ITEM_REGISTERED: _watcher_dialects(protocol.ITEM_REGISTERED, "s", _name_only),
    EventKind.ITEM_UNREGISTERED: _watcher_dialects(protocol.ITEM_UNREGISTERED, "s", _name_only),
    EventKind.HOST_REGISTERED: _watcher_dialects(protocol.HOST_REGISTERED_SIGNAL, "", _no_args),
    EventKind.PATH_ITEM_REGISTERED: [
        SignalSpec(protocol.SWAYWM_WATCHER, protocol.PATH_ITEM_REGISTERED, "os", _path_then_owner),
    ],
}


class NotificationEmitter:
    """Broadcasts notifications on every applicable dialect."""

    def __init__(self, bus: BusConnection, object_path: str = protocol.WATCHER_OBJECT_PATH):
        self.bus = bus
        self.object_path = object_path

    def notify(self, notification: Notification) -> int:
        """Emit one signal per dialect. Returns the number of signals sent."""
        specs = FANOUT[notification.kind]
        for spec in specs:
            logger.debug(f"Emitting {spec.interface}.{spec.member}{notification.payload}")
            self.bus.emit_signal(
                self.object_path,
                spec.interface,
                spec.member,
                spec.signature,
                spec.encode(notification.payload),
            )
        return len(specs)


__all__ = [
    "EventKind",
    "Notification",
    "SignalSpec",
    "FANOUT",
    "NotificationEmitter",
]
