"""
Bus collaborator interface.

The watcher core never talks to a bus library directly. It sees inbound
method calls as MethodCall values and reaches the bus through the
BusConnection operations below:

- claim a well-known name
- ask whether a name currently has an owner
- export an object path with a dispatch callback
- watch NameOwnerChanged
- send method replies and broadcast signals

sniwatch.dbus_bus implements this over dbus-python; the test suite ships an
in-memory implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Tuple


class BusError(Exception):
    """A bus round-trip failed in steady state."""


class WatcherStartupError(Exception):
    """The watcher could not claim its names or export its object."""


class NameRequestResult(str, Enum):
    """Outcome of a well-known name claim."""
    PRIMARY_OWNER = "primary_owner"
    IN_QUEUE = "in_queue"
    EXISTS = "exists"
    ALREADY_OWNER = "already_owner"


@dataclass(frozen=True)
class Variant:
    """A value tagged with its bus type signature, e.g. Variant("as", [...])."""
    signature: str
    value: Any


@dataclass
class MethodCall:
    """An inbound method call addressed to the watcher object."""
    sender: str
    interface: str
    member: str
    signature: str = ""
    args: Tuple[Any, ...] = ()
    path: str = ""
    # Native message, kept so the adapter can address the reply.
    handle: Optional[Any] = field(default=None, repr=False, compare=False)


MessageHandler = Callable[[MethodCall], bool]
OwnerChangedCallback = Callable[[str, str, str], None]


class BusConnection(ABC):
    """What the watcher needs from a message bus connection."""

    @abstractmethod
    def request_name(self, name: str, replace_existing: bool = True) -> NameRequestResult:
        """Claim a well-known name. Raises WatcherStartupError on failure."""

    @abstractmethod
    def name_has_owner(self, name: str) -> bool:
        """Synchronously ask the bus whether `name` has a live owner."""

    @abstractmethod
    def register_object_path(self, path: str, handler: MessageHandler) -> None:
        """
        Export `path` and route its method calls to `handler`.

        The handler returns True when it handled the call; False leaves the
        call to the bus's default unknown-method handling.
        """

    @abstractmethod
    def subscribe_name_owner_changed(self, callback: OwnerChangedCallback) -> None:
        """Deliver every NameOwnerChanged(name, old_owner, new_owner) to `callback`."""

    @abstractmethod
    def send_reply(self, call: MethodCall, signature: str = "", args: Sequence[Any] = ()) -> None:
        """Send a method return for `call`."""

    @abstractmethod
    def emit_signal(self, path: str, interface: str, member: str,
                    signature: str = "", args: Sequence[Any] = ()) -> None:
        """Broadcast a signal. Fire and forget."""


__all__ = [
    "BusError",
    "WatcherStartupError",
    "NameRequestResult",
    "Variant",
    "MethodCall",
    "MessageHandler",
    "OwnerChangedCallback",
    "BusConnection",
]
