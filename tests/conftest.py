"""
sniwatch test configuration.

FakeBus stands in for the message bus: tests decide which names have an
owner, fire NameOwnerChanged, and inspect every reply and signal the
watcher produced.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from sniwatch.bus import (
    BusConnection,
    BusError,
    MethodCall,
    NameRequestResult,
    WatcherStartupError,
)
from sniwatch.notifications import NotificationEmitter
from sniwatch.registry import Registry


@dataclass
class SentSignal:
    path: str
    interface: str
    member: str
    signature: str
    args: List[Any]


@dataclass
class SentReply:
    call: MethodCall
    signature: str
    args: List[Any]


class FakeBus(BusConnection):
    """In-memory bus recording everything the watcher sends."""

    def __init__(self):
        self.owners: Dict[str, str] = {}
        self.requested_names: List[Tuple[str, bool]] = []
        self.name_results: Dict[str, NameRequestResult] = {}
        self.objects: Dict[str, Callable[[MethodCall], bool]] = {}
        self.owner_callbacks: List[Callable[[str, str, str], None]] = []
        self.signals: List[SentSignal] = []
        self.replies: List[SentReply] = []
        self.owner_query_error: Optional[str] = None
        self.fail_on: Optional[str] = None

    # Test controls

    def set_owner(self, name: str, owner: str = ":1.99") -> None:
        self.owners[name] = owner

    def release(self, name: str) -> None:
        """Drop `name`'s owner and broadcast NameOwnerChanged(name, old, "")."""
        old_owner = self.owners.pop(name, name if name.startswith(":") else ":1.99")
        for callback in self.owner_callbacks:
            callback(name, old_owner, "")

    def call(self, sender: str, interface: str, member: str, signature: str = "",
             args: Tuple[Any, ...] = (), path: str = "/StatusNotifierWatcher") -> bool:
        handler = self.objects[path]
        return handler(MethodCall(sender=sender, interface=interface, member=member,
                                  signature=signature, args=tuple(args), path=path))

    def signals_named(self, member: str) -> List[SentSignal]:
        return [s for s in self.signals if s.member == member]

    # BusConnection

    def request_name(self, name, replace_existing=True):
        if self.fail_on == "request_name":
            raise WatcherStartupError(f"cannot own {name}")
        self.requested_names.append((name, replace_existing))
        return self.name_results.get(name, NameRequestResult.PRIMARY_OWNER)

    def name_has_owner(self, name):
        if self.owner_query_error:
            raise BusError(self.owner_query_error)
        return name in self.owners

    def register_object_path(self, path, handler):
        if self.fail_on == "register_object_path":
            raise WatcherStartupError(f"{path} already exported")
        self.objects[path] = handler

    def subscribe_name_owner_changed(self, callback):
        if self.fail_on == "subscribe":
            raise WatcherStartupError("match rule rejected")
        self.owner_callbacks.append(callback)

    def send_reply(self, call, signature="", args=()):
        self.replies.append(SentReply(call, signature, list(args)))

    def emit_signal(self, path, interface, member, signature="", args=()):
        self.signals.append(SentSignal(path, interface, member, signature, list(args)))


@pytest.fixture
def bus():
    return FakeBus()


@pytest.fixture
def registry():
    return Registry()


@pytest.fixture
def emitter(bus):
    return NotificationEmitter(bus)


@pytest.fixture
def watcher(bus):
    from sniwatch.watcher import StatusNotifierWatcher

    w = StatusNotifierWatcher(bus)
    w.start()
    return w
