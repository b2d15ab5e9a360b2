"""
StatusNotifierWatcher service.

Wires the registry, registration, liveness, notification and property
components onto a bus connection and routes inbound method calls to them.

Usage:
    from sniwatch.watcher import StatusNotifierWatcher
    from sniwatch.dbus_bus import DBusConnection

    watcher = StatusNotifierWatcher(DBusConnection.session())
    watcher.start()
    # ... run the GLib main loop

Calls are dispatched on (interface, member). Registration methods are
accepted on both the freedesktop and kde interfaces; Introspect and
Properties are served for the object as a whole. A call whose arguments do
not match the expected signature is logged and never answered.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from sniwatch import protocol
from sniwatch.bus import BusConnection, MethodCall, NameRequestResult, WatcherStartupError
from sniwatch.configs import WatcherConfig
from sniwatch.liveness import LivenessMonitor
from sniwatch.notifications import NotificationEmitter
from sniwatch.properties import PropertySurface
from sniwatch.registration import RegistrationService
from sniwatch.registry import Registry

logger = logging.getLogger("sniwatch.watcher")

Handler = Callable[[MethodCall], None]


class StatusNotifierWatcher:
    """The watcher object: registry plus its bus-facing services."""

    def __init__(self, bus: BusConnection, config: Optional[WatcherConfig] = None):
        self.bus = bus
        self.config = config or WatcherConfig()
        self.object_path = self.config.object_path

        self.registry = Registry()
        self.emitter = NotificationEmitter(bus, self.object_path)
        self.registration = RegistrationService(self.registry, bus, self.emitter)
        self.liveness = LivenessMonitor(self.registry, self.emitter)
        self.properties = PropertySurface(self.registry)

        self._started = False
        self._routes: Dict[Tuple[str, str], Tuple[str, Handler]] = {
            (protocol.INTROSPECTABLE_INTERFACE, protocol.INTROSPECT): ("", self._introspect),
            (protocol.PROPERTIES_INTERFACE, protocol.GET): ("ss", self._get),
            (protocol.PROPERTIES_INTERFACE, protocol.SET): ("ssv", self._set),
            (protocol.PROPERTIES_INTERFACE, protocol.GET_ALL): ("s", self._get_all),
        }
        for interface in protocol.WATCHER_INTERFACES:
            self._routes[(interface, protocol.REGISTER_ITEM)] = ("s", self._register_item)
            self._routes[(interface, protocol.REGISTER_HOST)] = ("s", self._register_host)

    def start(self) -> None:
        """
        Claim the watcher names, export the object and start watching owners.

        Raises:
            WatcherStartupError: if any step fails; the watcher is unusable.
        """
        if self._started:
            return

        for name in self.config.well_known_names:
            result = self.bus.request_name(name, self.config.bus.replace_existing)
            if result is NameRequestResult.PRIMARY_OWNER:
                logger.debug(f"Got watcher name {name}")
            elif result is NameRequestResult.IN_QUEUE:
                logger.info(f"Could not get watcher name {name}, it may start later")
            else:
                logger.info(f"Watcher name {name}: {result.value}")

        try:
            self.bus.register_object_path(self.object_path, self.handle_message)
            self.bus.subscribe_name_owner_changed(self.liveness.on_name_owner_changed)
        except WatcherStartupError:
            raise
        except Exception as e:
            raise WatcherStartupError(f"Cannot export {self.object_path}: {e}") from e

        self._started = True
        logger.info(f"StatusNotifierWatcher running at {self.object_path}")

    def handle_message(self, call: MethodCall) -> bool:
        """
        Dispatch one inbound method call.

        Returns False for calls this object does not implement.
        """
        route = self._routes.get((call.interface, call.member))
        if route is None:
            return False

        signature, handler = route
        if call.signature != signature or len(call.args) != len(signature):
            logger.error(
                f"Error parsing method args for {call.interface}.{call.member}: "
                f"expected '{signature}', got '{call.signature}'"
            )
            return True

        handler(call)
        return True

    # Handlers

    def _introspect(self, call: MethodCall) -> None:
        self.bus.send_reply(call, "s", [self.properties.introspect()])

    def _get(self, call: MethodCall) -> None:
        _interface, name = call.args
        value = self.properties.get(name)
        if value is not None:
            self.bus.send_reply(call, "v", [value])

    def _set(self, call: MethodCall) -> None:
        _interface, name, value = call.args
        self.properties.set(name, value)

    def _get_all(self, call: MethodCall) -> None:
        self.bus.send_reply(call, "a{sv}", [self.properties.get_all()])

    def _register_item(self, call: MethodCall) -> None:
        self.registration.register_item(call, call.args[0])

    def _register_host(self, call: MethodCall) -> None:
        self.registration.register_host(call.args[0])

    def snapshot(self) -> Dict[str, Any]:
        """Current registry contents, for diagnostics."""
        state = self.registry.to_dict()
        state["host_registered"] = self.registry.host_registered
        return state


__all__ = ["StatusNotifierWatcher"]
