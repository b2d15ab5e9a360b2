"""
dbus-python implementation of the watcher's bus connection.

Uses the GLib main loop integration, so the caller runs a GLib.MainLoop:

    from gi.repository import GLib
    from sniwatch.dbus_bus import DBusConnection

    bus = DBusConnection.session()
    ...
    GLib.MainLoop().run()

Inbound method calls reach the watcher as sniwatch.bus.MethodCall values.
Outbound values are plain Python (plus sniwatch.bus.Variant) and are typed
here from the signature they are sent with.
"""

import logging
from typing import Any, Dict, List, Sequence

import dbus
import dbus.bus
import dbus.lowlevel
from dbus.exceptions import DBusException
from dbus.mainloop.glib import DBusGMainLoop

from sniwatch import protocol
from sniwatch.bus import (
    BusConnection,
    BusError,
    MessageHandler,
    MethodCall,
    NameRequestResult,
    OwnerChangedCallback,
    Variant,
    WatcherStartupError,
)

logger = logging.getLogger("sniwatch.dbus")

_REQUEST_NAME_RESULTS = {
    dbus.bus.REQUEST_NAME_REPLY_PRIMARY_OWNER: NameRequestResult.PRIMARY_OWNER,
    dbus.bus.REQUEST_NAME_REPLY_IN_QUEUE: NameRequestResult.IN_QUEUE,
    dbus.bus.REQUEST_NAME_REPLY_EXISTS: NameRequestResult.EXISTS,
    dbus.bus.REQUEST_NAME_REPLY_ALREADY_OWNER: NameRequestResult.ALREADY_OWNER,
}

_BASIC_TYPES = {
    "s": dbus.String,
    "o": dbus.ObjectPath,
    "b": dbus.Boolean,
    "i": dbus.Int32,
    "u": dbus.UInt32,
    "x": dbus.Int64,
    "d": dbus.Double,
}


def split_signature(signature: str) -> List[str]:
    """Split a signature into its single complete types."""
    return [str(t) for t in dbus.Signature(signature)]


def to_dbus_value(signature: str, value: Any) -> Any:
    """Wrap a plain Python value in the dbus-python type for `signature`."""
    if isinstance(value, Variant):
        # Marshalled as a variant; the contents carry their own type.
        return to_dbus_value(value.signature, value.value)
    if signature == "v":
        raise ValueError(f"Variant slot needs a Variant, got {value!r}")

    if signature.startswith("a{"):
        key_sig, value_sig = split_signature(signature[2:-1])
        return dbus.Dictionary(
            {to_dbus_value(key_sig, k): to_dbus_value(value_sig, v) for k, v in value.items()},
            signature=key_sig + value_sig,
        )
    if signature.startswith("a"):
        element = signature[1:]
        return dbus.Array([to_dbus_value(element, v) for v in value], signature=element)
    if signature.startswith("("):
        fields = split_signature(signature[1:-1])
        return dbus.Struct(
            [to_dbus_value(s, v) for s, v in zip(fields, value)],
            signature=signature[1:-1],
        )

    try:
        return _BASIC_TYPES[signature](value)
    except KeyError:
        raise ValueError(f"Unsupported signature {signature!r}")


def to_python(value: Any) -> Any:
    """Strip dbus-python types down to plain Python values."""
    if isinstance(value, dbus.Boolean):
        return bool(value)
    if isinstance(value, (dbus.Dictionary, dict)):
        return {to_python(k): to_python(v) for k, v in value.items()}
    if isinstance(value, (dbus.Array, dbus.Struct, list, tuple)):
        converted = [to_python(v) for v in value]
        return tuple(converted) if isinstance(value, (dbus.Struct, tuple)) else converted
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    return value


def _build_args(signature: str, args: Sequence[Any]) -> List[Any]:
    if not signature:
        return []
    return [to_dbus_value(s, a) for s, a in zip(split_signature(signature), args)]


class DBusConnection(BusConnection):
    """BusConnection over a dbus-python bus."""

    def __init__(self, bus: "dbus.bus.BusConnection"):
        self._bus = bus

    @classmethod
    def open(cls, bus_type: str = "session") -> "DBusConnection":
        """
        Connect to the session or system bus with the GLib main loop.

        Raises:
            WatcherStartupError: if the bus cannot be reached.
        """
        DBusGMainLoop(set_as_default=True)
        try:
            bus = dbus.SystemBus() if bus_type == "system" else dbus.SessionBus()
        except DBusException as e:
            raise WatcherStartupError(f"Cannot connect to the {bus_type} bus: {e}") from e
        logger.debug(f"Connected to {bus_type} bus as {bus.get_unique_name()}")
        return cls(bus)

    @classmethod
    def session(cls) -> "DBusConnection":
        return cls.open("session")

    @classmethod
    def system(cls) -> "DBusConnection":
        return cls.open("system")

    @property
    def unique_name(self) -> str:
        return str(self._bus.get_unique_name())

    def request_name(self, name: str, replace_existing: bool = True) -> NameRequestResult:
        flags = dbus.bus.NAME_FLAG_REPLACE_EXISTING if replace_existing else 0
        try:
            reply = self._bus.request_name(name, flags)
        except DBusException as e:
            raise WatcherStartupError(f"dbus err getting watcher name {name}: {e}") from e
        return _REQUEST_NAME_RESULTS[reply]

    def name_has_owner(self, name: str) -> bool:
        try:
            return bool(self._bus.name_has_owner(name))
        except DBusException as e:
            raise BusError(str(e)) from e

    def register_object_path(self, path: str, handler: MessageHandler) -> None:
        def on_message(connection, message):
            if not isinstance(message, dbus.lowlevel.MethodCallMessage):
                return dbus.lowlevel.HANDLER_RESULT_NOT_YET_HANDLED
            call = MethodCall(
                sender=str(message.get_sender() or ""),
                interface=str(message.get_interface() or ""),
                member=str(message.get_member() or ""),
                signature=str(message.get_signature() or ""),
                args=tuple(message.get_args_list()),
                path=str(message.get_path() or ""),
                handle=message,
            )
            try:
                handled = handler(call)
            except Exception:
                logger.exception(f"Error handling {call.interface}.{call.member}")
                return dbus.lowlevel.HANDLER_RESULT_HANDLED
            if handled:
                return dbus.lowlevel.HANDLER_RESULT_HANDLED
            return dbus.lowlevel.HANDLER_RESULT_NOT_YET_HANDLED

        # Same low-level hook dbus.service.Object exports itself with.
        try:
            self._bus._register_object_path(path, on_message)
        except Exception as e:
            raise WatcherStartupError(f"Cannot register object path {path}: {e}") from e

    def subscribe_name_owner_changed(self, callback: OwnerChangedCallback) -> None:
        def on_name_owner_changed(name, old_owner, new_owner):
            callback(str(name), str(old_owner), str(new_owner))

        try:
            self._bus.add_signal_receiver(
                on_name_owner_changed,
                signal_name=protocol.NAME_OWNER_CHANGED,
                dbus_interface=protocol.DBUS_DAEMON_INTERFACE,
                bus_name=protocol.DBUS_DAEMON_NAME,
            )
        except DBusException as e:
            raise WatcherStartupError(f"DBus error adding NameOwnerChanged match: {e}") from e

    def send_reply(self, call: MethodCall, signature: str = "", args: Sequence[Any] = ()) -> None:
        reply = dbus.lowlevel.MethodReturnMessage(call.handle)
        if signature:
            reply.append(*_build_args(signature, args), signature=signature)
        self._bus.send_message(reply)

    def emit_signal(self, path: str, interface: str, member: str,
                    signature: str = "", args: Sequence[Any] = ()) -> None:
        message = dbus.lowlevel.SignalMessage(path, interface, member)
        if signature:
            message.append(*_build_args(signature, args), signature=signature)
        self._bus.send_message(message)


class WatcherClient:
    """Reads watcher properties from a running watcher."""

    def __init__(self, bus_type: str = "session"):
        DBusGMainLoop(set_as_default=True)
        self._bus = dbus.SystemBus() if bus_type == "system" else dbus.SessionBus()

    def fetch(self) -> Dict[str, Any]:
        """GetAll on the freedesktop interface plus the path-item extension property."""
        proxy = self._bus.get_object(protocol.FREEDESKTOP_WATCHER, protocol.WATCHER_OBJECT_PATH)
        props = dbus.Interface(proxy, protocol.PROPERTIES_INTERFACE)

        status = to_python(props.GetAll(protocol.FREEDESKTOP_WATCHER))
        status[protocol.REGISTERED_PATH_ITEMS] = to_python(
            props.Get(protocol.SWAYWM_WATCHER, protocol.REGISTERED_PATH_ITEMS)
        )
        return status


__all__ = [
    "DBusConnection",
    "WatcherClient",
    "split_signature",
    "to_dbus_value",
    "to_python",
]
