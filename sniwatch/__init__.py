"""
sniwatch: StatusNotifierWatcher

Discovery broker for the tray icon ecosystem. Tray items (icon providers)
and tray hosts (bars, panels) register with the watcher over D-Bus; hosts
read the list of live items and follow the registered/unregistered signals.

Components:
- identity: bus name / object path grammar for registration arguments
- registry: items, hosts and object-path items currently alive
- registration: RegisterStatusNotifierItem / RegisterStatusNotifierHost
- liveness: drops registrations when NameOwnerChanged says the owner left
- notifications: signal fan-out over the freedesktop, kde and swaywm dialects
- properties: Properties.Get/GetAll and Introspect
- watcher: wiring and method dispatch
- dbus_bus: dbus-python connection with GLib main loop

Example usage:

    from sniwatch.watcher import StatusNotifierWatcher
    from sniwatch.dbus_bus import DBusConnection

    watcher = StatusNotifierWatcher(DBusConnection.session())
    watcher.start()

CLI Commands:
    sniwatch run        # Run the watcher
    sniwatch status     # Show a running watcher's registry
"""

__version__ = "0.1.0"
