#!/usr/bin/env python3
"""
sniwatch - StatusNotifierWatcher for tray hosts and items

Usage:
    # Run the watcher on the session bus
    sniwatch
    sniwatch run --log-level DEBUG

    # Run on the system bus with a config file
    sniwatch run --system --config /etc/sniwatch.yaml

    # Ask a running watcher what it knows
    sniwatch status
    sniwatch status --json
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml

from sniwatch import __version__, protocol
from sniwatch.bus import WatcherStartupError
from sniwatch.configs import WatcherConfig, get_config, load_config

logger = logging.getLogger("sniwatch")


def setup_logging(config: WatcherConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.INFO),
        format=config.log_format,
    )


def cmd_run(args, config: WatcherConfig) -> int:
    """Start the watcher and run the GLib main loop."""
    from gi.repository import GLib

    from sniwatch.dbus_bus import DBusConnection
    from sniwatch.watcher import StatusNotifierWatcher

    try:
        bus = DBusConnection.open(config.bus.bus_type)
        watcher = StatusNotifierWatcher(bus, config)
        watcher.start()
    except WatcherStartupError as e:
        logger.error(f"Cannot start StatusNotifierWatcher: {e}")
        return 1

    loop = GLib.MainLoop()
    try:
        loop.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        logger.debug(f"Final state: {watcher.snapshot()}")
    return 0


def format_status(status: Dict[str, Any]) -> str:
    """Human readable rendering of a watcher property dump."""
    lines: List[str] = [
        "=" * 50,
        "StatusNotifierWatcher",
        "=" * 50,
        f"Protocol version: {status.get(protocol.PROTOCOL_VERSION_PROPERTY)}",
        f"Host registered:  {'yes' if status.get(protocol.HOST_REGISTERED) else 'no'}",
        "",
        "Items:",
    ]
    items = status.get(protocol.REGISTERED_ITEMS) or []
    lines.extend(f"  {name}" for name in items)
    if not items:
        lines.append("  (none)")

    lines.append("")
    lines.append("Object path items:")
    path_items = status.get(protocol.REGISTERED_PATH_ITEMS) or []
    lines.extend(f"  {owner} {path}" for path, owner in path_items)
    if not path_items:
        lines.append("  (none)")
    return "\n".join(lines)


def cmd_status(args, config: WatcherConfig) -> int:
    """Print the properties of a running watcher."""
    from dbus.exceptions import DBusException

    from sniwatch.dbus_bus import WatcherClient

    try:
        status = WatcherClient(config.bus.bus_type).fetch()
    except DBusException as e:
        print(f"No StatusNotifierWatcher reachable: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(status, indent=2))
    else:
        print(format_status(status))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sniwatch",
        description="StatusNotifierWatcher: registry broker for tray items and hosts",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=str, default=None, help="YAML config file")
    bus_group = common.add_mutually_exclusive_group()
    bus_group.add_argument("--system", dest="bus_type", action="store_const", const="system",
                           help="Use the system bus")
    bus_group.add_argument("--session", dest="bus_type", action="store_const", const="session",
                           help="Use the session bus (default)")
    common.add_argument("--log-level", type=str, default=None,
                        help="DEBUG, INFO, WARNING or ERROR")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("run", parents=[common], help="Run the watcher (default)")
    status = subparsers.add_parser("status", parents=[common], help="Show a running watcher's registry")
    status.add_argument("--json", action="store_true", help="Output JSON")

    parser.set_defaults(command="run", config=None, bus_type=None, log_level=None, json=False)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()
    except (ValueError, yaml.YAMLError) as e:
        parser.error(str(e))

    if args.bus_type:
        config.bus.bus_type = args.bus_type
    if args.log_level:
        config.log_level = args.log_level
    setup_logging(config)

    commands = {
        "run": cmd_run,
        "status": cmd_status,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
