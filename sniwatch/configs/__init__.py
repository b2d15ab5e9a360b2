"""
sniwatch configuration.

Defaults cover the usual session-bus watcher; a YAML file can override them:

    # ~/.config/sniwatch/config.yaml
    log_level: DEBUG
    bus:
      bus_type: system
      replace_existing: false

Usage:
    from sniwatch.configs import load_config

    config = load_config()
    config.bus.bus_type      # "session"
    config.well_known_names  # freedesktop name, then kde name

SNIWATCH_BUS=system|session overrides the file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from sniwatch import protocol

DEFAULT_CONFIG_PATH = Path("~/.config/sniwatch/config.yaml")
BUS_ENV_VAR = "SNIWATCH_BUS"
BUS_TYPES = ("session", "system")


@dataclass
class BusConfig:
    """Which bus to join and how to claim names on it."""
    bus_type: str = "session"
    replace_existing: bool = True


@dataclass
class WatcherConfig:
    """Top-level watcher configuration."""
    object_path: str = protocol.WATCHER_OBJECT_PATH
    well_known_names: List[str] = field(
        default_factory=lambda: list(protocol.WATCHER_BUS_NAMES)
    )
    bus: BusConfig = field(default_factory=BusConfig)

    # Logging
    log_level: str = "INFO"
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def load_yaml_config(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping; a missing file is an empty one."""
    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def _apply(target, data: Dict[str, Any]) -> None:
    for key, value in data.items():
        if hasattr(target, key) and not isinstance(getattr(target, key), BusConfig):
            setattr(target, key, value)


def _check_bus_type(bus_type: str) -> str:
    bus_type = str(bus_type).lower()
    if bus_type not in BUS_TYPES:
        raise ValueError(f"bus_type must be one of {BUS_TYPES}, got {bus_type!r}")
    return bus_type


def _check_names(names) -> List[str]:
    if isinstance(names, str):
        names = [names]
    if not isinstance(names, (list, tuple)) or not all(isinstance(n, str) for n in names):
        raise ValueError(f"well_known_names must be a name or a list of names, got {names!r}")
    return list(names)


def load_config(path: Optional[Path] = None) -> WatcherConfig:
    """
    Load watcher configuration.

    Args:
        path: YAML file to read (default: ~/.config/sniwatch/config.yaml)

    Returns:
        WatcherConfig with file and environment overrides applied
    """
    config = WatcherConfig()

    if path is None:
        path = DEFAULT_CONFIG_PATH
    data = load_yaml_config(Path(path).expanduser())

    _apply(config, data)
    if isinstance(data.get("bus"), dict):
        _apply(config.bus, data["bus"])

    env_bus = os.environ.get(BUS_ENV_VAR)
    if env_bus:
        config.bus.bus_type = env_bus

    config.bus.bus_type = _check_bus_type(config.bus.bus_type)
    config.well_known_names = _check_names(config.well_known_names)
    return config


# Default config instance
default_config = None


def get_config() -> WatcherConfig:
    """Get or create default configuration."""
    global default_config
    if default_config is None:
        default_config = load_config()
    return default_config


__all__ = [
    "BusConfig",
    "WatcherConfig",
    "load_yaml_config",
    "load_config",
    "get_config",
]
