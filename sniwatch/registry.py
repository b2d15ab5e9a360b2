"""
Watcher registry.

Single source of truth for what is currently registered:

- items: tray providers known by a bus name
- hosts: tray consumers known by a bus name
- path items: providers known by (owning unique name, object path)

Every collection keeps registration order, which is the order property reads
report. Nothing outside this module mutates the collections.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class PathItem:
    """An item registered by object path on its owner's connection."""
    owner: str
    path: str


class Registry:
    """Items, hosts and path items currently alive on the bus."""

    def __init__(self):
        self._items: List[str] = []
        self._hosts: List[str] = []
        self._path_items: List[PathItem] = []

    # Items

    @property
    def items(self) -> List[str]:
        return list(self._items)

    def has_item(self, name: str) -> bool:
        return name in self._items

    def add_item(self, name: str) -> bool:
        """Add an item. Returns False if it was already present."""
        if name in self._items:
            return False
        self._items.append(name)
        return True

    def remove_item(self, name: str) -> bool:
        if name not in self._items:
            return False
        self._items.remove(name)
        return True

    # Hosts

    @property
    def hosts(self) -> List[str]:
        return list(self._hosts)

    @property
    def host_registered(self) -> bool:
        return bool(self._hosts)

    def has_host(self, name: str) -> bool:
        return name in self._hosts

    def add_host(self, name: str) -> bool:
        if name in self._hosts:
            return False
        self._hosts.append(name)
        return True

    def remove_host(self, name: str) -> bool:
        if name not in self._hosts:
            return False
        self._hosts.remove(name)
        return True

    # Path items

    @property
    def path_items(self) -> List[PathItem]:
        return list(self._path_items)

    def has_path_item(self, item: PathItem) -> bool:
        return item in self._path_items

    def add_path_item(self, item: PathItem) -> bool:
        if item in self._path_items:
            return False
        self._path_items.append(item)
        return True

    def remove_path_item(self, item: PathItem) -> bool:
        if item not in self._path_items:
            return False
        self._path_items.remove(item)
        return True

    def remove_path_items_owned_by(self, owner: str) -> List[PathItem]:
        """Drop every path item whose owner is `owner`; return what was dropped."""
        removed = [item for item in self._path_items if item.owner == owner]
        if removed:
            self._path_items = [item for item in self._path_items if item.owner != owner]
        return removed

    def __len__(self) -> int:
        return len(self._items) + len(self._hosts) + len(self._path_items)

    def to_dict(self):
        return {
            "items": self.items,
            "hosts": self.hosts,
            "path_items": [{"path": i.path, "owner": i.owner} for i in self._path_items],
        }


__all__ = [
    "PathItem",
    "Registry",
]
