"""
Tests for the property and introspection surface.
"""

import xml.etree.ElementTree as ET

import pytest

from sniwatch import protocol
from sniwatch.bus import Variant
from sniwatch.properties import PropertySurface
from sniwatch.registry import PathItem


@pytest.fixture
def surface(registry):
    return PropertySurface(registry)


class TestGet:

    def test_registered_items(self, surface, registry):
        registry.add_item("org.test.B")
        registry.add_item("org.test.A")
        assert surface.get("RegisteredStatusNotifierItems") == Variant("as", ["org.test.B", "org.test.A"])

    def test_host_registered(self, surface, registry):
        assert surface.get("IsStatusNotifierHostRegistered") == Variant("b", False)
        registry.add_host("org.test.Host1")
        assert surface.get("IsStatusNotifierHostRegistered") == Variant("b", True)

    def test_protocol_version(self, surface):
        assert surface.get("ProtocolVersion") == Variant("i", 0)

    def test_path_items_are_path_then_owner(self, surface, registry):
        registry.add_path_item(PathItem(":1.5", "/StatusNotifierItem"))
        assert surface.get("RegisteredObjectPathItems") == Variant(
            "a(os)", [("/StatusNotifierItem", ":1.5")]
        )

    def test_unknown_property(self, surface):
        assert surface.get("Nonexistent") is None


class TestGetAll:

    def test_standard_properties_in_order(self, surface, registry):
        registry.add_item("org.test.Item1")
        props = surface.get_all()
        assert list(props) == [
            "RegisteredStatusNotifierItems",
            "IsStatusNotifierHostRegistered",
            "ProtocolVersion",
        ]
        assert props["RegisteredStatusNotifierItems"].value == ["org.test.Item1"]

    def test_extension_property_excluded(self, surface, registry):
        registry.add_path_item(PathItem(":1.5", "/A"))
        assert "RegisteredObjectPathItems" not in surface.get_all()


class TestReadOnly:

    def test_set_changes_nothing(self, surface, registry):
        surface.set("RegisteredStatusNotifierItems", ["org.test.Forged"])
        surface.set("ProtocolVersion", 5)
        assert surface.get("RegisteredStatusNotifierItems").value == []
        assert surface.get("ProtocolVersion").value == 0


class TestIntrospect:

    def test_document_is_well_formed(self, surface):
        root = ET.fromstring(surface.introspect())
        names = [iface.get("name") for iface in root.findall("interface")]
        assert names == [
            protocol.INTROSPECTABLE_INTERFACE,
            protocol.PROPERTIES_INTERFACE,
            protocol.FREEDESKTOP_WATCHER,
            protocol.SWAYWM_WATCHER,
        ]

    def test_document_does_not_depend_on_state(self, surface, registry):
        before = surface.introspect()
        registry.add_item("org.test.Item1")
        assert surface.introspect() == before
