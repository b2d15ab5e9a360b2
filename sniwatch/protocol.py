"""
StatusNotifierWatcher protocol constants.

Interface names, member names and the static introspection document for the
watcher object. The same watcher surface is exported under the freedesktop
namespace and the KDE alias; the swaywm extension interface only carries the
object-path item additions.
"""

WATCHER_OBJECT_PATH = "/StatusNotifierWatcher"

# Dialects
FREEDESKTOP_WATCHER = "org.freedesktop.StatusNotifierWatcher"
KDE_WATCHER = "org.kde.StatusNotifierWatcher"
SWAYWM_WATCHER = "org.swaywm.LessSuckyStatusNotifierWatcher"

WATCHER_INTERFACES = (FREEDESKTOP_WATCHER, KDE_WATCHER)

# Well-known names claimed at startup, one per watcher dialect
WATCHER_BUS_NAMES = (FREEDESKTOP_WATCHER, KDE_WATCHER)

# Bus meta-interfaces
INTROSPECTABLE_INTERFACE = "org.freedesktop.DBus.Introspectable"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

DBUS_DAEMON_NAME = "org.freedesktop.DBus"
DBUS_DAEMON_INTERFACE = "org.freedesktop.DBus"
NAME_OWNER_CHANGED = "NameOwnerChanged"

# Methods
REGISTER_ITEM = "RegisterStatusNotifierItem"
REGISTER_HOST = "RegisterStatusNotifierHost"
INTROSPECT = "Introspect"
GET = "Get"
SET = "Set"
GET_ALL = "GetAll"

# Properties
REGISTERED_ITEMS = "RegisteredStatusNotifierItems"
HOST_REGISTERED = "IsStatusNotifierHostRegistered"
PROTOCOL_VERSION_PROPERTY = "ProtocolVersion"
REGISTERED_PATH_ITEMS = "RegisteredObjectPathItems"

PROTOCOL_VERSION = 0

# Signals
ITEM_REGISTERED = "StatusNotifierItemRegistered"
ITEM_UNREGISTERED = "StatusNotifierItemUnregistered"
HOST_REGISTERED_SIGNAL = "StatusNotifierHostRegistered"
PATH_ITEM_REGISTERED = "ObjPathItemRegistered"

INTROSPECTION_XML = """\
<!DOCTYPE node PUBLIC "-//freedesktop//DTD D-BUS Object Introspection 1.0//EN"
"http://www.freedesktop.org/standards/dbus/1.0/introspect.dtd">
<node>
  <interface name='org.freedesktop.DBus.Introspectable'>
    <method name='Introspect'>
      <arg name='xml_data' direction='out' type='s'/>
    </method>
  </interface>
  <interface name='org.freedesktop.DBus.Properties'>
    <method name='Get'>
      <arg name='interface' direction='in' type='s'/>
      <arg name='propname' direction='in' type='s'/>
      <arg name='value' direction='out' type='v'/>
    </method>
    <method name='Set'>
      <arg name='interface' direction='in' type='s'/>
      <arg name='propname' direction='in' type='s'/>
      <arg name='value' direction='in' type='v'/>
    </method>
    <method name='GetAll'>
      <arg name='interface' direction='in' type='s'/>
      <arg name='props' direction='out' type='a{sv}'/>
    </method>
  </interface>
  <interface name='org.freedesktop.StatusNotifierWatcher'>
    <method name='RegisterStatusNotifierItem'>
      <arg type='s' name='service' direction='in'/>
    </method>
    <method name='RegisterStatusNotifierHost'>
      <arg type='s' name='service' direction='in'/>
    </method>
    <property name='RegisteredStatusNotifierItems' type='as' access='read'/>
    <property name='IsStatusNotifierHostRegistered' type='b' access='read'/>
    <property name='ProtocolVersion' type='i' access='read'/>
    <signal name='StatusNotifierItemRegistered'>
      <arg type='s' name='service'/>
    </signal>
    <signal name='StatusNotifierItemUnregistered'>
      <arg type='s' name='service'/>
    </signal>
    <signal name='StatusNotifierHostRegistered'/>
  </interface>
  <interface name='org.swaywm.LessSuckyStatusNotifierWatcher'>
    <property name='RegisteredObjectPathItems' type='a(os)' access='read'/>
    <signal name='ObjPathItemRegistered'>
      <arg type='o' name='path'/>
      <arg type='s' name='service'/>
    </signal>
  </interface>
</node>
"""
