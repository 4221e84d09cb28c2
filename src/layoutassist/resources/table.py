"""
In-memory resource tables.

Mirrors the shape of a compiled resource table: a table holds packages, a
package holds one group per resource type, a group holds named entries and an
entry holds one value per configuration. Attribute completion only reads the
``styleable`` groups.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

NAMESPACE_PREFIX = "http://schemas.android.com/apk/res/"
NAMESPACE_AUTO = "http://schemas.android.com/apk/res-auto"
ANDROID_NAMESPACE = NAMESPACE_PREFIX + "android"


class ResourceType(Enum):
    ATTR = "attr"
    COLOR = "color"
    DIMEN = "dimen"
    DRAWABLE = "drawable"
    ID = "id"
    LAYOUT = "layout"
    STRING = "string"
    STYLE = "style"
    STYLEABLE = "styleable"


@dataclass(frozen=True)
class ConfigDescription:
    """Resource configuration qualifiers. Empty qualifiers is the default config."""

    qualifiers: str = ""


@dataclass(frozen=True)
class ResourceName:
    pck: str
    type: ResourceType
    entry: str

    def __str__(self) -> str:
        return f"{self.pck}:{self.type.value}/{self.entry}"


@dataclass(eq=False)
class AttributeReference:
    """One attribute declared inside a styleable."""

    name: ResourceName
    format: Optional[str] = None

    @property
    def entry(self) -> str:
        return self.name.entry

    @property
    def package(self) -> str:
        return self.name.pck


@dataclass(eq=False)
class Styleable:
    """A ``<declare-styleable>``: a named bag of attribute references."""

    name: str
    entries: List[AttributeReference] = field(default_factory=list)


@dataclass
class ResourceConfigValue:
    config: ConfigDescription
    value: Any


class ResourceEntry:
    """All configuration variants of one named resource."""

    def __init__(self, name: str):
        self.name = name
        self.values: Dict[ConfigDescription, ResourceConfigValue] = {}

    def find_value(self, config: ConfigDescription) -> Optional[ResourceConfigValue]:
        return self.values.get(config)

    def set_value(self, value: Any, config: ConfigDescription = ConfigDescription()):
        self.values[config] = ResourceConfigValue(config=config, value=value)


class ResourceGroup:
    """Entries of a single resource type within a package."""

    def __init__(self, type: ResourceType):
        self.type = type
        self.entries: Dict[str, ResourceEntry] = {}

    def find_entry(self, name: str) -> Optional[ResourceEntry]:
        return self.entries.get(name)

    def find_or_create_entry(self, name: str) -> ResourceEntry:
        entry = self.entries.get(name)
        if entry is None:
            entry = self.entries[name] = ResourceEntry(name)
        return entry

    def __len__(self) -> int:
        return len(self.entries)


class ResourceTablePackage:
    def __init__(self, name: str):
        self.name = name
        self.groups: Dict[ResourceType, ResourceGroup] = {}

    def find_group(self, type: ResourceType) -> Optional[ResourceGroup]:
        return self.groups.get(type)

    def find_or_create_group(self, type: ResourceType) -> ResourceGroup:
        group = self.groups.get(type)
        if group is None:
            group = self.groups[type] = ResourceGroup(type)
        return group

    def add_styleable(
        self,
        name: str,
        attrs: Iterable[Union[str, AttributeReference]],
    ) -> Styleable:
        """
        Declare a styleable in the default configuration.

        Plain attribute names are owned by this package; ``pkg:name`` strings
        reference another package's attribute (e.g. ``android:text``).
        """
        entries = []
        for attr in attrs:
            if isinstance(attr, AttributeReference):
                entries.append(attr)
                continue
            pck, sep, entry = attr.rpartition(":")
            owner = pck if sep else self.name
            entries.append(AttributeReference(ResourceName(owner, ResourceType.ATTR, entry)))

        styleable = Styleable(name=name, entries=entries)
        group = self.find_or_create_group(ResourceType.STYLEABLE)
        group.find_or_create_entry(name).set_value(styleable)
        return styleable

    def __repr__(self) -> str:
        return f"ResourceTablePackage({self.name!r})"


class ResourceTable:
    def __init__(self, packages: Iterable[ResourceTablePackage] = ()):
        self.packages: List[ResourceTablePackage] = list(packages)

    def find_package(self, name: str) -> Optional[ResourceTablePackage]:
        for package in self.packages:
            if package.name == name:
                return package
        return None

    def find_or_create_package(self, name: str) -> ResourceTablePackage:
        package = self.find_package(name)
        if package is None:
            package = ResourceTablePackage(name)
            self.packages.append(package)
        return package

    def named_packages(self) -> List[ResourceTablePackage]:
        """Packages with a non-blank name."""
        return [package for package in self.packages if package.name.strip()]


class ResourceTableRegistry:
    """
    Resource tables registered per namespace URI.

    A namespace may be served by several tables and a table may serve several
    namespaces. Registration happens at startup; completion only reads.
    """

    def __init__(self):
        self._tables: Dict[str, List[ResourceTable]] = {}

    def register(self, namespace: str, table: ResourceTable):
        tables = self._tables.setdefault(namespace, [])
        if not any(existing is table for existing in tables):
            tables.append(table)

    def register_platform(self, table: ResourceTable):
        """Serve the framework table under the ``android`` namespace."""
        self.register(ANDROID_NAMESPACE, table)

    def register_module(self, table: ResourceTable):
        """Serve an app/library table under res-auto and each package's own URI."""
        self.register(NAMESPACE_AUTO, table)
        for package in table.named_packages():
            self.register(NAMESPACE_PREFIX + package.name, table)

    def tables_for_namespace(self, namespace: str) -> List[ResourceTable]:
        """Tables registered for ``namespace``, without duplicates."""
        return list(self._tables.get(namespace, ()))

    def namespaces(self) -> List[str]:
        return list(self._tables)

    def all_tables(self) -> List[ResourceTable]:
        seen: List[ResourceTable] = []
        for tables in self._tables.values():
            for table in tables:
                if not any(existing is table for existing in seen):
                    seen.append(table)
        return seen
