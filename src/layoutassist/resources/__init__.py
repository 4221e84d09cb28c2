"""
Resource tables and their loaders.
"""

from layoutassist.resources.loader import (
    load_attrs_xml,
    load_json_table,
    load_table,
    table_from_dict,
)
from layoutassist.resources.table import (
    ANDROID_NAMESPACE,
    NAMESPACE_AUTO,
    NAMESPACE_PREFIX,
    AttributeReference,
    ConfigDescription,
    ResourceEntry,
    ResourceGroup,
    ResourceName,
    ResourceTable,
    ResourceTablePackage,
    ResourceTableRegistry,
    ResourceType,
    Styleable,
)

__all__ = [
    "ANDROID_NAMESPACE",
    "NAMESPACE_AUTO",
    "NAMESPACE_PREFIX",
    "AttributeReference",
    "ConfigDescription",
    "ResourceEntry",
    "ResourceGroup",
    "ResourceName",
    "ResourceTable",
    "ResourceTablePackage",
    "ResourceTableRegistry",
    "ResourceType",
    "Styleable",
    "load_attrs_xml",
    "load_json_table",
    "load_table",
    "table_from_dict",
]
