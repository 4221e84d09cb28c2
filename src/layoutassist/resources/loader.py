"""
Resource table loaders.

Two on-disk formats are understood:

- JSON dumps of styleables, one object per package::

    {"packages": {"android": {"styleables": {
        "TextView": ["text", {"name": "textColor", "format": "color"}]
    }}}}

- ``values/attrs.xml`` files with ``<declare-styleable>`` blocks, as written in
  app and library modules.
"""

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional

from layoutassist.errors import ResourceLoadError
from layoutassist.resources.table import (
    AttributeReference,
    ResourceName,
    ResourceTable,
    ResourceType,
)

logger = logging.getLogger(__name__)


def load_json_table(path) -> ResourceTable:
    """Load a resource table from a JSON styleable dump."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ResourceLoadError(f"Failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ResourceLoadError(f"Invalid JSON in {path}: {e}") from e

    table = table_from_dict(data, source=str(path))
    logger.debug(f"Loaded {len(table.packages)} packages from {path}")
    return table


def table_from_dict(data: Dict[str, Any], source: str = "<dict>") -> ResourceTable:
    packages = data.get("packages") if isinstance(data, dict) else None
    if not isinstance(packages, dict):
        raise ResourceLoadError(f"{source}: expected a 'packages' object")

    table = ResourceTable()
    for package_name, package_data in packages.items():
        package = table.find_or_create_package(package_name)
        styleables = (package_data or {}).get("styleables", {})
        for styleable_name, attrs in styleables.items():
            refs = [_json_attr(package_name, attr, source) for attr in attrs]
            package.add_styleable(styleable_name, refs)
    return table


def _json_attr(package_name: str, attr: Any, source: str) -> AttributeReference:
    if isinstance(attr, str):
        attr = {"name": attr}
    elif not isinstance(attr, dict) or "name" not in attr:
        raise ResourceLoadError(f"{source}: invalid attribute {attr!r}")

    pck, sep, entry = attr["name"].rpartition(":")
    owner = attr.get("package") or (pck if sep else package_name)
    return AttributeReference(
        ResourceName(owner, ResourceType.ATTR, entry), format=attr.get("format")
    )


def load_attrs_xml(path, package: str, table: Optional[ResourceTable] = None) -> ResourceTable:
    """
    Load ``<declare-styleable>`` blocks from an attrs.xml file into ``package``.

    Args:
        path: Path to the attrs.xml file
        package: Package that owns the declared attributes
        table: Existing table to add to (a new one is created otherwise)

    Returns:
        The resource table
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            tree = ET.parse(f)
    except OSError as e:
        raise ResourceLoadError(f"Failed to read {path}: {e}") from e
    except ET.ParseError as e:
        raise ResourceLoadError(f"Malformed XML in {path}: {e}") from e

    root = tree.getroot()
    if root.tag != "resources":
        raise ResourceLoadError(f"{path}: expected a <resources> root element")

    table = table if table is not None else ResourceTable()
    target = table.find_or_create_package(package)

    # Top-level <attr> declarations carry the format for styleable references
    formats: Dict[str, Optional[str]] = {}
    for node in root.findall("attr"):
        if node.get("name"):
            formats[node.get("name")] = node.get("format")

    count = 0
    for styleable in root.findall("declare-styleable"):
        name = styleable.get("name")
        if not name:
            logger.warning(f"{path}: <declare-styleable> without a name")
            continue

        refs: List[AttributeReference] = []
        for node in styleable.findall("attr"):
            attr_name = node.get("name")
            if not attr_name:
                continue
            pck, sep, entry = attr_name.rpartition(":")
            fmt = node.get("format") or formats.get(attr_name)
            refs.append(AttributeReference(
                ResourceName(pck if sep else package, ResourceType.ATTR, entry),
                format=fmt,
            ))
        target.add_styleable(name, refs)
        count += 1

    logger.debug(f"Loaded {count} styleables into '{package}' from {path}")
    return table


def load_table(path, package: Optional[str] = None) -> ResourceTable:
    """Load a table from JSON or attrs.xml, chosen by file extension."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_json_table(path)
    if path.suffix.lower() == ".xml":
        if not package:
            raise ResourceLoadError(f"{path}: a package name is required for attrs.xml")
        return load_attrs_xml(path, package)
    raise ResourceLoadError(f"Unsupported resource table format: {path}")
