"""
View nodes produced by inflating a layout.

``ViewImpl`` is a plain element; ``IncludeView`` stands in for an
``<include>`` tag and forwards everything to the root of the embedded layout.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from layoutassist.dom.document import DOMAttr


@dataclass(frozen=True)
class ViewAttribute:
    """An attribute applied to a view."""

    namespace: Optional[str]
    prefix: Optional[str]
    name: str
    value: str

    @property
    def qualified_name(self) -> str:
        return f"{self.prefix}:{self.name}" if self.prefix else self.name

    @classmethod
    def from_dom(cls, attr: DOMAttr) -> "ViewAttribute":
        return cls(
            namespace=attr.namespace_uri,
            prefix=attr.prefix,
            name=attr.local_name,
            value=attr.value or "",
        )


class View(ABC):
    """Capabilities shared by every inflated node."""

    tag: str

    @abstractmethod
    def apply_attribute(self, attribute: ViewAttribute):
        """Apply an attribute to this view."""

    @abstractmethod
    def print_hierarchy(self, lines: Optional[List[str]] = None, indent: int = 0) -> str:
        """Render this view and its children, one view per line."""


class ViewImpl(View):
    def __init__(self, tag: str, parent: Optional[View] = None):
        self.tag = tag
        self.parent = parent
        self.children: List[View] = []
        self._attributes: Dict[Tuple[Optional[str], str], ViewAttribute] = {}

    @property
    def attributes(self) -> List[ViewAttribute]:
        return list(self._attributes.values())

    def add_child(self, view: View):
        self.children.append(view)

    def apply_attribute(self, attribute: ViewAttribute):
        # A later value for the same attribute replaces the earlier one
        self._attributes[(attribute.namespace, attribute.name)] = attribute

    def get_attribute(self, name: str, namespace: Optional[str] = None) -> Optional[str]:
        attribute = self._attributes.get((namespace, name))
        return attribute.value if attribute else None

    def print_hierarchy(self, lines: Optional[List[str]] = None, indent: int = 0) -> str:
        lines = [] if lines is None else lines
        rendered = " ".join(f'{a.qualified_name}="{a.value}"' for a in self.attributes)
        lines.append("  " * indent + (f"{self.tag} {rendered}" if rendered else self.tag))
        for child in self.children:
            child.print_hierarchy(lines, indent + 1)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ViewImpl({self.tag!r}, children={len(self.children)})"


class IncludeView(View):
    """View for ``<include>`` tags."""

    tag = "include"

    def __init__(self, embedded: View, layout: str):
        self.embedded = embedded
        self.layout = layout

    def apply_attribute(self, attribute: ViewAttribute):
        # The attributes must be applied to the embedded view
        self.embedded.apply_attribute(attribute)

    def print_hierarchy(self, lines: Optional[List[str]] = None, indent: int = 0) -> str:
        return self.embedded.print_hierarchy(lines, indent)

    def __repr__(self) -> str:
        return f"IncludeView(@layout/{self.layout} -> {self.embedded!r})"
