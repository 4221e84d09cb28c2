"""
Widget table - maps widget class names to their superclass chains.

The table is loaded from the SDK's ``widgets.txt``, where every line is a kind
character followed by the qualified class name and its superclasses:

    Wandroid.widget.Button android.widget.TextView android.view.View java.lang.Object
    Landroid.widget.LinearLayout android.view.ViewGroup android.view.View java.lang.Object
    Pandroid.widget.LinearLayout$LayoutParams android.view.ViewGroup$MarginLayoutParams ...
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from layoutassist.errors import WidgetTableError

logger = logging.getLogger(__name__)


class WidgetType(Enum):
    """Kind character used in widgets.txt."""

    WIDGET = "W"
    LAYOUT = "L"
    LAYOUT_PARAMS = "P"


@dataclass(frozen=True)
class Widget:
    """A UI widget class and its superclass chain (nearest first)."""

    name: str
    superclasses: Tuple[str, ...] = ()
    type: WidgetType = WidgetType.WIDGET

    @property
    def simple_name(self) -> str:
        return self.name.rpartition(".")[2]

    @property
    def package(self) -> str:
        return self.name.rpartition(".")[0]


class WidgetTable:
    """
    Lookup of widgets by qualified or simple name.

    Populated once at startup and only read afterwards.
    """

    def __init__(self, widgets: Iterable[Widget] = ()):
        self._by_name: Dict[str, Widget] = {}
        self._by_simple_name: Dict[str, Widget] = {}
        for widget in widgets:
            self.register(widget)

    def register(self, widget: Widget):
        """Add a widget. The first widget registered under a simple name keeps it."""
        self._by_name[widget.name] = widget
        self._by_simple_name.setdefault(widget.simple_name, widget)

    def get_widget(self, name: str) -> Optional[Widget]:
        """Find a widget by its fully qualified name."""
        return self._by_name.get(name)

    def find_widget_with_simple_name(self, simple_name: str) -> Optional[Widget]:
        """Find a widget by its simple (unqualified) name."""
        return self._by_simple_name.get(simple_name)

    def resolve(self, name: str) -> Optional[Widget]:
        """Qualified lookup for dotted names, simple-name lookup otherwise."""
        if "." in name:
            return self.get_widget(name)
        return self.find_widget_with_simple_name(name)

    def superclasses_of(self, widget: Widget) -> List[str]:
        """
        Every ancestor class name of ``widget``.

        Walks the superclass lists transitively, so tables that only record
        the direct superclass give the same answer as ones storing the full
        chain. Each name is reported once.
        """
        result: List[str] = []
        seen = {widget.name}
        pending = list(reversed(widget.superclasses))
        while pending:
            name = pending.pop()
            if name in seen:
                continue
            seen.add(name)
            result.append(name)

            ancestor = self.resolve(name)
            if ancestor is not None:
                seen.add(ancestor.name)
                pending.extend(reversed(ancestor.superclasses))
        return result

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "WidgetTable":
        """Parse widgets.txt content."""
        table = cls()
        kinds = {kind.value: kind for kind in WidgetType}
        for lineno, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            head, *superclasses = line.split()
            kind = kinds.get(head[0])
            if kind is None or len(head) < 2:
                raise WidgetTableError(f"line {lineno}: unknown widget entry {head!r}")

            table.register(Widget(name=head[1:], superclasses=tuple(superclasses), type=kind))
        return table

    @classmethod
    def load(cls, path) -> "WidgetTable":
        """Load a widget table from a widgets.txt file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                table = cls.from_lines(f)
        except OSError as e:
            raise WidgetTableError(f"Failed to read {path}: {e}") from e

        logger.debug(f"Loaded {len(table)} widgets from {path}")
        return table
