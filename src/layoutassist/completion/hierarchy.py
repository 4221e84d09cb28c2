"""
Styleable resolution along the widget class hierarchy.

Attributes are declared per class, so the attributes applicable to a tag are
the union of the styleables of its class and every superclass, plus the
layout params its parent container accepts from children:

    <LinearLayout>            LinearLayout_Layout, ViewGroup_Layout,
        <Button .../>         ViewGroup_MarginLayout (from the parent)
    </LinearLayout>           Button, TextView, View (own hierarchy)
"""

from typing import Set

from layoutassist.dom.document import DOMNode
from layoutassist.resources.table import ResourceGroup, Styleable
from layoutassist.utils.logger import logger
from layoutassist.widgets.table import Widget, WidgetTable
from layoutassist.completion.styleables import find_styleable

VIEW = "View"
VIEW_GROUP = "ViewGroup"
ROOT_CONTAINER_NAMES = ("android.view.ViewGroup", VIEW_GROUP)

LAYOUT_SUFFIX = "_Layout"
MARGIN_LAYOUT_SUFFIX = "_MarginLayout"


class HierarchyResolver:
    """Computes the set of styleables applicable to a layout node."""

    def __init__(self, widgets: WidgetTable):
        self.widgets = widgets

    def resolve(self, node: DOMNode, styleables: ResourceGroup) -> Set[Styleable]:
        """
        Styleables for ``node`` found in ``styleables``.

        Args:
            node: The element being completed
            styleables: The styleable group of one package

        Returns:
            Set of styleables; empty when the tag is unknown and unqualified
        """
        widget = self.widgets.resolve(node.tag)
        if widget is not None:
            result = self._styleables_for_widget(styleables, widget)
            if node.parent is not None:
                result |= self._layout_params(styleables, node.parent)
            return result

        if not node.is_qualified:
            logger.widget_unresolved(node.tag, fallback=False)
            return set()

        # Custom or library view: completions only work when its
        # <declare-styleable> is named after the class. The parent's own
        # layout params are not consulted in this mode.
        logger.widget_unresolved(node.tag, fallback=True)
        result = self._styleables_for_name(styleables, node)
        if node.parent is not None:
            result |= self._base_layout_params(styleables)
        return result

    def _styleables_for_name(self, styleables: ResourceGroup, node: DOMNode) -> Set[Styleable]:
        result: Set[Styleable] = set()
        self._add(styleables, VIEW, result)
        self._add(styleables, node.simple_name, result)
        return result

    def _styleables_for_widget(
        self,
        styleables: ResourceGroup,
        widget: Widget,
        suffix: str = "",
    ) -> Set[Styleable]:
        result: Set[Styleable] = set()
        if not suffix:
            self._add(styleables, VIEW, result)
        self._add(styleables, widget.simple_name + suffix, result)
        self._add_superclass_styleables(styleables, widget, result, suffix)
        return result

    def _add_superclass_styleables(
        self,
        styleables: ResourceGroup,
        widget: Widget,
        result: Set[Styleable],
        suffix: str,
    ):
        for superclass in self.widgets.superclasses_of(widget):
            # Anything extending ViewGroup accepts margins on its children
            if superclass in ROOT_CONTAINER_NAMES:
                self._add(styleables, VIEW_GROUP + MARGIN_LAYOUT_SUFFIX, result)

            ancestor = self.widgets.resolve(superclass)
            simple_name = ancestor.simple_name if ancestor else superclass.rpartition(".")[2]
            self._add(styleables, simple_name + suffix, result)

    def _layout_params(self, styleables: ResourceGroup, parent: DOMNode) -> Set[Styleable]:
        """Layout params contributed by the direct parent only."""
        result = self._base_layout_params(styleables)

        parent_widget = self.widgets.resolve(parent.tag)
        if parent_widget is None:
            return result

        self._add(styleables, parent_widget.simple_name + MARGIN_LAYOUT_SUFFIX, result)
        result |= self._styleables_for_widget(styleables, parent_widget, suffix=LAYOUT_SUFFIX)
        return result

    def _base_layout_params(self, styleables: ResourceGroup) -> Set[Styleable]:
        """Layout params every container accepts, whatever its class."""
        result: Set[Styleable] = set()
        self._add(styleables, VIEW_GROUP + LAYOUT_SUFFIX, result)
        self._add(styleables, VIEW_GROUP + MARGIN_LAYOUT_SUFFIX, result)
        return result

    @staticmethod
    def _add(styleables: ResourceGroup, name: str, result: Set[Styleable]):
        styleable = find_styleable(styleables, name)
        if styleable is not None:
            result.add(styleable)
