"""
Widget metadata: class names and superclass chains.
"""

from layoutassist.widgets.table import Widget, WidgetTable, WidgetType

__all__ = ["Widget", "WidgetTable", "WidgetType"]
