"""
Tests for the widget table.
"""

import pytest

from conftest import WIDGETS_TXT
from layoutassist.errors import WidgetTableError
from layoutassist.widgets.table import Widget, WidgetTable, WidgetType


class TestParsing:
    def test_from_lines(self):
        table = WidgetTable.from_lines(WIDGETS_TXT.splitlines())

        button = table.get_widget("android.widget.Button")
        assert button.type == WidgetType.WIDGET
        assert button.superclasses == ("android.widget.TextView", "android.view.View", "java.lang.Object")
        assert table.get_widget("android.widget.LinearLayout").type == WidgetType.LAYOUT
        assert len(table) == 7

    def test_blank_lines_and_comments_are_ignored(self):
        table = WidgetTable.from_lines(["", "# generated", "Wandroid.view.View java.lang.Object", "   "])

        assert len(table) == 1

    def test_layout_params_entries(self):
        table = WidgetTable.from_lines([
            "Pandroid.widget.LinearLayout$LayoutParams android.view.ViewGroup$MarginLayoutParams",
        ])

        params = table.get_widget("android.widget.LinearLayout$LayoutParams")
        assert params.type == WidgetType.LAYOUT_PARAMS

    def test_unknown_kind_raises(self):
        with pytest.raises(WidgetTableError, match="line 2"):
            WidgetTable.from_lines(["Wandroid.view.View", "Xandroid.widget.Odd"])

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "widgets.txt"
        path.write_text(WIDGETS_TXT, encoding="utf-8")

        table = WidgetTable.load(path)

        assert "Button" in table
        assert "android.widget.FrameLayout" in table

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(WidgetTableError):
            WidgetTable.load(tmp_path / "missing.txt")


class TestLookup:
    def test_simple_and_qualified_lookup(self, widgets):
        assert widgets.find_widget_with_simple_name("TextView").name == "android.widget.TextView"
        assert widgets.resolve("TextView") is widgets.resolve("android.widget.TextView")
        assert widgets.resolve("com.example.TextView") is None
        assert widgets.get_widget("TextView") is None

    def test_first_simple_name_wins(self):
        table = WidgetTable([
            Widget("android.widget.Toolbar"),
            Widget("androidx.appcompat.widget.Toolbar"),
        ])

        assert table.find_widget_with_simple_name("Toolbar").name == "android.widget.Toolbar"
        assert table.get_widget("androidx.appcompat.widget.Toolbar") is not None

    def test_widget_names(self):
        widget = Widget("android.widget.TextView")

        assert widget.simple_name == "TextView"
        assert widget.package == "android.widget"


class TestSuperclasses:
    def test_full_chain(self, widgets):
        button = widgets.get_widget("android.widget.Button")

        assert widgets.superclasses_of(button) == [
            "android.widget.TextView",
            "android.view.View",
            "java.lang.Object",
        ]

    def test_direct_superclass_only_is_expanded(self):
        table = WidgetTable([
            Widget("android.view.View", ("java.lang.Object",)),
            Widget("android.widget.TextView", ("android.view.View",)),
            Widget("android.widget.Button", ("android.widget.TextView",)),
        ])

        chain = table.superclasses_of(table.get_widget("android.widget.Button"))

        assert chain == ["android.widget.TextView", "android.view.View", "java.lang.Object"]

    def test_cycles_terminate(self):
        table = WidgetTable([
            Widget("a.A", ("a.B",)),
            Widget("a.B", ("a.A",)),
        ])

        assert table.superclasses_of(table.get_widget("a.A")) == ["a.B"]
