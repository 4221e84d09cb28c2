"""
Tests for styleable resolution along the widget hierarchy.
"""

from layoutassist.completion.hierarchy import HierarchyResolver
from layoutassist.dom.document import DOMDocument
from layoutassist.resources.table import ResourceTablePackage, ResourceType
from layoutassist.widgets.table import Widget, WidgetTable


def node_for(text, tag):
    """First element named ``tag`` in ``text``."""
    for node in DOMDocument.parse(text).iter():
        if node.tag == tag:
            return node
    raise AssertionError(f"<{tag}> not found")


def names(styleables):
    return {styleable.name for styleable in styleables}


# ===========================================================================
# Known widgets
# ===========================================================================

class TestKnownWidgets:
    def test_button_inside_linear_layout(self, widgets, platform_styleables):
        node = node_for("<LinearLayout><Button /></LinearLayout>", "Button")

        result = HierarchyResolver(widgets).resolve(node, platform_styleables)

        assert names(result) == {
            "Button",
            "TextView",
            "View",
            "LinearLayout_Layout",
            "LinearLayout_MarginLayout",
            "ViewGroup_Layout",
            "ViewGroup_MarginLayout",
        }

    def test_root_container_gets_margin_layout_from_superclass(self, widgets, platform_styleables):
        node = node_for("<LinearLayout />", "LinearLayout")

        result = HierarchyResolver(widgets).resolve(node, platform_styleables)

        assert names(result) == {"View", "LinearLayout", "ViewGroup", "ViewGroup_MarginLayout"}

    def test_root_widget_has_no_layout_params(self, widgets, platform_styleables):
        node = node_for("<TextView />", "TextView")

        result = HierarchyResolver(widgets).resolve(node, platform_styleables)

        assert names(result) == {"View", "TextView"}

    def test_qualified_tag_resolves_by_qualified_name(self, widgets, platform_styleables):
        node = node_for("<android.widget.Button />", "android.widget.Button")

        result = HierarchyResolver(widgets).resolve(node, platform_styleables)

        assert names(result) == {"View", "TextView", "Button"}

    def test_always_contains_base_and_own_group(self, widgets, platform_styleables):
        resolver = HierarchyResolver(widgets)
        for tag in ("View", "TextView", "Button", "LinearLayout"):
            document = DOMDocument.parse(f"<FrameLayout><{tag} /></FrameLayout>")
            node = document.document_element.children[0]
            result = names(resolver.resolve(node, platform_styleables))
            assert "View" in result
            assert tag in result
            assert "ViewGroup_Layout" in result
            assert "ViewGroup_MarginLayout" in result

    def test_margin_layout_appears_once(self, widgets, platform_styleables):
        # Reachable from the node's own superclasses, the parent's base
        # layout params and the parent's superclass walk
        node = node_for("<LinearLayout><LinearLayout /></LinearLayout>", "LinearLayout")
        node = node.children[0]

        result = HierarchyResolver(widgets).resolve(node, platform_styleables)

        assert [s.name for s in result].count("ViewGroup_MarginLayout") == 1

    def test_resolution_is_deterministic(self, widgets, platform_styleables):
        node = node_for("<RelativeLayout><Button /></RelativeLayout>", "Button")
        resolver = HierarchyResolver(widgets)

        assert resolver.resolve(node, platform_styleables) == resolver.resolve(node, platform_styleables)

    def test_layout_params_come_from_direct_parent_only(self, widgets, platform_styleables):
        text = "<RelativeLayout><LinearLayout><Button /></LinearLayout></RelativeLayout>"
        node = node_for(text, "Button")

        result = names(HierarchyResolver(widgets).resolve(node, platform_styleables))

        assert "LinearLayout_Layout" in result
        assert "RelativeLayout_Layout" not in result

    def test_layout_params_never_from_own_class(self, widgets, platform_styleables):
        node = node_for("<FrameLayout><LinearLayout /></FrameLayout>", "LinearLayout")

        result = names(HierarchyResolver(widgets).resolve(node, platform_styleables))

        assert "FrameLayout_Layout" in result
        assert "LinearLayout_Layout" not in result
        assert "LinearLayout_MarginLayout" not in result

    def test_superclasses_walked_transitively(self, platform_styleables):
        # Only the direct superclass is recorded for each widget
        widgets = WidgetTable([
            Widget("android.view.View"),
            Widget("android.widget.TextView", ("android.view.View",)),
            Widget("android.widget.Button", ("android.widget.TextView",)),
            Widget("com.example.FancyButton", ("android.widget.Button",)),
        ])
        node = node_for("<com.example.FancyButton />", "com.example.FancyButton")

        result = names(HierarchyResolver(widgets).resolve(node, platform_styleables))

        assert {"View", "TextView", "Button"} <= result


# ===========================================================================
# Unknown widgets
# ===========================================================================

class TestUnknownWidgets:
    def test_unqualified_unknown_tag_at_root_is_empty(self, widgets, platform_styleables):
        node = node_for("<Mystery />", "Mystery")

        assert HierarchyResolver(widgets).resolve(node, platform_styleables) == set()

    def test_unqualified_unknown_tag_inside_container_is_empty(self, widgets, platform_styleables):
        node = node_for("<LinearLayout><Mystery /></LinearLayout>", "Mystery")

        assert HierarchyResolver(widgets).resolve(node, platform_styleables) == set()

    def test_qualified_unknown_tag_uses_simple_name(self, widgets, module_styleables):
        node = node_for("<com.example.CustomView />", "com.example.CustomView")

        result = HierarchyResolver(widgets).resolve(node, module_styleables)

        assert names(result) == {"CustomView"}

    def test_name_convention_with_unknown_parent(self, widgets):
        package = ResourceTablePackage("mixed")
        for name in ("View", "CustomView", "ViewGroup_Layout", "ViewGroup_MarginLayout",
                     "Frame_Layout", "Frame"):
            package.add_styleable(name, [name.lower()])
        styleables = package.find_group(ResourceType.STYLEABLE)
        text = "<com.example.Frame><com.example.CustomView /></com.example.Frame>"
        node = node_for(text, "com.example.CustomView")

        result = names(HierarchyResolver(widgets).resolve(node, styleables))

        assert result == {"View", "CustomView", "ViewGroup_Layout", "ViewGroup_MarginLayout"}

    def test_name_convention_with_known_parent(self, widgets):
        package = ResourceTablePackage("mixed")
        for name in ("View", "CustomView", "ViewGroup_Layout", "ViewGroup_MarginLayout",
                     "LinearLayout_Layout", "LinearLayout_MarginLayout", "LinearLayout"):
            package.add_styleable(name, [name.lower()])
        styleables = package.find_group(ResourceType.STYLEABLE)
        text = "<LinearLayout><com.example.CustomView /></LinearLayout>"
        node = node_for(text, "com.example.CustomView")

        result = names(HierarchyResolver(widgets).resolve(node, styleables))

        # The parent's own layout params are not looked up for unknown views
        assert result == {"View", "CustomView", "ViewGroup_Layout", "ViewGroup_MarginLayout"}

    def test_unknown_parent_contributes_base_layout_params_only(self, widgets, platform_styleables):
        node = node_for("<Mystery><Button /></Mystery>", "Button")

        result = names(HierarchyResolver(widgets).resolve(node, platform_styleables))

        assert result == {
            "Button", "TextView", "View", "ViewGroup_Layout", "ViewGroup_MarginLayout",
        }

    def test_unknown_superclasses_are_skipped_safely(self, platform_styleables):
        widgets = WidgetTable([Widget("com.example.Odd", ("com.example.Missing", "java.lang.Object"))])
        node = node_for("<com.example.Odd />", "com.example.Odd")

        result = names(HierarchyResolver(widgets).resolve(node, platform_styleables))

        assert result == {"View"}
