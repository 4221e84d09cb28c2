"""
Shared fixtures: a small framework widget table and resource tables.
"""

import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from layoutassist.completion.provider import LayoutAttributeCompletionProvider
from layoutassist.resources.table import (
    NAMESPACE_AUTO,
    ResourceTable,
    ResourceTableRegistry,
    ResourceType,
)
from layoutassist.widgets.table import WidgetTable

ANDROID_NS = "http://schemas.android.com/apk/res/android"
APP_NS = NAMESPACE_AUTO
TOOLS_NS = "http://schemas.android.com/tools"

WIDGETS_TXT = """\
Wandroid.view.View java.lang.Object
Wandroid.widget.TextView android.view.View java.lang.Object
Wandroid.widget.Button android.widget.TextView android.view.View java.lang.Object
Landroid.view.ViewGroup android.view.View java.lang.Object
Landroid.widget.LinearLayout android.view.ViewGroup android.view.View java.lang.Object
Landroid.widget.FrameLayout android.view.ViewGroup android.view.View java.lang.Object
Landroid.widget.RelativeLayout android.view.ViewGroup android.view.View java.lang.Object
"""

PLATFORM_STYLEABLES = {
    "View": ["id", "background", "padding", "visibility", "textAlignment"],
    "TextView": ["text", "textColor", "textSize", "gravity", "hint", "textAlignment"],
    "Button": ["buttonTint"],
    "ViewGroup": ["clipChildren"],
    "ViewGroup_Layout": ["layout_width", "layout_height"],
    "ViewGroup_MarginLayout": ["layout_margin", "layout_marginTop"],
    "LinearLayout": ["orientation"],
    "LinearLayout_Layout": ["layout_weight", "layout_gravity"],
    "LinearLayout_MarginLayout": ["layout_marginStart"],
    "FrameLayout_Layout": ["layout_gravity"],
    "RelativeLayout_Layout": ["layout_below", "layout_centerInParent"],
}

MODULE_STYLEABLES = {
    "CustomView": ["customColor", "cornerRadius", "android:text"],
    "ChipGroup_Layout": ["chipSpacing"],
}


def with_namespaces(tag: str, inner: str = "", extra: str = "") -> str:
    """Root element declaring the android and app namespaces."""
    return (
        f'<{tag} xmlns:android="{ANDROID_NS}" xmlns:app="{APP_NS}" {extra}>\n'
        f"{inner}\n"
        f"</{tag}>"
    )


@pytest.fixture
def widgets():
    return WidgetTable.from_lines(WIDGETS_TXT.splitlines())


@pytest.fixture
def platform_table():
    table = ResourceTable()
    package = table.find_or_create_package("android")
    for name, attrs in PLATFORM_STYLEABLES.items():
        package.add_styleable(name, attrs)
    return table


@pytest.fixture
def module_table():
    table = ResourceTable()
    package = table.find_or_create_package("com.example")
    for name, attrs in MODULE_STYLEABLES.items():
        package.add_styleable(name, attrs)
    # Packages without a name never take part in res-auto completion
    table.find_or_create_package("").add_styleable("CustomView", ["hidden"])
    return table


@pytest.fixture
def registry(platform_table, module_table):
    registry = ResourceTableRegistry()
    registry.register_platform(platform_table)
    registry.register_module(module_table)
    return registry


@pytest.fixture
def platform_styleables(platform_table):
    return platform_table.find_package("android").find_group(ResourceType.STYLEABLE)


@pytest.fixture
def module_styleables(module_table):
    return module_table.find_package("com.example").find_group(ResourceType.STYLEABLE)


@pytest.fixture
def provider(widgets, registry):
    return LayoutAttributeCompletionProvider(widgets, registry)


def cursor_after(text: str, marker: str) -> int:
    """Offset right after the last occurrence of ``marker`` in ``text``."""
    index = text.rindex(marker)
    return index + len(marker)
