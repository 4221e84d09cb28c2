"""
Layout inflation into view trees.
"""

from layoutassist.inflater.inflater import LayoutInflater
from layoutassist.inflater.views import IncludeView, View, ViewAttribute, ViewImpl

__all__ = ["IncludeView", "LayoutInflater", "View", "ViewAttribute", "ViewImpl"]
