"""
Builds view trees from layout documents, expanding ``<include>`` tags.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Optional, Tuple

from layoutassist.dom.document import DOMDocument, DOMNode
from layoutassist.errors import InflateError
from layoutassist.inflater.views import IncludeView, View, ViewAttribute, ViewImpl

logger = logging.getLogger(__name__)

_LAYOUT_REF_RE = re.compile(r"^@layout/([A-Za-z0-9_.]+)$")


class LayoutInflater:
    """
    Inflates documents into ``View`` trees.

    Args:
        layouts: Layout name (as in ``@layout/name``) to parsed document, used
            to resolve ``<include>`` tags
    """

    def __init__(self, layouts: Optional[Dict[str, DOMDocument]] = None):
        self.layouts = dict(layouts or {})

    @classmethod
    def from_res_dir(cls, res_dir) -> "LayoutInflater":
        """Index every ``layout*/*.xml`` file under an Android ``res`` directory."""
        layouts: Dict[str, DOMDocument] = {}
        for path in sorted(Path(res_dir).glob("layout*/*.xml")):
            layouts.setdefault(path.stem, DOMDocument.from_file(path))
        logger.debug(f"Indexed {len(layouts)} layouts under {res_dir}")
        return cls(layouts)

    def inflate(self, document: DOMDocument) -> View:
        return self._inflate_document(document, including=())

    def _inflate_document(self, document: DOMDocument, including: Tuple[str, ...]) -> View:
        root = document.document_element
        if root is None:
            raise InflateError("Layout has no root element")
        return self._inflate_node(root, None, including)

    def _inflate_node(
        self,
        node: DOMNode,
        parent: Optional[ViewImpl],
        including: Tuple[str, ...],
    ) -> View:
        if node.tag == "include":
            return self._inflate_include(node, including)

        view = ViewImpl(node.tag, parent)
        for attr in node.attributes:
            if not attr.is_xmlns:
                view.apply_attribute(ViewAttribute.from_dom(attr))
        for child in node.children:
            view.add_child(self._inflate_node(child, view, including))
        return view

    def _inflate_include(self, node: DOMNode, including: Tuple[str, ...]) -> IncludeView:
        reference = node.get_attribute("layout") or ""
        match = _LAYOUT_REF_RE.match(reference)
        if not match:
            raise InflateError(f"<include> at offset {node.start} has invalid layout '{reference}'")

        name = match.group(1)
        if name in including:
            raise InflateError(f"Recursive include of @layout/{name}")
        document = self.layouts.get(name)
        if document is None:
            raise InflateError(f"Unknown layout @layout/{name}")

        view = IncludeView(self._inflate_document(document, including + (name,)), layout=name)
        for attr in node.attributes:
            if attr.name != "layout" and not attr.is_xmlns:
                view.apply_attribute(ViewAttribute.from_dom(attr))
        return view
