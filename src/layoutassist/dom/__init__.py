"""
Document access for layout XML.
"""

from layoutassist.dom.document import XMLNS_URI, DOMAttr, DOMDocument, DOMNode

__all__ = ["DOMAttr", "DOMDocument", "DOMNode", "XMLNS_URI"]
