"""
Offset-aware XML document model.

Layout files are completed while they are being typed, so the scanner never
rejects input: unterminated start tags, missing end tags and half-written
attributes all produce a best-effort tree whose nodes and attributes keep
their source offsets.
"""

import bisect
import html
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from layoutassist.lsp.protocol import Position

XMLNS = "xmlns"
XMLNS_URI = "http://www.w3.org/2000/xmlns/"
XML_URI = "http://www.w3.org/XML/1998/namespace"

_NAME_RE = re.compile(r"[^\s=/<>\"']+")
_UNQUOTED_VALUE_RE = re.compile(r"[^\s<>\"'/]+")


@dataclass(eq=False)
class DOMAttr:
    """An attribute of a start tag. ``value`` is None when no ``=`` was typed."""

    name: str
    value: Optional[str]
    start: int
    end: int
    owner: Optional["DOMNode"] = field(default=None, repr=False)

    @property
    def name_end(self) -> int:
        return self.start + len(self.name)

    @property
    def prefix(self) -> Optional[str]:
        prefix, sep, _ = self.name.partition(":")
        return prefix if sep else None

    @property
    def local_name(self) -> str:
        return self.name.rpartition(":")[2]

    @property
    def is_xmlns(self) -> bool:
        """True for namespace declarations, ``xmlns`` or ``xmlns:prefix``."""
        return self.name == XMLNS or self.name.startswith(XMLNS + ":")

    @property
    def namespace_uri(self) -> Optional[str]:
        """Namespace bound to this attribute's prefix, if declared in scope."""
        if self.is_xmlns:
            return XMLNS_URI
        prefix = self.prefix
        if prefix is None or self.owner is None:
            return None
        return self.owner.lookup_namespace(prefix)


@dataclass(eq=False)
class DOMNode:
    """An element. The document's root element has no parent."""

    tag: str
    start: int
    end: int = -1
    start_tag_end: int = -1
    closed: bool = False
    parent: Optional["DOMNode"] = field(default=None, repr=False)
    attributes: List[DOMAttr] = field(default_factory=list, repr=False)
    children: List["DOMNode"] = field(default_factory=list, repr=False)

    @property
    def node_name(self) -> str:
        return self.tag

    @property
    def simple_name(self) -> str:
        return self.tag.rpartition(".")[2]

    @property
    def is_qualified(self) -> bool:
        return "." in self.tag

    def contains(self, offset: int) -> bool:
        if self.start < offset < self.end:
            return True
        # Cursor sitting at the end of an unterminated tag still belongs to it
        return not self.closed and offset == self.end

    def get_attribute_node(self, name: str) -> Optional[DOMAttr]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def get_attribute(self, name: str) -> Optional[str]:
        attr = self.get_attribute_node(name)
        return attr.value if attr else None

    def namespace_declarations(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(prefix, uri)`` for each ``xmlns:prefix`` declared on this node."""
        for attr in self.attributes:
            if attr.is_xmlns and attr.prefix and attr.value is not None:
                yield attr.local_name, attr.value

    def lookup_namespace(self, prefix: str) -> Optional[str]:
        if prefix == "xml":
            return XML_URI
        if prefix == XMLNS:
            return XMLNS_URI
        node: Optional[DOMNode] = self
        while node is not None:
            for declared, uri in node.namespace_declarations():
                if declared == prefix:
                    return uri
            node = node.parent
        return None

    def iter(self) -> Iterator["DOMNode"]:
        """Depth-first iteration over this node and its descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class DOMDocument:
    """A parsed layout document with offset lookups."""

    def __init__(self, text: str, roots: List[DOMNode]):
        self.text = text
        self.roots = roots
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    @classmethod
    def parse(cls, text: str) -> "DOMDocument":
        return cls(text, _Scanner(text).scan())

    @classmethod
    def from_file(cls, path) -> "DOMDocument":
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    @property
    def document_element(self) -> Optional[DOMNode]:
        return self.roots[0] if self.roots else None

    def iter(self) -> Iterator[DOMNode]:
        for root in self.roots:
            yield from root.iter()

    def find_node_at(self, offset: int) -> Optional[DOMNode]:
        """Deepest element whose source range contains ``offset``."""
        found = None
        candidates = self.roots
        while True:
            hit = None
            for node in candidates:
                if node.contains(offset):
                    hit = node
            if hit is None:
                return found
            found = hit
            candidates = hit.children

    def find_attr_at(self, offset: int) -> Optional[DOMAttr]:
        """Attribute of the element at ``offset`` whose range includes it."""
        node = self.find_node_at(offset)
        if node is None:
            return None
        for attr in node.attributes:
            if attr.start <= offset <= attr.end:
                return attr
        return None

    def offset_at(self, line: int, character: int) -> int:
        """Convert a 0-indexed line/character position to an offset."""
        if line < 0:
            return 0
        if line >= len(self._line_starts):
            return len(self.text)
        line_start = self._line_starts[line]
        if line + 1 < len(self._line_starts):
            line_end = self._line_starts[line + 1] - 1
        else:
            line_end = len(self.text)
        return min(line_start + max(character, 0), line_end)

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self.text)))
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line=line, character=offset - self._line_starts[line])


class _Scanner:
    """Single pass, error-tolerant tag scanner."""

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.roots: List[DOMNode] = []
        self.stack: List[DOMNode] = []

    def scan(self) -> List[DOMNode]:
        text = self.text
        i = 0
        while i < self.length:
            lt = text.find("<", i)
            if lt == -1:
                break
            if text.startswith("<!--", lt):
                i = self._skip_past("-->", lt + 4)
            elif text.startswith("<![CDATA[", lt):
                i = self._skip_past("]]>", lt + 9)
            elif text.startswith("<?", lt) or text.startswith("<!", lt):
                i = self._skip_past(">", lt + 2)
            elif text.startswith("</", lt):
                i = self._end_tag(lt)
            else:
                i = self._start_tag(lt)

        for node in self.stack:
            node.end = self.length
        return self.roots

    def _skip_past(self, marker: str, start: int) -> int:
        close = self.text.find(marker, start)
        return self.length if close == -1 else close + len(marker)

    def _end_tag(self, lt: int) -> int:
        match = _NAME_RE.match(self.text, lt + 2)
        name = match.group() if match else ""
        end = self._skip_past(">", lt + 2)
        for depth in range(len(self.stack) - 1, -1, -1):
            if self.stack[depth].tag == name:
                # Elements left open inside the closed one end where it ends
                for node in self.stack[depth + 1:]:
                    node.end = lt
                self.stack[depth].end = end
                self.stack[depth].closed = True
                del self.stack[depth:]
                break
        return end

    def _start_tag(self, lt: int) -> int:
        match = _NAME_RE.match(self.text, lt + 1)
        if not match:
            return lt + 1

        parent = self.stack[-1] if self.stack else None
        node = DOMNode(tag=match.group(), start=lt, parent=parent)
        if parent is None:
            self.roots.append(node)
        else:
            parent.children.append(node)

        pos, is_open = self._attributes(node, match.end())
        if is_open:
            self.stack.append(node)
        return pos

    def _attributes(self, node: DOMNode, pos: int) -> Tuple[int, bool]:
        """Scan attributes up to the end of the start tag. Returns (pos, opened)."""
        text = self.text
        j = pos
        while j < self.length:
            ch = text[j]
            if ch.isspace() or ch == "/" and not text.startswith("/>", j):
                j += 1
                continue
            if text.startswith("/>", j):
                node.start_tag_end = node.end = j + 2
                node.closed = True
                return j + 2, False
            if ch == ">":
                node.start_tag_end = j + 1
                return j + 1, True
            if ch == "<":
                node.start_tag_end = node.end = j
                return j, False

            match = _NAME_RE.match(text, j)
            if not match:
                j += 1
                continue
            node.attributes.append(self._attribute(node, match))
            j = node.attributes[-1].end

        node.start_tag_end = node.end = self.length
        return self.length, False

    def _attribute(self, node: DOMNode, match) -> DOMAttr:
        text = self.text
        name = match.group()
        end = match.end()
        value = None

        k = self._skip_ws(end)
        if k < self.length and text[k] == "=":
            k = self._skip_ws(k + 1)
            if k < self.length and text[k] in "\"'":
                close = text.find(text[k], k + 1)
                if close == -1:
                    stop = re.compile(r"[<>]").search(text, k + 1)
                    close = stop.start() if stop else self.length
                    end = close
                else:
                    end = close + 1
                value = html.unescape(text[k + 1:close])
            else:
                unquoted = _UNQUOTED_VALUE_RE.match(text, k)
                value = html.unescape(unquoted.group()) if unquoted else ""
                end = unquoted.end() if unquoted else k

        return DOMAttr(name=name, value=value, start=match.start(), end=end, owner=node)

    def _skip_ws(self, pos: int) -> int:
        while pos < self.length and self.text[pos].isspace():
            pos += 1
        return pos
