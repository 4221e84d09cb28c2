"""
Protocol definitions for completion requests and responses.

Completion items are shaped after LSP's CompletionItem so editors can render
them directly; requests and responses travel as JSON-RPC 2.0 messages.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional
import json


@dataclass
class Position:
    """LSP Position (0-indexed line and character)."""

    line: int
    character: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}

    @classmethod
    def from_dict(cls, data: Dict) -> "Position":
        return cls(line=data["line"], character=data["character"])


@dataclass
class CompletionParams:
    """
    Where to complete.

    Either an absolute character offset or a line/character position; the
    provider converts a position through the document when no offset is set.
    """

    offset: Optional[int] = None
    position: Optional[Position] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletionParams":
        """Create params from a request dictionary."""
        cursor = data.get("cursor") or data.get("position")
        return cls(
            offset=data.get("offset"),
            position=Position.from_dict(cursor) if cursor else None,
        )


class MatchLevel(IntEnum):
    """How well a candidate matches the typed prefix. Higher is better."""

    NO_MATCH = 0
    PARTIAL_MATCH = 1
    CASE_INSENSITIVE_PREFIX = 2
    CASE_SENSITIVE_PREFIX = 3
    CASE_INSENSITIVE_EQUAL = 4
    CASE_SENSITIVE_EQUAL = 5


class CompletionItemKind(IntEnum):
    """Subset of LSP completion item kinds."""

    FIELD = 5
    PROPERTY = 10
    VALUE = 12
    SNIPPET = 15


class InsertTextFormat(IntEnum):
    PLAIN_TEXT = 1
    SNIPPET = 2


@dataclass
class CompletionItem:
    """A single attribute completion."""

    label: str
    ns_prefix: str
    package: str
    match_level: MatchLevel
    detail: str = ""
    kind: CompletionItemKind = CompletionItemKind.PROPERTY
    format: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        """Attribute name as it is inserted, e.g. ``android:textColor``."""
        if not self.ns_prefix:
            return self.label
        return f"{self.ns_prefix}:{self.label}"

    @property
    def insert_text(self) -> str:
        return f'{self.qualified_name}="$0"'

    @property
    def sort_text(self) -> str:
        rank = MatchLevel.CASE_SENSITIVE_EQUAL - self.match_level
        return f"{rank}{self.label}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an LSP CompletionItem dictionary."""
        return {
            "label": self.label,
            "kind": int(self.kind),
            "detail": self.detail,
            "insertText": self.insert_text,
            "insertTextFormat": int(InsertTextFormat.SNIPPET),
            "sortText": self.sort_text,
            "filterText": self.qualified_name,
            "data": {
                "package": self.package,
                "nsPrefix": self.ns_prefix,
                "matchLevel": self.match_level.name,
            },
        }


@dataclass
class CompletionResult:
    """Completion items for one request, best matches first."""

    items: List[CompletionItem] = field(default_factory=list)
    is_incomplete: bool = False

    @classmethod
    def ranked(cls, items: List[CompletionItem], max_items: int = 0) -> "CompletionResult":
        """
        Order items by match level (best first), then label.

        Args:
            items: Unordered completion items
            max_items: Truncate to this many items; 0 keeps everything

        Returns:
            CompletionResult, flagged incomplete when truncated
        """
        ordered = sorted(items, key=lambda item: (-item.match_level, item.label, item.package))
        if max_items and len(ordered) > max_items:
            return cls(items=ordered[:max_items], is_incomplete=True)
        return cls(items=ordered)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isIncomplete": self.is_incomplete,
            "items": [item.to_dict() for item in self.items],
        }


class JSONRPCMessage:
    """JSON-RPC 2.0 message format."""

    @staticmethod
    def response(result: Any, id: Optional[int]) -> str:
        """Create a JSON-RPC response."""
        return json.dumps({
            'jsonrpc': '2.0',
            'result': result,
            'id': id
        })

    @staticmethod
    def error(code: int, message: str, id: Optional[int]) -> str:
        """Create a JSON-RPC error response."""
        return json.dumps({
            'jsonrpc': '2.0',
            'error': {
                'code': code,
                'message': message
            },
            'id': id
        })


# LSP Error Codes
class LSPErrorCodes:
    """Standard LSP error codes."""

    ParseError = -32700
    InvalidRequest = -32600
    MethodNotFound = -32601
    InvalidParams = -32602
    InternalError = -32603
    ServerNotInitialized = -32002
    UnknownErrorCode = -32001
    RequestCancelled = -32800
    ContentModified = -32801
