"""
LSP-shaped protocol types for layoutassist.

Completion items and results follow the Language Server Protocol so that
editors can consume them directly, carried over JSON-RPC 2.0.
"""

from layoutassist.lsp.protocol import (
    CompletionItem,
    CompletionItemKind,
    CompletionParams,
    CompletionResult,
    JSONRPCMessage,
    LSPErrorCodes,
    MatchLevel,
    Position,
)

__all__ = [
    "CompletionItem",
    "CompletionItemKind",
    "CompletionParams",
    "CompletionResult",
    "JSONRPCMessage",
    "LSPErrorCodes",
    "MatchLevel",
    "Position",
]
