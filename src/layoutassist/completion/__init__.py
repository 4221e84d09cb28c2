"""
Attribute completion engine.

Namespace resolution -> styleable lookup -> hierarchy resolution -> assembly.
"""

from layoutassist.completion.assembler import CompletionAssembler
from layoutassist.completion.hierarchy import HierarchyResolver
from layoutassist.completion.matching import MatchScorer
from layoutassist.completion.namespaces import NamespaceResolver, NamespaceTarget
from layoutassist.completion.provider import LayoutAttributeCompletionProvider
from layoutassist.completion.styleables import find_styleable

__all__ = [
    "CompletionAssembler",
    "HierarchyResolver",
    "LayoutAttributeCompletionProvider",
    "MatchScorer",
    "NamespaceResolver",
    "NamespaceTarget",
    "find_styleable",
]
