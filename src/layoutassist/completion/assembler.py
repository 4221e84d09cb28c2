"""
Turns resolved styleables into completion items.
"""

from typing import Iterable, List, Optional

from layoutassist.completion.matching import MatchScorer
from layoutassist.lsp.protocol import CompletionItem, CompletionItemKind, MatchLevel
from layoutassist.resources.table import AttributeReference, Styleable


class CompletionAssembler:
    """Filters styleable attributes against the typed prefix."""

    def __init__(self, scorer: Optional[MatchScorer] = None):
        self.scorer = scorer or MatchScorer()

    def assemble(
        self,
        styleables: Iterable[Styleable],
        package: str,
        ns_prefix: str,
        prefix: str,
    ) -> List[CompletionItem]:
        """
        Build an item for every attribute matching ``prefix``.

        Args:
            styleables: Styleables resolved for the node
            package: Package the styleables were found in
            ns_prefix: Namespace prefix to insert, e.g. ``android``
            prefix: Attribute name typed so far, without namespace prefix

        Returns:
            Items in styleable order. Attributes declared by several
            styleables appear once per styleable.
        """
        items: List[CompletionItem] = []
        for styleable in sorted(styleables, key=lambda s: s.name):
            for ref in styleable.entries:
                level = self.scorer.classify(ref.entry, prefix)
                if level == MatchLevel.NO_MATCH:
                    continue
                items.append(create_attr_completion_item(ref, package, ns_prefix, level))
        return items


def create_attr_completion_item(
    attr: AttributeReference,
    package: str,
    ns_prefix: str,
    match_level: MatchLevel,
) -> CompletionItem:
    return CompletionItem(
        label=attr.entry,
        ns_prefix=ns_prefix,
        package=package,
        match_level=match_level,
        detail=f"From package '{package}'",
        kind=CompletionItemKind.PROPERTY,
        format=attr.format,
    )
