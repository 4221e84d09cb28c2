"""
Attribute autocomplete for the interactive layout shell.

Completes attribute names while a layout is typed in the prompt, using the
same provider that serves editors.
"""

from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from layoutassist.completion.provider import LayoutAttributeCompletionProvider
from layoutassist.dom.document import DOMDocument
from layoutassist.errors import InvalidRequestError
from layoutassist.lsp.protocol import CompletionParams


class AttributeCompleter(Completer):
    """
    Autocompletes attribute names inside start tags.

    Shows the declaring package next to each attribute.
    """

    def __init__(self, provider: LayoutAttributeCompletionProvider, max_suggestions: int = 50):
        """
        Initialize the attribute completer.

        Args:
            provider: Completion provider to query
            max_suggestions: Maximum number of suggestions to show
        """
        self.provider = provider
        self.max_suggestions = max_suggestions

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Generate attribute completions at the cursor.

        Args:
            document: Current prompt document
            complete_event: Completion event

        Yields:
            Completion objects replacing the partially typed attribute name
        """
        offset = document.cursor_position
        layout = DOMDocument.parse(document.text)

        attr = layout.find_attr_at(offset)
        if attr is None or offset > attr.name_end:
            return

        try:
            result = self.provider.complete(CompletionParams(offset=offset), layout)
        except InvalidRequestError:
            return

        for item in result.items[:self.max_suggestions]:
            yield Completion(
                text=f'{item.qualified_name}=""',
                start_position=attr.start - offset,
                display=item.qualified_name,
                display_meta=item.package,
            )
