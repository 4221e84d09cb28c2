"""
Attribute completion for layout files.

Entry point of the engine: locates the attribute being typed, works out which
resource packages its namespace refers to, resolves the styleables that apply
to the element in each package and returns the matching attributes.
"""

import logging
import time
from typing import List, Optional

from layoutassist.completion.assembler import CompletionAssembler
from layoutassist.completion.hierarchy import HierarchyResolver
from layoutassist.completion.matching import MatchScorer
from layoutassist.completion.namespaces import NamespaceResolver, NamespaceTarget
from layoutassist.config import Config
from layoutassist.dom.document import DOMDocument, DOMNode
from layoutassist.errors import InvalidRequestError
from layoutassist.lsp.protocol import CompletionItem, CompletionParams, CompletionResult
from layoutassist.resources.loader import load_table
from layoutassist.resources.table import ResourceTableRegistry, ResourceType
from layoutassist.utils.logger import logger as request_logger
from layoutassist.widgets.table import WidgetTable

logger = logging.getLogger(__name__)


class LayoutAttributeCompletionProvider:
    """
    Provides attribute completions in layout files.

    The widget table and resource registry are injected and only read, so one
    provider can serve any number of requests.
    """

    def __init__(
        self,
        widgets: WidgetTable,
        registry: ResourceTableRegistry,
        scorer: Optional[MatchScorer] = None,
        max_items: int = 0,
    ):
        self.widgets = widgets
        self.registry = registry
        self.max_items = max_items
        self.namespaces = NamespaceResolver(registry)
        self.hierarchy = HierarchyResolver(widgets)
        self.assembler = CompletionAssembler(scorer)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "LayoutAttributeCompletionProvider":
        """Load the widget table and resource tables named in the configuration."""
        config = config or Config()

        widgets = WidgetTable.load(config.widgets_path) if config.widgets_path else WidgetTable()
        if not config.widgets_path:
            request_logger.warning(
                "config", "No widget table configured; only qualified custom views will resolve"
            )

        registry = ResourceTableRegistry()
        if config.platform_res:
            registry.register_platform(load_table(config.platform_res, package="android"))
        for path in config.module_res:
            registry.register_module(load_table(path, package=config.module_package))

        return cls(
            widgets,
            registry,
            scorer=MatchScorer(config.fuzzy_threshold),
            max_items=config.max_items,
        )

    def complete(self, params: CompletionParams, document: DOMDocument) -> CompletionResult:
        """
        Complete the attribute name at the requested position.

        Args:
            params: Offset or line/character of the cursor
            document: Parsed layout document

        Returns:
            CompletionResult, best matches first

        Raises:
            InvalidRequestError: No attribute name at the requested position
        """
        started = time.perf_counter()
        offset = self._resolve_offset(params, document)

        node = document.find_node_at(offset)
        attr = document.find_attr_at(offset)
        if node is None or attr is None:
            raise InvalidRequestError(f"No attribute at offset {offset}", offset)
        if offset > attr.name_end:
            raise InvalidRequestError(
                f"Offset {offset} is inside the value of '{attr.name}'", offset
            )

        prefix = attr.local_name
        request_logger.completion_request(offset, node.tag, attr.name)

        namespace = attr.namespace_uri
        if namespace is None:
            targets = self.namespaces.resolve_visible(node)
        else:
            targets = self.namespaces.resolve(namespace, attr.prefix)

        items: List[CompletionItem] = []
        for target in targets:
            items.extend(self._complete_in_package(target, node, prefix))

        result = CompletionResult.ranked(items, self.max_items)
        request_logger.completion_result(
            len(result.items), result.is_incomplete, time.perf_counter() - started
        )
        return result

    def complete_text(self, text: str, offset: int) -> CompletionResult:
        """Parse ``text`` and complete at ``offset``."""
        return self.complete(CompletionParams(offset=offset), DOMDocument.parse(text))

    def _complete_in_package(
        self,
        target: NamespaceTarget,
        node: DOMNode,
        prefix: str,
    ) -> List[CompletionItem]:
        styleables = target.package.find_group(ResourceType.STYLEABLE)
        if styleables is None:
            return []

        node_styleables = self.hierarchy.resolve(node, styleables)
        request_logger.styleables_resolved(
            node.tag, target.package.name, [s.name for s in node_styleables]
        )
        if not node_styleables:
            return []

        return self.assembler.assemble(
            node_styleables,
            package=target.package.name,
            ns_prefix=target.ns_prefix,
            prefix=prefix,
        )

    @staticmethod
    def _resolve_offset(params: CompletionParams, document: DOMDocument) -> int:
        if params.offset is not None:
            if not 0 <= params.offset <= len(document.text):
                raise InvalidRequestError(f"Offset {params.offset} is outside the document", params.offset)
            return params.offset
        if params.position is not None:
            return document.offset_at(params.position.line, params.position.character)
        raise InvalidRequestError("Completion request has neither an offset nor a position")
