"""
Namespace resolution - which resource packages to search for a namespace URI.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from layoutassist.dom.document import DOMNode
from layoutassist.resources.table import (
    NAMESPACE_AUTO,
    NAMESPACE_PREFIX,
    ResourceTablePackage,
    ResourceTableRegistry,
)
from layoutassist.utils.logger import logger


@dataclass(frozen=True, eq=False)
class NamespaceTarget:
    """A package to search and the namespace prefix its attributes are inserted with."""

    package: ResourceTablePackage
    ns_prefix: str
    namespace: str


def package_name_for(namespace: str) -> str:
    """``http://schemas.android.com/apk/res/android`` -> ``android``."""
    _, sep, name = namespace.partition(NAMESPACE_PREFIX)
    return name if sep else namespace


class NamespaceResolver:
    """Maps namespace URIs to resource packages through the table registry."""

    def __init__(self, registry: ResourceTableRegistry):
        self.registry = registry

    def packages_for_namespace(self, namespace: str) -> List[ResourceTablePackage]:
        """
        Packages served under ``namespace``.

        res-auto fans out to every named package of every table registered
        for it; any other URI selects the package named after the URI.
        A namespace without tables yields nothing.
        """
        tables = self.registry.tables_for_namespace(namespace)
        if not tables:
            return []

        packages: List[ResourceTablePackage] = []
        if namespace == NAMESPACE_AUTO:
            for table in tables:
                packages.extend(table.named_packages())
        else:
            name = package_name_for(namespace)
            for table in tables:
                package = table.find_package(name)
                if package is not None:
                    packages.append(package)

        unique = list({id(package): package for package in packages}.values())
        logger.packages_resolved(namespace, [package.name for package in unique])
        return unique

    def resolve(self, namespace: str, ns_prefix: str) -> List[NamespaceTarget]:
        return [
            NamespaceTarget(package=package, ns_prefix=ns_prefix, namespace=namespace)
            for package in self.packages_for_namespace(namespace)
        ]

    def visible_namespaces(self, node: Optional[DOMNode]) -> List[Tuple[str, str]]:
        """``(prefix, uri)`` declarations on ``node`` and its ancestors, first seen first."""
        found: Dict[Tuple[str, str], None] = {}
        while node is not None:
            for declaration in node.namespace_declarations():
                found.setdefault(declaration, None)
            node = node.parent
        return list(found)

    def resolve_visible(self, node: DOMNode) -> List[NamespaceTarget]:
        """Targets for every namespace declared at or above ``node``."""
        namespaces = self.visible_namespaces(node)
        logger.namespaces_resolved(namespaces)

        targets: List[NamespaceTarget] = []
        for ns_prefix, namespace in namespaces:
            targets.extend(self.resolve(namespace, ns_prefix))
        return targets
