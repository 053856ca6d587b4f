"""Graph Resolver computing the schemas reachable from a set of seed names."""

import logging
from typing import Any, Dict, Iterable, List, Set

from .reference_scanner import ReferenceScanner

logger = logging.getLogger(__name__)


def document_schemas(doc: Any) -> Dict[str, Any]:
    """Return components.schemas of a document, or an empty map when absent."""
    if not isinstance(doc, dict):
        return {}
    components = doc.get("components")
    if not isinstance(components, dict):
        return {}
    schemas = components.get("schemas")
    return schemas if isinstance(schemas, dict) else {}


class GraphResolver:
    """Follows $ref edges between named schemas to arbitrary depth."""

    def __init__(self, scanner: ReferenceScanner = None):
        self.scanner = scanner or ReferenceScanner()

    def resolve(self, all_schemas: Dict[str, Any], seeds: Iterable[str]) -> Dict[str, Any]:
        """
        Compute the transitive closure of schemas reachable from seeds.

        Args:
            all_schemas: Every schema of the document, by name
            seeds: Names to start from

        Returns:
            New mapping containing the reachable subset of all_schemas
        """
        resolved: Dict[str, Any] = {}
        queue: List[str] = list(seeds)
        queued: Set[str] = set(queue)
        processed: Set[str] = set()

        while queue:
            name = queue.pop()
            queued.discard(name)
            if name in processed:
                continue
            processed.add(name)

            if name not in all_schemas:
                logger.debug(f"Dropping reference to unknown schema: {name}")
                continue

            schema = all_schemas[name]
            resolved[name] = schema

            for ref in self.scanner.scan(schema):
                if ref not in processed and ref not in queued:
                    queue.append(ref)
                    queued.add(ref)

        return resolved

    def collect_schemas(self, doc: Dict[str, Any], refs: Iterable[str]) -> Dict[str, Any]:
        """Resolve refs against the document's own components.schemas."""
        return self.resolve(document_schemas(doc), refs)
