"""Path Filter reducing an OpenAPI document to selected paths and their schemas."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Set

from .graph_resolver import GraphResolver, document_schemas
from .reference_scanner import ReferenceScanner

logger = logging.getLogger(__name__)


class PathFilter:
    """Selects paths from a document and keeps only the schemas they reach."""

    def __init__(self, scanner: ReferenceScanner = None, resolver: GraphResolver = None):
        self.scanner = scanner or ReferenceScanner()
        self.resolver = resolver or GraphResolver(self.scanner)

    def filter_paths(self, doc: Dict[str, Any], path_names: Sequence[str]) -> Dict[str, Any]:
        """
        Restrict a document to the named paths and the schemas they depend on.

        Unknown path names are skipped with a warning. When none of the names
        match, the original document is returned untouched.

        Args:
            doc: Loaded OpenAPI document
            path_names: Exact path strings, e.g. "/v1/models"

        Returns:
            A new document, or doc itself when nothing matched
        """
        paths = self._paths(doc)
        filtered_paths: Dict[str, Any] = {}

        for path_name in path_names:
            if path_name in paths and paths[path_name]:
                filtered_paths[path_name] = paths[path_name]
            else:
                logger.warning(f"⚠️ Path '{path_name}' not found in the OpenAPI document")

        if not filtered_paths:
            logger.warning("⚠️ No paths matched the filter criteria, returning the original OpenAPI document")
            return doc

        seeds = self._collect_path_refs(filtered_paths.values())
        schemas = self.resolver.resolve(document_schemas(doc), seeds)
        logger.info(f"Kept {len(filtered_paths)} paths and {len(schemas)} schemas")

        components = doc.get("components")
        filtered = dict(doc)
        filtered["paths"] = filtered_paths
        filtered["components"] = {**(components if isinstance(components, dict) else {}), "schemas": schemas}
        return filtered

    def extract_schemas(self, doc: Dict[str, Any], prefixes: Optional[Sequence[str]]) -> Dict[str, Any]:
        """
        Collect the schemas reachable from every path starting with one of prefixes.

        Args:
            doc: Loaded OpenAPI document
            prefixes: Path prefixes; None or empty selects the whole schema map

        Returns:
            Mapping of schema name to schema
        """
        all_schemas = document_schemas(doc)
        if not prefixes:
            return all_schemas

        selected = self.select_paths_by_prefix(doc, prefixes)
        paths = self._paths(doc)
        seeds = self._collect_path_refs(paths[name] for name in selected)
        if not seeds:
            return {}

        return self.resolver.resolve(all_schemas, seeds)

    def select_paths_by_prefix(self, doc: Dict[str, Any], prefixes: Sequence[str]) -> List[str]:
        """Return path names starting with any of prefixes, in document order."""
        return self._select_paths(doc, lambda name: any(name.startswith(prefix) for prefix in prefixes))

    def _select_paths(self, doc: Dict[str, Any], predicate: Callable[[str], bool]) -> List[str]:
        return [name for name in self._paths(doc) if predicate(name)]

    def _collect_path_refs(self, path_items: Iterable[Any]) -> Set[str]:
        """Scan every operation-like value of the given path items."""
        refs: Set[str] = set()
        for path_item in path_items:
            if not isinstance(path_item, dict):
                continue
            for operation in path_item.values():
                # Scalar entries such as summary carry no references
                if isinstance(operation, (dict, list)):
                    self.scanner.scan(operation, refs)
        return refs

    @staticmethod
    def _paths(doc: Any) -> Dict[str, Any]:
        if not isinstance(doc, dict):
            return {}
        paths = doc.get("paths")
        return paths if isinstance(paths, dict) else {}
