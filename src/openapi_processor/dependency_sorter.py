"""Dependency Sorter ordering schemas so dependencies come before dependents."""

import logging
from typing import Any, Dict, List, Set

from .reference_scanner import ReferenceScanner

logger = logging.getLogger(__name__)


class DependencySorter:
    """Depth-first topological sort over intra-map schema references."""

    def __init__(self, scanner: ReferenceScanner = None):
        self.scanner = scanner or ReferenceScanner()

    def dependencies(self, schemas: Dict[str, Any]) -> Dict[str, Set[str]]:
        """Map each name to the other names of schemas it references."""
        return {
            name: {ref for ref in self.scanner.scan(schema) if ref in schemas and ref != name}
            for name, schema in schemas.items()
        }

    def sort(self, schemas: Dict[str, Any]) -> List[str]:
        """
        Order schema names dependency-first.

        Names on a reference cycle are emitted once, in the order the walk
        reaches them; the cycle itself is not reported as an error.

        Args:
            schemas: Mapping of schema name to schema

        Returns:
            Every key of schemas exactly once
        """
        deps = self.dependencies(schemas)
        ordered: List[str] = []
        in_progress: Set[str] = set()
        done: Set[str] = set()

        def visit(name: str) -> None:
            if name in done:
                return
            if name in in_progress:
                logger.debug(f"Circular schema dependency through {name}")
                return
            in_progress.add(name)
            for dep in sorted(deps[name]):
                visit(dep)
            in_progress.discard(name)
            done.add(name)
            ordered.append(name)

        for name in schemas:
            visit(name)

        return ordered
