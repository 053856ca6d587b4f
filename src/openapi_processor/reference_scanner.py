"""Reference Scanner for finding $ref dependencies in OpenAPI content."""

import re
from typing import Any, Callable, Dict, List, Optional, Set, Union

SCHEMA_REF_PATTERN = re.compile(r"^#/components/schemas/([^/]+)$")


def schema_name_from_ref(ref: Any) -> Optional[str]:
    """Return <Name> for a '#/components/schemas/<Name>' pointer, else None."""
    if not isinstance(ref, str):
        return None
    match = SCHEMA_REF_PATTERN.match(ref)
    return match.group(1) if match else None


class ReferenceScanner:
    """Scans OpenAPI content for $ref references."""

    def scan(self, content: Union[Dict, List, Any], refs: Optional[Set[str]] = None) -> Set[str]:
        """
        Collect names of local schemas referenced anywhere in content.

        Args:
            content: Any JSON-like value (schema, operation, path item, ...)
            refs: Optional accumulator to fill; a new set is used when omitted

        Returns:
            The accumulator with every matching schema name added
        """
        if refs is None:
            refs = set()

        def collect(ref: str) -> None:
            name = schema_name_from_ref(ref)
            if name:
                refs.add(name)

        self._scan_recursive(content, collect)
        return refs

    def _scan_recursive(self, obj: Any, collect: Callable[[str], None]) -> None:
        """Recursively scan object for $ref occurrences."""
        if isinstance(obj, dict):
            self._scan_dict(obj, collect)
        elif isinstance(obj, list):
            self._scan_list(obj, collect)

    def _scan_dict(self, obj: Dict[str, Any], collect: Callable[[str], None]) -> None:
        """Scan dictionary for $ref keys and recurse into values."""
        for key, value in obj.items():
            if key == "$ref" and isinstance(value, str):
                collect(value)
            else:
                self._scan_recursive(value, collect)

    def _scan_list(self, obj: List[Any], collect: Callable[[str], None]) -> None:
        """Scan list items recursively."""
        for item in obj:
            self._scan_recursive(item, collect)
