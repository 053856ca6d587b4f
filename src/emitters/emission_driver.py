"""Emission Driver wiring schema selection, ordering, compilation and rendering."""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from ..openapi_processor.dependency_sorter import DependencySorter
from ..openapi_processor.path_filter import PathFilter
from ..type_compiler.compiler import TypeCompiler
from ..type_compiler.schema_nodes import parse_schema
from ..type_compiler.type_expression import CompiledDefinition
from ..type_compiler.typed_dict_compiler import TypedDictCompiler
from ..type_compiler.zod_compiler import ZodCompiler
from .typed_dict_renderer import TypedDictRenderer
from .zod_renderer import ZodRenderer

logger = logging.getLogger(__name__)

TARGETS = ("zod", "typed-dict")


class EmissionDriver:
    """Generates source text for one target type system."""

    def __init__(self, compiler: TypeCompiler, renderer, path_filter: PathFilter = None, sorter: DependencySorter = None):
        self.compiler = compiler
        self.renderer = renderer
        self.path_filter = path_filter or PathFilter()
        self.sorter = sorter or DependencySorter()

    @classmethod
    def for_target(cls, target: str, schema_suffix: str = "Schema") -> "EmissionDriver":
        """Create a driver for 'zod' or 'typed-dict'."""
        if target == "zod":
            return cls(ZodCompiler(schema_suffix), ZodRenderer(schema_suffix))
        if target == "typed-dict":
            return cls(TypedDictCompiler(), TypedDictRenderer())
        raise ValueError(f"Unknown target '{target}', expected one of {', '.join(TARGETS)}")

    def build_definitions(self, schemas: Dict[str, Any]) -> List[CompiledDefinition]:
        """
        Compile every schema, dependencies first.

        Synthesized definitions are placed right before the definition that
        introduced them, and their names are reserved for every later schema.

        Args:
            schemas: Mapping of schema name to raw schema

        Returns:
            Ordered definitions ready for the renderer
        """
        definitions: List[CompiledDefinition] = []
        names = self._assign_names(schemas)
        reserved = set(schemas) | set(names.values())
        emitted = set()

        for name in self.sorter.sort(schemas):
            node = parse_schema(schemas[name])
            expression = self.compiler.compile(
                names[name], node, schemas, frozenset(reserved), defined=frozenset(emitted), names=names
            )
            reserved |= expression.auxiliary_names
            emitted.add(name)

            definitions.extend(expression.auxiliary)
            definitions.append(CompiledDefinition(names[name], replace(expression, auxiliary=()), node.description))

        return definitions

    def _assign_names(self, schemas: Dict[str, Any]) -> Dict[str, str]:
        """Emitted name per schema, renaming schemas whose identifiers clash with an earlier one."""
        names: Dict[str, str] = {}
        used = set()

        for name in schemas:
            emitted, suffix = name, 2
            while used.intersection(self.compiler.identifiers(emitted)):
                emitted, suffix = f"{name}{suffix}", suffix + 1
            if emitted != name:
                logger.warning(f"⚠️ Schema '{name}' clashes with an earlier schema's identifier, emitting it as '{emitted}'")

            used.update(self.compiler.identifiers(emitted))
            names[name] = emitted

        return names

    def emit(self, doc: Dict[str, Any], prefixes: Optional[Sequence[str]] = None) -> Optional[str]:
        """
        Render the schemas reachable from paths matching prefixes.

        Returns:
            Source text, or None when no schema matched
        """
        schemas = self.path_filter.extract_schemas(doc, prefixes)
        if not schemas:
            logger.warning("⚠️ No schemas matched, nothing to generate")
            return None

        definitions = self.build_definitions(schemas)
        synthesized = sum(1 for definition in definitions if definition.synthesized)
        logger.info(
            f"Compiled {len(schemas)} schemas for {self.compiler.target} ({synthesized} synthesized definitions)"
        )
        return self.renderer.render(definitions)
