"""Type compilers turning OpenAPI schemas into Zod and TypedDict definitions."""

from .compiler import TypeCompiler
from .schema_nodes import (ArrayNode, CompositionNode, EnumNode, ObjectNode,
                           PrimitiveNode, ReferenceNode, SchemaNode,
                           UnknownNode, parse_schema)
from .type_expression import (CompiledDefinition, FieldExpression,
                              TypeExpression)
from .typed_dict_compiler import TypedDictCompiler
from .zod_compiler import ZodCompiler

__all__ = [
    "TypeCompiler",
    "ZodCompiler",
    "TypedDictCompiler",
    "TypeExpression",
    "FieldExpression",
    "CompiledDefinition",
    "SchemaNode",
    "ReferenceNode",
    "EnumNode",
    "CompositionNode",
    "PrimitiveNode",
    "ArrayNode",
    "ObjectNode",
    "UnknownNode",
    "parse_schema",
]
