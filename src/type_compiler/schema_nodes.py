"""Tagged schema node model parsed once from raw JSON-Schema mappings."""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Optional, Tuple, Union

from ..openapi_processor.reference_scanner import schema_name_from_ref

PRIMITIVE_TYPES = ("string", "integer", "number", "boolean")
COMPOSITION_KINDS = ("allOf", "oneOf", "anyOf")
OBJECT_KEYWORDS = ("properties", "required", "additionalProperties")


@dataclass(frozen=True)
class SchemaNode:
    """Base of every parsed schema case."""

    description: Optional[str] = field(default=None, kw_only=True)
    nullable: bool = field(default=False, kw_only=True)


@dataclass(frozen=True)
class ReferenceNode(SchemaNode):
    """A $ref pointer; name is None when it leaves #/components/schemas."""

    ref: str
    name: Optional[str]


@dataclass(frozen=True)
class EnumNode(SchemaNode):
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class CompositionNode(SchemaNode):
    kind: str  # allOf, oneOf or anyOf
    branches: Tuple[SchemaNode, ...]


@dataclass(frozen=True)
class PrimitiveNode(SchemaNode):
    kind: str  # string, integer, number or boolean


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    items: Optional[SchemaNode] = None


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    """
    An object schema.

    has_properties distinguishes a declared but empty 'properties' map (an
    empty record) from a missing one (a free-form map).
    """

    properties: Tuple[Tuple[str, SchemaNode], ...] = ()
    required: FrozenSet[str] = frozenset()
    additional_properties: Union[bool, SchemaNode, None] = None
    has_properties: bool = False


@dataclass(frozen=True)
class UnknownNode(SchemaNode):
    """A schema without usable type information."""


def parse_schema(raw: Any) -> SchemaNode:
    """
    Decide the case of a raw schema value and parse it recursively.

    Args:
        raw: A JSON-Schema shaped mapping (or a boolean schema)

    Returns:
        The matching SchemaNode case
    """
    if not isinstance(raw, dict):
        return UnknownNode()

    description = raw.get("description") if isinstance(raw.get("description"), str) else None

    ref = raw.get("$ref")
    if isinstance(ref, str):
        return ReferenceNode(ref=ref, name=schema_name_from_ref(ref), description=description)

    type_name, nullable = _read_type(raw)
    common = {"description": description, "nullable": nullable}

    enum = raw.get("enum")
    if isinstance(enum, list):
        values = tuple(value for value in enum if value is not None)
        if len(values) < len(enum):
            common["nullable"] = True
        return EnumNode(values=values, **common)

    for kind in COMPOSITION_KINDS:
        branches = raw.get(kind)
        if isinstance(branches, list):
            parsed = tuple(parse_schema(b) for b in branches)
            if not any(keyword in raw for keyword in OBJECT_KEYWORDS):
                return CompositionNode(kind=kind, branches=parsed, **common)
            # Sibling properties apply on top of every branch
            own = _parse_object(raw, {})
            if kind == "allOf":
                return CompositionNode(kind="allOf", branches=parsed + (own,), **common)
            return CompositionNode(kind="allOf", branches=(CompositionNode(kind=kind, branches=parsed), own), **common)

    if type_name in PRIMITIVE_TYPES:
        return PrimitiveNode(kind=type_name, **common)

    if type_name == "array":
        items = raw.get("items")
        return ArrayNode(items=parse_schema(items) if isinstance(items, dict) else None, **common)

    if type_name == "object" or any(keyword in raw for keyword in OBJECT_KEYWORDS):
        return _parse_object(raw, common)

    return UnknownNode(**common)


def _read_type(raw: dict) -> Tuple[Optional[str], bool]:
    """Return (type, nullable) handling 3.0 'nullable' and 3.1 type lists."""
    nullable = raw.get("nullable") is True
    type_value = raw.get("type")

    if isinstance(type_value, list):
        kinds = [kind for kind in type_value if kind != "null"]
        nullable = nullable or len(kinds) < len(type_value)
        type_value = kinds[0] if len(kinds) == 1 else None

    return (type_value if isinstance(type_value, str) else None), nullable


def _parse_object(raw: dict, common: dict) -> ObjectNode:
    properties = raw.get("properties")
    has_properties = isinstance(properties, dict)
    required = raw.get("required")

    additional = raw.get("additionalProperties")
    if isinstance(additional, dict):
        additional = parse_schema(additional)
    elif not isinstance(additional, bool):
        additional = None

    return ObjectNode(
        properties=tuple((key, parse_schema(value)) for key, value in (properties or {}).items()),
        required=frozenset(required) if isinstance(required, list) else frozenset(),
        additional_properties=additional,
        has_properties=has_properties,
        **common,
    )
