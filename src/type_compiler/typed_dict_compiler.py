"""Type compiler emitting Python TypedDict annotations."""

import json
import logging
from typing import Any, List, Sequence, Tuple

from .compiler import Additional, TypeCompiler
from .naming import to_identifier
from .type_expression import OBJECT, FieldExpression, TypeExpression

logger = logging.getLogger(__name__)

PYTHON_PRIMITIVES = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
}


def python_literal(value: Any) -> str:
    """Render an enum value with Python literal syntax."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value if isinstance(value, str) else str(value))


class TypedDictCompiler(TypeCompiler):
    """Compiles schemas into TypedDict annotations; nested objects become named classes."""

    target = "typed-dict"
    names_nested_objects = True
    nominal_bases = True

    def identifiers(self, name: str) -> Tuple[str, ...]:
        identifier = to_identifier(name)
        return identifier, f"_{identifier}Fields"

    def unknown(self) -> TypeExpression:
        return TypeExpression("Any", imports=frozenset({"Any"}))

    def primitive(self, kind: str) -> TypeExpression:
        return TypeExpression(PYTHON_PRIMITIVES[kind])

    def reference(self, name: str) -> TypeExpression:
        # Quoted so definitions on a reference cycle can still be created at import time
        return TypeExpression(f'"{to_identifier(name)}"', references=frozenset({name}))

    def enum(self, values: Sequence[Any]) -> TypeExpression:
        if not values:
            return TypeExpression("Never", imports=frozenset({"Never"}))
        literals = ", ".join(python_literal(value) for value in values)
        return TypeExpression(f"Literal[{literals}]", imports=frozenset({"Literal"}))

    def array(self, items: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"list[{items.expression}]", [items])

    def string_map(self, values: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"dict[str, {values.expression}]", [values])

    def union(self, branches: List[TypeExpression]) -> TypeExpression:
        members = list(dict.fromkeys(branch.expression for branch in branches))
        if len(members) == 1:
            return TypeExpression.combine(members[0], branches)
        return TypeExpression.combine(f"Union[{', '.join(members)}]", branches, imports={"Union"})

    def nullable(self, inner: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"Optional[{inner.expression}]", [inner], imports={"Optional"})

    def optional_field(self, inner: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"NotRequired[{inner.expression}]", [inner], imports={"NotRequired"})

    def record(
        self,
        name: str,
        fields: List[Tuple[FieldExpression, TypeExpression]],
        bases: List[str],
        extras: List[TypeExpression],
        additional: Additional,
    ) -> TypeExpression:
        if extras:
            logger.warning(f"⚠️ {len(extras)} allOf part(s) of {name} are not objects and were left out of the TypedDict")
        if isinstance(additional, TypeExpression):
            logger.debug(f"TypedDict {name} cannot express additionalProperties, ignoring them")

        # Dropped extras contribute no references
        children = [compiled for _, compiled in fields]
        return TypeExpression.combine(
            to_identifier(name),
            children,
            references=bases,
            imports={"TypedDict"},
            kind=OBJECT,
            fields=tuple(f for f, _ in fields),
            bases=tuple(bases),
        )
