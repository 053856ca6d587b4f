"""Type compiler emitting Zod schema expressions."""

import json
from typing import Any, List, Sequence, Tuple

from .compiler import Additional, TypeCompiler
from .naming import single_line, to_camel_case, to_identifier
from .type_expression import OBJECT, FieldExpression, TypeExpression

ZOD_PRIMITIVES = {
    "string": "z.string()",
    "integer": "z.number().int()",
    "number": "z.number()",
    "boolean": "z.boolean()",
}


def zod_schema_name(name: str, suffix: str = "Schema") -> str:
    """Name of the exported const holding the schema of name."""
    return to_identifier(f"{to_camel_case(name)}{suffix}")


class ZodCompiler(TypeCompiler):
    """Compiles schemas into Zod expressions; nested objects stay inline."""

    target = "zod"

    def __init__(self, schema_suffix: str = "Schema"):
        self.schema_suffix = schema_suffix

    def identifiers(self, name: str) -> Tuple[str, ...]:
        return zod_schema_name(name, self.schema_suffix), to_identifier(name)

    def unknown(self) -> TypeExpression:
        return TypeExpression("z.unknown()")

    def primitive(self, kind: str) -> TypeExpression:
        return TypeExpression(ZOD_PRIMITIVES[kind])

    def reference(self, name: str) -> TypeExpression:
        # Always lazy so forward references inside cycles resolve at parse time
        return TypeExpression(
            f"z.lazy(() => {zod_schema_name(name, self.schema_suffix)})", references=frozenset({name})
        )

    def enum(self, values: Sequence[Any]) -> TypeExpression:
        if not values:
            return TypeExpression("z.never()")
        literals = [json.dumps(value) for value in values]
        if all(isinstance(value, str) for value in values):
            return TypeExpression(f"z.enum([{', '.join(literals)}])")
        if len(literals) == 1:
            return TypeExpression(f"z.literal({literals[0]})")
        return TypeExpression(f"z.union([{', '.join(f'z.literal({literal})' for literal in literals)}])")

    def array(self, items: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"z.array({items.expression})", [items])

    def string_map(self, values: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"z.record(z.string(), {values.expression})", [values])

    def union(self, branches: List[TypeExpression]) -> TypeExpression:
        joined = ", ".join(branch.expression for branch in branches)
        return TypeExpression.combine(f"z.union([{joined}])", branches)

    def nullable(self, inner: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"{inner.expression}.nullable()", [inner])

    def optional_field(self, inner: TypeExpression) -> TypeExpression:
        return TypeExpression.combine(f"{inner.expression}.optional()", [inner])

    def describe(self, inner: TypeExpression, description: str) -> TypeExpression:
        return TypeExpression.combine(f"{inner.expression}.describe({json.dumps(single_line(description))})", [inner])

    def record(
        self,
        name: str,
        fields: List[Tuple[FieldExpression, TypeExpression]],
        bases: List[str],
        extras: List[TypeExpression],
        additional: Additional,
    ) -> TypeExpression:
        base_refs = [self.reference(base) for base in bases]
        parts = [ref.expression for ref in base_refs]

        if fields or not bases or isinstance(additional, TypeExpression):
            members = ", ".join(f"{json.dumps(f.name)}: {f.expression}" for f, _ in fields)
            body = f"z.object({{ {members} }})" if members else "z.object({})"
            if isinstance(additional, TypeExpression):
                body += f".catchall({additional.expression})"
            elif additional is False and not bases and not extras:
                body += ".strict()"
            parts.append(body)

        parts.extend(extra.expression for extra in extras)
        expression = parts[0] + "".join(f".and({part})" for part in parts[1:])

        children = base_refs + [compiled for _, compiled in fields] + list(extras)
        if isinstance(additional, TypeExpression):
            children.append(additional)
        return TypeExpression.combine(
            expression,
            children,
            kind=OBJECT,
            fields=tuple(f for f, _ in fields),
            bases=tuple(bases),
        )
