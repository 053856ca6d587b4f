"""Immutable results produced by the type compilers."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

OBJECT = "object"
ALIAS = "alias"


@dataclass(frozen=True)
class FieldExpression:
    """One property of an object-like definition."""

    name: str
    expression: str
    required: bool
    description: Optional[str] = None


@dataclass(frozen=True)
class TypeExpression:
    """
    A compiled type in the target's own syntax.

    references holds the schema names the expression (or any auxiliary
    definition it carries) mentions; imports holds target library names
    such as 'Literal' that the rendered source must import. For object-like
    results, fields and bases expose the merged own properties and the
    allOf base names so a renderer can choose between intersection and
    inheritance.
    """

    expression: str
    references: FrozenSet[str] = frozenset()
    auxiliary: Tuple["CompiledDefinition", ...] = ()
    imports: FrozenSet[str] = frozenset()
    kind: str = ALIAS
    fields: Tuple[FieldExpression, ...] = ()
    bases: Tuple[str, ...] = ()

    @classmethod
    def combine(
        cls,
        expression: str,
        parts: Iterable["TypeExpression"] = (),
        references: Iterable[str] = (),
        imports: Iterable[str] = (),
        **kwargs,
    ) -> "TypeExpression":
        """Build an expression whose references, imports and auxiliaries merge those of parts."""
        parts = list(parts)
        merged_refs = set(references)
        merged_imports = set(imports)
        auxiliary = []
        for part in parts:
            merged_refs |= part.references
            merged_imports |= part.imports
            auxiliary.extend(part.auxiliary)
        return cls(
            expression=expression,
            references=frozenset(merged_refs),
            auxiliary=tuple(auxiliary),
            imports=frozenset(merged_imports),
            **kwargs,
        )

    @property
    def auxiliary_names(self) -> FrozenSet[str]:
        return frozenset(definition.name for definition in self.auxiliary)


@dataclass(frozen=True)
class CompiledDefinition:
    """A named definition ready for a renderer."""

    name: str
    expression: TypeExpression
    description: Optional[str] = None
    synthesized: bool = field(default=False)
