"""Target-independent recursive compilation of schema nodes."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import AbstractSet, Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple, Union

from .naming import to_pascal_case, unique_name
from .schema_nodes import (
    ArrayNode,
    CompositionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    ReferenceNode,
    SchemaNode,
    parse_schema,
)
from .type_expression import CompiledDefinition, FieldExpression, TypeExpression

logger = logging.getLogger(__name__)

Additional = Union[bool, TypeExpression, None]
FlatRecord = Tuple[List[str], List[Tuple[str, SchemaNode]], FrozenSet[str], Any, List[SchemaNode]]


@dataclass(frozen=True)
class CompileScope:
    """
    Read-only context of one compile() call.

    taken holds the names synthesized definitions must avoid. defined holds
    the schema names already emitted, or None when every schema counts as
    emitted. names maps schema names to the names they are emitted under.
    """

    taken: FrozenSet[str]
    schemas: Mapping[str, Any] = field(default_factory=dict)
    defined: Optional[FrozenSet[str]] = None
    names: Mapping[str, str] = field(default_factory=dict)

    def emitted_name(self, schema_name: str) -> str:
        return self.names.get(schema_name, schema_name)

    def taking(self, names: AbstractSet[str]) -> "CompileScope":
        return replace(self, taken=self.taken | names) if names else self


class TypeCompiler(ABC):
    """
    Compiles one schema node into a TypeExpression of a target type system.

    Subclasses supply the target syntax through the abstract hook methods at
    the bottom of this class. Compilation is a pure fold: every recursive
    call returns its references, imports and auxiliary definitions, and the
    caller merges them, so independent schemas can be compiled concurrently.

    Targets that cannot express anonymous nested records set
    names_nested_objects; inline objects then become auxiliary definitions
    named after their position (enclosing name + PascalCase key, 'Item' for
    array items, 'Value' for map values, 'OptionN' for union branches).

    Targets that render allOf references as class inheritance set
    nominal_bases; a base must then be an object schema emitted before the
    definition, otherwise its fields are copied in.
    """

    target: Optional[str] = None
    names_nested_objects = False
    nominal_bases = False

    def compile(
        self,
        name: str,
        node: Union[SchemaNode, Dict[str, Any]],
        schemas: Optional[Mapping[str, Any]] = None,
        reserved: AbstractSet[str] = frozenset(),
        defined: Optional[AbstractSet[str]] = None,
        names: Optional[Mapping[str, str]] = None,
    ) -> TypeExpression:
        """
        Compile the definition emitted as name.

        Args:
            name: Name the definition is emitted under
            node: Parsed SchemaNode, or a raw schema mapping
            schemas: The schema map the definition belongs to; its names are
                never reused for synthesized definitions
            reserved: Further names synthesized definitions must avoid
            defined: Schema names already emitted; None treats every schema as
                emitted
            names: Emitted name per schema name, for schemas renamed to keep
                identifiers unique

        Returns:
            TypeExpression for the definition; kind is 'object' for records
        """
        if not isinstance(node, SchemaNode):
            node = parse_schema(node)
        schemas = schemas or {}
        names = names or {}
        scope = CompileScope(
            taken=frozenset(schemas) | frozenset(names.values()) | frozenset(reserved) | {name},
            schemas=schemas,
            defined=frozenset(defined) if defined is not None else None,
            names=names,
        )

        if self.is_record(node):
            return self._compile_record(node, name, scope)
        return self._compile_node(node, name, scope)

    @staticmethod
    def is_record(node: SchemaNode) -> bool:
        """True for nodes emitted as an object definition rather than an alias."""
        if isinstance(node, ObjectNode):
            return node.has_properties
        if isinstance(node, CompositionNode) and node.kind == "allOf":
            if len(node.branches) == 1:
                return TypeCompiler.is_record(node.branches[0])
            return len(node.branches) > 1
        return False

    def _compile_node(self, node: SchemaNode, hint: str, scope: CompileScope) -> TypeExpression:
        if isinstance(node, ReferenceNode):
            result = self._compile_reference(node, scope)
        elif isinstance(node, EnumNode):
            result = self.enum(node.values)
        elif isinstance(node, CompositionNode):
            result = self._compile_composition(node, hint, scope)
        elif isinstance(node, PrimitiveNode):
            result = self.primitive(node.kind)
        elif isinstance(node, ArrayNode):
            items = self._compile_child(node.items, f"{hint}Item", scope) if node.items else self.unknown()
            result = self.array(items)
        elif isinstance(node, ObjectNode):
            result = self._compile_object(node, hint, scope)
        else:
            result = self.unknown()

        if node.nullable:
            result = self.nullable(result)
        return result

    def _compile_child(self, node: SchemaNode, hint: str, scope: CompileScope) -> TypeExpression:
        result = self._compile_node(node, hint, scope)
        if node.description:
            result = self.describe(result, node.description)
        return result

    def _compile_children(
        self, children: Sequence[Tuple[SchemaNode, str]], scope: CompileScope
    ) -> List[TypeExpression]:
        """Compile siblings in order, keeping synthesized names unique across them."""
        results = []
        for node, hint in children:
            result = self._compile_child(node, hint, scope)
            scope = scope.taking(result.auxiliary_names)
            results.append(result)
        return results

    def _compile_reference(self, node: ReferenceNode, scope: CompileScope) -> TypeExpression:
        if node.name is None:
            logger.debug(f"Reference outside components/schemas compiled as unknown: {node.ref}")
            return self.unknown()
        return replace(self.reference(scope.emitted_name(node.name)), references=frozenset({node.name}))

    def _compile_composition(self, node: CompositionNode, hint: str, scope: CompileScope) -> TypeExpression:
        if not node.branches:
            return self.unknown()
        if len(node.branches) == 1:
            return self._compile_child(node.branches[0], hint, scope)
        if node.kind == "allOf":
            return self._compile_nested_record(node, hint, scope)

        branches = self._compile_children(
            [(branch, f"{hint}Option{index}") for index, branch in enumerate(node.branches, start=1)], scope
        )
        return self.union(branches)

    def _compile_object(self, node: ObjectNode, hint: str, scope: CompileScope) -> TypeExpression:
        if node.has_properties:
            return self._compile_nested_record(node, hint, scope)
        if isinstance(node.additional_properties, SchemaNode):
            return self.string_map(self._compile_child(node.additional_properties, f"{hint}Value", scope))
        return self.string_map(self.unknown())

    def _compile_nested_record(self, node: SchemaNode, hint: str, scope: CompileScope) -> TypeExpression:
        """Compile a record found below the top level of a definition."""
        if not self.names_nested_objects:
            return self._compile_record(node, hint, scope)

        name = unique_name(hint, scope.taken)
        if name != hint:
            logger.warning(f"⚠️ Synthesized name '{hint}' is already taken, using '{name}' instead")

        record = self._compile_record(node, name, scope.taking({name}))
        definition = CompiledDefinition(
            name=name,
            expression=replace(record, auxiliary=()),
            description=node.description,
            synthesized=True,
        )
        reference = self.synthesized_reference(name)
        return TypeExpression(
            expression=reference.expression,
            references=record.references,
            auxiliary=record.auxiliary + (definition,),
            imports=record.imports | reference.imports,
        )

    def _compile_record(self, node: SchemaNode, name: str, scope: CompileScope) -> TypeExpression:
        """Compile an object or allOf node into an object-kind expression called name."""
        bases, properties, required, additional, extras = self._flatten_record(node, scope)

        fields = self._compile_children([(prop, f"{name}{to_pascal_case(key)}") for key, prop in properties], scope)
        for compiled in fields:
            scope = scope.taking(compiled.auxiliary_names)

        compiled_fields = []
        for (key, prop), compiled in zip(properties, fields):
            is_required = key in required
            if not is_required:
                compiled = self.optional_field(compiled)
            compiled_fields.append(
                (FieldExpression(key, compiled.expression, is_required, prop.description), compiled)
            )

        compiled_extras = self._compile_children(
            [(extra, f"{name}Part{index}") for index, extra in enumerate(extras, start=1)], scope
        )
        for compiled in compiled_extras:
            scope = scope.taking(compiled.auxiliary_names)

        compiled_additional: Additional = additional
        if isinstance(additional, SchemaNode):
            compiled_additional = self._compile_child(additional, f"{name}Value", scope)

        emitted_bases = [scope.emitted_name(base) for base in bases]
        return self.record(name, compiled_fields, emitted_bases, compiled_extras, compiled_additional)

    def _flatten_record(
        self, node: SchemaNode, scope: CompileScope, inlined: FrozenSet[str] = frozenset()
    ) -> FlatRecord:
        """
        Split a record into (bases, properties, required, additionalProperties, extras).

        allOf branches that reference a schema become bases; object branches
        merge into one property list (a later branch replaces an earlier
        property of the same key, required names accumulate); any other
        branch is returned as an extra part. inlined holds the bases whose
        fields are already being copied in, so base cycles terminate.
        """
        if isinstance(node, ObjectNode):
            return [], list(node.properties), node.required, node.additional_properties, []

        bases: List[str] = []
        merged: Dict[str, SchemaNode] = {}
        required = set()
        additional = None
        extras: List[SchemaNode] = []

        def absorb(flat: FlatRecord) -> None:
            nonlocal additional
            inner_bases, inner_props, inner_required, inner_additional, inner_extras = flat
            bases.extend(base for base in inner_bases if base not in bases)
            merged.update(inner_props)
            required.update(inner_required)
            if inner_additional is not None:
                additional = inner_additional
            extras.extend(inner_extras)

        for branch in node.branches:
            if isinstance(branch, ReferenceNode) and branch.name is not None:
                base = self._record_base(branch.name, scope)
                if base is None:
                    extras.append(branch)
                elif self._emitted_later(base, scope):
                    if base not in inlined:
                        logger.debug(f"Copying fields of {base} because it is emitted after its subtype")
                        absorb(self._flatten_record(parse_schema(scope.schemas[base]), scope, inlined | {base}))
                elif base not in bases:
                    bases.append(base)
            elif isinstance(branch, ObjectNode) or (isinstance(branch, CompositionNode) and branch.kind == "allOf"):
                absorb(self._flatten_record(branch, scope, inlined))
            else:
                extras.append(branch)

        return bases, list(merged.items()), frozenset(required), additional, extras

    def _record_base(self, name: str, scope: CompileScope) -> Optional[str]:
        """
        Schema a $ref allOf branch can inherit from, following alias chains.

        Returns None (with a warning) when a target with nominal bases would
        have to inherit from something that is not an object schema.
        """
        if not self.nominal_bases or name not in scope.schemas:
            return name

        current, seen = name, set()
        while current in scope.schemas and current not in seen:
            seen.add(current)
            node = parse_schema(scope.schemas[current])
            if self.is_record(node):
                return current
            while isinstance(node, CompositionNode) and len(node.branches) == 1:
                node = node.branches[0]
            if not isinstance(node, ReferenceNode) or node.name is None:
                break
            current = node.name

        logger.warning(f"⚠️ allOf base '{name}' is not an object schema and cannot be inherited")
        return None

    def _emitted_later(self, base: str, scope: CompileScope) -> bool:
        return (
            self.nominal_bases
            and scope.defined is not None
            and base in scope.schemas
            and base not in scope.defined
        )

    # Target hooks

    @abstractmethod
    def identifiers(self, name: str) -> Tuple[str, ...]:
        """Identifiers the rendered definition called name declares."""

    @abstractmethod
    def unknown(self) -> TypeExpression:
        """The universal type."""

    @abstractmethod
    def primitive(self, kind: str) -> TypeExpression:
        """string, integer, number or boolean."""

    @abstractmethod
    def reference(self, name: str) -> TypeExpression:
        """Use of the definition emitted as name."""

    def synthesized_reference(self, name: str) -> TypeExpression:
        """Point of use of a synthesized definition; not a schema dependency."""
        return replace(self.reference(name), references=frozenset())

    @abstractmethod
    def enum(self, values: Sequence[Any]) -> TypeExpression:
        """Union of literal values in declaration order."""

    @abstractmethod
    def array(self, items: TypeExpression) -> TypeExpression:
        """Homogeneous list of items."""

    @abstractmethod
    def string_map(self, values: TypeExpression) -> TypeExpression:
        """String-keyed map of values."""

    @abstractmethod
    def union(self, branches: List[TypeExpression]) -> TypeExpression:
        """oneOf/anyOf of two or more branches."""

    @abstractmethod
    def nullable(self, inner: TypeExpression) -> TypeExpression:
        """inner or null."""

    @abstractmethod
    def optional_field(self, inner: TypeExpression) -> TypeExpression:
        """A property that may be absent."""

    def describe(self, inner: TypeExpression, description: str) -> TypeExpression:
        return inner

    @abstractmethod
    def record(
        self,
        name: str,
        fields: List[Tuple[FieldExpression, TypeExpression]],
        bases: List[str],
        extras: List[TypeExpression],
        additional: Additional,
    ) -> TypeExpression:
        """Object definition from merged fields, allOf bases and non-object parts."""
