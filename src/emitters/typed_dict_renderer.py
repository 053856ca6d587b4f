"""Renders compiled TypedDict definitions into a Python module."""

import json
from typing import List, Set

from ..type_compiler.naming import is_python_identifier, to_identifier
from ..type_compiler.type_expression import OBJECT, CompiledDefinition

HEADER = '"""Generated by openapi-tools from an OpenAPI document. Do not edit."""'
INDENT = "    "


def docstring(description: str, attributes: List[tuple], indent: str = INDENT) -> List[str]:
    """Google style docstring with an Attributes section for field descriptions."""
    text_lines = _escape(description).strip().splitlines() if description else []
    if attributes:
        if text_lines:
            text_lines.append("")
        text_lines.append("Attributes:")
        for name, field_description in attributes:
            first, *rest = _escape(field_description).strip().splitlines() or [""]
            text_lines.append(f"{INDENT}{name}: {first}")
            text_lines.extend(f"{INDENT * 2}{line.strip()}" for line in rest)

    if not text_lines:
        return []
    if len(text_lines) == 1 and not text_lines[0].endswith('"'):
        return [f'{indent}"""{text_lines[0]}"""']
    body = [f"{indent}{line}".rstrip() if line else "" for line in text_lines[1:]]
    return [f'{indent}"""{text_lines[0]}'] + body + [f'{indent}"""']


def comment(description: str) -> List[str]:
    return [f"# {line}".rstrip() for line in description.strip().splitlines()]


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


class TypedDictRenderer:
    """Writes TypedDict classes and type aliases in dependency order."""

    def render(self, definitions: List[CompiledDefinition]) -> str:
        imports: Set[str] = set()
        for definition in definitions:
            imports |= definition.expression.imports
            if definition.expression.kind != OBJECT:
                imports.add("TypeAlias")

        lines = [HEADER, ""]
        if imports:
            lines.append(f"from typing import {', '.join(sorted(imports))}")

        for definition in definitions:
            lines.extend(["", ""])
            lines.extend(self.render_definition(definition))

        lines.append("")
        return "\n".join(lines)

    def render_definition(self, definition: CompiledDefinition) -> List[str]:
        if definition.expression.kind == OBJECT:
            return self._render_record(definition)

        lines = comment(definition.description) if definition.description else []
        lines.append(f"{to_identifier(definition.name)}: TypeAlias = {definition.expression.expression}")
        return lines

    def _render_record(self, definition: CompiledDefinition) -> List[str]:
        expression = definition.expression
        class_name = to_identifier(definition.name)
        bases = [to_identifier(base) for base in expression.bases]
        attributes = [(f.name, f.description) for f in expression.fields if f.description]
        doc = docstring(definition.description, attributes) if definition.description or attributes else []

        if all(is_python_identifier(f.name) for f in expression.fields):
            lines = [f"class {class_name}({', '.join(bases or ['TypedDict'])}):"]
            lines.extend(doc)
            if doc and expression.fields:
                lines.append("")
            lines.extend(f"{INDENT}{f.name}: {f.expression}" for f in expression.fields)
            if not doc and not expression.fields:
                lines.append(f"{INDENT}pass")
            return lines

        # Keys that are not identifiers need the functional syntax
        members = ", ".join(f"{json.dumps(f.name)}: {f.expression}" for f in expression.fields)
        if not bases:
            lines = comment(definition.description) if definition.description else []
            lines.append(f'{class_name} = TypedDict("{class_name}", {{{members}}})')
            return lines

        fields_name = f"_{class_name}Fields"
        lines = [f'{fields_name} = TypedDict("{fields_name}", {{{members}}})', "", ""]
        lines.append(f"class {class_name}({', '.join(bases + [fields_name])}):")
        lines.extend(doc or [f"{INDENT}pass"])
        return lines
