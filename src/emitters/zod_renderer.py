"""Renders compiled Zod definitions into a TypeScript module."""

from typing import List

from ..type_compiler.naming import to_identifier
from ..type_compiler.type_expression import CompiledDefinition
from ..type_compiler.zod_compiler import zod_schema_name

HEADER = "// Generated by openapi-tools from an OpenAPI document. Do not edit."


def jsdoc(description: str, indent: str = "") -> List[str]:
    """Format a description as a JSDoc block, keeping its line breaks."""
    lines = description.replace("*/", "*\\/").strip().splitlines()
    if len(lines) == 1:
        return [f"{indent}/** {lines[0]} */"]
    return [f"{indent}/**"] + [f"{indent} * {line}".rstrip() for line in lines] + [f"{indent} */"]


class ZodRenderer:
    """Writes one exported schema const and inferred type per definition."""

    def __init__(self, schema_suffix: str = "Schema"):
        self.schema_suffix = schema_suffix

    def render(self, definitions: List[CompiledDefinition]) -> str:
        lines = [HEADER, 'import { z } from "zod";', ""]

        for definition in definitions:
            lines.extend(self.render_definition(definition))
            lines.append("")

        return "\n".join(lines)

    def render_definition(self, definition: CompiledDefinition) -> List[str]:
        const_name = zod_schema_name(definition.name, self.schema_suffix)
        lines = jsdoc(definition.description) if definition.description else []
        lines.append(f"export const {const_name} = {definition.expression.expression};")
        lines.append(f"export type {to_identifier(definition.name)} = z.infer<typeof {const_name}>;")
        return lines
