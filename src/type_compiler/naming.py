"""Name helpers shared by the compilers and renderers."""

import keyword
import re
from typing import AbstractSet


def to_pascal_case(name: str) -> str:
    """Convert kebab-case, snake_case or spaced text to PascalCase."""
    parts = re.sub(r"[^a-zA-Z0-9]+", " ", name).split()
    return "".join(part[0].upper() + part[1:] for part in parts)


def to_camel_case(name: str) -> str:
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_identifier(name: str) -> str:
    """Make a schema name usable as an identifier in Python and TypeScript."""
    identifier = re.sub(r"\W", "_", name)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}_"
    return identifier


def is_python_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def unique_name(candidate: str, taken: AbstractSet[str]) -> str:
    """Return candidate, or candidate with the first free numeric suffix from 2."""
    if candidate not in taken:
        return candidate
    suffix = 2
    while f"{candidate}{suffix}" in taken:
        suffix += 1
    return f"{candidate}{suffix}"


def single_line(text: str) -> str:
    """Collapse newlines (and the whitespace around them) into single spaces."""
    return " ".join(line.strip() for line in text.splitlines() if line.strip())
