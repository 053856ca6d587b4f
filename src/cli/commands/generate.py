"""Generate commands - emit Zod schemas or Python TypedDicts from components.schemas."""

import logging
from typing import List, Optional

from src.cli.commands.document_io import load_document, write_text
from src.cli.config import Config
from src.emitters.emission_driver import EmissionDriver

logger = logging.getLogger(__name__)


def generate_command(
    config: Config,
    target: str,
    input_source: str,
    output: str,
    prefixes: Optional[List[str]] = None,
    skip_validation: bool = False,
):
    """Generate type definitions for target; writes nothing when no schema matched."""
    doc = load_document(config, input_source, skip_validation)

    driver = EmissionDriver.for_target(target, schema_suffix=config.zod_schema_suffix)
    source = driver.emit(doc, prefixes)
    if source is None:
        return

    write_text(output, source)
    print(f"Generated {target} definitions written to {output}")
