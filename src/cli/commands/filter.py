"""Filter command - reduce a document to selected paths and the schemas they use."""

import logging
from typing import List, Optional

from src.cli.commands.document_io import dump_document, load_document, write_text
from src.cli.config import Config
from src.openapi_processor.path_filter import PathFilter

logger = logging.getLogger(__name__)


def filter_command(
    config: Config,
    input_source: str,
    output: str,
    path_names: Optional[List[str]] = None,
    prefixes: Optional[List[str]] = None,
    skip_validation: bool = False,
):
    """Write the filtered document to output."""
    doc = load_document(config, input_source, skip_validation)
    path_filter = PathFilter()

    if prefixes:
        path_names = path_filter.select_paths_by_prefix(doc, prefixes)
        logger.info(f"🔎 {len(path_names)} paths match prefixes {', '.join(prefixes)}")

    filtered = path_filter.filter_paths(doc, path_names or [])

    write_text(output, dump_document(filtered, output))
    print(f"Filtered OpenAPI spec written to {output}")
