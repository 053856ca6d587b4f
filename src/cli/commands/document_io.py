"""Loading, validating and writing OpenAPI documents for CLI commands."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import yaml

from src.cli.config import Config
from src.openapi_processor.parser import OpenAPIParser
from src.openapi_processor.validator import OpenAPIValidator, ValidatorConfig

logger = logging.getLogger(__name__)


def load_document(config: Config, source: str, skip_validation: bool = False) -> Dict[str, Any]:
    """Load and validate a document, exiting with status 1 when either step fails."""
    parse_result = OpenAPIParser(timeout=config.http_timeout_seconds).load(source)
    if not parse_result.success:
        logger.error(f"❌ Failed to load {source}: {parse_result.error}")
        sys.exit(1)

    if skip_validation:
        logger.info("⏭️ Skipping OpenAPI validation")
        return parse_result.data

    validation_result = OpenAPIValidator(ValidatorConfig.from_config(config)).validate(parse_result.data)
    if not validation_result.is_valid:
        logger.error(f"❌ {source} is not a valid OpenAPI document:")
        for error in validation_result.errors:
            logger.error(f"  - {error}")
        sys.exit(1)

    logger.info(f"✅ Loaded and validated {source}")
    return parse_result.data


def write_text(output: str, content: str) -> None:
    """Write content to output, creating parent directories; exit 1 on failure."""
    output_path = Path(output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"❌ Failed to write {output}: {e}")
        sys.exit(1)


def dump_document(doc: Dict[str, Any], output: str) -> str:
    """Serialize doc as JSON for '.json' outputs, YAML otherwise, keeping key order."""
    if Path(output).suffix.lower() == ".json":
        return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True)
