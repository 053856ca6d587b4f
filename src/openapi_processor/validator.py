"""OpenAPI Validator - structural checks plus the OpenAPI meta-schema."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple

from openapi_spec_validator import OpenAPIV30SpecValidator, OpenAPIV31SpecValidator

if TYPE_CHECKING:
    from ..cli.config import Config

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating one document."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class ValidatorConfig:
    """Which checks OpenAPIValidator runs."""

    min_openapi_version: str = "3.0.0"
    require_info_section: bool = True
    require_paths_or_components: bool = True
    validate_meta_schema: bool = True

    @classmethod
    def from_config(cls, config: "Config") -> "ValidatorConfig":
        return cls(
            min_openapi_version=config.min_openapi_version,
            require_info_section=config.require_info_section,
            require_paths_or_components=config.require_paths_or_components,
            validate_meta_schema=config.validate_meta_schema,
        )


def _version_tuple(version: str) -> Optional[Tuple[int, ...]]:
    """Parse "3.1.0" into (3, 1, 0); None when any part is not a number."""
    try:
        return tuple(int(part) for part in version.split("."))
    except (ValueError, AttributeError):
        return None


class OpenAPIValidator:
    """Validates a loaded document before it is filtered or compiled."""

    def __init__(self, config: ValidatorConfig = None):
        self.config = config or ValidatorConfig()

    def is_valid(self, spec_data: Dict[str, Any]) -> bool:
        return self.validate(spec_data).is_valid

    def validate(self, spec_data: Dict[str, Any]) -> ValidationResult:
        """
        Validate a parsed OpenAPI document.

        The meta-schema is consulted only when the structural checks pass, so
        its messages never repeat a structural error.

        Args:
            spec_data: Parsed OpenAPI document

        Returns:
            ValidationResult listing every error found
        """
        if spec_data is None:
            return ValidationResult(is_valid=False, errors=["Specification data is None"])
        if not isinstance(spec_data, dict):
            return ValidationResult(is_valid=False, errors=["Specification data must be a dictionary"])

        errors = list(self._check_version(spec_data))
        if self.config.require_info_section:
            errors.extend(self._check_info(spec_data))
        if self.config.require_paths_or_components and "paths" not in spec_data and "components" not in spec_data:
            errors.append("Specification must have either 'paths' or 'components' section")
        if "paths" in spec_data:
            errors.extend(self._check_paths(spec_data["paths"]))
        if "components" in spec_data:
            errors.extend(self._check_components(spec_data["components"]))

        if not errors and self.config.validate_meta_schema:
            errors.extend(self._check_meta_schema(spec_data))

        return ValidationResult(is_valid=not errors, errors=errors)

    def _is_version_supported(self, spec_version: str) -> bool:
        """Compare dotted versions numerically, padding the shorter one with zeros."""
        spec_parts = _version_tuple(spec_version)
        min_parts = _version_tuple(self.config.min_openapi_version)
        if spec_parts is None or min_parts is None:
            return False

        width = max(len(spec_parts), len(min_parts))
        return spec_parts + (0,) * (width - len(spec_parts)) >= min_parts + (0,) * (width - len(min_parts))

    def _check_version(self, spec_data: Dict[str, Any]) -> Iterator[str]:
        version = spec_data.get("openapi")
        if "openapi" not in spec_data:
            yield "Missing required 'openapi' field"
        elif not isinstance(version, str):
            yield "OpenAPI version must be a string"
        elif not self._is_version_supported(version):
            yield f"OpenAPI version {version} is below minimum required version {self.config.min_openapi_version}"

    @staticmethod
    def _check_info(spec_data: Dict[str, Any]) -> Iterator[str]:
        if "info" not in spec_data:
            yield "Missing required 'info' section"
            return

        info = spec_data["info"]
        if not isinstance(info, dict):
            yield "Info section must be an object"
            return
        for required_field in ("title", "version"):
            if required_field not in info:
                yield f"Info section missing required '{required_field}' field"

    @staticmethod
    def _check_paths(paths: Any) -> Iterator[str]:
        if not isinstance(paths, dict):
            yield "Paths section must be an object"
            return

        for path, path_item in paths.items():
            if not isinstance(path, str):
                yield f"Path key must be a string, got {type(path).__name__}"
                continue
            if not path.startswith("/"):
                yield f"Path '{path}' must start with '/'"
            if not isinstance(path_item, dict):
                yield f"Path item for '{path}' must be an object"

    @staticmethod
    def _check_components(components: Any) -> Iterator[str]:
        if not isinstance(components, dict):
            yield "Components section must be an object"
            return

        schemas = components.get("schemas")
        if schemas is None:
            return
        if not isinstance(schemas, dict):
            yield "Component type 'schemas' must be an object"
            return
        for name, schema in schemas.items():
            # 3.1 allows true/false as schemas
            if not isinstance(schema, (dict, bool)):
                yield f"Schema '{name}' must be an object"

    def _check_meta_schema(self, spec_data: Dict[str, Any]) -> List[str]:
        """Check the document against the OpenAPI 3.0 or 3.1 meta-schema."""
        validator_cls = OpenAPIV31SpecValidator if spec_data["openapi"].startswith("3.1") else OpenAPIV30SpecValidator
        logger.debug(f"Validating against {validator_cls.__name__}")

        try:
            return [self._format_error(error) for error in validator_cls(spec_data).iter_errors()]
        except Exception as e:
            # Unresolvable $ref targets abort the validator instead of being yielded
            return [f"Meta-schema validation failed: {e}"]

    @staticmethod
    def _format_error(error: Any) -> str:
        message = getattr(error, "message", str(error))
        location = "/".join(str(part) for part in getattr(error, "absolute_path", []))
        return f"{location}: {message}" if location else message
