"""OpenAPI Parser loading JSON and YAML documents from disk or over HTTP."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import httpx
import yaml


@dataclass
class ParseResult:
    """Result of loading an OpenAPI document."""

    success: bool
    data: Dict[str, Any] = None
    error: str = None
    file_type: str = None  # 'json' or 'yaml'
    source: str = None


def is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


class OpenAPIParser:
    """Parses OpenAPI specification files or URLs in JSON or YAML format."""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout

    def load(self, source: Union[str, Path]) -> ParseResult:
        """
        Load an OpenAPI document from a local path or an HTTP(S) URL.

        Args:
            source: File path or URL; '.json' sources parse as JSON, anything else as YAML

        Returns:
            ParseResult with parsed data or error information
        """
        source = str(source)
        if is_url(source):
            return self.parse_url(source)
        return self.parse_file(source)

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Parse an OpenAPI specification file.

        Args:
            file_path: Path to the OpenAPI file (.json, .yaml, .yml)

        Returns:
            ParseResult with parsed data or error information
        """
        file_path = Path(file_path)

        if not file_path.exists():
            return ParseResult(success=False, error=f"File not found: {file_path}", source=str(file_path))

        if not file_path.is_file():
            return ParseResult(success=False, error=f"Path is not a file: {file_path}", source=str(file_path))

        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return ParseResult(success=False, error=f"Unable to read file as UTF-8: {e}", source=str(file_path))
        except OSError as e:
            return ParseResult(success=False, error=f"Error reading file: {e}", source=str(file_path))

        return self.parse_content(content, self._get_file_type(str(file_path)), str(file_path))

    def parse_url(self, url: str) -> ParseResult:
        """Fetch and parse an OpenAPI document served over HTTP(S)."""
        try:
            response = httpx.get(url, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            return ParseResult(success=False, error=f"Failed to fetch {url}: HTTP {status}", source=url)
        except httpx.HTTPError as e:
            return ParseResult(success=False, error=f"Failed to fetch {url}: {e}", source=url)

        return self.parse_content(response.text, self._get_file_type(url), url)

    def parse_content(self, content: str, file_type: str, source: str = None) -> ParseResult:
        """Decode raw text as JSON or YAML and check the document is a mapping."""
        try:
            data = json.loads(content) if file_type == "json" else yaml.safe_load(content)
        except json.JSONDecodeError as e:
            return ParseResult(success=False, error=f"Invalid JSON format: {e}", file_type=file_type, source=source)
        except yaml.YAMLError as e:
            return ParseResult(success=False, error=f"Invalid YAML format: {e}", file_type=file_type, source=source)

        if not isinstance(data, dict):
            return ParseResult(
                success=False,
                error="OpenAPI document must be a mapping at the top level",
                file_type=file_type,
                source=source,
            )
        return ParseResult(success=True, data=data, file_type=file_type, source=source)

    @staticmethod
    def _get_file_type(location: str) -> str:
        """'json' for .json locations, 'yaml' for everything else."""
        # URLs may carry a query string after the extension
        extension = Path(location.split("?", 1)[0]).suffix.lower()
        return "json" if extension == ".json" else "yaml"
