"""Configuration management for openapi-tools CLI."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Configuration loaded from .env file."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from project root .env
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # Document loading
        self.http_timeout_seconds = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

        # Validation
        self.validate_meta_schema = _env_flag("VALIDATE_META_SCHEMA", "true")
        self.min_openapi_version = os.getenv("MIN_OPENAPI_VERSION", "3.0.0")
        self.require_info_section = _env_flag("REQUIRE_INFO_SECTION", "true")
        self.require_paths_or_components = _env_flag("REQUIRE_PATHS_OR_COMPONENTS", "true")

        # Code generation
        self.zod_schema_suffix = os.getenv("ZOD_SCHEMA_SUFFIX", "Schema")
