"""
Pydantic models for validating the optional workflowtools TOML configuration.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_CONFIG_FILENAME = "workflowtools.toml"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class ToolConfig(BaseModel):
    """
    Settings shared by the scaffold, draft, convert and upload commands.

    Attributes:
        author_given: Given name written into new package metadata.
        author_family: Family name written into new package metadata.
        author_email: Maintainer email written into new package metadata.
        license: License field for new packages.
        version: Initial package version.
        default_template: Template used when none is named.
        overleaf_url: Base URL of the collaborative-editing service.
        upload_timeout: Seconds to wait for the upload request.
        pandoc: Explicit path to the pandoc executable.
        render_timeout: Seconds to wait for a conversion.
    """
    author_given: str = "First"
    author_family: str = "Last"
    author_email: str = "first.last@example.com"
    license: str = "Artistic-2.0"
    version: str = "0.99.0"
    default_template: str = "f1000_article"
    overleaf_url: str = "https://www.overleaf.com"
    upload_timeout: float = Field(default=60.0, gt=0)
    pandoc: Optional[Path] = None
    render_timeout: float = Field(default=300.0, gt=0)

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
    }

    @field_validator("overleaf_url")
    @classmethod
    def normalise_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("overleaf_url must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("version")
    @classmethod
    def check_version(cls, value: str) -> str:
        parts = value.strip().split(".")
        if len(parts) < 2 or not all(part.isdigit() for part in parts):
            raise ValueError("version must look like 0.99.0")
        return value.strip()


def load_config(path: Path | str) -> ToolConfig:
    """
    Load and validate a TOML config file into a ToolConfig instance.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated ToolConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    try:
        return ToolConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def discover_config(explicit: Optional[Path] = None) -> ToolConfig:
    """
    Resolve the active configuration.

    An explicit path wins; otherwise `workflowtools.toml` in the working
    directory is used when present, and built-in defaults apply last.
    """
    if explicit is not None:
        return load_config(explicit)
    candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if candidate.is_file():
        return load_config(candidate)
    return ToolConfig()
