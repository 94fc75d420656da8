"""Keyword configuration loading and validation.

A configuration document is a small JSON object naming the keywords a
caller wants extracted. It is validated in two steps: structurally against
the packaged JSON Schema, then by resolving every keyword name against
``KeywordRegistry`` so that typos fail before any extraction begins.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .errors import ConfigError, KeywordNotFoundError
from .registry import KeywordRegistry

# Path to the schema file (relative to this module)
SCHEMA_PATH = Path(__file__).parent / "schemas" / "keyword_config.schema.json"

# Keywords used when a configuration does not name any
DEFAULT_KEYWORDS: tuple[str, ...] = (
    "size",
    "type",
    "uid",
    "gid",
    "mode",
    "link",
    "nlink",
    "time",
)

# Same as DEFAULT_KEYWORDS, but archives only have second precision
DEFAULT_TAR_KEYWORDS: tuple[str, ...] = tuple(
    "tar_time" if name == "time" else name for name in DEFAULT_KEYWORDS
)


@dataclass(frozen=True)
class KeywordConfig:
    """Validated keyword selection."""

    keywords: tuple[str, ...] = ()
    tar: bool = False

    def effective_keywords(self) -> tuple[str, ...]:
        """Return the configured keywords, or the matching default set."""
        if self.keywords:
            return self.keywords
        return DEFAULT_TAR_KEYWORDS if self.tar else DEFAULT_KEYWORDS


def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def parse_keyword_config(data: dict[str, Any]) -> KeywordConfig:
    """Validate a decoded configuration document.

    Args:
        data: Decoded JSON object

    Returns:
        KeywordConfig with the requested keywords

    Raises:
        ConfigError: If the document fails the schema or names an
            unknown keyword
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema())
    except ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
        raise ConfigError(f"Validation error at {error_path}: {e.message}") from e

    keywords = data.get("keywords", [])
    try:
        KeywordRegistry.validate(keywords)
    except KeywordNotFoundError as e:
        raise ConfigError(str(e)) from e

    return KeywordConfig(keywords=tuple(keywords), tar=data.get("tar", False))


def load_keyword_config(path: Path) -> KeywordConfig:
    """Read and validate a configuration file.

    Raises:
        ConfigError: If the file is missing, not JSON, or invalid
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}") from e

    return parse_keyword_config(data)


def validate_keyword_config_with_error_details(data: dict[str, Any]) -> tuple[bool, str | None]:
    """Validate a configuration and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        parse_keyword_config(data)
        return True, None
    except ConfigError as e:
        return False, str(e)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
