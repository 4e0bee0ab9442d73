"""Load completion schemas from a URL, local file, or stdin.

This module handles all I/O for fetching schema documents and validating them
into :class:`~intellicomp.models.Command` objects. It supports both JSON and
YAML with automatic format detection.

The public functions are:

* :func:`load_schema` -- Load and validate a schema from any supported source.
* :func:`dump_schema` / :func:`save_schema` -- Serialise a schema back to YAML.
* :func:`list_schemas` -- Map command names to schema files in a directory.
* :func:`command_json_schema` -- JSON Schema describing the schema format.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from intellicomp.exceptions import SchemaError
from intellicomp.models import Command

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".yaml", ".yml")
"""File extensions recognised as schema files inside a schema directory."""


def load_schema(source: str | Path) -> Command:
    """Load a completion schema from URL, file path, or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The validated :class:`~intellicomp.models.Command`.

    Raises:
        SchemaError: If the source cannot be loaded, parsed or validated.
    """
    source = str(source)
    if source == "-":
        raw = _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        raw = _load_from_url(source)
    else:
        raw = _load_from_file(source)
    return validate_schema(raw, origin=source)


def validate_schema(raw: dict[str, Any], origin: str = "<memory>") -> Command:
    """Validate a parsed schema document into a :class:`Command`.

    Raises:
        SchemaError: If the document does not describe a valid schema.
    """
    try:
        command = Command.model_validate(raw)
    except ValidationError as exc:
        raise SchemaError(f"Invalid schema {origin}: {exc}") from exc
    logger.debug(
        "Loaded schema %s: %d keyword, %d positional argument(s)",
        origin,
        len(command.keyword_arguments),
        len(command.positional_arguments),
    )
    return command


def _load_from_stdin() -> dict[str, Any]:
    """Read a schema document from stdin.

    Raises:
        SchemaError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise SchemaError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SchemaError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a schema document from URL. Supports JSON and YAML responses.

    Raises:
        SchemaError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SchemaError(
            f"HTTP {exc.response.status_code} fetching schema from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SchemaError(f"Failed to fetch schema from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a schema document from a local file.

    Raises:
        SchemaError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SchemaError(f"Schema file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaError(f"Failed to read schema file {path}: {exc}") from exc

    if not content.strip():
        raise SchemaError(f"Schema file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in SCHEMA_SUFFIXES:
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Raises:
        SchemaError: If the content cannot be parsed as either format.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
            if not isinstance(result, dict):
                raise SchemaError(
                    "Schema must be a JSON/YAML object (got "
                    f"{type(result).__name__})"
                )
            return result
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise SchemaError(f"Invalid JSON: {exc}") from exc

    try:
        result = yaml.safe_load(content)
        if not isinstance(result, dict):
            raise SchemaError(
                "Schema must be a JSON/YAML object (got "
                f"{type(result).__name__ if result is not None else 'empty document'})"
            )
        return result
    except yaml.YAMLError as exc:
        yaml_error = exc

    msg = "Failed to parse schema as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise SchemaError(msg)


def dump_schema(command: Command) -> str:
    """Serialise *command* to a YAML document.

    Unset optional fields are omitted; unknown value types are written back
    with their original tag and content.
    """
    data = command.model_dump(mode="json", exclude_none=True)
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def save_schema(command: Command, path: Path) -> None:
    """Write *command* as YAML to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_schema(command), encoding="utf-8")


def list_schemas(directory: Path) -> dict[str, Path]:
    """Return ``{command_name: schema_file}`` for every schema in *directory*.

    The command name is the file stem. A missing directory yields an empty
    mapping.
    """
    if not directory.is_dir():
        return {}
    return {
        path.stem: path
        for path in sorted(directory.iterdir())
        if path.is_file() and path.suffix.lower() in SCHEMA_SUFFIXES
    }


def command_json_schema() -> dict[str, Any]:
    """Return the JSON Schema of the completion schema format."""
    return Command.model_json_schema()
