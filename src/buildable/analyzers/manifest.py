# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Read host declarations from a JSON manifest.

The manifest mirrors the host inputs one to one::

    {
      "declarations": [
        {
          "is_record_type": true,
          "has_companion_scope": true,
          "fully_qualified_name": "com.example.Scope1.Nested",
          "enclosing_scope_chain": ["Scope1"],
          "location": {"file_path": "Nested.kt", "line": 5, "column": 5},
          "fields": [
            {"name": "arg1", "raw_type_text": "String", "is_variadic": false}
          ]
        }
      ]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any

from buildable.declaration import AnalyzerError, RawDeclaration, RawField, SourceLocation

logger = logging.getLogger(__name__)


class ManifestFormatError(ValueError):
    """Represent a manifest entry with missing or mistyped keys."""


class ManifestDeclarationSource:
    """Load candidate declarations from a JSON manifest file."""

    def analyze(
        self, root_path: Path
    ) -> tuple[list[RawDeclaration], list[AnalyzerError]]:
        """Load declarations from a manifest file.

        Args:
            root_path: Path of the manifest file.

        Returns:
            Declarations from well-formed entries and one error per bad entry.
        """
        try:
            payload = json.loads(root_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to read manifest (path={root_path} error={exc})")
            return [], [AnalyzerError(file_path=str(root_path), message=str(exc))]

        entries = payload.get("declarations") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            message = "Manifest must be an object with a 'declarations' list"
            logger.warning(f"Invalid manifest (path={root_path})")
            return [], [AnalyzerError(file_path=str(root_path), message=message)]

        declarations: list[RawDeclaration] = []
        errors: list[AnalyzerError] = []
        for index, entry in enumerate(entries):
            try:
                declarations.append(parse_declaration(entry))
            except ManifestFormatError as exc:
                logger.warning(
                    f"Skipping manifest entry (path={root_path} index={index} error={exc})"
                )
                errors.append(
                    AnalyzerError(file_path=str(root_path), message=f"declarations[{index}]: {exc}")
                )
        return declarations, errors


def parse_declaration(entry: Any) -> RawDeclaration:
    """Convert one manifest entry into a raw declaration.

    Args:
        entry: Decoded JSON object.

    Returns:
        Raw declaration.

    Raises:
        ManifestFormatError: If required keys are missing or mistyped.
    """
    if not isinstance(entry, dict):
        raise ManifestFormatError("entry must be an object")
    fields_value = entry.get("fields", [])
    fields: tuple[RawField, ...] | None
    if fields_value is None:
        fields = None
    elif isinstance(fields_value, list):
        fields = tuple(_parse_field(item) for item in fields_value)
    else:
        raise ManifestFormatError("'fields' must be a list or null")

    chain = entry.get("enclosing_scope_chain", [])
    if not isinstance(chain, list) or not all(isinstance(item, str) for item in chain):
        raise ManifestFormatError("'enclosing_scope_chain' must be a list of names")

    return RawDeclaration(
        is_record_type=_require(entry, "is_record_type", bool),
        has_companion_scope=_require(entry, "has_companion_scope", bool),
        fully_qualified_name=_require(entry, "fully_qualified_name", str),
        enclosing_scope_chain=tuple(chain),
        fields=fields,
        location=_parse_location(entry.get("location")),
    )


def _parse_field(item: Any) -> RawField:
    if not isinstance(item, dict):
        raise ManifestFormatError("field must be an object")
    is_variadic = item.get("is_variadic", False)
    if not isinstance(is_variadic, bool):
        raise ManifestFormatError("'is_variadic' must be a boolean")
    return RawField(
        name=_require(item, "name", str),
        raw_type_text=_require(item, "raw_type_text", str),
        is_variadic=is_variadic,
        location=_parse_location(item.get("location")),
    )


def _parse_location(value: Any) -> SourceLocation | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ManifestFormatError("'location' must be an object")
    column = value.get("column", 1)
    if not isinstance(column, int):
        raise ManifestFormatError("'column' must be an integer")
    return SourceLocation(
        file_path=_require(value, "file_path", str),
        line=_require(value, "line", int),
        column=column,
    )


def _require(entry: dict[str, Any], key: str, expected: type) -> Any:
    if key not in entry:
        raise ManifestFormatError(f"missing key {key!r}")
    value = entry[key]
    if not isinstance(value, expected):
        raise ManifestFormatError(f"{key!r} must be of type {expected.__name__}")
    return value
