# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for record descriptors and generated artifacts."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Literal

from buildable.declaration import SourceLocation
from buildable.type_expr import TypeExpr

Severity = Literal["warning", "error"]


@dataclass(frozen=True)
class FieldDescriptor:
    """Represent one field of a record.

    Attributes:
        name: Field name, unique within the owning record.
        type: Parsed field type as declared.
        is_variadic: Whether the field collects a variable number of values.
        location: Declaration site of the field, when known.
    """

    name: str
    type: TypeExpr
    is_variadic: bool = False
    location: SourceLocation | None = None


@dataclass(frozen=True)
class RecordDescriptor:
    """Represent one normalized record declaration.

    Attributes:
        package_qualifier: Dotted package (module) path of the record.
        enclosing_scope_qualifier: Dot-joined enclosing container names,
            outermost first; empty for top-level records.
        name: Record name.
        fields: Fields in declaration order.
        location: Declaration site of the record, when known.
    """

    package_qualifier: str
    enclosing_scope_qualifier: str
    name: str
    fields: tuple[FieldDescriptor, ...]
    location: SourceLocation | None = None

    @property
    def qualified_name(self) -> str:
        """Name of the record relative to its package."""
        if self.enclosing_scope_qualifier:
            return f"{self.enclosing_scope_qualifier}.{self.name}"
        return self.name

    @property
    def module_path(self) -> str:
        """Dotted module the record is imported from; empty when unknown."""
        return self.package_qualifier

    @property
    def fully_qualified_name(self) -> str:
        if self.package_qualifier:
            return f"{self.package_qualifier}.{self.qualified_name}"
        return self.qualified_name

    @property
    def partial_name(self) -> str:
        return f"Partial{self.name}"


@dataclass(frozen=True)
class GeneratedArtifact:
    """Represent the generated output for one record.

    Attributes:
        record_name: Fully qualified name of the source record.
        partial_type_name: Name of the generated partial type.
        generated_declarations: Rendered top-level declarations, in order.
        target_file: Output path relative to the generated-sources root.
        source_text: Complete module text (imports plus declarations).
    """

    record_name: str
    partial_type_name: str
    generated_declarations: tuple[str, ...]
    target_file: PurePosixPath
    source_text: str


@dataclass(frozen=True)
class Diagnostic:
    """Represent one message reported back to the host.

    Attributes:
        severity: ``warning`` for skipped records, ``error`` for fatal ones.
        message: Human-readable message.
        location: Source location the message is tied to.
    """

    severity: Severity
    message: str
    location: SourceLocation | None = None
