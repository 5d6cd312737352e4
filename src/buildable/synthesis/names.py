# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Identifiers, annotations and paths derived from a record descriptor.

Every name here is a pure function of the descriptor so that repeated
synthesis of the same record yields identical output.
"""

import ast
from pathlib import PurePosixPath

from buildable.model import FieldDescriptor, RecordDescriptor
from buildable.synthesis import nodes
from buildable.type_expr import TypeExpr

RUNTIME_MODULE = "buildable.runtime"
CTX_INSTANCE = "ctx"
GENERATED_SUFFIX = "_buildable.py"


def partial_name(record: RecordDescriptor) -> str:
    return record.partial_name


def ctx_name(record: RecordDescriptor) -> str:
    return f"{record.name}Ctx"


def companion_name(record: RecordDescriptor) -> str:
    return f"{record.name}Companion"


def field_class_name(record: RecordDescriptor, field: FieldDescriptor) -> str:
    return f"_{record.name}Field_{field.name}"


def partial_lens_class_name(record: RecordDescriptor, field: FieldDescriptor) -> str:
    return f"_{record.name}PartialLens_{field.name}"


def record_ref(record: RecordDescriptor) -> ast.expr:
    """Expression naming the record class inside the generated module."""
    return nodes.dotted(record.qualified_name)


def record_import_name(record: RecordDescriptor) -> str:
    """Top-level name imported from the record's package."""
    return record.qualified_name.split(".", 1)[0]


def target_file(record: RecordDescriptor) -> PurePosixPath:
    """Output path relative to the generated-sources root.

    Args:
        record: Record descriptor.

    Returns:
        ``<package path>/<Scope_>Name_buildable.py``.
    """
    stem = record.qualified_name.replace(".", "_")
    package_parts = [part for part in record.module_path.split(".") if part]
    return PurePosixPath(*package_parts, f"{stem}{GENERATED_SUFFIX}")


def type_annotation(type_expr: TypeExpr) -> ast.expr:
    """Map a type expression onto a Python annotation expression.

    ``Map<K, V>`` becomes ``Map[K, V]`` and a nullable type ``T?`` becomes
    ``T | None``. Names are kept verbatim.
    """
    node: ast.expr = nodes.name(type_expr.name)
    if type_expr.type_args:
        node = nodes.subscript(node, [type_annotation(arg) for arg in type_expr.type_args])
    if type_expr.nullable:
        node = nodes.optional(node)
    return node


def value_annotation(field: FieldDescriptor) -> ast.expr:
    """Annotation for the value held by a record field."""
    if not field.is_variadic:
        return type_annotation(field.type)
    return nodes.subscript(
        nodes.name("tuple"), [type_annotation(field.type), ast.Constant(value=Ellipsis)]
    )


def partial_value_annotation(field: FieldDescriptor) -> ast.expr:
    """Annotation for the value held by a partial field (always nullable)."""
    if not field.is_variadic:
        return type_annotation(field.type.as_nullable())
    return nodes.optional(value_annotation(field))
