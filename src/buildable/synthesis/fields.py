# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize field accessors over the record and its partial."""

import ast

from buildable.model import FieldDescriptor, RecordDescriptor
from buildable.synthesis import names, nodes


def generate_field(record: RecordDescriptor, field: FieldDescriptor) -> list[ast.ClassDef]:
    """Generate the partial lens and field accessor classes for one field.

    Args:
        record: Record descriptor.
        field: Field of ``record``.

    Returns:
        The partial lens class followed by the field accessor class.
    """
    return [generate_partial_lens(record, field), generate_field_accessor(record, field)]


def generate_field_accessor(record: RecordDescriptor, field: FieldDescriptor) -> ast.ClassDef:
    record_type = names.record_ref(record)
    partial_type = nodes.name(names.partial_name(record))
    body: list[ast.stmt] = [
        nodes.assign("name", ast.Constant(value=field.name)),
        nodes.assign(
            "partial",
            nodes.call(nodes.name(names.partial_lens_class_name(record, field))),
        ),
        _getter(record_type, names.value_annotation(field), field),
        _setter(record, record_type, names.record_ref(record), names.value_annotation(field), field),
    ]
    return nodes.class_def(
        names.field_class_name(record, field),
        bases=[
            nodes.subscript(
                nodes.name("Field"), [record_type, nodes.name("Any"), partial_type]
            )
        ],
        body=body,
    )


def generate_partial_lens(record: RecordDescriptor, field: FieldDescriptor) -> ast.ClassDef:
    partial_type = nodes.name(names.partial_name(record))
    body: list[ast.stmt] = [
        _getter(partial_type, names.partial_value_annotation(field), field),
        _setter(
            record,
            partial_type,
            nodes.name(names.partial_name(record)),
            names.partial_value_annotation(field),
            field,
        ),
    ]
    return nodes.class_def(
        names.partial_lens_class_name(record, field),
        bases=[nodes.subscript(nodes.name("Lens"), [partial_type, nodes.name("Any")])],
        body=body,
    )


def _getter(source_type: ast.expr, focus_type: ast.expr, field: FieldDescriptor) -> ast.FunctionDef:
    return nodes.function(
        "get",
        params=[nodes.argument("self"), nodes.argument("source", source_type)],
        body=[nodes.returns(nodes.attr("source", field.name))],
        return_annotation=focus_type,
    )


def _setter(
    record: RecordDescriptor,
    source_type: ast.expr,
    constructor: ast.expr,
    focus_type: ast.expr,
    field: FieldDescriptor,
) -> ast.FunctionDef:
    # Copy-on-write: every other field is carried over unchanged.
    values = {
        other.name: nodes.name("focus") if other.name == field.name else nodes.attr("source", other.name)
        for other in record.fields
    }
    return nodes.function(
        "set",
        params=[
            nodes.argument("self"),
            nodes.argument("source", source_type),
            nodes.argument("focus", focus_type),
        ],
        body=[nodes.returns(nodes.call(constructor, keywords=values))],
        return_annotation=source_type,
    )
