# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize the partial type with its combine and build operations."""

import ast

from buildable.model import RecordDescriptor
from buildable.synthesis import names, nodes


def generate_partial_class(record: RecordDescriptor) -> ast.ClassDef:
    """Generate the ``Partial<Name>`` frozen dataclass.

    Each record field becomes a nullable field defaulting to ``None`` so the
    all-unset partial is ``Partial<Name>()``.

    Args:
        record: Record descriptor.

    Returns:
        Class definition node.
    """
    partial = names.partial_name(record)
    body: list[ast.stmt] = [
        nodes.docstring(f"Partial view of {record.qualified_name} with every field optional.")
    ]
    for field in record.fields:
        body.append(
            nodes.ann_assign(
                field.name,
                names.partial_value_annotation(field),
                ast.Constant(value=None),
            )
        )
    body.append(generate_combine_operation(record))
    body.append(generate_build_operation(record))
    return nodes.class_def(
        partial,
        bases=[nodes.subscript(nodes.name("Partial"), [names.record_ref(record)])],
        body=body,
        decorators=[nodes.call(nodes.name("dataclass"), keywords={"frozen": ast.Constant(value=True)})],
    )


def generate_combine_operation(record: RecordDescriptor) -> ast.FunctionDef:
    """Generate ``combine``: each field keeps ``self``'s value when it is set."""
    partial = names.partial_name(record)
    merged = {
        field.name: ast.IfExp(
            test=nodes.is_not_none(nodes.attr("self", field.name)),
            body=nodes.attr("self", field.name),
            orelse=nodes.attr("other", field.name),
        )
        for field in record.fields
    }
    return nodes.function(
        "combine",
        params=[nodes.argument("self"), nodes.argument("other", nodes.name(partial))],
        body=[nodes.returns(nodes.call(nodes.name(partial), keywords=merged))],
        return_annotation=nodes.name(partial),
    )


def generate_build_operation(record: RecordDescriptor) -> ast.FunctionDef:
    """Generate ``build``: the record when every field is set, else ``None``."""
    construct = nodes.returns(
        nodes.call(
            names.record_ref(record),
            keywords={field.name: nodes.attr("self", field.name) for field in record.fields},
        )
    )
    body: list[ast.stmt]
    if not record.fields:
        body = [construct]
    else:
        checks = [nodes.is_not_none(nodes.attr("self", field.name)) for field in record.fields]
        test: ast.expr = checks[0] if len(checks) == 1 else ast.BoolOp(op=ast.And(), values=checks)
        body = [
            ast.If(test=test, body=[construct], orelse=[]),
            nodes.returns(ast.Constant(value=None)),
        ]
    return nodes.function(
        "build",
        params=[nodes.argument("self")],
        body=body,
        return_annotation=nodes.optional(names.record_ref(record)),
    )
