# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Synthesize the buildable context, companion holder and registration."""

import ast

from buildable.model import RecordDescriptor
from buildable.synthesis import names, nodes


def generate_ctx(record: RecordDescriptor) -> ast.ClassDef:
    """Generate ``<Name>Ctx`` implementing ``BuildableCtx`` for the record."""
    partial = names.partial_name(record)
    as_partial = nodes.function(
        "as_partial",
        params=[nodes.argument("self"), nodes.argument("source", names.record_ref(record))],
        body=[
            nodes.returns(
                nodes.call(
                    nodes.name(partial),
                    keywords={field.name: nodes.attr("source", field.name) for field in record.fields},
                )
            )
        ],
        return_annotation=nodes.name(partial),
    )
    return nodes.class_def(
        names.ctx_name(record),
        bases=[
            nodes.subscript(
                nodes.name("BuildableCtx"), [names.record_ref(record), nodes.name(partial)]
            )
        ],
        body=[
            nodes.assign("record_type", names.record_ref(record)),
            nodes.assign("empty", nodes.call(nodes.name(partial))),
            as_partial,
        ],
    )


def generate_ctx_instance(record: RecordDescriptor) -> ast.Assign:
    return nodes.assign(names.CTX_INSTANCE, nodes.call(nodes.name(names.ctx_name(record))))


def generate_companion(record: RecordDescriptor) -> ast.ClassDef:
    """Generate ``<Name>Companion`` holding fields, ``builder`` and ``buildable``."""
    partial = names.partial_name(record)
    body: list[ast.stmt] = [
        nodes.docstring(f"Field accessors and builders for {record.qualified_name}.")
    ]
    for field in record.fields:
        body.append(
            nodes.assign(field.name, nodes.call(nodes.name(names.field_class_name(record, field))))
        )
    static = [nodes.name("staticmethod")]
    body.append(
        nodes.function(
            "builder",
            params=[],
            body=[
                nodes.returns(
                    nodes.call(nodes.name("BuildableBuilder"), [nodes.name(names.CTX_INSTANCE)])
                )
            ],
            return_annotation=nodes.subscript(
                nodes.name("BuildableBuilder"), [names.record_ref(record), nodes.name(partial)]
            ),
            decorators=static,
        )
    )
    body.append(
        nodes.function(
            "buildable",
            params=[],
            body=[nodes.returns(nodes.name(names.CTX_INSTANCE))],
            return_annotation=nodes.name(names.ctx_name(record)),
            decorators=static,
        )
    )
    return nodes.class_def(names.companion_name(record), bases=[], body=body)


def generate_registration(record: RecordDescriptor) -> ast.Expr:
    return ast.Expr(
        value=nodes.call(
            nodes.name("register"), [names.record_ref(record), nodes.name(names.CTX_INSTANCE)]
        )
    )
