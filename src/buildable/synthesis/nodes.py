# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Small constructors for Python AST nodes used by the synthesis engine."""

import ast
from collections.abc import Sequence


def name(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Load())


def store(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Store())


def attr(value: ast.expr | str, attribute: str) -> ast.Attribute:
    if isinstance(value, str):
        value = name(value)
    return ast.Attribute(value=value, attr=attribute, ctx=ast.Load())


def dotted(path: str) -> ast.expr:
    """Build a load expression for a dotted path such as ``Outer.Inner``."""
    head, *rest = path.split(".")
    node: ast.expr = name(head)
    for part in rest:
        node = attr(node, part)
    return node


def subscript(value: ast.expr, items: Sequence[ast.expr]) -> ast.Subscript:
    if len(items) == 1:
        slice_: ast.expr = items[0]
    else:
        slice_ = ast.Tuple(elts=list(items), ctx=ast.Load())
    return ast.Subscript(value=value, slice=slice_, ctx=ast.Load())


def optional(value: ast.expr) -> ast.BinOp:
    return ast.BinOp(left=value, op=ast.BitOr(), right=ast.Constant(value=None))


def call(
    func: ast.expr, args: Sequence[ast.expr] = (), keywords: dict[str, ast.expr] | None = None
) -> ast.Call:
    return ast.Call(
        func=func,
        args=list(args),
        keywords=[ast.keyword(arg=key, value=value) for key, value in (keywords or {}).items()],
    )


def is_not_none(value: ast.expr) -> ast.Compare:
    return ast.Compare(left=value, ops=[ast.IsNot()], comparators=[ast.Constant(value=None)])


def returns(value: ast.expr) -> ast.Return:
    return ast.Return(value=value)


def docstring(text: str) -> ast.Expr:
    return ast.Expr(value=ast.Constant(value=text))


def assign(target: str, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[store(target)], value=value)


def ann_assign(target: str, annotation: ast.expr, value: ast.expr | None = None) -> ast.AnnAssign:
    return ast.AnnAssign(target=store(target), annotation=annotation, value=value, simple=1)


def argument(identifier: str, annotation: ast.expr | None = None) -> ast.arg:
    return ast.arg(arg=identifier, annotation=annotation)


def function(
    identifier: str,
    params: Sequence[ast.arg],
    body: Sequence[ast.stmt],
    return_annotation: ast.expr | None = None,
    decorators: Sequence[ast.expr] = (),
) -> ast.FunctionDef:
    return ast.FunctionDef(
        name=identifier,
        args=ast.arguments(
            posonlyargs=[],
            args=list(params),
            vararg=None,
            kwonlyargs=[],
            kw_defaults=[],
            kwarg=None,
            defaults=[],
        ),
        body=list(body),
        decorator_list=list(decorators),
        returns=return_annotation,
        type_comment=None,
        type_params=[],
    )


def class_def(
    identifier: str,
    bases: Sequence[ast.expr],
    body: Sequence[ast.stmt],
    decorators: Sequence[ast.expr] = (),
) -> ast.ClassDef:
    return ast.ClassDef(
        name=identifier,
        bases=list(bases),
        keywords=[],
        body=list(body) or [ast.Pass()],
        decorator_list=list(decorators),
        type_params=[],
    )


def import_from(module: str, names: Sequence[str]) -> ast.ImportFrom:
    return ast.ImportFrom(
        module=module, names=[ast.alias(name=item) for item in names], level=0
    )
