# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Discover ``@gen_buildable`` dataclasses in Python sources."""

import ast
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from buildable.analyzers.ignore import IgnoreMatcher
from buildable.declaration import AnalyzerError, RawDeclaration, RawField, SourceLocation

logger = logging.getLogger(__name__)

ScopeKind = Literal["class", "function"]

_NON_FIELD_ANNOTATIONS: set[str] = {"ClassVar", "KW_ONLY"}
_OPTIONAL_NAMES: set[str] = {"Optional", "typing.Optional"}
_FIELD_FREE_BASES: set[str] = {"object", "Generic", "typing.Generic"}


@dataclass(frozen=True)
class _Scope:
    name: str
    kind: ScopeKind


class PythonDeclarationAnalyzer:
    """Find annotated record declarations in Python files beneath a root."""

    def __init__(
        self,
        annotation_name: str = "gen_buildable",
        exclude: tuple[str, ...] = (),
    ) -> None:
        """Initialize the analyzer.

        Args:
            annotation_name: Decorator name that marks records for generation.
            exclude: Extra gitignore-style patterns to skip.
        """
        self._annotation_name = annotation_name
        self._exclude = exclude

    def analyze(
        self, root_path: Path
    ) -> tuple[list[RawDeclaration], list[AnalyzerError]]:
        """Analyze Python files beneath the provided root path.

        Args:
            root_path: Root directory; module names are relative to it.

        Returns:
            Candidate declarations and recoverable per-file errors.
        """
        declarations: list[RawDeclaration] = []
        errors: list[AnalyzerError] = []
        matcher = IgnoreMatcher.from_root(root_path, extra_patterns=self._exclude)

        for file_path in sorted(root_path.rglob("*.py")):
            relative_path = file_path.relative_to(root_path).as_posix()
            if matcher.matches(relative_path):
                logger.debug(f"Skipping ignored file (file_path={relative_path})")
                continue
            try:
                source = file_path.read_text(encoding="utf-8")
                tree = ast.parse(source, filename=str(file_path))
            except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as exc:
                logger.warning(
                    f"Skipping file due to parse/read failure (file_path={relative_path} error={exc})",
                )
                errors.append(AnalyzerError(file_path=relative_path, message=str(exc)))
                continue

            declarations.extend(
                self._collect(
                    module=module_name(file_path.relative_to(root_path)),
                    file_path=relative_path,
                    body=tree.body,
                    scopes=(),
                    errors=errors,
                )
            )

        logger.info(
            f"Declaration discovery completed (root={root_path} "
            f"declarations={len(declarations)} errors={len(errors)})"
        )
        return declarations, errors

    def _collect(
        self,
        module: str,
        file_path: str,
        body: list[ast.stmt],
        scopes: tuple[_Scope, ...],
        errors: list[AnalyzerError],
    ) -> list[RawDeclaration]:
        declarations: list[RawDeclaration] = []
        for node in body:
            if isinstance(node, ast.ClassDef):
                if self._is_annotated(node):
                    declaration = self._create_declaration(module, file_path, node, scopes)
                    reason = _unsupported_reason(node) if declaration.is_record_type else None
                    if reason is None:
                        declarations.append(declaration)
                    else:
                        logger.warning(
                            f"Skipping unsupported record (record={declaration.fully_qualified_name} "
                            f"reason={reason})"
                        )
                        errors.append(
                            AnalyzerError(
                                file_path=file_path,
                                message=f"{declaration.location}: {declaration.fully_qualified_name} {reason}",
                            )
                        )
                declarations.extend(
                    self._collect(
                        module, file_path, node.body, scopes + (_Scope(node.name, "class"),), errors
                    )
                )
            elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                declarations.extend(
                    self._collect(
                        module, file_path, node.body, scopes + (_Scope(node.name, "function"),), errors
                    )
                )
        return declarations

    def _create_declaration(
        self,
        module: str,
        file_path: str,
        node: ast.ClassDef,
        scopes: tuple[_Scope, ...],
    ) -> RawDeclaration:
        chain = tuple(scope.name for scope in scopes)
        qualified = ".".join(part for part in (module, *chain, node.name) if part)
        return RawDeclaration(
            is_record_type=any(_decorator_name(d) == "dataclass" for d in node.decorator_list),
            has_companion_scope=all(scope.kind == "class" for scope in scopes),
            fully_qualified_name=qualified,
            enclosing_scope_chain=chain,
            fields=tuple(self._extract_fields(file_path, node)),
            location=_location(file_path, node),
        )

    def _extract_fields(self, file_path: str, node: ast.ClassDef) -> list[RawField]:
        fields: list[RawField] = []
        for statement in node.body:
            if not isinstance(statement, ast.AnnAssign):
                continue
            if not isinstance(statement.target, ast.Name):
                continue
            if _annotation_head(statement.annotation) in _NON_FIELD_ANNOTATIONS:
                continue
            fields.append(
                RawField(
                    name=statement.target.id,
                    raw_type_text=annotation_to_type_text(statement.annotation),
                    location=_location(file_path, statement),
                )
            )
        return fields

    def _is_annotated(self, node: ast.ClassDef) -> bool:
        return any(_decorator_name(d) == self._annotation_name for d in node.decorator_list)


def module_name(relative_path: Path) -> str:
    """Derive a dotted module name from a root-relative ``.py`` path."""
    parts = list(relative_path.with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def annotation_to_type_text(node: ast.expr) -> str:
    """Translate a Python annotation into type-expression text.

    ``dict[str, int]`` becomes ``dict<str, int>``; ``X | None`` and
    ``Optional[X]`` become ``X?``. Anything outside that shape is returned as
    its source text and rejected later by the type parser.

    Args:
        node: Annotation expression.

    Returns:
        Type-expression text.
    """
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        try:
            inner = ast.parse(node.value.strip(), mode="eval").body
        except SyntaxError:
            return node.value
        return annotation_to_type_text(inner)
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        if _is_none(node.right):
            return _nullable(annotation_to_type_text(node.left))
        if _is_none(node.left):
            return _nullable(annotation_to_type_text(node.right))
    if isinstance(node, ast.Subscript):
        base = ast.unparse(node.value)
        items = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
        if base in _OPTIONAL_NAMES and len(items) == 1:
            return _nullable(annotation_to_type_text(items[0]))
        args = ", ".join(annotation_to_type_text(item) for item in items)
        return f"{base}<{args}>"
    return ast.unparse(node)


def _unsupported_reason(node: ast.ClassDef) -> str | None:
    """Explain why a dataclass constructor cannot be read from its own body."""
    for base in node.bases:
        base_name = ast.unparse(base.value if isinstance(base, ast.Subscript) else base)
        if base_name not in _FIELD_FREE_BASES:
            return f"inherits from {ast.unparse(base)}; inherited fields are not supported"
    for statement in node.body:
        if not isinstance(statement, ast.AnnAssign) or not isinstance(statement.target, ast.Name):
            continue
        if _annotation_head(statement.annotation) == "InitVar":
            return f"declares InitVar field {statement.target.id!r}; InitVar fields are not supported"
        if _is_init_false(statement.value):
            return f"declares {statement.target.id!r} with init=False; such fields are not supported"
    return None


def _is_init_false(value: ast.expr | None) -> bool:
    if not isinstance(value, ast.Call) or _decorator_name(value) != "field":
        return False
    return any(
        kw.arg == "init" and isinstance(kw.value, ast.Constant) and kw.value.value is False
        for kw in value.keywords
    )


def _nullable(text: str) -> str:
    return text if text.endswith("?") else f"{text}?"


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _annotation_head(node: ast.expr) -> str:
    if isinstance(node, ast.Subscript):
        node = node.value
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    return ""


def _decorator_name(node: ast.expr) -> str:
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Name):
        return node.id
    return ""


def _location(file_path: str, node: ast.stmt) -> SourceLocation:
    return SourceLocation(file_path=file_path, line=node.lineno, column=node.col_offset + 1)
