# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parse textual type signatures into structured type expressions."""

import logging
import re
from dataclasses import dataclass, replace

from lark import Lark, Token, Transformer, UnexpectedInput

logger = logging.getLogger(__name__)

_TYPE_GRAMMAR = r"""
start: type_expr

type_expr: NAME type_args? NULLABLE?
type_args: "<" type_expr (_COMMA type_expr)* ">"

NAME: /\w+/
NULLABLE: "?"
_COMMA: /\s*,\s*/
"""

_COMMA_PATTERN = re.compile(r"\s*,\s*")


class MalformedTypeExpression(ValueError):
    """Represent a type signature that does not match the type grammar."""

    def __init__(self, text: str, position: int | None = None) -> None:
        self.text = text
        self.position = position
        where = f" at offset {position}" if position is not None else ""
        super().__init__(f"Malformed type expression{where}: {text!r}")


@dataclass(frozen=True)
class TypeExpr:
    """Represent one parsed type signature.

    Attributes:
        name: Type identifier.
        type_args: Generic arguments; empty unless the text contained ``<...>``.
        nullable: Whether the text ended with ``?`` at this level.
    """

    name: str
    type_args: tuple["TypeExpr", ...] = ()
    nullable: bool = False

    def as_nullable(self) -> "TypeExpr":
        """Return a copy of this type marked nullable at the outermost level."""
        if self.nullable:
            return self
        return replace(self, nullable=True)

    def render(self) -> str:
        """Render the canonical text form of this type.

        Returns:
            Type text with ``", "`` between type arguments.
        """
        text = self.name
        if self.type_args:
            text += "<" + ", ".join(arg.render() for arg in self.type_args) + ">"
        if self.nullable:
            text += "?"
        return text

    def __str__(self) -> str:
        return self.render()


class _TypeExprBuilder(Transformer):
    def start(self, children: list) -> TypeExpr:
        return children[0]

    def type_args(self, children: list) -> tuple[TypeExpr, ...]:
        return tuple(children)

    def type_expr(self, children: list) -> TypeExpr:
        name = str(children[0])
        type_args: tuple[TypeExpr, ...] = ()
        nullable = False
        for child in children[1:]:
            if isinstance(child, tuple):
                type_args = child
            elif isinstance(child, Token) and child.type == "NULLABLE":
                nullable = True
        return TypeExpr(name=name, type_args=type_args, nullable=nullable)


_PARSER = Lark(
    _TYPE_GRAMMAR,
    parser="lalr",
    start="start",
    transformer=_TypeExprBuilder(),
)


def parse_type(text: str) -> TypeExpr:
    """Parse a type signature such as ``Map<Int, String>?``.

    Args:
        text: Raw type text. Whitespace is only allowed around commas.

    Returns:
        Parsed type expression.

    Raises:
        MalformedTypeExpression: If the text does not match the grammar.
    """
    try:
        return _PARSER.parse(text)
    except UnexpectedInput as exc:
        position = getattr(exc, "pos_in_stream", None)
        logger.debug(f"Type expression rejected (text={text!r} position={position})")
        raise MalformedTypeExpression(text, position) from exc


def normalize_type_text(text: str) -> str:
    """Normalize whitespace around commas to the canonical ``", "`` form.

    Args:
        text: Type text accepted by :func:`parse_type`.

    Returns:
        Text equal to ``parse_type(text).render()`` for valid input.
    """
    return _COMMA_PATTERN.sub(", ", text)
