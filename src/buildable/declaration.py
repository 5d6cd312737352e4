"""Host-facing declaration interfaces and DTOs."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class SourceLocation:
    """Represent a position in a host source file (1-based line and column)."""

    file_path: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class RawField:
    """Represent one field as reported by the host.

    Attributes:
        name: Field name.
        raw_type_text: Field type in the type-expression grammar.
        is_variadic: Whether the field is variadic.
        location: Declaration site of the field.
    """

    name: str
    raw_type_text: str
    is_variadic: bool = False
    location: SourceLocation | None = None


@dataclass(frozen=True)
class RawDeclaration:
    """Represent one candidate declaration discovered by the host.

    Attributes:
        is_record_type: Whether the declaration is a record type.
        has_companion_scope: Whether the declaration has a static holder scope.
        fully_qualified_name: Dotted name including package and enclosing scopes.
        enclosing_scope_chain: Enclosing container names, outermost first.
        fields: Primary field list; ``None`` when the declaration has none.
        location: Declaration site.
    """

    is_record_type: bool
    has_companion_scope: bool
    fully_qualified_name: str
    enclosing_scope_chain: tuple[str, ...] = ()
    fields: tuple[RawField, ...] | None = ()
    location: SourceLocation | None = None

    @property
    def name(self) -> str:
        return self.fully_qualified_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class AnalyzerError:
    """Represent a declaration source error for one file."""

    file_path: str
    message: str


class DeclarationSource(Protocol):
    """Host-agnostic contract for discovering annotated record declarations."""

    def analyze(
        self, root_path: Path
    ) -> tuple[list[RawDeclaration], list[AnalyzerError]]:
        """Analyze a root path and return candidate declarations and errors."""
