# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Record model building from host declarations."""

import keyword
import logging

from buildable.declaration import RawDeclaration
from buildable.model import FieldDescriptor, RecordDescriptor
from buildable.type_expr import parse_type

logger = logging.getLogger(__name__)


class InvariantViolated(RuntimeError):
    """Represent a host declaration that breaks a model builder invariant."""


class InvalidFieldName(ValueError):
    """Represent a field name that cannot become a generated attribute."""

    def __init__(self, record_name: str, field_name: str, reason: str) -> None:
        self.record_name = record_name
        self.field_name = field_name
        super().__init__(f"Field {field_name!r} of {record_name} {reason}")


class ModelBuilder:
    """Build normalized record descriptors from host declarations."""

    def build(self, declarations: list[RawDeclaration]) -> list[RecordDescriptor]:
        """Build descriptors for a batch of declarations.

        Args:
            declarations: Host declarations that already passed precondition checks.

        Returns:
            Record descriptors in input order.
        """
        return [self.build_record(declaration) for declaration in declarations]

    def build_record(self, declaration: RawDeclaration) -> RecordDescriptor:
        """Build one record descriptor.

        Args:
            declaration: Host declaration of a record with a companion scope.

        Returns:
            Record descriptor with parsed field types in declaration order.

        Raises:
            InvariantViolated: If the primary field list is absent, field names
                repeat, or the qualified name is too short for its scope chain.
            InvalidFieldName: If a field name is not a usable Python identifier.
            MalformedTypeExpression: If a field type cannot be parsed.
        """
        if declaration.fields is None:
            raise InvariantViolated(
                f"Record has no primary field list: {declaration.fully_qualified_name}"
            )

        sections = declaration.fully_qualified_name.split(".")
        scope_chain = list(declaration.enclosing_scope_chain)
        if len(sections) < len(scope_chain) + 1:
            raise InvariantViolated(
                "Qualified name is shorter than its enclosing scope chain: "
                f"{declaration.fully_qualified_name}"
            )
        package_qualifier = ".".join(sections[: len(sections) - len(scope_chain) - 1])
        enclosing_scope_qualifier = ".".join(scope_chain)

        fields: list[FieldDescriptor] = []
        seen: set[str] = set()
        for raw_field in declaration.fields:
            if raw_field.name in seen:
                raise InvariantViolated(
                    f"Duplicate field {raw_field.name!r} in {declaration.fully_qualified_name}"
                )
            seen.add(raw_field.name)
            _check_field_name(declaration.fully_qualified_name, raw_field.name)
            fields.append(
                FieldDescriptor(
                    name=raw_field.name,
                    type=parse_type(raw_field.raw_type_text),
                    is_variadic=raw_field.is_variadic,
                    location=raw_field.location,
                )
            )

        if not fields:
            logger.info(
                f"Record has no fields; build always succeeds (record={declaration.fully_qualified_name})"
            )
        return RecordDescriptor(
            package_qualifier=package_qualifier,
            enclosing_scope_qualifier=enclosing_scope_qualifier,
            name=sections[-1],
            fields=tuple(fields),
            location=declaration.location,
        )


def _check_field_name(record_name: str, field_name: str) -> None:
    if not field_name.isidentifier():
        raise InvalidFieldName(record_name, field_name, "is not a valid identifier")
    if keyword.iskeyword(field_name):
        raise InvalidFieldName(record_name, field_name, "is a reserved keyword")
    if field_name.startswith("__"):
        raise InvalidFieldName(record_name, field_name, "would be name-mangled")
