# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Runtime interfaces implemented by generated buildable modules.

Generated code subclasses :class:`Partial`, :class:`Lens`, :class:`Field` and
:class:`BuildableCtx`, and registers one context instance per record type so
that callers can look it up with :func:`buildable_for`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")
A = TypeVar("A")
S = TypeVar("S")
P = TypeVar("P", bound="Partial[Any]")

_REGISTRY: dict[type, "BuildableCtx[Any, Any]"] = {}


def gen_buildable(cls: type) -> type:
    """Mark a dataclass for buildable code generation."""
    return cls


class Partial(ABC, Generic[R]):
    """A record mirror with every field optional."""

    @abstractmethod
    def combine(self, other: Any) -> Any:
        """Merge field-wise, keeping fields already set on ``self``."""

    @abstractmethod
    def build(self) -> R | None:
        """Return the full record, or ``None`` while any field is unset."""


class Lens(ABC, Generic[S, A]):
    """Paired getter and copy-on-write setter for one focus."""

    @abstractmethod
    def get(self, source: S) -> A:
        """Read the focus from ``source``."""

    @abstractmethod
    def set(self, source: S, focus: A) -> S:
        """Return a copy of ``source`` with the focus replaced."""


class Field(Lens[R, A], Generic[R, A, P]):
    """Lens over a record field with a companion lens over the partial."""

    name: str
    partial: Lens[P, Any]


class BuildableCtx(ABC, Generic[R, P]):
    """Per-record implementation of the buildable interface."""

    record_type: type
    empty: P

    @abstractmethod
    def as_partial(self, source: R) -> P:
        """Lift a full record into a partial with every field set."""


class BuildableBuilder(Generic[R, P]):
    """Incremental, fluent builder over one partial value.

    Not thread-safe; intended for a single owner.
    """

    def __init__(self, ctx: BuildableCtx[R, P]) -> None:
        self._ctx = ctx
        self._partial: P = ctx.empty

    @property
    def partial(self) -> P:
        return self._partial

    def set(self, field: Field[R, A, P], value: A | None) -> "BuildableBuilder[R, P]":
        """Set one field and return this builder.

        Args:
            field: Field accessor of the record being built.
            value: New value; ``None`` unsets the field.

        Returns:
            This builder.
        """
        self._partial = field.partial.set(self._partial, value)
        return self

    def combine(self, other: P) -> "BuildableBuilder[R, P]":
        """Fill unset fields from another partial and return this builder."""
        self._partial = self._partial.combine(other)
        return self

    def build(self) -> R | None:
        return self._partial.build()


def register(record_type: type, ctx: BuildableCtx[Any, Any]) -> None:
    """Register the buildable context for a record type.

    Args:
        record_type: Record class the context was generated for.
        ctx: Generated context instance.
    """
    previous = _REGISTRY.get(record_type)
    if previous is not None and previous is not ctx:
        logger.debug(
            f"Replacing buildable context (record={record_type.__qualname__})"
        )
    _REGISTRY[record_type] = ctx


def buildable_for(record_type: type[R]) -> BuildableCtx[R, Any]:
    """Look up the buildable context registered for a record type.

    Args:
        record_type: Record class.

    Returns:
        Registered context.

    Raises:
        LookupError: If no generated module registered the type.
    """
    try:
        return _REGISTRY[record_type]
    except KeyError:
        raise LookupError(
            f"No buildable context registered for {record_type.__qualname__}"
        ) from None


def combine_all(ctx: BuildableCtx[R, P], *partials: P) -> R | None:
    """Fold partials onto the empty partial and build the result.

    Args:
        ctx: Buildable context of the record.
        *partials: Partials in precedence order; earlier set fields win.

    Returns:
        The built record, or ``None`` if some field stays unset.
    """
    result = ctx.empty
    for partial in partials:
        result = result.combine(partial)
    return result.build()
