"""Identifier-or-entity option values.

Callers may pass a plain identifier, a domain entity, or a list mixing both
wherever a collection schema declares a reference option. The only property
the compiler reads from an entity is its ``id``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

Identifier = Union[int, str]


@runtime_checkable
class Identifiable(Protocol):
    """Domain entity exposing a stable identifier."""

    id: Any


@dataclass(frozen=True, slots=True)
class RawId:
    """A plain identifier."""

    value: Identifier

    def ident(self) -> Identifier:
        return self.value


@dataclass(frozen=True, slots=True)
class EntityRef:
    """A domain entity whose ``id`` is the identifier."""

    entity: Identifiable

    def ident(self) -> Identifier:
        return self.entity.id


Reference = Union[RawId, EntityRef]


def to_reference(value: Any) -> Reference:
    """Lift an untagged option value into a tagged reference.

    Args:
        value: Tagged reference, int/str identifier, or entity with ``id``.

    Returns:
        Tagged reference.

    Raises:
        TypeError: If the value is neither an identifier nor an entity.
    """
    if isinstance(value, (RawId, EntityRef)):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not identifiers")
    if isinstance(value, (int, str)):
        return RawId(value)
    if isinstance(value, Identifiable):
        return EntityRef(value)
    raise TypeError(f"expected an identifier or an entity with an id, got {type(value).__name__}")
