"""Boolean query clause model.

Every clause is an immutable value that renders itself into the search
backend's native bool DSL through ``to_dict``. The set of variants is closed:

- `Term`: exact match of one value
- `Terms`: set membership (field value is any of the listed values)
- `Exists`: field is present on the record
- `Range`: one bound on a numeric or temporal field
- `MultiMatch`: relevance-scored text match across fields
- `BoolGroup`: nested boolean group
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

RANGE_OPERATORS = frozenset({"gt", "gte", "lt", "lte"})

Scalar = Union[str, int, float, bool]


def _check_field(field: str) -> None:
    if not isinstance(field, str) or not field.strip():
        raise ValueError("Clause field must be a non-empty string")


@dataclass(frozen=True, slots=True)
class Term:
    """Exact match of ``value`` in ``field``."""

    field: str
    value: Scalar

    def __post_init__(self) -> None:
        _check_field(self.field)

    def to_dict(self) -> dict[str, Any]:
        return {"term": {self.field: self.value}}


@dataclass(frozen=True, slots=True)
class Terms:
    """Set membership: ``field`` matches any of ``values``."""

    field: str
    values: tuple[Scalar, ...]

    def __post_init__(self) -> None:
        _check_field(self.field)
        if not self.values:
            raise ValueError(f"Terms clause on {self.field} needs at least one value")

    def to_dict(self) -> dict[str, Any]:
        return {"terms": {self.field: list(self.values)}}


@dataclass(frozen=True, slots=True)
class Exists:
    """Presence of ``field`` on a record."""

    field: str

    def __post_init__(self) -> None:
        _check_field(self.field)

    def to_dict(self) -> dict[str, Any]:
        return {"exists": {"field": self.field}}


@dataclass(frozen=True, slots=True)
class Range:
    """One bound on ``field``.

    Attributes:
        field: Numeric or temporal field.
        op: One of gt/gte/lt/lte. gt/lt are exclusive, gte/lte inclusive.
        value: Bound value. Temporal bounds are canonical UTC strings.
    """

    field: str
    op: str
    value: Scalar

    def __post_init__(self) -> None:
        _check_field(self.field)
        if self.op not in RANGE_OPERATORS:
            raise ValueError(f"Unsupported range operator: {self.op}")

    @property
    def inclusive(self) -> bool:
        return self.op in ("gte", "lte")

    def to_dict(self) -> dict[str, Any]:
        return {"range": {self.field: {self.op: self.value}}}


@dataclass(frozen=True, slots=True)
class MultiMatch:
    """Relevance-scored text match of ``query`` across ``fields``.

    ``operator="and"`` requires every term to match inside a field; ``None``
    leaves the backend's default (any term) in effect.
    """

    query: str
    fields: tuple[str, ...]
    operator: str | None = None

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("MultiMatch clause needs at least one field")
        for field in self.fields:
            _check_field(field)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query, "fields": list(self.fields)}
        if self.operator is not None:
            body["operator"] = self.operator
        return {"multi_match": body}


@dataclass(frozen=True, slots=True)
class BoolGroup:
    """Nested boolean group.

    A group with only ``should`` members and ``minimum_should_match=1`` is an
    "at least one of" disjunction.
    """

    must: tuple["Clause", ...] = ()
    must_not: tuple["Clause", ...] = ()
    should: tuple["Clause", ...] = ()
    minimum_should_match: int | None = None

    def __post_init__(self) -> None:
        if not (self.must or self.must_not or self.should):
            raise ValueError("BoolGroup needs at least one member clause")

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.must:
            body["must"] = [clause.to_dict() for clause in self.must]
        if self.must_not:
            body["must_not"] = [clause.to_dict() for clause in self.must_not]
        if self.should:
            body["should"] = [clause.to_dict() for clause in self.should]
        if self.minimum_should_match is not None:
            body["minimum_should_match"] = self.minimum_should_match
        return {"bool": body}


def any_of(*clauses: "Clause") -> BoolGroup:
    """Return an "at least one of" group over ``clauses``."""
    return BoolGroup(should=tuple(clauses), minimum_should_match=1)


Clause = Union[Term, Terms, Exists, Range, MultiMatch, BoolGroup]
