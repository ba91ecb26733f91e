from __future__ import annotations

import copy
from dataclasses import dataclass, fields
from typing import Any, Mapping

from FacetQuery.core.clauses import Clause


@dataclass(frozen=True, slots=True)
class BoolClauses:
    """The four clause lists of a boolean query.

    The keys mirror the backend's bool query sections:

    - `filter`: required, does not affect relevance
    - `must_not`: excluded, none may match
    - `must`: required and scored
    - `should`: optional and scored, at least `minimum_should_match` must match

    Builders return one of these holding only their own clauses. The
    compiler folds them together with `merge`.
    """

    filter: tuple[Clause, ...] = ()
    must_not: tuple[Clause, ...] = ()
    must: tuple[Clause, ...] = ()
    should: tuple[Clause, ...] = ()
    minimum_should_match: int | None = None

    def merge(self, other: BoolClauses) -> BoolClauses:
        """Return a new value with ``other``'s clauses appended list-wise."""
        minimum = other.minimum_should_match
        if minimum is None:
            minimum = self.minimum_should_match
        elif self.minimum_should_match is not None:
            minimum = max(minimum, self.minimum_should_match)
        return BoolClauses(
            filter=self.filter + other.filter,
            must_not=self.must_not + other.must_not,
            must=self.must + other.must,
            should=self.should + other.should,
            minimum_should_match=minimum,
        )

    def is_empty(self) -> bool:
        return not (self.filter or self.must_not or self.must or self.should)

    def count(self) -> int:
        return len(self.filter) + len(self.must_not) + len(self.must) + len(self.should)

    def to_dict(self) -> dict[str, Any]:
        """Render as the body of a ``bool`` query, omitting empty sections."""
        body: dict[str, Any] = {}
        for key in ("filter", "must_not", "must", "should"):
            clauses = getattr(self, key)
            if clauses:
                body[key] = [clause.to_dict() for clause in clauses]
        if self.should:
            body["minimum_should_match"] = self.minimum_should_match or 1
        return body


NO_CLAUSES = BoolClauses()


# Option name -> backend parameter name.
NATIVE_PARAM_NAMES: Mapping[str, str] = {
    "offset": "from",
    "limit": "size",
    "sort": "sort",
    "source": "_source",
    "aggs": "aggs",
    "track_total_hits": "track_total_hits",
}

@dataclass(frozen=True, slots=True)
class NativeParams:
    """Backend execution controls passed through untouched.

    A slot is ``None`` unless the caller supplied it; ``None`` slots are not
    rendered, so the backend's own defaults stay in effect. Values are copied
    on the way in and on the way out, so neither the caller's objects nor a
    rendered body share state with the compiled query.
    """

    offset: int | None = None
    limit: int | None = None
    sort: Any = None
    source: Any = None
    aggs: Any = None
    track_total_hits: Any = None

    def __post_init__(self) -> None:
        for slot in fields(self):
            object.__setattr__(self, slot.name, copy.deepcopy(getattr(self, slot.name)))

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for slot in fields(self):
            value = getattr(self, slot.name)
            if value is not None:
                body[NATIVE_PARAM_NAMES[slot.name]] = copy.deepcopy(value)
        return body


@dataclass(frozen=True, slots=True)
class CompiledQuery:
    """Output of one compile call.

    Attributes:
        collection: Name of the searched record collection.
        clauses: Folded clause lists of every builder.
        native: Pass-through execution controls.
    """

    collection: str
    clauses: BoolClauses
    native: NativeParams = NativeParams()

    @property
    def query(self) -> dict[str, Any]:
        """Return the ``query`` part of the request body."""
        return {"bool": self.clauses.to_dict()}

    def to_body(self) -> dict[str, Any]:
        """Render a fresh, JSON-compatible request body."""
        body: dict[str, Any] = {"query": self.query}
        body.update(self.native.to_dict())
        return body
