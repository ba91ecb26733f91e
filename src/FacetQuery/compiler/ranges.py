"""Numeric and temporal range builders.

Each bound is its own option and compiles to its own range clause, so an
inclusive lower bound and an exclusive upper bound on the same field can be
combined freely. A bound that is not supplied is never synthesized.
"""

from __future__ import annotations

from dataclasses import dataclass

from FacetQuery.compiler.options import OptionSet
from FacetQuery.core.clauses import RANGE_OPERATORS, Range
from FacetQuery.core.query import NO_CLAUSES, BoolClauses


@dataclass(frozen=True, slots=True)
class Bound:
    """One bound on ``field``; ``op`` is gt/gte (lower) or lt/lte (upper).

    Temporal options already hold canonical UTC strings after normalization,
    so numeric and temporal bounds share this builder.
    """

    option: str
    field: str
    op: str

    def __post_init__(self) -> None:
        if self.op not in RANGE_OPERATORS:
            raise ValueError(f"Unsupported range operator for {self.option}: {self.op}")

    def __call__(self, options: OptionSet) -> BoolClauses:
        value = options[self.option]
        if value is None:
            return NO_CLAUSES
        return BoolClauses(must=(Range(self.field, self.op, value),))


def temporal_bounds(prefix: str, field: str) -> tuple[Bound, ...]:
    """Return the after/on-or-after/before/on-or-before bounds of ``field``.

    Args:
        prefix: Option name prefix, e.g. ``"created"`` for ``created_after``.
        field: Temporal field the bounds apply to.
    """
    return (
        Bound(f"{prefix}_after", field, "gt"),
        Bound(f"{prefix}_on_or_after", field, "gte"),
        Bound(f"{prefix}_before", field, "lt"),
        Bound(f"{prefix}_on_or_before", field, "lte"),
    )
