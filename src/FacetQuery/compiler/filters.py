"""Identity, membership and exclusion builders.

An empty identifier list never constrains anything: it compiles to no clause
at all rather than to a clause matching nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from FacetQuery.compiler.options import OptionSet
from FacetQuery.core.clauses import Term, Terms, any_of
from FacetQuery.core.query import NO_CLAUSES, BoolClauses


@dataclass(frozen=True, slots=True)
class MatchAny:
    """Require ``field`` to hold any of the option's values."""

    option: str
    field: str

    def __call__(self, options: OptionSet) -> BoolClauses:
        ids = options[self.option]
        if not ids:
            return NO_CLAUSES
        return BoolClauses(filter=(Terms(self.field, tuple(ids)),))


@dataclass(frozen=True, slots=True)
class MatchKeyword:
    """Require ``field`` to equal the option's single value."""

    option: str
    field: str
    lowercase: bool = False

    def __call__(self, options: OptionSet) -> BoolClauses:
        value = options[self.option]
        if not value:
            return NO_CLAUSES
        if self.lowercase:
            value = value.lower()
        return BoolClauses(filter=(Term(self.field, value),))


@dataclass(frozen=True, slots=True)
class MatchAnyMember:
    """Require at least one member of a grouped option to match.

    ``fields`` maps each member name of the option to the field its ids are
    matched against, e.g. ``{"products": "product_id", "variants":
    "variant_ids"}`` compiles to "(product in A) or (variant in B)".
    """

    option: str
    fields: Mapping[str, str]

    def __call__(self, options: OptionSet) -> BoolClauses:
        group = options[self.option]
        alternatives = tuple(
            Terms(field, tuple(group[member]))
            for member, field in self.fields.items()
            if group.get(member)
        )
        if not alternatives:
            return NO_CLAUSES
        return BoolClauses(filter=(any_of(*alternatives),))


@dataclass(frozen=True, slots=True)
class MatchAnyField:
    """Require the option's ids to appear in at least one of ``fields``."""

    option: str
    fields: tuple[str, ...]

    def __call__(self, options: OptionSet) -> BoolClauses:
        ids = options[self.option]
        if not ids:
            return NO_CLAUSES
        return BoolClauses(filter=(any_of(*(Terms(field, tuple(ids)) for field in self.fields)),))


@dataclass(frozen=True, slots=True)
class ExcludeAny:
    """Exclude records whose ``field`` holds any of the option's ids.

    One set-membership clause covers the whole list.
    """

    option: str
    field: str

    def __call__(self, options: OptionSet) -> BoolClauses:
        ids = options[self.option]
        if not ids:
            return NO_CLAUSES
        return BoolClauses(must_not=(Terms(self.field, tuple(ids)),))
