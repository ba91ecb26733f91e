"""Boolean flag builders.

Two-state flags (`RequireWhenSet`, `ExcludeWhenSet`) are inert when ``False``.
Tri-state flags (`TriState`) are inert only when absent: ``False`` is an
active constraint that excludes the flag's condition.

The condition is a clause supplied per flag, so each collection decides
whether a flag is a literal boolean field (``Term(field, True)``), a marker
among the record's tags (``Term("selected_flags", marker)``) or the presence
of a field (``Exists(field)``).
"""

from __future__ import annotations

from dataclasses import dataclass

from FacetQuery.compiler.options import OptionSet
from FacetQuery.core.clauses import Clause
from FacetQuery.core.query import NO_CLAUSES, BoolClauses

REQUIRED_UNSCORED = "filter"
REQUIRED_SCORED = "must"


@dataclass(frozen=True, slots=True)
class RequireWhenSet:
    """When the flag is ``True``, require ``clause`` without scoring it."""

    option: str
    clause: Clause

    def __call__(self, options: OptionSet) -> BoolClauses:
        if not options[self.option]:
            return NO_CLAUSES
        return BoolClauses(filter=(self.clause,))


@dataclass(frozen=True, slots=True)
class ExcludeWhenSet:
    """When the flag is ``True``, exclude records matching ``clause``."""

    option: str
    clause: Clause

    def __call__(self, options: OptionSet) -> BoolClauses:
        if not options[self.option]:
            return NO_CLAUSES
        return BoolClauses(must_not=(self.clause,))


@dataclass(frozen=True, slots=True)
class TriState:
    """``True`` requires ``clause``, ``False`` excludes it, ``None`` is inert.

    Attributes:
        option: Tri-state option key.
        clause: Condition the flag asserts.
        required_in: Clause list used for ``True``: ``"filter"`` or ``"must"``.
    """

    option: str
    clause: Clause
    required_in: str = REQUIRED_UNSCORED

    def __post_init__(self) -> None:
        if self.required_in not in (REQUIRED_UNSCORED, REQUIRED_SCORED):
            raise ValueError(f"Unsupported clause list for {self.option}: {self.required_in}")

    def __call__(self, options: OptionSet) -> BoolClauses:
        state = options[self.option]
        if state is None:
            return NO_CLAUSES
        if state is False:
            return BoolClauses(must_not=(self.clause,))
        if self.required_in == REQUIRED_SCORED:
            return BoolClauses(must=(self.clause,))
        return BoolClauses(filter=(self.clause,))
