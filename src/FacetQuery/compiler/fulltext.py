"""Free-text relevance builders.

`SellerTextSearch` handles the seller-side search box, where the input may be
a customer name, an email address, or a license key:

- ``"jane doe"`` (wrapped in double quotes): every word must match inside the
  name field. No other heuristic applies.
- anything else: a fuzzy match across the name/email fields, plus exact
  matches on the raw email fields when the input contains ``@`` and on the
  license field when the input looks like a license key. At least one of
  these alternatives must match.

`PlainTextSearch` is the fuzzy multi-field match alone, used by collections
and contexts that have no identifier heuristics.

Patterns are detected on the trimmed, lower-cased input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from FacetQuery.compiler.options import OptionSet
from FacetQuery.core.clauses import Clause, MultiMatch, Term, any_of
from FacetQuery.core.query import NO_CLAUSES, BoolClauses

_RE_QUOTED = re.compile(r'"(.*)"', re.DOTALL)
_RE_LICENSE_KEY = re.compile(r"[a-f0-9]{8}-[a-f0-9]{8}-[a-f0-9]{8}-[a-f0-9]{8}")


def _prepare(raw: str | None) -> str:
    if raw is None:
        return ""
    return raw.strip().lower()


@dataclass(frozen=True, slots=True)
class SellerTextSearch:
    """Quoted-phrase / heuristic text search.

    Attributes:
        option: Text option key.
        phrase_field: Field matched with all-terms-must-match for quoted input.
        fields: Fields of the fuzzy match, in order.
        email_fields: Raw email fields matched exactly when input has ``@``.
        serial_field: License field matched exactly (upper-cased) when the
            input looks like a license key.
    """

    option: str
    phrase_field: str
    fields: tuple[str, ...]
    email_fields: tuple[str, ...] = ()
    serial_field: str | None = None

    def __call__(self, options: OptionSet) -> BoolClauses:
        query = _prepare(options[self.option])
        if not query:
            return NO_CLAUSES

        quoted = _RE_QUOTED.fullmatch(query)
        if quoted:
            phrase = quoted.group(1).strip()
            if not phrase:
                return NO_CLAUSES
            return BoolClauses(must=(MultiMatch(phrase, (self.phrase_field,), operator="and"),))

        alternatives: list[Clause] = [MultiMatch(query, self.fields)]
        if "@" in query:
            alternatives.extend(Term(field, query) for field in self.email_fields)
        if self.serial_field and _RE_LICENSE_KEY.fullmatch(query):
            alternatives.append(Term(self.serial_field, query.upper()))
        return BoolClauses(must=(any_of(*alternatives),))


@dataclass(frozen=True, slots=True)
class PlainTextSearch:
    """Fuzzy match of the option's text across ``fields``."""

    option: str
    fields: tuple[str, ...]

    def __call__(self, options: OptionSet) -> BoolClauses:
        query = _prepare(options[self.option])
        if not query:
            return NO_CLAUSES
        return BoolClauses(must=(MultiMatch(query, self.fields),))
