"""Option-set to bool-query compiler.

Builders are grouped by filter family; the assembler folds them together for
one collection schema.
"""

from __future__ import annotations

from FacetQuery.compiler.assembler import Builder, QueryCompiler, native_params
from FacetQuery.compiler.filters import ExcludeAny, MatchAny, MatchAnyField, MatchAnyMember, MatchKeyword
from FacetQuery.compiler.flags import ExcludeWhenSet, RequireWhenSet, TriState
from FacetQuery.compiler.fulltext import PlainTextSearch, SellerTextSearch
from FacetQuery.compiler.options import OptionKind, OptionSchema, OptionSet, OptionSpec
from FacetQuery.compiler.ranges import Bound, temporal_bounds

__all__ = [
    "Bound",
    "Builder",
    "ExcludeAny",
    "ExcludeWhenSet",
    "MatchAny",
    "MatchAnyField",
    "MatchAnyMember",
    "MatchKeyword",
    "OptionKind",
    "OptionSchema",
    "OptionSet",
    "OptionSpec",
    "PlainTextSearch",
    "QueryCompiler",
    "RequireWhenSet",
    "SellerTextSearch",
    "TriState",
    "native_params",
    "temporal_bounds",
]
