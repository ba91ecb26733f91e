"""Installment (scheduled/published seller message) search options and builders."""

from __future__ import annotations

from dataclasses import dataclass

from FacetQuery.compiler.assembler import QueryCompiler
from FacetQuery.compiler.filters import ExcludeAny, MatchAny
from FacetQuery.compiler.flags import ExcludeWhenSet, TriState
from FacetQuery.compiler.fulltext import PlainTextSearch
from FacetQuery.compiler.options import (
    NATIVE_OPTIONS,
    OptionSchema,
    OptionSet,
    flag,
    keyword,
    refs,
    text,
    time,
    tristate,
    values,
)
from FacetQuery.compiler.ranges import temporal_bounds
from FacetQuery.core.clauses import BoolGroup, Clause, Exists, Term
from FacetQuery.core.query import NO_CLAUSES, BoolClauses

COLLECTION = "installments"

SELECTED_FLAGS = "selected_flags"

PUBLISHED = "published"
SCHEDULED = "scheduled"
DRAFT = "draft"

INSTALLMENT_SCHEMA = OptionSchema(
    COLLECTION,
    (
        refs("seller"),
        refs("product"),
        refs("variant"),
        refs("workflow"),
        values("installment_type"),
        refs("exclude_installment", family="exclusion"),
        keyword("status", choices=(PUBLISHED, SCHEDULED, DRAFT)),
        flag("exclude_deleted"),
        flag("exclude_workflow_installments"),
        tristate("shown_on_profile"),
        tristate("send_emails"),
        time("created_after"),
        time("created_on_or_after"),
        time("created_before"),
        time("created_on_or_before"),
        time("published_after"),
        time("published_on_or_after"),
        time("published_before"),
        time("published_on_or_before"),
        text("query"),
    )
    + NATIVE_OPTIONS,
)

_IS_PUBLISHED = Exists("published_at")
_READY_TO_PUBLISH = Term(SELECTED_FLAGS, "ready_to_publish")

# A scheduled installment is ready to publish but not published yet; a draft
# is neither.
_STATUS_CLAUSES: dict[str, Clause] = {
    PUBLISHED: _IS_PUBLISHED,
    SCHEDULED: BoolGroup(must=(_READY_TO_PUBLISH,), must_not=(_IS_PUBLISHED,)),
    DRAFT: BoolGroup(must_not=(_IS_PUBLISHED, _READY_TO_PUBLISH)),
}


@dataclass(frozen=True, slots=True)
class PublicationStatus:
    """Restrict installments to one publication status."""

    option: str = "status"

    def __call__(self, options: OptionSet) -> BoolClauses:
        status = options[self.option]
        if status is None:
            return NO_CLAUSES
        return BoolClauses(filter=(_STATUS_CLAUSES[status],))


INSTALLMENT_BUILDERS = (
    MatchAny("seller", "seller_id"),
    MatchAny("product", "link_id"),
    MatchAny("variant", "base_variant_id"),
    MatchAny("workflow", "workflow_id"),
    MatchAny("installment_type", "installment_type"),
    ExcludeAny("exclude_installment", "id"),
    PublicationStatus(),
    ExcludeWhenSet("exclude_deleted", Exists("deleted_at")),
    ExcludeWhenSet("exclude_workflow_installments", Exists("workflow_id")),
    TriState("shown_on_profile", Term(SELECTED_FLAGS, "shown_on_profile")),
    TriState("send_emails", Term(SELECTED_FLAGS, "send_emails")),
    *temporal_bounds("created", "created_at"),
    *temporal_bounds("published", "published_at"),
    PlainTextSearch("query", ("name", "message")),
)

installment_compiler = QueryCompiler(INSTALLMENT_SCHEMA, INSTALLMENT_BUILDERS)
