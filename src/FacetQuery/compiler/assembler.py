"""Query assembler.

Normalizes an option set against a collection schema, runs every builder of
the collection in its declared order, folds their clauses together and
attaches the pass-through execution controls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from FacetQuery.compiler.options import OptionSchema, OptionSet
from FacetQuery.core.query import NO_CLAUSES, BoolClauses, CompiledQuery, NativeParams
from FacetQuery.utils.log import log


class Builder(Protocol):
    """Pure function contributing the clauses of one filter dimension."""

    option: str

    def __call__(self, options: OptionSet) -> BoolClauses:
        """Return this builder's clauses for the normalized options."""
        raise NotImplementedError


def native_params(options: OptionSet) -> NativeParams:
    """Copy supplied execution controls; absent ones stay ``None``."""
    return NativeParams(
        offset=options.get("offset"),
        limit=options.get("limit"),
        sort=options.get("sort"),
        source=options.get("source"),
        aggs=options.get("aggs"),
        track_total_hits=options.get("track_total_hits"),
    )


@dataclass(frozen=True, slots=True)
class QueryCompiler:
    """Compiler for one record collection.

    Holds no state besides its schema and builder table, so a single instance
    can be shared by concurrent callers.
    """

    schema: OptionSchema
    builders: Sequence[Builder]

    def __post_init__(self) -> None:
        object.__setattr__(self, "builders", tuple(self.builders))
        known = set(self.schema.names())
        for builder in self.builders:
            if builder.option not in known:
                raise ValueError(
                    f"Builder for {self.schema.name} reads undeclared option: {builder.option}"
                )

    @property
    def collection(self) -> str:
        return self.schema.name

    def compile(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> CompiledQuery:
        """Compile options into a query for this collection.

        Args:
            options: Option mapping.
            **kwargs: Further options, overriding keys of ``options``.

        Returns:
            Compiled query.

        Raises:
            InvalidOptionError: If any option is unknown or invalid. Nothing
                is compiled in that case.
        """
        supplied = dict(options or {})
        supplied.update(kwargs)
        normalized = self.schema.normalize(supplied)

        clauses = NO_CLAUSES
        for builder in self.builders:
            clauses = clauses.merge(builder(normalized))

        compiled = CompiledQuery(
            collection=self.collection,
            clauses=clauses,
            native=native_params(normalized),
        )
        log.debug(
            "Compiled %s query: options=%s filter=%d must_not=%d must=%d should=%d",
            self.collection,
            sorted(supplied),
            len(clauses.filter),
            len(clauses.must_not),
            len(clauses.must),
            len(clauses.should),
        )
        return compiled

    def body(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
        """Compile and render the request body in one step."""
        return self.compile(options, **kwargs).to_body()
