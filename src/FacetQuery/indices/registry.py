"""Collection registry for query compilers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from FacetQuery.compiler.assembler import QueryCompiler
    from FacetQuery.core.query import CompiledQuery


def get_compiler(collection: str) -> QueryCompiler:
    """Return the query compiler registered for a collection name.

    Args:
        collection: Collection identifier, e.g. ``"purchases"``.

    Returns:
        QueryCompiler: Shared, stateless compiler for the collection.

    Raises:
        ValueError: If ``collection`` is not registered.
    """
    registry = _compilers()
    compiler = registry.get(collection.strip().lower())
    if compiler is None:
        raise ValueError(f"Unsupported collection: {collection}")
    return compiler


def supported_collection_names() -> tuple[str, ...]:
    """Return all registered collection names in registry order."""
    return tuple(_compilers().keys())


def _compilers() -> dict[str, QueryCompiler]:
    """Return collection compiler registry."""
    from FacetQuery.indices.installments import installment_compiler
    from FacetQuery.indices.purchases import purchase_compiler

    return {
        "purchases": purchase_compiler,
        "installments": installment_compiler,
    }


def compile_query(collection: str, options: Mapping[str, Any] | None = None, **kwargs: Any) -> CompiledQuery:
    """Compile options for a registered collection.

    Args:
        collection: Collection identifier.
        options: Option mapping.
        **kwargs: Further options, overriding keys of ``options``.

    Returns:
        Compiled query.
    """
    return get_compiler(collection).compile(options, **kwargs)
