"""Compile domain configuration: target collection and preset options."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from FacetQuery.config.common import expect_int, expect_mapping, expect_str, get_required_value, get_section
from FacetQuery.indices.registry import supported_collection_names

_ALLOWED_COLLECTIONS = frozenset(supported_collection_names())


@dataclass(frozen=True, slots=True)
class CompileConfig:
    """Store validated compile settings.

    Attributes:
        collection: Registered collection searched by default.
        indent: JSON indentation of printed bodies; 0 prints one line.
        options: Preset options applied before command-line options, e.g.
            console paging defaults. Passed to the compiler verbatim.
    """

    collection: str
    indent: int = 2
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


def load_compile(raw: Mapping[str, Any]) -> CompileConfig:
    """Load compile domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed compile configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "compile", required=True)
    collection = expect_str(
        get_required_value(section, "collection", "compile.collection"),
        "compile.collection",
    )
    return CompileConfig(
        collection=collection.strip().lower(),
        indent=expect_int(section.get("indent", 2), "compile.indent"),
        options=expect_mapping(section.get("options"), "compile.options"),
    )


def check_compile(config: CompileConfig) -> None:
    """Validate compile domain constraints.

    Option values are not checked here; the compiler rejects bad options
    with errors naming the option key.

    Raises:
        ValueError: If values violate compile constraints.
    """
    if config.collection not in _ALLOWED_COLLECTIONS:
        raise ValueError(f"compile.collection has unknown collection: {config.collection}")
    if config.indent < 0:
        raise ValueError("compile.indent must not be negative")
