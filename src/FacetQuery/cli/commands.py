"""Command implementations for FacetQuery CLI.

Encapsulates command logic, separated from CLI parameter handling and
output formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from FacetQuery.compiler.assembler import QueryCompiler
from FacetQuery.config import AppConfig, merge_config_dicts
from FacetQuery.utils.log import log


@dataclass(slots=True)
class CompileCommand:
    """Compile preset + supplied options and emit the request body as JSON."""

    config: AppConfig
    compiler: QueryCompiler
    options: Mapping[str, Any] = field(default_factory=dict)
    echo: Callable[[str], None] = print

    def execute(self) -> dict[str, Any]:
        merged = merge_config_dicts(self.config.compile.options, self.options)
        log.info("Compiling %s query with options: %s", self.compiler.collection, ", ".join(sorted(merged)) or "-")

        compiled = self.compiler.compile(merged)
        clauses = compiled.clauses
        log.info(
            "Compiled clauses: filter=%d must_not=%d must=%d should=%d",
            len(clauses.filter),
            len(clauses.must_not),
            len(clauses.must),
            len(clauses.should),
        )

        body = compiled.to_body()
        indent = self.config.compile.indent or None
        self.echo(json.dumps(body, indent=indent, ensure_ascii=False))
        return body


@dataclass(slots=True)
class OptionsCommand:
    """List the options a collection recognizes with their kinds."""

    compiler: QueryCompiler
    echo: Callable[[str], None] = print

    def execute(self) -> None:
        schema = self.compiler.schema
        width = max(len(name) for name in schema.names())
        for spec in schema.specs:
            line = f"{spec.name.ljust(width)}  {spec.kind.value}"
            if spec.members:
                line += f" [{', '.join(spec.members)}]"
            if spec.choices:
                line += f" ({' | '.join(spec.choices)})"
            self.echo(line)
