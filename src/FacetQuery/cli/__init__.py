"""CLI package for FacetQuery command orchestration.

Developer tooling for inspecting compiled queries: the click interface, the
runner that configures logging and handles failures, and the command logic.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from FacetQuery.cli.runner import CommandRunner
from FacetQuery.cli.ui import cli


def main() -> None:
    """Run FacetQuery CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
