"""Command runner for coordinating CLI execution.

Manages logging configuration, compiler lookup and error handling for
command execution.
"""

from __future__ import annotations

from typing import Any, Mapping

import click

from FacetQuery.cli.commands import CompileCommand, OptionsCommand
from FacetQuery.config import AppConfig
from FacetQuery.core.errors import InvalidOptionError
from FacetQuery.indices.registry import get_compiler
from FacetQuery.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, compiler selection, and error handling
    for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def _configure(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_compile(
        self,
        action: str,
        *,
        collection: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Compile a query and print its body.

        Args:
            action: The CLI command name (e.g., 'compile').
            collection: Collection override; defaults to ``compile.collection``.
            options: Options merged over the configured presets.

        Returns:
            Rendered request body.

        Raises:
            click.Abort: When compilation fails.
        """
        self._configure(action)
        try:
            compiler = get_compiler(collection or self.config.compile.collection)
            command = CompileCommand(
                config=self.config,
                compiler=compiler,
                options=dict(options or {}),
                echo=click.echo,
            )
            return command.execute()
        except InvalidOptionError as e:
            log.error("Invalid option %s (%s): %s", e.option, e.family, e)
            raise click.Abort from e
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Compile failed: %s", e)
            raise click.Abort from e

    def run_options(self, action: str, *, collection: str | None = None) -> None:
        """Print the options recognized by a collection.

        Raises:
            click.Abort: When the collection is unknown.
        """
        self._configure(action)
        try:
            compiler = get_compiler(collection or self.config.compile.collection)
        except ValueError as e:
            log.error("%s", e)
            raise click.Abort from e
        OptionsCommand(compiler=compiler, echo=click.echo).execute()
