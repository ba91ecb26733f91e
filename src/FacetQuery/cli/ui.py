"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from FacetQuery.cli.runner import CommandRunner
from FacetQuery.config import load_config, load_options_file
from FacetQuery.indices.registry import supported_collection_names


@click.group(help="FacetQuery: compile search options into backend bool queries.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    cfg = load_config(config_path)
    ctx.obj = cfg


_collection_option = click.option(
    "--collection",
    type=click.Choice(supported_collection_names(), case_sensitive=False),
    default=None,
    help="Collection to compile for (default: compile.collection).",
)


@cli.command("compile")
@_collection_option
@click.option(
    "--options",
    "options_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="YAML/JSON file with options merged over compile.options.",
)
@click.pass_context
def compile_cmd(ctx: click.Context, collection: str | None, options_path: Path | None) -> None:
    """Compile options and print the request body as JSON.

    Args:
        ctx: Click context.
        collection: Optional collection override.
        options_path: Optional options file.

    Raises:
        click.Abort: When compilation fails.
    """
    options = load_options_file(options_path) if options_path else {}
    runner = CommandRunner(ctx.obj)
    runner.run_compile(action=ctx.command.name, collection=collection, options=options)


@cli.command("options")
@_collection_option
@click.pass_context
def options_cmd(ctx: click.Context, collection: str | None) -> None:
    """List the options a collection recognizes."""
    runner = CommandRunner(ctx.obj)
    runner.run_options(action=ctx.command.name, collection=collection)
