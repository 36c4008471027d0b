"""CLI entrypoint for fieldcheck."""

import dataclasses
import importlib
import logging
import sys
from pathlib import Path

import click

from . import __version__


def _load_target(target: str) -> type:
    """Resolve a ``module:ClassName`` reference to a dataclass type."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter("Expected 'module:ClassName'.", param_hint="TARGET")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}", param_hint="TARGET") from e

    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise click.BadParameter(f"'{attr}' not found in module '{module_name}'.", param_hint="TARGET")

    if not (isinstance(obj, type) and dataclasses.is_dataclass(obj)):
        raise click.BadParameter(f"'{target}' is not a dataclass.", param_hint="TARGET")
    return obj


@click.group()
@click.version_option(__version__, prog_name="fieldcheck")
@click.option("--verbose", is_flag=True, help="Log engine activity to stderr")
def cli(verbose: bool) -> None:
    """fieldcheck - Declarative field validation for dataclasses.

    Rules live in field metadata as "<kind>:<parameter>" strings.
    """
    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@cli.command()
@click.argument("target")
@click.argument(
    "data",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Stop at the first invalid record",
)
def check(target: str, data: Path, output_json: bool, fail_fast: bool) -> None:
    """Validate records from a JSON or TOML file.

    TARGET names the dataclass as module:ClassName; each mapping in DATA is
    passed to it as keyword arguments.

    Examples:

        fieldcheck check myapp.models:User users.json

        fieldcheck check myapp.models:User users.toml --json
    """
    from .commands.check import load_records, run_check

    record_type = _load_target(target)
    try:
        payloads = load_records(data)
    except ValueError as e:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are both ValueErrors.
        raise click.ClickException(f"Cannot read {data}: {e}") from e

    exit_code = run_check(record_type, payloads, data, target, output_json=output_json, fail_fast=fail_fast)
    sys.exit(exit_code)


@cli.command()
def kinds() -> None:
    """List the built-in constraint kinds."""
    from .commands.kinds import run_kinds

    sys.exit(run_kinds())


@cli.command()
@click.argument("annotation")
def explain(annotation: str) -> None:
    """Parse one annotation and describe it.

    Examples:

        fieldcheck explain "between:3,17"
    """
    from .commands.kinds import run_explain

    sys.exit(run_explain(annotation))


if __name__ == "__main__":
    cli()
