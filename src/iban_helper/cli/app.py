from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import load_config
from ..core.logging_config import setup_logging
from ..detection.errors import IbanError, RegistryError
from ..detection.iban import generate_iban, get_fields, normalize_iban, verify_iban
from ..registry.json_registry import JsonRegistry
from ..registry.storage import IbanStorage
from .version import get_version

cli = typer.Typer(add_completion=False, help="IBAN generation and validation CLI")
console = Console()
log = logging.getLogger(__name__)


def _fail(msg: str) -> None:
    console.print(f"[red]ERROR:[/red] {escape(msg)}", highlight=False)
    raise typer.Exit(code=1)


@cli.callback()
def main_options(
    ctx: typer.Context,
    registry: Optional[Path] = typer.Option(None, "--registry", "-r", help="JSON registry file (overrides IBAN_REGISTRY_PATH)"),
    extend: bool = typer.Option(False, "--extend", help="Overlay the JSON registry on the built-in countries"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    log_json: bool = typer.Option(False, "--log-json", help="Log as JSON lines"),
) -> None:
    cfg = load_config()
    setup_logging("DEBUG" if verbose else cfg.log_level, json_lines=log_json or cfg.log_json)
    if ctx.invoked_subcommand == "version":
        return

    try:
        if registry is not None:
            ctx.obj = JsonRegistry(registry, extend=extend or cfg.registry_extend)
        else:
            ctx.obj = cfg.build_registry()
    except RegistryError as e:
        _fail(str(e))
    log.debug("registry ready", extra={"command": ctx.invoked_subcommand})


@cli.command("generate", help="Build an IBAN from a country code and BBAN parts.")
def generate(
    ctx: typer.Context,
    country: str = typer.Argument(..., help="ISO 3166 alpha-2 country code"),
    data: List[str] = typer.Argument(..., help="BBAN, whole or as ordered parts"),
) -> None:
    try:
        iban = generate_iban(country, data, ctx.obj)
    except IbanError as e:
        _fail(str(e))
    console.print(iban, highlight=False)


@cli.command("fields", help="Split an IBAN into its named fields.")
def fields(
    ctx: typer.Context,
    iban: List[str] = typer.Argument(..., help="IBAN (spaces allowed)"),
) -> None:
    try:
        values = get_fields(normalize_iban(" ".join(iban)), ctx.obj)
    except IbanError as e:
        _fail(str(e))
    table = Table("field", "value")
    for name, value in values.items():
        table.add_row(name, value)
    console.print(table)


@cli.command("validate", help="Check IBAN structure and check digits.")
def validate(
    ctx: typer.Context,
    iban: List[str] = typer.Argument(..., help="IBAN (spaces allowed)"),
) -> None:
    value = normalize_iban(" ".join(iban))
    try:
        verify_iban(value, ctx.obj)
    except IbanError as e:
        console.print(f"[red]INVALID[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)
    console.print(f"[green]OK[/green] {value}", highlight=False)


@cli.command("countries", help="List countries known to the registry.")
def countries(ctx: typer.Context) -> None:
    reg = ctx.obj
    if not isinstance(reg, IbanStorage):
        _fail("registry does not support listing countries")
    table = Table("code", "name", "length", "fields")
    for cc in reg.countries():
        fmt = reg.get_format(cc)
        table.add_row(cc, fmt.name, str(fmt.length), ", ".join(n for n, _ in fmt.fields))
    console.print(table)
    console.print(f"{len(reg)} countries")


@cli.command("version", help="Print the tool version.")
def version() -> None:
    console.print(f"iban-helper v{get_version()}", highlight=False)


def main() -> None:
    cli()


if __name__ == "__main__":
    cli()
