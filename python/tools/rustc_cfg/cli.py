#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line interface for the rustc_cfg package, powered by Typer.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ToolchainConfig
from .core_types import TYPED_KEYS, ConfigSet
from .exceptions import CfgError
from .invoker import ToolchainInvoker
from .logging_config import setup_logging
from .parser import parse

app = typer.Typer(
    name="rustc-cfg",
    help="Run `rustc --print cfg` and show the parsed configuration predicates.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"rustc-cfg version: {__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
):
    """Manage global options."""
    setup_logging("DEBUG" if verbose else "WARNING")


def _load_config(config_file: Optional[Path], target: Optional[str]) -> ToolchainConfig:
    """Create a ToolchainConfig from a config file, CLI arguments and RUSTC."""
    config = ToolchainConfig()
    if config_file:
        logger.info(f"Loading options from config file: {config_file}")
        config = ToolchainConfig.from_json(config_file)
    if target:
        config = config.with_target(target)
    return config.apply_env()


def _fail(error: Exception) -> None:
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(code=1)


def _render(cfg: ConfigSet, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(cfg.to_dict(), indent=2))
        return

    table = Table(title="Target configuration")
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")
    for key in TYPED_KEYS:
        value = getattr(cfg, key)
        table.add_row(key, "" if value is None else escape(str(value)))
    console.print(table)

    extra = [key for key in cfg.keys() if key not in TYPED_KEYS]
    for key in extra:
        values = cfg.get(key)
        rendered = ", ".join(values) if values else "(set)"
        console.print(f"  [bold]{escape(key)}:[/bold] {escape(rendered)}")


@app.command("show")
def show_command(
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Target triple to query instead of the host."),
    as_json: bool = typer.Option(
        False, "--json", help="Print the configuration as JSON."),
    config: Optional[Path] = typer.Option(
        None, help="Path to JSON configuration file.", exists=True),
):
    """Run the toolchain and show the parsed configuration."""
    try:
        invoker = ToolchainInvoker(_load_config(config, target))
        cfg = parse(invoker.print_cfg())
    except CfgError as e:
        _fail(e)
    _render(cfg, as_json)


@app.command("get")
def get_command(
    key: str = typer.Argument(..., help="Predicate key, e.g. target_feature."),
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Target triple to query instead of the host."),
    config: Optional[Path] = typer.Option(
        None, help="Path to JSON configuration file.", exists=True),
):
    """Print every value reported for KEY, one per line."""
    try:
        invoker = ToolchainInvoker(_load_config(config, target))
        cfg = parse(invoker.print_cfg())
    except CfgError as e:
        _fail(e)

    if not cfg.has(key):
        console.print(f"[yellow]{escape(key)} is not set[/yellow]")
        raise typer.Exit(code=1)
    for value in cfg.get(key):
        typer.echo(value)


@app.command("parse")
def parse_command(
    input_file: str = typer.Argument(
        ..., help="File holding captured `--print cfg` output, or - for stdin."),
    as_json: bool = typer.Option(
        False, "--json", help="Print the configuration as JSON."),
):
    """Parse previously captured output without running the toolchain."""
    try:
        if input_file == "-":
            raw_text = sys.stdin.read()
        else:
            raw_text = Path(input_file).read_text(encoding="utf-8")
        cfg = parse(raw_text)
    except (CfgError, OSError, UnicodeDecodeError) as e:
        _fail(e)
    _render(cfg, as_json)


@app.command("targets")
def targets_command(
    config: Optional[Path] = typer.Option(
        None, help="Path to JSON configuration file.", exists=True),
):
    """List the target triples supported by the toolchain."""
    try:
        invoker = ToolchainInvoker(_load_config(config, None))
        targets = invoker.print_target_list()
    except CfgError as e:
        _fail(e)
    for target in targets:
        typer.echo(target)


def main():
    app()


if __name__ == "__main__":
    main()
