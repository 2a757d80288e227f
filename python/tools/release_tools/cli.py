#!/usr/bin/env python3
"""
Command-line interface for the release tools, powered by Typer.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, get_tool_info
from .api import decode_version_text, encode_datetime, encode_datetime3
from .config import StampConfig, StampConfigLoader
from .exceptions import ReleaseToolsError
from .logging_config import setup_logging
from .models import ClockKind, DecodedInstant4
from .template import render_template_file, version_placeholders

app = typer.Typer(
    name="release-tools",
    help="Encode build timestamps into version numbers and stamp them into files.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"release-tools version: {__version__}")
        raise typer.Exit()


def _fail(error: ReleaseToolsError) -> typer.Exit:
    logger.debug(f"Command failed: {error.to_dict()}")
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    return typer.Exit(code=1)


def _parse_instant(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(
            f"{value!r} is not an ISO-8601 date/time", param_hint="--at"
        )


def _settings(ctx: typer.Context, **overrides) -> StampConfig:
    config: StampConfig = ctx.obj or StampConfig()
    return config.merged(**overrides)


@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file."),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a JSON/YAML/TOML configuration file."
    ),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
):
    """Manage global options."""
    setup_logging("DEBUG" if verbose else "INFO", log_file)
    try:
        ctx.obj = StampConfigLoader.load_from_file(config) if config else StampConfig()
    except ReleaseToolsError as e:
        raise _fail(e)


@app.command("encode")
def encode_command(
    ctx: typer.Context,
    build: Optional[int] = typer.Option(None, "--build", "-b", help="Build component."),
    major: Optional[int] = typer.Option(None, "--major", "-m", help="Major component (4-part only)."),
    at: Optional[str] = typer.Option(None, "--at", help="ISO-8601 moment to encode. [default: now]"),
    local: bool = typer.Option(False, "--local", help="Interpret a naive --at as local time."),
    parts: Optional[int] = typer.Option(None, "--parts", help="Emit a 3- or 4-part version."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """Encode a moment into a version number."""
    instant = _parse_instant(at)
    try:
        settings = _settings(
            ctx, build=build, major=major, parts=parts, clock=ClockKind.LOCAL if local else None
        )
        if settings.parts == 3:
            version = encode_datetime3(settings.build, instant, settings.clock)
        else:
            version = encode_datetime(settings.build, settings.major, instant, settings.clock)
    except ReleaseToolsError as e:
        raise _fail(e)

    if as_json:
        typer.echo(json.dumps(version.to_dict()))
    else:
        typer.echo(version.text)


@app.command("decode")
def decode_command(
    version: str = typer.Argument(..., help="3- or 4-part version, e.g. 1.0.20250.1"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """Decode a version number back into the UTC moment it encodes."""
    try:
        decoded = decode_version_text(version)
    except ReleaseToolsError as e:
        raise _fail(e)

    if as_json:
        payload = {"version": version.strip(), **decoded.to_dict()}
        typer.echo(json.dumps(payload))
        return

    table = Table(title=f"Version {escape(version.strip())}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Build", str(decoded.build))
    if isinstance(decoded, DecodedInstant4):
        table.add_row("Major", str(decoded.major))
    table.add_row("Computed (UTC)", decoded.computed.isoformat())
    console.print(table)


@app.command("stamp")
def stamp_command(
    ctx: typer.Context,
    template: Path = typer.Argument(..., help="Template file containing {{Name}} placeholders."),
    output: Path = typer.Argument(..., help="File to write."),
    build: Optional[int] = typer.Option(None, "--build", "-b", help="Build component."),
    major: Optional[int] = typer.Option(None, "--major", "-m", help="Major component (4-part only)."),
    at: Optional[str] = typer.Option(None, "--at", help="ISO-8601 moment to encode. [default: now]"),
    local: bool = typer.Option(False, "--local", help="Interpret a naive --at as local time."),
    parts: Optional[int] = typer.Option(None, "--parts", help="Stamp a 3- or 4-part version."),
    values: Optional[List[str]] = typer.Option(
        None, "--set", help="Extra placeholder as NAME=VALUE. May be repeated."
    ),
    lenient: bool = typer.Option(False, "--lenient", help="Leave unknown placeholders untouched."),
):
    """Encode a version and substitute it into a template file."""
    instant = _parse_instant(at)
    extra = {}
    for item in values or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"{item!r} is not NAME=VALUE", param_hint="--set")
        extra[name] = value

    try:
        settings = _settings(
            ctx,
            build=build,
            major=major,
            parts=parts,
            clock=ClockKind.LOCAL if local else None,
            strict_placeholders=False if lenient else None,
        )
        if settings.parts == 3:
            version = encode_datetime3(settings.build, instant, settings.clock)
        else:
            version = encode_datetime(settings.build, settings.major, instant, settings.clock)
        placeholders = version_placeholders(version, {**settings.placeholders, **extra})
        written = render_template_file(
            template, output, placeholders, strict=settings.strict_placeholders
        )
    except ReleaseToolsError as e:
        raise _fail(e)

    console.print(f"[green]✔[/green] Stamped {version.text} into {escape(str(written))}")


@app.command("info")
def info_command():
    """Show metadata about this tool."""
    info = get_tool_info()
    console.print(f"[bold cyan]{info['name']}[/bold cyan] {info['version']}")
    console.print(info["description"])
    for name in info["functions"]:
        console.print(f"  - {name}")


def main():
    app()


if __name__ == "__main__":
    main()
