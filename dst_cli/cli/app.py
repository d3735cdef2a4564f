"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from dst_cli import __version__
from dst_cli.api.client import ArchiveClient
from dst_cli.core.fetcher import FIRST_YEAR, DstFetcher
from dst_cli.exceptions import DstCliError
from dst_cli.models.config import ArchiveConfig
from dst_cli.storage.config_manager import ConfigManager
from dst_cli.storage.output import write_output

from .formatters import format_error_with_suggestions, print_config, print_plan

# Fetched data goes to stdout; everything else goes to stderr.
console = Console(stderr=True)

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("dst_cli")

app = typer.Typer(
    name="dst",
    help=(
        "Download Disturbance Storm Time (DST) index data (final, provisional,"
        f" real-time) from the Kyoto WDC archive, {FIRST_YEAR} up to today."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "dst-cli"


CONFIG_FILE = get_config_dir() / "config.ini"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dst-cli {__version__}")
        raise typer.Exit()


def _fail(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")
    raise typer.Exit(code=1)


async def _offline_fetch(url: str) -> bytes:
    raise RuntimeError(f"Dry run must not request {url}")


async def _download(
    config: ArchiveConfig, start_year: int | None, end_year: int | None
) -> bytes:
    async with ArchiveClient(config) as client:
        fetcher = DstFetcher(
            client.fetch, period=config.period, base_url=config.base_url
        )
        with console.status("[cyan]Downloading DST index data...[/cyan]"):
            if start_year is None or end_year is None:
                return await fetcher.fetch_all()
            return await fetcher.fetch_range(start_year, end_year)


@app.command()
def main(
    ctx: typer.Context,
    all_years: bool = typer.Option(
        False,
        "--all",
        "-a",
        help=f"Download everything from {FIRST_YEAR} up to the current year.",
    ),
    start_year: int | None = typer.Option(
        None, "--start-year", "-s", help="First year of the download interval."
    ),
    end_year: int | None = typer.Option(
        None, "--end-year", "-e", help="Last year of the download interval."
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None,
        "--output",
        "-o",
        help="Write the result to this file instead of standard output.",
        dir_okay=False,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the archive requests that would be made and exit.",
    ),
    period: int | None = typer.Option(
        None,
        "--period",
        "-p",
        help="Maximum number of years per archive request (overrides config).",
    ),
    config_file: Path = typer.Option(  # noqa: B008
        CONFIG_FILE, "--config", help="Path to the INI configuration file."
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration and exit."
    ),
    write_config: bool = typer.Option(
        False,
        "--write-config",
        help="Save the effective configuration to the config file and exit.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-V",
        count=True,
        help="Increase logging verbosity (-VV for debug).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Download DST index data from the Kyoto WDC archive."""
    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("dst_cli").setLevel(log_level)

    try:
        cli_options = {
            key: value for key, value in {"period": period}.items() if value is not None
        }
        config = ConfigManager(config_file).load_config(cli_options)
    except DstCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    if show_config:
        print_config(console, config_file, config)
        raise typer.Exit()

    if write_config:
        try:
            ConfigManager(config_file).save_config(config)
        except DstCliError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        console.print(f"[green]✓ Configuration saved to '{config_file}'[/green]")
        raise typer.Exit()

    has_start = start_year is not None
    has_end = end_year is not None

    if not all_years and not has_start and not has_end:
        console.print(ctx.get_help())
        raise typer.Exit(code=1)
    if all_years and (has_start or has_end):
        _fail("--all cannot be combined with -s/--start-year or -e/--end-year")
    if has_start and not has_end:
        _fail("missing -e/--end-year")
    if has_end and not has_start:
        _fail("missing -s/--start-year")

    if dry_run:
        fetcher = DstFetcher(
            _offline_fetch, period=config.period, base_url=config.base_url
        )
        try:
            if all_years:
                intervals = fetcher.plan(FIRST_YEAR, fetcher.current_year())
            else:
                intervals = fetcher.plan(start_year, end_year)
        except DstCliError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        print_plan(console, intervals, [fetcher.build_url(i) for i in intervals])
        raise typer.Exit()

    try:
        data = asyncio.run(_download(config, start_year, end_year))
    except DstCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    if output is not None:
        try:
            asyncio.run(write_output(output, data))
        except OSError as e:
            _fail(f"Could not write '{output}': {e}")
        console.print(
            f"[green]✓ Wrote {len(data)} bytes to '{output}'[/green]"
        )
        return

    typer.echo(data, nl=False)
