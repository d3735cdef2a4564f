"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dst_cli.core.intervals import SubInterval
from dst_cli.models.config import ArchiveConfig


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "InvalidRangeError": [
            "• DST index data is available from 1957 up to the current year.",
            "• Check the values passed to --start-year and --end-year.",
        ],
        "TransportError": [
            "• The Kyoto WDC archive might be temporarily unavailable.",
            "• Check your internet connection.",
            "• Increase `timeout` in the configuration file for slow links.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Delete the file to fall back to the built-in defaults.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -VV for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_plan(console: Console, intervals: list[SubInterval], urls: list[str]):
    """Displays the archive requests a download would issue."""
    table = Table(
        title=f"Download plan ({len(intervals)} request(s))",
        box=box.SIMPLE_HEAVY,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Years", style="green", no_wrap=True)
    table.add_column("URL", overflow="fold")

    for index, (interval, url) in enumerate(zip(intervals, urls), start=1):
        years = f"{interval.start_year}-{interval.end_year}"
        table.add_row(str(index), years, url)

    console.print(table)


def print_config(console: Console, config_path: Path, config: ArchiveConfig):
    """Displays the effective configuration."""
    content = ""
    for key in sorted(ArchiveConfig.get_ini_keys()):
        content += f"{key} = {getattr(config, key)}\n"

    source = config_path if config_path.is_file() else f"{config_path}, not found"
    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{source}[/dim])",
            border_style="cyan",
        )
    )
