"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wave_cli.media.thumbnail import SavedThumbnail
from wave_cli.models.config import WaveConfig
from wave_cli.models.track import WaveTrack
from wave_cli.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ApiRequestError": [
            "• Check your internet connection.",
            "• The Wave API might be temporarily unavailable.",
            "• Verify `base_url` with `wave-cli --show-config`.",
        ],
        "ThumbnailError": [
            "• Not every result carries a thumbnail; try another --index.",
            "• The image host may be unreachable, try again later.",
        ],
        "ResponseParseError": [
            "• The API answered with an unexpected format.",
            "• Check that `base_url` and `search_endpoint` point to the Wave API.",
        ],
        "ConfigurationError": [
            "• Fix the value named above in your config file.",
            "• Run `wave-cli init --force` to write a fresh default config.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_search_results(query: str, tracks: list[WaveTrack]):
    """Displays search results as a numbered table."""
    console = Console()
    if not tracks:
        console.print(f"[yellow]No results for[/yellow] '{escape(query)}'.")
        return

    table = Table(title=Text(f"Results for '{query}'"), box=box.SIMPLE_HEAD)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Artist", style="green")
    table.add_column("Length", justify="right")
    table.add_column("ID", style="dim")

    for i, track in enumerate(tracks, 1):
        table.add_row(
            str(i),
            Text(track.title or "-"),
            Text(track.uploader_name or "-"),
            format_duration(track.duration),
            Text(track.id or "-"),
        )
    console.print(table)


def print_thumbnail_saved(track: WaveTrack, saved: SavedThumbnail):
    console = Console()
    details = f"[dim]→ {escape(str(saved.path))} ({format_size(saved.size)})[/dim]"
    if saved.written:
        console.print(
            f"[green]✓ Saved thumbnail for[/green] {escape(str(track))} {details}"
        )
    else:
        console.print(
            f"[yellow]○ Thumbnail for[/yellow] {escape(str(track))} "
            f"[yellow]already exists, kept it[/yellow] {details} "
            "[dim](use --force to overwrite)[/dim]"
        )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = "\n".join(f"{key} = {value}" for key, value in config_data.items())
    console.print(
        Panel(
            Text(content),
            title=f"Configuration ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
        )
    )


def print_validation_table(config: WaveConfig):
    """Displays a summary of the current settings."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Search URL:", f"[green]{escape(config.search_url)}[/green]")
    table.add_row("Method:", config.request_method)
    table.add_row("Timeout:", f"{config.timeout}s")
    table.add_row(
        "Result Limit:", str(config.result_limit) if config.result_limit else "None"
    )
    table.add_row("Thumbnail Dir:", f"[dim]{escape(config.thumbnail_dir)}[/dim]")

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )
