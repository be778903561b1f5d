"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import json
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wave_cli import __version__
from wave_cli.api.client import WaveAPIClient
from wave_cli.exceptions import WaveCliError
from wave_cli.media.thumbnail import SavedThumbnail, ThumbnailDownloader
from wave_cli.models.config import WaveConfig
from wave_cli.models.track import WaveTrack
from wave_cli.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_search_results,
    print_thumbnail_saved,
    print_validation_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=False,
        )
    ],
)
log = logging.getLogger("wave_cli")

app = typer.Typer(
    name="wave-cli",
    help=(
        "Search music with the Wave API and fetch track thumbnails. Use 'wave-cli"
        " <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "wave-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(cli_options: dict | None = None) -> WaveConfig:
    """Loads the config, turning configuration problems into a clean exit."""
    try:
        return ConfigManager(CONFIG_FILE).load_config(cli_options)
    except WaveCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Wave music search CLI"""
    if version:
        console.print(f"[bold]wave-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("wave_cli").setLevel(log_level)

    if show_config:
        config = _load_config()
        print_config(CONFIG_FILE, config.model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def search(
    query: list[str] = typer.Argument(  # noqa: B008
        ..., help="Search term; multiple words are joined with spaces."
    ),
    limit: int | None = typer.Option(
        None, "-n", "--limit", min=0, help="Show at most this many results."
    ),
    post: bool = typer.Option(
        False, "--post", help="Send the search as a POST request instead of GET."
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print one JSON object per result instead of a table."
    ),
):
    """Search for tracks."""
    cli_options = {"result_limit": limit} if limit is not None else None
    config = _load_config(cli_options)
    term = " ".join(query)

    async def _search_async() -> list[WaveTrack]:
        async with WaveAPIClient.from_config(config) as client:
            return await client.search(
                term,
                method="POST" if post else None,
                limit=config.result_limit,
            )

    try:
        tracks = asyncio.run(_search_async())
    except ValueError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except WaveCliError as e:
        console.print(format_error_with_suggestions(e, {"query": term}))
        raise typer.Exit(code=1) from e

    if as_json:
        for track in tracks:
            typer.echo(json.dumps(track.to_dict(), ensure_ascii=False))
    else:
        print_search_results(term, tracks)


@app.command()
def thumbnail(
    query: list[str] = typer.Argument(  # noqa: B008
        ..., help="Search term; multiple words are joined with spaces."
    ),
    index: int = typer.Option(
        1, "-i", "--index", min=1, help="Which search result to use (1 = first)."
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None,
        "-o",
        "--output",
        help="Directory to save the image in (default: 'thumbnail_dir' from config).",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing image file."
    ),
):
    """Search for a track and save its thumbnail image."""
    config = _load_config()
    term = " ".join(query)
    destination = output or Path(config.thumbnail_dir).expanduser()

    async def _thumbnail_async() -> tuple[WaveTrack, SavedThumbnail] | None:
        async with WaveAPIClient.from_config(config) as client:
            tracks = await client.search(term)
            if index > len(tracks):
                return None
            track = tracks[index - 1]
            log.debug("Selected result #%d: %s", index, track)
            saved = await ThumbnailDownloader(client).save(
                track, destination, overwrite=force
            )
            return track, saved

    try:
        result = asyncio.run(_thumbnail_async())
    except ValueError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except WaveCliError as e:
        console.print(format_error_with_suggestions(e, {"query": term}))
        raise typer.Exit(code=1) from e

    if result is None:
        console.print(
            f"[red]✗ No result #{index} for[/red] '{escape(term)}'. "
            "Run [cyan]wave-cli search[/cyan] to see what is available."
        )
        raise typer.Exit(code=1)

    print_thumbnail_saved(*result)


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing file without asking."
    ),
):
    """Write a configuration file with default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config()
    except WaveCliError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    console.print(
        f"[bold green]✓ Configuration saved to[/bold green] '{escape(str(CONFIG_FILE))}'"
    )
    console.print("Try: [cyan]wave-cli search <TERM>[/cyan]")


@app.command()
def validate():
    """Validate the current configuration."""
    config = _load_config()
    print_validation_table(config)
