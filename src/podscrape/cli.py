"""CLI entry point for Podscrape."""

import asyncio
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from podscrape.config.logging import setup_logging
from podscrape.config.manager import ConfigManager
from podscrape.config.schema import Settings
from podscrape.output.manager import EpisodeStore
from podscrape.pipeline import AudioAcquisition, EpisodeInfo, ScrapeResult
from podscrape.server.tools import PodcastTools
from podscrape.tracking.store import TrackingStore
from podscrape.utils.datetime import today_slug
from podscrape.utils.display import mask_secret, truncate_text
from podscrape.utils.errors import ConfigError, PodscrapeError

app = typer.Typer(
    name="podscrape",
    help="Scrape and transcribe podcast episodes, served over MCP",
    no_args_is_help=True,
)
console = Console()


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
    config_file: Path | None = typer.Option(
        None, "--config", help="Path to config.yaml"
    ),
) -> None:
    """Podscrape - scrape, transcribe, and file podcast episodes."""
    try:
        settings = ConfigManager(config_file=config_file).load_config()
    except ConfigError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        sys.exit(1)

    setup_logging(verbose=verbose, log_file=log_file, level=settings.log_level)
    ctx.obj = {"settings": settings}


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from podscrape import __version__

    console.print(f"[bold cyan]Podscrape[/bold cyan] v{__version__}")


@app.command("serve")
def serve_command(
    ctx: typer.Context,
    transport: str = typer.Option(
        "stdio", "--transport", "-t", help="Transport: stdio or http"
    ),
    host: str = typer.Option("127.0.0.1", "--host", help="Host for the HTTP transport"),
    port: int = typer.Option(9000, "--port", help="Port for the HTTP transport"),
) -> None:
    """Run the MCP server.

    Examples:
        podscrape serve

        podscrape serve --transport http --port 9000
    """
    if transport not in ("stdio", "http"):
        console.print(f"[red]✗[/red] Invalid transport: {transport}")
        console.print("Valid transports: stdio, http")
        sys.exit(1)

    from podscrape.server.app import run_server

    run_server(_settings(ctx), transport=transport, host=host, port=port)


@app.command("scrape")
def scrape_command(
    ctx: typer.Context,
    podcast_name: str = typer.Argument(..., help="Podcast name"),
    episode_title: str = typer.Argument(..., help="Episode title"),
    audio_url: str | None = typer.Option(
        None, "--audio-url", "-a", help="Direct audio URL (falls back to YouTube)"
    ),
    episode_date: str | None = typer.Option(
        None, "--date", "-d", help="Episode date as YYYY-MM-DD (default: today)"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Re-scrape even if a transcript exists"
    ),
) -> None:
    """Scrape and transcribe one episode by name.

    Tries the audio URL first, then falls back to a YouTube search.

    Examples:
        podscrape scrape "Huberman Lab" "Sleep Episode"

        podscrape scrape "Huberman Lab" "Sleep Episode" -a https://ex.com/ep.mp3 -d 2024-12-14
    """
    tools = PodcastTools.from_settings(_settings(ctx))
    info = EpisodeInfo(
        podcast_name=podcast_name,
        title=episode_title,
        episode_date=episode_date or today_slug(),
        audio_url=audio_url,
    )

    if not force and tools.store.has_transcript(info.podcast_name, info.title, info.episode_date):
        path = tools.store.transcript_path(info.podcast_name, info.title, info.episode_date)
        console.print(f"[yellow]⚠[/yellow] Transcript already exists: {path}")
        console.print("[dim]Use --force to re-scrape[/dim]")
        return

    async def run_scrape() -> ScrapeResult:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Scraping...", total=None)
            result = await tools.scraper.scrape(info)
            progress.update(task, completed=True)
        return result

    try:
        result = asyncio.run(run_scrape())
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except PodscrapeError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    _print_result(result)


@app.command("transcribe")
def transcribe_command(
    ctx: typer.Context,
    audio_path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Local audio file"
    ),
    podcast_name: str = typer.Argument(..., help="Podcast name"),
    episode_title: str = typer.Argument(..., help="Episode title"),
    episode_date: str = typer.Argument(..., help="Episode date (YYYY-MM-DD)"),
) -> None:
    """Transcribe a local audio file and save the transcript.

    Use this to retry an episode whose audio was kept after a failed scrape.
    The audio file is not deleted.

    Examples:
        podscrape transcribe ./temp/episode.mp3 "Huberman Lab" "Sleep Episode" 2024-12-14
    """
    tools = PodcastTools.from_settings(_settings(ctx))
    info = EpisodeInfo(
        podcast_name=podcast_name, title=episode_title, episode_date=episode_date
    )
    acquisition = AudioAcquisition(audio_path=audio_path, source="local")

    async def run_transcription() -> ScrapeResult:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Transcribing...", total=None)
            result = await tools.scraper.transcribe_audio(info, acquisition)
            progress.update(task, completed=True)
        return result

    try:
        result = asyncio.run(run_transcription())
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except PodscrapeError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    _print_result(result)


@app.command("latest")
def latest_command(
    ctx: typer.Context,
    feed_url: str = typer.Argument(..., help="RSS feed URL"),
) -> None:
    """Show the latest episode of an RSS feed.

    Examples:
        podscrape latest https://feeds.megaphone.fm/hubermanlab
    """
    tools = PodcastTools.from_settings(_settings(ctx))

    try:
        feed = asyncio.run(tools.rss_parser.fetch_feed(feed_url))
    except PodscrapeError as e:
        console.print(f"[red]✗[/red] Error: {escape(str(e))}")
        sys.exit(1)

    console.print(f"\n[bold]{escape(feed.title)}[/bold]")
    console.print(f"[dim]Total episodes: {len(feed.episodes)}[/dim]\n")

    latest = feed.latest_episode
    if latest is None:
        console.print("[yellow]No episodes found[/yellow]")
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Title", latest.title)
    table.add_row("Date", latest.published or "Unknown")
    table.add_row("Audio URL", latest.audio_url or "Not available")
    table.add_row("Duration", latest.duration or "—")
    table.add_row(
        "Description",
        truncate_text(latest.description, 200) if latest.description else "No description",
    )

    console.print(table)


def _print_result(result: ScrapeResult) -> None:
    console.print("\n[bold]Transcript preview:[/bold]")
    console.print(escape(result.transcript_preview))
    console.print(f"\n[green]✓[/green] Transcript saved to: {result.transcript_path}")
    console.print(f"[dim]Source: {result.source.upper()}[/dim]")
    console.print(f"[dim]Words: ~{result.word_count:,}[/dim]")


@app.command("config")
def config_command(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    settings = _settings(ctx)

    console.print("\n[bold]Podscrape Configuration[/bold]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("output_directory", str(settings.output_root))
    table.add_row("temp_directory", str(settings.temp_root))
    table.add_row("tracking_file", str(settings.tracking_path))
    table.add_row("deepgram_api_key", mask_secret(settings.deepgram_api_key))
    table.add_row("transcription_model", settings.transcription_model)
    table.add_row("http_timeout", f"{settings.http_timeout:g}s")
    table.add_row("log_level", settings.log_level)

    console.print(table)


@app.command("tracked")
def list_tracked(ctx: typer.Context) -> None:
    """List tracked podcasts."""
    podcasts = TrackingStore(_settings(ctx).tracking_path).list_podcasts()

    if not podcasts:
        console.print("[yellow]No podcasts tracked yet.[/yellow]")
        console.print("\nAdd one through the [cyan]add_tracking[/cyan] tool.")
        return

    table = Table(title="[bold]Tracked Podcasts[/bold]")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Feed URL", style="blue")
    table.add_column("Enabled", justify="center", style="yellow")
    table.add_column("Last Checked", style="green")

    for podcast in podcasts:
        last_checked = (
            podcast.last_checked.strftime("%Y-%m-%d %H:%M") if podcast.last_checked else "—"
        )
        table.add_row(
            podcast.name,
            podcast.feed_url,
            "✓" if podcast.enabled else "—",
            last_checked,
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(podcasts)} podcast(s)[/dim]")


@app.command("incomplete")
def list_incomplete(ctx: typer.Context) -> None:
    """List episodes with a transcript but no summary."""
    settings = _settings(ctx)
    episodes = EpisodeStore(settings.output_root).find_incomplete_episodes()

    if not episodes:
        console.print("[green]✓[/green] All episodes are complete")
        return

    table = Table(title="[bold]Episodes Missing Summaries[/bold]")
    table.add_column("Podcast", style="cyan")
    table.add_column("Date", style="green", no_wrap=True)
    table.add_column("Episode", style="white")

    for episode in episodes:
        table.add_row(episode.podcast_name, episode.episode_date, episode.episode_title)

    console.print(table)
    console.print(f"\n[dim]Total: {len(episodes)} episode(s)[/dim]")


if __name__ == "__main__":
    app()
