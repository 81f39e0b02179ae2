"""CLI for registry-redirect."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .checker import make_blob_checker
from .config import RedirectorSettings, load_settings
from .constants import DIGEST_ALGORITHM
from .errors import ConfigError, UnroutableRegionError
from .regions import BUCKET_GROUPS, aws_region_to_s3_url, blob_url, bucket_group, default_endpoint


app = typer.Typer(help="""\
Route AWS regions to the nearest layer bucket and check whether
layer blobs exist there before redirecting clients.""")

console = Console()


def _setup_logging(level: str) -> None:
    """Send package logs through rich at the given level."""
    logger = logging.getLogger("registry_redirect")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def _load_settings_or_exit(config: Optional[Path], verbose: bool) -> RedirectorSettings:
    try:
        settings = load_settings(config)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(2)
    _setup_logging("DEBUG" if verbose else settings.log_level)
    return settings


@app.command()
def regions():
    """List buckets and the regions routed to each."""
    table = Table(title="Region routing")
    table.add_column("Bucket region", style="cyan")
    table.add_column("Endpoint")
    table.add_column("Routed regions", style="dim")

    for group in BUCKET_GROUPS:
        name = group.region
        if group.endpoint == default_endpoint():
            name += " (default)"
        table.add_row(name, group.endpoint, ", ".join(group.aliases))

    console.print(table)


@app.command()
def resolve(
    region: str = typer.Argument(..., help="AWS region code, or GLOBAL"),
):
    """Print the bucket URL a region is routed to.

    Examples:
        registry-redirect resolve ca-central-1
    """
    url = aws_region_to_s3_url(region)
    if not url:
        console.print(f"[red]✗[/red] {UnroutableRegionError(region)}")
        raise typer.Exit(1)
    typer.echo(url)


@app.command()
def check(
    layer_hash: str = typer.Argument(..., help="Layer digest (hex, optionally sha256: prefixed)"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region (default from config)"),
    bucket: Optional[str] = typer.Option(None, "--bucket", "-b", help="Cache bucket key (default: bucket region)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Check whether a layer blob exists in the bucket for a region.

    Exits 0 if the blob exists, 1 if it does not or cannot be reached.

    Examples:
        registry-redirect check 3f5a... --region eu-north-1
    """
    settings = _load_settings_or_exit(config, verbose)
    region = region or settings.default_region

    group = bucket_group(region)
    if group is None:
        console.print(f"[red]✗[/red] {UnroutableRegionError(region)}")
        raise typer.Exit(1)

    url = blob_url(group.endpoint, layer_hash)
    digest = layer_hash.removeprefix(f"{DIGEST_ALGORITHM}:")

    checker = make_blob_checker(settings)
    with checker.session:
        exists = checker.blob_exists(url, bucket or group.region, digest)
    if exists:
        console.print(f"[green]✓[/green] {url}")
        return

    console.print(f"[yellow]✗[/yellow] not found: {url}")
    raise typer.Exit(1)


def main():
    app()


if __name__ == "__main__":
    main()
