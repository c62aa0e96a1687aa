"""Command-line interface for bucket-browser.

Commands:
    - sources: List configured storage sources
    - buckets: List buckets of a source
    - browse: Show one page of folders and files, or search by name
    - stats: Aggregate the size and last modification of a folder
    - download: Save one object to a file
    - download-keys: Save selected objects into a zip archive
    - download-folder: Save a whole folder into a zip archive

Sources are configured through BUCKET_BROWSER_SOURCES__<name>__* variables.
"""

import shutil
import zipfile
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    BucketOption,
    DetailsOption,
    OutputOption,
    QueryOption,
    SourceOption,
    TokenStackOption,
)
from .core import settings
from .path import breadcrumbs, file_name, folder_name, format_bytes, parent_prefix
from .unified import StorageBrowser

app = typer.Typer(
    name="bucket-browser",
    help="Browse S3-compatible buckets as folders and files.",
    no_args_is_help=True,
)

ZIP_TIMESTAMP = "%Y%m%d-%H%M%S"


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucket-browser {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Bucket Browser: folder view, search and zip export for S3-compatible storage.
    """
    pass


def _create_browser() -> StorageBrowser:
    return StorageBrowser.from_settings(settings)


def _format_time(value: Optional[datetime]) -> str:
    return value.isoformat(sep=" ", timespec="seconds") if value else "-"


def _write_archive(output: Path, export) -> dict[str, int]:
    """Run ``export(archive)`` into a zip at ``output``; remove it on failure."""
    try:
        with open(output, "wb") as sink:
            with zipfile.ZipFile(sink, "w", compression=zipfile.ZIP_DEFLATED) as archive:
                return export(archive)
    except BaseException:
        output.unlink(missing_ok=True)
        raise


@app.command("sources")
def sources_cmd() -> None:
    """List configured storage sources."""
    try:
        browser = _create_browser()
        default_name = browser.registry.default_source.name
        for source in browser.list_sources():
            marker = "*" if source.name == default_name else " "
            typer.echo(
                f"{marker} {source.name}  ({source.display_name})  "
                f"default bucket: {source.default_bucket}"
            )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("buckets")
def buckets_cmd(source: SourceOption = None) -> None:
    """List buckets visible to a source."""
    try:
        for bucket in _create_browser().list_buckets(source):
            typer.echo(bucket)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("browse")
def browse_cmd(
    prefix: Annotated[str, typer.Argument(help="Folder prefix to browse")] = "",
    source: SourceOption = None,
    bucket: BucketOption = None,
    token_stack: TokenStackOption = "",
    query: QueryOption = "",
    details: DetailsOption = False,
) -> None:
    """
    Show one page of folders and files under a prefix.

    Examples:
        bucket-browser browse docs/ --bucket reports
        bucket-browser browse docs/ --query invoice --details
        bucket-browser browse docs/ --token-stack <next token from previous page>
    """
    try:
        listing = _create_browser().list_objects(
            source,
            bucket,
            prefix=prefix,
            token_stack=token_stack,
            query=query,
            include_folder_details=details,
        )

        path = "/".join(crumb.label for crumb in breadcrumbs(listing.prefix))
        typer.echo(f"{listing.bucket}:/{path}")
        if listing.prefix:
            typer.echo(f"Parent: {parent_prefix(listing.prefix) or '/'}")

        if not listing.folders and not listing.objects:
            typer.echo("No matching entries." if query else "Folder is empty.")

        for folder in listing.folders:
            if details:
                typer.echo(
                    f"  {folder.name}/  {format_bytes(folder.size)}  "
                    f"{_format_time(folder.last_modified)}"
                )
            else:
                typer.echo(f"  {folder.name}/")
        for obj in listing.objects:
            preview = "  [preview]" if obj.previewable else ""
            typer.echo(
                f"  {obj.name}  {format_bytes(obj.size)}  "
                f"{_format_time(obj.last_modified)}{preview}"
            )

        if listing.has_next:
            typer.echo(f"Next: --token-stack {listing.next_continuation_token}")
        if listing.continuation_token:
            previous = listing.previous_continuation_token or '""'
            typer.echo(f"Previous: --token-stack {previous}")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("stats")
def stats_cmd(
    prefix: Annotated[str, typer.Argument(help="Folder prefix to aggregate")],
    source: SourceOption = None,
    bucket: BucketOption = None,
) -> None:
    """Aggregate total size and most recent modification of a folder."""
    try:
        stats = _create_browser().folder_stats(source, bucket, prefix)
        typer.echo(f"Folder: {prefix}")
        typer.echo(f"Total size: {stats.size:,} bytes")
        typer.echo(f"Human readable: {format_bytes(stats.size)}")
        typer.echo(f"Last modified: {_format_time(stats.last_modified)}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("download")
def download_cmd(
    key: Annotated[str, typer.Argument(help="Object key to download")],
    source: SourceOption = None,
    bucket: BucketOption = None,
    output: OutputOption = None,
) -> None:
    """Save one object to a local file."""
    try:
        if not key.strip():
            raise ValueError("Object key is required")
        target = output or Path(file_name(key))
        body, metadata = _create_browser().open_object_stream(source, bucket, key)
        with closing(body), open(target, "wb") as sink:
            shutil.copyfileobj(body, sink)
        typer.echo(f"Saved {key} to {target}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("download-keys")
def download_keys_cmd(
    keys: Annotated[list[str], typer.Argument(help="Object keys to include")],
    source: SourceOption = None,
    bucket: BucketOption = None,
    output: OutputOption = None,
) -> None:
    """Save selected objects into one zip archive."""
    try:
        selected = [key for key in dict.fromkeys(keys) if key.strip()]
        if not selected:
            raise ValueError("No objects selected for download")
        target = output or Path(f"download-{datetime.now().strftime(ZIP_TIMESTAMP)}.zip")

        browser = _create_browser()
        transferred = _write_archive(
            target,
            lambda archive: browser.stream_objects_as_zip(source, bucket, selected, archive),
        )
        typer.echo(f"Wrote {len(transferred)} objects to {target}")
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("download-folder")
def download_folder_cmd(
    prefix: Annotated[str, typer.Argument(help="Folder prefix to archive")],
    source: SourceOption = None,
    bucket: BucketOption = None,
    output: OutputOption = None,
) -> None:
    """Save every object below a folder into one zip archive."""
    try:
        if not prefix.strip():
            raise ValueError("Folder prefix is required")
        timestamp = datetime.now().strftime(ZIP_TIMESTAMP)
        target = output or Path(f"{folder_name(prefix.strip())}-{timestamp}.zip")

        browser = _create_browser()
        transferred = _write_archive(
            target,
            lambda archive: browser.stream_prefix_as_zip(source, bucket, prefix, archive),
        )
        total = sum(size for size in transferred.values() if size > 0)
        typer.echo(
            f"Wrote {len(transferred)} objects ({format_bytes(total)}) to {target}"
        )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
