"""Shared CLI parameter definitions.

Each alias bundles the type, option names and help text so every command
spells a parameter the same way:

    @app.command()
    def my_command(source: SourceOption = None, bucket: BucketOption = None):
        pass
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

SourceOption = Annotated[
    Optional[str],
    typer.Option("--source", "-s", help="Configured source name (default source if omitted)"),
]

BucketOption = Annotated[
    Optional[str],
    typer.Option("--bucket", "-b", help="Bucket name (source default bucket if omitted)"),
]

TokenStackOption = Annotated[
    str,
    typer.Option("--token-stack", help="Encoded token stack of the page to show"),
]

QueryOption = Annotated[
    str,
    typer.Option("--query", "-q", help="Case-insensitive name filter, searches several pages"),
]

DetailsOption = Annotated[
    bool,
    typer.Option("--details/--no-details", help="Aggregate folder sizes and modification times"),
]

OutputOption = Annotated[
    Optional[Path],
    typer.Option("--output", "-o", help="Output file path"),
]
