"""Dream Lens command line client.

Examples:

    dreamlens analyze "I was flying over a dark sea" -e Joy -e Fear
    dreamlens serve --port 8000
"""

from __future__ import annotations
import sys
from typing import List

import click
from rich.console import Console
from rich.text import Text

from shared.config import settings
from .api import DreamApiClient
from .formatter import BulletList, DisplayBlock, Heading, SubHeading, format_result
from .state import EMOTIONS, INITIAL, set_dream_text, submit, toggle_emotion

console = Console()


def print_blocks(blocks: List[DisplayBlock]) -> None:
    for b in blocks:
        if isinstance(b, Heading):
            console.print(Text(b.text, style="bold underline"))
        elif isinstance(b, SubHeading):
            console.print(Text(b.text, style="bold"))
        elif isinstance(b, BulletList):
            for item in b.items:
                console.print(Text(f"  • {item}"))
        else:
            console.print(Text(b.text))


@click.group()
@click.version_option(version="1.0.0", prog_name="dreamlens")
def cli():
    """Dream Lens: share a dream and how it felt, get an interpretation."""
    pass


@cli.command()
@click.argument("dream")
@click.option("--emotion", "-e", "emotions", multiple=True,
              type=click.Choice(EMOTIONS, case_sensitive=False), help="How did you feel? Repeatable.")
@click.option("--api-url", default=None, help="Dream Lens API base URL")
def analyze(dream: str, emotions: tuple, api_url: str | None):
    """Analyze DREAM with the selected emotions."""
    state = set_dream_text(INITIAL, dream)
    # click.Choice hands back the canonical label
    for e in emotions:
        if e not in state.selected_emotions:
            state = toggle_emotion(state, e)

    client = DreamApiClient(api_url or settings.api_base_url)
    with console.status("Analyzing your dream..."):
        after = submit(state, client.analyze)

    if after is state:
        console.print("[red]Describe your dream and pick at least one emotion.[/red]")
        sys.exit(1)
    if after.error:
        console.print(f"[red]{after.error}[/red]")
        sys.exit(1)
    print_blocks(format_result(after.result))


@cli.command()
@click.option("--host", default="127.0.0.1")
@click.option("--port", default=8000, type=int)
def serve(host: str, port: int):
    """Run the API and web page with uvicorn."""
    import uvicorn
    uvicorn.run("api.main:app", host=host, port=port)


if __name__ == "__main__":
    cli()
