#!/usr/bin/env python3
"""
Turn a free-form story into a draft STAR story with AI.

Providers are tried in the order given by STORY_PARSER_PROVIDERS
(default "openai,anthropic").

Usage:
    python scripts/parse_story.py notes/outage.txt
    python scripts/parse_story.py notes/outage.txt --save stories/outage.yaml
    python scripts/parse_story.py notes/outage.txt --store --owner alice
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from starcoach.contexts.catalog import get_lp
from starcoach.contexts.coaching import StoryParsingError, parse_story_text
from starcoach.contexts.coaching.logger import setup_coaching_logger
from starcoach.contexts.stories import StoryStore, StoryStoreError
from starcoach.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
STORY_DB_PATH = Path(os.getenv("STORY_DB_PATH", "outs/stories.db"))
DEFAULT_OWNER = os.getenv("STARCOACH_OWNER", "local")

app = typer.Typer(add_completion=False, help="Parse a raw story into STAR format.")

_CONFIDENCE_COLORS = {
    "high": typer.colors.GREEN,
    "medium": typer.colors.YELLOW,
    "low": typer.colors.RED,
}


@app.command()
def main(
    text_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Raw story text file"),
    save: Optional[Path] = typer.Option(
        None, "--save", "-s", help="Write the draft to a YAML story file", dir_okay=False
    ),
    store: bool = typer.Option(False, "--store", help="Save the draft to the story database"),
    owner: str = typer.Option(DEFAULT_OWNER, "--owner", help="Story owner for --store"),
):
    """Parse a raw story and print the STAR draft."""
    raw_text = text_file.read_text(encoding="utf-8")
    setup_coaching_logger(
        LOGS_PATH / f"parse_{now()}",
        phase="parse",
        provider=os.getenv("STORY_PARSER_PROVIDERS", "openai,anthropic"),
    )

    try:
        parsed = parse_story_text(raw_text)
    except StoryParsingError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    typer.secho(f"\n{parsed.title or 'Untitled story'}", fg=typer.colors.BLUE, bold=True)
    typer.secho(
        f"Confidence: {parsed.confidence} ({parsed.provider})",
        fg=_CONFIDENCE_COLORS[parsed.confidence],
    )
    for section in ("situation", "task", "action", "result"):
        typer.secho(f"\n{section.upper()}", bold=True)
        typer.echo(getattr(parsed, section) or "(not found in text)")
    if parsed.metrics:
        typer.secho("\nMETRICS", bold=True)
        for metric in parsed.metrics:
            typer.echo(f"  - {metric}")
    if parsed.suggested_lps:
        names = [get_lp(lp_id).name for lp_id in parsed.suggested_lps]
        typer.echo(f"\nSuggested LPs: {', '.join(names)}")

    story = parsed.to_story()

    if save:
        story.to_file(save)
        typer.secho(f"\n✓ Draft written to {save}", fg=typer.colors.GREEN)

    if store:
        try:
            with StoryStore(STORY_DB_PATH, source="parser") as story_store:
                saved = story_store.upsert(owner, story)
        except StoryStoreError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)
        typer.secho(f"\n✓ Saved as {saved.story_id}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
