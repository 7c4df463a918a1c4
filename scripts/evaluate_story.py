#!/usr/bin/env python3
"""
Score a STAR story with the rule-based evaluator.

The story can be a YAML story file or the id of a story in the story database.

Usage:
    python scripts/evaluate_story.py stories/scaling_incident.yaml
    python scripts/evaluate_story.py 3f2c9a1e-... --owner alice
    python scripts/evaluate_story.py stories/scaling_incident.yaml --json
"""

import json
import os
from pathlib import Path

import typer
from dotenv import load_dotenv

from starcoach.contexts.evaluation import evaluate_story
from starcoach.contexts.evaluation.report import format_evaluation_report
from starcoach.contexts.stories import Story, StoryStore, StoryStoreError

load_dotenv()
STORY_DB_PATH = Path(os.getenv("STORY_DB_PATH", "outs/stories.db"))
DEFAULT_OWNER = os.getenv("STARCOACH_OWNER", "local")

app = typer.Typer(add_completion=False, help="Evaluate a STAR story.")


def load_story(file_or_id: str, owner: str) -> Story:
    """Load a story from a YAML file, or from the database by id."""
    path = Path(file_or_id)
    if path.suffix in (".yaml", ".yml"):
        if not path.exists():
            typer.echo(f"ERROR: Story file not found: {path}", err=True)
            raise typer.Exit(1)
        return Story.from_file(path)

    try:
        with StoryStore(STORY_DB_PATH, source="cli") as store:
            story = store.get(owner, file_or_id)
    except StoryStoreError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if story is None:
        typer.echo(f"ERROR: Story not found for owner '{owner}': {file_or_id}", err=True)
        raise typer.Exit(1)
    return story


@app.command()
def main(
    file_or_id: str = typer.Argument(..., help="YAML story file or stored story id"),
    owner: str = typer.Option(DEFAULT_OWNER, "--owner", help="Story owner for database lookups"),
    as_json: bool = typer.Option(False, "--json", help="Print the evaluation as JSON"),
):
    """Evaluate a story and print the report."""
    story = load_story(file_or_id, owner)
    result = evaluate_story(story)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        typer.echo(format_evaluation_report(story, result))


if __name__ == "__main__":
    app()
