#!/usr/bin/env python3
"""
Command-line interface for managing the story bank.

Stories live in the SQLite story database (STORY_DB_PATH, default
outs/stories.db), scoped by owner. Saves and deletes are recorded in the story
event log (STORY_EVENTS_FILE).

Commands:
    list       - List stories with score and Leadership Principles
    show       - Show one story with its evaluation report
    add        - Add or update a story from a YAML file
    delete     - Delete a story
    toggle-lp  - Toggle a Leadership Principle on a story
    coverage   - Show the stories x Leadership Principles coverage matrix
    questions  - Browse the question bank and matching stories
    seed       - Load the bundled sample stories
    history    - Show recent story events
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from starcoach.contexts.catalog import (
    LEADERSHIP_PRINCIPLES,
    QUESTION_CATEGORIES,
    filter_questions,
    get_lp,
    is_valid_lp,
)
from starcoach.contexts.evaluation import evaluate_stories
from starcoach.contexts.evaluation.report import format_coverage_matrix, format_evaluation_report
from starcoach.contexts.stories import (
    Story,
    StoryStore,
    StoryStoreError,
    coverage_level,
    load_sample_stories,
    lp_coverage,
    stories_for_question,
)
from starcoach.contexts.stories.logger import setup_stories_logger
from starcoach.utils.event_logging import get_recent_events
from starcoach.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
STORY_DB_PATH = Path(os.getenv("STORY_DB_PATH", "outs/stories.db"))
DEFAULT_OWNER = os.getenv("STARCOACH_OWNER", "local")

app = typer.Typer(
    add_completion=False,
    help="Manage the story bank (stories.db)",
    invoke_without_command=True,
)

OwnerOption = typer.Option(DEFAULT_OWNER, "--owner", "-o", help="Story owner id")


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_store() -> StoryStore:
    try:
        return StoryStore(STORY_DB_PATH, source="cli")
    except StoryStoreError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)


def _start_session_log() -> None:
    """Start a stories log session for commands that change the database."""
    setup_stories_logger(LOGS_PATH / f"stories_{now()}", STORY_DB_PATH)


def _lp_label(lp_ids: list[str]) -> str:
    return ", ".join(get_lp(lp_id).short for lp_id in lp_ids if get_lp(lp_id)) or "-"


@app.command("list")
def list_command(owner: str = OwnerOption):
    """
    List stories, newest first.

    Examples:\n

        $ manage_stories.py list

        $ manage_stories.py list --owner alice
    """
    with _open_store() as store:
        try:
            stories = store.list(owner)
        except StoryStoreError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)

    if not stories:
        typer.echo(f"No stories for owner '{owner}'. Try: manage_stories.py seed")
        return

    results = evaluate_stories(stories)
    typer.secho(f"\n{len(stories)} stories for '{owner}'", fg=typer.colors.BLUE, bold=True)
    typer.echo("=" * 80)
    for story in stories:
        result = results[story.story_id]
        strength = "*" * story.strength if story.strength else "unrated"
        typer.echo(f"{story.story_id}")
        typer.echo(
            f"  {story.title or 'Untitled story'} | {result.overall_score:.1f} "
            f"{result.overall_rating.value} | strength {strength}"
        )
        typer.echo(
            f"  Primary: {_lp_label(story.primary_lps)}"
            f"  Secondary: {_lp_label(story.secondary_lps)}"
        )


@app.command("show")
def show_command(story_id: str = typer.Argument(..., help="Story id"), owner: str = OwnerOption):
    """Show a stored story and its evaluation."""
    with _open_store() as store:
        story = store.get(owner, story_id)

    if story is None:
        typer.echo(f"ERROR: Story not found: {story_id}", err=True)
        raise typer.Exit(1)

    for section in ("situation", "task", "action", "result"):
        typer.secho(f"\n{section.upper()}", bold=True)
        typer.echo(getattr(story, section) or "(empty)")
    if story.metrics:
        typer.secho("\nMETRICS", bold=True)
        for metric in story.metrics:
            typer.echo(f"  - {metric}")
    typer.echo()
    typer.echo(format_evaluation_report(story))


@app.command("add")
def add_command(
    story_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML story file"),
    owner: str = OwnerOption,
):
    """
    Add a story from a YAML file (updates it if the id already exists).

    Examples:\n

        $ manage_stories.py add stories/scaling_incident.yaml
    """
    _start_session_log()
    story = Story.from_file(story_file)

    with _open_store() as store:
        try:
            saved = store.upsert(owner, story)
        except StoryStoreError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)

    typer.secho(f"✓ Saved {saved.title or saved.story_id} ({saved.story_id})", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    story_id: str = typer.Argument(..., help="Story id"),
    owner: str = OwnerOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a story."""
    if not yes:
        typer.confirm(f"Delete story {story_id}?", abort=True)

    _start_session_log()
    with _open_store() as store:
        try:
            deleted = store.delete(owner, story_id)
        except StoryStoreError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)

    if not deleted:
        typer.echo(f"ERROR: Story not found: {story_id}", err=True)
        raise typer.Exit(1)
    typer.secho(f"✓ Deleted {story_id}", fg=typer.colors.GREEN)


@app.command("toggle-lp")
def toggle_lp_command(
    story_id: str = typer.Argument(..., help="Story id"),
    lp_id: str = typer.Argument(..., help="Leadership Principle id (e.g., ownership)"),
    secondary: bool = typer.Option(False, "--secondary", "-s", help="Toggle as secondary LP"),
    owner: str = OwnerOption,
):
    """
    Toggle a Leadership Principle on a story.

    Toggling an LP the story already has in the same role removes it.
    Toggling it in the other role moves it.

    Examples:\n

        $ manage_stories.py toggle-lp 3f2c9a1e ownership

        $ manage_stories.py toggle-lp 3f2c9a1e dive-deep --secondary
    """
    if not is_valid_lp(lp_id):
        typer.echo(f"ERROR: Unknown Leadership Principle: {lp_id}", err=True)
        typer.echo(f"\nValid ids: {', '.join(lp.id for lp in LEADERSHIP_PRINCIPLES)}")
        raise typer.Exit(1)

    _start_session_log()
    with _open_store() as store:
        story = store.get(owner, story_id)
        if story is None:
            typer.echo(f"ERROR: Story not found: {story_id}", err=True)
            raise typer.Exit(1)

        story.toggle_lp(lp_id, primary=not secondary)
        saved = store.upsert(owner, story)

    role = saved.lp_roles.get(lp_id)
    state = role.value if role else "removed"
    typer.secho(f"✓ {lp_id}: {state}", fg=typer.colors.GREEN)
    typer.echo(f"  Primary: {_lp_label(saved.primary_lps)}")
    typer.echo(f"  Secondary: {_lp_label(saved.secondary_lps)}")


@app.command("coverage")
def coverage_command(
    owner: str = OwnerOption,
    summary: bool = typer.Option(False, "--summary", help="Per-LP counts instead of the matrix"),
):
    """Show Leadership Principle coverage across the story bank."""
    with _open_store() as store:
        stories = store.list(owner)

    if not summary:
        typer.echo(format_coverage_matrix(stories))
        return

    coverage = lp_coverage(stories)
    colors = {"none": typer.colors.RED, "single": typer.colors.YELLOW, "multiple": typer.colors.GREEN}
    for lp in LEADERSHIP_PRINCIPLES:
        counts = coverage[lp.id]
        level = coverage_level(counts.total)
        typer.secho(
            f"  {lp.short:<4} {lp.name:<40} {counts.primary}P {counts.secondary}s",
            fg=colors[level],
        )


@app.command("questions")
def questions_command(
    category: str = typer.Option("All", "--category", "-c", help="Question category"),
    lp_id: str = typer.Option("all", "--lp", help="Leadership Principle id"),
    owner: str = OwnerOption,
):
    """
    Browse common questions with the stories that could answer them.

    Examples:\n

        $ manage_stories.py questions

        $ manage_stories.py questions --category "Conflict & Influence"

        $ manage_stories.py questions --lp ownership
    """
    if category not in QUESTION_CATEGORIES:
        typer.echo(f"ERROR: Unknown category: {category}", err=True)
        typer.echo(f"\nCategories: {', '.join(QUESTION_CATEGORIES)}")
        raise typer.Exit(1)
    if lp_id != "all" and not is_valid_lp(lp_id):
        typer.echo(f"ERROR: Unknown Leadership Principle: {lp_id}", err=True)
        raise typer.Exit(1)

    with _open_store() as store:
        stories = store.list(owner)

    questions = filter_questions(category=category, lp_id=lp_id)
    typer.secho(f"\n{len(questions)} questions", fg=typer.colors.BLUE, bold=True)
    for question in questions:
        matches = stories_for_question(question.id, stories)
        lp = get_lp(question.primary_lp)
        typer.echo(f"\n[{question.id}] {question.text}")
        typer.echo(f"  {question.category} | {lp.name if lp else question.primary_lp}")
        if matches:
            for story in matches:
                typer.echo(f"  -> {story.title or story.story_id}")
        else:
            typer.secho("  (no matching stories)", fg=typer.colors.YELLOW)


@app.command("seed")
def seed_command(owner: str = OwnerOption):
    """Load the bundled sample stories into the story bank."""
    _start_session_log()
    samples = load_sample_stories()

    with _open_store() as store:
        for story in samples:
            saved = store.upsert(owner, story)
            typer.secho(f"✓ {saved.title} ({saved.story_id})", fg=typer.colors.GREEN)

    typer.echo(f"\nSeeded {len(samples)} sample stories for '{owner}'")


@app.command("history")
def history_command(
    story_id: Optional[str] = typer.Option(None, "--story", help="Only events for this story"),
    n: int = typer.Option(10, "--n", "-n", help="Number of events"),
):
    """Show recent story save/delete events."""
    events = get_recent_events(n=n, story_id=story_id)
    if not events:
        typer.echo("No story events recorded")
        return

    for event in events:
        when = format_timestamp(event.get("timestamp", ""), relative=True)
        typer.echo(
            f"{when:>10}  {event.get('event_type'):<14} {event.get('story_id')}"
            f"  ({event.get('owner_id')}, {event.get('source')})"
        )


if __name__ == "__main__":
    app()
