#!/usr/bin/env python3
"""
Get AI coaching feedback on a STAR story.

Without --level the model returns short coaching feedback. With --level it
scores the story as an interviewer would for that seniority.

Usage:
    python scripts/coach_story.py stories/scaling_incident.yaml
    python scripts/coach_story.py 3f2c9a1e-... --level L6 --provider anthropic
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from starcoach.contexts.coaching import (
    AIFeedback,
    AIScorecard,
    IncompleteStoryError,
    evaluate_story_with_ai,
)
from starcoach.contexts.coaching.logger import setup_coaching_logger
from starcoach.contexts.stories import Story, StoryStore, StoryStoreError
from starcoach.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
STORY_DB_PATH = Path(os.getenv("STORY_DB_PATH", "outs/stories.db"))
DEFAULT_OWNER = os.getenv("STARCOACH_OWNER", "local")

app = typer.Typer(add_completion=False, help="AI coaching for STAR stories.")


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


def _echo_list(title: str, items: list[str]) -> None:
    if not items:
        return
    typer.secho(f"\n{title}", bold=True)
    for item in items:
        typer.echo(f"  - {item}")


def _echo_feedback(feedback: AIFeedback) -> None:
    typer.secho("\nSummary", bold=True)
    typer.echo(f"  {feedback.summary}")
    _echo_list("Strengths", feedback.strengths)
    _echo_list("Improvements", feedback.improvements)
    _echo_list("Suggested metrics", feedback.suggested_metrics)
    _echo_list("Leadership Principle feedback", feedback.lp_feedback)
    if feedback.interview_tip:
        typer.secho("\nInterview tip", bold=True)
        typer.echo(f"  {feedback.interview_tip}")


def _echo_scorecard(scorecard: AIScorecard, level: str) -> None:
    typer.secho(
        f"\n{scorecard.rating} ({scorecard.total_score}/100) for {level}",
        fg=typer.colors.BLUE,
        bold=True,
    )
    if scorecard.score_breakdown:
        typer.secho("\nScore breakdown", bold=True)
        for name, points in scorecard.score_breakdown.items():
            typer.echo(f"  {name:<16} {points:>3}")
    typer.secho("\nSTAR", bold=True)
    for section, score in scorecard.star_scores.items():
        typer.echo(f"  {section.capitalize():<10} {score}/4")
    if scorecard.i_we_ratio:
        typer.echo(f"\nI/we: {scorecard.i_we_ratio}")
    if scorecard.metrics_quality:
        typer.echo(f"Metrics: {scorecard.metrics_quality}")
    if scorecard.scope_assessment:
        typer.echo(f"Scope: {scorecard.scope_assessment}")
    if scorecard.checklist:
        typer.secho("\nChecklist", bold=True)
        for name, passed in scorecard.checklist.items():
            typer.echo(f"  [{'x' if passed else ' '}] {name}")
    _echo_list("Red flags", scorecard.red_flags)
    _echo_list("Rewrite suggestions", scorecard.rewrite_suggestions)


@app.command()
def main(
    file_or_id: str = typer.Argument(..., help="YAML story file or stored story id"),
    level: Optional[str] = typer.Option(
        None, "--level", "-l", help="Target level for a scorecard (e.g., L6)"
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", "-p", help="openai or anthropic (default: LLM_PROVIDER)"
    ),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model override"),
    owner: str = typer.Option(DEFAULT_OWNER, "--owner", help="Story owner for database lookups"),
):
    """Request AI feedback (or a scorecard with --level) for a story."""
    story = load_story(file_or_id, owner)
    setup_coaching_logger(
        LOGS_PATH / f"coach_{now()}",
        phase="evaluate",
        provider=provider or os.getenv("LLM_PROVIDER", "openai"),
    )

    try:
        result = evaluate_story_with_ai(
            story, target_level=level, provider_name=provider, model=model
        )
    except IncompleteStoryError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if not result.success:
        typer.echo(f"ERROR: {result.error}", err=True)
        raise typer.Exit(1)

    if result.scorecard is not None:
        _echo_scorecard(result.scorecard, level)
    else:
        _echo_feedback(result.feedback)
    typer.echo(f"\n({result.provider})")


if __name__ == "__main__":
    app()
