"""
Text reports for story evaluations and LP coverage.
"""

from typing import Iterable, Optional

from starcoach.contexts.catalog import LEADERSHIP_PRINCIPLES
from starcoach.contexts.evaluation.evaluation_data_structure import (
    STAR_MAX_SCORE,
    StoryEvaluationResult,
)
from starcoach.contexts.evaluation.evaluator import evaluate_story
from starcoach.contexts.stories.coverage import coverage_gaps, lp_coverage
from starcoach.contexts.stories.story_data_structure import LPRole, Story
from starcoach.utils.report_formatter import Column, TableFormatter, format_score

# Coverage matrix cell markers
_ROLE_MARKERS = {LPRole.PRIMARY: "P", LPRole.SECONDARY: "s"}
_NO_ROLE_MARKER = "."


def format_evaluation_report(
    story: Story, result: Optional[StoryEvaluationResult] = None, width: int = 80
) -> str:
    """
    Render a story evaluation as a text report.

    Args:
        story: Evaluated story (for the header)
        result: Evaluation to render (evaluated on the fly if omitted)
        width: Report width

    Returns:
        Multi-line report string
    """
    if result is None:
        result = evaluate_story(story)

    report = TableFormatter(
        [Column("Section", 12), Column("Score", 8, ">")],
        total_width=width,
    )
    title = story.title or "Untitled story"
    report.add_section_header(
        f"{title} | {result.overall_score:.1f}/10 | {result.overall_rating.value}"
    )
    if story.company or story.role:
        report.add_text(" @ ".join(part for part in (story.role, story.company) if part))
        report.add_blank_line()

    report.add_table_header().add_separator()
    for section, score in result.star_scores.to_dict().items():
        report.add_row([section.capitalize(), format_score(score, STAR_MAX_SCORE)])
    report.add_separator()

    signals = result.senior_signals
    report.add_text(
        f"Senior signals: {len(signals.present)}/{len(signals.present) + len(signals.missing)}"
        f" present ({', '.join(signals.present) or 'none'})"
    )
    if signals.missing:
        report.add_text(f"Missing signals: {', '.join(signals.missing)}")
    report.add_text(f"Metric quality: {result.metric_quality}/3")

    alignment = result.lp_alignment
    if alignment.strong or alignment.weak:
        report.add_text(
            f"LP alignment: strong [{', '.join(alignment.strong)}]"
            f" weak [{', '.join(alignment.weak)}]"
        )
    report.add_blank_line()

    report.add_bullet_list("Strengths", result.strengths, marker="+")
    report.add_bullet_list("Improvements", result.improvements, marker="-")
    report.add_bullet_list("Warnings", result.warnings, marker="!")

    return report.render()


def format_coverage_matrix(stories: Iterable[Story]) -> str:
    """
    Render a stories x Leadership Principles matrix.

    Each row shows the story's evaluator score and, per LP, "P" (primary),
    "s" (secondary) or "." (unused). A totals row and the list of uncovered
    LPs follow.
    """
    stories = list(stories)
    lp_columns = [Column(lp.short, 4, "^") for lp in LEADERSHIP_PRINCIPLES]
    columns = [Column("Story", 24), Column("Score", 5, ">")] + lp_columns
    total_width = sum(col.width for col in columns) + len(columns) - 1

    table = TableFormatter(columns, total_width=total_width)
    table.add_section_header(f"LP coverage across {len(stories)} stories")
    table.add_table_header().add_separator()

    for story in stories:
        result = evaluate_story(story)
        cells = [
            _ROLE_MARKERS.get(story.lp_roles.get(lp.id), _NO_ROLE_MARKER)
            for lp in LEADERSHIP_PRINCIPLES
        ]
        table.add_row([story.title or story.story_id, f"{result.overall_score:.1f}"] + cells)

    coverage = lp_coverage(stories)
    table.add_separator()
    table.add_row(["Total", ""] + [coverage[lp.id].total for lp in LEADERSHIP_PRINCIPLES])

    gaps = coverage_gaps(stories)
    table.add_blank_line()
    if gaps:
        table.add_bullet_list("Gaps (no stories)", [f"{lp.short}: {lp.name}" for lp in gaps])
    else:
        table.add_text("All Leadership Principles have at least one story")

    return table.render()
