"""
Leadership Principle coverage and question matching across a story bank.

Answers two preparation questions:
- Which LPs do my stories cover, and where are the gaps?
- Which stories can I tell for a given interview question (and vice versa)?
"""

from dataclasses import dataclass
from typing import Iterable, List

from starcoach.contexts.catalog import (
    COMMON_QUESTIONS,
    LEADERSHIP_PRINCIPLES,
    CommonQuestion,
    LeadershipPrinciple,
    get_question,
)
from starcoach.contexts.stories.story_data_structure import Story


@dataclass(frozen=True)
class LPCoverage:
    """Story counts for one Leadership Principle."""

    primary: int
    secondary: int
    total: int


def lp_coverage(stories: Iterable[Story]) -> dict[str, LPCoverage]:
    """
    Count how many stories use each Leadership Principle.

    Args:
        stories: Story bank

    Returns:
        Dict mapping every catalog LP id (catalog order) to its coverage.
        `total` counts stories using the LP in either role.
    """
    stories = list(stories)
    coverage = {}
    for lp in LEADERSHIP_PRINCIPLES:
        primary = sum(1 for s in stories if lp.id in s.primary_lps)
        secondary = sum(1 for s in stories if lp.id in s.secondary_lps)
        coverage[lp.id] = LPCoverage(primary=primary, secondary=secondary, total=primary + secondary)
    return coverage


def coverage_level(total: int) -> str:
    """Bucket a coverage total: "none" (0), "single" (1) or "multiple" (2+)."""
    if total == 0:
        return "none"
    elif total == 1:
        return "single"
    return "multiple"


def coverage_gaps(stories: Iterable[Story]) -> List[LeadershipPrinciple]:
    """Leadership Principles no story covers, in catalog order."""
    coverage = lp_coverage(stories)
    return [lp for lp in LEADERSHIP_PRINCIPLES if coverage[lp.id].total == 0]


def stories_for_question(question_id: str, stories: Iterable[Story]) -> List[Story]:
    """
    Find stories that can answer a question.

    A story matches if the question's primary LP is among the story's primary
    or secondary LPs, if any of the question's secondary LPs is a primary LP of
    the story, or if the question was matched to the story by hand.

    Stories with the question's primary LP as a primary LP come first, then
    higher self-rated strength.

    Args:
        question_id: Question id (e.g., "q14")
        stories: Story bank

    Returns:
        Ordered matching stories ([] for an unknown question id)
    """
    question = get_question(question_id)
    if question is None:
        return []

    matches = [s for s in stories if _story_answers(question, s)]
    return sorted(
        matches,
        key=lambda s: (question.primary_lp not in s.primary_lps, -s.strength),
    )


def questions_for_story(story: Story) -> List[CommonQuestion]:
    """
    Find questions a story is suited to, in question bank order.

    A question matches if its primary LP is a primary LP of the story, if its
    secondary LPs overlap the story's secondary LPs, or if it was matched to the
    story by hand.
    """
    primary = set(story.primary_lps)
    secondary = set(story.secondary_lps)
    return [
        q
        for q in COMMON_QUESTIONS
        if q.primary_lp in primary
        or secondary.intersection(q.secondary_lps)
        or q.id in story.questions_matched
    ]


def _story_answers(question: CommonQuestion, story: Story) -> bool:
    primary = story.primary_lps
    return (
        question.primary_lp in primary
        or question.primary_lp in story.secondary_lps
        or any(lp_id in primary for lp_id in question.secondary_lps)
        or question.id in story.questions_matched
    )
