"""
Stories Context

Responsibilities:
- Defines the Story data model and its LP assignment invariant
- Persists stories per owner (load all / upsert / delete)
- Reports LP coverage and matches stories to interview questions

Owns: Story lifecycle and story-bank queries
Never: Scores stories (see the evaluation context)
"""

from starcoach.contexts.stories.coverage import (
    LPCoverage,
    coverage_gaps,
    coverage_level,
    lp_coverage,
    questions_for_story,
    stories_for_question,
)
from starcoach.contexts.stories.exceptions import StoryStoreError
from starcoach.contexts.stories.sample_stories import load_sample_stories
from starcoach.contexts.stories.story_data_structure import LPRole, Story
from starcoach.contexts.stories.story_store import StoryStore

__all__ = [
    "LPCoverage",
    "LPRole",
    "Story",
    "StoryStore",
    "StoryStoreError",
    "coverage_gaps",
    "coverage_level",
    "load_sample_stories",
    "lp_coverage",
    "questions_for_story",
    "stories_for_question",
]
