"""
Coaching Context

Responsibilities:
- Requests AI feedback or interviewer-style scorecards for stories
- Parses free-form narratives into draft STAR stories

Owns: Prompts, AI result models, provider fallback
Never: Feeds back into rule-based scoring or persists stories
"""

from starcoach.contexts.coaching.ai_evaluation import (
    AIEvaluationRequest,
    AIEvaluationResult,
    AIFeedback,
    AIScorecard,
    evaluate_story_with_ai,
)
from starcoach.contexts.coaching.exceptions import (
    AIResponseFormatError,
    CoachingError,
    IncompleteStoryError,
    StoryParsingError,
)
from starcoach.contexts.coaching.story_parser import ParsedStory, parse_story_text

__all__ = [
    "AIEvaluationRequest",
    "AIEvaluationResult",
    "AIFeedback",
    "AIScorecard",
    "evaluate_story_with_ai",
    "AIResponseFormatError",
    "CoachingError",
    "IncompleteStoryError",
    "StoryParsingError",
    "ParsedStory",
    "parse_story_text",
]
