"""
Evaluation Context

Responsibilities:
- Scores STAR stories with deterministic, rule-based heuristics
- Detects senior-level signals and Leadership Principle alignment
- Renders evaluation and coverage reports

Owns: Scoring rules, keyword tables, evaluation result model
Never: Performs I/O, network calls or AI requests
"""

from starcoach.contexts.evaluation.evaluation_data_structure import (
    LPAlignment,
    Rating,
    SignalPartition,
    StarScores,
    StoryEvaluationResult,
)
from starcoach.contexts.evaluation.evaluator import (
    evaluate_stories,
    evaluate_story,
    rating_for_score,
)

__all__ = [
    "LPAlignment",
    "Rating",
    "SignalPartition",
    "StarScores",
    "StoryEvaluationResult",
    "evaluate_stories",
    "evaluate_story",
    "rating_for_score",
]
