"""
Evaluation result data structures.

StoryEvaluationResult is derived fresh from a Story on every evaluation and is
never persisted. It is deliberately independent of the AI coaching result
types in the coaching context.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

STAR_MAX_SCORE = 4
STAR_TOTAL_MAX = 16


class Rating(str, Enum):
    """Hiring-style verdict tiers, highest first."""

    STRONG_HIRE = "Strong Hire"
    HIRE = "Hire"
    BORDERLINE = "Borderline"
    NEEDS_WORK = "Needs Work"


@dataclass
class StarScores:
    """
    Per-section STAR scores.

    Attributes:
        situation: 0-4 (length band 0-3, +1 for quantified context)
        task: 0-4 (length band 0-3, +1 for first-person framing)
        action: 1-4 (length band 1-3, +1 when "I" outnumbers "we")
        result: 0-4 in half steps (length, percentage, dollar, timeframe; capped)
    """

    situation: int = 0
    task: int = 0
    action: int = 0
    result: float = 0

    @property
    def total(self) -> float:
        return self.situation + self.task + self.action + self.result

    def to_dict(self) -> dict[str, float]:
        return {
            "situation": self.situation,
            "task": self.task,
            "action": self.action,
            "result": self.result,
        }


@dataclass
class SignalPartition:
    """Senior signal names split into detected and missing (together: all signals)."""

    present: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


@dataclass
class LPAlignment:
    """Primary LP display names split by whether the story text supports them."""

    strong: List[str] = field(default_factory=list)
    weak: List[str] = field(default_factory=list)


@dataclass
class StoryEvaluationResult:
    """
    Outcome of a rule-based story evaluation.

    Findings lists are ordered by evaluation stage:
    situation -> task -> action -> result -> metrics -> signals -> LP.

    Attributes:
        overall_score: Combined score, clamped to [1, 10]
        overall_rating: Tier derived from overall_score
        star_scores: Per-section scores
        strengths: Things the story does well
        improvements: Suggested refinements
        warnings: Serious gaps (each one also lowers overall_score)
        senior_signals: Senior-scope keyword detection
        metric_quality: 1 (none quantified) to 3 (3+ quantified metrics)
        lp_alignment: Primary LPs backed / not backed by the story text
    """

    overall_score: float = 0.0
    overall_rating: Rating = Rating.NEEDS_WORK
    star_scores: StarScores = field(default_factory=StarScores)
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    senior_signals: SignalPartition = field(default_factory=SignalPartition)
    metric_quality: int = 0
    lp_alignment: LPAlignment = field(default_factory=LPAlignment)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase result shape consumed by views."""
        return {
            "overallScore": self.overall_score,
            "overallRating": self.overall_rating.value,
            "starScores": self.star_scores.to_dict(),
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "warnings": list(self.warnings),
            "seniorSignals": {
                "present": list(self.senior_signals.present),
                "missing": list(self.senior_signals.missing),
            },
            "metricQuality": self.metric_quality,
            "lpAlignment": {
                "strong": list(self.lp_alignment.strong),
                "weak": list(self.lp_alignment.weak),
            },
        }
