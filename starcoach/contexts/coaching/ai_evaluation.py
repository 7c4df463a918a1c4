"""
AI-assisted story evaluation.

Sends a story to an LLM and returns either simple coaching feedback or, when a
target level is given, a comprehensive scorecard. This is best effort: provider
failures and unusable replies come back as an unsuccessful AIEvaluationResult
carrying the error, never as a made-up evaluation.

The result types here are separate from the rule-based StoryEvaluationResult.
"""

import json
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from starcoach.contexts.catalog import get_lp
from starcoach.contexts.coaching.exceptions import AIResponseFormatError, IncompleteStoryError
from starcoach.contexts.coaching.logger import _log_error, _log_info, _log_success
from starcoach.contexts.stories.story_data_structure import Story
from starcoach.utils.llm import LLMProvider, coerce_string_list, get_provider, parse_json_object

EVALUATION_MAX_TOKENS = 1000
SCORECARD_MAX_TOKENS = 2500
EVALUATION_TEMPERATURE = 0.7

STAR_KEYS = ("situation", "task", "action", "result")

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

_SYSTEM_PROMPT = """\
You are an expert behavioral interview coach. You specialize in evaluating STAR \
(Situation, Task, Action, Result) stories for Leadership Principle interviews.

Your job is to provide actionable, specific feedback to help candidates improve their \
interview stories. Focus on:
1. STAR structure quality
2. Personal ownership ("I" vs "we")
3. Quantified metrics and results
4. Leadership Principle alignment
5. Senior-level signals (cross-functional impact, strategic thinking, scale)

Always be constructive and specific. Provide concrete examples of how to improve."""

_STORY_BLOCK_TEMPLATE = """\
**Story Details:**
- Primary Leadership Principles: {primary}
- Secondary Leadership Principles: {secondary}

**Situation:** {situation}

**Task:** {task}

**Action:** {action}

**Result:** {result}

**Key Metrics:** {metrics}"""

_FEEDBACK_PROMPT_TEMPLATE = """\
Evaluate this STAR story for a behavioral interview:

{story_block}

Please provide your evaluation in the following JSON format:
{{
  "summary": "A 2-3 sentence overall assessment of the story",
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "improvements": ["specific improvement 1", "specific improvement 2", "specific improvement 3"],
  "suggestedMetrics": ["suggested metric 1", "suggested metric 2"],
  "lpFeedback": ["feedback on LP alignment 1", "feedback on LP alignment 2"],
  "interviewTip": "One key tip for delivering this story in an interview"
}}

Respond ONLY with the JSON object, no additional text."""

_SCORECARD_PROMPT_TEMPLATE = """\
Score this STAR story as a bar raiser would for a {target_level} candidate:

{story_block}

Return a scorecard in the following JSON format:
{{
  "rating": "Strong Hire | Hire | Lean Hire | No Hire",
  "totalScore": 0,
  "scoreBreakdown": {{"structure": 0, "ownership": 0, "impact": 0, "lpAlignment": 0, "seniority": 0}},
  "starScores": {{"situation": 1, "task": 1, "action": 1, "result": 1}},
  "iWeRatio": "one-line verdict on first-person vs collective framing",
  "metricsQuality": "strong | adequate | weak | missing",
  "scopeAssessment": "is the scope appropriate for {target_level}?",
  "checklist": {{"clearOwnership": false, "quantifiedResult": false, "conflictOrObstacle": false, "learning": false}},
  "redFlags": ["red flag 1"],
  "rewriteSuggestions": ["concrete rewrite 1", "concrete rewrite 2"]
}}

scoreBreakdown values must sum to totalScore (0-100). starScores are 1-4.
Respond ONLY with the JSON object, no additional text."""


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class AIEvaluationRequest:
    """
    Payload sent to the AI evaluation collaborator.

    Attributes:
        story: {situation, task, action, result, metrics}
        primary_lps / secondary_lps: LP ids
        target_level: Optional seniority (e.g., "L6"); requests a scorecard when set
    """

    story: dict[str, Any]
    primary_lps: list[str] = field(default_factory=list)
    secondary_lps: list[str] = field(default_factory=list)
    target_level: Optional[str] = None

    @classmethod
    def from_story(cls, story: Story, target_level: Optional[str] = None) -> "AIEvaluationRequest":
        return cls(
            story=story.star_payload(),
            primary_lps=story.primary_lps,
            secondary_lps=story.secondary_lps,
            target_level=target_level,
        )

    def to_payload(self) -> dict[str, Any]:
        payload = {
            "story": self.story,
            "primaryLPs": self.primary_lps,
            "secondaryLPs": self.secondary_lps,
        }
        if self.target_level:
            payload["targetLevel"] = self.target_level
        return payload

    def build_user_prompt(self) -> str:
        story_block = _STORY_BLOCK_TEMPLATE.format(
            primary=_lp_names(self.primary_lps),
            secondary=_lp_names(self.secondary_lps),
            situation=self.story.get("situation", ""),
            task=self.story.get("task", ""),
            action=self.story.get("action", ""),
            result=self.story.get("result", ""),
            metrics=", ".join(m for m in self.story.get("metrics", []) if m) or "None provided",
        )
        if self.target_level:
            return _SCORECARD_PROMPT_TEMPLATE.format(
                target_level=self.target_level, story_block=story_block
            )
        return _FEEDBACK_PROMPT_TEMPLATE.format(story_block=story_block)


@dataclass
class AIFeedback:
    """Free-form coaching feedback."""

    summary: str
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    suggested_metrics: list[str] = field(default_factory=list)
    lp_feedback: list[str] = field(default_factory=list)
    interview_tip: str = ""

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "AIFeedback":
        """
        Build feedback from a parsed model reply.

        Raises:
            AIResponseFormatError: If the reply has no usable summary
        """
        summary = data.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            raise AIResponseFormatError("Evaluation is missing a summary", json.dumps(data))

        return cls(
            summary=summary.strip(),
            strengths=coerce_string_list(data.get("strengths")),
            improvements=coerce_string_list(data.get("improvements")),
            suggested_metrics=coerce_string_list(data.get("suggestedMetrics")),
            lp_feedback=coerce_string_list(data.get("lpFeedback")),
            interview_tip=str(data.get("interviewTip") or "").strip(),
        )


@dataclass
class AIScorecard:
    """
    Comprehensive interviewer-style scorecard.

    Attributes:
        rating: Model's hiring verdict
        total_score: 0-100
        score_breakdown: Category -> points (sums to total_score)
        star_scores: situation/task/action/result -> 1-4
        i_we_ratio: Verdict on first-person framing
        metrics_quality: Label (e.g., "strong", "weak")
        scope_assessment: Whether scope fits the target level
        checklist: Named yes/no checks
        red_flags: Disqualifying or risky patterns
        rewrite_suggestions: Concrete rewrites
    """

    rating: str
    total_score: int
    score_breakdown: dict[str, int]
    star_scores: dict[str, int]
    i_we_ratio: str = ""
    metrics_quality: str = ""
    scope_assessment: str = ""
    checklist: dict[str, bool] = field(default_factory=dict)
    red_flags: list[str] = field(default_factory=list)
    rewrite_suggestions: list[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "AIScorecard":
        """
        Build a scorecard from a parsed model reply.

        Raises:
            AIResponseFormatError: If rating, total score or STAR scores are missing or out of range
        """
        raw = json.dumps(data)

        rating = data.get("rating")
        if not isinstance(rating, str) or not rating.strip():
            raise AIResponseFormatError("Scorecard is missing a rating", raw)

        total_score = _as_int(data.get("totalScore"))
        if total_score is None or not 0 <= total_score <= 100:
            raise AIResponseFormatError("Scorecard total score must be 0-100", raw)

        star_data = data.get("starScores")
        if not isinstance(star_data, dict):
            raise AIResponseFormatError("Scorecard is missing STAR scores", raw)
        star_scores = {}
        for key in STAR_KEYS:
            value = _as_int(star_data.get(key))
            if value is None or not 1 <= value <= 4:
                raise AIResponseFormatError(f"STAR score for {key} must be 1-4", raw)
            star_scores[key] = value

        breakdown_data = data.get("scoreBreakdown")
        breakdown = {}
        if isinstance(breakdown_data, dict):
            for name, points in breakdown_data.items():
                value = _as_int(points)
                if value is not None:
                    breakdown[str(name)] = value

        checklist_data = data.get("checklist")
        checklist = {}
        if isinstance(checklist_data, dict):
            checklist = {str(k): bool(v) for k, v in checklist_data.items()}

        return cls(
            rating=rating.strip(),
            total_score=total_score,
            score_breakdown=breakdown,
            star_scores=star_scores,
            i_we_ratio=str(data.get("iWeRatio") or "").strip(),
            metrics_quality=str(data.get("metricsQuality") or "").strip(),
            scope_assessment=str(data.get("scopeAssessment") or "").strip(),
            checklist=checklist,
            red_flags=coerce_string_list(data.get("redFlags")),
            rewrite_suggestions=coerce_string_list(data.get("rewriteSuggestions")),
        )


@dataclass
class AIEvaluationResult:
    """
    Outcome of an AI evaluation request.

    Exactly one of feedback / scorecard is set when success is True. On failure
    both are None and error says why the story could not be evaluated.
    """

    success: bool
    feedback: Optional[AIFeedback] = None
    scorecard: Optional[AIScorecard] = None
    error: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def failed(
        cls, error: str, provider: Optional[str] = None, model: Optional[str] = None
    ) -> "AIEvaluationResult":
        return cls(
            success=False,
            error=f"Could not evaluate story: {error}",
            provider=provider,
            model=model,
        )


# =============================================================================
# EVALUATION
# =============================================================================


def evaluate_story_with_ai(
    story: Story,
    target_level: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
    provider_name: Optional[str] = None,
    model: Optional[str] = None,
) -> AIEvaluationResult:
    """
    Ask an LLM to evaluate a story.

    Args:
        story: Story to evaluate
        target_level: Seniority to score against; requests a scorecard when set
        provider: Ready provider instance (takes precedence)
        provider_name: "openai" or "anthropic" when no provider is passed
        model: Model override when no provider is passed

    Returns:
        AIEvaluationResult (success=False with an error on any provider or format failure)

    Raises:
        IncompleteStoryError: If situation, action and result are all empty
    """
    if not story.has_content():
        raise IncompleteStoryError("Please add content to your story before evaluating")

    request = AIEvaluationRequest.from_story(story, target_level=target_level)

    if provider is None:
        try:
            provider = get_provider(provider_name=provider_name, model=model)
        except (ImportError, ValueError) as e:
            _log_error(f"No AI provider available: {e}")
            return AIEvaluationResult.failed(str(e))

    kind = "scorecard" if target_level else "feedback"
    _log_info(f"Requesting AI {kind} for {story.story_id} from {provider.name}")

    try:
        response = provider.generate(
            system_prompt=_SYSTEM_PROMPT,
            user_prompt=request.build_user_prompt(),
            max_tokens=SCORECARD_MAX_TOKENS if target_level else EVALUATION_MAX_TOKENS,
            temperature=EVALUATION_TEMPERATURE,
        )
    except Exception as e:  # provider SDK errors (rate limit, quota, network)
        _log_error(f"AI provider {provider.name} failed: {e}")
        return AIEvaluationResult.failed(str(e), provider=provider.name, model=provider.model)

    data = parse_json_object(response.content)
    if data is None:
        _log_error(f"Unparseable AI response from {provider.name}")
        return AIEvaluationResult.failed(
            "AI response was not valid JSON", provider=provider.name, model=provider.model
        )

    if data.get("error"):
        _log_error(f"AI reported an error: {data['error']}")
        return AIEvaluationResult.failed(
            str(data["error"]), provider=provider.name, model=provider.model
        )

    result = AIEvaluationResult(success=True, provider=provider.name, model=response.model)
    try:
        if target_level:
            result.scorecard = AIScorecard.from_response(data)
        else:
            result.feedback = AIFeedback.from_response(data)
    except AIResponseFormatError as e:
        _log_error(f"Malformed AI {kind}: {e.message}")
        return AIEvaluationResult.failed(e.message, provider=provider.name, model=provider.model)

    _log_success(f"AI {kind} received for {story.story_id}")
    return result


def _lp_names(lp_ids: list[str]) -> str:
    names = []
    for lp_id in lp_ids:
        lp = get_lp(lp_id)
        names.append(lp.name if lp else lp_id)
    return ", ".join(names) or "None"


def _as_int(value) -> Optional[int]:
    """Coerce a numeric JSON value to int (None for non-numbers, non-finite values and booleans)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, int):
        return value
    if not isinstance(value, float):
        return None
    # json.loads accepts NaN, Infinity and overflowing literals like 1e999
    if not math.isfinite(value):
        return None
    return int(round(value))
