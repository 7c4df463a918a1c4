"""Unit tests for AI story evaluation with a scripted provider."""

import json

import pytest

from starcoach.contexts.coaching import (
    AIEvaluationRequest,
    IncompleteStoryError,
    evaluate_story_with_ai,
)
from starcoach.contexts.stories import Story
from starcoach.utils.llm import LLMProvider, LLMResponse


class ScriptedProvider(LLMProvider):
    """Returns a fixed reply (or raises) and records the prompts it was given."""

    _provider_prefix = "scripted"
    _retry_message = "unused"

    def __init__(self, reply="", error=None):
        self._retryable_exception = TimeoutError
        self.reply = reply
        self.error = error
        self.prompts = []
        self.update_model("test-model")

    def _call_api(self, system_prompt, user_prompt, max_tokens, temperature):
        self.prompts.append((system_prompt, user_prompt, max_tokens, temperature))
        if self.error:
            raise self.error
        return LLMResponse(content=self.reply, model=self.model, input_tokens=10, output_tokens=10)


FEEDBACK_REPLY = {
    "summary": "Solid story with clear ownership.",
    "strengths": ["Clear I statements", "Quantified result"],
    "improvements": ["Tighten the situation"],
    "suggestedMetrics": ["Customer tickets avoided"],
    "lpFeedback": ["Ownership is well supported"],
    "interviewTip": "Lead with the result.",
}

SCORECARD_REPLY = {
    "rating": "Hire",
    "totalScore": 72,
    "scoreBreakdown": {
        "structure": 18,
        "ownership": 16,
        "impact": 14,
        "lpAlignment": 12,
        "seniority": 12,
    },
    "starScores": {"situation": 3, "task": 3, "action": 4, "result": 3},
    "iWeRatio": "Strong first person",
    "metricsQuality": "adequate",
    "scopeAssessment": "Team-level scope, light for L6",
    "checklist": {"clearOwnership": True, "quantifiedResult": True, "learning": False},
    "redFlags": [],
    "rewriteSuggestions": ["Add the org-wide follow-up"],
}


def sample_story() -> Story:
    return Story.from_dict(
        {
            "id": "s1",
            "situation": "Checkout failures spiked during peak",
            "task": "I owned the fix",
            "action": "I analyzed the logs and shipped a patch",
            "result": "Failures dropped 90%",
            "metrics": ["90% fewer failures", ""],
            "primaryLPs": ["ownership"],
            "secondaryLPs": ["dive-deep"],
        }
    )


@pytest.mark.unit
def test_request_payload_shape():
    request = AIEvaluationRequest.from_story(sample_story(), target_level="L6")

    assert request.to_payload() == {
        "story": {
            "situation": "Checkout failures spiked during peak",
            "task": "I owned the fix",
            "action": "I analyzed the logs and shipped a patch",
            "result": "Failures dropped 90%",
            "metrics": ["90% fewer failures", ""],
        },
        "primaryLPs": ["ownership"],
        "secondaryLPs": ["dive-deep"],
        "targetLevel": "L6",
    }
    assert "targetLevel" not in AIEvaluationRequest.from_story(sample_story()).to_payload()


@pytest.mark.unit
def test_feedback_success():
    """Test the simple feedback shape without a target level."""
    provider = ScriptedProvider(reply=json.dumps(FEEDBACK_REPLY))
    result = evaluate_story_with_ai(sample_story(), provider=provider)

    assert result.success
    assert result.scorecard is None
    assert result.feedback.summary == "Solid story with clear ownership."
    assert result.feedback.suggested_metrics == ["Customer tickets avoided"]
    assert result.feedback.interview_tip == "Lead with the result."
    assert result.provider == "scripted/test-model"
    assert result.model == "test-model"


@pytest.mark.unit
def test_prompt_includes_story_and_lp_names():
    provider = ScriptedProvider(reply=json.dumps(FEEDBACK_REPLY))
    evaluate_story_with_ai(sample_story(), provider=provider)

    _, user_prompt, max_tokens, temperature = provider.prompts[0]
    assert "I analyzed the logs and shipped a patch" in user_prompt
    assert "Primary Leadership Principles: Ownership" in user_prompt
    assert "Secondary Leadership Principles: Dive Deep" in user_prompt
    assert "**Key Metrics:** 90% fewer failures" in user_prompt
    assert max_tokens == 1000
    assert temperature == 0.7


@pytest.mark.unit
def test_scorecard_success():
    """Test the comprehensive scorecard when a target level is given."""
    provider = ScriptedProvider(reply="```json\n" + json.dumps(SCORECARD_REPLY) + "\n```")
    result = evaluate_story_with_ai(sample_story(), target_level="L6", provider=provider)

    assert result.success
    assert result.feedback is None
    scorecard = result.scorecard
    assert scorecard.rating == "Hire"
    assert scorecard.total_score == 72
    assert scorecard.star_scores == {"situation": 3, "task": 3, "action": 4, "result": 3}
    assert sum(scorecard.score_breakdown.values()) == 72
    assert scorecard.checklist["learning"] is False
    assert "L6" in provider.prompts[0][1]


@pytest.mark.unit
def test_incomplete_story_never_calls_provider():
    """Test that a story without situation, action or result is refused."""
    provider = ScriptedProvider(reply=json.dumps(FEEDBACK_REPLY))

    with pytest.raises(IncompleteStoryError):
        evaluate_story_with_ai(Story(task="I did things"), provider=provider)
    assert provider.prompts == []


@pytest.mark.unit
def test_unparseable_reply_is_a_failure():
    """Test that garbage output yields an explicit failure, not placeholder feedback."""
    provider = ScriptedProvider(reply="I'm sorry, I can't help with that.")
    result = evaluate_story_with_ai(sample_story(), provider=provider)

    assert not result.success
    assert result.feedback is None
    assert result.scorecard is None
    assert result.error.startswith("Could not evaluate story")


@pytest.mark.unit
def test_provider_error_is_a_failure():
    provider = ScriptedProvider(error=RuntimeError("quota exceeded"))
    result = evaluate_story_with_ai(sample_story(), provider=provider)

    assert not result.success
    assert "quota exceeded" in result.error
    assert result.provider == "scripted/test-model"


@pytest.mark.unit
def test_feedback_without_summary_is_a_failure():
    reply = dict(FEEDBACK_REPLY, summary="")
    result = evaluate_story_with_ai(sample_story(), provider=ScriptedProvider(json.dumps(reply)))

    assert not result.success
    assert "summary" in result.error


@pytest.mark.unit
@pytest.mark.parametrize(
    "override",
    [
        {"totalScore": 140},
        {"totalScore": "lots"},
        {"rating": None},
        {"starScores": {"situation": 3, "task": 3, "action": 5, "result": 3}},
        {"starScores": {"situation": 3, "task": 3, "action": 4}},
    ],
)
def test_malformed_scorecard_is_a_failure(override):
    reply = dict(SCORECARD_REPLY, **override)
    provider = ScriptedProvider(json.dumps(reply))
    result = evaluate_story_with_ai(sample_story(), target_level="L5", provider=provider)

    assert not result.success
    assert result.scorecard is None


@pytest.mark.unit
@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e999", '"inf"', '"nan"'])
@pytest.mark.parametrize("field", ["totalScore", "action"])
def test_non_finite_scorecard_numbers_are_a_failure(field, literal):
    """Test that NaN, infinite and overflowing scores fail instead of raising."""
    reply = json.dumps(dict(SCORECARD_REPLY, totalScore=72))
    if field == "totalScore":
        reply = reply.replace('"totalScore": 72', f'"totalScore": {literal}')
    else:
        reply = reply.replace('"action": 4', f'"action": {literal}')
    provider = ScriptedProvider(reply)
    result = evaluate_story_with_ai(sample_story(), target_level="L6", provider=provider)

    assert not result.success
    assert result.scorecard is None
    assert result.error.startswith("Could not evaluate story")


@pytest.mark.unit
def test_numeric_strings_in_scorecard_are_accepted():
    reply = dict(SCORECARD_REPLY, totalScore="72.4")
    provider = ScriptedProvider(json.dumps(reply))
    result = evaluate_story_with_ai(sample_story(), target_level="L6", provider=provider)

    assert result.success
    assert result.scorecard.total_score == 72


@pytest.mark.unit
def test_model_reported_error_is_a_failure():
    provider = ScriptedProvider(json.dumps({"error": "Story is not in English"}))
    result = evaluate_story_with_ai(sample_story(), provider=provider)

    assert not result.success
    assert "Story is not in English" in result.error


@pytest.mark.unit
def test_missing_provider_configuration_is_a_failure(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "nonexistent")
    result = evaluate_story_with_ai(sample_story())

    assert not result.success
    assert "Unknown provider" in result.error
