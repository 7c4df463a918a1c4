"""Unit tests for the rule-based story evaluator."""

import pytest

from starcoach.contexts.evaluation import Rating, evaluate_story, rating_for_score
from starcoach.contexts.evaluation.patterns import SENIOR_SIGNALS
from starcoach.contexts.stories import LPRole, Story

SITUATION_22_WORDS = (
    "Our payments team of 12 engineers supported 3 regions and faced a 40 percent "
    "spike in failed checkouts during the holiday peak"
)
TASK_13_WORDS = "I was responsible for cutting checkout failures in half before the holiday freeze"
ACTION_80_WORDS = "I analyzed the logs and built a fix. " * 10
SIGNAL_SENTENCE = (
    "I led a cross-functional effort with stakeholder buy-in on a long-term roadmap "
    "at global scale, built a framework and learned to listen."
)
RESULT_12_WORDS = "Revenue increased 23%, adding $2M in annual recurring revenue over 2 quarters."


def strong_story() -> Story:
    return Story(
        title="Checkout reliability",
        situation=SITUATION_22_WORDS,
        task=TASK_13_WORDS,
        action=ACTION_80_WORDS + SIGNAL_SENTENCE,
        result=RESULT_12_WORDS + " " + " ".join(["filler"] * 20),
        metrics=["23% revenue growth", "$2M ARR", "40% fewer failures"],
    )


def expected_overall(result) -> float:
    raw = (
        result.star_scores.total / 16 * 6
        + 0.5 * len(result.senior_signals.present)
        + result.metric_quality
        - 0.5 * len(result.warnings)
    )
    return min(10, max(1, raw))


# =============================================================================
# EMPTY AND DEGENERATE STORIES
# =============================================================================


@pytest.mark.unit
def test_empty_story_scores_minimum():
    """Test that an empty story yields a valid low-scoring result."""
    result = evaluate_story(Story())

    assert result.star_scores.to_dict() == {"situation": 0, "task": 0, "action": 1, "result": 0}
    assert result.metric_quality == 1
    assert result.senior_signals.present == []
    assert result.senior_signals.missing == list(SENIOR_SIGNALS)
    assert len(result.warnings) == 4
    assert result.overall_score == 1.0
    assert result.overall_rating is Rating.NEEDS_WORK


@pytest.mark.unit
def test_whitespace_only_sections_count_as_empty():
    """Test that whitespace-only text scores like empty text."""
    blank = Story(situation="   ", task="\n\t", action="  ", result=" ")
    assert evaluate_story(blank).to_dict() == evaluate_story(Story()).to_dict()


@pytest.mark.unit
def test_empty_action_uses_too_short_warning():
    """Test that a zero-word action falls into the short-action warning."""
    result = evaluate_story(Story())
    assert result.star_scores.action == 1
    assert any(w.startswith("Action section is too short") for w in result.warnings)


@pytest.mark.unit
def test_none_sections_are_treated_as_empty():
    """Test that None text fields never raise."""
    story = Story(situation=None, task=None, action=None, result=None, metrics=None)
    result = evaluate_story(story)
    assert result.overall_score == 1.0


# =============================================================================
# SITUATION AND TASK
# =============================================================================


@pytest.mark.unit
def test_short_situation_with_numbers():
    """Test a 16-word quantified situation: short band plus numeric bonus."""
    story = Story(
        situation=(
            "Owned checkout flow processing $5M monthly serving 2 million users "
            "across 10 markets over 6 months."
        )
    )
    result = evaluate_story(story)

    assert result.star_scores.situation == 2
    assert "Situation includes scale/numbers" in result.strengths
    assert (
        "Situation needs more context - add scale, stakes, or team size" in result.improvements
    )


@pytest.mark.unit
def test_situation_with_non_ascii_digits_gets_no_numbers_bonus():
    result = evaluate_story(Story(situation="Team of \u0663 engineers owned the checkout flow."))

    assert "Situation includes scale/numbers" not in result.strengths


@pytest.mark.unit
def test_concise_situation_with_numbers():
    """Test a 20-60 word quantified situation scores the maximum."""
    result = evaluate_story(Story(situation=SITUATION_22_WORDS))

    assert result.star_scores.situation == 4
    assert "Situation is appropriately concise" in result.strengths
    assert "Situation includes scale/numbers" in result.strengths


@pytest.mark.unit
def test_long_situation_without_numbers():
    """Test an over-long, unquantified situation."""
    result = evaluate_story(Story(situation=" ".join(["context"] * 61)))

    assert result.star_scores.situation == 2
    assert "Situation is too long - aim for 20-40 words" in result.improvements
    assert "Add quantified context to Situation (team size, revenue, users)" in result.improvements


@pytest.mark.unit
def test_task_first_person_bonus():
    """Test that a first-person task in the 10-40 word band scores 4."""
    result = evaluate_story(Story(task=TASK_13_WORDS))

    assert result.star_scores.task == 4
    assert "Task clearly shows personal ownership" in result.strengths


@pytest.mark.unit
def test_task_collective_voice():
    """Test that a short "we" task gets both task improvements."""
    result = evaluate_story(Story(task="We needed to fix it"))

    assert result.star_scores.task == 2
    assert (
        "Task should clearly state YOUR specific responsibility (10-30 words)"
        in result.improvements
    )
    assert 'Task should emphasize YOUR role - use "I" not "we"' in result.improvements


@pytest.mark.unit
def test_lowercase_i_is_not_first_person():
    """Test that first-person detection is case-sensitive."""
    result = evaluate_story(Story(task="i was responsible for the whole migration plan end to end"))
    assert result.star_scores.task == 3


# =============================================================================
# ACTION
# =============================================================================


@pytest.mark.unit
def test_action_first_person_and_verbs():
    """Test short first-person action with three strong verbs."""
    action = "I built the dashboard. I led the rollout. I presented to leadership."
    result = evaluate_story(Story(action=action))

    assert result.star_scores.action == 2
    assert 'Good use of "I" - clear personal contribution' in result.strengths
    assert "Strong action verbs demonstrate initiative" in result.strengths
    assert not any(w.startswith('"We" appears') for w in result.warnings)


@pytest.mark.unit
def test_action_we_dominates():
    """Test the warning when "we" outnumbers "I"."""
    result = evaluate_story(Story(action="We decided to launch the feature and we measured results"))

    assert result.star_scores.action == 1
    assert (
        '"We" appears 2x vs "I" 0x - replace "we" with specific actions YOU took'
        in result.warnings
    )
    assert (
        "Use more specific action verbs: built, led, analyzed, convinced, launched"
        in result.improvements
    )


@pytest.mark.unit
def test_action_tie_adds_nothing():
    """Test that equal "I" and "we" counts add neither bonus nor warning."""
    result = evaluate_story(Story(action="I proposed it and we shipped it"))

    assert result.star_scores.action == 1
    assert not any("personal contribution" in s for s in result.strengths)
    assert not any(w.startswith('"We" appears') for w in result.warnings)


@pytest.mark.unit
def test_long_action_scores_maximum():
    """Test that an 80+ word first-person action scores 4."""
    result = evaluate_story(Story(action=ACTION_80_WORDS))

    assert result.star_scores.action == 4
    assert "Action section has good depth" in result.strengths


@pytest.mark.unit
def test_medium_action_needs_detail():
    """Test the 40-79 word band."""
    result = evaluate_story(Story(action=" ".join(["step"] * 40)))

    assert result.star_scores.action == 2
    assert (
        "Action section needs more detail - should be 60-70% of your answer"
        in result.improvements
    )


# =============================================================================
# RESULT AND METRICS
# =============================================================================


@pytest.mark.unit
def test_short_result_with_all_quantifiers():
    """Test percentage, dollar and timeframe detection in a short result."""
    result = evaluate_story(Story(result=RESULT_12_WORDS))

    assert result.star_scores.result == 3.5
    assert "Result includes percentage metrics" in result.strengths
    assert "Result includes revenue/cost impact" in result.strengths
    assert "Result section needs more detail on outcomes" in result.improvements


@pytest.mark.unit
def test_result_score_is_capped():
    """Test that a long, fully quantified result is capped at 4."""
    text = RESULT_12_WORDS + " " + " ".join(["filler"] * 20)
    result = evaluate_story(Story(result=text))
    assert result.star_scores.result == 4


@pytest.mark.unit
def test_result_without_numbers_warns():
    """Test the no-metrics warning on an unquantified result."""
    result = evaluate_story(Story(result="The launch went well and everyone was happy"))
    assert (
        "Result has no metrics - add specific numbers (%, $, users, time saved)" in result.warnings
    )


@pytest.mark.unit
def test_metrics_with_placeholders():
    """Test that empty and unquantified metric entries do not count."""
    result = evaluate_story(Story(metrics=["12% improvement", "", "no numbers here"]))

    assert result.metric_quality == 2
    assert "Add more specific metrics (aim for 3+)" in result.improvements
    assert "Strong quantified metrics" not in result.strengths


@pytest.mark.unit
def test_three_quantified_metrics():
    """Test metric quality 3 with three numeric entries."""
    result = evaluate_story(Story(metrics=["12%", "$3M", "4 weeks"]))

    assert result.metric_quality == 3
    assert "Strong quantified metrics" in result.strengths


@pytest.mark.unit
def test_no_metrics_warns():
    result = evaluate_story(Story(metrics=["", "tbd"]))

    assert result.metric_quality == 1
    assert "No quantified metrics - this is critical for senior roles" in result.warnings


# =============================================================================
# SENIOR SIGNALS AND LP ALIGNMENT
# =============================================================================


@pytest.mark.unit
def test_all_senior_signals_detected():
    """Test that every signal is found and reported in table order."""
    result = evaluate_story(Story(action=SIGNAL_SENTENCE))

    assert result.senior_signals.present == list(SENIOR_SIGNALS)
    assert result.senior_signals.missing == []
    assert "Strong senior-level signals present" in result.strengths


@pytest.mark.unit
def test_senior_signals_checked_in_result_too():
    """Test that signals in the result section count."""
    result = evaluate_story(Story(action="I fixed it", result="Adopted company-wide as the standard"))
    assert "scale" in result.senior_signals.present
    assert "mechanism" in result.senior_signals.present


@pytest.mark.unit
def test_senior_signals_match_substrings():
    """Test that signal keywords match inside longer words ("settled" contains "led")."""
    result = evaluate_story(Story(action="I settled the dispute"))
    assert "leadership" in result.senior_signals.present


@pytest.mark.unit
def test_present_and_missing_partition_signals():
    result = evaluate_story(strong_story())
    signals = result.senior_signals
    assert sorted(signals.present + signals.missing) == sorted(SENIOR_SIGNALS)
    assert not set(signals.present) & set(signals.missing)


@pytest.mark.unit
def test_lp_alignment_strong_and_weak():
    """Test LP alignment against action and result keywords."""
    story = Story(
        action="I owned the migration end-to-end",
        result="Nothing else to report",
        lp_roles={"ownership": LPRole.PRIMARY, "dive-deep": LPRole.PRIMARY},
    )
    result = evaluate_story(story)

    assert result.lp_alignment.strong == ["Ownership"]
    assert result.lp_alignment.weak == ["Dive Deep"]
    assert (
        "Story doesn't clearly demonstrate: Dive Deep. Add relevant keywords/actions."
        in result.improvements
    )


@pytest.mark.unit
def test_lp_alignment_skips_lps_without_keywords_and_secondary_lps():
    """Test that only primary LPs with a keyword table entry are checked."""
    story = Story(
        action="I did the work",
        lp_roles={"think-big": LPRole.PRIMARY, "dive-deep": LPRole.SECONDARY},
    )
    result = evaluate_story(story)

    assert result.lp_alignment.strong == []
    assert result.lp_alignment.weak == []
    assert not any(i.startswith("Story doesn't clearly demonstrate") for i in result.improvements)


# =============================================================================
# OVERALL SCORE AND RATING
# =============================================================================


@pytest.mark.unit
def test_strong_story_scores_maximum():
    """Test that a complete, quantified, senior story is a Strong Hire."""
    result = evaluate_story(strong_story())

    assert result.star_scores.total == 16
    assert result.metric_quality == 3
    assert result.warnings == []
    assert result.overall_score == 10.0
    assert result.overall_rating is Rating.STRONG_HIRE


@pytest.mark.unit
@pytest.mark.parametrize(
    "story",
    [
        Story(),
        strong_story(),
        Story(action="We decided to launch the feature and we measured results"),
        Story(situation=SITUATION_22_WORDS, task="We did it", metrics=["1 thing"]),
    ],
)
def test_overall_score_formula_and_bounds(story):
    """Test the overall score formula, its bounds and the derived rating."""
    result = evaluate_story(story)

    assert 1 <= result.overall_score <= 10
    assert result.overall_score == pytest.approx(expected_overall(result))
    assert result.overall_rating is rating_for_score(result.overall_score)
    assert 0 <= result.star_scores.situation <= 4
    assert 0 <= result.star_scores.task <= 4
    assert 1 <= result.star_scores.action <= 4
    assert 0 <= result.star_scores.result <= 4
    assert 1 <= result.metric_quality <= 3


@pytest.mark.unit
@pytest.mark.parametrize(
    "score,rating",
    [
        (10, Rating.STRONG_HIRE),
        (8, Rating.STRONG_HIRE),
        (7.99, Rating.HIRE),
        (6, Rating.HIRE),
        (5.5, Rating.BORDERLINE),
        (4, Rating.BORDERLINE),
        (3.99, Rating.NEEDS_WORK),
        (1, Rating.NEEDS_WORK),
    ],
)
def test_rating_thresholds(score, rating):
    assert rating_for_score(score) is rating


@pytest.mark.unit
def test_evaluation_is_idempotent_and_read_only():
    """Test that evaluating twice gives equal results and leaves the story unchanged."""
    story = strong_story()
    before = story.to_dict()

    first = evaluate_story(story)
    second = evaluate_story(story)

    assert first.to_dict() == second.to_dict()
    assert story.to_dict() == before


@pytest.mark.unit
def test_findings_follow_stage_order():
    """Test that improvements are listed situation first, metrics later."""
    story = Story(situation="Short context", metrics=["5 things"])
    improvements = evaluate_story(story).improvements

    situation_index = improvements.index(
        "Situation needs more context - add scale, stakes, or team size"
    )
    metrics_index = improvements.index("Add more specific metrics (aim for 3+)")
    assert situation_index < metrics_index


@pytest.mark.unit
def test_to_dict_shape():
    """Test the camelCase result shape."""
    data = evaluate_story(Story()).to_dict()

    assert set(data) == {
        "overallScore",
        "overallRating",
        "starScores",
        "strengths",
        "improvements",
        "warnings",
        "seniorSignals",
        "metricQuality",
        "lpAlignment",
    }
    assert data["overallRating"] == "Needs Work"
