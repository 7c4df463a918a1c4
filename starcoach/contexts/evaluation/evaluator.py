"""
Rule-based STAR story evaluator.

Scores a Story with deterministic keyword and length heuristics and returns
actionable feedback. No network, no I/O, no logging: the same story always
yields the same result, and any story (including an empty one) produces a
valid low-scoring result instead of an error.

Stages run in a fixed order because warnings both report problems and lower
the overall score:

    situation -> task -> action -> result -> metrics -> senior signals -> LP alignment
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from starcoach.contexts.catalog import get_lp
from starcoach.contexts.evaluation.evaluation_data_structure import (
    STAR_MAX_SCORE,
    STAR_TOTAL_MAX,
    Rating,
    StoryEvaluationResult,
)
from starcoach.contexts.evaluation.patterns import (
    LP_KEYWORDS,
    SENIOR_SIGNALS,
    count_action_verbs,
    count_first_person,
    count_we,
    has_dollar_amount,
    has_numbers,
    has_percentage,
    has_timeframe,
    matches_any,
    uses_first_person,
    word_count,
)
from starcoach.contexts.stories.story_data_structure import Story

STRENGTH = "strength"
IMPROVEMENT = "improvement"
WARNING = "warning"

# Overall score weights
STAR_WEIGHT = 6
SENIOR_SIGNAL_BONUS = 0.5
WARNING_PENALTY = 0.5
MIN_OVERALL_SCORE = 1
MAX_OVERALL_SCORE = 10

# Rating thresholds, evaluated high to low
RATING_THRESHOLDS = (
    (8, Rating.STRONG_HIRE),
    (6, Rating.HIRE),
    (4, Rating.BORDERLINE),
)

STRONG_SENIOR_SIGNAL_COUNT = 4
WEAK_SENIOR_SIGNAL_COUNT = 2
STRONG_ACTION_VERB_COUNT = 3
STRONG_METRIC_COUNT = 3


# =============================================================================
# SECTION SCORING RULES
# =============================================================================


@dataclass(frozen=True)
class LengthBand:
    """
    Score awarded when a section's word count falls in [min_words, max_words].

    max_words=None means no upper bound. A note, if given, is filed under
    note_kind (strength / improvement / warning).
    """

    min_words: int
    max_words: Optional[int]
    score: int
    note: Optional[str] = None
    note_kind: str = IMPROVEMENT

    def contains(self, words: int) -> bool:
        return words >= self.min_words and (self.max_words is None or words <= self.max_words)


@dataclass(frozen=True)
class SectionBonus:
    """+points when predicate(text) holds (with a strength note), else an improvement note."""

    predicate: Callable[[str], bool]
    points: int
    present_note: str
    missing_note: str


SITUATION_BANDS = (
    LengthBand(20, 60, 3, "Situation is appropriately concise", STRENGTH),
    LengthBand(61, None, 2, "Situation is too long - aim for 20-40 words"),
    LengthBand(1, 19, 1, "Situation needs more context - add scale, stakes, or team size"),
)
SITUATION_BONUS = SectionBonus(
    has_numbers,
    1,
    "Situation includes scale/numbers",
    "Add quantified context to Situation (team size, revenue, users)",
)

TASK_BANDS = (
    LengthBand(10, 40, 3),
    LengthBand(1, None, 2, "Task should clearly state YOUR specific responsibility (10-30 words)"),
)
TASK_BONUS = SectionBonus(
    uses_first_person,
    1,
    "Task clearly shows personal ownership",
    'Task should emphasize YOUR role - use "I" not "we"',
)

# Empty action text falls through to the "too short" band
ACTION_BANDS = (
    LengthBand(80, None, 3, "Action section has good depth", STRENGTH),
    LengthBand(
        40, 79, 2, "Action section needs more detail - should be 60-70% of your answer"
    ),
    LengthBand(0, None, 1, "Action section is too short - expand with specific steps YOU took", WARNING),
)

RESULT_BANDS = (
    LengthBand(30, None, 2),
    LengthBand(1, 29, 1, "Result section needs more detail on outcomes"),
)


def _add_note(evaluation: StoryEvaluationResult, kind: str, note: str) -> None:
    if kind == STRENGTH:
        evaluation.strengths.append(note)
    elif kind == WARNING:
        evaluation.warnings.append(note)
    else:
        evaluation.improvements.append(note)


def _score_section(
    evaluation: StoryEvaluationResult,
    text: str,
    bands: Iterable[LengthBand],
    bonus: Optional[SectionBonus] = None,
) -> int:
    """
    Score a section by word-count band, then apply an optional bonus check.

    The first band containing the word count wins; no band means 0. The bonus
    check runs regardless of the band score.
    """
    words = word_count(text)
    score = 0
    for band in bands:
        if band.contains(words):
            score = band.score
            if band.note:
                _add_note(evaluation, band.note_kind, band.note)
            break

    if bonus is not None:
        if bonus.predicate(text):
            score += bonus.points
            _add_note(evaluation, STRENGTH, bonus.present_note)
        else:
            _add_note(evaluation, IMPROVEMENT, bonus.missing_note)

    return score


# =============================================================================
# EVALUATION STAGES
# =============================================================================


def _evaluate_action(evaluation: StoryEvaluationResult, action: str) -> int:
    score = _score_section(evaluation, action, ACTION_BANDS)

    i_count = count_first_person(action)
    we_count = count_we(action)
    if i_count > we_count:
        score += 1
        evaluation.strengths.append('Good use of "I" - clear personal contribution')
    elif we_count > i_count:
        evaluation.warnings.append(
            f'"We" appears {we_count}x vs "I" {i_count}x - '
            f'replace "we" with specific actions YOU took'
        )

    if count_action_verbs(action) >= STRONG_ACTION_VERB_COUNT:
        evaluation.strengths.append("Strong action verbs demonstrate initiative")
    else:
        evaluation.improvements.append(
            "Use more specific action verbs: built, led, analyzed, convinced, launched"
        )

    return score


def _evaluate_result(evaluation: StoryEvaluationResult, result: str) -> float:
    score: float = _score_section(evaluation, result, RESULT_BANDS)

    if has_percentage(result):
        score += 1
        evaluation.strengths.append("Result includes percentage metrics")
    if has_dollar_amount(result):
        score += 1
        evaluation.strengths.append("Result includes revenue/cost impact")
    if has_timeframe(result):
        score += 0.5

    if not has_numbers(result):
        evaluation.warnings.append(
            "Result has no metrics - add specific numbers (%, $, users, time saved)"
        )

    return min(STAR_MAX_SCORE, score)


def _evaluate_metrics(evaluation: StoryEvaluationResult, metrics: Iterable[str]) -> int:
    quantified = sum(1 for metric in metrics if metric and has_numbers(metric))

    if quantified >= STRONG_METRIC_COUNT:
        evaluation.strengths.append("Strong quantified metrics")
        return 3
    elif quantified >= 1:
        evaluation.improvements.append("Add more specific metrics (aim for 3+)")
        return 2
    evaluation.warnings.append("No quantified metrics - this is critical for senior roles")
    return 1


def _evaluate_senior_signals(evaluation: StoryEvaluationResult, action: str, result: str) -> None:
    signals = evaluation.senior_signals
    for name, pattern in SENIOR_SIGNALS.items():
        if matches_any(pattern, action, result):
            signals.present.append(name)
        else:
            signals.missing.append(name)

    if len(signals.present) >= STRONG_SENIOR_SIGNAL_COUNT:
        evaluation.strengths.append("Strong senior-level signals present")
    elif len(signals.present) < WEAK_SENIOR_SIGNAL_COUNT:
        evaluation.warnings.append(
            "Add senior-level signals: cross-functional impact, strategic thinking, scale"
        )


def _evaluate_lp_alignment(
    evaluation: StoryEvaluationResult, primary_lps: Iterable[str], action: str, result: str
) -> None:
    alignment = evaluation.lp_alignment
    for lp_id in primary_lps:
        lp = get_lp(lp_id)
        pattern = LP_KEYWORDS.get(lp_id)
        if lp is None or pattern is None:
            continue
        if matches_any(pattern, action, result):
            alignment.strong.append(lp.name)
        else:
            alignment.weak.append(lp.name)

    if alignment.weak:
        evaluation.improvements.append(
            f"Story doesn't clearly demonstrate: {', '.join(alignment.weak)}. "
            f"Add relevant keywords/actions."
        )


def rating_for_score(score: float) -> Rating:
    """Map an overall score to its rating tier."""
    for threshold, rating in RATING_THRESHOLDS:
        if score >= threshold:
            return rating
    return Rating.NEEDS_WORK


# =============================================================================
# PUBLIC API
# =============================================================================


def evaluate_story(story: Story) -> StoryEvaluationResult:
    """
    Evaluate a STAR story.

    Args:
        story: Story to score (read only)

    Returns:
        StoryEvaluationResult with per-section scores, findings, senior signal
        detection, metric quality, LP alignment, overall score and rating
    """
    situation = story.situation or ""
    task = story.task or ""
    action = story.action or ""
    result = story.result or ""

    evaluation = StoryEvaluationResult()
    scores = evaluation.star_scores

    scores.situation = _score_section(evaluation, situation, SITUATION_BANDS, SITUATION_BONUS)
    scores.task = _score_section(evaluation, task, TASK_BANDS, TASK_BONUS)
    scores.action = _evaluate_action(evaluation, action)
    scores.result = _evaluate_result(evaluation, result)

    evaluation.metric_quality = _evaluate_metrics(evaluation, story.metrics or [])
    _evaluate_senior_signals(evaluation, action, result)
    _evaluate_lp_alignment(evaluation, story.primary_lps, action, result)

    raw_score = (
        (scores.total / STAR_TOTAL_MAX) * STAR_WEIGHT
        + SENIOR_SIGNAL_BONUS * len(evaluation.senior_signals.present)
        + evaluation.metric_quality
        - WARNING_PENALTY * len(evaluation.warnings)
    )
    evaluation.overall_score = float(min(MAX_OVERALL_SCORE, max(MIN_OVERALL_SCORE, raw_score)))
    evaluation.overall_rating = rating_for_score(evaluation.overall_score)

    return evaluation


def evaluate_stories(stories: Iterable[Story]) -> dict[str, StoryEvaluationResult]:
    """Evaluate each story, keyed by story id."""
    return {story.story_id: evaluate_story(story) for story in stories}
