"""
Integration test for the bundled sample stories.
Tests: load YAML -> store in SQLite -> evaluate -> coverage -> reports.
"""

import pytest

from starcoach.contexts.evaluation import evaluate_stories
from starcoach.contexts.evaluation.report import format_coverage_matrix, format_evaluation_report
from starcoach.contexts.stories import (
    StoryStore,
    coverage_gaps,
    coverage_level,
    load_sample_stories,
    lp_coverage,
    questions_for_story,
    stories_for_question,
)
from starcoach.utils.event_logging import get_recent_events


@pytest.fixture
def seeded_store(tmp_path):
    events_file = tmp_path / "story_events.log"
    store = StoryStore(tmp_path / "stories.db", events_file=events_file, source="seed")
    for story in load_sample_stories():
        store.upsert("local", story)
    yield store, events_file
    store.close()


@pytest.mark.integration
def test_sample_stories_load():
    stories = load_sample_stories()

    assert [s.story_id for s in stories] == ["story1", "story2"]
    assert stories[0].primary_lps == ["are-right", "learn-curious", "dive-deep"]
    assert stories[0].strength == 5
    assert stories[1].metrics[1] == "#3 priority ranking"


@pytest.mark.integration
def test_seeded_stories_round_trip(seeded_store):
    store, events_file = seeded_store
    stored = {s.story_id: s for s in store.list("local")}

    for story in load_sample_stories():
        assert stored[story.story_id] == story

    saved_events = get_recent_events(event_type="story_saved", events_file=events_file)
    assert len(saved_events) == 2


@pytest.mark.integration
def test_sample_story_evaluations(seeded_store):
    """Test evaluator output on the realistic sample stories."""
    store, _ = seeded_store
    results = evaluate_stories(store.list("local"))

    checkout = results["story1"]
    assert "Result includes percentage metrics" in checkout.strengths
    assert "Result includes revenue/cost impact" in checkout.strengths
    assert 'Good use of "I" - clear personal contribution' in checkout.strengths
    assert checkout.metric_quality == 3
    assert "Are Right, A Lot" in checkout.lp_alignment.strong + checkout.lp_alignment.weak

    influence = results["story2"]
    assert influence.metric_quality == 2
    assert "scale" in influence.senior_signals.present

    for result in results.values():
        assert 1 <= result.overall_score <= 10


@pytest.mark.integration
def test_sample_story_coverage_and_questions(seeded_store):
    store, _ = seeded_store
    stories = store.list("local")

    coverage = lp_coverage(stories)
    assert coverage_level(coverage["learn-curious"].total) == "multiple"
    assert coverage_level(coverage["dive-deep"].total) == "single"
    assert "think-big" in [lp.id for lp in coverage_gaps(stories)]

    matches = stories_for_question("q14", stories)
    assert matches[0].story_id == "story1"

    checkout = next(s for s in stories if s.story_id == "story1")
    question_ids = [q.id for q in questions_for_story(checkout)]
    assert "q1" in question_ids
    assert [s.story_id for s in stories] == ["story2", "story1"]


@pytest.mark.integration
def test_sample_story_reports(seeded_store):
    store, _ = seeded_store
    stories = store.list("local")

    for story in stories:
        report = format_evaluation_report(story)
        assert story.title in report
        assert "Strengths (" in report

    matrix = format_coverage_matrix(stories)
    assert "LP coverage across 2 stories" in matrix
    assert "Gaps (no stories)" in matrix
