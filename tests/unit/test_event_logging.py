"""Unit tests for the JSON Lines story event log."""

import json

import pytest

from starcoach.utils.event_logging import get_recent_events, log_story_event
from starcoach.utils.timestamp import format_timestamp


@pytest.mark.unit
def test_log_story_event_appends_json_lines(tmp_path):
    """Test that each event is one JSON object per line."""
    events_file = tmp_path / "nested" / "story_events.log"

    log_story_event("story_saved", "s1", "alice", "cli", events_file=events_file, title="One")
    log_story_event("story_deleted", "s1", "alice", "cli", events_file=events_file)

    lines = events_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["event_type"] == "story_saved"
    assert first["story_id"] == "s1"
    assert first["owner_id"] == "alice"
    assert first["source"] == "cli"
    assert first["title"] == "One"
    assert "timestamp" in first


@pytest.mark.unit
def test_get_recent_events_filters_and_limits(tmp_path):
    events_file = tmp_path / "story_events.log"
    for index in range(5):
        log_story_event("story_saved", f"s{index}", "alice", "cli", events_file=events_file)
    log_story_event("story_deleted", "s1", "alice", "cli", events_file=events_file)

    recent = get_recent_events(n=2, events_file=events_file)
    assert [e["story_id"] for e in recent] == ["s4", "s1"]

    for_story = get_recent_events(story_id="s1", events_file=events_file)
    assert [e["event_type"] for e in for_story] == ["story_saved", "story_deleted"]

    deletes = get_recent_events(event_type="story_deleted", events_file=events_file)
    assert len(deletes) == 1


@pytest.mark.unit
def test_get_recent_events_skips_malformed_lines(tmp_path):
    events_file = tmp_path / "story_events.log"
    log_story_event("story_saved", "s1", "alice", "cli", events_file=events_file)
    with open(events_file, "a", encoding="utf-8") as f:
        f.write("not json\n")

    assert len(get_recent_events(events_file=events_file)) == 1


@pytest.mark.unit
def test_get_recent_events_missing_file(tmp_path):
    assert get_recent_events(events_file=tmp_path / "absent.log") == []


@pytest.mark.unit
def test_format_timestamp():
    assert format_timestamp("2025-11-13T18:45:40.123456") == "2025-11-13 18:45:40"
    assert format_timestamp("garbage") == "garbage"
