"""
Story event logging utilities for STARCOACH (Tier 2 logging).

Provides uniform interfaces for logging story lifecycle events to story_events.log.
This is for cross-context coordination via a JSON Lines event log.

For detailed within-context logging (Tier 1), use starcoach.utils.logger instead.

Usage:
    from starcoach.utils.event_logging import log_story_event

    log_story_event(
        event_type="story_saved",
        story_id="3f0c...",
        owner_id="local",
        source="cli",
        title="Checkout Hypothesis Proven Wrong",
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from starcoach.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
STORY_EVENTS_FILE = Path(os.getenv("STORY_EVENTS_FILE", str(LOGS_PATH / "story_events.log")))


def log_story_event(
    event_type: str,
    story_id: str,
    owner_id: str,
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Log an event to the story event log.

    Events are appended in JSON Lines format (one JSON object per line), which
    enables streaming processing and easy filtering by event_type or story_id.

    Args:
        event_type: Type of event (e.g., "story_saved", "story_deleted")
        story_id: Story identifier
        owner_id: Owner the story belongs to
        source: Event source (e.g., "cli", "store", "coaching")
        events_file: Override log location (default: STORY_EVENTS_FILE)
        **extra_fields: Additional event-specific fields
    """
    events_file = Path(events_file) if events_file else STORY_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "story_id": story_id,
        "owner_id": owner_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    n: int = 10,
    story_id: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> list[dict]:
    """
    Get the last n events from the story event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        story_id: Filter to only events for this story (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override log location (default: STORY_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)
    """
    events_file = Path(events_file) if events_file else STORY_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if story_id:
        events = [e for e in events if e.get("story_id") == story_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
