"""
Persistent SQLite store for a candidate's stories.

Implements the load / save / delete contract used by editors and CLIs. Every
operation is scoped to an owner id; owners never see each other's stories.
List-valued fields are stored as JSON text and round-trip in order.
"""

import json
import sqlite3
from pathlib import Path
from typing import List, Optional

from starcoach.contexts.stories.exceptions import StoryStoreError
from starcoach.contexts.stories.logger import _log_debug, _log_error, _log_info
from starcoach.contexts.stories.story_data_structure import Story
from starcoach.utils.event_logging import log_story_event
from starcoach.utils.timestamp import now_exact

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS stories (
        owner_id TEXT NOT NULL,
        id TEXT NOT NULL,

        title TEXT NOT NULL DEFAULT '',
        company TEXT NOT NULL DEFAULT '',
        role TEXT NOT NULL DEFAULT '',

        situation TEXT NOT NULL DEFAULT '',
        task TEXT NOT NULL DEFAULT '',
        action TEXT NOT NULL DEFAULT '',
        result TEXT NOT NULL DEFAULT '',

        metrics TEXT NOT NULL DEFAULT '[]',
        primary_lps TEXT NOT NULL DEFAULT '[]',
        secondary_lps TEXT NOT NULL DEFAULT '[]',
        strength INTEGER NOT NULL DEFAULT 0,
        questions_matched TEXT NOT NULL DEFAULT '[]',

        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,

        PRIMARY KEY (owner_id, id)
    )
"""

_UPSERT = """
    INSERT INTO stories (
        owner_id, id, title, company, role, situation, task, action, result,
        metrics, primary_lps, secondary_lps, strength, questions_matched,
        created_at, updated_at
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT (owner_id, id) DO UPDATE SET
        title = excluded.title,
        company = excluded.company,
        role = excluded.role,
        situation = excluded.situation,
        task = excluded.task,
        action = excluded.action,
        result = excluded.result,
        metrics = excluded.metrics,
        primary_lps = excluded.primary_lps,
        secondary_lps = excluded.secondary_lps,
        strength = excluded.strength,
        questions_matched = excluded.questions_matched,
        updated_at = excluded.updated_at
"""


class StoryStore:
    """
    SQLite-backed story persistence.

    The database file and schema are created on first use.

    Example:
        with StoryStore(Path("outs/stories.db")) as store:
            saved = store.upsert("local", story)
            stories = store.list("local")
    """

    def __init__(self, db_path: Path, events_file: Optional[Path] = None, source: str = "store"):
        """
        Args:
            db_path: SQLite database file (":memory:" for a throwaway store)
            events_file: Story event log override (default: STORY_EVENTS_FILE)
            source: Event source recorded with each save/delete event
        """
        self.db_path = db_path
        self.events_file = events_file
        self.source = source

        if str(db_path) != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self.conn = sqlite3.connect(str(db_path))
            self.conn.row_factory = sqlite3.Row
            self.conn.execute(_SCHEMA)
            self.conn.commit()
        except sqlite3.Error as e:
            raise StoryStoreError(f"Could not open story database {db_path}: {e}") from e

    def __enter__(self) -> "StoryStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    # =========================================================================
    # PUBLIC API METHODS
    # =========================================================================

    def list(self, owner_id: str) -> List[Story]:
        """
        Load all stories for an owner, newest first.

        Raises:
            StoryStoreError: If owner_id is empty or the query fails
        """
        _require_owner(owner_id)
        try:
            rows = self.conn.execute(
                "SELECT * FROM stories WHERE owner_id = ? ORDER BY created_at DESC, rowid DESC",
                (owner_id,),
            ).fetchall()
        except sqlite3.Error as e:
            _log_error(f"Failed to load stories for {owner_id}: {e}")
            raise StoryStoreError(f"Failed to load stories: {e}", owner_id=owner_id) from e

        _log_debug(f"Loaded {len(rows)} stories for {owner_id}")
        return [_row_to_story(row) for row in rows]

    def get(self, owner_id: str, story_id: str) -> Optional[Story]:
        """Load one story (None if the owner has no story with that id)."""
        _require_owner(owner_id)
        try:
            row = self.conn.execute(
                "SELECT * FROM stories WHERE owner_id = ? AND id = ?", (owner_id, story_id)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoryStoreError(
                f"Failed to load story: {e}", owner_id=owner_id, story_id=story_id
            ) from e
        return _row_to_story(row) if row else None

    def upsert(self, owner_id: str, story: Story) -> Story:
        """
        Insert or update a story.

        The creation time of an existing story is preserved; updated_at is refreshed.
        The passed Story is not modified.

        Returns:
            The story as stored

        Raises:
            StoryStoreError: If owner_id is empty or the write fails
        """
        _require_owner(owner_id)
        timestamp = now_exact()
        params = (
            owner_id,
            story.story_id,
            story.title,
            story.company,
            story.role,
            story.situation,
            story.task,
            story.action,
            story.result,
            json.dumps(list(story.metrics)),
            json.dumps(story.primary_lps),
            json.dumps(story.secondary_lps),
            story.strength,
            json.dumps(list(story.questions_matched)),
            timestamp,
            timestamp,
        )

        try:
            with self.conn:
                self.conn.execute(_UPSERT, params)
        except sqlite3.Error as e:
            _log_error(f"Failed to save story {story.story_id}: {e}")
            raise StoryStoreError(
                f"Failed to save story: {e}", owner_id=owner_id, story_id=story.story_id
            ) from e

        _log_info(f"Saved story {story.story_id} ({story.title or 'untitled'})")
        log_story_event(
            event_type="story_saved",
            story_id=story.story_id,
            owner_id=owner_id,
            source=self.source,
            events_file=self.events_file,
            title=story.title,
        )
        return self.get(owner_id, story.story_id)

    def delete(self, owner_id: str, story_id: str) -> bool:
        """
        Delete a story.

        Returns:
            True if a story was deleted, False if the owner had no such story

        Raises:
            StoryStoreError: If owner_id is empty or the write fails
        """
        _require_owner(owner_id)
        try:
            with self.conn:
                cursor = self.conn.execute(
                    "DELETE FROM stories WHERE owner_id = ? AND id = ?", (owner_id, story_id)
                )
        except sqlite3.Error as e:
            _log_error(f"Failed to delete story {story_id}: {e}")
            raise StoryStoreError(
                f"Failed to delete story: {e}", owner_id=owner_id, story_id=story_id
            ) from e

        deleted = cursor.rowcount > 0
        if deleted:
            _log_info(f"Deleted story {story_id}")
            log_story_event(
                event_type="story_deleted",
                story_id=story_id,
                owner_id=owner_id,
                source=self.source,
                events_file=self.events_file,
            )
        else:
            _log_debug(f"No story {story_id} to delete for {owner_id}")
        return deleted


def _require_owner(owner_id: str) -> None:
    if not owner_id or not owner_id.strip():
        raise StoryStoreError("An owner id is required to access stories")


def _row_to_story(row: sqlite3.Row) -> Story:
    return Story.from_dict(
        {
            "id": row["id"],
            "title": row["title"],
            "company": row["company"],
            "role": row["role"],
            "situation": row["situation"],
            "task": row["task"],
            "action": row["action"],
            "result": row["result"],
            "metrics": json.loads(row["metrics"]),
            "primaryLPs": json.loads(row["primary_lps"]),
            "secondaryLPs": json.loads(row["secondary_lps"]),
            "strength": row["strength"],
            "questionsMatched": json.loads(row["questions_matched"]),
        }
    )
