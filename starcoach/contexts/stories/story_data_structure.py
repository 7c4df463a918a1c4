"""
Story data structure for the Stories context.

Provides the Story class that represents a candidate's prepared STAR answer.
Leadership Principle assignment is held in a single mapping from LP id to
role, so an LP can never be both primary and secondary.
"""

import uuid
import warnings as warnings_module
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from omegaconf import OmegaConf

from starcoach.contexts.catalog import is_valid_lp

STAR_SECTIONS = ("situation", "task", "action", "result")

MIN_STRENGTH = 1
MAX_STRENGTH = 5


class LPRole(Enum):
    """How strongly a story is meant to demonstrate a Leadership Principle."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


def _new_story_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Story:
    """
    A candidate's prepared behavioral interview answer.

    Factory methods:
        new(story_id) - Empty story, as created by an editor
        from_dict(row) - Build from a persisted row / API payload (camelCase or snake_case)
        from_file(path) - Load from a YAML story file

    Attributes:
        story_id: Opaque identifier, unique per owner
        title, company, role: Descriptive header fields
        situation, task, action, result: The four STAR free-text sections
        metrics: Ordered short metric statements (may contain "" placeholders)
        lp_roles: LP id -> LPRole, in assignment order
        strength: Self-rating 1-5 (0 means not yet rated)
        questions_matched: Question ids manually associated with this story
    """

    story_id: str = field(default_factory=_new_story_id)
    title: str = ""
    company: str = ""
    role: str = ""
    situation: str = ""
    task: str = ""
    action: str = ""
    result: str = ""
    metrics: list[str] = field(default_factory=list)
    lp_roles: dict[str, LPRole] = field(default_factory=dict)
    strength: int = 0
    questions_matched: list[str] = field(default_factory=list)

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def new(cls, story_id: Optional[str] = None) -> "Story":
        """Create an empty story (fresh uuid4 id unless one is given)."""
        return cls(story_id=story_id or _new_story_id())

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "Story":
        """
        Build a Story from a row or payload dict.

        Accepts both the camelCase row shape (primaryLPs, secondaryLPs,
        questionsMatched, id) and snake_case keys. Missing or null values map to
        defaults. LP ids outside the catalog are dropped with a warning, and a
        strength outside 1-5 becomes 0 (unrated) with a warning. An LP listed as
        both primary and secondary is kept as primary.

        Args:
            row: Mapping with story fields

        Returns:
            Story instance
        """

        def pick(*keys, default=None):
            for key in keys:
                value = row.get(key)
                if value is not None:
                    return value
            return default

        primary = list(pick("primaryLPs", "primary_lps", default=[]))
        secondary = list(pick("secondaryLPs", "secondary_lps", default=[]))

        lp_roles: dict[str, LPRole] = {}
        for lp_id in primary:
            if _check_lp(lp_id):
                lp_roles[lp_id] = LPRole.PRIMARY
        for lp_id in secondary:
            if not _check_lp(lp_id):
                continue
            if lp_roles.get(lp_id) is LPRole.PRIMARY:
                warnings_module.warn(
                    f"LP '{lp_id}' listed as both primary and secondary; keeping primary",
                    stacklevel=2,
                )
                continue
            lp_roles[lp_id] = LPRole.SECONDARY

        story_id = pick("id", "story_id")

        return cls(
            story_id=str(story_id) if story_id else _new_story_id(),
            title=str(pick("title", default="")),
            company=str(pick("company", default="")),
            role=str(pick("role", default="")),
            situation=str(pick("situation", default="")),
            task=str(pick("task", default="")),
            action=str(pick("action", default="")),
            result=str(pick("result", default="")),
            metrics=[str(m) if m is not None else "" for m in pick("metrics", default=[])],
            lp_roles=lp_roles,
            strength=_check_strength(int(pick("strength", default=0) or 0)),
            questions_matched=[
                str(q) for q in pick("questionsMatched", "questions_matched", default=[])
            ],
        )

    @classmethod
    def from_file(cls, file_path: Path) -> "Story":
        """
        Load a story from a YAML file.

        If the file has no id, the filename stem is used as the story id.

        Args:
            file_path: Path to YAML story file

        Returns:
            Story instance
        """
        file_path = Path(file_path)
        data = OmegaConf.to_container(OmegaConf.load(file_path), resolve=True)
        if not isinstance(data, dict):
            raise ValueError(f"Story file must contain a mapping: {file_path}")
        if not data.get("id") and not data.get("story_id"):
            data["id"] = file_path.stem
        return cls.from_dict(data)

    # =========================================================================
    # PUBLIC API METHODS
    # =========================================================================

    @property
    def primary_lps(self) -> list[str]:
        return [lp_id for lp_id, role in self.lp_roles.items() if role is LPRole.PRIMARY]

    @property
    def secondary_lps(self) -> list[str]:
        return [lp_id for lp_id, role in self.lp_roles.items() if role is LPRole.SECONDARY]

    def toggle_lp(self, lp_id: str, primary: bool = True) -> None:
        """
        Editor toggle for LP assignment.

        If the LP already has the requested role it is removed. Otherwise it is
        given that role (appended at the end), which removes it from the other side.

        Args:
            lp_id: Leadership Principle id
            primary: Toggle on the primary side (True) or secondary side (False)

        Raises:
            ValueError: If lp_id is not in the catalog
        """
        if not is_valid_lp(lp_id):
            raise ValueError(f"Unknown Leadership Principle: {lp_id}")

        role = LPRole.PRIMARY if primary else LPRole.SECONDARY
        current = self.lp_roles.pop(lp_id, None)
        if current is not role:
            self.lp_roles[lp_id] = role

    def set_strength(self, strength: int) -> None:
        """Set the self-rating (1-5)."""
        if not MIN_STRENGTH <= strength <= MAX_STRENGTH:
            raise ValueError(
                f"Strength must be between {MIN_STRENGTH} and {MAX_STRENGTH}, got {strength}"
            )
        self.strength = strength

    def update(self, **fields) -> "Story":
        """Return a copy with the given fields replaced."""
        updated = replace(self, **fields)
        # replace() shares mutable containers with the original
        updated.metrics = list(updated.metrics)
        updated.lp_roles = dict(updated.lp_roles)
        updated.questions_matched = list(updated.questions_matched)
        return updated

    def star_payload(self) -> dict[str, Any]:
        """STAR sections plus metrics, as sent to the AI evaluation collaborator."""
        return {
            "situation": self.situation,
            "task": self.task,
            "action": self.action,
            "result": self.result,
            "metrics": list(self.metrics),
        }

    def has_content(self) -> bool:
        """True if any of situation, action or result has text."""
        return any(text.strip() for text in (self.situation, self.action, self.result))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase row shape."""
        return {
            "id": self.story_id,
            "title": self.title,
            "company": self.company,
            "role": self.role,
            "situation": self.situation,
            "task": self.task,
            "action": self.action,
            "result": self.result,
            "metrics": list(self.metrics),
            "primaryLPs": self.primary_lps,
            "secondaryLPs": self.secondary_lps,
            "strength": self.strength,
            "questionsMatched": list(self.questions_matched),
        }

    def to_file(self, file_path: Path) -> Path:
        """Write the story to a YAML file (snake_case keys)."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "id": self.story_id,
            "title": self.title,
            "company": self.company,
            "role": self.role,
            "situation": self.situation,
            "task": self.task,
            "action": self.action,
            "result": self.result,
            "metrics": list(self.metrics),
            "primary_lps": self.primary_lps,
            "secondary_lps": self.secondary_lps,
            "strength": self.strength,
            "questions_matched": list(self.questions_matched),
        }
        OmegaConf.save(OmegaConf.create(data), file_path)
        return file_path


def _check_lp(lp_id: str) -> bool:
    """Validate an LP id from external input, warning on unknown ids."""
    if is_valid_lp(lp_id):
        return True
    warnings_module.warn(f"Ignoring unknown Leadership Principle: {lp_id}", stacklevel=3)
    return False


def _check_strength(strength: int) -> int:
    """Validate a self-rating from external input; out-of-range values become 0."""
    if strength == 0 or MIN_STRENGTH <= strength <= MAX_STRENGTH:
        return strength
    warnings_module.warn(
        f"Ignoring strength {strength} outside {MIN_STRENGTH}-{MAX_STRENGTH}", stacklevel=3
    )
    return 0
