"""Custom exceptions for the stories context."""

from typing import Optional


class StoryStoreError(RuntimeError):
    """
    Exception raised when a story cannot be loaded, saved or deleted.

    Attributes:
        message: Error description
        owner_id: Owner the operation was scoped to
        story_id: Story involved, if any
    """

    def __init__(
        self,
        message: str,
        owner_id: Optional[str] = None,
        story_id: Optional[str] = None,
    ):
        self.message = message
        self.owner_id = owner_id
        self.story_id = story_id

        parts = [message]
        if story_id:
            parts.append(f"Story: {story_id}")
        if owner_id:
            parts.append(f"Owner: {owner_id}")

        super().__init__("\n".join(parts))
