"""Custom exceptions for the coaching (AI collaborator) context."""

from typing import Optional


class CoachingError(Exception):
    """Base class for AI coaching failures."""


class IncompleteStoryError(CoachingError):
    """Raised when a story has no situation, action or result to evaluate."""


class AIResponseFormatError(CoachingError):
    """
    Raised when a model reply cannot be turned into the expected structure.

    Attributes:
        message: Error description
        raw_response: The reply text (truncated in the message)
    """

    def __init__(self, message: str, raw_response: Optional[str] = None):
        self.message = message
        self.raw_response = raw_response

        parts = [message]
        if raw_response:
            snippet = raw_response[:200] + "..." if len(raw_response) > 200 else raw_response
            parts.append(f"\nModel response:\n{snippet}")

        super().__init__("\n".join(parts))


class StoryParsingError(CoachingError):
    """
    Raised when free text cannot be decomposed into a STAR story.

    Attributes:
        message: Error description
        reason: Explanation reported by the model, if any
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        self.message = message
        self.reason = reason
        super().__init__(f"{message}: {reason}" if reason else message)
