"""
Catalog Context

Responsibilities:
- Defines the fixed catalog of 16 Leadership Principles
- Provides the bank of common behavioral interview questions

Owns: Static reference data (read-only at runtime)
Never: Reads stories or scores anything
"""

from starcoach.contexts.catalog.leadership_principles import (
    LEADERSHIP_PRINCIPLES,
    LP_IDS,
    LeadershipPrinciple,
    get_lp,
    is_valid_lp,
)
from starcoach.contexts.catalog.questions import (
    COMMON_QUESTIONS,
    QUESTION_CATEGORIES,
    CommonQuestion,
    filter_questions,
    get_question,
)

__all__ = [
    "LEADERSHIP_PRINCIPLES",
    "LP_IDS",
    "LeadershipPrinciple",
    "get_lp",
    "is_valid_lp",
    "COMMON_QUESTIONS",
    "QUESTION_CATEGORIES",
    "CommonQuestion",
    "filter_questions",
    "get_question",
]
