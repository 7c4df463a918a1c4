"""
Common behavioral interview questions, each tagged with the Leadership
Principle it primarily probes plus secondary LPs it tends to surface.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommonQuestion:
    """
    A frequently asked behavioral question.

    Attributes:
        id: Stable identifier (e.g., "q14")
        text: Question wording
        primary_lp: LP id the question primarily targets
        secondary_lps: Other LP ids a good answer usually demonstrates
        category: Grouping label used for filtering
    """

    id: str
    text: str
    primary_lp: str
    secondary_lps: tuple[str, ...]
    category: str


COMMON_QUESTIONS: tuple[CommonQuestion, ...] = (
    CommonQuestion("q1", "Tell me about a time you were wrong", "are-right", ("earn-trust", "learn-curious"), "Failure & Learning"),
    CommonQuestion("q2", "Describe a time you went above and beyond for a customer", "customer-obsession", ("ownership", "deliver-results"), "Customer Focus"),
    CommonQuestion("q3", "Tell me about a time you had to make a decision with incomplete information", "bias-action", ("are-right", "ownership"), "Decision Making"),
    CommonQuestion("q4", "Describe a time you disagreed with your manager", "backbone", ("earn-trust", "are-right"), "Conflict & Influence"),
    CommonQuestion("q5", "Tell me about your most innovative project", "invent-simplify", ("think-big", "customer-obsession"), "Innovation"),
    CommonQuestion("q6", "Describe a time you failed to meet a deadline", "deliver-results", ("ownership", "earn-trust"), "Failure & Learning"),
    CommonQuestion("q7", "Tell me about a time you had to influence without authority", "earn-trust", ("ownership", "backbone"), "Conflict & Influence"),
    CommonQuestion("q8", "Describe a time you simplified a complex process", "invent-simplify", ("customer-obsession", "frugality"), "Innovation"),
    CommonQuestion("q9", "Tell me about developing someone on your team", "hire-develop", ("earn-trust", "best-employer"), "Leadership & Team"),
    CommonQuestion("q10", "Describe a time you had to deliver with limited resources", "frugality", ("deliver-results", "invent-simplify"), "Execution"),
    CommonQuestion("q11", "Tell me about a time you raised the bar", "highest-standards", ("customer-obsession", "deliver-results"), "Quality & Standards"),
    CommonQuestion("q12", "Describe your biggest career achievement", "deliver-results", ("ownership", "think-big"), "Execution"),
    CommonQuestion("q13", "Tell me about a time you took ownership outside your role", "ownership", ("customer-obsession", "bias-action"), "Ownership"),
    CommonQuestion("q14", "Describe a time you used data to make a decision", "dive-deep", ("are-right", "deliver-results"), "Decision Making"),
    CommonQuestion("q15", "Tell me about adapting to a new environment or role", "learn-curious", ("earn-trust", "ownership"), "Growth & Adaptability"),
    CommonQuestion("q16", "Describe a time you had to earn trust with a skeptical stakeholder", "earn-trust", ("customer-obsession", "backbone"), "Conflict & Influence"),
    CommonQuestion("q17", "Tell me about a bold bet or risk you took", "think-big", ("bias-action", "ownership"), "Innovation"),
    CommonQuestion("q18", "Describe handling conflicting priorities from stakeholders", "backbone", ("customer-obsession", "are-right"), "Conflict & Influence"),
    CommonQuestion("q19", "Tell me about a time you learned something that changed your approach", "learn-curious", ("are-right", "invent-simplify"), "Growth & Adaptability"),
    CommonQuestion("q20", "Describe building something from scratch", "ownership", ("invent-simplify", "deliver-results"), "Execution"),
    CommonQuestion("q21", "Tell me about catching a critical detail others missed", "dive-deep", ("highest-standards", "ownership"), "Quality & Standards"),
    CommonQuestion("q22", "Describe a time you committed to a decision you disagreed with", "backbone", ("earn-trust", "deliver-results"), "Conflict & Influence"),
    CommonQuestion("q23", "Tell me about receiving tough feedback", "earn-trust", ("learn-curious", "highest-standards"), "Failure & Learning"),
    CommonQuestion("q24", "Describe making your workplace more inclusive", "best-employer", ("earn-trust", "hire-develop"), "Leadership & Team"),
    CommonQuestion("q25", "Tell me about considering broader impact of a decision", "broad-responsibility", ("customer-obsession", "think-big"), "Leadership & Team"),
)

# "All" is the no-filter sentinel
QUESTION_CATEGORIES = (
    "All",
    "Customer Focus",
    "Decision Making",
    "Conflict & Influence",
    "Innovation",
    "Failure & Learning",
    "Execution",
    "Leadership & Team",
    "Quality & Standards",
    "Growth & Adaptability",
    "Ownership",
)

_QUESTION_BY_ID = {q.id: q for q in COMMON_QUESTIONS}


def get_question(question_id: str) -> Optional[CommonQuestion]:
    return _QUESTION_BY_ID.get(question_id)


def filter_questions(category: str = "All", lp_id: str = "all") -> list[CommonQuestion]:
    """
    Filter the question bank by category and/or Leadership Principle.

    Args:
        category: Category label, or "All" for every category
        lp_id: LP id that must be the question's primary or one of its
               secondary LPs, or "all" for no LP filter

    Returns:
        Matching questions in bank order
    """
    matches = []
    for question in COMMON_QUESTIONS:
        if category != "All" and question.category != category:
            continue
        if lp_id != "all" and question.primary_lp != lp_id and lp_id not in question.secondary_lps:
            continue
        matches.append(question)
    return matches
