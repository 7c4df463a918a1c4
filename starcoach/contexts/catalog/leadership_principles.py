"""
Leadership Principle catalog.

The catalog is fixed: 16 entries, in display order. It defines the universe of
valid LP identifiers a story may reference as primary or secondary.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LeadershipPrinciple:
    """
    A company evaluation value a story can demonstrate.

    Attributes:
        id: Stable identifier (e.g., "dive-deep")
        name: Display name (e.g., "Dive Deep")
        short: Short code used in compact tables (e.g., "DD")
        description: Optional longer description
    """

    id: str
    name: str
    short: str
    description: Optional[str] = None


LEADERSHIP_PRINCIPLES: tuple[LeadershipPrinciple, ...] = (
    LeadershipPrinciple("customer-obsession", "Customer Obsession", "CO"),
    LeadershipPrinciple("ownership", "Ownership", "OWN"),
    LeadershipPrinciple("invent-simplify", "Invent and Simplify", "INV"),
    LeadershipPrinciple("are-right", "Are Right, A Lot", "ARL"),
    LeadershipPrinciple("learn-curious", "Learn and Be Curious", "LBC"),
    LeadershipPrinciple("hire-develop", "Hire and Develop the Best", "HDB"),
    LeadershipPrinciple("highest-standards", "Insist on Highest Standards", "IHS"),
    LeadershipPrinciple("think-big", "Think Big", "TB"),
    LeadershipPrinciple("bias-action", "Bias for Action", "BFA"),
    LeadershipPrinciple("frugality", "Frugality", "FRU"),
    LeadershipPrinciple("earn-trust", "Earn Trust", "ET"),
    LeadershipPrinciple("dive-deep", "Dive Deep", "DD"),
    LeadershipPrinciple("backbone", "Have Backbone; Disagree and Commit", "BB"),
    LeadershipPrinciple("deliver-results", "Deliver Results", "DR"),
    LeadershipPrinciple("best-employer", "Strive to be Earth's Best Employer", "BE"),
    LeadershipPrinciple(
        "broad-responsibility", "Success and Scale Bring Broad Responsibility", "BR"
    ),
)

_LP_BY_ID = {lp.id: lp for lp in LEADERSHIP_PRINCIPLES}

LP_IDS: tuple[str, ...] = tuple(_LP_BY_ID)


def get_lp(lp_id: str) -> Optional[LeadershipPrinciple]:
    """Look up a Leadership Principle by id (None if unknown)."""
    return _LP_BY_ID.get(lp_id)


def is_valid_lp(lp_id: str) -> bool:
    return lp_id in _LP_BY_ID
