"""
Regex patterns and keyword tables used by the story evaluator.

Pattern classes follow the convention used across contexts:
- Dataclasses with frozen=True for immutability
- Class-level compiled patterns, built once at import
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from types import MappingProxyType

# =============================================================================
# TEXT FEATURE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class TextPatterns:
    """
    Quantification and voice detectors for STAR section text.

    Compiled with re.ASCII: digits and word boundaries are ASCII only.
    """

    NUMBER: re.Pattern = re.compile(r"\d+", re.ASCII)

    PERCENTAGE: re.Pattern = re.compile(r"%|\bpercent\b", re.IGNORECASE | re.ASCII)

    # "$2M", "$600,000" or a number followed by a scale word ("2 million", "600k")
    DOLLAR_AMOUNT: re.Pattern = re.compile(
        r"\$[\d,]+|\d+\s*(?:million|thousand|k|m|bn)", re.IGNORECASE | re.ASCII
    )

    # A number followed by a duration unit ("6 weeks", "2 quarters")
    TIMEFRAME: re.Pattern = re.compile(
        r"\d+\s*(?:day|week|month|quarter|year|sprint)", re.IGNORECASE | re.ASCII
    )

    # Case-sensitive: lowercase "i" is not first person
    FIRST_PERSON: re.Pattern = re.compile(r"\bI\b", re.ASCII)

    COLLECTIVE: re.Pattern = re.compile(r"\bwe\b", re.IGNORECASE | re.ASCII)

    ACTION_VERB: re.Pattern = re.compile(
        r"\b(?:built|created|led|designed|analyzed|presented|convinced|negotiated"
        r"|prioritized|launched|shipped|identified|proposed|implemented)\b",
        re.IGNORECASE | re.ASCII,
    )


# =============================================================================
# SENIOR SIGNAL PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SeniorSignalPatterns:
    """
    Keyword detectors for behaviors associated with senior scope.

    Matching is substring-based (no word boundaries), so "led" also fires on
    "settled" and "system" on "ecosystem".
    """

    CROSS_FUNCTIONAL: re.Pattern = re.compile(
        r"cross-functional|cross functional|multiple teams|stakeholder", re.IGNORECASE
    )
    STRATEGIC: re.Pattern = re.compile(r"strategic|strategy|long-term|roadmap|vision", re.IGNORECASE)
    SCALE: re.Pattern = re.compile(
        r"scale|million|thousands|org-wide|company-wide|global", re.IGNORECASE
    )
    LEADERSHIP: re.Pattern = re.compile(r"led|managed|mentored|coached|developed|hired", re.IGNORECASE)
    INFLUENCE: re.Pattern = re.compile(
        r"influenced|convinced|aligned|buy-in|stakeholder", re.IGNORECASE
    )
    MECHANISM: re.Pattern = re.compile(r"process|mechanism|framework|system|standard", re.IGNORECASE)
    LEARNING: re.Pattern = re.compile(
        r"learned|realized|changed my approach|differently", re.IGNORECASE
    )


# Signal name -> pattern, in reporting order
SENIOR_SIGNALS = MappingProxyType(
    {
        "cross-functional": SeniorSignalPatterns.CROSS_FUNCTIONAL,
        "strategic": SeniorSignalPatterns.STRATEGIC,
        "scale": SeniorSignalPatterns.SCALE,
        "leadership": SeniorSignalPatterns.LEADERSHIP,
        "influence": SeniorSignalPatterns.INFLUENCE,
        "mechanism": SeniorSignalPatterns.MECHANISM,
        "learning": SeniorSignalPatterns.LEARNING,
    }
)


# =============================================================================
# LEADERSHIP PRINCIPLE KEYWORDS
# =============================================================================

# Only these LPs are checked for alignment; others are skipped
LP_KEYWORDS = MappingProxyType(
    {
        "customer-obsession": re.compile(r"customer|user|client|feedback|experience", re.IGNORECASE),
        "ownership": re.compile(r"owned|responsible|accountability|end-to-end", re.IGNORECASE),
        "invent-simplify": re.compile(
            r"simplified|innovated|created|new approach|streamlined", re.IGNORECASE
        ),
        "are-right": re.compile(r"wrong|incorrect|mistake|hypothesis|proved", re.IGNORECASE),
        "learn-curious": re.compile(
            r"learned|discovered|curious|explored|researched", re.IGNORECASE
        ),
        "dive-deep": re.compile(
            r"analyzed|data|metrics|investigated|root cause", re.IGNORECASE
        ),
        "earn-trust": re.compile(
            r"trust|relationship|transparent|honest|credibility", re.IGNORECASE
        ),
        "backbone": re.compile(
            r"disagreed|pushed back|challenged|committed|despite", re.IGNORECASE
        ),
        "deliver-results": re.compile(
            r"delivered|shipped|launched|achieved|completed", re.IGNORECASE
        ),
        "frugality": re.compile(
            r"limited|constrained|efficient|resourceful|budget", re.IGNORECASE
        ),
    }
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def word_count(text: str) -> int:
    """Whitespace-separated word count of trimmed text (0 for empty or None)."""
    if not text:
        return 0
    return len(text.split())


def has_numbers(text: str) -> bool:
    return bool(text) and TextPatterns.NUMBER.search(text) is not None


def has_percentage(text: str) -> bool:
    return bool(text) and TextPatterns.PERCENTAGE.search(text) is not None


def has_dollar_amount(text: str) -> bool:
    return bool(text) and TextPatterns.DOLLAR_AMOUNT.search(text) is not None


def has_timeframe(text: str) -> bool:
    return bool(text) and TextPatterns.TIMEFRAME.search(text) is not None


def uses_first_person(text: str) -> bool:
    return bool(text) and TextPatterns.FIRST_PERSON.search(text) is not None


def count_first_person(text: str) -> int:
    """Occurrences of the whole word "I" (case-sensitive)."""
    return len(TextPatterns.FIRST_PERSON.findall(text or ""))


def count_we(text: str) -> int:
    """Occurrences of the whole word "we" (any case)."""
    return len(TextPatterns.COLLECTIVE.findall(text or ""))


def count_action_verbs(text: str) -> int:
    """Total occurrences of strong action verbs (repeats count)."""
    return len(TextPatterns.ACTION_VERB.findall(text or ""))


def matches_any(pattern: re.Pattern, *texts: str) -> bool:
    """True if the pattern matches at least one of the texts."""
    return any(text and pattern.search(text) for text in texts)
