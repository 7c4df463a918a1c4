"""
Shared utilities for STARCOACH.

Common functionality used across contexts:
- Logging (Tier 1 loguru setup, Tier 2 story event log)
- LLM provider access and response parsing
- Report formatting
- Timestamps
"""

from starcoach.utils.timestamp import format_timestamp, now, now_exact

__all__ = ["format_timestamp", "now", "now_exact"]
