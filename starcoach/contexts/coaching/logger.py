"""
Coaching context logger.

Provides logging interface for the coaching context with automatic [coach] prefix.
"""

from pathlib import Path

from loguru import logger

from starcoach.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[coach]"


def setup_coaching_logger(log_dir: Path, phase: str, provider: str = None) -> Path:
    """
    Setup logger for the coaching context.

    Args:
        log_dir: Directory for this logging session
        phase: "evaluate" or "parse"
        provider: LLM provider name(s) for provenance

    Returns:
        Path to log file
    """
    provenance = {"Phase": phase}
    if provider:
        provenance["LLM provider"] = provider
    return _setup_logger(context_name="coach", log_dir=log_dir, extra_provenance=provenance)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")
