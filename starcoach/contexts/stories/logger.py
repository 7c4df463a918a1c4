"""
Stories context logger.

Provides logging interface for the stories context with automatic [stories] prefix.
All stories modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from starcoach.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[stories]"


def setup_stories_logger(log_dir: Path, db_path: Path) -> Path:
    """
    Setup logger for the stories context.

    Args:
        log_dir: Directory for this logging session
        db_path: Story database in use (recorded in the provenance header)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="stories",
        log_dir=log_dir,
        extra_provenance={"Story database": db_path},
    )


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
