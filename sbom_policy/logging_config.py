"""Logging configuration for sbom-policy."""

import logging
import sys


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """
    Set up logging for the sbom_policy package.

    Log records go to stderr so that reports written to stdout stay
    machine-readable.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("sbom_policy")

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    _apply_level(logger, level)

    return logger


def _apply_level(target: logging.Logger, level: str) -> None:
    numeric_level = getattr(logging, level.upper())
    target.setLevel(numeric_level)
    for handler in target.handlers:
        handler.setLevel(numeric_level)


def set_log_level(level: str) -> None:
    """Change the level of the package logger and all of its handlers."""
    _apply_level(logger, level)


# Global logger instance
logger = setup_logging()
