"""CLI module for sbom-policy.

This module provides the command-line interface. Options fall back to
environment variables when not given on the command line.
"""

from .main import (
    EXIT_ERROR,
    EXIT_OK,
    EXIT_POLICY_FAILURE,
    Config,
    build_config,
    cli,
    main,
    run_evaluation,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run_evaluation",
    "EXIT_OK",
    "EXIT_POLICY_FAILURE",
    "EXIT_ERROR",
]
