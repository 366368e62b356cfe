"""Rich console rendering for sbom-policy.

This module provides shared Rich Console instances and the human-readable
rendering of evaluation results.
"""

import os

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from ._evaluation import EvaluationReport, MaterialResult

IS_CI = os.getenv("CI") == "true" or os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
    }
)

# Shared console instances; diagnostics go to stderr
console = Console(theme=custom_theme, force_terminal=IS_CI or None, color_system="auto", highlight=False)
err_console = Console(theme=custom_theme, stderr=True, highlight=False)

INDENT = "  "


def format_material_line(result: MaterialResult) -> Text:
    """Build the status line of one material, e.g. ``OK left-pad 1.3.0 licenses:['MIT'] annotations:{}``."""
    material = result.material
    status = Text("OK", style="success") if result.success else Text("NG", style="error")
    return Text.assemble(
        status,
        f" {material.name} {material.version or ''}",
        f" licenses:{material.licenses!r} annotations:{material.annotations!r}",
    )


def print_material_result(result: MaterialResult) -> None:
    """Print one material followed by its errors and warnings."""
    console.print(format_material_line(result))

    for message in result.outcome.errors:
        console.print(Text.assemble(INDENT, ("ERROR", "error"), f" {message}"))

    for message in result.outcome.warnings:
        console.print(Text.assemble(INDENT, ("WARNING", "warning"), f" {message}"))


def print_summary(report: EvaluationReport) -> None:
    """Print a one-line tally of the run."""
    failed = len(report.failed)
    if report.success:
        console.print(f"[success]✓ {len(report)} material(s) passed[/success]")
    else:
        console.print(f"[error]✗ {failed} of {len(report)} material(s) failed[/error]")


def print_error(message: str) -> None:
    """Print a fatal error to stderr."""
    err_console.print(Text.assemble(("Error:", "error"), f" {message}"))
