"""Curation and policy evaluation of materials.

Example usage:
    from sbom_policy._evaluation import evaluate_materials, load_curator, load_policy

    report = evaluate_materials(materials, load_curator(), load_policy("policy.py"))
    if not report.success:
        for result in report.failed:
            print(result.material.name, result.outcome.errors)
"""

from .evaluator import evaluate_materials
from .models import EvaluateOutcome, EvaluationReport, MaterialResult
from .protocol import Curator, Policy
from .scripts import (
    DEFAULT_CURATION,
    DEFAULT_POLICY,
    HookScript,
    ScriptCurator,
    ScriptPolicy,
    load_curator,
    load_policy,
    read_script,
)

__all__ = [
    # Main API
    "evaluate_materials",
    "load_curator",
    "load_policy",
    # Interfaces and implementations
    "Curator",
    "Policy",
    "HookScript",
    "ScriptCurator",
    "ScriptPolicy",
    "read_script",
    # Models
    "EvaluateOutcome",
    "EvaluationReport",
    "MaterialResult",
    # Built-in scripts
    "DEFAULT_CURATION",
    "DEFAULT_POLICY",
]
