"""Capability interfaces for curation and policy evaluation."""

from typing import Protocol

from ..material import Material
from .models import EvaluateOutcome


class Curator(Protocol):
    """Rewrites a material before it is evaluated.

    Example:
        class LowercaseNames:
            def curate(self, material: Material) -> Material:
                material.name = material.name.lower()
                return material
    """

    def curate(self, material: Material) -> Material:
        """Return the curated material.

        Implementations may mutate and return the material they were given.

        Raises:
            EngineError: If the curation logic fails.
        """
        ...


class Policy(Protocol):
    """Judges a curated material.

    Example:
        class NoCopyleft:
            def evaluate(self, material: Material) -> EvaluateOutcome:
                outcome = EvaluateOutcome()
                for license_id in material.licenses:
                    if license_id.startswith("GPL"):
                        outcome.add_error(f"{license_id} is not allowed")
                return outcome
    """

    def evaluate(self, material: Material) -> EvaluateOutcome:
        """Return the outcome for one material.

        Raises:
            EngineError: If the policy logic fails.
        """
        ...
