"""Outcome and report types for policy evaluation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..exceptions import EvaluationFailedError
from ..material import Material


class EvaluateOutcome:
    """
    Accumulates the verdict of the policy for one material.

    ``success`` starts True and turns False on the first ``add_error``. It
    never turns back: warnings do not touch it and it cannot be assigned.
    ``errors`` and ``warnings`` return copies, so the only way to record a
    message is through the add methods.
    """

    __slots__ = ("_success", "_errors", "_warnings")

    def __init__(self) -> None:
        self._success = True
        self._errors: List[str] = []
        self._warnings: List[str] = []

    @property
    def success(self) -> bool:
        return self._success

    @property
    def errors(self) -> List[str]:
        return list(self._errors)

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    def add_error(self, message: str) -> None:
        """Record an error and mark the material as failed."""
        if not isinstance(message, str):
            raise TypeError(f"add_error() expects str, got {type(message).__name__}")
        self._errors.append(message)
        self._success = False

    def add_warning(self, message: str) -> None:
        """Record a warning. Does not affect success."""
        if not isinstance(message, str):
            raise TypeError(f"add_warning() expects str, got {type(message).__name__}")
        self._warnings.append(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self._success,
            "errors": list(self._errors),
            "warnings": list(self._warnings),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluateOutcome):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"EvaluateOutcome(success={self._success}, errors={self._errors!r}, warnings={self._warnings!r})"


@dataclass
class MaterialResult:
    """A curated material paired with its policy outcome."""

    material: Material
    outcome: EvaluateOutcome

    @property
    def success(self) -> bool:
        return self.outcome.success

    def to_dict(self) -> Dict[str, Any]:
        return {"material": self.material.to_dict(), "result": self.outcome.to_dict()}


@dataclass
class EvaluationReport:
    """
    Ordered results of one evaluation run.

    Attributes:
        results: One MaterialResult per material, in source order
    """

    results: List[MaterialResult] = field(default_factory=list)

    def add(self, material: Material, outcome: EvaluateOutcome) -> MaterialResult:
        result = MaterialResult(material=material, outcome=outcome)
        self.results.append(result)
        return result

    @property
    def success(self) -> bool:
        """True when every material passed. An empty report is a success."""
        return all(result.success for result in self.results)

    @property
    def failed(self) -> List[MaterialResult]:
        return [result for result in self.results if not result.success]

    def raise_for_failure(self) -> None:
        """
        Raise when any material failed the policy.

        Raises:
            EvaluationFailedError: If the aggregate result is not a success
        """
        if not self.success:
            failed = len(self.failed)
            raise EvaluationFailedError(f"evaluate failed: {failed} of {len(self.results)} material(s) failed")

    def to_list(self) -> List[Dict[str, Any]]:
        return [result.to_dict() for result in self.results]

    def __len__(self) -> int:
        return len(self.results)
