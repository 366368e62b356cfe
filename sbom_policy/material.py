"""Canonical material record shared by every source format."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Material:
    """
    One normalized inventory entry.

    Attributes:
        name: Component or package name
        version: Version string, None when the source has none
        licenses: License identifiers in source order (duplicates allowed)
        annotations: Free-form key/value metadata
    """

    name: str
    version: Optional[str] = None
    licenses: List[str] = field(default_factory=list)
    annotations: Dict[str, str] = field(default_factory=dict)

    def update_annotation(self, key: str, value: str) -> None:
        """Set (or replace) a single annotation."""
        self.annotations[key] = value

    def copy(self) -> "Material":
        """Return an independent copy; list and dict fields are not shared."""
        return Material(
            name=self.name,
            version=self.version,
            licenses=list(self.licenses),
            annotations=dict(self.annotations),
        )

    def type_errors(self) -> List[str]:
        """
        Describe fields that no longer hold their canonical types.

        Curation scripts may assign anything to a field, so the evaluator
        checks the record before handing it on.
        """
        problems = []
        if not isinstance(self.name, str):
            problems.append(f"name must be str, got {type(self.name).__name__}")
        if self.version is not None and not isinstance(self.version, str):
            problems.append(f"version must be str or None, got {type(self.version).__name__}")
        if not isinstance(self.licenses, list) or not all(isinstance(li, str) for li in self.licenses):
            problems.append("licenses must be a list of str")
        if not isinstance(self.annotations, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in self.annotations.items()
        ):
            problems.append("annotations must be a dict of str to str")
        return problems

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "licenses": list(self.licenses),
            "annotations": dict(self.annotations),
        }
