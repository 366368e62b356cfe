"""CycloneDX document model.

Only the fields needed to build materials are modeled. Components nest
recursively; license choices are a tagged union of License and Expression.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

BOM_FORMAT = "CycloneDX"


@dataclass
class License:
    """A named or identified license. Either field may be missing."""

    id: Optional[str] = None
    name: Optional[str] = None


@dataclass
class Expression:
    """An SPDX license expression carried verbatim."""

    value: str


LicenseChoice = Union[License, Expression]


@dataclass
class Component:
    """A CycloneDX component and its nested components."""

    component_type: str
    name: str
    version: Optional[str] = None
    licenses: Optional[List[LicenseChoice]] = None
    components: Optional[List["Component"]] = None


@dataclass
class Bom:
    """Top level of a CycloneDX document."""

    bom_format: str = BOM_FORMAT
    spec_version: str = ""
    serial_number: Optional[str] = None
    version: int = 1
    components: Optional[List[Component]] = None

    def iter_components(self):
        """Yield every component in pre-order: a parent before its children, siblings in order."""
        stack = list(reversed(self.components or []))
        while stack:
            component = stack.pop()
            yield component
            if component.components:
                stack.extend(reversed(component.components))
