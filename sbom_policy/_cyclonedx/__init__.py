"""CycloneDX document model and loaders.

Example usage:
    from sbom_policy._cyclonedx import load_json

    with open("bom.json", "rb") as f:
        bom = load_json(f)
    for component in bom.iter_components():
        print(component.name)
"""

from .loader import bom_from_json, bom_from_xml, load_json, load_xml
from .models import Bom, Component, Expression, License, LicenseChoice

__all__ = [
    "Bom",
    "Component",
    "Expression",
    "License",
    "LicenseChoice",
    "bom_from_json",
    "bom_from_xml",
    "load_json",
    "load_xml",
]
