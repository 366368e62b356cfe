"""Per-format material parsers.

Supported source formats:
- TSV material lists
- SPDX 2.x: tag-value, JSON, YAML
- CycloneDX: JSON, XML

Example usage:
    from sbom_policy._parsers import create_default_registry

    registry = create_default_registry()
    with open("bom.json", "rb") as f:
        materials = registry.parse(f, SourceFormat.CYCLONEDX_JSON)
"""

from .cyclonedx import CycloneDxJsonParser, CycloneDxXmlParser, bom_to_materials
from .protocol import MaterialParser
from .registry import ParserRegistry
from .spdx import SpdxJsonParser, SpdxTagValueParser, SpdxYamlParser, document_to_materials
from .tsv import TsvParser, parse_annotations


def create_default_registry() -> ParserRegistry:
    """Create a registry with a parser for every SourceFormat."""
    registry = ParserRegistry()
    registry.register(TsvParser())
    registry.register(SpdxTagValueParser())
    registry.register(SpdxJsonParser())
    registry.register(SpdxYamlParser())
    registry.register(CycloneDxJsonParser())
    registry.register(CycloneDxXmlParser())
    return registry


__all__ = [
    "CycloneDxJsonParser",
    "CycloneDxXmlParser",
    "MaterialParser",
    "ParserRegistry",
    "SpdxJsonParser",
    "SpdxTagValueParser",
    "SpdxYamlParser",
    "TsvParser",
    "bom_to_materials",
    "create_default_registry",
    "document_to_materials",
    "parse_annotations",
]
