"""Parsers for CycloneDX JSON and XML documents."""

from typing import BinaryIO

from .._cyclonedx import Bom, load_json, load_xml
from ..formats import SourceFormat
from ..licenses import resolve_license_choices
from ..material import Material


def bom_to_materials(bom: Bom) -> list[Material]:
    """
    Flatten a BOM's component tree into materials.

    Components are visited in pre-order, so a parent always precedes its
    children. A component without licenses gets an empty license list.

    Raises:
        LicenseExpressionError: If a license expression cannot be parsed
    """
    materials = []
    for component in bom.iter_components():
        materials.append(
            Material(
                name=component.name,
                version=component.version,
                licenses=resolve_license_choices(component.licenses or []),
                annotations={},
            )
        )
    return materials


class CycloneDxJsonParser:
    """Parser for CycloneDX JSON (``bom.json``, ``*.cdx.json``)."""

    name = "cyclonedx-json"
    source_formats = (SourceFormat.CYCLONEDX_JSON,)

    def supports(self, source_format: SourceFormat) -> bool:
        return source_format in self.source_formats

    def parse(self, source: BinaryIO) -> list[Material]:
        return bom_to_materials(load_json(source))


class CycloneDxXmlParser:
    """Parser for CycloneDX XML (``bom.xml``, ``*.cdx.xml``)."""

    name = "cyclonedx-xml"
    source_formats = (SourceFormat.CYCLONEDX_XML,)

    def supports(self, source_format: SourceFormat) -> bool:
        return source_format in self.source_formats

    def parse(self, source: BinaryIO) -> list[Material]:
        return bom_to_materials(load_xml(source))
