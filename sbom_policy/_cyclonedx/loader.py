"""Load CycloneDX JSON and XML documents into the BOM model."""

import json
import re
import xml.etree.ElementTree as ET
from typing import Any, BinaryIO, Dict, List, Optional

from ..exceptions import SourceParseError
from ..logging_config import logger
from .models import BOM_FORMAT, Bom, Component, Expression, License, LicenseChoice

_UNSIGNED_INT = re.compile(r"\+?[0-9]+")

# BOM versions are 32-bit unsigned integers
U32_MAX = 2**32 - 1


def _checked_unsigned(value: Any, field_name: str) -> int:
    """Accept a non-negative int (not bool) that fits in 32 bits."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U32_MAX:
        raise SourceParseError(f"CycloneDX {field_name} must be an unsigned 32-bit integer, got {value!r}")
    return value


def _parse_unsigned(text: str, field_name: str) -> int:
    """Parse an XML attribute holding an unsigned 32-bit integer."""
    if not _UNSIGNED_INT.fullmatch(text):
        raise SourceParseError(f"CycloneDX {field_name} must be an unsigned 32-bit integer, got {text!r}")
    return _checked_unsigned(int(text), field_name)


def _optional_str(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SourceParseError(f"{where}: '{key}' must be a string")
    return value


# =============================================================================
# JSON
# =============================================================================


def _license_choice_from_json(data: Any) -> LicenseChoice:
    if not isinstance(data, dict):
        raise SourceParseError(f"License choice must be an object, got {type(data).__name__}")
    if "license" in data and "expression" in data:
        raise SourceParseError("License choice must contain either 'license' or 'expression', not both")
    if "license" in data:
        license_data = data["license"]
        if not isinstance(license_data, dict):
            raise SourceParseError("License choice 'license' must be an object")
        return License(
            id=_optional_str(license_data, "id", "license"),
            name=_optional_str(license_data, "name", "license"),
        )
    if "expression" in data:
        expression = data["expression"]
        if not isinstance(expression, str):
            raise SourceParseError("License choice 'expression' must be a string")
        return Expression(expression)
    raise SourceParseError(f"License choice must contain 'license' or 'expression': {sorted(data)}")


def _components_from_json(data: Any) -> List[Component]:
    if not isinstance(data, list):
        raise SourceParseError("'components' must be an array")
    return [_component_from_json(item) for item in data]


def _component_from_json(data: Any) -> Component:
    if not isinstance(data, dict):
        raise SourceParseError(f"Component must be an object, got {type(data).__name__}")

    for required in ("type", "name"):
        if not isinstance(data.get(required), str):
            raise SourceParseError(f"Component is missing required string field '{required}'")

    licenses = None
    if data.get("licenses") is not None:
        if not isinstance(data["licenses"], list):
            raise SourceParseError(f"Component '{data['name']}': 'licenses' must be an array")
        licenses = [_license_choice_from_json(choice) for choice in data["licenses"]]

    components = None
    if data.get("components") is not None:
        components = _components_from_json(data["components"])

    return Component(
        component_type=data["type"],
        name=data["name"],
        version=_optional_str(data, "version", f"Component '{data['name']}'"),
        licenses=licenses,
        components=components,
    )


def bom_from_json(data: Any) -> Bom:
    """
    Build a Bom from decoded CycloneDX JSON.

    Unknown fields are ignored.

    Raises:
        SourceParseError: If a consumed field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise SourceParseError("CycloneDX document must be a JSON object")
    if data.get("bomFormat") != BOM_FORMAT:
        raise SourceParseError(f"Not a CycloneDX document: bomFormat is {data.get('bomFormat')!r}")
    if not isinstance(data.get("specVersion"), str):
        raise SourceParseError("CycloneDX document is missing 'specVersion'")
    if "version" not in data:
        raise SourceParseError("CycloneDX document is missing 'version'")

    components = None
    if data.get("components") is not None:
        components = _components_from_json(data["components"])

    return Bom(
        bom_format=BOM_FORMAT,
        spec_version=data["specVersion"],
        serial_number=_optional_str(data, "serialNumber", "CycloneDX document"),
        version=_checked_unsigned(data["version"], "version"),
        components=components,
    )


def load_json(source: BinaryIO) -> Bom:
    """Read a CycloneDX JSON document from a binary stream."""
    try:
        data = json.load(source)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SourceParseError(f"Invalid CycloneDX JSON: {e}") from e

    bom = bom_from_json(data)
    logger.debug(f"Loaded CycloneDX {bom.spec_version} JSON document (serial number: {bom.serial_number})")
    return bom


# =============================================================================
# XML
# =============================================================================


def _local_name(element: ET.Element) -> str:
    """Strip any '{namespace}' prefix from an element tag."""
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element) -> str:
    """Text directly inside an element, ignoring text of nested elements."""
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return "".join(parts)


def _license_from_xml(element: ET.Element) -> License:
    license_ = License()
    for child in element:
        name = _local_name(child)
        if name == "id" and license_.id is None:
            license_.id = _text(child)
        elif name == "name" and license_.name is None:
            license_.name = _text(child)
    return license_


def _license_choice_from_xml(element: ET.Element) -> LicenseChoice:
    name = _local_name(element)
    if name == "license":
        return _license_from_xml(element)
    if name == "expression":
        return Expression(_text(element))
    logger.debug(f"Unexpected <{name}> inside <licenses>, treating it as an empty expression")
    return Expression("")


def _component_from_xml(element: ET.Element) -> Component:
    component = Component(component_type=element.get("type", ""), name="")

    # A repeated child element replaces the earlier one
    for child in element:
        name = _local_name(child)
        if name == "name":
            component.name = _text(child)
        elif name == "version":
            component.version = _text(child)
        elif name == "licenses":
            component.licenses = [_license_choice_from_xml(c) for c in child]
        elif name == "components":
            component.components = [_component_from_xml(c) for c in child]

    return component


def bom_from_xml(root: ET.Element) -> Bom:
    """
    Build a Bom from a parsed CycloneDX XML root element.

    Elements are matched by local name, so any namespace (or none) is accepted.

    Raises:
        SourceParseError: If the version attribute is not an unsigned integer
    """
    bom = Bom()

    serial_number = root.get("serialNumber")
    if serial_number is not None:
        bom.serial_number = serial_number

    version = root.get("version")
    if version is not None:
        bom.version = _parse_unsigned(version, "version")

    for child in root:
        if _local_name(child) == "components":
            bom.components = [_component_from_xml(c) for c in child]

    return bom


def load_xml(source: BinaryIO) -> Bom:
    """Read a CycloneDX XML document from a binary stream."""
    try:
        root = ET.parse(source).getroot()
    except ET.ParseError as e:
        raise SourceParseError(f"Invalid CycloneDX XML: {e}") from e

    bom = bom_from_xml(root)
    logger.debug(f"Loaded CycloneDX XML document (serial number: {bom.serial_number})")
    return bom
