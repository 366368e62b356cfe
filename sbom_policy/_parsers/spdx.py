"""Parsers for SPDX 2.x documents (tag-value, JSON and YAML)."""

import json
import re
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Union

import yaml
from license_expression import LicenseExpression
from spdx_tools.spdx.model.document import Document
from spdx_tools.spdx.model.package import Package
from spdx_tools.spdx.model.spdx_no_assertion import SpdxNoAssertion
from spdx_tools.spdx.model.spdx_none import SpdxNone
from spdx_tools.spdx.parser.error import SPDXParsingError
from spdx_tools.spdx.parser.jsonlikedict.json_like_dict_parser import JsonLikeDictParser
from spdx_tools.spdx.parser.tagvalue.parser import Parser as TagValueParser

from ..exceptions import SourceParseError
from ..formats import SourceFormat
from ..licenses import expression_identifiers
from ..logging_config import logger
from ..material import Material

SpdxLicenseField = Union[LicenseExpression, SpdxNoAssertion, SpdxNone, None]


def concluded_license_identifiers(concluded: SpdxLicenseField) -> List[str]:
    """List the identifiers of a package's concluded license.

    NONE and NOASSERTION are reported as single identifiers; a missing value
    gives an empty list.
    """
    if concluded is None:
        return []
    if isinstance(concluded, SpdxNone):
        return ["NONE"]
    if isinstance(concluded, SpdxNoAssertion):
        return ["NOASSERTION"]
    return expression_identifiers(concluded)


def select_package_licenses(concluded: List[str], from_files: List[str]) -> List[str]:
    """
    Pick the licenses recorded for a package.

    A concluded license of exactly NONE, or any other non-empty concluded
    license, yields the licenses found in the package files. Only an empty
    concluded license yields an empty list.
    """
    if concluded == ["NONE"]:
        return list(from_files)
    elif not concluded:
        return concluded
    else:
        return list(from_files)


def package_to_material(package: Package, from_files: Optional[List[str]] = None) -> Material:
    """
    Build a material from an SPDX package.

    Args:
        package: Parsed package
        from_files: Licenses-from-files entries as written in the source. When
            None they are rendered from the parsed package, which spells known
            licenses the way the SPDX license list does.
    """
    concluded = concluded_license_identifiers(package.license_concluded)
    if from_files is None:
        from_files = [str(info) for info in package.license_info_from_files]
    return Material(
        name=package.name,
        version=package.version,
        licenses=select_package_licenses(concluded, from_files),
        annotations={},
    )


def document_to_materials(
    document: Document,
    from_files: Optional[Sequence[Optional[List[str]]]] = None,
) -> list[Material]:
    """Convert every package of an SPDX document into a material, in document order.

    ``from_files`` holds the raw licenses-from-files entries of each package,
    in the same order as ``document.packages``.
    """
    if from_files is None or len(from_files) != len(document.packages):
        from_files = [None] * len(document.packages)
    materials = [package_to_material(package, raw) for package, raw in zip(document.packages, from_files)]
    logger.debug(f"Extracted {len(materials)} package(s) from SPDX document {document.creation_info.name!r}")
    return materials


def _parsing_error(kind: str, error: SPDXParsingError) -> SourceParseError:
    messages = "; ".join(error.get_messages())
    return SourceParseError(f"Invalid {kind} document: {messages}")


# Tag-value line: "Tag: value", surrounding whitespace ignored
_TAG_LINE = re.compile(r"^\s*(\w+):\s*(.*?)\s*$")


def tag_value_from_files(content: str) -> List[List[str]]:
    """
    Collect the raw PackageLicenseInfoFromFiles values of each package.

    Values are kept as written. Lines inside multi-line <text> blocks are
    skipped so free text cannot be mistaken for a tag.
    """
    packages: List[List[str]] = []
    in_text = False
    for line in content.splitlines():
        if in_text:
            in_text = "</text>" not in line
            continue
        match = _TAG_LINE.match(line)
        if match is None:
            continue
        tag, value = match.groups()
        if "<text>" in value and "</text>" not in value:
            in_text = True
        elif tag == "PackageName":
            packages.append([])
        elif tag == "PackageLicenseInfoFromFiles" and packages:
            packages[-1].append(value)
    return packages


def dict_from_files(data: Dict[str, Any]) -> List[Optional[List[str]]]:
    """Collect the raw licenseInfoFromFiles entries of each package in a decoded document."""
    packages = data.get("packages")
    if not isinstance(packages, list):
        return []

    raw: List[Optional[List[str]]] = []
    for package in packages:
        entries = package.get("licenseInfoFromFiles") if isinstance(package, dict) else None
        raw.append([str(entry) for entry in entries] if isinstance(entries, list) else None)
    return raw


class SpdxTagValueParser:
    """Parser for SPDX tag-value documents (``*.spdx``)."""

    name = "spdx-tag"
    source_formats = (SourceFormat.SPDX_TAG,)

    def supports(self, source_format: SourceFormat) -> bool:
        return source_format in self.source_formats

    def parse(self, source: BinaryIO) -> list[Material]:
        try:
            content = source.read().decode("utf-8")
        except UnicodeDecodeError as e:
            raise SourceParseError(f"SPDX tag-value source is not valid UTF-8: {e}") from e

        try:
            document = TagValueParser().parse(content)
        except SPDXParsingError as e:
            raise _parsing_error(self.name, e) from e

        return document_to_materials(document, tag_value_from_files(content))


class SpdxJsonParser:
    """Parser for SPDX JSON documents (``*.spdx.json``).

    The document is decoded into a json-like dict and handed to the
    spdx-tools dict parser.
    """

    name = "spdx-json"
    source_formats = (SourceFormat.SPDX_JSON,)

    def supports(self, source_format: SourceFormat) -> bool:
        return source_format in self.source_formats

    def _load(self, source: BinaryIO) -> Any:
        try:
            return json.load(source)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceParseError(f"Invalid SPDX JSON: {e}") from e

    def parse(self, source: BinaryIO) -> list[Material]:
        data = self._load(source)
        if not isinstance(data, dict):
            raise SourceParseError("SPDX document must be a mapping at the top level")

        try:
            document = JsonLikeDictParser().parse(data)
        except SPDXParsingError as e:
            raise _parsing_error(self.name, e) from e
        except (TypeError, AttributeError, ValueError, KeyError) as e:
            # Fields of the wrong shape (e.g. "packages: 3") escape the dict parser unwrapped
            raise SourceParseError(f"Invalid {self.name} document: {type(e).__name__}: {e}") from e

        return document_to_materials(document, dict_from_files(data))


class SpdxYamlParser(SpdxJsonParser):
    """Parser for SPDX YAML documents (``*.spdx.yml``, ``*.spdx.yaml``).

    YAML is a superset of JSON, so JSON-shaped documents are accepted too and
    go through the same dict parser as SpdxJsonParser.
    """

    name = "spdx-yaml"
    source_formats = (SourceFormat.SPDX_YAML,)

    def _load(self, source: BinaryIO) -> Any:
        try:
            return yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise SourceParseError(f"Invalid SPDX YAML: {e}") from e
