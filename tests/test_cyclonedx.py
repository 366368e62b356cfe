"""Tests for the CycloneDX document model, loaders and parsers."""

import io
import json
import xml.etree.ElementTree as ET

import pytest

from sbom_policy._cyclonedx import (
    Bom,
    Component,
    Expression,
    License,
    bom_from_json,
    bom_from_xml,
    load_json,
    load_xml,
)
from sbom_policy._parsers import CycloneDxJsonParser, CycloneDxXmlParser, bom_to_materials
from sbom_policy.exceptions import LicenseExpressionError, SourceParseError
from sbom_policy.material import Material

EXPECTED = [
    Material(name="A", version="1.0.0", licenses=["MIT"], annotations={}),
    Material(name="B", version="2.0.0", licenses=["FooBar"], annotations={}),
    Material(name="C", version=None, licenses=["MIT", "Apache-2.0"], annotations={}),
    Material(name="D", version="4.0.0", licenses=[], annotations={}),
]


def leaf(name: str, **kwargs) -> Component:
    return Component(component_type="library", name=name, **kwargs)


class TestBomIterComponents:
    """Tests for pre-order traversal of the component tree."""

    def test_pre_order(self):
        bom = Bom(components=[leaf("A", components=[leaf("B"), leaf("C", components=[leaf("D")])])])
        assert [c.name for c in bom.iter_components()] == ["A", "B", "C", "D"]

    def test_siblings_keep_order(self):
        bom = Bom(components=[leaf("A", components=[leaf("A1")]), leaf("B"), leaf("C")])
        assert [c.name for c in bom.iter_components()] == ["A", "A1", "B", "C"]

    def test_no_components(self):
        assert list(Bom().iter_components()) == []
        assert list(Bom(components=[]).iter_components()) == []

    def test_deep_nesting(self):
        root = leaf("n0")
        current = root
        for i in range(1, 3000):
            child = leaf(f"n{i}")
            current.components = [child]
            current = child

        names = [c.name for c in Bom(components=[root]).iter_components()]
        assert len(names) == 3000
        assert names[-1] == "n2999"


class TestBomFromJson:
    """Tests for building the model from decoded JSON."""

    def test_basic_fields(self, test_data_dir):
        bom = bom_from_json(json.loads((test_data_dir / "basic.cdx.json").read_text()))

        assert bom.bom_format == "CycloneDX"
        assert bom.spec_version == "1.4"
        assert bom.serial_number == "urn:uuid:3e671687-395b-41f5-a30f-a58921a69b79"
        assert bom.version == 1
        assert bom.components[0].component_type == "application"
        assert bom.components[0].licenses == [License(id="MIT")]
        assert bom.components[0].components[1].licenses == [Expression("MIT OR Apache-2.0")]

    def test_optional_fields(self):
        bom = bom_from_json({"bomFormat": "CycloneDX", "specVersion": "1.5", "version": 3})
        assert bom.serial_number is None
        assert bom.version == 3
        assert bom.components is None

    def test_missing_version(self):
        with pytest.raises(SourceParseError, match="missing 'version'"):
            bom_from_json({"bomFormat": "CycloneDX", "specVersion": "1.5"})

    @pytest.mark.parametrize("version", ["1", 1.0, True, None, 2**32])
    def test_version_must_be_u32_number(self, version):
        with pytest.raises(SourceParseError, match="unsigned 32-bit integer"):
            bom_from_json({"bomFormat": "CycloneDX", "specVersion": "1.5", "version": version})

    def test_largest_version(self):
        assert bom_from_json({"bomFormat": "CycloneDX", "specVersion": "1.5", "version": 2**32 - 1}).version == 2**32 - 1

    def test_wrong_bom_format(self):
        with pytest.raises(SourceParseError, match="Not a CycloneDX document"):
            bom_from_json({"bomFormat": "SPDX", "specVersion": "1.5", "version": 1})

    def test_missing_spec_version(self):
        with pytest.raises(SourceParseError, match="specVersion"):
            bom_from_json({"bomFormat": "CycloneDX", "version": 1})

    def test_negative_version(self):
        with pytest.raises(SourceParseError, match="unsigned 32-bit integer"):
            bom_from_json({"bomFormat": "CycloneDX", "specVersion": "1.5", "version": -1})

    def test_component_missing_name(self):
        data = {"bomFormat": "CycloneDX", "specVersion": "1.5", "version": 1, "components": [{"type": "library"}]}
        with pytest.raises(SourceParseError, match="'name'"):
            bom_from_json(data)

    def test_unknown_license_choice(self):
        data = {
            "bomFormat": "CycloneDX",
            "specVersion": "1.5",
            "version": 1,
            "components": [{"type": "library", "name": "x", "licenses": [{"text": "..."}]}],
        }
        with pytest.raises(SourceParseError, match="'license' or 'expression'"):
            bom_from_json(data)

    def test_license_without_id_or_name(self):
        data = {
            "bomFormat": "CycloneDX",
            "specVersion": "1.5",
            "version": 1,
            "components": [{"type": "library", "name": "x", "licenses": [{"license": {"url": "https://x.test"}}]}],
        }
        assert bom_from_json(data).components[0].licenses == [License()]

    def test_license_choice_with_both_keys(self):
        data = {
            "bomFormat": "CycloneDX",
            "specVersion": "1.5",
            "version": 1,
            "components": [
                {"type": "library", "name": "x", "licenses": [{"license": {"id": "MIT"}, "expression": "MIT"}]}
            ],
        }
        with pytest.raises(SourceParseError, match="not both"):
            bom_from_json(data)

    def test_load_json_rejects_malformed_input(self):
        with pytest.raises(SourceParseError, match="Invalid CycloneDX JSON"):
            load_json(io.BytesIO(b'{"bomFormat": '))


class TestBomFromXml:
    """Tests for building the model from XML."""

    def test_matches_json_model(self, test_data_dir):
        with open(test_data_dir / "basic.cdx.xml", "rb") as f:
            xml_bom = load_xml(f)
        json_bom = bom_from_json(json.loads((test_data_dir / "basic.cdx.json").read_text()))

        assert xml_bom.serial_number == json_bom.serial_number
        assert xml_bom.version == json_bom.version
        assert xml_bom.components == json_bom.components

    def test_without_namespace(self):
        root = ET.fromstring(
            '<bom version="7"><components><component type="library"><name>x</name></component></components></bom>'
        )
        bom = bom_from_xml(root)

        assert bom.version == 7
        assert bom.components == [Component(component_type="library", name="x")]

    def test_non_numeric_version(self):
        root = ET.fromstring('<bom version="one"/>')
        with pytest.raises(SourceParseError, match="unsigned 32-bit integer"):
            bom_from_xml(root)

    def test_unknown_license_element_becomes_empty_expression(self):
        root = ET.fromstring(
            "<bom><components><component type='library'><name>x</name>"
            "<licenses><other>?</other></licenses></component></components></bom>"
        )
        assert bom_from_xml(root).components[0].licenses == [Expression("")]

    def test_license_first_occurrence_wins(self):
        root = ET.fromstring(
            "<bom><components><component type='library'><name>x</name>"
            "<licenses><license><id>MIT</id><id>Zlib</id><name>n1</name><name>n2</name></license></licenses>"
            "</component></components></bom>"
        )
        assert bom_from_xml(root).components[0].licenses == [License(id="MIT", name="n1")]

    def test_repeated_component_children_last_wins(self):
        root = ET.fromstring(
            "<bom><components><component type='library'>"
            "<name>first</name><version>1</version><name>second</name><version>2</version>"
            "<licenses><license><id>MIT</id></license></licenses>"
            "<licenses><expression>Zlib</expression></licenses>"
            "</component></components></bom>"
        )
        assert bom_from_xml(root).components == [
            Component(component_type="library", name="second", version="2", licenses=[Expression("Zlib")])
        ]

    def test_repeated_root_components_last_wins(self):
        root = ET.fromstring(
            "<bom><components><component type='library'><name>a</name></component></components>"
            "<components><component type='library'><name>b</name></component></components></bom>"
        )
        assert [c.name for c in bom_from_xml(root).iter_components()] == ["b"]

    def test_version_out_of_range(self):
        with pytest.raises(SourceParseError, match="unsigned 32-bit integer"):
            bom_from_xml(ET.fromstring('<bom version="4294967296"/>'))

    def test_version_attribute_with_plus_sign(self):
        assert bom_from_xml(ET.fromstring('<bom version="+4294967295"/>')).version == 2**32 - 1

    def test_unknown_component_children_ignored(self):
        root = ET.fromstring(
            "<bom><components><component type='library'><group>g</group><name>x</name>"
            "<purl>pkg:npm/x@1</purl><version>1</version></component></components></bom>"
        )
        assert bom_from_xml(root).components == [Component(component_type="library", name="x", version="1")]

    def test_malformed_xml(self):
        with pytest.raises(SourceParseError, match="Invalid CycloneDX XML"):
            load_xml(io.BytesIO(b"<bom><components>"))


class TestBomToMaterials:
    """Tests for flattening a BOM into materials."""

    def test_flattening_order_and_licenses(self):
        bom = Bom(
            components=[
                leaf(
                    "A",
                    version="1.0.0",
                    licenses=[License(id="MIT")],
                    components=[
                        leaf("B", version="2.0.0", licenses=[License(name="FooBar")]),
                        leaf("C", licenses=[Expression("MIT OR Apache-2.0")], components=[leaf("D", version="4.0.0")]),
                    ],
                )
            ]
        )
        assert bom_to_materials(bom) == EXPECTED

    def test_bad_expression_aborts(self):
        bom = Bom(components=[leaf("A"), leaf("B", licenses=[Expression("MIT OR")])])
        with pytest.raises(LicenseExpressionError):
            bom_to_materials(bom)


class TestCycloneDxParsers:
    """Tests for the registered CycloneDX parsers."""

    def test_json_parser(self, test_data_dir):
        with open(test_data_dir / "basic.cdx.json", "rb") as f:
            assert CycloneDxJsonParser().parse(f) == EXPECTED

    def test_xml_parser(self, test_data_dir):
        with open(test_data_dir / "basic.cdx.xml", "rb") as f:
            assert CycloneDxXmlParser().parse(f) == EXPECTED
