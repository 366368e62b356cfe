"""Source format identifiers and file-name based detection."""

from enum import Enum
from pathlib import Path
from typing import Union

from .logging_config import logger


class SourceFormat(Enum):
    """Supported inventory formats.

    Values double as the names accepted on the command line.
    """

    TSV = "tsv"
    SPDX_TAG = "spdx-tag"
    SPDX_JSON = "spdx-json"
    SPDX_YAML = "spdx-yaml"
    CYCLONEDX_JSON = "cyclonedx-json"
    CYCLONEDX_XML = "cyclonedx-xml"

    @classmethod
    def from_name(cls, name: str) -> "SourceFormat":
        """Look up a format by its command-line name.

        Raises:
            ValueError: If the name is not a known format
        """
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown source type '{name}'. Expected one of: {choices}") from None

    @classmethod
    def names(cls) -> list[str]:
        return [f.value for f in cls]


def detect_source_format(path: Union[str, Path]) -> SourceFormat:
    """
    Infer the source format from a file name.

    Rules are checked in order and the first match wins. Names that match no
    rule fall back to TSV.

    Args:
        path: Path (or bare file name) of the source

    Returns:
        Detected SourceFormat
    """
    path_str = str(path)
    file_name = Path(path_str).name

    if path_str.endswith(".tsv"):
        detected = SourceFormat.TSV
    elif path_str.endswith(".spdx"):
        detected = SourceFormat.SPDX_TAG
    elif path_str.endswith(".spdx.json"):
        detected = SourceFormat.SPDX_JSON
    elif path_str.endswith((".spdx.yml", ".spdx.yaml")):
        detected = SourceFormat.SPDX_YAML
    elif file_name == "bom.json" or path_str.endswith(".cdx.json"):
        detected = SourceFormat.CYCLONEDX_JSON
    elif file_name == "bom.xml" or path_str.endswith(".cdx.xml"):
        detected = SourceFormat.CYCLONEDX_XML
    else:
        logger.debug(f"Could not detect source format of {path_str}, defaulting to {SourceFormat.TSV.value}")
        return SourceFormat.TSV

    logger.debug(f"Detected source format {detected.value} for {path_str}")
    return detected
