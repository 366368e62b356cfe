"""Entry points for turning a source into materials."""

from pathlib import Path
from typing import BinaryIO, Optional, Union

from ._parsers import ParserRegistry, create_default_registry
from .exceptions import SourceReadError
from .formats import SourceFormat, detect_source_format
from .logging_config import logger
from .material import Material

_default_registry: Optional[ParserRegistry] = None


def _get_registry() -> ParserRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


def load_materials(
    source: BinaryIO,
    source_format: SourceFormat,
    registry: Optional[ParserRegistry] = None,
) -> list[Material]:
    """
    Parse a binary stream into materials.

    Args:
        source: Binary stream holding the whole document
        source_format: Format of the stream
        registry: Parser registry to use (default: every built-in parser)

    Returns:
        Materials in source order

    Raises:
        SourceParseError: If the document is malformed. No partial list is returned.
    """
    registry = registry or _get_registry()
    return registry.parse(source, source_format)


def load_materials_from_file(
    path: Union[str, Path],
    source_format: Optional[SourceFormat] = None,
    registry: Optional[ParserRegistry] = None,
) -> list[Material]:
    """
    Open a file and parse it into materials.

    Args:
        path: Source file path
        source_format: Explicit format; detected from the file name when None
        registry: Parser registry to use (default: every built-in parser)

    Raises:
        SourceReadError: If the file cannot be opened or read
        SourceParseError: If the document is malformed
    """
    if source_format is None:
        source_format = detect_source_format(path)

    try:
        source = open(path, "rb")
    except OSError as e:
        raise SourceReadError(f"Cannot open source {path}: {e}") from e

    with source:
        try:
            materials = load_materials(source, source_format, registry)
        except OSError as e:
            raise SourceReadError(f"Cannot read source {path}: {e}") from e

    logger.info(f"Loaded {len(materials)} material(s) from {path} ({source_format.value})")
    return materials
