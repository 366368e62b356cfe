"""Registry for material parsers."""

from typing import BinaryIO

from ..exceptions import SourceParseError
from ..formats import SourceFormat
from ..logging_config import logger
from ..material import Material
from .protocol import MaterialParser


class ParserRegistry:
    """Registry for material parsers.

    Manages parser instances and dispatches parsing to the parser that
    handles the requested source format.

    Example:
        registry = ParserRegistry()
        registry.register(TsvParser())
        registry.register(CycloneDxJsonParser())

        materials = registry.parse(stream, SourceFormat.TSV)
    """

    def __init__(self) -> None:
        self._parsers: list[MaterialParser] = []

    def register(self, parser: MaterialParser) -> None:
        """Register a parser.

        Args:
            parser: Parser instance implementing MaterialParser protocol.
        """
        self._parsers.append(parser)
        logger.debug(f"Registered material parser: {parser.name} for {[f.value for f in parser.source_formats]}")

    def get_parser_for(self, source_format: SourceFormat) -> MaterialParser | None:
        """Get the first registered parser that supports this format."""
        for parser in self._parsers:
            if parser.supports(source_format):
                return parser
        return None

    def parse(self, source: BinaryIO, source_format: SourceFormat) -> list[Material]:
        """Parse a source with the parser registered for its format.

        Parse errors propagate unchanged; no partial result is returned.

        Raises:
            SourceParseError: If no parser handles the format or the document is malformed.
        """
        parser = self.get_parser_for(source_format)
        if parser is None:
            raise SourceParseError(f"No parser registered for source format: {source_format.value}")

        logger.debug(f"Using {parser.name} parser for {source_format.value}")
        materials = parser.parse(source)
        logger.debug(f"{parser.name} produced {len(materials)} material(s)")
        return materials
