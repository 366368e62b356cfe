"""Protocol definition for material parsers."""

from typing import BinaryIO, Protocol

from ..formats import SourceFormat
from ..material import Material


class MaterialParser(Protocol):
    """Protocol for source format parsing plugins.

    Each parser implements this protocol to turn one source format into
    materials. Parsers are registered with ParserRegistry and selected by
    SourceFormat.

    Example:
        class TsvParser:
            name = "tsv"
            source_formats = (SourceFormat.TSV,)

            def supports(self, source_format: SourceFormat) -> bool:
                return source_format in self.source_formats

            def parse(self, source: BinaryIO) -> list[Material]:
                # Read rows and build materials
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this parser.

        Used for logging and diagnostics.
        Examples: "tsv", "spdx-tag", "cyclonedx-xml"
        """
        ...

    @property
    def source_formats(self) -> tuple[SourceFormat, ...]:
        """Formats this parser handles."""
        ...

    def supports(self, source_format: SourceFormat) -> bool:
        """Check if this parser can handle the given format."""
        ...

    def parse(self, source: BinaryIO) -> list[Material]:
        """Parse a source document into materials.

        Implementations should:
        1. Read the whole document (TSV may read row by row)
        2. Build one Material per entry, in source order
        3. Fail the whole load on the first malformed entry

        Args:
            source: Binary stream positioned at the start of the document

        Returns:
            List of Material objects. Empty list if the document has no entries.

        Raises:
            SourceParseError: If the document cannot be parsed.
        """
        ...
