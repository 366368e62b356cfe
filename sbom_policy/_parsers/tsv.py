"""Parser for tab-separated material lists."""

import csv
import io
from typing import BinaryIO, Dict, Iterator, Tuple

from ..exceptions import SourceParseError
from ..formats import SourceFormat
from ..logging_config import logger
from ..material import Material

REQUIRED_COLUMNS = ("name", "version", "licenses", "annotations")


def parse_annotations(value: str) -> Dict[str, str]:
    """
    Parse a comma-separated list of key=value pairs.

    Each pair is split on the first '='; a pair without '=' maps to "".
    Empty segments are skipped.

    Examples:
        >>> parse_annotations("a=1,b=2")
        {'a': '1', 'b': '2'}
        >>> parse_annotations("")
        {}
    """
    annotations: Dict[str, str] = {}
    for pair in value.split(","):
        if not pair:
            continue
        key, _, annotation_value = pair.partition("=")
        annotations[key] = annotation_value
    return annotations


def _data_lines(text: io.TextIOBase) -> Iterator[Tuple[int, str]]:
    """Yield (line number, line) for every line that is not a '#' comment."""
    for line_number, line in enumerate(text, start=1):
        if line.startswith("#"):
            continue
        yield line_number, line


class TsvParser:
    """Parser for TSV material lists.

    The file has a header row naming at least the columns name, version,
    licenses and annotations. Lines starting with '#' are comments.

    Example:
        # curated by hand
        name	version	licenses	annotations
        left-pad	1.3.0	MIT,Apache-2.0	team=web,reviewed=
    """

    name = "tsv"
    source_formats = (SourceFormat.TSV,)

    def supports(self, source_format: SourceFormat) -> bool:
        return source_format in self.source_formats

    def parse(self, source: BinaryIO) -> list[Material]:
        """Parse TSV rows into materials.

        Raises:
            SourceParseError: If the header is missing a required column, a row
                has a different number of fields than the header, or the file
                is not valid UTF-8.
        """
        text = io.TextIOWrapper(source, encoding="utf-8", newline="")
        lines = _data_lines(text)
        line_numbers: list[int] = []

        def tracked() -> Iterator[str]:
            for line_number, line in lines:
                line_numbers.append(line_number)
                yield line

        reader = csv.reader(tracked(), delimiter="\t")
        materials: list[Material] = []

        try:
            header = None
            for row in reader:
                if not row:
                    continue
                if header is None:
                    header = row
                    missing = [column for column in REQUIRED_COLUMNS if column not in header]
                    if missing:
                        raise SourceParseError(f"TSV header is missing required column(s): {', '.join(missing)}")
                    continue

                if len(row) != len(header):
                    raise SourceParseError(
                        f"TSV line {line_numbers[-1]}: expected {len(header)} fields, found {len(row)}"
                    )

                record = dict(zip(header, row))
                materials.append(
                    Material(
                        name=record["name"],
                        version=record["version"],
                        licenses=record["licenses"].split(","),
                        annotations=parse_annotations(record["annotations"]),
                    )
                )
        except csv.Error as e:
            raise SourceParseError(f"Invalid TSV: {e}") from e
        except UnicodeDecodeError as e:
            raise SourceParseError(f"TSV source is not valid UTF-8: {e}") from e
        finally:
            # Leave the caller's stream open
            text.detach()

        if header is None:
            raise SourceParseError("TSV source has no header row")

        logger.debug(f"Parsed {len(materials)} TSV row(s)")
        return materials
