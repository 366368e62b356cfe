"""SPDX license expression resolution.

Expressions such as ``MIT OR Apache-2.0`` are parsed with ``license-expression``.
Only the license identifiers are kept, exactly as written in the source; the
operator structure is discarded.
"""

from typing import Iterable, List

from license_expression import ExpressionError, LicenseExpression, Licensing

from ._cyclonedx.models import Expression, License, LicenseChoice
from .exceptions import LicenseExpressionError
from .logging_config import logger

# No known-license table: symbols keep their source spelling (no alias or case folding)
_licensing = Licensing()


def expression_identifiers(expression: LicenseExpression) -> List[str]:
    """Return the unique license keys of a parsed expression in order of first appearance."""
    return list(_licensing.license_keys(expression, unique=True))


def parse_expression_identifiers(expression: str) -> List[str]:
    """
    Parse an SPDX license expression and list its identifiers.

    Identifiers are returned as written, e.g. "mit" stays "mit" and "GPL-2.0+"
    stays "GPL-2.0+"; only syntax errors are rejected.

    Args:
        expression: License expression text, e.g. "MIT OR Apache-2.0"

    Returns:
        Identifiers in order of first appearance. Blank text yields an empty list.

    Raises:
        LicenseExpressionError: If the expression cannot be parsed
    """
    try:
        parsed = _licensing.parse(expression, validate=False)
    except ExpressionError as e:
        raise LicenseExpressionError(f"Invalid license expression '{expression}': {e}") from e

    if parsed is None:
        logger.debug("Empty license expression contributes no licenses")
        return []

    return expression_identifiers(parsed)


def resolve_license_choices(choices: Iterable[LicenseChoice]) -> List[str]:
    """
    Flatten a component's license choices into identifiers.

    A License contributes its id, else its name, else nothing. An Expression
    contributes every identifier it mentions.

    Raises:
        LicenseExpressionError: If an expression cannot be parsed
    """
    identifiers: List[str] = []
    for choice in choices:
        if isinstance(choice, License):
            if choice.id is not None:
                identifiers.append(choice.id)
            elif choice.name is not None:
                identifiers.append(choice.name)
            else:
                logger.debug("Skipping license without id or name")
        elif isinstance(choice, Expression):
            identifiers.extend(parse_expression_identifiers(choice.value))
        else:
            raise TypeError(f"Unsupported license choice: {choice!r}")
    return identifiers
