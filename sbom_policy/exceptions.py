"""Custom exceptions for sbom-policy."""


class SbomPolicyError(Exception):
    """Base exception for all sbom-policy operations."""


class ConfigurationError(SbomPolicyError):
    """Raised when configuration validation fails."""


class SourceReadError(SbomPolicyError):
    """Raised when a source or script file cannot be opened or read."""


class SourceParseError(SbomPolicyError):
    """Raised when a source document cannot be parsed into materials."""


class LicenseExpressionError(SourceParseError):
    """Raised when an SPDX license expression is malformed."""


class EngineError(SbomPolicyError):
    """Raised when a curation or policy hook cannot be loaded or fails while running."""


class EvaluationFailedError(SbomPolicyError):
    """Raised when at least one material did not pass the policy."""
