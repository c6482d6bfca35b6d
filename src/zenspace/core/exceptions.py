"""
zenspace exception hierarchy.

All zenspace exceptions inherit from ZenspaceError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
"""


class ZenspaceError(Exception):
    """Base exception class for all zenspace errors."""


class ConfigurationError(ZenspaceError):
    """Raised for configuration errors (missing keys, invalid values)."""


class APIError(ZenspaceError):
    """Raised for API communication errors."""


class CorruptStateError(ZenspaceError):
    """Raised when the durable slot holds data that cannot be decoded."""


class AugmentationFailedError(APIError):
    """Raised when the AI provider call errors or times out."""


class MalformedAugmentationResponseError(AugmentationFailedError):
    """Raised when a structured AI response fails to parse or validate."""
