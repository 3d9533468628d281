"""
Custom exception hierarchy for ParaLens.

Provides structured error types for better error handling and debugging.
All exceptions inherit from ParaLensError for easy catching.

Analytics code never raises on malformed vault metadata; these types cover
configuration loading and the vault I/O boundary.
"""


class ParaLensError(Exception):
    """
    Base exception for all ParaLens errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize ParaLens error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConfigurationError(ParaLensError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class ValidationError(ParaLensError):
    """
    Validation errors.
    Raised when caller-supplied arguments are invalid.
    """

    pass


class VaultReadError(ParaLensError):
    """
    Vault access errors.
    Raised when the vault root cannot be enumerated.
    """

    pass


class ContentReadError(VaultReadError):
    """
    Note content read errors.
    Raised by content readers; the task extractor degrades these to zero tasks.
    """

    pass
