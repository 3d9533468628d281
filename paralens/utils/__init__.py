"""Utility modules for ParaLens."""

from paralens.utils.exceptions import (
    ConfigurationError,
    ContentReadError,
    ParaLensError,
    ValidationError,
    VaultReadError,
)
from paralens.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "ParaLensError",
    "ConfigurationError",
    "ValidationError",
    "VaultReadError",
    "ContentReadError",
]
