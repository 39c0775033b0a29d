"""Shared utilities for XML order verification.

This module provides the configuration objects, exceptions and logging helpers
used by the API and CLI layers.
"""

from .config import (
    VerifyConfig,
    VerifyFailOn,
    VerifyFailType,
    load_config_json,
)
from .exceptions import (
    ConfigError,
    ConfigValidationError,
    UnsortedDocumentError,
    XMLInputError,
    XMLOrderVerifierError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
    new_correlation_id,
)

__all__ = [
    "VerifyConfig",
    "VerifyFailOn",
    "VerifyFailType",
    "load_config_json",
    "ConfigError",
    "ConfigValidationError",
    "UnsortedDocumentError",
    "XMLInputError",
    "XMLOrderVerifierError",
    "CorrelationLogger",
    "get_logger",
    "new_correlation_id",
]
