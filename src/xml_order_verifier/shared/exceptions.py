"""Exceptions raised by the layers around the order comparator.

The comparator itself never raises; every divergence is an ``OrderedResult``.
These exceptions belong to input handling, configuration and the divergence
policy applied by :class:`~xml_order_verifier.api.verifier.OrderVerifier`.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from xml_order_verifier.verify.result import OrderedResult


class XMLOrderVerifierError(Exception):
    """Base exception for all xml-order-verifier errors."""


class XMLInputError(XMLOrderVerifierError):
    """A document could not be read or parsed."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class UnsortedDocumentError(XMLOrderVerifierError):
    """Raised under the ``stop`` policy when a document is not in sorted order."""

    def __init__(self, label: str, result: "OrderedResult") -> None:
        super().__init__(f"The file {label} is not sorted")
        self.label = label
        self.result = result


class ConfigError(XMLOrderVerifierError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
