"""XML Order Verifier.

Checks whether an XML document is already in the order of a canonically
sorted copy of it, and when it is not, reports where the two first diverge.
Sibling order matters, whitespace does not.

Progressive API Disclosure:
- Level 1: Simple functions - compare(), verify_trees(), verify_strings(), verify_files()
- Level 2: Configured verifier - OrderVerifier class with VerifyConfig
"""

__version__ = "0.1.0"

from .api import (
    OrderVerifier,
    VerificationReport,
    verify_files,
    verify_strings,
    verify_trees,
)
from .shared import (
    UnsortedDocumentError,
    VerifyConfig,
    VerifyFailOn,
    VerifyFailType,
    XMLInputError,
    XMLOrderVerifierError,
)
from .tree import XMLElement, from_etree, from_lxml, parse_xml_file, parse_xml_string
from .verify import LineComparator, OrderedResult, OrderKind, TreeComparator, compare

__all__ = [
    "__version__",

    # Level 1: Simple functions
    "compare",
    "verify_trees",
    "verify_strings",
    "verify_files",

    # Level 2: Configured verifier
    "OrderVerifier",
    "VerifyConfig",
    "VerifyFailOn",
    "VerifyFailType",

    # Comparison engine and results
    "TreeComparator",
    "LineComparator",
    "OrderedResult",
    "OrderKind",
    "VerificationReport",

    # Element model and parsing
    "XMLElement",
    "from_etree",
    "from_lxml",
    "parse_xml_file",
    "parse_xml_string",

    # Errors
    "XMLOrderVerifierError",
    "XMLInputError",
    "UnsortedDocumentError",
]
