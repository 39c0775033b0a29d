"""Public verification API."""

from .verifier import (
    OrderVerifier,
    VerificationReport,
    verify_files,
    verify_strings,
    verify_trees,
)

__all__ = [
    "OrderVerifier",
    "VerificationReport",
    "verify_files",
    "verify_strings",
    "verify_trees",
]
