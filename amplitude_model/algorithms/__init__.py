"""Algorithms run on a built workspace: checksum validation.
"""

from .validation import (
    ChecksumValidator,
    Tier,
    ValidationResult,
    classify,
    results_to_dataframe,
    summarize,
    validate,
    validate_document,
)

__all__ = [
    "ChecksumValidator",
    "Tier",
    "ValidationResult",
    "classify",
    "results_to_dataframe",
    "summarize",
    "validate",
    "validate_document",
]
