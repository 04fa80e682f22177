"""
Checksum and validation modules for the GS1 symbol encoder.
"""

from .validators import (
    compute_upc_check_digit,
    validate_numeric,
    accumulate_parity,
    find_invalid_character,
    ValidationResult,
    CSET82,
    NUMERIC,
    RSS_EXPANDED_CHARS,
)

__all__ = [
    "compute_upc_check_digit",
    "validate_numeric",
    "accumulate_parity",
    "find_invalid_character",
    "ValidationResult",
    "CSET82",
    "NUMERIC",
    "RSS_EXPANDED_CHARS",
]
