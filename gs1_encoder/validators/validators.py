"""
GS1 Checksum, Parity and Character Validation

Implements the check computations the symbol encoders rely on:
- In-place UPC/EAN check digit placement
- Mod211 parity accumulation for RSS symbol characters
- Numeric validation of primary data
- Character set validation of RSS Expanded data (ISO/IEC 646 subset)

Based on GS1 General Specifications and ISO/IEC 24724.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, List, Dict, Any, Sequence


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


# GS1 Character Sets
CSET82 = frozenset(
    '!"%&\'()*+,-./0123456789:;<=>?'
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ_'
    'abcdefghijklmnopqrstuvwxyz'
)

NUMERIC = frozenset('0123456789')

# FNC1 is keyed as '#' in encoder input
FNC1_CHAR = '#'

# Reserved symbol separator, never allowed in RSS Expanded data
SYMBOL_SEPARATOR = '^'

# Characters an RSS Expanded data string may carry
RSS_EXPANDED_CHARS = CSET82 | frozenset(' ' + FNC1_CHAR)

# RSS parity constants
PARITY_MOD = 211
PARITY_MULT = 9


def compute_upc_check_digit(primary: bytearray) -> int:
    """
    Compute the UPC/EAN check digit of a 13-byte primary buffer.

    The first 12 ASCII digits are weighted 1 at even and 3 at odd
    positions (0-indexed). The digit is written into position 12 in place.

    Args:
        primary: 13 ASCII digits, position 12 being a placeholder

    Returns:
        The check digit (0-9)
    """
    if len(primary) != 13:
        raise ValueError(f"Primary buffer must hold 13 digits, got {len(primary)}")

    total = 0
    for i in range(0, 12, 2):
        total += primary[i] - 0x30
        total += (primary[i + 1] - 0x30) * 3
    check = total % 10
    if check > 0:
        check = 10 - check
    primary[12] = 0x30 + check
    return check


def accumulate_parity(
    parity: int,
    weight: int,
    widths: Sequence[int]
) -> Tuple[int, int]:
    """
    Add four element widths into an RSS parity accumulator.

    Each width contributes weight*width mod 211; the weight is advanced
    by a factor of 9 mod 211 after every element.

    Returns:
        (parity, weight) after the four elements
    """
    if len(widths) != 4:
        raise ValueError(f"Expected 4 element widths, got {len(widths)}")

    for width in widths:
        parity = (parity + weight * width) % PARITY_MOD
        weight = (weight * PARITY_MULT) % PARITY_MOD
    return parity, weight


def validate_numeric(value: str) -> ValidationResult:
    """
    Validate that a primary data string holds only digits.

    An empty value is valid; the encoder zero-pads it.

    Returns:
        ValidationResult, meta['invalid_index'] set on failure
    """
    result = ValidationResult(valid=True)

    for i, c in enumerate(value):
        if c not in NUMERIC:
            result.valid = False
            result.errors.append(f"Non-numeric character '{c}' at index {i}")
            result.meta['invalid_index'] = i
            break

    return result


def find_invalid_character(data: str) -> Optional[int]:
    """
    Find the first character an RSS Expanded symbol cannot carry.

    Returns:
        Index of the first disallowed character, or None if all are valid
    """
    for i, c in enumerate(data):
        if c not in RSS_EXPANDED_CHARS:
            return i
    return None
