"""
EAN-13, EAN-8 and UPC-E encoders.

Each encoder takes the 13-byte primary buffer (12 zero-padded digits and a
check digit placeholder), writes the check digit into it and returns the
element widths of the symbol. Patterns start with a light element and
include the 7X quiet zones in their first and last elements.

Digit bar tables are packed 4 elements per hex word, most significant
nibble first.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .context import (
    EncodeOptions,
    EncoderContext,
    ErrorCode,
    PrintRegion,
    RegionKind,
)
from .layout import Layout, linear_layout
from ..validators.validators import compute_upc_check_digit

logger = logging.getLogger(__name__)

UPC_TBL_A = (0x3211, 0x2221, 0x2122, 0x1411, 0x1132,
             0x1231, 0x1114, 0x1312, 0x1213, 0x3112)
UPC_TBL_B = (0x1123, 0x1222, 0x2212, 0x1141, 0x2311,
             0x1321, 0x4111, 0x2131, 0x3121, 0x2113)

# Left half A/B choice per leading digit, MSB = first digit, set bit = B
EAN13_AB = (0x00, 0x0B, 0x0D, 0x0E, 0x13, 0x19, 0x1C, 0x15, 0x16, 0x1A)
# UPC-E A/B choice per check digit, MSB = first digit, set bit = A
UPCE_AB = (0x07, 0x0B, 0x0D, 0x0E, 0x13, 0x19, 0x1C, 0x15, 0x16, 0x1A)

L_GUARD = (7, 1, 1, 1)
CENTER = (1, 1, 1, 1, 1)
R_GUARD = (1, 1, 1, 7)
UPCE_R_GUARD = (1, 1, 1, 1, 1, 1, 7)

MAX_PRIMARY_DIGITS = 12

EAN13_ELMNTS = 61   # includes qz's
EAN13_W = 109       # includes 7X quiet zones
EAN13_H = 74
EAN13_L_PAD = 3     # 7X qz less CC-A/B 4-column offset
EAN13_R_PAD = 5

EAN8_ELMNTS = 45
EAN8_W = 81
EAN8_H = 60
EAN8_L_PAD = 2
EAN8_R_PAD = 5
EAN8_L_PADB = 8     # linear shift under a CC-B
MAX_CCA3_ROWS = 8

UPCE_ELMNTS = 35
UPCE_W = 65
UPCE_H = 74
UPCE_L_PAD = 3
UPCE_R_PAD = 5


def _digit(c: int) -> int:
    return c - 0x30


def _bars(word: int) -> List[int]:
    return [(word >> shift) & 0xF for shift in (12, 8, 4, 0)]


def make_primary(digits: str) -> bytearray:
    """Right-align up to 12 digits in a zero-padded field and append a check placeholder."""
    return bytearray(("0" * MAX_PRIMARY_DIGITS + digits)[-MAX_PRIMARY_DIGITS:] + "0", "ascii")


def ean13_pattern(primary: bytearray) -> List[int]:
    """Encode a 13-digit primary as EAN-13, setting its check digit."""
    compute_upc_check_digit(primary)

    pattern = list(L_GUARD)
    ab_bits = EAN13_AB[_digit(primary[0])]
    for i in range(6):
        table = UPC_TBL_B if ab_bits & (0x20 >> i) else UPC_TBL_A
        pattern.extend(_bars(table[_digit(primary[1 + i])]))
    pattern.extend(CENTER)
    for i in range(6):
        pattern.extend(_bars(UPC_TBL_A[_digit(primary[7 + i])]))
    pattern.extend(R_GUARD)
    return pattern


def ean8_pattern(primary: bytearray) -> List[int]:
    """
    Encode the last 8 digits of a 13-digit primary as EAN-8, setting its check digit.

    Digits 0-4 of the primary are not printed but still count towards the
    check digit, so only data of up to 7 significant digits round-trips.
    """
    compute_upc_check_digit(primary)

    pattern = list(L_GUARD)
    for i in range(4):
        pattern.extend(_bars(UPC_TBL_A[_digit(primary[5 + i])]))
    pattern.extend(CENTER)
    for i in range(4):
        pattern.extend(_bars(UPC_TBL_A[_digit(primary[9 + i])]))
    pattern.extend(R_GUARD)
    return pattern


def compress_upce(primary: Sequence[int]) -> Optional[str]:
    """
    Compress a 13-digit primary (check digit last) to the 6 UPC-E digits.

    Rules are tried in order and the first match wins:
        00abc0000hij -> abhijc  (c = 0-2)
        00abc00000ij -> abcij3
        00abcd00000j -> abcdj4
        00abcde0000j -> abcdej  (j = 5-9)

    Returns:
        The 6 digits, or None if the data has no UPC-E form
    """
    s = bytes(primary).decode("ascii")
    if s[0:2] != "00":
        return None
    if s[4] in "012" and s[5:9] == "0000":
        return s[2:4] + s[9:12] + s[4]
    if s[5:10] == "00000":
        return s[2:5] + s[10:12] + "3"
    if s[6:11] == "00000":
        return s[2:6] + s[11] + "4"
    if s[11] in "56789" and s[7:11] == "0000":
        return s[2:7] + s[11]
    return None


def expand_upce(data6: str) -> str:
    """Expand 6 UPC-E digits to the 12-digit primary (without check digit)."""
    if len(data6) != 6 or not data6.isdigit():
        raise ValueError(f"UPC-E data must be 6 digits, got {data6!r}")

    last = data6[5]
    if last in "012":
        body = data6[0:2] + last + "0000" + data6[2:5]
    elif last == "3":
        body = data6[0:3] + "00000" + data6[3:5]
    elif last == "4":
        body = data6[0:4] + "00000" + data6[4]
    else:
        body = data6[0:5] + "0000" + last
    return "00" + body


def upce_pattern(ctx: EncoderContext, primary: bytearray) -> Optional[List[int]]:
    """Encode a 13-digit primary as UPC-E, setting its check digit."""
    check = compute_upc_check_digit(primary)

    data6 = compress_upce(primary)
    if data6 is None:
        ctx.set_error(ErrorCode.INVALID_FORMAT, "Data cannot be converted to UPC-E")
        return None
    logger.debug("UPC-E digits %s", data6)

    pattern = list(L_GUARD)
    ab_bits = UPCE_AB[check]
    for i in range(6):
        table = UPC_TBL_A if ab_bits & (0x20 >> i) else UPC_TBL_B
        pattern.extend(_bars(table[int(data6[i])]))
    pattern.extend(UPCE_R_GUARD)
    return pattern


def _linear_region(pattern: Sequence[int], height: int) -> PrintRegion:
    return PrintRegion(
        kind=RegionKind.LINEAR,
        pattern=memoryview(bytearray(pattern)),
        height=height,
    )


def ean13_layout(
    primary: bytearray,
    options: EncodeOptions,
    cc_rows: Optional[Sequence[bytearray]] = None,
) -> Layout:
    pattern = ean13_pattern(primary)
    logger.debug("EAN-13 %s: %s", primary.decode("ascii"), pattern)
    linear = _linear_region(pattern, options.pix_mult * EAN13_H)
    return linear_layout(linear, EAN13_W, options, cc_rows, (EAN13_L_PAD, EAN13_R_PAD))


def ean8_layout(
    primary: bytearray,
    options: EncodeOptions,
    cc_rows: Optional[Sequence[bytearray]] = None,
) -> Layout:
    pattern = ean8_pattern(primary)
    logger.debug("EAN-8 %s: %s", primary.decode("ascii"), pattern)
    linear = _linear_region(pattern, options.pix_mult * EAN8_H)
    shift = 0
    cc_pads: Tuple[int, int] = (EAN8_L_PAD, EAN8_R_PAD)
    if cc_rows and len(cc_rows) > MAX_CCA3_ROWS:
        # CC-B is wider than the symbol
        shift = EAN8_L_PADB
        cc_pads = (0, EAN8_R_PAD)
    return linear_layout(linear, EAN8_W, options, cc_rows, cc_pads, shift)


def upce_layout(
    ctx: EncoderContext,
    primary: bytearray,
    cc_rows: Optional[Sequence[bytearray]] = None,
) -> Optional[Layout]:
    pattern = upce_pattern(ctx, primary)
    if pattern is None:
        return None
    logger.debug("UPC-E %s: %s", primary.decode("ascii"), pattern)
    options = ctx.options
    linear = _linear_region(pattern, options.pix_mult * UPCE_H)
    return linear_layout(linear, UPCE_W, options, cc_rows, (UPCE_L_PAD, UPCE_R_PAD))
