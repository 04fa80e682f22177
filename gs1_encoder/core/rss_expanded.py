"""
RSS Expanded (GS1 DataBar Expanded) symbol character encoding.

Each symbol character carries a 12-bit value as 8 elements: 4 odd and
4 even elements whose widths come from the combinatorial number system
(see rss_util.get_rss_widths). Characters are grouped in pairs around a
finder pattern; the first character of the symbol is a check character
computed from the mod-211 parity of all data characters.

Pair (double segment) layout, 21 elements:
    [0..7]   left character (forward)
    [8..12]  finder pattern
    [13..20] right character (reversed)
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Tuple

from .collaborators import BitPacker, ValidityChecker
from .context import EncoderContext, ErrorCode
from .rss_util import FINDER_MODULES, get_rss_widths
from ..validators.validators import (
    PARITY_MOD,
    SYMBOL_SEPARATOR,
    accumulate_parity,
    find_invalid_character,
)

logger = logging.getLogger(__name__)

# Elements per double segment: char + finder + char
RSSEXP_ELMNTS = 21
# Elements per symbol character and per finder
CHAR_ELMNTS = 8
FINDER_ELMNTS = 5
# Module width of a character
CHAR_MODULES = 17

# Most double segments in one symbol
RSSEXP_MAX_DBL_SEGS = 11
# Data characters allowed (the check character makes the symbol 4-22 chars)
MIN_DATA_CHARS = 3
MAX_DATA_CHARS = 2 * RSSEXP_MAX_DBL_SEGS - 1
# Elements per character group
K = 4


class Bracket(NamedTuple):
    """One row of the symbol character value table."""
    odd_n: int
    odd_max: int
    even_n: int
    even_max: int
    even_combos: int
    combos: int


# odd elements N & max, even N & max, even combinations, group combinations
BRACKETS = (
    Bracket(12, 7, 5, 2, 4, 348),
    Bracket(10, 5, 7, 4, 20, 1040),
    Bracket(8, 4, 9, 5, 52, 1560),
    Bracket(6, 3, 11, 6, 104, 1040),
    Bracket(4, 1, 13, 8, 204, 204),
)

MAX_SYM_VALUE = sum(b.combos for b in BRACKETS)

FINDERS = (
    (1, 8, 4),
    (3, 6, 4),
    (3, 4, 6),
    (3, 2, 8),
    (2, 6, 5),
    (2, 2, 9),
)

# Finder sequence per symbol size, row = (data chars - 2) // 2.
# A negative entry places finder -n mirrored.
FINDER_SETS = (
    (1, -1),
    (1, -2, 2),
    (1, -3, 2, -4),
    (1, -5, 2, -4, 3),
    (1, -5, 2, -4, 4, -6),
    (1, -5, 2, -4, 5, -6, 6),
    (1, -1, 2, -2, 3, -3, 4, -4),
    (1, -1, 2, -2, 3, -3, 4, -5, 5),
    (1, -1, 2, -2, 3, -3, 4, -5, 6, -6),
    (1, -1, 2, -2, 3, -4, 4, -5, 5, -6, 6),
)

# Weight of element 1 of the characters either side of each finder
PARITY_WEIGHTS = (
    0, 1, 20, 189, 193, 62, 185, 113, 150, 46, 76, 43, 16, 109,
    70, 134, 148, 6, 120, 79, 103, 161, 55, 45,
)


def find_bracket(value: int) -> Tuple[Bracket, int]:
    """
    Locate the bracket holding a symbol character value.

    Returns:
        (bracket, value relative to the start of the bracket)
    """
    if not 0 <= value < MAX_SYM_VALUE:
        raise ValueError(f"Symbol character value out of range: {value}")
    for bracket in BRACKETS:
        if value < bracket.combos:
            return bracket, value
        value -= bracket.combos
    raise ValueError("unreachable")


def sym_char_pattern(
    value: int,
    parity: int,
    weight: int,
    forward: bool
) -> Tuple[List[int], int]:
    """
    Generate the 8 element widths of one symbol character.

    Args:
        value: 12-bit character value
        parity: Running parity before this character
        weight: Parity weight of the first odd element
        forward: Odd elements at 0,2,4,6 if True, else at 7,5,3,1

    Returns:
        (element widths, updated parity)
    """
    bracket, value = find_bracket(value)
    odd_value, even_value = divmod(value, bracket.even_combos)

    odd = get_rss_widths(odd_value, bracket.odd_n, K, bracket.odd_max, False)
    even = get_rss_widths(even_value, bracket.even_n, K, bracket.even_max, True)

    bars = [0] * CHAR_ELMNTS
    for i in range(K):
        if forward:
            bars[i * 2] = odd[i]
            bars[1 + i * 2] = even[i]
        else:
            bars[7 - i * 2] = odd[i]
            bars[6 - i * 2] = even[i]

    parity, _ = accumulate_parity(parity, weight, odd)
    parity, _ = accumulate_parity(parity, (weight * 3) % PARITY_MOD, even)
    return bars, parity


def get_val12(bit_field: bytes, sym_ndx: int) -> int:
    """Get the 12-bit value of data character sym_ndx from the bit field."""
    ndx = sym_ndx * 3 // 2
    if sym_ndx & 1:
        # 4 + 8 bits
        return ((bit_field[ndx] & 0xF) << 8) + bit_field[ndx + 1]
    # 8 + 4 bits
    return (bit_field[ndx] << 4) + (bit_field[ndx + 1] >> 4)


def set_variable_length_field(bit_field: bytearray, size: int) -> None:
    """Insert the symbol size bits for the variable length encodation methods."""
    odd_chars = (size + 1) & 1
    big = size > 13
    if (bit_field[0] & 0x40) == 0x40:
        # method 1
        bit_field[0] |= (odd_chars << 5) + (0x10 if big else 0)
    if (bit_field[0] & 0x60) == 0:
        # method 00
        bit_field[0] |= (odd_chars << 4) + (0x08 if big else 0)
    if (bit_field[0] & 0x71) == 0x30:
        # methods 01100 and 01101
        bit_field[0] |= (odd_chars << 1) + (0x01 if big else 0)


def place_finder(pair: bytearray, finder_ndx: int) -> None:
    """Write finder finder_ndx (mirrored if negative) into elements 8..12."""
    widths = FINDERS[abs(finder_ndx) - 1]
    if finder_ndx < 0:
        pair[12], pair[11], pair[10] = widths
        pair[9] = 1
        pair[8] = 1
    else:
        pair[8], pair[9], pair[10] = widths
        pair[11] = 1
        pair[12] = 1


def rss_exp_encode(
    ctx: EncoderContext,
    data: str,
    cc_flag: bool,
    bit_packer: Optional[BitPacker],
    validity_checker: Optional[ValidityChecker] = None,
) -> Tuple[List[bytearray], int]:
    """
    Convert an AI data string into RSS Expanded double segments.

    Args:
        ctx: Encode context receiving any error
        data: Primary data string
        cc_flag: Set the composite linkage bit
        bit_packer: Packs the data into a bit field
        validity_checker: Defaults to the ISO/IEC 646 subset check

    Returns:
        (double segment patterns, number of symbol characters);
        ([], 0) with ctx.err_flag set on failure
    """
    checker = validity_checker or find_invalid_character
    bad = checker(data)
    if bad is None and SYMBOL_SEPARATOR in data:
        bad = data.index(SYMBOL_SEPARATOR)
    if bad is not None:
        ctx.set_error(
            ErrorCode.INVALID_CHARACTERS,
            f"illegal character in RSS Expanded data = '{data[bad]}'"
        )
        return [], 0

    if bit_packer is None:
        ctx.set_error(ErrorCode.DATA_ERROR, "no bit packer available for RSS Expanded data")
        return [], 0

    packed = bit_packer(data, cc_flag)
    size = packed.size
    if size < MIN_DATA_CHARS or size > MAX_DATA_CHARS:
        logger.debug("bit packer returned size %d for %r", size, data)
        ctx.set_error(ErrorCode.DATA_ERROR, "data error")
        return [], 0

    bit_field = bytearray(RSSEXP_MAX_DBL_SEGS * 3)
    bits = bytes(packed.bits[:len(bit_field)])
    bit_field[:len(bits)] = bits
    # 2D linkage bit
    bit_field[0] = (bit_field[0] & 0x7F) | (0x80 if cc_flag else 0)
    set_variable_length_field(bit_field, size)

    finder_set = FINDER_SETS[(size - 2) // 2]
    pairs = [bytearray(RSSEXP_ELMNTS) for _ in range((size + 2) // 2)]

    parity = 0
    weight = 0
    for i, pair in enumerate(pairs):
        finder_ndx = finder_set[i]
        j = finder_ndx * 2 if finder_ndx >= 0 else -finder_ndx * 2 + 1
        # left character, except the check character of pair 0
        if i > 0:
            weight = PARITY_WEIGHTS[2 * (j - 2)]
            bars, parity = sym_char_pattern(get_val12(bit_field, i * 2 - 1), parity, weight, True)
            pair[0:CHAR_ELMNTS] = bytes(bars)
        place_finder(pair, finder_ndx)
        # right character, if it exists
        if size > i * 2:
            weight = PARITY_WEIGHTS[2 * (j - 2) + 1]
            bars, parity = sym_char_pattern(get_val12(bit_field, i * 2), parity, weight, False)
            pair[CHAR_ELMNTS + FINDER_ELMNTS:] = bytes(bars)

    check_value = (size - 3) * PARITY_MOD + parity
    bars, _ = sym_char_pattern(check_value, 0, weight, True)
    pairs[0][0:CHAR_ELMNTS] = bytes(bars)

    logger.debug("RSS Expanded %r: %d data chars, parity %d", data, size, parity)
    return pairs, size + 1


def flatten_pairs(pairs: List[bytearray], segs: int) -> bytearray:
    """Concatenate double segments into one pattern buffer of segs characters."""
    pattern = bytearray()
    for i in range(0, segs - 1, 2):
        pattern += pairs[i // 2]
    if segs & 1:
        # last pair holds only its left character and finder
        pattern += pairs[segs // 2][:CHAR_ELMNTS + FINDER_ELMNTS]
    return pattern
