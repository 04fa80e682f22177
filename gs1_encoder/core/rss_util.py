"""
RSS combinatorial width generation and separator conversion.

get_rss_widths() maps a value onto the element-width vector with that
ordinal in the enumeration of ISO/IEC 24724 (combinatorial number system
restricted by a maximum element width and, optionally, by the need for at
least one narrow element).
"""

from __future__ import annotations

from math import comb
from typing import List, Sequence

from .context import PrintRegion, RegionKind, view

# Light modules forced at each end of a complement separator
SEPARATOR_QUIET = 4

# Module width of one finder pattern (5 elements)
FINDER_MODULES = 15


def combins(n: int, r: int) -> int:
    """Number of combinations of n things taken r at a time."""
    if r < 0 or n < r:
        return 0
    return comb(n, r)


def get_rss_widths(
    val: int,
    n: int,
    elements: int,
    max_width: int,
    no_narrow: bool
) -> List[int]:
    """
    Expand a value into element widths.

    Args:
        val: Ordinal of the width vector (0-based)
        n: Total modules the widths must sum to
        elements: Number of elements
        max_width: Widest element allowed
        no_narrow: False to require at least one element of width 1

    Returns:
        List of `elements` widths summing to n
    """
    if val < 0:
        raise ValueError(f"Width value must not be negative, got {val}")

    widths = []
    narrow_mask = 0
    for bar in range(elements - 1):
        elm_width = 1
        narrow_mask |= 1 << bar
        while True:
            # all combinations
            sub_val = combins(n - elm_width - 1, elements - bar - 2)
            # less combinations with no narrow
            if (not no_narrow and narrow_mask == 0
                    and n - elm_width - (elements - bar - 1) >= elements - bar - 1):
                sub_val -= combins(n - elm_width - (elements - bar), elements - bar - 2)
            # less combinations with elements > max_width
            if elements - bar - 1 > 1:
                less_val = 0
                mxw_element = n - elm_width - (elements - bar - 2)
                while mxw_element > max_width:
                    less_val += combins(n - elm_width - mxw_element - 1, elements - bar - 3)
                    mxw_element -= 1
                sub_val -= less_val * (elements - 1 - bar)
            elif n - elm_width > max_width:
                sub_val -= 1
            val -= sub_val
            if val < 0:
                break
            elm_width += 1
            narrow_mask &= ~(1 << bar)
        val += sub_val
        n -= elm_width
        widths.append(elm_width)
    widths.append(n)
    return widths


def module_colors(pattern: Sequence[int], wht_first: bool) -> List[bool]:
    """Expand element widths to one flag per module, True meaning dark."""
    colors = []
    dark = not wht_first
    for width in pattern:
        colors.extend([dark] * width)
        dark = not dark
    return colors


def run_lengths(colors: Sequence[bool]) -> List[int]:
    """Collapse module colors into element widths, starting with a light run."""
    widths = []
    current = False
    count = 0
    for dark in colors:
        if dark == current:
            count += 1
        else:
            widths.append(count)
            current = dark
            count = 1
    widths.append(count)
    return widths


def cnv_separator(
    row: PrintRegion,
    finder_starts: Sequence[int],
    height: int
) -> PrintRegion:
    """
    Build the complement separator for an RSS row printed with guards.

    The separator spans the row and its 2-module guards, is the
    complement of the row, keeps SEPARATOR_QUIET light modules at each end
    and alternates 1X light/dark over the light modules of each finder.

    Args:
        row: Row region (guards expected)
        finder_starts: Module offsets of the finders within the row pattern
        height: Separator height in pixels
    """
    row_colors = module_colors(row.pattern, row.wht_first)
    # 2-module guards on both sides
    sep = [False, False] + [not dark for dark in row_colors] + [False, False]
    row_full = [False, True] + row_colors + [True, False]

    for start in finder_starts:
        first = start + 2
        for m in range(first, min(first + FINDER_MODULES, len(sep))):
            if not row_full[m - 1] and not row_full[m] and sep[m - 1]:
                sep[m] = False

    total = len(sep)
    for m in range(SEPARATOR_QUIET):
        sep[m] = False
        sep[total - 1 - m] = False

    return PrintRegion(
        kind=RegionKind.SEPARATOR,
        pattern=view(run_lengths(sep)),
        left_pad=row.left_pad,
        right_pad=row.right_pad,
        height=height,
        wht_first=True,
        guards=False,
        reverse=row.reverse,
    )
