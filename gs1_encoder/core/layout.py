"""
Row layout of encoded symbols.

Turns finished module-width patterns into the ordered print regions a
renderer paints, for either raster order:
- RSS Expanded (stacked) rows with complement separators, checkerboard
  separators, row reversal and the composite block
- EAN/UPC symbols with a composite stacked on top

Both layouts are pure: the same inputs always give the same regions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .context import EncodeOptions, PrintRegion, RasterOrder, RegionKind, view
from .rss_expanded import (
    CHAR_ELMNTS,
    CHAR_MODULES,
    FINDER_ELMNTS,
    FINDER_MODULES,
    RSSEXP_ELMNTS,
)
from .rss_util import cnv_separator

logger = logging.getLogger(__name__)

# RSS Expanded row height in modules
RSSEXP_SYM_H = 34
# Guard modules on each side of an RSS Expanded row
RSSEXP_GUARD = 2
# Left pad of a composite above RSS Expanded
RSSEXP_L_PAD = 1
# Composite rows are 2X high
CC_ROW_H = 2

PAIR_MODULES = 2 * CHAR_MODULES + FINDER_MODULES
PARTIAL_ELMNTS = CHAR_ELMNTS + FINDER_ELMNTS
PARTIAL_MODULES = CHAR_MODULES + FINDER_MODULES


@dataclass
class Layout:
    """Regions in raster order plus the image size in pixels."""
    regions: List[PrintRegion] = field(default_factory=list)
    width: int = 0
    height: int = 0


def _elements_before(seg: int) -> int:
    return (seg // 2) * RSSEXP_ELMNTS + (seg & 1) * CHAR_ELMNTS


def _modules_before(seg: int) -> int:
    return (seg // 2) * PAIR_MODULES + (seg & 1) * CHAR_MODULES


def _row_elements(segs: int) -> int:
    return (segs // 2) * RSSEXP_ELMNTS + (segs & 1) * PARTIAL_ELMNTS


def _row_modules(segs: int) -> int:
    return (segs // 2) * PAIR_MODULES + (segs & 1) * PARTIAL_MODULES


def symbol_modules(segs: int, seg_width: int) -> int:
    """Width in modules of an RSS Expanded symbol, guards included."""
    return 2 * RSSEXP_GUARD + _row_modules(min(segs, seg_width))


def checkerboard(total_modules: int) -> memoryview:
    """
    Checkerboard separator spanning total_modules.

    All 1X elements except a 5X light start and a 4X or 5X end so that
    the final element is light.
    """
    if total_modules & 1 == 0:
        pattern = [5] + [1] * (total_modules - 9) + [4]
    else:
        pattern = [5] + [1] * (total_modules - 10) + [5]
    return view(pattern)


def _finder_starts(pattern: Sequence[int], start_elm: int) -> List[int]:
    """Module offsets, within a row, of the finders the row contains."""
    starts = []
    modules = 0
    for e, width in enumerate(pattern):
        if (start_elm + e) % RSSEXP_ELMNTS == CHAR_ELMNTS:
            starts.append(modules)
        modules += width
    return starts


class _RssRow:
    """One RSS Expanded row with the facts its separators need."""

    def __init__(self, region: PrintRegion, start_elm: int):
        self.region = region
        self.finders = _finder_starts(region.pattern, start_elm)

    def separator(self, sep_ht: int) -> PrintRegion:
        return cnv_separator(self.region, self.finders, sep_ht)


def rss_exp_layout(
    pattern: bytearray,
    segs: int,
    options: EncodeOptions,
    cc_rows: Optional[Sequence[bytearray]] = None,
) -> Layout:
    """
    Lay out an RSS Expanded symbol in rows of options.seg_width characters.

    Args:
        pattern: Element widths of all symbol characters and finders
        segs: Number of symbol characters
        options: Row width, raster order, pixel multiplier, separator height
        cc_rows: Composite row patterns, if a composite is attached

    Returns:
        Layout with regions in raster order
    """
    seg_width = options.seg_width
    pix = options.pix_mult
    sep_ht = options.sep_ht
    cc_flag = bool(cc_rows)
    buf = memoryview(pattern)

    j = min(segs, seg_width)
    n_rows = (segs + j - 1) // j
    l_height = pix * n_rows * RSSEXP_SYM_H + sep_ht * (n_rows - 1) * 3
    l_mods = symbol_modules(segs, seg_width)
    full_cnt = _row_elements(j)
    total_mods = _row_modules(segs)
    chex = PrintRegion(
        kind=RegionKind.CHECKERBOARD,
        pattern=checkerboard(l_mods),
        height=sep_ht,
    )

    def make_row(row_ndx: int, seg: int, count: int) -> _RssRow:
        start = _elements_before(seg)
        region = PrintRegion(
            kind=RegionKind.LINEAR,
            pattern=buf[start:start + count],
            height=pix * RSSEXP_SYM_H,
            wht_first=bool((seg // 2 + 1) & 1),
            guards=True,
            reverse=bool(row_ndx & 1) ^ bool((seg // 2) & 1),
        )
        return _RssRow(region, start)

    # full rows, then the last (possibly short) row
    full_rows = []
    seg = 0
    while seg < segs - seg_width:
        full_rows.append(make_row(len(full_rows), seg, full_cnt))
        seg += seg_width
    last_seg = seg
    last = make_row(len(full_rows), last_seg, len(pattern) - _elements_before(last_seg))
    last.region.right_pad = (l_mods - 2 * RSSEXP_GUARD
                             - (total_mods - _modules_before(last_seg)))
    offset_last = last.region.reverse and len(last.finders) % 2 == 1
    if offset_last:
        # an odd number of finders can't be reversed, shift the row right instead
        last.region.left_pad = 1
        last.region.right_pad -= 1
        last.region.reverse = False

    cc_regions = []
    if cc_flag:
        cc_width = sum(cc_rows[0])
        for row in cc_rows:
            cc_regions.append(PrintRegion(
                kind=RegionKind.COMPOSITE,
                pattern=memoryview(row),
                left_pad=RSSEXP_L_PAD,
                right_pad=l_mods - RSSEXP_L_PAD - cc_width,
                height=pix * CC_ROW_H,
            ))

    regions: List[PrintRegion] = []
    if options.raster_order == RasterOrder.TOP_DOWN:
        regions.extend(cc_regions)
        for row in full_rows + [last]:
            above = row is not full_rows[0] if full_rows else False
            if above:
                regions.append(chex)
            if above or cc_flag:
                regions.append(row.separator(sep_ht))
            regions.append(row.region)
            if row is not last:
                regions.append(row.separator(sep_ht))
    else:
        for row in [last] + full_rows[::-1]:
            has_row_above = row is not (full_rows[0] if full_rows else last)
            if row is not last:
                regions.append(row.separator(sep_ht))
            regions.append(row.region)
            if has_row_above or cc_flag:
                regions.append(row.separator(sep_ht))
            if has_row_above:
                regions.append(chex)
        regions.extend(cc_regions[::-1])

    height = l_height
    if cc_flag:
        height += pix * len(cc_rows) * CC_ROW_H + sep_ht
    logger.debug("RSS Expanded layout: %d chars in %d rows, %d modules wide",
                 segs, n_rows, l_mods)
    return Layout(regions=regions, width=pix * l_mods, height=height)


def separator_patterns(width: int) -> Tuple[memoryview, memoryview]:
    """The two fixed separator patterns between an EAN/UPC symbol and its composite."""
    return (view([7, 1, width - 16, 1, 7]),
            view([6, 1, width - 14, 1, 6]))


def linear_layout(
    linear: PrintRegion,
    symbol_width: int,
    options: EncodeOptions,
    cc_rows: Optional[Sequence[bytearray]] = None,
    cc_pads: Tuple[int, int] = (0, 0),
    shift: int = 0,
) -> Layout:
    """
    Lay out an EAN/UPC symbol and an optional composite above it.

    Args:
        linear: The linear symbol region (full height, no pads)
        symbol_width: Linear symbol width in modules, quiet zones included
        options: Raster order and pixel multiplier
        cc_rows: Composite row patterns
        cc_pads: (left, right) pads of the composite rows
        shift: Modules the linear part and separators are shifted right
    """
    pix = options.pix_mult
    if not cc_rows:
        return Layout(regions=[linear], width=pix * symbol_width, height=linear.height)

    linear.left_pad = shift
    sep1, sep2 = separator_patterns(symbol_width)
    separators = [
        PrintRegion(kind=RegionKind.SEPARATOR, pattern=pattern,
                    left_pad=shift, height=pix * 2)
        for pattern in (sep1, sep2, sep1)
    ]
    cc_regions = [
        PrintRegion(kind=RegionKind.COMPOSITE, pattern=memoryview(row),
                    left_pad=cc_pads[0], right_pad=cc_pads[1], height=pix * CC_ROW_H)
        for row in cc_rows
    ]

    if options.raster_order == RasterOrder.TOP_DOWN:
        regions = cc_regions + separators + [linear]
    else:
        regions = [linear] + separators + cc_regions[::-1]

    height = pix * (len(cc_rows) * CC_ROW_H + 6) + linear.height
    return Layout(regions=regions, width=pix * (symbol_width + shift), height=height)
