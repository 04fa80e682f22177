"""
Tests for symbol row layout: stacked RSS Expanded rows, separators,
checkerboards and raster order.
"""

import pytest

from gs1_encoder import EncodeOptions, RasterOrder, RegionKind
from gs1_encoder.core.context import EncoderContext
from gs1_encoder.core.layout import (
    checkerboard,
    rss_exp_layout,
    separator_patterns,
    symbol_modules,
)
from gs1_encoder.core.rss_expanded import flatten_pairs, rss_exp_encode
from gs1_encoder.core.rss_util import module_colors, run_lengths


def build(packer, seg_width=22, raster_order=RasterOrder.TOP_DOWN, cc_rows=None, **kwargs):
    options = EncodeOptions(seg_width=seg_width, raster_order=raster_order, **kwargs)
    ctx = EncoderContext(options)
    pairs, segs = rss_exp_encode(ctx, "0112345678901231", bool(cc_rows), packer)
    assert not ctx.err_flag
    return rss_exp_layout(flatten_pairs(pairs, segs), segs, options, cc_rows), segs


def kinds(layout):
    return [r.kind for r in layout.regions]


def rows(layout):
    return [r for r in layout.regions if r.kind == RegionKind.LINEAR]


class TestCheckerboard:
    """Checkerboard separator between stacked rows."""

    def test_even_width(self):
        pattern = list(checkerboard(102))

        assert pattern[0] == 5
        assert pattern[-1] == 4
        assert set(pattern[1:-1]) == {1}
        assert sum(pattern) == 102

    def test_odd_width(self):
        pattern = list(checkerboard(85))

        assert pattern[0] == 5
        assert pattern[-1] == 5
        assert sum(pattern) == 85

    @pytest.mark.parametrize("total", [70, 85, 102, 155, 380])
    def test_ends_light(self, total):
        # pattern starts light, so an odd element count ends light too
        assert len(checkerboard(total)) % 2 == 1


class TestRowLayout:
    """Rows, reversal and padding."""

    def test_single_row(self, make_packer):
        layout, segs = build(make_packer(3))

        assert segs == 4
        assert kinds(layout) == [RegionKind.LINEAR]
        assert layout.width == symbol_modules(4, 22) == 102
        assert layout.height == 34

    def test_stacked_rows(self, make_packer):
        layout, segs = build(make_packer(21), seg_width=4)

        assert segs == 22
        assert kinds(layout).count(RegionKind.LINEAR) == 6
        assert kinds(layout).count(RegionKind.CHECKERBOARD) == 5
        assert kinds(layout).count(RegionKind.SEPARATOR) == 10
        assert layout.height == 6 * 34 + 5 * 3

    def test_region_order_top_down(self, make_packer):
        layout, _ = build(make_packer(7), seg_width=4)

        assert kinds(layout) == [
            RegionKind.LINEAR, RegionKind.SEPARATOR,
            RegionKind.CHECKERBOARD, RegionKind.SEPARATOR, RegionKind.LINEAR,
        ]

    def test_region_order_bottom_up(self, make_packer):
        top_down, _ = build(make_packer(21), seg_width=4)
        bottom_up, _ = build(make_packer(21), seg_width=4,
                             raster_order=RasterOrder.BOTTOM_UP)

        assert kinds(bottom_up) == kinds(top_down)[::-1]
        assert ([list(r.pattern) for r in rows(bottom_up)]
                == [list(r.pattern) for r in rows(top_down)][::-1])
        assert bottom_up.height == top_down.height

    def test_every_region_spans_the_symbol(self, make_packer):
        layout, segs = build(make_packer(21), seg_width=6)
        total = symbol_modules(segs, 6)

        for region in layout.regions:
            assert region.modules == total

    def test_alternate_rows_reversed(self, make_packer):
        layout, _ = build(make_packer(17), seg_width=4)

        assert [r.reverse for r in rows(layout)] == [False, True, False, True, False]

    def test_row_starting_color(self, make_packer):
        layout, _ = build(make_packer(7), seg_width=2)

        assert [r.wht_first for r in rows(layout)] == [True, False, True, False]

    def test_short_reversed_row_with_odd_finders_is_shifted(self, make_packer):
        layout, segs = build(make_packer(5), seg_width=4)
        last = rows(layout)[-1]

        assert segs == 6
        # row 1 would be reversed but holds a single finder
        assert last.reverse is False
        assert last.left_pad == 1
        assert last.right_pad == 102 - 4 - 49 - 1
        assert last.modules == 102

    def test_short_reversed_row_with_even_finders(self, make_packer):
        layout, segs = build(make_packer(7), seg_width=4)
        last = rows(layout)[-1]

        assert segs == 8
        assert last.reverse is True
        assert (last.left_pad, last.right_pad) == (0, 0)

    def test_short_forward_row(self, make_packer):
        layout, _ = build(make_packer(10), seg_width=4)
        last = rows(layout)[-1]

        # 11 chars: rows of 4, 4 and 3
        assert last.reverse is False
        assert last.left_pad == 0
        assert last.right_pad == 102 - 4 - (49 + 32)

    def test_pixel_multiplier_and_separator_height(self, make_packer):
        layout, _ = build(make_packer(7), seg_width=4, pix_mult=2, sep_ht=3)

        assert layout.width == 2 * 102
        assert layout.height == 2 * 2 * 34 + 3 * 3
        assert [r.height for r in layout.regions] == [68, 3, 3, 3, 68]


class TestSeparators:
    """Complement separators above and below RSS rows."""

    def separator_and_row(self, make_packer):
        layout, _ = build(make_packer(7), seg_width=22, cc_rows=[bytearray([2] * 49 + [1])])
        sep, row = layout.regions[-2:]
        assert sep.kind == RegionKind.SEPARATOR
        return sep, row

    def test_spans_row_and_guards(self, make_packer):
        sep, row = self.separator_and_row(make_packer)

        assert sum(sep.pattern) == sum(row.pattern) + 4
        assert (sep.left_pad, sep.right_pad) == (row.left_pad, row.right_pad)
        assert sep.wht_first is True
        assert sep.guards is False

    def test_quiet_ends(self, make_packer):
        sep, _ = self.separator_and_row(make_packer)

        assert sep.pattern[0] >= 4
        assert len(sep.pattern) % 2 == 1
        assert sep.pattern[-1] >= 4

    def test_complement_with_finder_alternation(self, make_packer):
        sep, row = self.separator_and_row(make_packer)
        sep_colors = module_colors(sep.pattern, True)
        row_colors = [False, True] + module_colors(row.pattern, row.wht_first) + [True, False]

        # finders start at element 8 of each pair, shifted by the 2 guard modules
        finder_spans = []
        modules = 2
        for e, width in enumerate(row.pattern):
            if e % 21 == 8:
                finder_spans.append(range(modules, modules + 15))
            modules += width

        assert len(sep_colors) == len(row_colors)
        for m in range(4, len(sep_colors) - 4):
            if row_colors[m]:
                assert not sep_colors[m]
            elif not any(m in span for span in finder_spans):
                assert sep_colors[m]
        for span in finder_spans:
            for m in span[1:]:
                assert not (sep_colors[m] and sep_colors[m - 1])

    def test_run_lengths_round_trip(self):
        colors = module_colors([3, 1, 2, 4], True)

        assert colors == [False] * 3 + [True] + [False] * 2 + [True] * 4
        assert run_lengths(colors) == [3, 1, 2, 4]
        assert run_lengths([True, True, False]) == [0, 2, 1]


class TestRssComposite:
    """Composite block above an RSS Expanded symbol."""

    CC_ROW = bytearray([2] * 49 + [1])

    def test_top_down(self, make_packer):
        cc_rows = [bytearray(self.CC_ROW) for _ in range(3)]
        layout, _ = build(make_packer(3), cc_rows=cc_rows)

        assert kinds(layout) == [RegionKind.COMPOSITE] * 3 + [
            RegionKind.SEPARATOR, RegionKind.LINEAR]
        cc = layout.regions[0]
        assert (cc.left_pad, cc.right_pad) == (1, 102 - 1 - 99)
        assert cc.height == 2
        assert layout.height == 34 + 3 * 2 + 1

    def test_bottom_up(self, make_packer):
        cc_rows = [bytearray([i + 1] + list(self.CC_ROW[1:])) for i in range(3)]
        layout, _ = build(make_packer(3), raster_order=RasterOrder.BOTTOM_UP,
                          cc_rows=cc_rows)

        assert kinds(layout) == [RegionKind.LINEAR, RegionKind.SEPARATOR] + [
            RegionKind.COMPOSITE] * 3
        assert [r.pattern[0] for r in layout.regions[2:]] == [3, 2, 1]


class TestLinearSeparators:
    """Fixed separators between EAN/UPC symbols and a composite."""

    def test_patterns(self):
        sep1, sep2 = separator_patterns(109)

        assert list(sep1) == [7, 1, 93, 1, 7]
        assert list(sep2) == [6, 1, 95, 1, 6]
        assert sum(sep1) == sum(sep2) == 109
