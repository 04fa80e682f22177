"""
CLI interface for the GS1 symbol encoder.

Usage:
    python -m gs1_encoder <symbology> "<data>" [options]

Options:
    --json              Output as JSON
    --pix-mult N        Pixels per module
    --sep-ht N          Separator height in pixels
    --seg-width N       RSS Expanded characters per row
    --bottom-up         Emit regions bottom row first (BMP order)
    --verbose           Log encoder debug output
"""

import argparse
import logging
import sys
from typing import Optional

from .core.context import EncodeOptions, RasterOrder, Symbology
from .core.encoder import encode
from .formatters.json_formatter import format_result_json, format_result_text


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_encoder',
        description='Encode GS1 data strings into bar/space module widths'
    )

    parser.add_argument(
        'symbology',
        type=str.upper,
        choices=[s.value for s in Symbology],
        help='Symbology to encode'
    )

    parser.add_argument(
        'data',
        help="Data to encode, '|' separating composite data"
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--pix-mult',
        type=int,
        default=1,
        help='Pixels per module'
    )

    parser.add_argument(
        '--sep-ht',
        type=int,
        default=None,
        help='Separator height in pixels (defaults to pixels per module)'
    )

    parser.add_argument(
        '--seg-width',
        type=int,
        default=22,
        help='RSS Expanded symbol characters per row'
    )

    parser.add_argument(
        '--bottom-up',
        action='store_true',
        help='Emit regions bottom row first'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log encoder debug output'
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    options = EncodeOptions(
        pix_mult=args.pix_mult,
        sep_ht=args.sep_ht,
        seg_width=args.seg_width,
        raster_order=RasterOrder.BOTTOM_UP if args.bottom_up else RasterOrder.TOP_DOWN,
    )

    result = encode(args.data, Symbology(args.symbology), options)

    if args.json:
        print(format_result_json(result))
    else:
        print(format_result_text(result))

    return 0 if result.ok else 1


if __name__ == '__main__':
    sys.exit(main())
