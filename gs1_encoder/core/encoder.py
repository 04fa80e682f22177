"""
GS1 Symbol Encoder

Encodes GS1 data strings into the module-width regions of a printable
symbol for EAN-13, UPC-A, EAN-8, UPC-E and RSS Expanded, with an
optional composite component.

Input conventions:
- A single '|' separates the primary data from the composite data
- EAN/UPC primary data is up to 12 digits; the check digit is computed
- RSS Expanded data is an AI element string, '#' standing for FNC1
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .collaborators import BitPacker, CompositeEncoder, ValidityChecker, rows_from
from .context import (
    CC_SEPARATOR,
    EncodeError,
    EncodeOptions,
    EncodeResult,
    EncoderContext,
    ErrorCode,
    Symbology,
)
from .ean import (
    MAX_PRIMARY_DIGITS,
    ean8_layout,
    ean13_layout,
    make_primary,
    upce_layout,
)
from .layout import Layout, RSSEXP_L_PAD, rss_exp_layout, symbol_modules
from .rss_expanded import flatten_pairs, rss_exp_encode
from ..validators.validators import validate_numeric

logger = logging.getLogger(__name__)

# Composite columns stacked with each symbology
CC_COLUMNS = {
    Symbology.EAN13: 4,
    Symbology.UPCA: 4,
    Symbology.EAN8: 3,
    Symbology.UPCE: 2,
    Symbology.RSS_EXPANDED: 4,
}

# RSS Expanded rows narrower than this cannot carry a composite
MIN_CC_SEG_WIDTH = 4


class GS1Encoder:
    """
    Main encoder class.

    Holds the collaborators and options; every call to encode() gets its
    own EncoderContext so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        options: Optional[EncodeOptions] = None,
        *,
        bit_packer: Optional[BitPacker] = None,
        cc_encoder: Optional[CompositeEncoder] = None,
        validity_checker: Optional[ValidityChecker] = None,
    ):
        self.options = options or EncodeOptions()
        self.bit_packer = bit_packer
        self.cc_encoder = cc_encoder
        self.validity_checker = validity_checker

    def _split(self, ctx: EncoderContext, data: str) -> Tuple[str, Optional[str]]:
        """Split the data string into primary and composite parts."""
        if data.count(CC_SEPARATOR) > 1:
            ctx.set_error(ErrorCode.INVALID_FORMAT, "more than one composite separator '|'")
            return data, None
        if CC_SEPARATOR not in data:
            return data, None
        primary, secondary = data.split(CC_SEPARATOR)
        return primary, secondary

    def _composite(
        self,
        ctx: EncoderContext,
        secondary: Optional[str],
        columns: int
    ) -> Optional[List[bytearray]]:
        """Encode the composite rows, or return None if there is no composite."""
        if secondary is None:
            return None
        if self.cc_encoder is None:
            ctx.set_error(ErrorCode.COMPOSITE_ERROR, "no composite encoder available")
            return None
        rows = self.cc_encoder(secondary, columns)
        if not rows:
            ctx.set_error(ErrorCode.COMPOSITE_ERROR, "composite component data error")
            return None
        return rows_from(rows)

    def _primary_digits(self, ctx: EncoderContext, primary: str) -> Optional[bytearray]:
        if len(primary) > MAX_PRIMARY_DIGITS:
            ctx.set_error(ErrorCode.INVALID_LENGTH,
                          f"primary data exceeds {MAX_PRIMARY_DIGITS} digits")
            return None
        check = validate_numeric(primary)
        if not check.valid:
            ctx.set_error(ErrorCode.INVALID_CHARACTERS, check.errors[0])
            return None
        return make_primary(primary)

    def _encode_linear(
        self,
        ctx: EncoderContext,
        symbology: Symbology,
        primary: str,
        secondary: Optional[str],
        result: EncodeResult,
    ) -> Optional[Layout]:
        buffer = self._primary_digits(ctx, primary)
        if buffer is None:
            return None
        cc_rows = self._composite(ctx, secondary, CC_COLUMNS[symbology])
        if ctx.err_flag:
            return None

        if symbology == Symbology.EAN8:
            layout = ean8_layout(buffer, ctx.options, cc_rows)
        elif symbology == Symbology.UPCE:
            layout = upce_layout(ctx, buffer, cc_rows)
        else:
            layout = ean13_layout(buffer, ctx.options, cc_rows)
        result.primary = buffer.decode("ascii")
        return layout

    def _encode_rss_expanded(
        self,
        ctx: EncoderContext,
        primary: str,
        secondary: Optional[str],
        result: EncodeResult,
    ) -> Optional[Layout]:
        cc_flag = secondary is not None
        if cc_flag and ctx.options.seg_width < MIN_CC_SEG_WIDTH:
            ctx.set_error(ErrorCode.INVALID_CONFIGURATION,
                          f"Composite must be at least {MIN_CC_SEG_WIDTH} segments wide")
            return None

        pairs, segs = rss_exp_encode(ctx, primary, cc_flag, self.bit_packer,
                                     self.validity_checker)
        if ctx.err_flag:
            return None

        cc_rows = self._composite(ctx, secondary, CC_COLUMNS[Symbology.RSS_EXPANDED])
        if ctx.err_flag:
            return None
        if cc_rows:
            spare = (symbol_modules(segs, ctx.options.seg_width)
                     - RSSEXP_L_PAD - sum(cc_rows[0]))
            if spare < 0:
                ctx.set_error(ErrorCode.INVALID_CONFIGURATION,
                              "RSS Expanded symbol is narrower than its composite")
                return None

        result.primary = primary
        return rss_exp_layout(flatten_pairs(pairs, segs), segs, ctx.options, cc_rows)

    def encode(self, data: str, symbology: Symbology) -> EncodeResult:
        """
        Encode one data string.

        Args:
            data: Primary data, optionally followed by '|' and composite data
            symbology: Symbology to encode

        Returns:
            EncodeResult with the print regions, or the first error
        """
        result = EncodeResult(symbology=symbology, data=data)
        ctx = EncoderContext(self.options)

        problems = ctx.options.problems()
        if problems:
            ctx.set_error(ErrorCode.INVALID_CONFIGURATION, "; ".join(problems))
            return _finish(ctx, result, None)

        primary, secondary = self._split(ctx, data)
        if ctx.err_flag:
            return _finish(ctx, result, None)

        layout = None
        if symbology in (Symbology.EAN13, Symbology.UPCA, Symbology.EAN8, Symbology.UPCE):
            layout = self._encode_linear(ctx, symbology, primary, secondary, result)
        elif symbology == Symbology.RSS_EXPANDED:
            layout = self._encode_rss_expanded(ctx, primary, secondary, result)
        else:
            ctx.set_error(ErrorCode.UNSUPPORTED_SYMBOLOGY,
                          f"symbology {symbology.value} is not supported")

        return _finish(ctx, result, layout)


def _finish(
    ctx: EncoderContext,
    result: EncodeResult,
    layout: Optional[Layout]
) -> EncodeResult:
    """Move the layout or the context's error into the result."""
    if ctx.err_flag or layout is None:
        result.errors.append(EncodeError(
            code=(ctx.err_code or ErrorCode.DATA_ERROR).value,
            message=ctx.err_msg or "encoding failed",
        ))
        return result
    result.regions = layout.regions
    result.width = layout.width
    result.height = layout.height
    return result


def encode(
    data: str,
    symbology: Symbology,
    options: Optional[EncodeOptions] = None,
    *,
    bit_packer: Optional[BitPacker] = None,
    cc_encoder: Optional[CompositeEncoder] = None,
    validity_checker: Optional[ValidityChecker] = None,
) -> EncodeResult:
    """
    Encode a GS1 data string into print regions.

    Main entry point for the encoder.

    Args:
        data: Primary data, optionally followed by '|' and composite data
        symbology: Symbology to encode
        options: Optional encode configuration
        bit_packer: Packs RSS Expanded data (required for RSS Expanded)
        cc_encoder: Encodes composite data (required when '|' is present)
        validity_checker: Overrides the RSS Expanded character check

    Returns:
        EncodeResult containing the regions in raster order, or the error

    Examples:
        >>> result = encode("0123456", Symbology.EAN8)
        >>> list(result.regions[0].pattern[:4])
        [7, 1, 1, 1]
    """
    encoder = GS1Encoder(
        options,
        bit_packer=bit_packer,
        cc_encoder=cc_encoder,
        validity_checker=validity_checker,
    )
    return encoder.encode(data, symbology)
