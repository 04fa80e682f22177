"""
Encoder data model and per-call context.

Holds the symbology enumeration, encode options, the print region
descriptor consumed by renderers, and the EncoderContext that carries the
error state of a single encode call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Longest error message kept on a context
ERR_MSG_MAX = 120

# Composite data separator in the input string
CC_SEPARATOR = '|'


class Symbology(str, Enum):
    """Supported symbology selections."""
    NONE = "NONE"
    RSS14 = "RSS14"
    RSS14T = "RSS14T"
    RSS14S = "RSS14S"
    RSS14SO = "RSS14SO"
    RSS_LIMITED = "RSS_LIMITED"
    RSS_EXPANDED = "RSS_EXPANDED"
    UPCA = "UPCA"
    UPCE = "UPCE"
    EAN13 = "EAN13"
    EAN8 = "EAN8"
    UCC128_CCA = "UCC128_CCA"
    UCC128_CCC = "UCC128_CCC"


class RasterOrder(str, Enum):
    """Scan order of the target raster."""
    TOP_DOWN = "TOP_DOWN"      # TIFF style
    BOTTOM_UP = "BOTTOM_UP"    # BMP style


class RegionKind(str, Enum):
    """What a print region depicts."""
    LINEAR = "LINEAR"
    COMPOSITE = "COMPOSITE"
    SEPARATOR = "SEPARATOR"
    CHECKERBOARD = "CHECKERBOARD"


class ErrorCode(str, Enum):
    """Error codes."""
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"
    DATA_ERROR = "DATA_ERROR"
    COMPOSITE_ERROR = "COMPOSITE_ERROR"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    UNSUPPORTED_SYMBOLOGY = "UNSUPPORTED_SYMBOLOGY"


@dataclass
class EncodeOptions:
    """
    Configuration options for encoding.

    Attributes:
        pix_mult: Pixels per module (X dimension)
        sep_ht: Separator row height in pixels (defaults to pix_mult)
        seg_width: RSS Expanded row width in symbol characters
        raster_order: Row emission order of the target raster
    """
    pix_mult: int = 1
    sep_ht: Optional[int] = None
    seg_width: int = 22
    raster_order: RasterOrder = RasterOrder.TOP_DOWN

    def __post_init__(self):
        if self.sep_ht is None:
            self.sep_ht = self.pix_mult

    def problems(self) -> List[str]:
        """Return human-readable problems with these options (empty if valid)."""
        problems = []
        if not 1 <= self.pix_mult <= 12:
            problems.append(f"pixels per X must be 1-12, got {self.pix_mult}")
        if not self.pix_mult <= self.sep_ht <= 2 * self.pix_mult:
            problems.append(
                f"separator height must be {self.pix_mult}-{2 * self.pix_mult}, got {self.sep_ht}"
            )
        if not 2 <= self.seg_width <= 22 or self.seg_width % 2:
            problems.append(
                f"segment width must be an even number 2-22, got {self.seg_width}"
            )
        return problems


@dataclass
class PrintRegion:
    """
    One renderable strip of a symbol.

    Attributes:
        kind: What the strip depicts
        pattern: Module widths, a view into the encoder's pattern buffer
        left_pad: Light modules before the pattern
        right_pad: Light modules after the pattern
        height: Strip height in pixels
        wht_first: True if the first element is a space
        guards: True if the renderer adds the 1X guard pairs around the pattern
        reverse: True if the elements are painted right to left
    """
    kind: RegionKind
    pattern: memoryview
    left_pad: int = 0
    right_pad: int = 0
    height: int = 1
    wht_first: bool = True
    guards: bool = False
    reverse: bool = False

    @property
    def elm_cnt(self) -> int:
        return len(self.pattern)

    @property
    def modules(self) -> int:
        """Total width in modules including pads and guards."""
        return (self.left_pad + sum(self.pattern) + self.right_pad
                + (4 if self.guards else 0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'elm_cnt': self.elm_cnt,
            'pattern': list(self.pattern),
            'left_pad': self.left_pad,
            'right_pad': self.right_pad,
            'height': self.height,
            'wht_first': self.wht_first,
            'guards': self.guards,
            'reverse': self.reverse,
        }


def view(values) -> memoryview:
    """Wrap a sequence of module widths in a buffer and return a view of it."""
    return memoryview(bytearray(values))


@dataclass
class EncodeError:
    """Represents an encode failure."""
    code: str
    message: str


class EncoderContext:
    """
    State of one encode call.

    Replaces the global row width / error flag / message buffer so that
    independent encode calls never interfere. Only the first error is kept.
    """

    def __init__(self, options: Optional[EncodeOptions] = None):
        self.options = options or EncodeOptions()
        self.err_flag = False
        self.err_code: Optional[ErrorCode] = None
        self.err_msg = ""

    def set_error(self, code: ErrorCode, message: str) -> None:
        if self.err_flag:
            return
        self.err_flag = True
        self.err_code = code
        self.err_msg = message[:ERR_MSG_MAX]
        logger.info("encode failed [%s]: %s", code.value, self.err_msg)


@dataclass
class EncodeResult:
    """
    Complete result of encoding one data string.

    Attributes:
        symbology: Symbology that was requested
        data: Original input string
        primary: Primary data as encoded (with computed check digit)
        regions: Print regions in raster order (empty on failure)
        width: Image width in pixels
        height: Image height in pixels
        errors: Failure, if any (at most one)
    """
    symbology: Symbology
    data: str
    primary: str = ""
    regions: List[PrintRegion] = field(default_factory=list)
    width: int = 0
    height: int = 0
    errors: List[EncodeError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'symbology': self.symbology.value,
            'data': self.data,
            'primary': self.primary,
            'width': self.width,
            'height': self.height,
            'regions': [r.to_dict() for r in self.regions],
            'errors': [
                {
                    'code': e.code,
                    'message': e.message,
                }
                for e in self.errors
            ],
        }
