"""
GS1 Linear and Composite Symbol Encoder

Encodes GS1 data strings into the bar/space module widths of EAN-13,
UPC-A, EAN-8, UPC-E and RSS Expanded (GS1 DataBar Expanded) symbols,
laid out as print regions ready for a renderer.

Based on GS1 General Specifications and ISO/IEC 24724.
"""

from .core.encoder import encode, GS1Encoder
from .core.context import (
    EncodeOptions,
    EncodeResult,
    EncodeError,
    EncoderContext,
    ErrorCode,
    PrintRegion,
    RasterOrder,
    RegionKind,
    Symbology,
)
from .core.collaborators import PackedField
from .core.ean import compress_upce, expand_upce
from .validators.validators import (
    compute_upc_check_digit,
    accumulate_parity,
    find_invalid_character,
)
from .formatters.json_formatter import format_result_json, format_result_dict

__version__ = "1.0.0"
__all__ = [
    "encode",
    "GS1Encoder",
    "EncodeOptions",
    "EncodeResult",
    "EncodeError",
    "EncoderContext",
    "ErrorCode",
    "PrintRegion",
    "RasterOrder",
    "RegionKind",
    "Symbology",
    "PackedField",
    "compress_upce",
    "expand_upce",
    "compute_upc_check_digit",
    "accumulate_parity",
    "find_invalid_character",
    "format_result_json",
    "format_result_dict",
]
