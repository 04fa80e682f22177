"""
Core encoding modules for the GS1 symbol encoder.
"""

from .encoder import encode, GS1Encoder
from .context import EncodeOptions, EncodeResult, PrintRegion, Symbology
from .collaborators import BitPacker, CompositeEncoder, PackedField, ValidityChecker

__all__ = [
    "encode",
    "GS1Encoder",
    "EncodeOptions",
    "EncodeResult",
    "PrintRegion",
    "Symbology",
    "BitPacker",
    "CompositeEncoder",
    "PackedField",
    "ValidityChecker",
]
