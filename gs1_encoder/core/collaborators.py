"""
Interfaces of the services the encoders consume but do not implement.

- BitPacker: compacts an RSS Expanded data string into a bit field
- CompositeEncoder: encodes the secondary string as CC-A/B/C row patterns
- ValidityChecker: locates the first character a symbol cannot carry
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Protocol, Sequence


class PackedField(NamedTuple):
    """
    Output of a bit packer.

    Attributes:
        bits: Packed bit field, most significant bit first. Bit 0 of the
            field is reserved for the composite linkage flag.
        size: Number of 12-bit data characters, negative on data error
    """
    bits: bytes
    size: int


class BitPacker(Protocol):
    def __call__(self, data: str, linkage: bool) -> PackedField:
        ...


class CompositeEncoder(Protocol):
    def __call__(self, data: str, columns: int) -> Sequence[Sequence[int]]:
        """Return the composite row patterns, or no rows on error."""
        ...


class ValidityChecker(Protocol):
    def __call__(self, data: str) -> Optional[int]:
        """Return the index of the first disallowed character, or None."""
        ...


def rows_from(cc_rows: Sequence[Sequence[int]]) -> List[bytearray]:
    """Copy composite rows into owned buffers."""
    return [bytearray(row) for row in cc_rows]
