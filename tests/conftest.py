"""
Shared fakes for the services the encoder consumes.
"""

import pytest

from gs1_encoder import PackedField


class FakeBitPacker:
    """Returns a fixed bit field and size, recording every call."""

    def __init__(self, size, bits=b""):
        self.size = size
        self.bits = bytes(bits)
        self.calls = []

    def __call__(self, data, linkage):
        self.calls.append((data, linkage))
        return PackedField(self.bits, self.size)


class FakeCompositeEncoder:
    """Returns `rows` copies of a fixed row pattern, recording the columns asked for."""

    def __init__(self, rows=3, row=None):
        self.rows = rows
        self.row = row if row is not None else [2] * 49 + [1]
        self.calls = []

    def __call__(self, data, columns):
        self.calls.append((data, columns))
        return [list(self.row) for _ in range(self.rows)]


@pytest.fixture
def make_packer():
    return FakeBitPacker


@pytest.fixture
def make_cc_encoder():
    return FakeCompositeEncoder
