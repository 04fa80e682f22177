"""
Tests for check digit, parity and character validation.
"""

import pytest

from gs1_encoder import (
    accumulate_parity,
    compute_upc_check_digit,
    find_invalid_character,
)
from gs1_encoder.validators.validators import (
    CSET82,
    validate_numeric,
)


def mod10(digits):
    """GS1 Mod10 check digit, weights 3 and 1 from the right."""
    total = sum(int(d) * (3 if i % 2 == 0 else 1) for i, d in enumerate(reversed(digits)))
    return (10 - total % 10) % 10


class TestUpcCheckDigit:
    """In-place check digit of the 13-byte primary buffer."""

    def test_writes_check_digit(self):
        primary = bytearray(b"4006381333930")
        assert compute_upc_check_digit(primary) == 1
        assert primary == bytearray(b"4006381333931")

    @pytest.mark.parametrize("digits,check", [
        ("628509600084", 2),
        ("400638133393", 1),
        ("03600029145", 2),
    ])
    def test_known_gtins(self, digits, check):
        primary = bytearray(digits.zfill(12) + "0", "ascii")
        assert compute_upc_check_digit(primary) == check

    def test_zero_check_digit(self):
        # weighted sum 20
        primary = bytearray(b"0000000000550")
        assert compute_upc_check_digit(primary) == 0
        assert primary[12] == ord("0")

    @pytest.mark.parametrize("digits", [
        "000000123456",
        "400638133393",
        "003600029145",
        "999999999999",
        "123456789012",
        "000001234565",
    ])
    def test_weighted_sum_is_multiple_of_ten(self, digits):
        primary = bytearray(digits + "0", "ascii")
        check = compute_upc_check_digit(primary)
        total = sum(int(d) * (3 if i % 2 else 1) for i, d in enumerate(digits))
        assert (total + check) % 10 == 0
        assert check == mod10(digits)

    def test_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            compute_upc_check_digit(bytearray(b"123"))


class TestParity:
    """Mod 211 parity accumulation."""

    def test_single_group(self):
        # 1*1 + 9*2 + 81*3 + 96*4 = 646 = 13 mod 211
        assert accumulate_parity(0, 1, [1, 2, 3, 4]) == (13, 20)

    def test_weight_advances_by_nine(self):
        _, weight = accumulate_parity(0, 20, [1, 1, 1, 1])
        assert weight == (20 * 9 ** 4) % 211

    def test_parity_stays_below_modulus(self):
        parity = 0
        weight = 1
        for _ in range(20):
            parity, weight = accumulate_parity(parity, weight, [8, 7, 6, 5])
            assert 0 <= parity < 211
            assert 0 <= weight < 211

    def test_rejects_wrong_group_size(self):
        with pytest.raises(ValueError):
            accumulate_parity(0, 1, [1, 2, 3])


class TestCharacterValidation:
    """Primary digits and RSS Expanded character set."""

    def test_numeric(self):
        assert validate_numeric("0123456789").valid

    def test_empty_numeric_is_valid(self):
        result = validate_numeric("")
        assert result.valid
        assert result.errors == []
        assert result.meta == {}

    def test_numeric_reports_first_bad_index(self):
        result = validate_numeric("12a4b")
        assert not result.valid
        assert result.meta['invalid_index'] == 2
        assert "'a'" in result.errors[0]

    def test_cset82_size(self):
        assert len(CSET82) == 82

    def test_valid_rss_expanded_data(self):
        assert find_invalid_character("0112345678901231#10ABC-12/x") is None
        assert find_invalid_character("") is None

    def test_invalid_rss_expanded_data(self):
        assert find_invalid_character("0112\x01") == 4
        assert find_invalid_character("AB~") == 2
        assert find_invalid_character("$12") == 0
