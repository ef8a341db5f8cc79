"""Checked arithmetic as used by reserve and share bookkeeping."""

import pytest

from quantumswap.errors import ArithmeticGuardError
from quantumswap.safe_int import (
    UINT112_MAX,
    UINT256_MAX,
    BoundOverflow,
    DivisionByZero,
    S,
    Underflow,
)

E18 = 10**18


class TestWrapping:
    def test_unwraps_nested_operand(self):
        assert S(S(7)).value == 7
        assert int(S(7)) == 7

    @pytest.mark.parametrize("bad", [True, 1.5, "3"])
    def test_non_integers_rejected(self, bad):
        with pytest.raises(TypeError):
            S(bad)

    def test_compares_equal_to_plain_int(self):
        assert S(3) == 3
        assert S(3) == S(3)
        assert S(3) != 4


class TestBalanceDeltas:
    """Deposits are measured as balance minus reserve."""

    def test_deposit_measured(self):
        assert (S(1_500 * E18) - S(1_000 * E18)).value == 500 * E18

    def test_balance_below_reserve_underflows(self):
        with pytest.raises(Underflow) as exc_info:
            S(5) - S(10)
        assert "5 - 10" in str(exc_info.value)

    def test_reflected_subtraction_checked(self):
        assert (10 - S(4)).value == 6
        with pytest.raises(Underflow):
            3 - S(4)

    def test_saturating_sub_floors_at_zero(self):
        assert S(1_000).saturating_sub(1_000_000).value == 0
        assert S(1_000_000).saturating_sub(1_000).value == 999_000


class TestShareMath:
    """Proportional shares: amount * supply // reserve."""

    def test_pro_rata_shares(self):
        shares = (S(10 * E18) * (100 * E18) // (1_000 * E18)).value
        assert shares == E18

    def test_reflected_operands(self):
        assert (2 + S(3) * 4).value == 14

    def test_minimum_of_two_sides(self):
        assert S(40).min(S(25)).value == 25
        assert S(25).min(40).value == 25

    def test_empty_reserve_division_rejected(self):
        with pytest.raises(DivisionByZero):
            S(E18) * E18 // 0

    @pytest.mark.parametrize(
        ("numerator", "denominator", "expected"),
        [(1, 3, 1), (6, 3, 2), (7, 3, 3), (0, 5, 0)],
    )
    def test_ceiling_division(self, numerator, denominator, expected):
        assert S(numerator).ceiling_div(denominator).value == expected

    def test_ceiling_division_by_zero_rejected(self):
        with pytest.raises(DivisionByZero):
            S(1).ceiling_div(S(0))


class TestStorageWidths:
    def test_reserve_fits_uint112_exactly(self):
        assert S(UINT112_MAX).to_uint112() == UINT112_MAX
        with pytest.raises(BoundOverflow):
            S(UINT112_MAX + 1).to_uint112()

    def test_word_width(self):
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX
        with pytest.raises(BoundOverflow):
            (S(UINT256_MAX) + 1).to_uint256()

    def test_negative_never_fits(self):
        with pytest.raises(BoundOverflow):
            S(-1).to_uint(32)

    def test_guard_errors_share_a_family(self):
        for error in (Underflow, DivisionByZero, BoundOverflow):
            assert issubclass(error, ArithmeticGuardError)
            assert issubclass(error, ArithmeticError)
