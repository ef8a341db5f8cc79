"""Checked integer wrapper for reserve and share arithmetic.

Pool math must never go negative, divide by zero, or silently exceed a
storage width. Wrapping operands in ``S`` turns each of those into a named
ArithmeticGuardError instead of a wrong number:

    from quantumswap.safe_int import S

    deposited = (S(balance) - S(reserve)).value   # Underflow if balance < reserve
    shares = (S(amount) * supply // reserve).value  # DivisionByZero if reserve == 0
"""

from __future__ import annotations

from quantumswap.errors import ArithmeticGuardError

UINT32_MAX = (1 << 32) - 1
UINT112_MAX = (1 << 112) - 1
UINT256_MAX = (1 << 256) - 1


class SafeIntError(ArithmeticGuardError):
    code = "MATH: ERROR"


class DivisionByZero(SafeIntError):
    code = "MATH: DIVISION_BY_ZERO"


class Underflow(SafeIntError):
    code = "MATH: UNDERFLOW"


class BoundOverflow(SafeIntError):
    """Value does not fit the requested unsigned width."""

    code = "MATH: OVERFLOW"


def _raw(operand: SafeInt | int) -> int:
    return operand.value if isinstance(operand, SafeInt) else operand


class SafeInt:
    """Integer operand whose subtraction, division and narrowing are checked.

    Attributes:
        value: The wrapped integer
    """

    __slots__ = ("value",)

    def __init__(self, value: SafeInt | int) -> None:
        if isinstance(value, SafeInt):
            value = value.value
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"SafeInt wraps int only, not {type(value).__name__}")
        self.value: int = value

    def __repr__(self) -> str:
        return f"S({self.value})"

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt | int):
            return self.value == _raw(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self.value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self.value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Raises Underflow if the difference would be negative."""
        rhs = _raw(other)
        if rhs > self.value:
            raise Underflow(f"{self.value} - {rhs} is negative")
        return SafeInt(self.value - rhs)

    def __rsub__(self, other: int) -> SafeInt:
        return SafeInt(other) - self

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Raises DivisionByZero on a zero divisor."""
        divisor = _raw(other)
        if divisor == 0:
            raise DivisionByZero(f"{self.value} // 0")
        return SafeInt(self.value // divisor)

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up; raises DivisionByZero on a zero divisor."""
        divisor = _raw(other)
        if divisor == 0:
            raise DivisionByZero(f"ceil({self.value} / 0)")
        return SafeInt(-(-self.value // divisor))

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self.value, _raw(other)))

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Difference floored at zero."""
        return SafeInt(max(self.value - _raw(other), 0))

    def to_uint(self, bits: int) -> int:
        """Return the value after checking it fits ``bits`` unsigned bits.

        Raises:
            BoundOverflow: If the value is negative or too wide
        """
        if not 0 <= self.value < 1 << bits:
            raise BoundOverflow(f"{self.value} does not fit uint{bits}")
        return self.value

    def to_uint112(self) -> int:
        return self.to_uint(112)

    def to_uint256(self) -> int:
        return self.to_uint(256)


S = SafeInt

__all__ = [
    "UINT32_MAX",
    "UINT112_MAX",
    "UINT256_MAX",
    "SafeInt",
    "S",
    "SafeIntError",
    "DivisionByZero",
    "Underflow",
    "BoundOverflow",
]
