"""UQ112x112 binary fixed-point prices.

A reserve ratio r1 / r0 is encoded as ``(r1 << 112) // r0``: 112 integer bits
and 112 fractional bits. Reserves are bounded to uint112, so the encoded value
always fits in 224 bits, leaving 32 bits of headroom when it is multiplied by
an elapsed time and summed into a 256-bit cumulative accumulator.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from quantumswap.safe_int import UINT112_MAX, DivisionByZero, S

__all__ = [
    "RESOLUTION",
    "Q112",
    "UQ112x112",
    "encode_price",
]

RESOLUTION = 112
Q112 = 1 << RESOLUTION


@dataclass(frozen=True)
class UQ112x112:
    """An unsigned 112.112 fixed-point number.

    Attributes:
        raw: The scaled integer value (real value = raw / 2**112)
    """

    raw: int

    @classmethod
    def encode(cls, y: int) -> UQ112x112:
        """Encode a uint112 integer as fixed point."""
        return cls(S(y).to_uint112() * Q112)

    def uqdiv(self, x: int) -> UQ112x112:
        """Divide by a uint112 integer, flooring.

        Raises:
            DivisionByZero: If x is zero
        """
        if x == 0:
            raise DivisionByZero("UQ112x112 division by zero")
        if x > UINT112_MAX:
            raise ValueError(f"Divisor exceeds uint112: {x}")
        return UQ112x112(self.raw // x)

    def mul_elapsed(self, elapsed: int) -> int:
        """Price * seconds, the quantity summed into cumulative accumulators."""
        return self.raw * elapsed

    def to_decimal(self, precision: int = 60) -> Decimal:
        """Convert to Decimal for display and analysis only."""
        with localcontext() as ctx:
            ctx.prec = precision
            return Decimal(self.raw) / Decimal(Q112)


def encode_price(reserve_numerator: int, reserve_denominator: int) -> UQ112x112:
    """Fixed-point price of the denominator asset in units of the numerator asset.

    price0 = encode_price(reserve1, reserve0), price1 = encode_price(reserve0, reserve1).
    """
    return UQ112x112.encode(reserve_numerator).uqdiv(reserve_denominator)
