"""Mathematical primitives for pool accounting.

- isqrt: floor integer square root (share issuance, protocol fee)
- UQ112x112: binary fixed-point prices for TWAP accumulation
"""

from quantumswap.math.fixed_point import Q112, UQ112x112, encode_price
from quantumswap.math.sqrt import isqrt

__all__ = ["isqrt", "Q112", "UQ112x112", "encode_price"]
