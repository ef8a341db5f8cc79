"""Integer square root (floor) for share issuance and protocol-fee accrual."""

from __future__ import annotations


def isqrt(y: int) -> int:
    """Return floor(sqrt(y)) using the Babylonian method.

    Matches the on-chain routine step for step: for y > 3 start from y and
    iterate x = (y // x + x) // 2 until it stops decreasing; 1 <= y <= 3 gives 1.

    Raises:
        ValueError: If y is negative
    """
    if y < 0:
        raise ValueError(f"isqrt of negative value: {y}")
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return 0


__all__ = ["isqrt"]
