"""TWAP helpers over pair cumulative-price accumulators.

Consumers take two observations of a pair some time apart and divide the
accumulator growth by the elapsed time to get the average UQ112x112 price.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quantumswap.math import UQ112x112, encode_price
from quantumswap.pools.pair import CUMULATIVE_MODULUS, TIMESTAMP_MODULUS, Pair


@dataclass(frozen=True)
class CumulativeObservation:
    """Cumulative prices of one pair at one timestamp (mod 2**32)."""

    timestamp: int
    price0_cumulative: int
    price1_cumulative: int


@dataclass(frozen=True)
class TwapResult:
    """Average prices between two observations.

    Attributes:
        price0: Average price of token0 in token1
        price1: Average price of token1 in token0
        elapsed: Seconds between the observations
    """

    price0: UQ112x112
    price1: UQ112x112
    elapsed: int

    @property
    def price0_decimal(self) -> Decimal:
        return self.price0.to_decimal()

    @property
    def price1_decimal(self) -> Decimal:
        return self.price1.to_decimal()


def current_cumulative_prices(pair: Pair) -> CumulativeObservation:
    """Cumulative prices as if the pair were synced now.

    Adds the current spot price times the time since the pair's clock last
    advanced (capped like the pair caps it) without touching pair state.
    Updates inside the reserve-change threshold do not advance that clock,
    so this is exactly what the next significant update would credit.
    """
    block_timestamp = pair.chain.timestamp % TIMESTAMP_MODULUS
    price0 = pair.price0_cumulative_last
    price1 = pair.price1_cumulative_last
    reserve0, reserve1, block_timestamp_last = pair.get_reserves()
    if block_timestamp_last != block_timestamp and reserve0 and reserve1:
        elapsed = (block_timestamp - block_timestamp_last) % TIMESTAMP_MODULUS
        elapsed = min(elapsed, pair.policy.twap_max_elapsed)
        price0 = (price0 + encode_price(reserve1, reserve0).mul_elapsed(elapsed)) % CUMULATIVE_MODULUS
        price1 = (price1 + encode_price(reserve0, reserve1).mul_elapsed(elapsed)) % CUMULATIVE_MODULUS
    return CumulativeObservation(
        timestamp=block_timestamp,
        price0_cumulative=price0,
        price1_cumulative=price1,
    )


def compute_twap(start: CumulativeObservation, end: CumulativeObservation) -> TwapResult:
    """Average prices between two observations of the same pair.

    Accumulator and timestamp differences are taken modulo their widths, so
    a single wraparound between the observations is handled.

    Raises:
        ValueError: If both observations share a timestamp
    """
    elapsed = (end.timestamp - start.timestamp) % TIMESTAMP_MODULUS
    if elapsed == 0:
        raise ValueError("Observations must be taken at different timestamps")
    delta0 = (end.price0_cumulative - start.price0_cumulative) % CUMULATIVE_MODULUS
    delta1 = (end.price1_cumulative - start.price1_cumulative) % CUMULATIVE_MODULUS
    return TwapResult(
        price0=UQ112x112(delta0 // elapsed),
        price1=UQ112x112(delta1 // elapsed),
        elapsed=elapsed,
    )


__all__ = ["CumulativeObservation", "TwapResult", "current_cumulative_prices", "compute_twap"]
