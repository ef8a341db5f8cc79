"""Pairs, their registry and deterministic pair addressing."""

from quantumswap.pools.address import PAIR_INIT_CODE_HASH, compute_pair_address, pair_salt, sort_tokens
from quantumswap.pools.factory import Factory
from quantumswap.pools.pair import FlashSwapCallee, Pair

__all__ = [
    "PAIR_INIT_CODE_HASH",
    "compute_pair_address",
    "pair_salt",
    "sort_tokens",
    "Factory",
    "Pair",
    "FlashSwapCallee",
]
