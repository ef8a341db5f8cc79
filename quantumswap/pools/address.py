"""Deterministic pair addressing.

A pair's address is a pure function of the factory address and the sorted
token pair (CREATE2-style), so anyone can precompute where a pool lives
before, or without, asking the factory.
"""

from __future__ import annotations

from eth_abi.packed import encode_packed
from eth_utils import keccak

from quantumswap.constants import ZERO_ADDRESS
from quantumswap.errors import IdenticalAddresses, ZeroAddress
from quantumswap.models.types import normalize_address

# Stands in for keccak256 of the pair creation code
PAIR_INIT_CODE_HASH = keccak(text="quantumswap.pools.pair.Pair")


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two token identifiers canonically (lower address first).

    Raises:
        IdenticalAddresses: If both identifiers are the same
        ZeroAddress: If either identifier is the null address
    """
    a = normalize_address(token_a)
    b = normalize_address(token_b)
    if a == b:
        raise IdenticalAddresses(f"Identical tokens: {a}")
    token0, token1 = (a, b) if a < b else (b, a)
    # token0 is the smaller, so only it can be the null address
    if token0 == ZERO_ADDRESS:
        raise ZeroAddress()
    return token0, token1


def pair_salt(token0: str, token1: str) -> bytes:
    """keccak256 of the packed, sorted token pair."""
    return keccak(encode_packed(["address", "address"], [token0, token1]))


def compute_pair_address(
    factory: str,
    token_a: str,
    token_b: str,
    init_code_hash: bytes = PAIR_INIT_CODE_HASH,
) -> str:
    """Compute the address of the pair for (token_a, token_b) in either order."""
    token0, token1 = sort_tokens(token_a, token_b)
    factory_bytes = bytes.fromhex(normalize_address(factory, validate=True)[2:])
    digest = keccak(b"\xff" + factory_bytes + pair_salt(token0, token1) + init_code_hash)
    return "0x" + digest[12:].hex()


__all__ = ["PAIR_INIT_CODE_HASH", "sort_tokens", "pair_salt", "compute_pair_address"]
