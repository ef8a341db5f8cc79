"""Pydantic models and shared types for QuantumSwap."""

from quantumswap.models.types import Address, Uint256, is_valid_address, normalize_address
from quantumswap.models.views import (
    AmountsQuote,
    FactoryState,
    PairListing,
    PairState,
    ReserveSnapshot,
)

__all__ = [
    # Types
    "Address",
    "Uint256",
    "normalize_address",
    "is_valid_address",
    # Views
    "ReserveSnapshot",
    "PairState",
    "FactoryState",
    "PairListing",
    "AmountsQuote",
]
