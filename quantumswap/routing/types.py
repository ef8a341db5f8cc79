"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HopQuote:
    """Quoted amounts for a single hop of a path."""

    pair: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    reserve_in: int
    reserve_out: int


@dataclass
class PathQuote:
    """Quoted amounts for a whole path."""

    path: list[str]
    amounts: list[int]
    hops: list[HopQuote]

    @property
    def amount_in(self) -> int:
        return self.amounts[0]

    @property
    def amount_out(self) -> int:
        return self.amounts[-1]

    @property
    def is_multihop(self) -> bool:
        """Check if the path crosses more than one pair."""
        return len(self.path) > 2


__all__ = ["HopQuote", "PathQuote"]
