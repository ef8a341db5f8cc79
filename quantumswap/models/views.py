"""Read-only views of pool and factory state.

These are what monitoring collaborators (security audit, circuit breakers)
consume. Wide integers are rendered as decimal strings.
"""

from pydantic import BaseModel, ConfigDict

from quantumswap.models.types import Address, Uint256


class ReserveSnapshot(BaseModel):
    """Reserves as of the last sync."""

    model_config = ConfigDict(frozen=True)

    reserve0: Uint256
    reserve1: Uint256
    block_timestamp_last: int


class PairState(BaseModel):
    """Everything a monitor needs to know about one pair."""

    model_config = ConfigDict(frozen=True)

    address: Address
    factory: Address
    token0: Address
    token1: Address
    reserves: ReserveSnapshot
    price0_cumulative_last: Uint256
    price1_cumulative_last: Uint256
    k_last: Uint256
    total_supply: Uint256


class FactoryState(BaseModel):
    """Factory configuration and pair count."""

    model_config = ConfigDict(frozen=True)

    address: Address
    fee_to: Address
    fee_to_setter: Address
    pauser: Address
    paused: bool
    pair_count: int


class PairListing(BaseModel):
    """One entry of the factory's ordered pair list."""

    model_config = ConfigDict(frozen=True)

    index: int
    address: Address
    token0: Address
    token1: Address


class AmountsQuote(BaseModel):
    """Per-hop amounts for a path."""

    path: list[Address]
    amounts: list[Uint256]
