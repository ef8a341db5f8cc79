"""Test helpers module for shared test utilities.

- constants: Accounts, amounts and timestamps
- contracts: Mintable and failing tokens, flash-swap callees
- pools: Drive a pair directly (deposit, swap)
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    DEADLINE,
    E18,
    FEE_RECIPIENT,
    GENESIS_TIMESTAMP,
    INITIAL_BALANCE,
    INITIAL_NATIVE,
    OWNER,
)
from tests.helpers.contracts import FalseReturningToken, FlashBorrower, MintableToken, ReentrantCallee
from tests.helpers.pools import add_pair_liquidity, swap_exact_in, token_at

__all__ = [
    # Constants
    "OWNER",
    "ALICE",
    "BOB",
    "FEE_RECIPIENT",
    "E18",
    "INITIAL_BALANCE",
    "INITIAL_NATIVE",
    "GENESIS_TIMESTAMP",
    "DEADLINE",
    # Contracts
    "MintableToken",
    "FalseReturningToken",
    "FlashBorrower",
    "ReentrantCallee",
    # Pair drivers
    "add_pair_liquidity",
    "swap_exact_in",
    "token_at",
]
