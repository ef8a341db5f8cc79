"""Protocol constants for QuantumSwap.

Centralizes well-known addresses and the fixed economic parameters of the
constant-product pool. Tunable abuse-resistance thresholds live in
quantumswap.config.PoolPolicy instead.
"""

from quantumswap.models.types import is_valid_address


def _validate_address(name: str, address: str) -> str:
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Null identifier; never a valid token
ZERO_ADDRESS = _validate_address("ZERO", "0x" + "00" * 20)

# Holder of the permanently locked MINIMUM_LIQUIDITY shares
BURN_ADDRESS = _validate_address("BURN", "0x000000000000000000000000000000000000dead")

# Shares locked forever on the first deposit so total supply never returns to zero
MINIMUM_LIQUIDITY = 10**3

# Swap fee: 3 / 1000 = 0.3% of the input amount
FEE_NUMERATOR = 3
FEE_DENOMINATOR = 1000
# 1000 - 3, used by the router pricing formulas
FEE_MULTIPLIER = FEE_DENOMINATOR - FEE_NUMERATOR

# Protocol fee skims 1/6 of liquidity growth: sqrt(k) growth / (5 * rootK + rootKLast)
PROTOCOL_FEE_DIVISOR = 5

# Basis-point denominator for policy thresholds
BPS = 10_000

# LP token metadata
LP_TOKEN_NAME = "QuantumSwap LP"
LP_TOKEN_SYMBOL = "QS-LP"
LP_TOKEN_DECIMALS = 18
