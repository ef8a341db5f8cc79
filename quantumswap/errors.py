"""QuantumSwap error classes.

Every rejected call surfaces as a distinct exception class so callers can
branch on the cause. Each class carries a stable ``code`` matching the revert
reason strings used by the on-chain contracts.

Families:
- PreconditionError: bad identifiers, unauthorized callers, lifecycle misuse
- EconomicSafetyError: trades or liquidity changes rejected to protect the pool
- ArithmeticGuardError: overflow beyond storage bounds, division by zero
"""

from __future__ import annotations

from typing import ClassVar


class QuantumSwapError(Exception):
    """Base error for all protocol failures."""

    code: ClassVar[str] = "QUANTUMSWAP: ERROR"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class PreconditionError(QuantumSwapError):
    """A call precondition was not met. No state was changed."""


class EconomicSafetyError(QuantumSwapError):
    """A trade or liquidity operation was rejected as unsafe for the pool."""


class ArithmeticGuardError(QuantumSwapError, ArithmeticError):
    """An arithmetic bound was exceeded."""


# --- Pair ---


class Locked(PreconditionError):
    code = "PAIR: LOCKED"


class Forbidden(PreconditionError):
    code = "PAIR: FORBIDDEN"


class AlreadyInitialized(PreconditionError):
    code = "PAIR: ALREADY_INITIALIZED"


class InvalidRecipient(PreconditionError):
    code = "PAIR: INVALID_TO"


class InvalidCallee(PreconditionError):
    """Flash-swap data was supplied but the recipient cannot receive a callback."""

    code = "PAIR: INVALID_CALLEE"


class TransferFailed(PreconditionError):
    code = "PAIR: TRANSFER_FAILED"


class InsufficientLiquidityMinted(EconomicSafetyError):
    code = "PAIR: INSUFFICIENT_LIQUIDITY_MINTED"


class InsufficientLiquidityBurned(EconomicSafetyError):
    code = "PAIR: INSUFFICIENT_LIQUIDITY_BURNED"


class InsufficientOutputAmount(EconomicSafetyError):
    code = "INSUFFICIENT_OUTPUT_AMOUNT"


class InsufficientInputAmount(EconomicSafetyError):
    code = "INSUFFICIENT_INPUT_AMOUNT"


class InsufficientLiquidity(EconomicSafetyError):
    code = "INSUFFICIENT_LIQUIDITY"


class SwapTooLarge(EconomicSafetyError):
    """Requested output exceeds the per-swap share of the reserve."""

    code = "PAIR: SWAP_TOO_LARGE"


class SwapTooSmall(EconomicSafetyError):
    """No requested output reaches the dust floor."""

    code = "PAIR: SWAP_TOO_SMALL"


class PriceImpactTooHigh(EconomicSafetyError):
    """Inferred input exceeds the per-swap share of the reserve."""

    code = "PAIR: PRICE_IMPACT_TOO_HIGH"


class InvariantViolation(EconomicSafetyError):
    """Fee-adjusted reserve product decreased."""

    code = "PAIR: K"


class ReserveOverflow(ArithmeticGuardError):
    code = "PAIR: OVERFLOW"


# --- Factory ---


class IdenticalAddresses(PreconditionError):
    code = "FACTORY: IDENTICAL_ADDRESSES"


class ZeroAddress(PreconditionError):
    code = "FACTORY: ZERO_ADDRESS"


class PairExists(PreconditionError):
    code = "FACTORY: PAIR_EXISTS"


class FactoryPaused(PreconditionError):
    code = "FACTORY: PAUSED"


class FactoryForbidden(PreconditionError):
    code = "FACTORY: FORBIDDEN"


class NotPauser(PreconditionError):
    code = "FACTORY: NOT_PAUSER"


# --- Router ---


class Expired(PreconditionError):
    code = "ROUTER: EXPIRED"


class InvalidPath(PreconditionError):
    code = "ROUTER: INVALID_PATH"


class PairNotFound(PreconditionError):
    code = "ROUTER: PAIR_NOT_FOUND"


class InsufficientAmount(EconomicSafetyError):
    code = "ROUTER: INSUFFICIENT_AMOUNT"


class InsufficientAAmount(EconomicSafetyError):
    code = "ROUTER: INSUFFICIENT_A_AMOUNT"


class InsufficientBAmount(EconomicSafetyError):
    code = "ROUTER: INSUFFICIENT_B_AMOUNT"


class ExcessiveInputAmount(EconomicSafetyError):
    code = "ROUTER: EXCESSIVE_INPUT_AMOUNT"


class RouterPriceImpactTooHigh(EconomicSafetyError):
    code = "ROUTER: PRICE_IMPACT_TOO_HIGH"


class InvalidPriceRatio(EconomicSafetyError):
    """Quoted reserves are more lopsided than the policy allows."""

    code = "ROUTER: INVALID_PRICE_RATIO"


# --- Tokens / native balances ---


class InsufficientBalance(PreconditionError):
    code = "TOKEN: INSUFFICIENT_BALANCE"


class InsufficientAllowance(PreconditionError):
    code = "TOKEN: INSUFFICIENT_ALLOWANCE"


class InsufficientNativeBalance(PreconditionError):
    code = "CHAIN: INSUFFICIENT_NATIVE_BALANCE"


__all__ = [
    "QuantumSwapError",
    "PreconditionError",
    "EconomicSafetyError",
    "ArithmeticGuardError",
    "Locked",
    "Forbidden",
    "AlreadyInitialized",
    "InvalidRecipient",
    "InvalidCallee",
    "TransferFailed",
    "InsufficientLiquidityMinted",
    "InsufficientLiquidityBurned",
    "InsufficientOutputAmount",
    "InsufficientInputAmount",
    "InsufficientLiquidity",
    "SwapTooLarge",
    "SwapTooSmall",
    "PriceImpactTooHigh",
    "InvariantViolation",
    "ReserveOverflow",
    "IdenticalAddresses",
    "ZeroAddress",
    "PairExists",
    "FactoryPaused",
    "FactoryForbidden",
    "NotPauser",
    "Expired",
    "InvalidPath",
    "PairNotFound",
    "InsufficientAmount",
    "InsufficientAAmount",
    "InsufficientBAmount",
    "ExcessiveInputAmount",
    "RouterPriceImpactTooHigh",
    "InvalidPriceRatio",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InsufficientNativeBalance",
]
