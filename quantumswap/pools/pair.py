"""Constant-product pair.

The pair owns one pool's reserves, its LP-share ledger (it is itself an ERC20)
and its TWAP accumulators. Amounts deposited or paid in are never passed as
parameters: mint and swap read the pair's actual token balances and infer the
deltas against the last synced reserves, so callers must transfer first and
call second.

Invariant: after every mint, burn and swap, ``reserve0 * reserve1`` does not
decrease (except by a proportional burn) and both reserves fit in uint112.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Concatenate, ParamSpec, Protocol, TypeVar, runtime_checkable

import structlog

from quantumswap.chain import atomic
from quantumswap.config import DEFAULT_POOL_POLICY, PoolPolicy
from quantumswap.constants import (
    BPS,
    BURN_ADDRESS,
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    LP_TOKEN_DECIMALS,
    LP_TOKEN_NAME,
    LP_TOKEN_SYMBOL,
    MINIMUM_LIQUIDITY,
    PROTOCOL_FEE_DIVISOR,
    ZERO_ADDRESS,
)
from quantumswap.errors import (
    AlreadyInitialized,
    Forbidden,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientOutputAmount,
    InvalidCallee,
    InvalidRecipient,
    InvariantViolation,
    Locked,
    PriceImpactTooHigh,
    ReserveOverflow,
    SwapTooLarge,
    SwapTooSmall,
    TransferFailed,
)
from quantumswap.math import encode_price, isqrt
from quantumswap.models.types import normalize_address
from quantumswap.models.views import PairState, ReserveSnapshot
from quantumswap.safe_int import UINT32_MAX, UINT112_MAX, S
from quantumswap.tokens.base import resolve_token
from quantumswap.tokens.erc20 import ERC20

if TYPE_CHECKING:
    from quantumswap.chain import Chain
    from quantumswap.pools.factory import Factory

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")

TIMESTAMP_MODULUS = UINT32_MAX + 1
CUMULATIVE_MODULUS = 2**256


@runtime_checkable
class FlashSwapCallee(Protocol):
    """Recipient of a flash swap.

    Called after the pair has sent the requested outputs and before it checks
    that enough input came back.
    """

    def quantum_swap_call(self, sender: str, amount0: int, amount1: int, data: bytes) -> None: ...


def lock(method: Callable[Concatenate[Pair, P], R]) -> Callable[Concatenate[Pair, P], R]:
    """Reject re-entry into any locked pair method; release on every exit."""

    @functools.wraps(method)
    def wrapper(self: Pair, *args: P.args, **kwargs: P.kwargs) -> R:
        if not self._unlocked:
            raise Locked()
        self._unlocked = False
        try:
            return method(self, *args, **kwargs)
        finally:
            self._unlocked = True

    return wrapper


class Pair(ERC20):
    """A two-asset constant-product pool with an embedded LP-share ledger."""

    _state_fields = ERC20._state_fields + (
        "token0",
        "token1",
        "reserve0",
        "reserve1",
        "block_timestamp_last",
        "price0_cumulative_last",
        "price1_cumulative_last",
        "twap_reserve0",
        "twap_reserve1",
        "k_last",
        "_unlocked",
    )

    def __init__(
        self,
        chain: Chain,
        factory: str,
        policy: PoolPolicy = DEFAULT_POOL_POLICY,
        address: str | None = None,
    ) -> None:
        self.factory = normalize_address(factory)
        self.policy = policy
        self.token0 = ZERO_ADDRESS
        self.token1 = ZERO_ADDRESS
        self.reserve0 = 0
        self.reserve1 = 0
        self.block_timestamp_last = 0
        self.price0_cumulative_last = 0
        self.price1_cumulative_last = 0
        # reserves as of the last clock advance; the TWAP threshold is measured from here
        self.twap_reserve0 = 0
        self.twap_reserve1 = 0
        self.k_last = 0
        self._unlocked = True
        super().__init__(chain, LP_TOKEN_NAME, LP_TOKEN_SYMBOL, LP_TOKEN_DECIMALS, address)

    # --- Views ---

    @property
    def initialized(self) -> bool:
        return self.token0 != ZERO_ADDRESS

    def get_reserves(self) -> tuple[int, int, int]:
        """Return (reserve0, reserve1, block_timestamp_last)."""
        return self.reserve0, self.reserve1, self.block_timestamp_last

    def snapshot(self) -> PairState:
        return PairState(
            address=self.address,
            factory=self.factory,
            token0=self.token0,
            token1=self.token1,
            reserves=ReserveSnapshot(
                reserve0=self.reserve0,
                reserve1=self.reserve1,
                block_timestamp_last=self.block_timestamp_last,
            ),
            price0_cumulative_last=self.price0_cumulative_last,
            price1_cumulative_last=self.price1_cumulative_last,
            k_last=self.k_last,
            total_supply=self.total_supply,
        )

    # --- Lifecycle ---

    @atomic
    def initialize(self, token0: str, token1: str, *, sender: str) -> None:
        """Bind the pair to its two tokens. Factory only, exactly once."""
        if normalize_address(sender) != self.factory:
            raise Forbidden(f"Only the factory may initialize, got {sender}")
        if self.initialized:
            raise AlreadyInitialized()
        self.token0 = normalize_address(token0)
        self.token1 = normalize_address(token1)

    # --- Liquidity ---

    @atomic
    @lock
    def mint(self, to: str, *, sender: str = ZERO_ADDRESS) -> int:
        """Issue LP shares for the tokens transferred in since the last sync.

        Returns:
            Number of shares minted to ``to``

        Raises:
            InsufficientLiquidityMinted: If the deposit is worth zero shares
        """
        reserve0, reserve1 = self.reserve0, self.reserve1
        balance0, balance1 = self._balances()
        amount0 = (S(balance0) - S(reserve0)).value
        amount1 = (S(balance1) - S(reserve1)).value

        fee_on = self._mint_fee(reserve0, reserve1)
        total_supply = self.total_supply  # read after _mint_fee, which can mint
        if total_supply == 0:
            root = isqrt(amount0 * amount1)
            if root <= MINIMUM_LIQUIDITY:
                raise InsufficientLiquidityMinted(
                    f"Initial deposit worth {root} shares, need more than {MINIMUM_LIQUIDITY}"
                )
            liquidity = root - MINIMUM_LIQUIDITY
            self._mint(BURN_ADDRESS, MINIMUM_LIQUIDITY)
        else:
            liquidity = (
                (S(amount0) * total_supply // reserve0)
                .min(S(amount1) * total_supply // reserve1)
                .value
            )
        if liquidity <= 0:
            raise InsufficientLiquidityMinted()

        self._mint(to, liquidity)
        self._update(balance0, balance1, reserve0, reserve1)
        if fee_on:
            self.k_last = self.reserve0 * self.reserve1
        self.emit("Mint", sender=normalize_address(sender), amount0=amount0, amount1=amount1)
        logger.debug(
            "liquidity_minted",
            pair=self.address,
            to=normalize_address(to),
            amount0=amount0,
            amount1=amount1,
            liquidity=liquidity,
        )
        return liquidity

    @atomic
    @lock
    def burn(self, to: str, *, sender: str = ZERO_ADDRESS) -> tuple[int, int]:
        """Redeem the LP shares held by the pair for a pro-rata slice of its balances.

        Payouts use current balances, not reserves, so donated tokens are
        distributed too.

        Raises:
            InsufficientLiquidityBurned: If either payout rounds to zero
        """
        reserve0, reserve1 = self.reserve0, self.reserve1
        balance0, balance1 = self._balances()
        liquidity = self.balance_of(self.address)

        fee_on = self._mint_fee(reserve0, reserve1)
        total_supply = self.total_supply
        if liquidity == 0 or total_supply == 0:
            raise InsufficientLiquidityBurned("No shares were transferred to the pair")
        amount0 = liquidity * balance0 // total_supply
        amount1 = liquidity * balance1 // total_supply
        if amount0 <= 0 or amount1 <= 0:
            raise InsufficientLiquidityBurned(f"Payout ({amount0}, {amount1}) rounds to zero")

        self._burn(self.address, liquidity)
        self._safe_transfer(self.token0, to, amount0)
        self._safe_transfer(self.token1, to, amount1)
        balance0, balance1 = self._balances()

        self._update(balance0, balance1, reserve0, reserve1)
        if fee_on:
            self.k_last = self.reserve0 * self.reserve1
        to = normalize_address(to)
        self.emit("Burn", sender=normalize_address(sender), amount0=amount0, amount1=amount1, to=to)
        logger.debug(
            "liquidity_burned",
            pair=self.address,
            to=to,
            amount0=amount0,
            amount1=amount1,
            liquidity=liquidity,
        )
        return amount0, amount1

    # --- Trading ---

    @atomic
    @lock
    def swap(
        self,
        amount0_out: int,
        amount1_out: int,
        to: str,
        data: bytes = b"",
        *,
        sender: str = ZERO_ADDRESS,
    ) -> None:
        """Send the requested outputs, then verify enough input arrived.

        Inputs are inferred from balances after the outputs (and the optional
        flash-swap callback) have run.
        """
        to = normalize_address(to)
        if amount0_out <= 0 and amount1_out <= 0:
            raise InsufficientOutputAmount()
        if amount0_out < 0 or amount1_out < 0:
            raise InsufficientOutputAmount(f"Negative output: ({amount0_out}, {amount1_out})")
        reserve0, reserve1 = self.reserve0, self.reserve1
        if amount0_out >= reserve0 or amount1_out >= reserve1:
            raise InsufficientLiquidity(
                f"Outputs ({amount0_out}, {amount1_out}) vs reserves ({reserve0}, {reserve1})"
            )
        if to in (self.token0, self.token1):
            raise InvalidRecipient(f"Recipient {to} is a pool token")

        max_output_bps = self.policy.max_output_bps
        if amount0_out * BPS > reserve0 * max_output_bps or amount1_out * BPS > reserve1 * max_output_bps:
            raise SwapTooLarge(f"Output above {max_output_bps} bps of reserve")
        if max(amount0_out, amount1_out) < self.policy.min_swap_amount:
            raise SwapTooSmall(f"Output below {self.policy.min_swap_amount} units")

        if amount0_out > 0:
            self._safe_transfer(self.token0, to, amount0_out)
        if amount1_out > 0:
            self._safe_transfer(self.token1, to, amount1_out)
        if data:
            callee = self.chain.contract_at(to)
            if not isinstance(callee, FlashSwapCallee):
                raise InvalidCallee(f"{to} cannot receive a flash-swap callback")
            callee.quantum_swap_call(normalize_address(sender), amount0_out, amount1_out, data)
        balance0, balance1 = self._balances()

        amount0_in = S(balance0).saturating_sub(S(reserve0) - amount0_out).value
        amount1_in = S(balance1).saturating_sub(S(reserve1) - amount1_out).value
        if amount0_in <= 0 and amount1_in <= 0:
            raise InsufficientInputAmount()

        max_input_bps = self.policy.max_input_bps
        if amount0_in * BPS > reserve0 * max_input_bps or amount1_in * BPS > reserve1 * max_input_bps:
            raise PriceImpactTooHigh(f"Input above {max_input_bps} bps of reserve")

        balance0_adjusted = balance0 * FEE_DENOMINATOR - amount0_in * FEE_NUMERATOR
        balance1_adjusted = balance1 * FEE_DENOMINATOR - amount1_in * FEE_NUMERATOR
        if balance0_adjusted * balance1_adjusted < reserve0 * reserve1 * FEE_DENOMINATOR**2:
            raise InvariantViolation()

        self._update(balance0, balance1, reserve0, reserve1)
        self.emit(
            "Swap",
            sender=normalize_address(sender),
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
            to=to,
        )
        logger.debug(
            "swap_executed",
            pair=self.address,
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
        )

    # --- Reconciliation ---

    @atomic
    @lock
    def skim(self, to: str) -> None:
        """Send any balance in excess of the reserves to ``to``."""
        balance0, balance1 = self._balances()
        self._safe_transfer(self.token0, to, balance0 - self.reserve0)
        self._safe_transfer(self.token1, to, balance1 - self.reserve1)

    @atomic
    @lock
    def sync(self) -> None:
        """Force reserves to match balances."""
        balance0, balance1 = self._balances()
        self._update(balance0, balance1, self.reserve0, self.reserve1)

    # --- Internals ---

    def _factory(self) -> Factory:
        from quantumswap.pools.factory import Factory

        factory = self.chain.contract_at(self.factory)
        if not isinstance(factory, Factory):
            raise Forbidden(f"No factory deployed at {self.factory}")
        return factory

    def _balances(self) -> tuple[int, int]:
        return (
            resolve_token(self.chain, self.token0).balance_of(self.address),
            resolve_token(self.chain, self.token1).balance_of(self.address),
        )

    def _safe_transfer(self, token: str, to: str, value: int) -> None:
        if not resolve_token(self.chain, token).transfer(self.address, to, value):
            raise TransferFailed(f"Transfer of {value} {token} to {to} failed")

    def _reserves_moved(self, balance0: int, balance1: int) -> bool:
        """Whether either balance is more than the TWAP threshold away from the baseline."""
        threshold = self.policy.twap_min_change_bps
        baseline0, baseline1 = self.twap_reserve0, self.twap_reserve1
        if threshold == 0 or baseline0 == 0 or baseline1 == 0:
            return True
        return (
            abs(balance0 - baseline0) * BPS > baseline0 * threshold
            or abs(balance1 - baseline1) * BPS > baseline1 * threshold
        )

    def _update(self, balance0: int, balance1: int, reserve0: int, reserve1: int) -> None:
        """Write new reserves and advance the price accumulators.

        Accumulates the price that held *before* this update, for at most
        ``twap_max_elapsed`` seconds. An update within the threshold of the
        baseline leaves the clock and accumulators alone, so the time it
        spans is credited by the next significant update instead of lost.
        """
        if balance0 > UINT112_MAX or balance1 > UINT112_MAX:
            raise ReserveOverflow(f"Balances ({balance0}, {balance1}) exceed uint112")
        if self._reserves_moved(balance0, balance1):
            block_timestamp = self.chain.timestamp % TIMESTAMP_MODULUS
            # wraps correctly across the uint32 boundary
            time_elapsed = (block_timestamp - self.block_timestamp_last) % TIMESTAMP_MODULUS
            time_elapsed = min(time_elapsed, self.policy.twap_max_elapsed)
            if time_elapsed > 0 and reserve0 != 0 and reserve1 != 0:
                self.price0_cumulative_last = (
                    self.price0_cumulative_last + encode_price(reserve1, reserve0).mul_elapsed(time_elapsed)
                ) % CUMULATIVE_MODULUS
                self.price1_cumulative_last = (
                    self.price1_cumulative_last + encode_price(reserve0, reserve1).mul_elapsed(time_elapsed)
                ) % CUMULATIVE_MODULUS
            self.block_timestamp_last = block_timestamp
            self.twap_reserve0 = balance0
            self.twap_reserve1 = balance1
        self.reserve0 = balance0
        self.reserve1 = balance1
        self.emit("Sync", reserve0=balance0, reserve1=balance1)

    def _mint_fee(self, reserve0: int, reserve1: int) -> bool:
        """Mint the protocol's 1/6 share of sqrt(k) growth since the last liquidity event.

        Returns:
            Whether fee accrual is on (a fee recipient is configured)
        """
        config = self._factory().config
        k_last = self.k_last
        if config.fee_on:
            if k_last != 0:
                root_k = isqrt(reserve0 * reserve1)
                root_k_last = isqrt(k_last)
                if root_k > root_k_last:
                    numerator = self.total_supply * (root_k - root_k_last)
                    denominator = root_k * PROTOCOL_FEE_DIVISOR + root_k_last
                    liquidity = numerator // denominator
                    if liquidity > 0:
                        self._mint(config.fee_to, liquidity)
                        logger.debug(
                            "protocol_fee_minted",
                            pair=self.address,
                            fee_to=config.fee_to,
                            liquidity=liquidity,
                        )
        elif k_last != 0:
            self.k_last = 0
        return config.fee_on


__all__ = ["Pair", "FlashSwapCallee", "lock"]
