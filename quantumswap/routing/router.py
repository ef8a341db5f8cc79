"""Stateless router over a factory's pairs.

The router resolves optimal liquidity ratios and whole-path amounts before
moving anything, then drives the pairs: inputs go into the first pair,
intermediate outputs go straight to the next pair, and the final output goes
to the recipient. Native-asset entry points wrap and unwrap through the
WrappedNative token, refunding any unused native input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from quantumswap.chain import Contract, atomic
from quantumswap.constants import BPS, ZERO_ADDRESS
from quantumswap.errors import (
    ExcessiveInputAmount,
    Expired,
    InsufficientAAmount,
    InsufficientBAmount,
    InsufficientOutputAmount,
    InvalidPath,
    InvalidPriceRatio,
    RouterPriceImpactTooHigh,
    TransferFailed,
)
from quantumswap.models.types import normalize_address
from quantumswap.pools.address import sort_tokens
from quantumswap.pools.factory import Factory
from quantumswap.routing.library import (
    describe_path,
    get_amounts_in,
    get_amounts_out,
    get_reserves,
    pair_for,
    quote,
)
from quantumswap.routing.types import PathQuote
from quantumswap.tokens.base import resolve_token
from quantumswap.tokens.wrapped import WrappedNative

if TYPE_CHECKING:
    from quantumswap.chain import Chain

logger = structlog.get_logger()


class Router(Contract):
    """Liquidity and swap entry points for end users.

    Every mutating method takes the caller as ``sender`` and a ``deadline``
    (compared against the chain clock). Native-asset methods take the native
    amount sent with the call as ``value``.
    """

    def __init__(self, chain: Chain, factory: str, weth: str, address: str | None = None) -> None:
        self.factory_address = normalize_address(factory)
        self.weth_address = normalize_address(weth)
        super().__init__(chain, address)

    @property
    def factory(self) -> Factory:
        factory = self.chain.contract_at(self.factory_address)
        if not isinstance(factory, Factory):
            raise LookupError(f"No factory deployed at {self.factory_address}")
        return factory

    @property
    def weth(self) -> WrappedNative:
        weth = self.chain.contract_at(self.weth_address)
        if not isinstance(weth, WrappedNative):
            raise LookupError(f"No wrapped native token deployed at {self.weth_address}")
        return weth

    def ensure(self, deadline: int) -> None:
        """Raise Expired if the chain clock has passed ``deadline``."""
        if self.chain.timestamp > deadline:
            raise Expired(f"Deadline {deadline} passed at {self.chain.timestamp}")

    # --- Quoting ---

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Proportional quote, refused for reserves more lopsided than the policy allows."""
        amount_b = quote(amount_a, reserve_a, reserve_b)
        max_ratio = self.factory.policy.router_max_price_ratio
        if max_ratio and max(reserve_a, reserve_b) > min(reserve_a, reserve_b) * max_ratio:
            raise InvalidPriceRatio(f"Reserves {reserve_a}:{reserve_b} exceed ratio {max_ratio}:1")
        return amount_b

    def get_amounts_out(self, amount_in: int, path: list[str]) -> list[int]:
        return get_amounts_out(self.factory, amount_in, path)

    def get_amounts_in(self, amount_out: int, path: list[str]) -> list[int]:
        return get_amounts_in(self.factory, amount_out, path)

    def quote_path(self, amount_in: int, path: list[str]) -> PathQuote:
        """Per-hop view of an exact-input quote along ``path``."""
        return describe_path(self.factory, path, self.get_amounts_out(amount_in, path))

    # --- Liquidity ---

    def _add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        sender: str,
    ) -> tuple[int, int]:
        """Resolve deposit amounts matching the pool ratio, creating the pair if missing."""
        factory = self.factory
        if factory.get_pair(token_a, token_b) == ZERO_ADDRESS:
            factory.create_pair(token_a, token_b, sender=sender)
        reserve_a, reserve_b = get_reserves(factory, token_a, token_b)
        if reserve_a == 0 and reserve_b == 0:
            return amount_a_desired, amount_b_desired

        amount_b_optimal = quote(amount_a_desired, reserve_a, reserve_b)
        if amount_b_optimal <= amount_b_desired:
            if amount_b_optimal < amount_b_min:
                raise InsufficientBAmount(f"Optimal B {amount_b_optimal} below minimum {amount_b_min}")
            return amount_a_desired, amount_b_optimal

        amount_a_optimal = quote(amount_b_desired, reserve_b, reserve_a)
        # amount_b_optimal > amount_b_desired implies amount_a_optimal < amount_a_desired
        if amount_a_optimal < amount_a_min:
            raise InsufficientAAmount(f"Optimal A {amount_a_optimal} below minimum {amount_a_min}")
        return amount_a_optimal, amount_b_desired

    @atomic
    def add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int, int]:
        """Deposit both tokens at the pool ratio and mint LP shares to ``to``.

        Returns:
            (amount_a, amount_b, liquidity)
        """
        self.ensure(deadline)
        amount_a, amount_b = self._add_liquidity(
            token_a, token_b, amount_a_desired, amount_b_desired, amount_a_min, amount_b_min, sender
        )
        pair = pair_for(self.factory, token_a, token_b)
        self._safe_transfer_from(token_a, sender, pair.address, amount_a)
        self._safe_transfer_from(token_b, sender, pair.address, amount_b)
        liquidity = pair.mint(to, sender=self.address)
        logger.info(
            "liquidity_added",
            pair=pair.address,
            sender=normalize_address(sender),
            amount_a=amount_a,
            amount_b=amount_b,
            liquidity=liquidity,
        )
        return amount_a, amount_b, liquidity

    @atomic
    def add_liquidity_eth(
        self,
        token: str,
        amount_token_desired: int,
        amount_token_min: int,
        amount_eth_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
        value: int,
    ) -> tuple[int, int, int]:
        """Deposit a token against native value; unused native value is refunded.

        Returns:
            (amount_token, amount_eth, liquidity)
        """
        self.ensure(deadline)
        self.chain.transfer_native(sender, self.address, value)
        amount_token, amount_eth = self._add_liquidity(
            token, self.weth_address, amount_token_desired, value, amount_token_min, amount_eth_min, sender
        )
        pair = pair_for(self.factory, token, self.weth_address)
        self._safe_transfer_from(token, sender, pair.address, amount_token)
        self._wrap_to(pair.address, amount_eth)
        liquidity = pair.mint(to, sender=self.address)
        if value > amount_eth:
            self.chain.transfer_native(self.address, sender, value - amount_eth)
        logger.info(
            "liquidity_added",
            pair=pair.address,
            sender=normalize_address(sender),
            amount_a=amount_token,
            amount_b=amount_eth,
            liquidity=liquidity,
        )
        return amount_token, amount_eth, liquidity

    def _remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        sender: str,
    ) -> tuple[int, int]:
        pair = pair_for(self.factory, token_a, token_b)
        self._safe_transfer_from(pair.address, sender, pair.address, liquidity)
        amount0, amount1 = pair.burn(to, sender=self.address)
        token0, _ = sort_tokens(token_a, token_b)
        amount_a, amount_b = (amount0, amount1) if normalize_address(token_a) == token0 else (amount1, amount0)
        if amount_a < amount_a_min:
            raise InsufficientAAmount(f"Received {amount_a} A, minimum {amount_a_min}")
        if amount_b < amount_b_min:
            raise InsufficientBAmount(f"Received {amount_b} B, minimum {amount_b_min}")
        logger.info(
            "liquidity_removed",
            pair=pair.address,
            sender=normalize_address(sender),
            amount_a=amount_a,
            amount_b=amount_b,
            liquidity=liquidity,
        )
        return amount_a, amount_b

    @atomic
    def remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Burn ``liquidity`` LP shares of ``sender`` and pay both tokens to ``to``.

        The router must be approved for the LP shares.
        """
        self.ensure(deadline)
        return self._remove_liquidity(token_a, token_b, liquidity, amount_a_min, amount_b_min, to, sender)

    @atomic
    def remove_liquidity_eth(
        self,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_eth_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Like remove_liquidity, paying the wrapped side out as native value."""
        self.ensure(deadline)
        amount_token, amount_eth = self._remove_liquidity(
            token, self.weth_address, liquidity, amount_token_min, amount_eth_min, self.address, sender
        )
        self._safe_transfer(token, to, amount_token)
        self._unwrap_to(to, amount_eth)
        return amount_token, amount_eth

    # --- Swaps ---

    @atomic
    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        self.ensure(deadline)
        amounts = self.get_amounts_out(amount_in, path)
        self._require_min_output(amounts[-1], amount_out_min)
        self._pay_in(path, amounts, sender)
        self._swap(amounts, path, to)
        return amounts

    @atomic
    def swap_tokens_for_exact_tokens(
        self,
        amount_out: int,
        amount_in_max: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        self.ensure(deadline)
        amounts = self.get_amounts_in(amount_out, path)
        self._require_max_input(amounts[0], amount_in_max)
        self._pay_in(path, amounts, sender)
        self._swap(amounts, path, to)
        return amounts

    @atomic
    def swap_exact_eth_for_tokens(
        self,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
        value: int,
    ) -> list[int]:
        self.ensure(deadline)
        self._require_path_start(path, self.weth_address)
        amounts = self.get_amounts_out(value, path)
        self._require_min_output(amounts[-1], amount_out_min)
        self._check_hop_impact(path, amounts)
        self.chain.transfer_native(sender, self.address, value)
        self._wrap_to(self.factory.get_pair(path[0], path[1]), amounts[0])
        self._swap(amounts, path, to)
        return amounts

    @atomic
    def swap_tokens_for_exact_eth(
        self,
        amount_out: int,
        amount_in_max: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        self.ensure(deadline)
        self._require_path_end(path, self.weth_address)
        amounts = self.get_amounts_in(amount_out, path)
        self._require_max_input(amounts[0], amount_in_max)
        self._pay_in(path, amounts, sender)
        self._swap(amounts, path, self.address)
        self._unwrap_to(to, amounts[-1])
        return amounts

    @atomic
    def swap_exact_tokens_for_eth(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        self.ensure(deadline)
        self._require_path_end(path, self.weth_address)
        amounts = self.get_amounts_out(amount_in, path)
        self._require_min_output(amounts[-1], amount_out_min)
        self._pay_in(path, amounts, sender)
        self._swap(amounts, path, self.address)
        self._unwrap_to(to, amounts[-1])
        return amounts

    @atomic
    def swap_eth_for_exact_tokens(
        self,
        amount_out: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
        value: int,
    ) -> list[int]:
        """Buy exactly ``amount_out``; native value beyond the required input is refunded."""
        self.ensure(deadline)
        self._require_path_start(path, self.weth_address)
        amounts = self.get_amounts_in(amount_out, path)
        self._require_max_input(amounts[0], value)
        self._check_hop_impact(path, amounts)
        self.chain.transfer_native(sender, self.address, value)
        self._wrap_to(self.factory.get_pair(path[0], path[1]), amounts[0])
        self._swap(amounts, path, to)
        if value > amounts[0]:
            self.chain.transfer_native(self.address, sender, value - amounts[0])
        return amounts

    # --- Internals ---

    def _swap(self, amounts: list[int], path: list[str], to: str) -> None:
        """Execute precomputed hops; each hop pays the next pair directly."""
        factory = self.factory
        path = [normalize_address(token) for token in path]
        for i, (token_in, token_out) in enumerate(zip(path, path[1:])):
            token0, _ = sort_tokens(token_in, token_out)
            amount_out = amounts[i + 1]
            amount0_out, amount1_out = (0, amount_out) if token_in == token0 else (amount_out, 0)
            recipient = factory.get_pair(token_out, path[i + 2]) if i < len(path) - 2 else to
            pair_for(factory, token_in, token_out).swap(amount0_out, amount1_out, recipient, sender=self.address)
        logger.info(
            "route_executed",
            path=path,
            amount_in=amounts[0],
            amount_out=amounts[-1],
            to=normalize_address(to),
        )

    def _pay_in(self, path: list[str], amounts: list[int], sender: str) -> None:
        self._check_hop_impact(path, amounts)
        first_pair = pair_for(self.factory, path[0], path[1])
        self._safe_transfer_from(path[0], sender, first_pair.address, amounts[0])

    def _check_hop_impact(self, path: list[str], amounts: list[int]) -> None:
        """Reject any hop whose input is too large a share of that hop's input reserve."""
        max_bps = self.factory.policy.router_max_input_bps
        for i, (token_in, token_out) in enumerate(zip(path, path[1:])):
            reserve_in, _ = get_reserves(self.factory, token_in, token_out)
            if amounts[i] * BPS > reserve_in * max_bps:
                raise RouterPriceImpactTooHigh(
                    f"Hop {i} input {amounts[i]} exceeds {max_bps} bps of reserve {reserve_in}"
                )

    def _safe_transfer(self, token: str, to: str, value: int) -> None:
        if not resolve_token(self.chain, token).transfer(self.address, to, value):
            raise TransferFailed(f"Transfer of {value} {token} to {to} failed")

    def _safe_transfer_from(self, token: str, owner: str, to: str, value: int) -> None:
        if not resolve_token(self.chain, token).transfer_from(self.address, owner, to, value):
            raise TransferFailed(f"Transfer of {value} {token} from {owner} to {to} failed")

    def _wrap_to(self, to: str, amount: int) -> None:
        weth = self.weth
        weth.deposit(self.address, amount)
        self._safe_transfer(weth.address, to, amount)

    def _unwrap_to(self, to: str, amount: int) -> None:
        self.weth.withdraw(self.address, amount)
        self.chain.transfer_native(self.address, to, amount)

    @staticmethod
    def _require_min_output(amount_out: int, amount_out_min: int) -> None:
        if amount_out < amount_out_min:
            raise InsufficientOutputAmount(f"Output {amount_out} below minimum {amount_out_min}")

    @staticmethod
    def _require_max_input(amount_in: int, amount_in_max: int) -> None:
        if amount_in > amount_in_max:
            raise ExcessiveInputAmount(f"Input {amount_in} above maximum {amount_in_max}")

    @staticmethod
    def _require_path_start(path: list[str], token: str) -> None:
        if not path or normalize_address(path[0]) != token:
            raise InvalidPath(f"Path must start with {token}")

    @staticmethod
    def _require_path_end(path: list[str], token: str) -> None:
        if not path or normalize_address(path[-1]) != token:
            raise InvalidPath(f"Path must end with {token}")


__all__ = ["Router"]
