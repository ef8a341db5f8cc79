"""Wrapped native asset: a 1:1 ERC20 claim on native balance held by the contract."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from quantumswap.chain import atomic
from quantumswap.models.types import normalize_address
from quantumswap.tokens.erc20 import ERC20

if TYPE_CHECKING:
    from quantumswap.chain import Chain

logger = structlog.get_logger()


class WrappedNative(ERC20):
    """Native asset wrapper (WETH-style)."""

    def __init__(
        self,
        chain: Chain,
        name: str = "Wrapped Ether",
        symbol: str = "WETH",
        address: str | None = None,
    ) -> None:
        super().__init__(chain, name, symbol, 18, address)

    @atomic
    def deposit(self, sender: str, value: int) -> None:
        """Lock ``value`` native units from ``sender`` and mint the same amount."""
        sender = normalize_address(sender)
        self.chain.transfer_native(sender, self.address, value)
        self._mint(sender, value)
        self.emit("Deposit", dst=sender, wad=value)

    @atomic
    def withdraw(self, sender: str, amount: int) -> None:
        """Burn ``amount`` from ``sender`` and release the native units to it."""
        sender = normalize_address(sender)
        self._burn(sender, amount)
        self.chain.transfer_native(self.address, sender, amount)
        self.emit("Withdrawal", src=sender, wad=amount)
        logger.debug("native_unwrapped", holder=sender, amount=amount)


__all__ = ["WrappedNative"]
