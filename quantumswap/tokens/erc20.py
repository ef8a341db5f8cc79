"""Reference in-memory fungible token ledger.

Used as the base of the pair's embedded LP-share ledger and of the wrapped
native asset. Supply policy (who may mint) belongs to subclasses; this class
only exposes the internal ``_mint``/``_burn`` primitives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from quantumswap.chain import Contract, atomic
from quantumswap.constants import ZERO_ADDRESS
from quantumswap.errors import InsufficientAllowance, InsufficientBalance
from quantumswap.models.types import normalize_address
from quantumswap.safe_int import UINT256_MAX, S

if TYPE_CHECKING:
    from quantumswap.chain import Chain


class ERC20(Contract):
    """ERC20-style ledger with balances, allowances and total supply.

    An allowance of UINT256_MAX is treated as unlimited and never decremented.
    """

    _state_fields = Contract._state_fields + ("total_supply", "balances", "allowances")

    def __init__(
        self,
        chain: Chain,
        name: str,
        symbol: str,
        decimals: int = 18,
        address: str | None = None,
    ) -> None:
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self.balances: dict[str, int] = {}
        self.allowances: dict[tuple[str, str], int] = {}
        super().__init__(chain, address)

    # --- Views ---

    def balance_of(self, holder: str) -> int:
        return self.balances.get(normalize_address(holder), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    # --- Mutations ---

    @atomic
    def transfer(self, sender: str, to: str, amount: int) -> bool:
        self._transfer(normalize_address(sender), normalize_address(to), amount)
        return True

    @atomic
    def approve(self, owner: str, spender: str, amount: int) -> bool:
        self._approve(normalize_address(owner), normalize_address(spender), amount)
        return True

    @atomic
    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        spender_norm = normalize_address(spender)
        owner_norm = normalize_address(owner)
        current = self.allowances.get((owner_norm, spender_norm), 0)
        if current != UINT256_MAX:
            if current < amount:
                raise InsufficientAllowance(
                    f"{spender_norm} may move {current} of {owner_norm}'s {self.symbol}, needs {amount}"
                )
            self.allowances[(owner_norm, spender_norm)] = current - amount
        self._transfer(owner_norm, normalize_address(to), amount)
        return True

    # --- Internal primitives ---

    def _transfer(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Transfer amount cannot be negative: {amount}")
        balance = self.balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(f"{sender} holds {balance} {self.symbol}, needs {amount}")
        self.balances[sender] = balance - amount
        self.balances[to] = self.balances.get(to, 0) + amount
        self.emit("Transfer", sender=sender, to=to, value=amount)

    def _approve(self, owner: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        self.allowances[(owner, spender)] = amount
        self.emit("Approval", owner=owner, spender=spender, value=amount)

    def _mint(self, to: str, amount: int) -> None:
        to = normalize_address(to)
        self.total_supply = (S(self.total_supply) + amount).to_uint256()
        self.balances[to] = self.balances.get(to, 0) + amount
        self.emit("Transfer", sender=ZERO_ADDRESS, to=to, value=amount)

    def _burn(self, holder: str, amount: int) -> None:
        holder = normalize_address(holder)
        balance = self.balances.get(holder, 0)
        if balance < amount:
            raise InsufficientBalance(f"{holder} holds {balance} {self.symbol}, burning {amount}")
        self.balances[holder] = balance - amount
        self.total_supply -= amount
        self.emit("Transfer", sender=holder, to=ZERO_ADDRESS, value=amount)


__all__ = ["ERC20"]
