"""Test-only contracts: a freely mintable token and flash-swap callees."""

from __future__ import annotations

from quantumswap.chain import Chain, Contract, atomic
from quantumswap.pools.pair import Pair
from quantumswap.tokens.erc20 import ERC20


class MintableToken(ERC20):
    """ERC20 anyone can mint, for funding test accounts."""

    @atomic
    def mint(self, to: str, amount: int) -> None:
        self._mint(to, amount)


class FalseReturningToken(MintableToken):
    """Returns False, moving nothing, whenever a holder in ``refusing`` sends."""

    def __init__(self, chain: Chain, name: str, symbol: str) -> None:
        self.refusing: set[str] = set()
        super().__init__(chain, name, symbol)

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        if sender in self.refusing:
            return False
        return super().transfer(sender, to, amount)

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        if owner in self.refusing:
            return False
        return super().transfer_from(spender, owner, to, amount)


class FlashBorrower(Contract):
    """Repays each borrowed amount plus the 0.3% fee inside the callback.

    Set ``underpay`` to repay one unit less than required.
    """

    def __init__(self, chain: Chain, pair: Pair, underpay: bool = False) -> None:
        self.pair = pair
        self.underpay = underpay
        self.calls: list[tuple[str, int, int, bytes]] = []
        super().__init__(chain)

    def quantum_swap_call(self, sender: str, amount0: int, amount1: int, data: bytes) -> None:
        self.calls.append((sender, amount0, amount1, data))
        for token_address, amount in ((self.pair.token0, amount0), (self.pair.token1, amount1)):
            if amount == 0:
                continue
            repay = amount * 1000 // 997 + 1
            if self.underpay:
                repay = amount * 1000 // 997 - 1
            token = self.chain.contract_at(token_address)
            assert isinstance(token, ERC20)
            token.transfer(self.address, self.pair.address, repay)


class ReentrantCallee(Contract):
    """Tries to re-enter the pair from inside the flash-swap callback."""

    def __init__(self, chain: Chain, pair: Pair) -> None:
        self.pair = pair
        super().__init__(chain)

    def quantum_swap_call(self, sender: str, amount0: int, amount1: int, data: bytes) -> None:
        self.pair.sync()
