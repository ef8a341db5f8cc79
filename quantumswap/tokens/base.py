"""Token capability consumed by pairs and the router."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from quantumswap.errors import TransferFailed

if TYPE_CHECKING:
    from quantumswap.chain import Chain


@runtime_checkable
class TokenLedger(Protocol):
    """Balance/transfer/allowance capability of a fungible token.

    The caller of each mutating method is passed explicitly: ``sender`` for
    transfer and approve, ``spender`` for transfer_from.
    """

    address: str

    def balance_of(self, holder: str) -> int:
        """Return the balance held by ``holder``."""
        ...

    def transfer(self, sender: str, to: str, amount: int) -> bool:
        """Move ``amount`` from ``sender`` to ``to``."""
        ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> bool:
        """Move ``amount`` from ``owner`` to ``to`` against ``spender``'s allowance."""
        ...

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Let ``spender`` move up to ``amount`` of ``owner``'s balance."""
        ...


def resolve_token(chain: Chain, address: str) -> TokenLedger:
    """Look up the token deployed at ``address``.

    Raises:
        TransferFailed: If nothing token-like is deployed there
    """
    token = chain.contract_at(address)
    if not isinstance(token, TokenLedger):
        raise TransferFailed(f"No token deployed at {address}")
    return token


__all__ = ["TokenLedger", "resolve_token"]
