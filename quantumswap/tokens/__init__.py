"""Token capability and reference ledgers."""

from quantumswap.tokens.base import TokenLedger, resolve_token
from quantumswap.tokens.erc20 import ERC20
from quantumswap.tokens.wrapped import WrappedNative

__all__ = ["TokenLedger", "resolve_token", "ERC20", "WrappedNative"]
