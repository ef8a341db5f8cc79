"""Pricing helpers and the router."""

from quantumswap.routing.library import (
    describe_path,
    get_amount_in,
    get_amount_out,
    get_amounts_in,
    get_amounts_out,
    get_reserves,
    pair_for,
    quote,
)
from quantumswap.routing.router import Router
from quantumswap.routing.types import HopQuote, PathQuote

__all__ = [
    "Router",
    "HopQuote",
    "PathQuote",
    "quote",
    "get_amount_out",
    "get_amount_in",
    "get_amounts_out",
    "get_amounts_in",
    "get_reserves",
    "pair_for",
    "describe_path",
]
