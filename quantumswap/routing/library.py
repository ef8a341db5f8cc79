"""Pure pricing helpers for the router.

Constant-product pricing net of the 0.3% fee, plus hop-by-hop chaining over
live reserves. All arithmetic is integer-only with explicit rounding:
outputs round down, required inputs round up.
"""

from __future__ import annotations

from quantumswap.constants import FEE_DENOMINATOR, FEE_MULTIPLIER, ZERO_ADDRESS
from quantumswap.errors import (
    InsufficientAmount,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidPath,
    PairNotFound,
)
from quantumswap.models.types import normalize_address
from quantumswap.pools.address import sort_tokens
from quantumswap.pools.factory import Factory
from quantumswap.pools.pair import Pair
from quantumswap.routing.types import HopQuote, PathQuote
from quantumswap.safe_int import S


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Scale amount_a by the pool ratio: amount_a * reserve_b / reserve_a, floored.

    Raises:
        InsufficientAmount: If amount_a is zero
        InsufficientLiquidity: If either reserve is zero
    """
    if amount_a <= 0:
        raise InsufficientAmount()
    if reserve_a <= 0 or reserve_b <= 0:
        raise InsufficientLiquidity()
    return (S(amount_a) * S(reserve_b) // S(reserve_a)).value


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate output amount using constant product formula.

    Formula: amount_out = (in * 997 * res_out) / (res_in * 1000 + in * 997), floored

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool

    Returns:
        Output token amount

    Raises:
        InsufficientInputAmount: If amount_in is zero
        InsufficientLiquidity: If either reserve is zero
    """
    if amount_in <= 0:
        raise InsufficientInputAmount()
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity()

    amount_in_with_fee = S(amount_in) * S(FEE_MULTIPLIER)
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) * S(FEE_DENOMINATOR) + amount_in_with_fee
    return (numerator // denominator).value


def get_amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate required input for desired output.

    Formula: amount_in = ceil((res_in * out * 1000) / ((res_out - out) * 997))

    Raises:
        InsufficientOutputAmount: If amount_out is zero
        InsufficientLiquidity: If either reserve is zero or amount_out >= reserve_out
    """
    if amount_out <= 0:
        raise InsufficientOutputAmount()
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity()
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(f"Output {amount_out} drains reserve {reserve_out}")

    numerator = S(reserve_in) * S(amount_out) * S(FEE_DENOMINATOR)
    denominator = (S(reserve_out) - S(amount_out)) * S(FEE_MULTIPLIER)
    return numerator.ceiling_div(denominator).value


def pair_for(factory: Factory, token_a: str, token_b: str) -> Pair:
    """Resolve the registered pair for (token_a, token_b).

    Raises:
        PairNotFound: If the factory has no pair for the tokens
    """
    address = factory.get_pair(token_a, token_b)
    if address == ZERO_ADDRESS:
        raise PairNotFound(f"No pair for {token_a}/{token_b}")
    return factory.pair_at(address)


def get_reserves(factory: Factory, token_a: str, token_b: str) -> tuple[int, int]:
    """Reserves of the (token_a, token_b) pair, ordered as the arguments."""
    token0, _ = sort_tokens(token_a, token_b)
    reserve0, reserve1, _ = pair_for(factory, token_a, token_b).get_reserves()
    if normalize_address(token_a) == token0:
        return reserve0, reserve1
    return reserve1, reserve0


def _check_path(path: list[str]) -> list[str]:
    if len(path) < 2:
        raise InvalidPath(f"Path needs at least two tokens, got {len(path)}")
    return [normalize_address(token) for token in path]


def get_amounts_out(factory: Factory, amount_in: int, path: list[str]) -> list[int]:
    """Chain get_amount_out along the path; amounts[0] is amount_in."""
    path = _check_path(path)
    amounts = [amount_in]
    for token_in, token_out in zip(path, path[1:]):
        reserve_in, reserve_out = get_reserves(factory, token_in, token_out)
        amounts.append(get_amount_out(amounts[-1], reserve_in, reserve_out))
    return amounts


def get_amounts_in(factory: Factory, amount_out: int, path: list[str]) -> list[int]:
    """Chain get_amount_in backwards along the path; amounts[-1] is amount_out."""
    path = _check_path(path)
    amounts = [amount_out]
    for token_in, token_out in reversed(list(zip(path, path[1:]))):
        reserve_in, reserve_out = get_reserves(factory, token_in, token_out)
        amounts.insert(0, get_amount_in(amounts[0], reserve_in, reserve_out))
    return amounts


def describe_path(factory: Factory, path: list[str], amounts: list[int]) -> PathQuote:
    """Attach the pair and reserves used by each hop to a resolved amounts list."""
    path = _check_path(path)
    hops = []
    for i, (token_in, token_out) in enumerate(zip(path, path[1:])):
        reserve_in, reserve_out = get_reserves(factory, token_in, token_out)
        hops.append(
            HopQuote(
                pair=factory.get_pair(token_in, token_out),
                token_in=token_in,
                token_out=token_out,
                amount_in=amounts[i],
                amount_out=amounts[i + 1],
                reserve_in=reserve_in,
                reserve_out=reserve_out,
            )
        )
    return PathQuote(path=path, amounts=list(amounts), hops=hops)


__all__ = [
    "quote",
    "get_amount_out",
    "get_amount_in",
    "pair_for",
    "get_reserves",
    "get_amounts_out",
    "get_amounts_in",
    "describe_path",
]
