"""Field types shared by the view models.

Addresses are carried as lowercase 0x-prefixed hex so that plain string
ordering matches byte ordering, which canonical token sorting relies on.
Wide integers (reserves, cumulative prices, k) are rendered as decimal
strings because JSON consumers cannot hold 256-bit numbers.
"""

from typing import Annotated, Any

from eth_utils import is_hex_address
from pydantic import BeforeValidator, Field

WORD_BITS = 256


def to_uint256_string(value: Any) -> str:
    """Render a non-negative integer below 2**256 as a decimal string.

    Raises:
        ValueError: If value is a bool, not integral, negative or wider than 256 bits
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValueError(f"Expected an integer or decimal string, got {type(value).__name__}")
    try:
        number = int(value)
    except ValueError as err:
        raise ValueError(f"Not a decimal integer: {value!r}") from err
    if not 0 <= number < 1 << WORD_BITS:
        raise ValueError(f"Outside uint256 range: {value}")
    return str(number)


Address = Annotated[str, Field(pattern=r"^0x[0-9a-f]{40}$")]

Uint256 = Annotated[
    str,
    BeforeValidator(to_uint256_string),
    Field(description="uint256 as a decimal string"),
]


def is_valid_address(address: str) -> bool:
    """True for a 0x-prefixed 20-byte hex string (any letter case)."""
    return isinstance(address, str) and address.startswith("0x") and is_hex_address(address)


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Lowercase an address and make sure it carries the 0x prefix.

    Raises:
        ValueError: If validate=True and the result is not a 20-byte address
    """
    normalized = address.lower()
    if not normalized.startswith("0x"):
        normalized = f"0x{normalized}"
    if validate and not is_valid_address(normalized):
        raise ValueError(f"Invalid address: {address}")
    return normalized
