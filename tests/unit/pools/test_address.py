"""Tests for deterministic pair addressing."""

import pytest
from eth_abi.packed import encode_packed
from eth_utils import keccak

from quantumswap.constants import ZERO_ADDRESS
from quantumswap.errors import IdenticalAddresses, ZeroAddress
from quantumswap.pools.address import PAIR_INIT_CODE_HASH, compute_pair_address, sort_tokens

FACTORY = "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f"
TOKEN_LOW = "0x1111111111111111111111111111111111111111"
TOKEN_HIGH = "0xAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"


class TestSortTokens:
    def test_orders_and_normalizes(self):
        assert sort_tokens(TOKEN_HIGH, TOKEN_LOW) == (TOKEN_LOW, TOKEN_HIGH.lower())
        assert sort_tokens(TOKEN_LOW, TOKEN_HIGH) == (TOKEN_LOW, TOKEN_HIGH.lower())

    def test_identical(self):
        with pytest.raises(IdenticalAddresses):
            sort_tokens(TOKEN_HIGH, TOKEN_HIGH.lower())

    def test_zero_address(self):
        with pytest.raises(ZeroAddress):
            sort_tokens(ZERO_ADDRESS, TOKEN_LOW)


class TestComputePairAddress:
    def test_order_independent(self):
        assert compute_pair_address(FACTORY, TOKEN_LOW, TOKEN_HIGH) == compute_pair_address(
            FACTORY, TOKEN_HIGH, TOKEN_LOW
        )

    def test_matches_create2_formula(self):
        salt = keccak(encode_packed(["address", "address"], [TOKEN_LOW, TOKEN_HIGH.lower()]))
        digest = keccak(b"\xff" + bytes.fromhex(FACTORY[2:]) + salt + PAIR_INIT_CODE_HASH)
        assert compute_pair_address(FACTORY, TOKEN_LOW, TOKEN_HIGH) == "0x" + digest[12:].hex()

    def test_depends_on_factory(self):
        other_factory = "0x" + "22" * 20
        assert compute_pair_address(FACTORY, TOKEN_LOW, TOKEN_HIGH) != compute_pair_address(
            other_factory, TOKEN_LOW, TOKEN_HIGH
        )

    def test_depends_on_init_code_hash(self):
        assert compute_pair_address(FACTORY, TOKEN_LOW, TOKEN_HIGH) != compute_pair_address(
            FACTORY, TOKEN_LOW, TOKEN_HIGH, init_code_hash=keccak(text="other")
        )

    def test_invalid_factory(self):
        with pytest.raises(ValueError):
            compute_pair_address("0x1234", TOKEN_LOW, TOKEN_HIGH)
