"""Tests for the reference ERC20 ledger and the wrapped native asset."""

import pytest

from quantumswap.chain import Chain
from quantumswap.errors import InsufficientAllowance, InsufficientBalance, InsufficientNativeBalance
from quantumswap.safe_int import UINT256_MAX, BoundOverflow
from quantumswap.tokens import TokenLedger, WrappedNative
from tests.helpers import ALICE, BOB, OWNER, MintableToken


@pytest.fixture
def token(chain: Chain) -> MintableToken:
    token = MintableToken(chain, "Token", "TKN")
    token.mint(ALICE, 1_000)
    return token


class TestERC20:
    def test_satisfies_token_capability(self, token):
        assert isinstance(token, TokenLedger)

    def test_transfer(self, token):
        assert token.transfer(ALICE, BOB, 300) is True
        assert token.balance_of(ALICE) == 700
        assert token.balance_of(BOB) == 300
        assert token.total_supply == 1_000

    def test_transfer_insufficient_balance(self, token):
        with pytest.raises(InsufficientBalance):
            token.transfer(BOB, ALICE, 1)

    def test_transfer_from_spends_allowance(self, token):
        token.approve(ALICE, OWNER, 500)
        token.transfer_from(OWNER, ALICE, BOB, 200)
        assert token.allowance(ALICE, OWNER) == 300
        assert token.balance_of(BOB) == 200

    def test_transfer_from_without_allowance(self, token):
        with pytest.raises(InsufficientAllowance):
            token.transfer_from(OWNER, ALICE, BOB, 1)

    def test_unlimited_allowance_not_decremented(self, token):
        token.approve(ALICE, OWNER, UINT256_MAX)
        token.transfer_from(OWNER, ALICE, BOB, 200)
        assert token.allowance(ALICE, OWNER) == UINT256_MAX

    def test_approval_event(self, chain, token):
        token.approve(ALICE, OWNER, 5)
        event = chain.events_named("Approval", token.address)[-1]
        assert event.args == {"owner": ALICE, "spender": OWNER, "value": 5}

    def test_mint_emits_transfer_from_zero(self, chain, token):
        event = chain.events_named("Transfer", token.address)[0]
        assert event.args["sender"] == "0x" + "00" * 20
        assert event.args["value"] == 1_000

    def test_supply_cannot_exceed_uint256(self, token):
        with pytest.raises(BoundOverflow):
            token.mint(BOB, UINT256_MAX)
        assert token.total_supply == 1_000
        assert token.balance_of(BOB) == 0


class TestWrappedNative:
    def test_deposit_and_withdraw(self, chain):
        weth = WrappedNative(chain)
        chain.fund(ALICE, 100)
        weth.deposit(ALICE, 60)
        assert weth.balance_of(ALICE) == 60
        assert chain.native_balance_of(ALICE) == 40
        assert chain.native_balance_of(weth.address) == 60

        weth.withdraw(ALICE, 25)
        assert weth.balance_of(ALICE) == 35
        assert chain.native_balance_of(ALICE) == 65
        assert [e.name for e in chain.events if e.address == weth.address][-2:] == ["Transfer", "Withdrawal"]

    def test_deposit_without_native_funds(self, chain):
        weth = WrappedNative(chain)
        with pytest.raises(InsufficientNativeBalance):
            weth.deposit(ALICE, 1)
        assert weth.total_supply == 0

    def test_withdraw_more_than_held(self, chain):
        weth = WrappedNative(chain)
        with pytest.raises(InsufficientBalance):
            weth.withdraw(ALICE, 1)
