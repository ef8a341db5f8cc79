"""Pytest configuration and fixtures."""

import pytest

from quantumswap.chain import Chain
from quantumswap.deployment import Deployment, deploy_protocol
from quantumswap.pools.factory import Factory
from quantumswap.pools.pair import Pair
from quantumswap.routing.router import Router
from quantumswap.safe_int import UINT256_MAX
from quantumswap.tokens.wrapped import WrappedNative
from tests.helpers import (
    ALICE,
    E18,
    GENESIS_TIMESTAMP,
    INITIAL_BALANCE,
    INITIAL_NATIVE,
    OWNER,
    MintableToken,
    add_pair_liquidity,
)


@pytest.fixture
def chain() -> Chain:
    """A fresh chain with its clock at the genesis timestamp."""
    return Chain(timestamp=GENESIS_TIMESTAMP)


@pytest.fixture
def deployment(chain: Chain) -> Deployment:
    """Factory, router and wrapped native token; ALICE holds native funds."""
    deployed = deploy_protocol(chain, OWNER)
    chain.fund(ALICE, INITIAL_NATIVE)
    return deployed


@pytest.fixture
def factory(deployment: Deployment) -> Factory:
    return deployment.factory


@pytest.fixture
def router(deployment: Deployment) -> Router:
    return deployment.router


@pytest.fixture
def weth(deployment: Deployment) -> WrappedNative:
    return deployment.weth


def _make_token(chain: Chain, symbol: str) -> MintableToken:
    token = MintableToken(chain, f"Token {symbol}", symbol)
    token.mint(ALICE, INITIAL_BALANCE)
    return token


@pytest.fixture
def token_a(chain: Chain, deployment: Deployment) -> MintableToken:
    return _make_token(chain, "TKA")


@pytest.fixture
def token_b(chain: Chain, deployment: Deployment) -> MintableToken:
    return _make_token(chain, "TKB")


@pytest.fixture
def token_c(chain: Chain, deployment: Deployment) -> MintableToken:
    return _make_token(chain, "TKC")


@pytest.fixture
def pair(factory: Factory, token_a: MintableToken, token_b: MintableToken) -> Pair:
    """An empty, initialized TKA/TKB pair."""
    return factory.pair_at(factory.create_pair(token_a.address, token_b.address))


@pytest.fixture
def funded_pair(pair: Pair) -> Pair:
    """The TKA/TKB pair seeded with 1000/1000 by ALICE."""
    add_pair_liquidity(pair, 1000 * E18, 1000 * E18)
    return pair


@pytest.fixture
def approved(
    router: Router,
    token_a: MintableToken,
    token_b: MintableToken,
    token_c: MintableToken,
) -> Router:
    """The router with unlimited allowance over ALICE's test tokens."""
    for token in (token_a, token_b, token_c):
        token.approve(ALICE, router.address, UINT256_MAX)
    return router
