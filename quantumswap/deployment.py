"""Wiring of a complete protocol instance on a chain."""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass

import structlog

from quantumswap.chain import Chain
from quantumswap.config import PoolPolicy
from quantumswap.models.types import normalize_address
from quantumswap.pools.factory import Factory
from quantumswap.routing.router import Router
from quantumswap.tokens.wrapped import WrappedNative

logger = structlog.get_logger()

# Owner used when QUANTUMSWAP_OWNER is unset
DEFAULT_OWNER = "0x000000000000000000000000000000000000a11c"


@dataclass
class Deployment:
    """The contracts that make up one protocol instance."""

    chain: Chain
    factory: Factory
    weth: WrappedNative
    router: Router


def deploy_protocol(
    chain: Chain,
    owner: str,
    policy: PoolPolicy | None = None,
    pauser: str | None = None,
) -> Deployment:
    """Deploy the wrapped native token, factory and router.

    ``owner`` becomes the fee controller, and the pauser unless one is given.
    """
    owner = normalize_address(owner, validate=True)
    weth = WrappedNative(chain)
    factory = Factory(chain, fee_to_setter=owner, pauser=pauser, policy=policy or PoolPolicy())
    router = Router(chain, factory=factory.address, weth=weth.address)
    logger.info(
        "protocol_deployed",
        factory=factory.address,
        router=router.address,
        weth=weth.address,
        owner=owner,
    )
    return Deployment(chain=chain, factory=factory, weth=weth, router=router)


@functools.cache
def get_default_deployment() -> Deployment:
    """Process-wide deployment used by the API server.

    Owner and pool policy are read from QUANTUMSWAP_* environment variables.
    """
    owner = os.environ.get("QUANTUMSWAP_OWNER", DEFAULT_OWNER)
    return deploy_protocol(Chain(), owner, policy=PoolPolicy.from_env())


__all__ = ["Deployment", "deploy_protocol", "get_default_deployment", "DEFAULT_OWNER"]
