"""Read-only API endpoints over a QuantumSwap deployment."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from quantumswap.deployment import Deployment, get_default_deployment
from quantumswap.models.types import is_valid_address, normalize_address
from quantumswap.models.views import AmountsQuote, FactoryState, PairListing, PairState

logger = structlog.get_logger()

router = APIRouter()


def get_deployment() -> Deployment:
    """Dependency provider for the deployment instance.

    Override this in tests to inject a prepared deployment:
        app.dependency_overrides[get_deployment] = lambda: deployment

    Returns:
        The deployment whose state is served.
    """
    return get_default_deployment()


def _parse_path(path: str) -> list[str]:
    tokens = [token.strip() for token in path.split(",") if token.strip()]
    invalid = [token for token in tokens if not is_valid_address(normalize_address(token))]
    if invalid:
        raise HTTPException(status_code=422, detail=f"Invalid token address: {invalid[0]}")
    return [normalize_address(token) for token in tokens]


@router.get("/factory")
async def factory_state(deployment: Deployment = Depends(get_deployment)) -> FactoryState:
    """Fee configuration, pause flag and pair count."""
    return deployment.factory.snapshot()


@router.get("/pairs")
async def list_pairs(deployment: Deployment = Depends(get_deployment)) -> list[PairListing]:
    return deployment.factory.listings()


@router.get("/pairs/{address}")
async def pair_state(address: str, deployment: Deployment = Depends(get_deployment)) -> PairState:
    """Reserves, cumulative prices, k_last and total supply of one pair."""
    try:
        pair = deployment.factory.pair_at(address)
    except KeyError as err:
        raise HTTPException(status_code=404, detail=f"Unknown pair: {address}") from err
    return pair.snapshot()


@router.get("/quote")
async def quote_path(
    amount_in: int = Query(gt=0),
    path: str = Query(description="Comma-separated token addresses"),
    deployment: Deployment = Depends(get_deployment),
) -> AmountsQuote:
    """Exact-input amounts along a path at current reserves.

    Error Handling:
        - Malformed path: 422
        - Missing pair or unquotable amount: 400 with the error code
    """
    tokens = _parse_path(path)
    amounts = deployment.router.get_amounts_out(amount_in, tokens)
    logger.debug("quote_served", path=tokens, amount_in=amount_in, amount_out=amounts[-1])
    return AmountsQuote(path=tokens, amounts=amounts)
