"""Integration tests for the read-only API."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from quantumswap import __version__
from quantumswap.api.endpoints import get_deployment
from quantumswap.api.main import app
from quantumswap.deployment import Deployment
from quantumswap.routing.library import get_amount_out
from tests.helpers import E18, OWNER, add_pair_liquidity


@pytest.fixture
def client(deployment: Deployment) -> Iterator[TestClient]:
    """Create a test client serving the test deployment."""
    app.dependency_overrides[get_deployment] = lambda: deployment
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestFactoryEndpoint:
    def test_factory_state(self, client, deployment, pair):
        response = client.get("/factory")
        assert response.status_code == 200
        data = response.json()
        assert data["address"] == deployment.factory.address
        assert data["fee_to_setter"] == OWNER
        assert data["paused"] is False
        assert data["pair_count"] == 1

    def test_paused_flag_visible(self, client, deployment):
        deployment.factory.pause(sender=OWNER)
        assert client.get("/factory").json()["paused"] is True


class TestPairEndpoints:
    def test_list_pairs(self, client, pair):
        response = client.get("/pairs")
        assert response.status_code == 200
        assert response.json() == [
            {"index": 0, "address": pair.address, "token0": pair.token0, "token1": pair.token1}
        ]

    def test_pair_state(self, client, funded_pair):
        response = client.get(f"/pairs/{funded_pair.address}")
        assert response.status_code == 200
        data = response.json()
        assert data["reserves"]["reserve0"] == str(1000 * E18)
        assert data["reserves"]["block_timestamp_last"] == funded_pair.block_timestamp_last
        assert data["total_supply"] == str(1000 * E18)
        assert data["price0_cumulative_last"] == "0"

    def test_unknown_pair(self, client, token_a):
        response = client.get(f"/pairs/{token_a.address}")
        assert response.status_code == 404


class TestQuoteEndpoint:
    def test_quote(self, client, pair, token_a, token_b):
        add_pair_liquidity(pair, 1000 * E18, 1000 * E18)
        response = client.get(
            "/quote", params={"amount_in": str(10 * E18), "path": f"{token_a.address},{token_b.address}"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["path"] == [token_a.address, token_b.address]
        assert data["amounts"] == [str(10 * E18), str(get_amount_out(10 * E18, 1000 * E18, 1000 * E18))]

    def test_quote_missing_pair(self, client, token_a, token_c):
        response = client.get("/quote", params={"amount_in": "1000", "path": f"{token_a.address},{token_c.address}"})
        assert response.status_code == 400
        assert response.json()["code"] == "ROUTER: PAIR_NOT_FOUND"

    def test_quote_invalid_address(self, client, token_a):
        response = client.get("/quote", params={"amount_in": "1000", "path": f"{token_a.address},0x1234"})
        assert response.status_code == 422

    def test_quote_short_path(self, client, token_a):
        response = client.get("/quote", params={"amount_in": "1000", "path": token_a.address})
        assert response.status_code == 400
        assert response.json()["code"] == "ROUTER: INVALID_PATH"

    def test_quote_requires_positive_amount(self, client, token_a, token_b):
        response = client.get("/quote", params={"amount_in": "0", "path": f"{token_a.address},{token_b.address}"})
        assert response.status_code == 422
