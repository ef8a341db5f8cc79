"""Tests for pool policy and factory configuration."""

import logging

import pytest

from quantumswap.config import DEFAULT_POOL_POLICY, FactoryConfig, PoolPolicy
from quantumswap.constants import ZERO_ADDRESS
from quantumswap.log import configure_logging, resolve_level
from tests.helpers import FEE_RECIPIENT, OWNER


class TestPoolPolicy:
    def test_defaults(self):
        assert DEFAULT_POOL_POLICY.twap_max_elapsed == 3600
        assert DEFAULT_POOL_POLICY.twap_min_change_bps == 10
        assert DEFAULT_POOL_POLICY.max_output_bps == 5000
        assert DEFAULT_POOL_POLICY.max_input_bps == 2000
        assert DEFAULT_POOL_POLICY.min_swap_amount == 1000
        assert DEFAULT_POOL_POLICY.router_max_price_ratio == 100_000

    def test_from_env_overrides(self):
        policy = PoolPolicy.from_env(
            {"QUANTUMSWAP_TWAP_MAX_ELAPSED": "1800", "QUANTUMSWAP_MIN_SWAP_AMOUNT": "1"}
        )
        assert policy.twap_max_elapsed == 1800
        assert policy.min_swap_amount == 1
        assert policy.max_input_bps == DEFAULT_POOL_POLICY.max_input_bps

    def test_from_env_empty_is_default(self):
        assert PoolPolicy.from_env({}) == DEFAULT_POOL_POLICY

    def test_from_env_rejects_non_integer(self):
        with pytest.raises(ValueError, match="QUANTUMSWAP_MAX_INPUT_BPS"):
            PoolPolicy.from_env({"QUANTUMSWAP_MAX_INPUT_BPS": "lots"})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"twap_max_elapsed": 0},
            {"max_output_bps": 10_001},
            {"max_input_bps": -1},
            {"min_swap_amount": -5},
            {"router_max_price_ratio": -1},
        ],
    )
    def test_rejects_out_of_range(self, overrides):
        with pytest.raises(ValueError):
            PoolPolicy(**overrides)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_POOL_POLICY.max_input_bps = 1  # type: ignore[misc]


class TestFactoryConfig:
    def test_fee_off_by_default(self):
        config = FactoryConfig(fee_to_setter=OWNER, pauser=OWNER)
        assert config.fee_to == ZERO_ADDRESS
        assert config.fee_on is False

    def test_fee_on_when_recipient_set(self):
        config = FactoryConfig(fee_to_setter=OWNER, pauser=OWNER, fee_to=FEE_RECIPIENT)
        assert config.fee_on is True


class TestLogging:
    def test_resolve_level_by_name(self):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level(logging.WARNING) == logging.WARNING

    def test_resolve_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("QUANTUMSWAP_LOG_LEVEL", "ERROR")
        assert resolve_level() == logging.ERROR

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            resolve_level("chatty")

    def test_configure_logging_accepts_json(self):
        configure_logging("INFO", json=True)
        configure_logging("WARNING")
