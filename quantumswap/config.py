"""Configuration for pools and the factory.

PoolPolicy holds the abuse-resistance thresholds applied by every pair a
factory creates. FactoryConfig is the mutable fee/pause configuration owned by
a single factory instance and queried by its pairs at fee-accrual time.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from quantumswap.constants import BPS, ZERO_ADDRESS

ENV_PREFIX = "QUANTUMSWAP_"


@dataclass(frozen=True)
class PoolPolicy:
    """Thresholds applied by pairs and the router.

    Attributes:
        twap_max_elapsed: Cap on the seconds credited to one TWAP update
        twap_min_change_bps: Minimum reserve move (bps) for the accumulators to advance
        max_output_bps: Largest output per swap as a share of the reserve (bps)
        max_input_bps: Largest inferred input per swap as a share of the reserve (bps)
        min_swap_amount: Dust floor; at least one output must reach it
        router_max_input_bps: Router-side cap on each hop's input vs its reserve (bps)
        router_max_price_ratio: Largest reserve_a:reserve_b imbalance Router.quote accepts; 0 disables
    """

    twap_max_elapsed: int = 3600
    twap_min_change_bps: int = 10
    max_output_bps: int = 5000
    max_input_bps: int = 2000
    min_swap_amount: int = 1000
    router_max_input_bps: int = 5000
    router_max_price_ratio: int = 100_000

    def __post_init__(self) -> None:
        if self.twap_max_elapsed <= 0:
            raise ValueError(f"twap_max_elapsed must be positive, got {self.twap_max_elapsed}")
        for name in ("twap_min_change_bps", "max_output_bps", "max_input_bps", "router_max_input_bps"):
            value = getattr(self, name)
            if not 0 <= value <= BPS:
                raise ValueError(f"{name} must be in [0, {BPS}], got {value}")
        if self.min_swap_amount < 0:
            raise ValueError(f"min_swap_amount cannot be negative, got {self.min_swap_amount}")
        if self.router_max_price_ratio < 0:
            raise ValueError(f"router_max_price_ratio cannot be negative, got {self.router_max_price_ratio}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PoolPolicy:
        """Build a policy from QUANTUMSWAP_* environment variables.

        Unset variables keep their defaults, e.g. QUANTUMSWAP_TWAP_MAX_ELAPSED=1800.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, int] = {}
        for name in cls.__dataclass_fields__:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None:
                try:
                    overrides[name] = int(raw)
                except ValueError as err:
                    raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer: {raw!r}") from err
        return cls(**overrides)


DEFAULT_POOL_POLICY = PoolPolicy()


@dataclass
class FactoryConfig:
    """Protocol-fee and pause configuration owned by one factory.

    Attributes:
        fee_to_setter: Sole address allowed to change fee_to and itself
        pauser: Sole address allowed to pause and unpause pair creation
        fee_to: Protocol-fee recipient; ZERO_ADDRESS disables fee accrual
        paused: Blocks create_pair while set
    """

    fee_to_setter: str
    pauser: str
    fee_to: str = ZERO_ADDRESS
    paused: bool = False

    @property
    def fee_on(self) -> bool:
        return self.fee_to != ZERO_ADDRESS
