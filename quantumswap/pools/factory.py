"""Pair registry.

The factory creates pairs at deterministic addresses, keeps the canonical
index from token pair to pair address, and owns the protocol-fee and pause
configuration its pairs consult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from quantumswap.chain import Contract, atomic
from quantumswap.config import DEFAULT_POOL_POLICY, FactoryConfig, PoolPolicy
from quantumswap.constants import ZERO_ADDRESS
from quantumswap.errors import FactoryForbidden, FactoryPaused, NotPauser, PairExists
from quantumswap.models.types import normalize_address
from quantumswap.models.views import FactoryState, PairListing
from quantumswap.pools.address import compute_pair_address, sort_tokens
from quantumswap.pools.pair import Pair

if TYPE_CHECKING:
    from quantumswap.chain import Chain

logger = structlog.get_logger()


class Factory(Contract):
    """Creates pairs and holds their shared configuration.

    Attributes:
        config: Fee recipient, fee controller, pauser and pause flag
        policy: Thresholds handed to every pair this factory creates
        pair_index: (token_a, token_b) -> pair address, recorded in both orders
        all_pairs: Pair addresses in creation order
    """

    _state_fields = Contract._state_fields + ("config", "pair_index", "all_pairs")

    def __init__(
        self,
        chain: Chain,
        fee_to_setter: str,
        pauser: str | None = None,
        policy: PoolPolicy = DEFAULT_POOL_POLICY,
        address: str | None = None,
    ) -> None:
        fee_to_setter = normalize_address(fee_to_setter)
        self.config = FactoryConfig(
            fee_to_setter=fee_to_setter,
            pauser=normalize_address(pauser) if pauser else fee_to_setter,
        )
        self.policy = policy
        self.pair_index: dict[tuple[str, str], str] = {}
        self.all_pairs: list[str] = []
        super().__init__(chain, address)

    # --- Views ---

    @property
    def fee_to(self) -> str:
        return self.config.fee_to

    @property
    def fee_to_setter(self) -> str:
        return self.config.fee_to_setter

    @property
    def pauser(self) -> str:
        return self.config.pauser

    @property
    def paused(self) -> bool:
        return self.config.paused

    def get_pair(self, token_a: str, token_b: str) -> str:
        """Pair address for the unordered token pair, or ZERO_ADDRESS if none exists."""
        key = (normalize_address(token_a), normalize_address(token_b))
        return self.pair_index.get(key, ZERO_ADDRESS)

    def all_pairs_length(self) -> int:
        return len(self.all_pairs)

    def pair_at(self, address: str) -> Pair:
        pair = self.chain.contract_at(address)
        if not isinstance(pair, Pair) or pair.factory != self.address:
            raise KeyError(f"No pair of this factory at {address}")
        return pair

    def listings(self) -> list[PairListing]:
        listings = []
        for index, address in enumerate(self.all_pairs):
            pair = self.pair_at(address)
            listings.append(
                PairListing(index=index, address=address, token0=pair.token0, token1=pair.token1)
            )
        return listings

    def snapshot(self) -> FactoryState:
        return FactoryState(
            address=self.address,
            fee_to=self.config.fee_to,
            fee_to_setter=self.config.fee_to_setter,
            pauser=self.config.pauser,
            paused=self.config.paused,
            pair_count=len(self.all_pairs),
        )

    # --- Pair creation ---

    @atomic
    def create_pair(self, token_a: str, token_b: str, *, sender: str = ZERO_ADDRESS) -> str:
        """Deploy and register the pair for (token_a, token_b).

        Returns:
            The new pair's address

        Raises:
            FactoryPaused: If pair creation is paused
            IdenticalAddresses: If both tokens are the same
            ZeroAddress: If either token is the null address
            PairExists: If the unordered pair is already registered
        """
        if self.config.paused:
            raise FactoryPaused()
        token0, token1 = sort_tokens(token_a, token_b)
        if (token0, token1) in self.pair_index:
            raise PairExists(f"Pair already exists: {self.pair_index[(token0, token1)]}")

        address = compute_pair_address(self.address, token0, token1)
        pair = Pair(self.chain, self.address, self.policy, address=address)
        pair.initialize(token0, token1, sender=self.address)

        self.pair_index[(token0, token1)] = address
        self.pair_index[(token1, token0)] = address
        self.all_pairs.append(address)
        self.emit("PairCreated", token0=token0, token1=token1, pair=address, index=len(self.all_pairs))
        logger.info(
            "pair_created",
            factory=self.address,
            sender=normalize_address(sender),
            token0=token0,
            token1=token1,
            pair=address,
        )
        return address

    # --- Administration ---

    @atomic
    def set_fee_to(self, fee_to: str, *, sender: str) -> None:
        self._require_fee_to_setter(sender)
        self.config.fee_to = normalize_address(fee_to)
        self.emit("FeeToUpdated", fee_to=self.config.fee_to)
        logger.info("fee_to_updated", factory=self.address, fee_to=self.config.fee_to)

    @atomic
    def set_fee_to_setter(self, fee_to_setter: str, *, sender: str) -> None:
        self._require_fee_to_setter(sender)
        self.config.fee_to_setter = normalize_address(fee_to_setter)
        logger.info("fee_to_setter_updated", factory=self.address, fee_to_setter=self.config.fee_to_setter)

    @atomic
    def pause(self, *, sender: str) -> None:
        """Block pair creation. Existing pairs keep trading."""
        self._require_pauser(sender)
        self.config.paused = True
        self.emit("Paused", account=normalize_address(sender))
        logger.warning("factory_paused", factory=self.address)

    @atomic
    def unpause(self, *, sender: str) -> None:
        self._require_pauser(sender)
        self.config.paused = False
        self.emit("Unpaused", account=normalize_address(sender))
        logger.info("factory_unpaused", factory=self.address)

    @atomic
    def set_pauser(self, pauser: str, *, sender: str) -> None:
        self._require_pauser(sender)
        self.config.pauser = normalize_address(pauser)

    def _require_fee_to_setter(self, sender: str) -> None:
        if normalize_address(sender) != self.config.fee_to_setter:
            raise FactoryForbidden(f"{sender} is not the fee controller")

    def _require_pauser(self, sender: str) -> None:
        if normalize_address(sender) != self.config.pauser:
            raise NotPauser(f"{sender} is not the pauser")


__all__ = ["Factory"]
