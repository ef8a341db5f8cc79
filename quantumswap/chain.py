"""In-process execution environment for QuantumSwap contracts.

The Chain provides what the contracts would otherwise get from the ledger
they run on:
- a clock (``timestamp``) that tests and simulations advance explicitly
- a directory of deployed contracts keyed by address
- an append-only event log
- native-asset balances
- atomic calls: ``transaction()`` snapshots every contract's state and
  restores it if the call raises, so a failed call never leaves partial state

Contracts declare their persistent fields in ``_state_fields``; only those are
snapshotted and restored.
"""

from __future__ import annotations

import copy
import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, ClassVar, ParamSpec, TypeVar

import structlog
from eth_abi.packed import encode_packed
from eth_utils import keccak

from quantumswap.errors import InsufficientNativeBalance
from quantumswap.models.types import normalize_address

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


@dataclass(frozen=True)
class Event:
    """A log entry emitted by a contract."""

    name: str
    address: str
    args: dict[str, Any] = field(default_factory=dict)


class Contract:
    """Base class for contracts deployed on a Chain.

    Subclasses list their persistent attributes in ``_state_fields``. The
    tuple is extended, not replaced, by subclasses.
    """

    _state_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, chain: Chain, address: str | None = None) -> None:
        self.chain = chain
        self.address = normalize_address(address) if address else chain.new_address(type(self).__name__)
        chain.deploy(self)

    def snapshot_state(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self._state_fields}

    def restore_state(self, state: dict[str, Any]) -> None:
        for name, value in state.items():
            setattr(self, name, value)

    def emit(self, name: str, **args: Any) -> None:
        self.chain.emit(Event(name=name, address=self.address, args=args))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"


def atomic(method: Callable[P, R]) -> Callable[P, R]:
    """Run a contract method inside its chain's transaction."""

    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        contract = args[0] if args else None
        if not isinstance(contract, Contract):
            raise TypeError(f"{method.__qualname__} must be called on a Contract, got {contract!r}")
        with contract.chain.transaction():
            return method(*args, **kwargs)

    return wrapper


class Chain:
    """Clock, contract directory, event log and native balances."""

    def __init__(self, timestamp: int = 0) -> None:
        self.timestamp = timestamp
        self.events: list[Event] = []
        self._contracts: dict[str, Contract] = {}
        self._native_balances: dict[str, int] = {}
        self._nonce = 0
        self._depth = 0

    # --- Clock ---

    def advance_time(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards: {seconds}")
        self.timestamp += seconds
        return self.timestamp

    # --- Contracts ---

    def new_address(self, label: str) -> str:
        """Derive a fresh, deterministic address for a newly deployed contract."""
        self._nonce += 1
        digest = keccak(encode_packed(["string", "uint256"], [label, self._nonce]))
        return "0x" + digest[12:].hex()

    def deploy(self, contract: Contract) -> None:
        if contract.address in self._contracts:
            raise ValueError(f"Address already in use: {contract.address}")
        self._contracts[contract.address] = contract
        logger.debug("contract_deployed", kind=type(contract).__name__, address=contract.address)

    def contract_at(self, address: str) -> Contract | None:
        return self._contracts.get(normalize_address(address))

    def is_contract(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    # --- Events ---

    def emit(self, event: Event) -> None:
        self.events.append(event)

    def events_named(self, name: str, address: str | None = None) -> list[Event]:
        addr = normalize_address(address) if address else None
        return [e for e in self.events if e.name == name and (addr is None or e.address == addr)]

    # --- Native balances ---

    def native_balance_of(self, address: str) -> int:
        return self._native_balances.get(normalize_address(address), 0)

    def fund(self, address: str, amount: int) -> None:
        """Credit native balance out of thin air (genesis allocation)."""
        if amount < 0:
            raise ValueError(f"Cannot fund a negative amount: {amount}")
        addr = normalize_address(address)
        self._native_balances[addr] = self._native_balances.get(addr, 0) + amount

    def transfer_native(self, sender: str, to: str, amount: int) -> None:
        """Move native balance between accounts.

        Raises:
            InsufficientNativeBalance: If sender holds less than amount
        """
        src = normalize_address(sender)
        dst = normalize_address(to)
        balance = self._native_balances.get(src, 0)
        if amount < 0 or balance < amount:
            raise InsufficientNativeBalance(f"{src} holds {balance}, needs {amount}")
        self._native_balances[src] = balance - amount
        self._native_balances[dst] = self._native_balances.get(dst, 0) + amount

    # --- Atomicity ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Make the enclosed calls all-or-nothing.

        The outermost transaction snapshots state; nested transactions join it.
        """
        if self._depth > 0:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        contracts = dict(self._contracts)
        states = {address: c.snapshot_state() for address, c in contracts.items()}
        native = dict(self._native_balances)
        event_count = len(self.events)
        nonce = self._nonce

        self._depth = 1
        try:
            yield
        except BaseException as exc:
            self._contracts = contracts
            for address, state in states.items():
                contracts[address].restore_state(state)
            self._native_balances = native
            del self.events[event_count:]
            self._nonce = nonce
            logger.debug("transaction_reverted", error=type(exc).__name__, reason=str(exc))
            raise
        finally:
            self._depth = 0


__all__ = ["Chain", "Contract", "Event", "atomic"]
