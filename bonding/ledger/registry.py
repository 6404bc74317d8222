"""Registry of asset ledger entries and the global fee accumulator.

The registry is an append-only arena: entries get a stable integer id
(their index) at creation and are never removed or reordered, so lookups
are O(1) and ids handed out earlier stay valid as the arena grows.

Locking:
- one lock per entry, so trades on different assets do not block each other
- one lock for the fee accumulator
- one lock for arena growth and initialization
A trade takes its entry lock, then the fee lock, always in that order.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from bonding.config import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from bonding.constants import ASSET_COUNT_SENTINEL
from bonding.curve import BondingCurve
from bonding.errors import (
    AlreadyInitialized,
    ArithmeticFault,
    InvalidAssetId,
    InvalidMetadata,
    NotInitialized,
)
from bonding.fees import BasisPointFeeCalculator, FeeCalculator
from bonding.ledger.entry import AssetEntry, AssetSnapshot, TradeOutcome
from bonding.safe_int import S, SafeIntError

logger = structlog.get_logger()


@dataclass(frozen=True)
class RegistrySnapshot:
    """Read-only copy of the registry counters."""

    initialized: bool
    asset_count: int
    total_fee_collected: int
    assets: tuple[AssetSnapshot, ...] = ()


class Registry:
    """Ordered collection of asset ledger entries.

    Args:
        config: Curve, fee and threshold configuration
        fee_calculator: Fee calculator. Defaults to a BasisPointFeeCalculator
            built from config.fees.
    """

    def __init__(
        self,
        config: ExchangeConfig | None = None,
        fee_calculator: FeeCalculator | None = None,
    ) -> None:
        self.config = config if config is not None else DEFAULT_EXCHANGE_CONFIG
        self.curve = BondingCurve(self.config.curve)
        if fee_calculator is None:
            fee_calculator = BasisPointFeeCalculator(self.config.fees)
        self.fees: FeeCalculator = fee_calculator

        self._entries: list[AssetEntry] = []
        self._locks: list[threading.Lock] = []
        self._arena_lock = threading.Lock()
        self._fee_lock = threading.Lock()

        self._initialized = False
        self._asset_count = 0
        self._total_fee_collected = 0

    # --- Lifecycle ---

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def asset_count(self) -> int:
        """Sentinel-based counter: 1 after initialize, +1 per asset."""
        return self._asset_count

    @property
    def total_fee_collected(self) -> int:
        return self._total_fee_collected

    def __len__(self) -> int:
        return len(self._entries)

    def initialize(self) -> None:
        """One-time setup.

        Raises:
            AlreadyInitialized: If called more than once
        """
        with self._arena_lock:
            if self._initialized:
                raise AlreadyInitialized("Registry is already initialized")
            self._asset_count = ASSET_COUNT_SENTINEL
            self._total_fee_collected = 0
            self._initialized = True

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitialized("Registry has not been initialized")

    # --- Entries ---

    def create_asset(self, name: str, symbol: str, asset_handle: str, creator: str) -> int:
        """Append a new BONDING entry with zero counters. No fee is charged.

        Returns:
            The new asset id

        Raises:
            NotInitialized: If initialize() has not been called
            InvalidMetadata: If any of the metadata fields is empty
        """
        for field_name, value in (
            ("name", name),
            ("symbol", symbol),
            ("asset_handle", asset_handle),
            ("creator", creator),
        ):
            if not isinstance(value, str) or not value.strip():
                raise InvalidMetadata(f"Asset {field_name} must be a non-empty string")

        with self._arena_lock:
            self._require_initialized()
            asset_id = len(self._entries)
            entry = AssetEntry(
                asset_id=asset_id,
                asset_handle=asset_handle,
                display_name=name,
                symbol=symbol,
                creator_reference=creator,
            )
            # Lock first: a reader that sees the entry always finds its lock
            self._locks.append(threading.Lock())
            self._entries.append(entry)
            self._asset_count += 1

        return asset_id

    def _slot(self, asset_id: int) -> tuple[AssetEntry, threading.Lock]:
        """Look up an entry and its lock.

        Raises:
            NotInitialized: If initialize() has not been called
            InvalidAssetId: If asset_id is not an int or out of range
        """
        self._require_initialized()
        if not isinstance(asset_id, int) or isinstance(asset_id, bool):
            raise InvalidAssetId(f"Asset id must be an int, got {type(asset_id).__name__}")
        if not 0 <= asset_id < len(self._entries):
            raise InvalidAssetId(f"Unknown asset id {asset_id}")
        return self._entries[asset_id], self._locks[asset_id]

    def get(self, asset_id: int) -> AssetSnapshot:
        entry, lock = self._slot(asset_id)
        with lock:
            return entry.snapshot()

    def snapshot(self) -> RegistrySnapshot:
        """Consistent-per-entry copy of the whole registry."""
        with self._arena_lock:
            slots = list(zip(self._entries, self._locks, strict=True))
        assets = []
        for entry, lock in slots:
            with lock:
                assets.append(entry.snapshot())
        with self._fee_lock:
            total_fee = self._total_fee_collected
        return RegistrySnapshot(
            initialized=self._initialized,
            asset_count=self._asset_count,
            total_fee_collected=total_fee,
            assets=tuple(assets),
        )

    # --- Trades ---

    def quote_buy(self, asset_id: int, gross_amount: int) -> TradeOutcome:
        """Price a buy without committing it."""
        entry, lock = self._slot(asset_id)
        with lock:
            return entry.quote_buy(
                gross_amount, self.curve, self.fees, self.config.progress_threshold
            )

    def quote_sell(self, asset_id: int, amount: int) -> TradeOutcome:
        """Price a sell without committing it."""
        entry, lock = self._slot(asset_id)
        with lock:
            return entry.quote_sell(amount, self.curve, self.fees)

    def buy(self, asset_id: int, gross_amount: int) -> TradeOutcome:
        """Execute a buy: price it, commit the entry, accrue the fee, check phase."""
        entry, lock = self._slot(asset_id)
        with lock:
            outcome = entry.quote_buy(
                gross_amount, self.curve, self.fees, self.config.progress_threshold
            )
            self._commit(entry, outcome)
            entry.check_progress(self.config.progress_threshold)
        return outcome

    def sell(self, asset_id: int, amount: int) -> TradeOutcome:
        """Execute a sell: price it, commit the entry, accrue the fee."""
        entry, lock = self._slot(asset_id)
        with lock:
            outcome = entry.quote_sell(amount, self.curve, self.fees)
            self._commit(entry, outcome)
        return outcome

    def _commit(self, entry: AssetEntry, outcome: TradeOutcome) -> None:
        """Apply an outcome and its fee together. Caller holds the entry lock."""
        with self._fee_lock:
            try:
                new_total = (S(self._total_fee_collected) + S(outcome.fee)).value
            except SafeIntError as err:
                raise ArithmeticFault(f"Fee accumulator overflow: {err}") from err
            entry.apply(outcome)
            self._total_fee_collected = new_total

        logger.debug(
            "fee_accrued",
            asset_id=outcome.asset_id,
            fee=outcome.fee,
            total_fee_collected=new_total,
        )
