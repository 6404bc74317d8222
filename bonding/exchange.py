"""Request handler for the bonding-curve exchange.

Exchange is the entry point for the surrounding system. It exposes one
method per instruction (initialize, create_asset, buy, sell) over an
injected Registry, and logs every accepted or rejected call.

Callers own custody: the reserve (for buys) or supply (for sells) must
already be held by the protocol before the call, and amount_out of the
returned outcome must be released to the trader only after the call
returns successfully.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol

import structlog

from bonding.errors import ExchangeError
from bonding.ledger import AssetSnapshot, Registry, RegistrySnapshot, TradeOutcome, TradeSide

logger = structlog.get_logger()


class TransitionHandler(Protocol):
    """Hand-off hook called once when an asset leaves the bonding phase."""

    def __call__(self, asset: AssetSnapshot) -> None: ...


class Exchange:
    """Bonding-curve exchange service.

    Args:
        registry: Ledger state. A fresh, uninitialized Registry if None.
        on_transition: Called after a buy moves an asset to TRANSITIONED.
            Runs outside the entry lock; errors it raises propagate to the
            caller but do not undo the committed trade.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        on_transition: TransitionHandler | None = None,
    ) -> None:
        self.registry = registry if registry is not None else Registry()
        self._on_transition = on_transition

    def initialize(self) -> RegistrySnapshot:
        self.registry.initialize()
        logger.info("registry_initialized", asset_count=self.registry.asset_count)
        return self.registry.snapshot()

    def create_asset(self, name: str, symbol: str, asset_handle: str, creator: str) -> int:
        """Register a new asset on its bonding curve.

        Returns:
            The stable asset id
        """
        asset_id = self.registry.create_asset(name, symbol, asset_handle, creator)
        logger.info(
            "asset_created",
            asset_id=asset_id,
            symbol=symbol,
            asset_handle=asset_handle,
            creator=creator,
        )
        return asset_id

    def buy(self, asset_id: int, gross_reserve_amount: int) -> TradeOutcome:
        """Buy supply with `gross_reserve_amount` of reserve already in custody.

        Returns:
            TradeOutcome; tokens_issued is the supply to release to the trader
        """
        try:
            outcome = self.registry.buy(asset_id, gross_reserve_amount)
        except ExchangeError as err:
            self._log_rejected(TradeSide.BUY, asset_id, gross_reserve_amount, err)
            raise

        self._log_executed(outcome)
        if outcome.transitioned:
            self._handle_transition(asset_id)
        return outcome

    def sell(self, asset_id: int, amount_to_retire: int) -> TradeOutcome:
        """Sell `amount_to_retire` of supply already in custody.

        Returns:
            TradeOutcome; net_payout is the reserve to release to the trader
        """
        try:
            outcome = self.registry.sell(asset_id, amount_to_retire)
        except ExchangeError as err:
            self._log_rejected(TradeSide.SELL, asset_id, amount_to_retire, err)
            raise

        self._log_executed(outcome)
        return outcome

    def quote_buy(self, asset_id: int, gross_reserve_amount: int) -> TradeOutcome:
        """Preview a buy. Nothing is committed."""
        outcome = self.registry.quote_buy(asset_id, gross_reserve_amount)
        logger.debug("buy_quoted", asset_id=asset_id, tokens_out=outcome.amount_out)
        return outcome

    def quote_sell(self, asset_id: int, amount_to_retire: int) -> TradeOutcome:
        """Preview a sell. Nothing is committed."""
        outcome = self.registry.quote_sell(asset_id, amount_to_retire)
        logger.debug("sell_quoted", asset_id=asset_id, reserve_out=outcome.amount_out)
        return outcome

    def get_asset(self, asset_id: int) -> AssetSnapshot:
        return self.registry.get(asset_id)

    def state(self) -> RegistrySnapshot:
        return self.registry.snapshot()

    def _handle_transition(self, asset_id: int) -> None:
        asset = self.registry.get(asset_id)
        logger.info(
            "asset_transitioned",
            asset_id=asset_id,
            reserve_collected=asset.reserve_collected,
            supply_sold=asset.supply_sold,
            threshold=self.registry.config.progress_threshold,
        )
        if self._on_transition is not None:
            self._on_transition(asset)

    @staticmethod
    def _log_executed(outcome: TradeOutcome) -> None:
        logger.info(
            "trade_executed",
            side=outcome.side.value,
            asset_id=outcome.asset_id,
            amount_in=outcome.amount_in,
            amount_out=outcome.amount_out,
            fee=outcome.fee,
            reserve_collected=outcome.reserve_after,
            supply_sold=outcome.supply_after,
        )

    @staticmethod
    def _log_rejected(side: TradeSide, asset_id: int, amount: int, err: ExchangeError) -> None:
        logger.warning(
            "trade_rejected",
            side=side.value,
            asset_id=asset_id,
            amount=amount,
            error=err.code,
            detail=str(err),
        )


@lru_cache(maxsize=1)
def get_default_exchange() -> Exchange:
    """Process-wide exchange used by the HTTP layer.

    Engine code never reaches for this; it takes an Exchange or Registry
    explicitly. Tests override the API dependency instead of this function.
    """
    logger.info("default_exchange_created")
    return Exchange()
