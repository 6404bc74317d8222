"""Pydantic models for exchange responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bonding.ledger import AssetSnapshot, Phase, RegistrySnapshot, TradeOutcome, TradeSide
from bonding.models.types import Uint256


class AssetView(BaseModel):
    """State of one asset ledger entry."""

    asset_id: int = Field(alias="assetId")
    asset_handle: str = Field(alias="assetHandle")
    name: str
    symbol: str
    creator: str
    supply_sold: Uint256 = Field(alias="supplySold")
    reserve_collected: Uint256 = Field(alias="reserveCollected")
    phase: Phase

    model_config = {"populate_by_name": True}

    @classmethod
    def from_snapshot(cls, asset: AssetSnapshot) -> AssetView:
        return cls(
            asset_id=asset.asset_id,
            asset_handle=asset.asset_handle,
            name=asset.display_name,
            symbol=asset.symbol,
            creator=asset.creator_reference,
            supply_sold=asset.supply_sold,
            reserve_collected=asset.reserve_collected,
            phase=asset.phase,
        )


class RegistryView(BaseModel):
    """Registry counters."""

    initialized: bool
    asset_count: int = Field(alias="assetCount")
    total_fee_collected: Uint256 = Field(alias="totalFeeCollected")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_snapshot(cls, state: RegistrySnapshot) -> RegistryView:
        return cls(
            initialized=state.initialized,
            asset_count=state.asset_count,
            total_fee_collected=state.total_fee_collected,
        )


class CreateAssetResponse(BaseModel):
    asset_id: int = Field(alias="assetId")

    model_config = {"populate_by_name": True}


class TradeResponse(BaseModel):
    """Outcome of an executed or quoted trade.

    amount_out is what custody must release to the trader: supply for a
    buy, net reserve for a sell.
    """

    asset_id: int = Field(alias="assetId")
    side: TradeSide
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out: Uint256 = Field(alias="amountOut")
    fee: Uint256
    reserve_collected: Uint256 = Field(alias="reserveCollected")
    supply_sold: Uint256 = Field(alias="supplySold")
    transitioned: bool = False

    model_config = {"populate_by_name": True}

    @classmethod
    def from_outcome(cls, outcome: TradeOutcome) -> TradeResponse:
        return cls(
            asset_id=outcome.asset_id,
            side=outcome.side,
            amount_in=outcome.amount_in,
            amount_out=outcome.amount_out,
            fee=outcome.fee,
            reserve_collected=outcome.reserve_after,
            supply_sold=outcome.supply_after,
            transitioned=outcome.transitioned,
        )


class ErrorResponse(BaseModel):
    """Error body. `error` is the stable ExchangeError code."""

    error: str
    detail: str
