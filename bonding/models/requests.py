"""Pydantic models for exchange requests."""

from pydantic import BaseModel, Field

from bonding.models.types import Label, Uint64, Uint256Int


class CreateAssetRequest(BaseModel):
    """Register a new asset on the bonding curve."""

    name: Label
    symbol: Label
    asset_handle: Label = Field(
        alias="assetHandle",
        description="Opaque identifier of the issuable unit, owned externally.",
    )
    creator: Label = Field(description="Identity creating the asset.")

    model_config = {"populate_by_name": True}


class BuyRequest(BaseModel):
    """Buy supply with reserve already moved into custody."""

    gross_amount: Uint64 = Field(
        alias="grossAmount",
        description="Gross reserve offered, before the platform fee.",
    )

    model_config = {"populate_by_name": True}


class SellRequest(BaseModel):
    """Retire supply already moved into custody."""

    amount: Uint256Int = Field(description="Supply to retire. Must be positive.")
