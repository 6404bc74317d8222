"""Pydantic models for the exchange HTTP surface."""

from bonding.models.requests import BuyRequest, CreateAssetRequest, SellRequest
from bonding.models.responses import (
    AssetView,
    CreateAssetResponse,
    ErrorResponse,
    RegistryView,
    TradeResponse,
)
from bonding.models.types import Uint64, Uint256, Uint256Int

__all__ = [
    # Types
    "Uint64",
    "Uint256",
    "Uint256Int",
    # Requests
    "BuyRequest",
    "CreateAssetRequest",
    "SellRequest",
    # Responses
    "AssetView",
    "CreateAssetResponse",
    "ErrorResponse",
    "RegistryView",
    "TradeResponse",
]
