"""Test helpers module for shared test utilities.

- constants: Curve parameters, reference trade values and metadata
- factories: Registry, exchange and asset factory functions
"""

from tests.helpers.constants import (
    ASSET_HANDLE,
    ASSET_NAME,
    ASSET_SYMBOL,
    CREATOR,
    CURVE_A,
    CURVE_B,
    K0,
    K1,
    REFERENCE_BUY_FEE,
    REFERENCE_GROSS,
    REFERENCE_GROSS_PAYOUT,
    REFERENCE_NET,
    REFERENCE_NET_PAYOUT,
    REFERENCE_SELL_FEE,
    REFERENCE_TOKENS,
    SCALED_A,
    SCALED_B,
)
from tests.helpers.factories import make_asset, make_exchange, make_registry

__all__ = [
    # Constants
    "ASSET_HANDLE",
    "ASSET_NAME",
    "ASSET_SYMBOL",
    "CREATOR",
    "CURVE_A",
    "CURVE_B",
    "K0",
    "K1",
    "REFERENCE_BUY_FEE",
    "REFERENCE_GROSS",
    "REFERENCE_GROSS_PAYOUT",
    "REFERENCE_NET",
    "REFERENCE_NET_PAYOUT",
    "REFERENCE_SELL_FEE",
    "REFERENCE_TOKENS",
    "SCALED_A",
    "SCALED_B",
    # Factories
    "make_asset",
    "make_exchange",
    "make_registry",
]
