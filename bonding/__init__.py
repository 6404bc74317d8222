"""Bonding-curve exchange - per-asset issuance curves over a shared reserve."""

from bonding.config import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from bonding.curve import BondingCurve, CurveParameters
from bonding.exchange import Exchange, get_default_exchange
from bonding.ledger import Phase, Registry, TradeOutcome

__version__ = "0.1.0"
__all__ = [
    "BondingCurve",
    "CurveParameters",
    "DEFAULT_EXCHANGE_CONFIG",
    "Exchange",
    "ExchangeConfig",
    "Phase",
    "Registry",
    "TradeOutcome",
    "get_default_exchange",
    "__version__",
]
