"""Ledger state: per-asset entries and the registry that owns them."""

from .entry import (
    AssetEntry,
    AssetSnapshot,
    Phase,
    TradeOutcome,
    TradeSide,
    crosses_threshold,
)
from .registry import Registry, RegistrySnapshot

__all__ = [
    "AssetEntry",
    "AssetSnapshot",
    "Phase",
    "Registry",
    "RegistrySnapshot",
    "TradeOutcome",
    "TradeSide",
    "crosses_threshold",
]
