"""Tests for AssetEntry pricing, commit and phase check."""

import pytest

from bonding.constants import PROGRESS_THRESHOLD
from bonding.errors import AlreadyTransitioned, ArithmeticFault, InvalidAmount
from bonding.ledger import AssetEntry, Phase, TradeSide, crosses_threshold
from tests.helpers import (
    ASSET_HANDLE,
    ASSET_NAME,
    ASSET_SYMBOL,
    CREATOR,
    REFERENCE_BUY_FEE,
    REFERENCE_GROSS,
    REFERENCE_GROSS_PAYOUT,
    REFERENCE_NET,
    REFERENCE_NET_PAYOUT,
    REFERENCE_SELL_FEE,
    REFERENCE_TOKENS,
)


@pytest.fixture
def entry() -> AssetEntry:
    return AssetEntry(
        asset_id=0,
        asset_handle=ASSET_HANDLE,
        display_name=ASSET_NAME,
        symbol=ASSET_SYMBOL,
        creator_reference=CREATOR,
    )


@pytest.fixture
def funded_entry(entry, curve, fee_calculator) -> AssetEntry:
    """Entry after the reference buy."""
    entry.apply(entry.quote_buy(REFERENCE_GROSS, curve, fee_calculator, PROGRESS_THRESHOLD))
    return entry


class TestNewEntry:
    def test_starts_empty_and_bonding(self, entry):
        assert entry.supply_sold == 0
        assert entry.reserve_collected == 0
        assert entry.phase is Phase.BONDING
        assert entry.is_bonding

    def test_snapshot_copies_state(self, entry):
        snapshot = entry.snapshot()
        assert snapshot.asset_handle == ASSET_HANDLE
        assert snapshot.display_name == ASSET_NAME
        assert snapshot.phase is Phase.BONDING


class TestQuoteBuy:
    """Tests for quote_buy: fee on the input, then the curve."""

    def test_reference_buy(self, entry, curve, fee_calculator):
        outcome = entry.quote_buy(REFERENCE_GROSS, curve, fee_calculator, PROGRESS_THRESHOLD)
        assert outcome.side is TradeSide.BUY
        assert outcome.amount_in == REFERENCE_GROSS
        assert outcome.fee == REFERENCE_BUY_FEE
        assert outcome.tokens_issued == REFERENCE_TOKENS
        assert outcome.net_payout == 0
        assert outcome.reserve_after == REFERENCE_NET
        assert outcome.supply_after == REFERENCE_TOKENS
        assert outcome.transitioned is False

    def test_quote_does_not_mutate(self, entry, curve, fee_calculator):
        entry.quote_buy(REFERENCE_GROSS, curve, fee_calculator, PROGRESS_THRESHOLD)
        assert entry.reserve_collected == 0
        assert entry.supply_sold == 0

    def test_zero_buy_is_a_no_op_trade(self, entry, curve, fee_calculator):
        outcome = entry.quote_buy(0, curve, fee_calculator, PROGRESS_THRESHOLD)
        assert outcome.fee == 0
        assert outcome.tokens_issued == 0
        assert outcome.reserve_after == 0

    def test_dust_buy_adds_reserve_without_supply(self, entry, curve, fee_calculator):
        """Net reserve below k1 does not move the curve denominator."""
        outcome = entry.quote_buy(1_000, curve, fee_calculator, PROGRESS_THRESHOLD)
        assert outcome.fee == 5
        assert outcome.reserve_after == 995
        assert outcome.tokens_issued == 0

    def test_negative_amount_rejected(self, entry, curve, fee_calculator):
        with pytest.raises(InvalidAmount):
            entry.quote_buy(-1, curve, fee_calculator, PROGRESS_THRESHOLD)

    def test_overflow_is_arithmetic_fault(self, entry, curve, fee_calculator):
        with pytest.raises(ArithmeticFault) as exc_info:
            entry.quote_buy(2**255, curve, fee_calculator, PROGRESS_THRESHOLD)
        assert "Overflow" in str(exc_info.value)

    def test_flags_threshold_crossing(self, entry, curve, fee_calculator):
        outcome = entry.quote_buy(REFERENCE_GROSS, curve, fee_calculator, REFERENCE_NET)
        assert outcome.transitioned is True
        # Quoting never changes phase
        assert entry.phase is Phase.BONDING


class TestQuoteSell:
    """Tests for quote_sell: curve first, then fee on the output."""

    def test_reference_sell(self, funded_entry, curve, fee_calculator):
        outcome = funded_entry.quote_sell(REFERENCE_TOKENS, curve, fee_calculator)
        assert outcome.side is TradeSide.SELL
        assert outcome.amount_in == REFERENCE_TOKENS
        assert outcome.gross_payout == REFERENCE_GROSS_PAYOUT
        assert outcome.fee == REFERENCE_SELL_FEE
        assert outcome.net_payout == REFERENCE_NET_PAYOUT
        assert outcome.tokens_issued == 0
        assert outcome.reserve_after == 0
        assert outcome.supply_after == 0
        assert outcome.transitioned is False

    def test_zero_amount_rejected(self, funded_entry, curve, fee_calculator):
        with pytest.raises(InvalidAmount):
            funded_entry.quote_sell(0, curve, fee_calculator)

    def test_negative_amount_rejected(self, funded_entry, curve, fee_calculator):
        with pytest.raises(InvalidAmount):
            funded_entry.quote_sell(-5, curve, fee_calculator)

    def test_more_than_supply_is_underflow(self, funded_entry, curve, fee_calculator):
        with pytest.raises(ArithmeticFault, match="Underflow"):
            funded_entry.quote_sell(REFERENCE_TOKENS + 1, curve, fee_calculator)

    def test_sell_on_empty_entry_is_underflow(self, entry, curve, fee_calculator):
        with pytest.raises(ArithmeticFault):
            entry.quote_sell(1, curve, fee_calculator)


class TestApply:
    def test_apply_commits_reserve_and_supply_together(self, funded_entry):
        assert funded_entry.reserve_collected == REFERENCE_NET
        assert funded_entry.supply_sold == REFERENCE_TOKENS

    def test_stale_outcome_rejected(self, entry, curve, fee_calculator):
        outcome = entry.quote_buy(REFERENCE_GROSS, curve, fee_calculator, PROGRESS_THRESHOLD)
        entry.apply(outcome)
        with pytest.raises(ValueError, match="Stale"):
            entry.apply(outcome)
        assert entry.reserve_collected == REFERENCE_NET

    def test_outcome_for_other_asset_rejected(self, curve, fee_calculator):
        first = AssetEntry(0, "h0", "A", "A", CREATOR)
        second = AssetEntry(1, "h1", "B", "B", CREATOR)
        outcome = first.quote_buy(REFERENCE_GROSS, curve, fee_calculator, PROGRESS_THRESHOLD)
        with pytest.raises(ValueError):
            second.apply(outcome)


class TestPhase:
    """Tests for the one-way BONDING -> TRANSITIONED check."""

    def test_crosses_threshold_is_inclusive(self):
        assert crosses_threshold(100, 100)
        assert not crosses_threshold(99, 100)

    def test_check_progress_transitions_once(self, funded_entry):
        assert funded_entry.check_progress(REFERENCE_NET) is True
        assert funded_entry.phase is Phase.TRANSITIONED
        assert funded_entry.check_progress(REFERENCE_NET) is False
        assert funded_entry.phase is Phase.TRANSITIONED

    def test_below_threshold_stays_bonding(self, funded_entry):
        assert funded_entry.check_progress(REFERENCE_NET + 1) is False
        assert funded_entry.phase is Phase.BONDING

    def test_transitioned_entry_rejects_trades(self, funded_entry, curve, fee_calculator):
        funded_entry.check_progress(REFERENCE_NET)
        with pytest.raises(AlreadyTransitioned):
            funded_entry.quote_buy(REFERENCE_GROSS, curve, fee_calculator, PROGRESS_THRESHOLD)
        with pytest.raises(AlreadyTransitioned):
            funded_entry.quote_sell(1, curve, fee_calculator)
