"""Per-asset ledger state and its buy/sell transitions.

An entry never mutates itself while pricing a trade. quote_buy and
quote_sell compute a complete TradeOutcome from the current state, and
apply() commits that outcome in one step. A failure anywhere in pricing
therefore leaves the entry exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from bonding.errors import AlreadyTransitioned, ArithmeticFault, InvalidAmount
from bonding.safe_int import SafeIntError

if TYPE_CHECKING:
    from bonding.curve import BondingCurve
    from bonding.fees import FeeCalculator


class Phase(str, Enum):
    """Trading phase of an asset. BONDING -> TRANSITIONED is one-way."""

    BONDING = "bonding"
    TRANSITIONED = "transitioned"


class TradeSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


def crosses_threshold(reserve_collected: int, progress_threshold: int) -> bool:
    """True if an asset holding `reserve_collected` must leave the bonding phase."""
    return reserve_collected >= progress_threshold


@dataclass(frozen=True)
class TradeOutcome:
    """Result of pricing a trade against one entry.

    For a buy, amount_in is the gross reserve offered and amount_out the
    supply issued; the fee was taken from amount_in before the curve.
    For a sell, amount_in is the supply retired and amount_out the net
    reserve paid; the fee was taken from the curve output.

    Attributes:
        asset_id: Entry the trade was priced against
        side: BUY or SELL
        amount_in: Amount the trader put into custody
        amount_out: Amount to release from custody to the trader
        fee: Platform fee accrued to the registry
        reserve_before: reserve_collected before the trade
        reserve_after: reserve_collected after the trade
        supply_before: supply_sold before the trade
        supply_after: supply_sold after the trade
        transitioned: True if this trade moves the asset out of BONDING
    """

    asset_id: int
    side: TradeSide
    amount_in: int
    amount_out: int
    fee: int
    reserve_before: int
    reserve_after: int
    supply_before: int
    supply_after: int
    transitioned: bool = False

    @property
    def tokens_issued(self) -> int:
        """Supply released to the trader on a buy (0 for sells)."""
        return self.amount_out if self.side is TradeSide.BUY else 0

    @property
    def net_payout(self) -> int:
        """Reserve released to the trader on a sell (0 for buys)."""
        return self.amount_out if self.side is TradeSide.SELL else 0

    @property
    def gross_payout(self) -> int:
        """Curve output of a sell before the fee (0 for buys)."""
        return self.reserve_before - self.reserve_after if self.side is TradeSide.SELL else 0


@dataclass(frozen=True)
class AssetSnapshot:
    """Read-only copy of an entry's state."""

    asset_id: int
    asset_handle: str
    display_name: str
    symbol: str
    creator_reference: str
    supply_sold: int
    reserve_collected: int
    phase: Phase


@dataclass
class AssetEntry:
    """Mutable ledger state for one asset.

    The entry only references the underlying issuable unit and its
    creator by handle; balances live with the custody collaborator.

    Attributes:
        asset_id: Stable arena index assigned by the registry
        asset_handle: Opaque identifier of the issuable unit
        display_name: Immutable metadata
        symbol: Immutable metadata
        creator_reference: Identity that created the entry
        supply_sold: Cumulative issued supply (raw supply units)
        reserve_collected: Cumulative net reserve (raw reserve units, post-fee)
        phase: BONDING until the progress threshold is reached
    """

    asset_id: int
    asset_handle: str
    display_name: str
    symbol: str
    creator_reference: str
    supply_sold: int = 0
    reserve_collected: int = 0
    phase: Phase = Phase.BONDING

    @property
    def is_bonding(self) -> bool:
        return self.phase is Phase.BONDING

    def _require_bonding(self) -> None:
        if not self.is_bonding:
            raise AlreadyTransitioned(f"Asset {self.asset_id} has left the bonding phase")

    def quote_buy(
        self,
        gross_amount: int,
        curve: BondingCurve,
        fees: FeeCalculator,
        progress_threshold: int,
    ) -> TradeOutcome:
        """Price a buy of `gross_amount` reserve without mutating the entry.

        Order of operations:
        1. fee = floor(gross * platform_bps / 10000), net = gross - fee
        2. tokens = supply_at(reserve_collected + net) - supply_sold

        Raises:
            AlreadyTransitioned: If the entry is not in BONDING
            InvalidAmount: If gross_amount is negative
            ArithmeticFault: On overflow or a negative issuance
        """
        self._require_bonding()
        if gross_amount < 0:
            raise InvalidAmount(f"Buy amount must be non-negative, got {gross_amount}")

        try:
            fee = fees.calculate(gross_amount)
            quote = curve.quote_buy(self.reserve_collected, self.supply_sold, fee.net)
        except SafeIntError as err:
            raise ArithmeticFault(f"Buy on asset {self.asset_id} failed: {err}") from err

        return TradeOutcome(
            asset_id=self.asset_id,
            side=TradeSide.BUY,
            amount_in=gross_amount,
            amount_out=quote.supply_delta,
            fee=fee.fee,
            reserve_before=quote.reserve_before,
            reserve_after=quote.reserve_after,
            supply_before=quote.supply_before,
            supply_after=quote.supply_after,
            transitioned=crosses_threshold(quote.reserve_after, progress_threshold),
        )

    def quote_sell(self, amount: int, curve: BondingCurve, fees: FeeCalculator) -> TradeOutcome:
        """Price a sell of `amount` supply without mutating the entry.

        Order of operations:
        1. y2 = supply_sold - amount, x2 = reserve_at(y2)
        2. gross = reserve_collected - x2
        3. fee = floor(gross * platform_bps / 10000), net = gross - fee

        Raises:
            AlreadyTransitioned: If the entry is not in BONDING
            InvalidAmount: If amount is zero or negative
            ArithmeticFault: If amount exceeds supply_sold, or on any
                other checked arithmetic failure
        """
        self._require_bonding()
        if amount <= 0:
            raise InvalidAmount(f"Sell amount must be positive, got {amount}")
        if amount > self.supply_sold:
            raise ArithmeticFault(
                f"Underflow: sell of {amount} exceeds supply {self.supply_sold} "
                f"of asset {self.asset_id}"
            )

        try:
            quote = curve.quote_sell(self.reserve_collected, self.supply_sold, amount)
            fee = fees.calculate(quote.reserve_delta)
        except SafeIntError as err:
            raise ArithmeticFault(f"Sell on asset {self.asset_id} failed: {err}") from err

        return TradeOutcome(
            asset_id=self.asset_id,
            side=TradeSide.SELL,
            amount_in=amount,
            amount_out=fee.net,
            fee=fee.fee,
            reserve_before=quote.reserve_before,
            reserve_after=quote.reserve_after,
            supply_before=quote.supply_before,
            supply_after=quote.supply_after,
        )

    def apply(self, outcome: TradeOutcome) -> None:
        """Commit a priced trade. Reserve and supply always change together.

        Raises:
            ValueError: If the outcome was priced against another entry or
                a state that is no longer current
        """
        if outcome.asset_id != self.asset_id:
            raise ValueError(f"Outcome for asset {outcome.asset_id} applied to {self.asset_id}")
        if (outcome.reserve_before, outcome.supply_before) != (
            self.reserve_collected,
            self.supply_sold,
        ):
            raise ValueError(f"Stale outcome for asset {self.asset_id}")

        self.reserve_collected = outcome.reserve_after
        self.supply_sold = outcome.supply_after

    def check_progress(self, progress_threshold: int) -> bool:
        """Move to TRANSITIONED once the threshold is reached.

        Returns:
            True if this call performed the transition
        """
        if self.is_bonding and crosses_threshold(self.reserve_collected, progress_threshold):
            self.phase = Phase.TRANSITIONED
            return True
        return False

    def snapshot(self) -> AssetSnapshot:
        return AssetSnapshot(
            asset_id=self.asset_id,
            asset_handle=self.asset_handle,
            display_name=self.display_name,
            symbol=self.symbol,
            creator_reference=self.creator_reference,
            supply_sold=self.supply_sold,
            reserve_collected=self.reserve_collected,
            phase=self.phase,
        )
