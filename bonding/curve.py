"""Bonding curve pricing.

The curve relates cumulative reserve collected (x) to cumulative supply
issued (y):

    A' - y = B' / (k0 + x / k1)

Solved for y (forward, used by buys):   y = A' - B' / (k0 + x / k1)
Solved for x (inverse, used by sells):  x = k1 * (B' / (A' - y) - k0)

All divisions are floor divisions on SafeInt, so the two directions are
only approximate inverses of each other. That truncation is part of the
pricing rule and must not be replaced by exact rational arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog

from bonding.constants import (
    CURVE_A,
    CURVE_B,
    CURVE_RESERVE_DIVISOR,
    CURVE_VIRTUAL_RESERVE,
    RESERVE_DECIMALS,
    SUPPLY_DECIMALS,
)
from bonding.safe_int import S, SafeInt

logger = structlog.get_logger()


@dataclass(frozen=True)
class CurveParameters:
    """Fixed curve parameters and the scaled constants derived from them.

    Attributes:
        a: Asymptotic supply A in whole tokens
        b: Curve constant B
        virtual_reserve: k0 in whole reserve units
        reserve_divisor: k1, applied to the raw reserve before adding k0
        supply_decimals: Decimals of the issued asset (scale of y)
        reserve_decimals: Decimals of the reserve (scale of x and k0)
    """

    a: int = CURVE_A
    b: int = CURVE_B
    virtual_reserve: int = CURVE_VIRTUAL_RESERVE
    reserve_divisor: int = CURVE_RESERVE_DIVISOR
    supply_decimals: int = SUPPLY_DECIMALS
    reserve_decimals: int = RESERVE_DECIMALS

    def __post_init__(self) -> None:
        for name in ("a", "b", "virtual_reserve", "reserve_divisor"):
            if getattr(self, name) <= 0:
                raise ValueError(f"Curve parameter {name} must be positive")
        if self.supply_decimals < 0 or self.reserve_decimals < 0:
            raise ValueError("Curve decimals must be non-negative")
        # Both solved forms must be defined at the empty curve (x=0, y=0)
        if self.scaled_b // self.k0 > self.scaled_a:
            raise ValueError("Curve yields negative supply at zero reserve")
        if self.scaled_b // self.scaled_a < self.k0:
            raise ValueError("Curve yields negative reserve at zero supply")

    @property
    def scaled_a(self) -> int:
        """A' = A * 10**supply_decimals."""
        return self.a * 10**self.supply_decimals

    @property
    def scaled_b(self) -> int:
        """B' = B * 10**(supply_decimals + reserve_decimals)."""
        return self.b * 10 ** (self.supply_decimals + self.reserve_decimals)

    @property
    def k0(self) -> int:
        """Virtual reserve in raw reserve units."""
        return self.virtual_reserve * 10**self.reserve_decimals

    @property
    def k1(self) -> int:
        return self.reserve_divisor

    @property
    def supply_roundtrip_bound(self) -> int:
        """Upper bound on y - supply_at(reserve_at(y)) from floor truncation."""
        return self.scaled_a**2 // (self.scaled_b - self.scaled_a) + 1


DEFAULT_CURVE_PARAMETERS = CurveParameters()


@dataclass(frozen=True)
class CurveQuote:
    """Curve evaluation for one trade, before fees on the output side.

    Attributes:
        reserve_before: x1, cumulative reserve before the trade
        reserve_after: x2, cumulative reserve after the trade
        supply_before: y1, cumulative supply before the trade
        supply_after: y2, cumulative supply after the trade
    """

    reserve_before: int
    reserve_after: int
    supply_before: int
    supply_after: int

    @property
    def reserve_delta(self) -> int:
        """Absolute change in cumulative reserve."""
        return abs(self.reserve_after - self.reserve_before)

    @property
    def supply_delta(self) -> int:
        """Absolute change in cumulative supply."""
        return abs(self.supply_after - self.supply_before)


class BondingCurve:
    """Forward and inverse evaluation of the issuance curve.

    Formula: supply_at(x) = A' - B' // (k0 + x // k1)
             reserve_at(y) = k1 * (B' // (A' - y) - k0)

    Every intermediate value is a SafeInt, so overflow, underflow and
    division by zero raise SafeIntError instead of producing a bad price.
    """

    def __init__(self, params: CurveParameters | None = None) -> None:
        self.params = params if params is not None else DEFAULT_CURVE_PARAMETERS
        self._a = S(self.params.scaled_a)
        self._b = S(self.params.scaled_b)
        self._k0 = S(self.params.k0)
        self._k1 = S(self.params.k1)

    def supply_at(self, reserve: int | SafeInt) -> int:
        """Cumulative supply issued once `reserve` has been collected."""
        denominator = self._k0 + S(reserve) // self._k1
        return (self._a - self._b // denominator).value

    def reserve_at(self, supply: int | SafeInt) -> int:
        """Cumulative reserve backing `supply` issued tokens.

        Raises:
            DivisionByZero: If supply equals A' (the curve asymptote)
        """
        remaining = self._a - S(supply)
        return (self._k1 * (self._b // remaining - self._k0)).value

    def quote_buy(self, reserve_collected: int, supply_sold: int, net_amount: int) -> CurveQuote:
        """Evaluate the curve forward for `net_amount` of new reserve.

        The tokens issued are supply_at(x1 + net) - y1. A result below the
        current supply is an invariant violation and raises Underflow.

        Args:
            reserve_collected: Current cumulative reserve x1
            supply_sold: Current cumulative supply y1
            net_amount: Reserve added after fees

        Returns:
            CurveQuote whose supply_delta is the amount to issue
        """
        x2 = S(reserve_collected) + S(net_amount)
        y2 = S(self.supply_at(x2))
        tokens = y2 - S(supply_sold)

        logger.debug(
            "curve_forward",
            reserve_before=reserve_collected,
            reserve_after=x2.value,
            tokens_issued=tokens.value,
        )

        return CurveQuote(
            reserve_before=reserve_collected,
            reserve_after=x2.value,
            supply_before=supply_sold,
            supply_after=y2.value,
        )

    def quote_sell(self, reserve_collected: int, supply_sold: int, amount: int) -> CurveQuote:
        """Evaluate the curve inverse after retiring `amount` of supply.

        The gross reserve released is x1 - reserve_at(y1 - amount). Both
        subtractions are checked: selling more than the supply, or a curve
        point above the collected reserve, raises Underflow.

        Args:
            reserve_collected: Current cumulative reserve x1
            supply_sold: Current cumulative supply y1
            amount: Supply to retire

        Returns:
            CurveQuote whose reserve_delta is the gross payout
        """
        y2 = S(supply_sold) - S(amount)
        x2 = S(self.reserve_at(y2))
        payout = S(reserve_collected) - x2

        logger.debug(
            "curve_inverse",
            supply_before=supply_sold,
            supply_after=y2.value,
            gross_payout=payout.value,
        )

        return CurveQuote(
            reserve_before=reserve_collected,
            reserve_after=x2.value,
            supply_before=supply_sold,
            supply_after=y2.value,
        )

    def spot_price(self, reserve_collected: int) -> Decimal:
        """Marginal price in whole reserve units per whole token.

        Returns dx/dy = k1 * D**2 / B' with D = k0 + x // k1, the reciprocal
        of the curve slope dy/dx. Display only; trade math never uses this
        value.
        """
        denominator = self.params.k0 + reserve_collected // self.params.k1
        raw = Decimal(self.params.k1 * denominator**2) / Decimal(self.params.scaled_b)
        shift = self.params.supply_decimals - self.params.reserve_decimals
        return raw.scaleb(shift)
