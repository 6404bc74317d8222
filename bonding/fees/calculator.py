"""Basis-point fee calculator.

Uses SafeInt so a fee computation either succeeds exactly or raises:
- amount * rate overflowing uint256 raises Uint256Overflow
- a negative amount raises Uint256Overflow on wrapping
"""

from __future__ import annotations

from typing import Protocol

import structlog

from bonding.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from bonding.fees.result import FeeResult
from bonding.safe_int import S

logger = structlog.get_logger()


class FeeCalculator(Protocol):
    """Protocol for fee calculation.

    The ledger only depends on this interface, so tests can inject a
    calculator with different rates.
    """

    def calculate(self, amount: int, rate_bps: int | None = None) -> FeeResult:
        """Split `amount` into fee and net at `rate_bps` (platform rate if None)."""
        ...


class BasisPointFeeCalculator:
    """Default fee calculator.

    Fee formula:
        fee = floor(amount * rate_bps / 10000)

    The result is truncated toward zero, so amounts below
    10000 / rate_bps pay no fee at all.

    Attributes:
        config: Fee configuration settings
    """

    def __init__(self, config: FeeConfig | None = None) -> None:
        self.config = config if config is not None else DEFAULT_FEE_CONFIG

    def calculate(self, amount: int, rate_bps: int | None = None) -> FeeResult:
        """Split `amount` into fee and net.

        Args:
            amount: Non-negative amount to take the fee from
            rate_bps: Rate in basis points. Uses the platform fee if None.

        Returns:
            FeeResult with fee and net

        Raises:
            ValueError: If rate_bps is outside [0, bps_base]
            SafeIntError: If the amount is negative or the product overflows
        """
        rate = self.config.platform_fee_bps if rate_bps is None else rate_bps
        if not 0 <= rate <= self.config.bps_base:
            raise ValueError(f"Fee rate must be in [0, {self.config.bps_base}] bps, got {rate}")

        gross = S(amount)
        fee = (gross * rate) // self.config.bps_base
        # fee <= gross since rate <= bps_base
        net = gross - fee

        logger.debug("fee_calculated", amount=amount, rate_bps=rate, fee=fee.value)

        return FeeResult(amount=amount, rate_bps=rate, fee=fee.value, net=net.value)

    def venue_fee(self, amount: int) -> FeeResult:
        """Fee owed to the post-transition venue. Never charged on curve trades."""
        return self.calculate(amount, self.config.venue_fee_bps)


# Default calculator instance
DEFAULT_FEE_CALCULATOR = BasisPointFeeCalculator()
