"""Fee calculation result type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeeResult:
    """Split of an amount into fee and net.

    Attributes:
        amount: The amount the fee was taken from
        rate_bps: Rate applied, in basis points
        fee: floor(amount * rate_bps / bps_base)
        net: amount - fee

    Examples:
        result = FeeResult(amount=1_000_000, rate_bps=50, fee=5_000, net=995_000)
        assert not result.is_zero
    """

    amount: int
    rate_bps: int
    fee: int
    net: int

    @property
    def is_zero(self) -> bool:
        """True if no fee was taken (zero rate or amount too small)."""
        return self.fee == 0
