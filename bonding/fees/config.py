"""Fee configuration for the exchange."""

from dataclasses import dataclass

from bonding.constants import BPS_BASE, PLATFORM_FEE_BPS, VENUE_FEE_BPS


@dataclass(frozen=True)
class FeeConfig:
    """Centralized configuration for fee calculation.

    Attributes:
        platform_fee_bps: Fee charged on every curve trade (default: 50 = 0.5%)
        venue_fee_bps: Fee reserved for the post-transition venue (default: 50).
            Not charged by buy or sell.
        bps_base: Basis point denominator (10,000)
    """

    platform_fee_bps: int = PLATFORM_FEE_BPS
    venue_fee_bps: int = VENUE_FEE_BPS
    bps_base: int = BPS_BASE

    def __post_init__(self) -> None:
        if self.bps_base <= 0:
            raise ValueError(f"bps_base must be positive, got {self.bps_base}")
        for name in ("platform_fee_bps", "venue_fee_bps"):
            rate = getattr(self, name)
            if not 0 <= rate <= self.bps_base:
                raise ValueError(f"{name} must be in [0, {self.bps_base}], got {rate}")


# Default configuration instance
DEFAULT_FEE_CONFIG = FeeConfig()
