"""Exchange configuration."""

from dataclasses import dataclass, field

from bonding.constants import PROGRESS_THRESHOLD
from bonding.curve import DEFAULT_CURVE_PARAMETERS, CurveParameters
from bonding.fees.config import DEFAULT_FEE_CONFIG, FeeConfig


@dataclass(frozen=True)
class ExchangeConfig:
    """Everything that fixes the pricing of an exchange instance.

    Attributes:
        curve: Curve parameters and scales
        fees: Fee rates
        progress_threshold: Cumulative reserve, in raw reserve base units
            (the unit of reserve_collected), at which an asset transitions.
            Default is 263,300 whole reserve units.
    """

    curve: CurveParameters = field(default_factory=lambda: DEFAULT_CURVE_PARAMETERS)
    fees: FeeConfig = field(default_factory=lambda: DEFAULT_FEE_CONFIG)
    progress_threshold: int = PROGRESS_THRESHOLD

    def __post_init__(self) -> None:
        if self.progress_threshold <= 0:
            raise ValueError(f"progress_threshold must be positive, got {self.progress_threshold}")


# Default configuration instance
DEFAULT_EXCHANGE_CONFIG = ExchangeConfig()
