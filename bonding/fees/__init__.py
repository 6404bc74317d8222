"""Fee calculation module for the exchange.

Usage:
    from bonding.fees import BasisPointFeeCalculator, FeeConfig

    calculator = BasisPointFeeCalculator(FeeConfig(platform_fee_bps=50))
    result = calculator.calculate(1_000_000)
    assert result.fee == 5_000
"""

from bonding.fees.calculator import (
    DEFAULT_FEE_CALCULATOR,
    BasisPointFeeCalculator,
    FeeCalculator,
)
from bonding.fees.config import DEFAULT_FEE_CONFIG, FeeConfig
from bonding.fees.result import FeeResult

__all__ = [
    # Calculator
    "FeeCalculator",
    "BasisPointFeeCalculator",
    "DEFAULT_FEE_CALCULATOR",
    # Config
    "FeeConfig",
    "DEFAULT_FEE_CONFIG",
    # Result
    "FeeResult",
]
