"""Protocol constants for the bonding-curve exchange.

Centralizes the curve parameters, unit scales, fee rates and the phase
transition threshold.
"""

# Curve parameters: y = A - B / (30 + x / 3000) in whole units
CURVE_A = 1_073_000_191
CURVE_B = 32_190_005_730

# k0 (virtual reserve, whole reserve units) and k1 (reserve divisor)
CURVE_VIRTUAL_RESERVE = 30
CURVE_RESERVE_DIVISOR = 3000

# Decimals of the issued asset and of the reserve.
# scaled_a = A * 10**18, scaled_b = B * 10**30, k0 = 30 * 10**12
SUPPLY_DECIMALS = 18
RESERVE_DECIMALS = 12

SUPPLY_SCALE = 10**SUPPLY_DECIMALS
RESERVE_SCALE = 10**RESERVE_DECIMALS

# Fees in basis points (1 bp = 1/10000)
BPS_BASE = 10_000
PLATFORM_FEE_BPS = 50  # 0.5%
VENUE_FEE_BPS = 50  # 0.5%, reserved for the post-transition venue

# Reserve (raw base units, same as reserve_collected) at which an asset
# leaves the bonding phase: 263,300 whole reserve units
PROGRESS_THRESHOLD = 263_300 * RESERVE_SCALE

# Registry asset_count starts at this sentinel after initialize
ASSET_COUNT_SENTINEL = 1
