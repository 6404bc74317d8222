"""Exchange error classes.

Every error aborts the whole operation with no state committed. The
`code` attribute is stable and is what the HTTP layer reports, so callers
can tell "try a smaller amount" apart from "this asset is closed".
"""


class ExchangeError(Exception):
    """Base error for exchange operations."""

    code = "exchange_error"


class InvalidAssetId(ExchangeError, LookupError):
    """Referenced asset id is not in the registry."""

    code = "invalid_asset_id"


class AlreadyTransitioned(ExchangeError):
    """Trade attempted against an asset that has left the bonding phase."""

    code = "already_transitioned"


class InvalidAmount(ExchangeError, ValueError):
    """A required-positive amount was zero, or an amount was negative."""

    code = "invalid_amount"


class InvalidMetadata(ExchangeError, ValueError):
    """Asset name, symbol, handle or creator is missing."""

    code = "invalid_metadata"


class ArithmeticFault(ExchangeError, ArithmeticError):
    """Checked arithmetic failed or a curve invariant was violated.

    Covers overflow, underflow (including selling more than the issued
    supply) and division by zero in curve or fee math.
    """

    code = "arithmetic_fault"


class AlreadyInitialized(ExchangeError):
    """initialize() was called on a registry that is already initialized."""

    code = "already_initialized"


class NotInitialized(ExchangeError):
    """Operation attempted before initialize()."""

    code = "not_initialized"
