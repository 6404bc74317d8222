"""Shared type definitions for exchange request and response models.

Amounts travel as decimal strings: curve supply reaches ~1e27 raw units,
well past what JSON clients can hold as numbers.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# Maximum uint64 value (bound of instruction amount arguments)
UINT64_MAX = 2**64 - 1


def _parse_unsigned(value: Any, bits: int) -> int:
    """Parse a non-negative integer that fits in `bits` bits.

    Args:
        value: Decimal string or int

    Returns:
        The parsed integer

    Raises:
        ValueError: If value is not a non-negative integer within range
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if int_value > 2**bits - 1:
        raise ValueError(f"Amount overflow: {value} > 2^{bits}-1")
    return int_value


def validate_uint256(value: Any) -> str:
    """Validate a uint256 and return it as a decimal string."""
    return str(_parse_unsigned(value, 256))


def validate_uint256_int(value: Any) -> int:
    """Validate a uint256 request amount and return it as an int."""
    return _parse_unsigned(value, 256)


def validate_uint64(value: Any) -> int:
    """Validate a uint64 request amount and return it as an int."""
    return _parse_unsigned(value, 64)


# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# 64-bit unsigned amount, accepted as decimal string or int
Uint64 = Annotated[
    int,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer as decimal string or int"),
]

# Non-empty metadata string
Label = Annotated[str, Field(min_length=1, max_length=64)]

# 256-bit unsigned amount, accepted as decimal string or int
Uint256Int = Annotated[
    int,
    BeforeValidator(validate_uint256_int),
    Field(description="256-bit unsigned integer as decimal string or int"),
]
