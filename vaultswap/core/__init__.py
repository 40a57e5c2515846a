"""
Core types and errors shared across pricing and settlement.
"""

from .errors import (
    AmountOverflowError,
    CallFailedError,
    ERC20TransferFailedError,
    ErrorKind,
    InvalidTokenError,
    MalformedTransferResultError,
    NativeTransferFailedError,
    TargetNotAContractError,
    ValidationError,
    VaultError,
)
from .types import (
    MAX_UINT256,
    NATIVE,
    ZERO_ADDRESS,
    Currency,
    NativeCurrency,
    TokenCurrency,
    TokenMetadata,
    check_amount,
    checked_mul,
    checked_pow10,
    currency_from_address,
    normalize_address,
)

__all__ = [
    "AmountOverflowError",
    "CallFailedError",
    "ERC20TransferFailedError",
    "ErrorKind",
    "InvalidTokenError",
    "MalformedTransferResultError",
    "NativeTransferFailedError",
    "TargetNotAContractError",
    "ValidationError",
    "VaultError",
    "MAX_UINT256",
    "NATIVE",
    "ZERO_ADDRESS",
    "Currency",
    "NativeCurrency",
    "TokenCurrency",
    "TokenMetadata",
    "check_amount",
    "checked_mul",
    "checked_pow10",
    "currency_from_address",
    "normalize_address",
]
