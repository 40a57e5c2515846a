"""
Error types for pricing and settlement operations.

Every error carries structured context (kind, target address, attempted
selector and the underlying reason, when known) so callers can render a
precise diagnostic or log it with ``extra=error.to_dict()``.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union


class ErrorKind(str, Enum):
    """Categories of failure raised by this package."""

    INVALID_TOKEN = "invalid_token"
    NATIVE_TRANSFER_FAILED = "native_transfer_failed"
    ERC20_TRANSFER_FAILED = "erc20_transfer_failed"
    MALFORMED_TRANSFER_RESULT = "malformed_transfer_result"
    TARGET_NOT_A_CONTRACT = "target_not_a_contract"
    AMOUNT_OVERFLOW = "amount_overflow"
    VALIDATION = "validation"
    CALL_FAILED = "call_failed"


def _format_selector(selector: Union[bytes, str, None]) -> Optional[str]:
    if selector is None:
        return None
    if isinstance(selector, (bytes, bytearray)):
        return "0x" + bytes(selector).hex()
    return selector if selector.startswith("0x") else f"0x{selector}"


class VaultError(Exception):
    """Base exception for vault pricing and settlement."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        target_address: Optional[str] = None,
        selector: Union[bytes, str, None] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.target_address = target_address
        self.selector = _format_selector(selector)
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "target_address": self.target_address,
            "selector": self.selector,
            "reason": self.reason,
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.target_address:
            parts.append(f"target={self.target_address}")
        if self.selector:
            parts.append(f"selector={self.selector}")
        if self.reason:
            parts.append(f"reason={self.reason}")
        return " | ".join(parts)


class ValidationError(VaultError):
    """Raised when input validation fails."""

    kind = ErrorKind.VALIDATION


class AmountOverflowError(VaultError):
    """Raised when an amount leaves the uint256 domain."""

    kind = ErrorKind.AMOUNT_OVERFLOW


class InvalidTokenError(VaultError):
    """Raised when token decimals are unavailable or unusable."""

    kind = ErrorKind.INVALID_TOKEN


class NativeTransferFailedError(VaultError):
    """Raised on misuse of the native path or a failed value send."""

    kind = ErrorKind.NATIVE_TRANSFER_FAILED


class ERC20TransferFailedError(VaultError):
    """Raised when transferFrom reverts or returns false."""

    kind = ErrorKind.ERC20_TRANSFER_FAILED


class MalformedTransferResultError(VaultError):
    """Raised when transferFrom returns data of an unexpected length."""

    kind = ErrorKind.MALFORMED_TRANSFER_RESULT


class TargetNotAContractError(VaultError):
    """Raised when an empty response came from an address without code."""

    kind = ErrorKind.TARGET_NOT_A_CONTRACT


class CallFailedError(VaultError):
    """Raised by chain backends when a call reverts or the RPC fails."""

    kind = ErrorKind.CALL_FAILED
