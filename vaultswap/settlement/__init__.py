"""
Settlement: moving value once a swap amount is known.
"""

from .safe_transfer import (
    SafeTransfer,
    TransferResult,
    classify_transfer_result,
    encode_transfer_from,
)

__all__ = [
    "SafeTransfer",
    "TransferResult",
    "classify_transfer_result",
    "encode_transfer_from",
]
