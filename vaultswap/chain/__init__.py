"""
Chain access for pricing and settlement.

ChainBackend is the seam between this package and a node; Web3Backend is
the production implementation.
"""

from .base import (
    DECIMALS_SELECTOR,
    NAME_SELECTOR,
    SYMBOL_SELECTOR,
    TRANSFER_FROM_SELECTOR,
    ChainBackend,
)
from .web3_backend import Web3Backend

__all__ = [
    "ChainBackend",
    "Web3Backend",
    "DECIMALS_SELECTOR",
    "NAME_SELECTOR",
    "SYMBOL_SELECTOR",
    "TRANSFER_FROM_SELECTOR",
]
