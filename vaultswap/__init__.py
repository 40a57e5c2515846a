"""
vaultswap: pricing and settlement safety for a two-token swap vault.

Quotes fee-adjusted swap outputs across tokens of different decimals and
moves value with transfers that tolerate non-standard token return data.
"""

from .core import NATIVE, NativeCurrency, TokenCurrency, VaultError
from .pricing import PriceConverter, adjust
from .settlement import SafeTransfer, TransferResult
from .tokens import TokenMetadataProbe

__all__ = [
    "NATIVE",
    "NativeCurrency",
    "TokenCurrency",
    "VaultError",
    "PriceConverter",
    "adjust",
    "SafeTransfer",
    "TransferResult",
    "TokenMetadataProbe",
]
