"""
Swap pricing: decimal rescaling and fee-adjusted conversion.
"""

from .converter import PriceConverter, get_amount_out
from .decimals import adjust

__all__ = ["PriceConverter", "get_amount_out", "adjust"]
