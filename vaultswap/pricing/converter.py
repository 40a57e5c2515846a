"""
Fee-adjusted price conversion for vault swaps.

Prices are pre-scaled to the decimals of the reference token (token_b).
The fee is taken from the input before rescaling on a buy and from the
output after rescaling on a sell; the two paths round differently and are
kept separate on purpose.
"""

import logging
from typing import Optional, Tuple

from ..config.pricing import PricingConfig
from ..core.errors import InvalidTokenError
from ..core.types import Currency, check_amount, checked_mul, checked_pow10
from ..tokens.metadata import TokenMetadataProbe
from .decimals import adjust

logger = logging.getLogger(__name__)


class PriceConverter:
    """Computes how much of one token a swap pays out."""

    def __init__(self, probe: TokenMetadataProbe, config: Optional[PricingConfig] = None):
        """
        Initialize the converter.

        Args:
            probe: Metadata probe used to resolve decimals
            config: Fee settings (defaults to PricingConfig())
        """
        self.probe = probe
        self.config = config or PricingConfig()

    def get_amount_out(
        self,
        is_buy: bool,
        token_a: Currency,
        token_b: Currency,
        amount_in: int,
        price: int,
    ) -> int:
        """
        Quote the output of a swap.

        Args:
            is_buy: True to spend token_a for token_b, False for the reverse
            token_a: Traded currency
            token_b: Reference currency the price is scaled to
            amount_in: Amount spent, in the spent token's base units
            price: Exchange ratio scaled to token_b's decimals

        Returns:
            Amount received, in the received token's base units

        Raises:
            InvalidTokenError: If decimals of either currency are unavailable
        """
        check_amount(amount_in, "amount_in")
        check_amount(price, "price")
        decimals_a, decimals_b = self._resolve_pair(token_a, token_b)

        if is_buy:
            amount_out = self._buy(decimals_a, decimals_b, amount_in, price)
        else:
            amount_out = self._sell(decimals_a, decimals_b, amount_in, price)

        logger.debug(
            f"{'buy' if is_buy else 'sell'} {amount_in} @ {price} "
            f"({token_a}/{token_b}, decimals {decimals_a}/{decimals_b}) -> {amount_out}"
        )
        return amount_out

    def _resolve_pair(self, token_a: Currency, token_b: Currency) -> Tuple[int, int]:
        decimals_a = self.probe.resolve_decimals(token_a)
        if decimals_a is None:
            raise InvalidTokenError(
                "Token decimals unavailable", target_address=str(token_a), reason="decimals() probe failed"
            )
        decimals_b = self.probe.resolve_decimals(token_b)
        if decimals_b is None:
            raise InvalidTokenError(
                "Token decimals unavailable", target_address=str(token_b), reason="decimals() probe failed"
            )
        return decimals_a, decimals_b

    def _buy(self, decimals_a: int, decimals_b: int, amount_in: int, price: int) -> int:
        denominator = self.config.FEE_DENOMINATOR
        net_in = (amount_in // denominator) * self.config.fee_multiplier
        normalized_in = net_in // checked_pow10(decimals_b)
        scaled = checked_mul(normalized_in, price)
        return adjust(True, decimals_a, decimals_b, scaled)

    def _sell(self, decimals_a: int, decimals_b: int, amount_in: int, price: int) -> int:
        scaled = checked_mul(amount_in, price) // checked_pow10(decimals_b)
        gross_out = adjust(False, decimals_a, decimals_b, scaled)
        return checked_mul(gross_out, self.config.fee_multiplier) // self.config.FEE_DENOMINATOR


def get_amount_out(
    probe: TokenMetadataProbe,
    is_buy: bool,
    token_a: Currency,
    token_b: Currency,
    amount_in: int,
    price: int,
    config: Optional[PricingConfig] = None,
) -> int:
    """
    Convenience function to quote a swap without keeping a converter around.

    Args:
        probe: Metadata probe used to resolve decimals
        is_buy: True to spend token_a for token_b
        token_a: Traded currency
        token_b: Reference currency
        amount_in: Amount spent
        price: Price scaled to token_b's decimals
        config: Fee settings

    Returns:
        Amount received
    """
    return PriceConverter(probe, config).get_amount_out(
        is_buy, token_a, token_b, amount_in, price
    )
