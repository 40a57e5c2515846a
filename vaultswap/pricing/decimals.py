"""
Rescaling of amounts between token decimal bases.
"""

from typing import Optional

from ..core.errors import InvalidTokenError
from ..core.types import check_amount, checked_mul, checked_pow10


def adjust(
    source_is_a: bool,
    decimals_a: Optional[int],
    decimals_b: Optional[int],
    amount_in: int,
) -> int:
    """
    Convert an amount from one token's decimal basis to the other's.

    Args:
        source_is_a: True if amount_in is expressed in token A's decimals
        decimals_a: Decimals of token A, None if unresolved
        decimals_b: Decimals of token B, None if unresolved
        amount_in: Amount to rescale

    Returns:
        The amount in the other token's decimal basis, floored

    Raises:
        InvalidTokenError: If a non-zero amount needs rescaling and either
            decimals count is unresolved or zero
        ValidationError: If amount_in is not a uint256
        AmountOverflowError: If the scaling factor or the scaled amount
            leaves the uint256 domain

    Examples:
        >>> adjust(True, 18, 6, 5 * 10**18)
        5000000
        >>> adjust(False, 18, 6, 5 * 10**6)
        5000000000000000000
    """
    check_amount(amount_in, "amount_in")
    if amount_in == 0:
        return 0

    if decimals_a == decimals_b:
        return amount_in

    # Zero decimals are rejected along with unresolved ones (known quirk)
    if not decimals_a or not decimals_b:
        raise InvalidTokenError(
            f"Cannot rescale between decimals {decimals_a} and {decimals_b}"
        )

    if decimals_a > decimals_b:
        factor = checked_pow10(decimals_a - decimals_b)
        if source_is_a:
            return amount_in // factor
        return checked_mul(amount_in, factor)

    factor = checked_pow10(decimals_b - decimals_a)
    if source_is_a:
        return checked_mul(amount_in, factor)
    return amount_in // factor
