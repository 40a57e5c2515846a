"""
Core types for pricing and settlement.

Currencies are a tagged variant: the chain's native asset or an external
token contract. Amounts are plain ints kept inside the uint256 domain.
"""

from dataclasses import dataclass
from typing import Optional, Union

from eth_utils import is_address, to_checksum_address

from .errors import AmountOverflowError, ValidationError

MAX_UINT256 = 2**256 - 1
MAX_UINT8 = 2**8 - 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class NativeCurrency:
    """The chain's base asset."""

    @property
    def is_native(self) -> bool:
        return True

    def __str__(self) -> str:
        return "native"


@dataclass(frozen=True)
class TokenCurrency:
    """
    An external token contract.

    Attributes:
        address: Token contract address, stored in checksum form
    """

    address: str

    def __post_init__(self):
        object.__setattr__(self, "address", normalize_address(self.address, "token"))

    @property
    def is_native(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.address


Currency = Union[NativeCurrency, TokenCurrency]

NATIVE = NativeCurrency()


@dataclass(frozen=True)
class TokenMetadata:
    """
    Metadata probed from a token contract.

    Attributes:
        address: Token contract address
        decimals: Decimal count, None when the probe failed
        name: Token name, None when the probe failed
        symbol: Token symbol, None when the probe failed
    """

    address: str
    decimals: Optional[int] = None
    name: Optional[str] = None
    symbol: Optional[str] = None

    @property
    def has_decimals(self) -> bool:
        return self.decimals is not None


def normalize_address(address: str, name: str = "address") -> str:
    """Return the checksum form of an address or raise ValidationError."""
    if not isinstance(address, str) or not is_address(address):
        raise ValidationError(f"Invalid {name}: {address!r}")
    return to_checksum_address(address)


def currency_from_address(address: str) -> Currency:
    """Map an address to a currency; the zero address denotes the native asset."""
    checksummed = normalize_address(address, "currency")
    if checksummed == ZERO_ADDRESS:
        return NATIVE
    return TokenCurrency(checksummed)


def check_amount(value: int, name: str = "amount") -> int:
    """
    Validate that a value is a uint256.

    Raises:
        ValidationError: If value is not a non-negative int
        AmountOverflowError: If value exceeds MAX_UINT256
    """
    # bool is an int subclass but never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    if value > MAX_UINT256:
        raise AmountOverflowError(f"{name} exceeds uint256: {value}")
    return value


def checked_mul(a: int, b: int) -> int:
    """Multiply two amounts, failing instead of wrapping on uint256 overflow."""
    product = a * b
    if product > MAX_UINT256:
        raise AmountOverflowError(f"Multiplication overflow: {a} * {b}")
    return product


def checked_pow10(exponent: int) -> int:
    """Scaling factor 10**exponent, failing if it does not fit in uint256."""
    factor = 10**exponent
    if factor > MAX_UINT256:
        raise AmountOverflowError(f"Scaling factor overflow: 10**{exponent}")
    return factor
