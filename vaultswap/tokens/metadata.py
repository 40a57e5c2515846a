"""
Tolerant token metadata probing.

Token contracts are untrusted: decimals(), name() and symbol() may be
missing, may revert, or may return non-conforming data. Every probe here
reports such cases as "not found" instead of raising, and callers must
check the flag.
"""

import logging
from typing import Optional, Tuple

from eth_abi import decode
from eth_abi.exceptions import DecodingError

from ..chain.base import (
    DECIMALS_SELECTOR,
    NAME_SELECTOR,
    SYMBOL_SELECTOR,
    ChainBackend,
)
from ..core.errors import CallFailedError
from ..core.types import (
    MAX_UINT8,
    Currency,
    TokenMetadata,
    normalize_address,
)

logger = logging.getLogger(__name__)

WORD_SIZE = 32

DEFAULT_NATIVE_DECIMALS = 18


class TokenMetadataProbe:
    """
    Best-effort reader for ERC-20 metadata.

    Each try_get_* method returns a (found, value) pair. When found is
    False the value is a zero/empty default and must not be used.
    """

    def __init__(self, backend: ChainBackend, native_decimals: int = DEFAULT_NATIVE_DECIMALS):
        """
        Initialize the probe.

        Args:
            backend: Chain backend used for read-only calls
            native_decimals: Decimals reported for the native currency
        """
        self.backend = backend
        self.native_decimals = native_decimals

    def try_get_decimals(self, token: str) -> Tuple[bool, int]:
        """
        Probe decimals() on a token.

        Returns:
            (True, decimals) when the token answered with exactly one word
            holding a uint8, (False, 0) otherwise
        """
        raw = self._probe(token, DECIMALS_SELECTOR)
        if raw is None or len(raw) != WORD_SIZE:
            return False, 0

        value = int.from_bytes(raw, "big")
        if value > MAX_UINT8:
            logger.debug(f"decimals() of {token} does not fit in uint8: {value}")
            return False, 0
        return True, value

    def try_get_name(self, token: str) -> Tuple[bool, str]:
        """Probe name() on a token."""
        return self._probe_text(token, NAME_SELECTOR)

    def try_get_symbol(self, token: str) -> Tuple[bool, str]:
        """Probe symbol() on a token."""
        return self._probe_text(token, SYMBOL_SELECTOR)

    def get_metadata(self, token: str) -> TokenMetadata:
        """Run all three probes and collect the results."""
        address = normalize_address(token, "token")
        has_decimals, decimals = self.try_get_decimals(address)
        has_name, name = self.try_get_name(address)
        has_symbol, symbol = self.try_get_symbol(address)
        return TokenMetadata(
            address=address,
            decimals=decimals if has_decimals else None,
            name=name if has_name else None,
            symbol=symbol if has_symbol else None,
        )

    def resolve_decimals(self, currency: Currency) -> Optional[int]:
        """
        Decimals of a currency, or None when they cannot be resolved.

        The native currency never touches the chain.
        """
        if currency.is_native:
            return self.native_decimals
        found, decimals = self.try_get_decimals(currency.address)
        return decimals if found else None

    def _probe(self, token: str, selector: bytes) -> Optional[bytes]:
        """Issue a read-only call, mapping any failure to None."""
        try:
            return bytes(self.backend.static_call(token, selector))
        except CallFailedError as e:
            logger.debug(f"Probe 0x{selector.hex()} on {token} failed: {e}")
            return None

    def _probe_text(self, token: str, selector: bytes) -> Tuple[bool, str]:
        raw = self._probe(token, selector)
        if not raw:
            return False, ""

        text = _decode_text(raw)
        if not text:
            logger.debug(f"Empty or undecodable 0x{selector.hex()} response from {token} ({len(raw)} bytes)")
            return False, ""
        return True, text


def _decode_text(raw: bytes) -> Optional[str]:
    """
    Decode a name()/symbol() response.

    A single word is a legacy bytes32 string; anything longer must be a
    well-formed ABI string.
    """
    try:
        if len(raw) == WORD_SIZE:
            return raw.rstrip(b"\x00").decode("utf-8")
        if len(raw) < 2 * WORD_SIZE:
            return None
        (text,) = decode(["string"], raw)
        return text
    except (DecodingError, UnicodeDecodeError):
        return None
    except (OverflowError, ValueError):
        # Hostile offsets/lengths in the ABI head
        return None
