"""
Base classes for chain access.

Pricing and settlement never talk to a node directly. They go through a
ChainBackend, which makes the executing party and the transport explicit
and lets tests substitute a mock.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from eth_utils import function_signature_to_4byte_selector

logger = logging.getLogger(__name__)

# 4-byte selectors of the calls this package issues
DECIMALS_SELECTOR = function_signature_to_4byte_selector("decimals()")
NAME_SELECTOR = function_signature_to_4byte_selector("name()")
SYMBOL_SELECTOR = function_signature_to_4byte_selector("symbol()")
TRANSFER_FROM_SELECTOR = function_signature_to_4byte_selector(
    "transferFrom(address,address,uint256)"
)


class ChainBackend(ABC):
    """
    Abstract access to an EVM chain.

    All methods raise CallFailedError when the call reverts or the
    transport fails.
    """

    @abstractmethod
    def static_call(self, target: str, data: bytes) -> bytes:
        """
        Execute a read-only call.

        Args:
            target: Contract address to call
            data: ABI-encoded call data

        Returns:
            Raw return data
        """
        pass

    @abstractmethod
    def get_code(self, address: str) -> bytes:
        """Get the runtime bytecode stored at an address."""
        pass

    @abstractmethod
    def simulate_call(
        self, sender: str, target: str, data: bytes, value: int = 0
    ) -> bytes:
        """
        Dry-run a state-changing call on behalf of sender.

        Nothing is broadcast; the caller inspects the return data and
        decides whether to commit_call.

        Args:
            sender: Executing party
            target: Contract address to call
            data: ABI-encoded call data
            value: Native value attached to the call

        Returns:
            Raw return data of the simulated call
        """
        pass

    @abstractmethod
    def commit_call(
        self, sender: str, target: str, data: bytes, value: int = 0
    ) -> Optional[bytes]:
        """
        Execute a state-changing call on behalf of sender.

        Returns:
            Transaction hash when the backend produces one
        """
        pass

    @abstractmethod
    def send_value(self, sender: str, recipient: str, amount: int) -> Optional[bytes]:
        """
        Send native value from sender to recipient.

        Returns:
            Transaction hash when the backend produces one
        """
        pass

    def has_code(self, address: str) -> bool:
        """Check whether an address holds executable code."""
        return len(self.get_code(address)) > 0
