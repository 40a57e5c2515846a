"""
web3.py implementation of ChainBackend.

State-changing calls are split in two: simulate_call runs an eth_call
from the sender to capture the raw return data (transaction receipts do
not carry it), and commit_call sends the transaction and checks its
receipt. With simulate_only set, commit_call never broadcasts.
"""

import logging
from typing import Any, Dict, Optional

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from ..core.errors import CallFailedError
from .base import ChainBackend

logger = logging.getLogger(__name__)


class Web3Backend(ChainBackend):
    """ChainBackend backed by a Web3 instance."""

    def __init__(
        self,
        web3: Web3,
        simulate_only: bool = False,
        receipt_timeout: float = 120.0,
    ):
        """
        Initialize the backend.

        Args:
            web3: Web3 instance
            simulate_only: Only eth_call state-changing calls, never send them
            receipt_timeout: Seconds to wait for a transaction receipt
        """
        self.web3 = web3
        self.simulate_only = simulate_only
        self.receipt_timeout = receipt_timeout
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def from_rpc_url(cls, rpc_url: str, **kwargs) -> "Web3Backend":
        """Create a backend connected over HTTP."""
        return cls(Web3(Web3.HTTPProvider(rpc_url)), **kwargs)

    def static_call(self, target: str, data: bytes) -> bytes:
        tx = {"to": Web3.to_checksum_address(target), "data": HexBytes(data)}
        return self._eth_call(tx)

    def get_code(self, address: str) -> bytes:
        checksummed = Web3.to_checksum_address(address)
        try:
            return bytes(self.web3.eth.get_code(checksummed))
        except (Web3Exception, ValueError) as e:
            self.logger.error(f"Failed to get code for {checksummed}: {e}")
            raise CallFailedError(
                "get_code failed", target_address=checksummed, reason=str(e)
            )

    def simulate_call(
        self, sender: str, target: str, data: bytes, value: int = 0
    ) -> bytes:
        tx = _build_tx(sender, target, data, value)
        returned = self._eth_call(tx)
        self.logger.debug(f"Simulated call to {tx['to']} returned {len(returned)} bytes")
        return returned

    def commit_call(
        self, sender: str, target: str, data: bytes, value: int = 0
    ) -> Optional[bytes]:
        if self.simulate_only:
            return None
        tx = _build_tx(sender, target, data, value)
        return self._transact(tx, selector=bytes(data[:4]))

    def send_value(self, sender: str, recipient: str, amount: int) -> Optional[bytes]:
        tx = {
            "from": Web3.to_checksum_address(sender),
            "to": Web3.to_checksum_address(recipient),
            "value": amount,
        }
        if self.simulate_only:
            self._eth_call(tx)
            return None
        return self._transact(tx)

    def _eth_call(self, tx: Dict[str, Any]) -> bytes:
        """Run eth_call and translate failures into CallFailedError."""
        selector = bytes(tx["data"][:4]) if tx.get("data") else None
        try:
            return bytes(self.web3.eth.call(tx))
        except ContractLogicError as e:
            raise CallFailedError(
                "call reverted",
                target_address=tx["to"],
                selector=selector,
                reason=_revert_reason(e),
            )
        except (Web3Exception, ValueError) as e:
            self.logger.warning(f"eth_call to {tx['to']} failed: {e}")
            raise CallFailedError(
                "call failed", target_address=tx["to"], selector=selector, reason=str(e)
            )

    def _transact(self, tx: Dict[str, Any], selector: Optional[bytes] = None) -> bytes:
        """Send a transaction and wait for a successful receipt."""
        try:
            tx_hash = self.web3.eth.send_transaction(tx)
            receipt = self.web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except ContractLogicError as e:
            raise CallFailedError(
                "transaction reverted",
                target_address=tx["to"],
                selector=selector,
                reason=_revert_reason(e),
            )
        except TimeExhausted as e:
            raise CallFailedError(
                "transaction receipt timed out",
                target_address=tx["to"],
                selector=selector,
                reason=str(e),
            )
        except (Web3Exception, ValueError) as e:
            raise CallFailedError(
                "transaction failed", target_address=tx["to"], selector=selector, reason=str(e)
            )

        if receipt["status"] == 0:
            raise CallFailedError(
                "transaction reverted",
                target_address=tx["to"],
                selector=selector,
                reason=f"receipt status 0 for {HexBytes(tx_hash).hex()}",
            )

        self.logger.info(
            f"Transaction {HexBytes(tx_hash).hex()} to {tx['to']} mined in block {receipt.get('blockNumber')}"
        )
        return bytes(tx_hash)


def _build_tx(sender: str, target: str, data: bytes, value: int) -> Dict[str, Any]:
    return {
        "from": Web3.to_checksum_address(sender),
        "to": Web3.to_checksum_address(target),
        "data": HexBytes(data),
        "value": value,
    }


def _revert_reason(error: ContractLogicError) -> str:
    message = getattr(error, "message", None) or str(error)
    data = getattr(error, "data", None)
    if data and data != message:
        return f"{message} ({data})"
    return message
