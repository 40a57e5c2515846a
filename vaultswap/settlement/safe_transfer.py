"""
Safe value transfer for vault settlement.

Moves either the native asset or a token between two parties. Tokens do
not agree on what transferFrom returns: some return a bool, some return
nothing, some return non-canonical bool encodings. The raw return data is
classified by length so that all of those are accepted while garbage is
rejected.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from eth_abi import encode

from ..chain.base import TRANSFER_FROM_SELECTOR, ChainBackend
from ..core.errors import (
    CallFailedError,
    ERC20TransferFailedError,
    MalformedTransferResultError,
    NativeTransferFailedError,
    TargetNotAContractError,
)
from ..core.types import Currency, check_amount, normalize_address

logger = logging.getLogger(__name__)

WORD_SIZE = 32


@dataclass
class TransferResult:
    """Outcome of a successful transfer."""

    currency: Currency
    sender: str
    recipient: str
    amount: int
    returned_data: Optional[bytes] = None
    tx_hash: Optional[bytes] = None


def encode_transfer_from(sender: str, recipient: str, amount: int) -> bytes:
    """Build call data for transferFrom(address,address,uint256)."""
    return TRANSFER_FROM_SELECTOR + encode(
        ["address", "address", "uint256"], [sender, recipient, amount]
    )


def classify_transfer_result(
    backend: ChainBackend, token: str, returned: bytes
) -> None:
    """
    Decide whether a transferFrom response means success.

    Args:
        backend: Backend used to look up code for empty responses
        token: Token contract that was called
        returned: Raw return data of the call

    Raises:
        TargetNotAContractError: Empty response from an address without code
        ERC20TransferFailedError: The token returned false, or its code
            could not be looked up
        MalformedTransferResultError: Response of any other length
    """
    if len(returned) == 0:
        # Legacy tokens return nothing; only trust that from real contracts
        try:
            has_code = backend.has_code(token)
        except CallFailedError as e:
            raise ERC20TransferFailedError(
                "Code lookup for transfer target failed",
                target_address=token,
                selector=TRANSFER_FROM_SELECTOR,
                reason=e.reason or e.message,
            ) from e
        if not has_code:
            raise TargetNotAContractError(
                "Transfer target is not a contract",
                target_address=token,
                selector=TRANSFER_FROM_SELECTOR,
            )
        return

    if len(returned) == WORD_SIZE:
        # Any non-zero word counts as true
        if int.from_bytes(returned, "big") == 0:
            raise ERC20TransferFailedError(
                "Token transfer returned false",
                target_address=token,
                selector=TRANSFER_FROM_SELECTOR,
            )
        return

    raise MalformedTransferResultError(
        "Malformed transfer result",
        target_address=token,
        selector=TRANSFER_FROM_SELECTOR,
        reason=f"expected 0 or {WORD_SIZE} bytes, got {len(returned)}",
    )


class SafeTransfer:
    """
    Transfers value on behalf of the vault.

    The vault's own address is passed in explicitly and decides which
    native-asset transfers are allowed.
    """

    def __init__(self, backend: ChainBackend, self_address: str):
        """
        Initialize the transferer.

        Args:
            backend: Chain backend that executes calls
            self_address: Address of the executing vault
        """
        self.backend = backend
        self.self_address = normalize_address(self_address, "self_address")
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def transfer_value(
        self,
        currency: Currency,
        sender: str,
        recipient: str,
        amount: int,
        attached_native_value: int = 0,
    ) -> TransferResult:
        """
        Move value from sender to recipient.

        Args:
            currency: Native asset or token to move
            sender: Party the value comes from
            recipient: Party the value goes to
            amount: Amount in base units
            attached_native_value: Native value that accompanied the request

        Returns:
            TransferResult describing the completed transfer

        Raises:
            NativeTransferFailedError: Native path misuse or failed send
            ERC20TransferFailedError: transferFrom reverted or returned false
            MalformedTransferResultError: Unexpected transferFrom response
            TargetNotAContractError: Empty response from a codeless address
        """
        check_amount(amount, "amount")
        check_amount(attached_native_value, "attached_native_value")
        sender = normalize_address(sender, "sender")
        recipient = normalize_address(recipient, "recipient")

        if currency.is_native:
            return self._transfer_native(currency, sender, recipient, amount, attached_native_value)
        return self._transfer_token(currency, sender, recipient, amount, attached_native_value)

    def _transfer_native(
        self,
        currency: Currency,
        sender: str,
        recipient: str,
        amount: int,
        attached_native_value: int,
    ) -> TransferResult:
        if recipient == self.self_address:
            # Inbound value arrives with the request itself
            if attached_native_value != amount:
                self.logger.warning(
                    f"Attached value {attached_native_value} does not match amount {amount}"
                )
                raise NativeTransferFailedError(
                    "Attached native value does not match amount",
                    target_address=recipient,
                    reason=f"attached {attached_native_value}, expected {amount}",
                )
            return TransferResult(currency, sender, recipient, amount)

        if sender == self.self_address:
            try:
                tx_hash = self.backend.send_value(sender, recipient, amount)
            except CallFailedError as e:
                self.logger.warning(f"Native send of {amount} to {recipient} failed: {e}")
                raise NativeTransferFailedError(
                    "Native value send failed", target_address=recipient, reason=str(e)
                ) from e
            self.logger.info(f"Sent {amount} native to {recipient}")
            return TransferResult(currency, sender, recipient, amount, tx_hash=tx_hash)

        raise NativeTransferFailedError(
            "Native transfer must start or end at the vault",
            target_address=recipient,
            reason=f"sender {sender}, vault {self.self_address}",
        )

    def _transfer_token(
        self,
        currency: Currency,
        sender: str,
        recipient: str,
        amount: int,
        attached_native_value: int,
    ) -> TransferResult:
        token = currency.address
        if attached_native_value != 0:
            raise NativeTransferFailedError(
                "Native value attached to a token transfer",
                target_address=token,
                reason=f"attached {attached_native_value}",
            )

        data = encode_transfer_from(sender, recipient, amount)
        try:
            returned = bytes(self.backend.simulate_call(self.self_address, token, data))
        except CallFailedError as e:
            raise self._wrap_call_failure(token, e) from e

        # Nothing is broadcast unless the simulated response passes
        classify_transfer_result(self.backend, token, returned)

        try:
            tx_hash = self.backend.commit_call(self.self_address, token, data)
        except CallFailedError as e:
            raise self._wrap_call_failure(token, e) from e

        self.logger.info(f"Transferred {amount} of {token} from {sender} to {recipient}")
        return TransferResult(
            currency, sender, recipient, amount, returned_data=returned, tx_hash=tx_hash
        )

    def _wrap_call_failure(self, token: str, error: CallFailedError) -> ERC20TransferFailedError:
        self.logger.warning(f"transferFrom on {token} failed: {error}")
        return ERC20TransferFailedError(
            "Token transfer call failed",
            target_address=token,
            selector=TRANSFER_FROM_SELECTOR,
            reason=error.reason or error.message,
        )
