"""Tests for safe value transfer."""

import pytest
from eth_abi import decode, encode
from eth_utils import to_checksum_address

from vaultswap.chain.base import TRANSFER_FROM_SELECTOR
from vaultswap.core.errors import (
    CallFailedError,
    ERC20TransferFailedError,
    MalformedTransferResultError,
    NativeTransferFailedError,
    TargetNotAContractError,
    ValidationError,
)
from vaultswap.core.types import NATIVE, TokenCurrency
from vaultswap.settlement.safe_transfer import (
    SafeTransfer,
    classify_transfer_result,
    encode_transfer_from,
)

VAULT = to_checksum_address("0x" + "11" * 20)
ALICE = to_checksum_address("0x" + "a1" * 20)
BOB = to_checksum_address("0x" + "b0" * 20)
TOKEN = TokenCurrency(to_checksum_address("0x" + "7e" * 20))


@pytest.fixture
def transferer(backend):
    return SafeTransfer(backend, VAULT)


class TestNativeTransfer:
    """Test cases for the native-asset path."""

    def test_inbound_with_matching_value_succeeds(self, backend, transferer):
        result = transferer.transfer_value(NATIVE, ALICE, VAULT, 10**18, attached_native_value=10**18)

        assert result.amount == 10**18
        assert result.recipient == VAULT
        assert backend.sent == []

    @pytest.mark.parametrize("attached", [0, 10**18 - 1, 10**18 + 1])
    def test_inbound_with_mismatched_value_fails(self, transferer, attached):
        with pytest.raises(NativeTransferFailedError):
            transferer.transfer_value(NATIVE, ALICE, VAULT, 10**18, attached_native_value=attached)

    def test_outbound_sends_value(self, backend, transferer):
        result = transferer.transfer_value(NATIVE, VAULT, BOB, 5 * 10**17)

        assert backend.sent == [(VAULT, BOB, 5 * 10**17)]
        assert result.tx_hash == b"\xab" * 32

    def test_outbound_send_failure_keeps_reason(self, backend, transferer):
        backend.send_error = CallFailedError("transaction reverted", target_address=BOB, reason="out of gas")

        with pytest.raises(NativeTransferFailedError) as exc_info:
            transferer.transfer_value(NATIVE, VAULT, BOB, 1)

        assert "out of gas" in exc_info.value.reason
        assert exc_info.value.target_address == BOB

    def test_relay_between_third_parties_fails(self, backend, transferer):
        with pytest.raises(NativeTransferFailedError):
            transferer.transfer_value(NATIVE, ALICE, BOB, 1, attached_native_value=1)
        assert backend.sent == []

    def test_addresses_compared_case_insensitively(self, backend, transferer):
        transferer.transfer_value(NATIVE, VAULT.lower(), BOB.lower(), 7)
        assert backend.sent == [(VAULT, BOB, 7)]


class TestTokenTransfer:
    """Test cases for the token path."""

    def test_bool_true_succeeds(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, encode(["bool"], [True]))

        result = transferer.transfer_value(TOKEN, ALICE, BOB, 1000)

        assert result.currency == TOKEN
        assert result.returned_data == encode(["bool"], [True])
        _, sender, target, data = backend.calls[0]
        assert sender == VAULT
        assert target == TOKEN.address
        assert data[:4] == TRANSFER_FROM_SELECTOR
        decoded_from, decoded_to, decoded_amount = decode(["address", "address", "uint256"], data[4:])
        assert decoded_from.lower() == ALICE.lower()
        assert decoded_to.lower() == BOB.lower()
        assert decoded_amount == 1000
        assert backend.committed == [(VAULT, TOKEN.address, data)]
        assert result.tx_hash == b"\xcd" * 32

    @pytest.mark.parametrize(
        "response",
        [b"\x00" * 32, b"\x01" * 64, b"\x01" * 31],
        ids=["false", "too-long", "too-short"],
    )
    def test_rejected_response_is_never_committed(self, backend, transferer, response):
        backend.set_contract_response(TOKEN.address, response)

        with pytest.raises((ERC20TransferFailedError, MalformedTransferResultError)):
            transferer.transfer_value(TOKEN, VAULT, BOB, 1)

        assert backend.committed == []

    def test_codeless_target_is_never_committed(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, b"", code=b"")

        with pytest.raises(TargetNotAContractError):
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

        assert backend.committed == []

    def test_commit_failure_is_wrapped(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, encode(["bool"], [True]))
        backend.commit_error = CallFailedError("transaction reverted", target_address=TOKEN.address, reason="receipt status 0")

        with pytest.raises(ERC20TransferFailedError) as exc_info:
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

        assert exc_info.value.selector == "0x23b872dd"
        assert exc_info.value.reason == "receipt status 0"

    def test_code_lookup_failure_is_wrapped(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, b"")
        backend.code_error = CallFailedError("get_code failed", target_address=TOKEN.address, reason="connection refused")

        with pytest.raises(ERC20TransferFailedError) as exc_info:
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

        error = exc_info.value
        assert error.target_address == TOKEN.address
        assert error.selector == "0x23b872dd"
        assert error.reason == "connection refused"
        assert isinstance(error.__cause__, CallFailedError)
        assert backend.committed == []

    def test_non_canonical_true_succeeds(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, b"\x00" * 31 + b"\x02")
        transferer.transfer_value(TOKEN, ALICE, BOB, 1)

    def test_empty_response_from_contract_succeeds(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, b"")
        result = transferer.transfer_value(TOKEN, ALICE, BOB, 1)
        assert result.returned_data == b""

    def test_empty_response_without_code_fails(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, b"", code=b"")

        with pytest.raises(TargetNotAContractError) as exc_info:
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

        assert exc_info.value.target_address == TOKEN.address

    def test_false_fails(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, encode(["bool"], [False]))

        with pytest.raises(ERC20TransferFailedError) as exc_info:
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

        assert exc_info.value.selector == "0x23b872dd"

    def test_short_response_is_malformed(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, b"\x01" * 31)

        with pytest.raises(MalformedTransferResultError):
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

    def test_long_response_is_malformed(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, encode(["bool", "uint256"], [True, 1]))

        with pytest.raises(MalformedTransferResultError):
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

    def test_revert_is_wrapped_with_context(self, backend, transferer):
        backend.set_contract_response(
            TOKEN.address,
            CallFailedError("call reverted", target_address=TOKEN.address, reason="insufficient allowance"),
        )

        with pytest.raises(ERC20TransferFailedError) as exc_info:
            transferer.transfer_value(TOKEN, ALICE, BOB, 1)

        error = exc_info.value
        assert error.target_address == TOKEN.address
        assert error.selector == "0x23b872dd"
        assert error.reason == "insufficient allowance"
        assert isinstance(error.__cause__, CallFailedError)

    def test_attached_native_value_rejected(self, backend, transferer):
        backend.set_contract_response(TOKEN.address, encode(["bool"], [True]))

        with pytest.raises(NativeTransferFailedError):
            transferer.transfer_value(TOKEN, ALICE, BOB, 1, attached_native_value=1)
        assert backend.calls == []

    def test_negative_amount_rejected(self, transferer):
        with pytest.raises(ValidationError):
            transferer.transfer_value(TOKEN, ALICE, BOB, -5)


class TestClassifyTransferResult:
    """Test cases for the length-dispatched classifier."""

    @pytest.mark.parametrize("length", [1, 31, 33, 63, 64, 96])
    def test_unexpected_lengths(self, backend, length):
        with pytest.raises(MalformedTransferResultError) as exc_info:
            classify_transfer_result(backend, TOKEN.address, b"\x01" * length)
        assert str(length) in exc_info.value.reason

    def test_high_bit_word_is_true(self, backend):
        classify_transfer_result(backend, TOKEN.address, b"\x80" + b"\x00" * 31)

    def test_zero_word_is_false(self, backend):
        with pytest.raises(ERC20TransferFailedError):
            classify_transfer_result(backend, TOKEN.address, b"\x00" * 32)


def test_encode_transfer_from():
    data = encode_transfer_from(ALICE, BOB, 2**255)
    assert data[:4] == bytes.fromhex("23b872dd")
    assert len(data) == 4 + 3 * 32
