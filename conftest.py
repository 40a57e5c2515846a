"""Shared test fixtures for vaultswap."""

from typing import Dict, List, Optional, Tuple, Union

import pytest
from eth_abi import encode
from eth_utils import to_checksum_address

from vaultswap.chain.base import ChainBackend, DECIMALS_SELECTOR
from vaultswap.core.errors import CallFailedError

TOKEN_18 = to_checksum_address("0x" + "18" * 20)
TOKEN_6 = to_checksum_address("0x" + "06" * 20)

Response = Union[bytes, CallFailedError]


class StubBackend(ChainBackend):
    """In-memory ChainBackend with scripted responses."""

    def __init__(self):
        self.static_responses: Dict[Tuple[str, bytes], Response] = {}
        self.contract_responses: Dict[str, Response] = {}
        self.code: Dict[str, bytes] = {}
        self.send_error: Optional[CallFailedError] = None
        self.commit_error: Optional[CallFailedError] = None
        self.code_error: Optional[CallFailedError] = None
        self.calls: List[Tuple[str, ...]] = []
        self.sent: List[Tuple[str, str, int]] = []
        self.committed: List[Tuple[str, str, bytes]] = []

    def set_static(self, target: str, selector: bytes, response: Response):
        self.static_responses[(to_checksum_address(target), selector)] = response

    def set_decimals(self, target: str, decimals: int):
        self.set_static(target, DECIMALS_SELECTOR, encode(["uint8"], [decimals]))

    def set_contract_response(self, target: str, response: Response, code: bytes = b"\x60\x80"):
        self.contract_responses[to_checksum_address(target)] = response
        self.code[to_checksum_address(target)] = code

    def static_call(self, target: str, data: bytes) -> bytes:
        self.calls.append(("static_call", to_checksum_address(target), bytes(data[:4])))
        response = self.static_responses.get((to_checksum_address(target), bytes(data[:4])))
        if response is None:
            raise CallFailedError("call reverted", target_address=target, selector=data[:4])
        if isinstance(response, CallFailedError):
            raise response
        return response

    def get_code(self, address: str) -> bytes:
        if self.code_error is not None:
            raise self.code_error
        return self.code.get(to_checksum_address(address), b"")

    def simulate_call(self, sender: str, target: str, data: bytes, value: int = 0) -> bytes:
        self.calls.append(("simulate_call", sender, to_checksum_address(target), bytes(data)))
        response = self.contract_responses.get(to_checksum_address(target), b"")
        if isinstance(response, CallFailedError):
            raise response
        return response

    def commit_call(self, sender: str, target: str, data: bytes, value: int = 0) -> Optional[bytes]:
        if self.commit_error is not None:
            raise self.commit_error
        self.committed.append((sender, to_checksum_address(target), bytes(data)))
        return b"\xcd" * 32

    def send_value(self, sender: str, recipient: str, amount: int) -> Optional[bytes]:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((sender, recipient, amount))
        return b"\xab" * 32


@pytest.fixture
def backend():
    """Provide an empty stub backend."""
    return StubBackend()


@pytest.fixture
def token_backend(backend):
    """Stub backend knowing an 18-decimal and a 6-decimal token."""
    backend.set_decimals(TOKEN_18, 18)
    backend.set_decimals(TOKEN_6, 6)
    return backend
