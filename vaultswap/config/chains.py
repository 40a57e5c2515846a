"""
Chain-specific configuration for vaultswap.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .base import BaseConfig


@dataclass
class ChainConfig(BaseConfig):
    """Chain connection settings and the identity of the executing vault."""

    RPC_URL: str = BaseConfig.get_env("RPC_URL", "http://127.0.0.1:8545")
    CHAIN_ID: int = BaseConfig.get_env_int("CHAIN_ID", 1)

    # Address that plays the role of "self" for settlement
    VAULT_ADDRESS: Optional[str] = BaseConfig.get_env("VAULT_ADDRESS") or None

    # Decimals of the chain's base asset (ETH on all supported chains)
    NATIVE_DECIMALS: int = BaseConfig.get_env_int("NATIVE_DECIMALS", 18)

    RECEIPT_TIMEOUT_SECONDS: int = BaseConfig.get_env_int("RECEIPT_TIMEOUT_SECONDS", 120)

    @property
    def connection(self) -> Dict[str, object]:
        """Connection parameters for building a backend."""
        return {
            "rpc_url": self.RPC_URL,
            "chain_id": self.CHAIN_ID,
            "receipt_timeout": self.RECEIPT_TIMEOUT_SECONDS,
        }

    def require_vault_address(self) -> str:
        """Get the vault address, failing when it is not configured."""
        return BaseConfig.get_env("VAULT_ADDRESS", self.VAULT_ADDRESS, required=True)
