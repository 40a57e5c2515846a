"""
Pricing configuration for vaultswap.
"""

from dataclasses import dataclass

from .base import BaseConfig, ConfigError


@dataclass
class PricingConfig(BaseConfig):
    """Swap fee settings, expressed in basis points."""

    FEE_RATE_BP: int = BaseConfig.get_env_int("VAULT_FEE_RATE_BP", 10)  # 0.1%
    FEE_DENOMINATOR: int = 10000

    def _validate_config(self):
        super()._validate_config()
        if self.FEE_DENOMINATOR <= 0:
            raise ConfigError(f"Fee denominator must be positive, got: {self.FEE_DENOMINATOR}")
        if not 0 <= self.FEE_RATE_BP <= self.FEE_DENOMINATOR:
            raise ConfigError(
                f"Fee rate must be within [0, {self.FEE_DENOMINATOR}] bp, got: {self.FEE_RATE_BP}"
            )

    @property
    def fee_multiplier(self) -> int:
        """Share of an amount kept after the fee, in basis points."""
        return self.FEE_DENOMINATOR - self.FEE_RATE_BP
