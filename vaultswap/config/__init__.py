"""
Configuration management for vaultswap.

Use get_config() to access all configuration settings.

Example:
    from vaultswap.config import get_config

    config = get_config()

    rpc_url = config.chains.RPC_URL
    fee_bp = config.pricing.FEE_RATE_BP
"""

from .base import BaseConfig, ConfigError
from .chains import ChainConfig
from .manager import ConfigManager, get_config, reload_config
from .pricing import PricingConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ChainConfig",
    "PricingConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
]
